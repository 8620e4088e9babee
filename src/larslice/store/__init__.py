"""Named collection store shared by the reconstruction algorithms.

The store holds typed collections (hits, clusters, vertices, particles)
addressed by :class:`ListKey` objects, and keeps track of which collection
of each type is current. Algorithms communicate exclusively through it.
"""

from .keys import ListKey, SliceCounter
from .store import CollectionStore
