"""Data structures exchanged between the reconstruction algorithms.

- `HitList`: set of hits recorded in one wire-plane view
- `Cluster`: group of hits of one view produced by a clustering algorithm
- `Slice`: per-view hit subsets assigned to one candidate interaction
"""

from .cluster import Cluster
from .hit import HitList
from .slice import Slice
