"""Two-dimensional clustering algorithms."""

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import connected_components
from scipy.spatial import cKDTree

from larslice.data import Cluster
from larslice.utils.enums import CollectionKind, StatusCode
from larslice.utils.logger import logger

from .base import AlgorithmBase, ClusteringBase

__all__ = ["ProximityClustering", "ClusterSizeFilter"]


class ProximityClustering(ClusteringBase):
    """Groups the hits of one view into connected components.

    Two hits are connected if their distance in the (drift, wire) plane is
    below a configurable threshold. Components with too few hits are dropped.
    """

    name = "proximity"
    aliases = ("ProximityClusteringAlgorithm",)

    def __init__(self, max_distance=1.0, min_size=1, wire_pitch=1.0):
        """Initialize the clustering parameters.

        Parameters
        ----------
        max_distance : float, default 1.0
            Maximum distance between two hits to connect them
        min_size : int, default 1
            Minimum number of hits in a cluster
        wire_pitch : float, default 1.0
            Scale factor applied to the wire coordinate
        """
        assert max_distance > 0, "The clustering distance must be positive."
        assert min_size > 0, "The minimum cluster size must be positive."
        self.max_distance = max_distance
        self.min_size = min_size
        self.wire_pitch = wire_pitch

    def cluster(self, hits):
        """Groups hits into connected components.

        Parameters
        ----------
        hits : HitList
            Hits of one view

        Returns
        -------
        List[Cluster]
            Clusters, ordered by their lowest hit position in the list
        """
        if not len(hits):
            return []

        # Build the adjacency graph of the hits
        points = hits.points * np.array([1.0, self.wire_pitch], dtype=np.float32)
        pairs = cKDTree(points).query_pairs(self.max_distance, output_type="ndarray")
        pairs = pairs.reshape(-1, 2)
        num_hits = len(hits)
        graph = coo_matrix(
            (np.ones(len(pairs)), (pairs[:, 0], pairs[:, 1])),
            shape=(num_hits, num_hits),
        )

        # Each connected component with enough hits makes a cluster
        _, labels = connected_components(graph, directed=False)
        clusters = []
        for label in np.unique(labels):
            mask = np.where(labels == label)[0]
            if len(mask) < self.min_size:
                continue
            clusters.append(
                Cluster(view=hits.view, index=hits.index[mask], points=hits.points[mask])
            )

        return clusters


class ClusterSizeFilter(AlgorithmBase):
    """Removes small clusters from the current cluster collection."""

    name = "cluster_size_filter"

    def __init__(self, min_size=2):
        """Initialize the filter.

        Parameters
        ----------
        min_size : int, default 2
            Minimum number of hits of the clusters to keep
        """
        self.min_size = min_size

    def run(self, store):
        """Filters the current cluster collection in place."""
        status, clusters, key = store.get_current(CollectionKind.CLUSTER)
        if status is not StatusCode.SUCCESS:
            return status

        kept = [c for c in clusters if c.size >= self.min_size]
        logger.debug(
            "Removed %d small clusters from `%s`.", len(clusters) - len(kept), key
        )
        clusters[:] = kept

        return StatusCode.SUCCESS
