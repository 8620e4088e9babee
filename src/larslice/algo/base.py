"""Contains the base classes of all algorithms and algorithm tools."""

from abc import ABC, abstractmethod

from larslice.utils.enums import CollectionKind, StatusCode

__all__ = ["AlgorithmBase", "ClusteringBase", "AlgorithmToolBase", "SlicingToolBase"]


class AlgorithmBase(ABC):
    """Base class of all daughter algorithms.

    A daughter algorithm operates on the collections of the store (usually
    the current ones) and reports its outcome as a :class:`StatusCode`.

    Attributes
    ----------
    name : str
        Name of the algorithm as specified in the configuration file
    aliases : Tuple[str]
        Alternative acceptable names for the algorithm
    """

    # Name of the algorithm (as specified in the configuration)
    name = None

    # Alternative allowed names of the algorithm
    aliases = ()

    def __repr__(self):
        return f"{type(self).__name__}()"

    @abstractmethod
    def run(self, store):
        """Runs the algorithm.

        Parameters
        ----------
        store : CollectionStore
            Collection store of the event

        Returns
        -------
        StatusCode
            Outcome of the algorithm
        """
        raise NotImplementedError


class ClusteringBase(ABC):
    """Base class of all clustering algorithms.

    A clustering algorithm groups the hits of the current hit collection and
    stores the resulting clusters in a new temporary cluster collection,
    which becomes the current cluster collection.
    """

    # Name of the algorithm (as specified in the configuration)
    name = None

    # Alternative allowed names of the algorithm
    aliases = ()

    def __repr__(self):
        return f"{type(self).__name__}()"

    @abstractmethod
    def cluster(self, hits):
        """Groups hits into clusters.

        Parameters
        ----------
        hits : HitList
            Hits of one view

        Returns
        -------
        List[Cluster]
            Clusters formed from the hits
        """
        raise NotImplementedError

    def run_clustering(self, store):
        """Clusters the current hit collection of the store.

        Parameters
        ----------
        store : CollectionStore
            Collection store of the event

        Returns
        -------
        StatusCode
            Outcome of the clustering
        List[Cluster]
            Clusters formed from the current hits
        ListKey
            Key of the temporary cluster collection
        """
        status, hits, _ = store.get_current(CollectionKind.HIT)
        if status is not StatusCode.SUCCESS:
            return status, None, None

        clusters = self.cluster(hits)
        key = store.create_temporary(CollectionKind.CLUSTER, clusters)

        return StatusCode.SUCCESS, store.get(CollectionKind.CLUSTER, key), key


class AlgorithmToolBase(ABC):
    """Base class of all algorithm tools.

    Tools are helper objects owned by an algorithm. They are resolved by name
    like algorithms are, but each tool type exposes its own interface.
    """

    # Name of the tool (as specified in the configuration)
    name = None

    # Alternative allowed names of the tool
    aliases = ()

    def __repr__(self):
        return f"{type(self).__name__}()"


class SlicingToolBase(AlgorithmToolBase):
    """Base class of all slicing tools.

    A slicing tool partitions the hits of an event into slices, each of
    which is believed to contain a single interaction.
    """

    @abstractmethod
    def slice(self, store, hit_keys, cluster_keys):
        """Partitions the event into slices.

        Parameters
        ----------
        store : CollectionStore
            Collection store of the event
        hit_keys : Dict[View, ListKey]
            Keys of the hit collection of each view
        cluster_keys : Dict[View, ListKey]
            Keys of the cluster collection of each view

        Returns
        -------
        StatusCode
            Outcome of the slicing
        List[Slice]
            Ordered list of slices
        """
        raise NotImplementedError
