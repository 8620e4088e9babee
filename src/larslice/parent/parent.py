"""Parent algorithm of the neutrino reconstruction.

The reconstruction proceeds in two phases:

1. Whole-event pass: each view is clustered and run through the 2D
   algorithms, then the 3D and 3D-hit algorithms are run on the event.
2. Slice pass: the event is partitioned into slices, every collection is
   erased and the full reconstruction is run again, independently, on the
   hits of each slice.
"""

from enum import Enum

from larslice.config.errors import ConfigError
from larslice.store import SliceCounter
from larslice.utils.enums import CollectionKind, StatusCode, View
from larslice.utils.logger import logger

from .settings import ParentSettings

__all__ = ["BindingState", "NeutrinoParentAlgorithm", "as_status", "run_sequence"]


class BindingState(Enum):
    """Configuration state of the parent algorithm."""

    UNCONFIGURED = "unconfigured"
    BOUND = "bound"
    FATAL = "fatal"


def run_sequence(algorithms, store):
    """Runs an ordered sequence of algorithms, stops at the first failure.

    Parameters
    ----------
    algorithms : Iterable[AlgorithmBase]
        Algorithms to run, in order
    store : CollectionStore
        Collection store of the event

    Returns
    -------
    StatusCode
        `SUCCESS` or the outcome of the first failed algorithm
    """
    for algorithm in algorithms:
        status = as_status(algorithm.run(store))
        if status is not StatusCode.SUCCESS:
            logger.error("Algorithm %r failed with status %s.", algorithm, status.name)
            return status

    return StatusCode.SUCCESS


def as_status(value):
    """Converts the outcome reported by a daughter into a status code.

    Outcomes which are not status codes (e.g. `None`) are failures.
    """
    try:
        return StatusCode(value)

    except (TypeError, ValueError):
        logger.error("Unrecognized outcome %r, treated as a failure.", value)
        return StatusCode.FAILURE


class NeutrinoParentAlgorithm:
    """Runs the two-phase, slice-based neutrino reconstruction of one event.

    The parent algorithm does not process hits itself: it sequences the
    clustering algorithm, the slicing tool and the daughter algorithms,
    and hands them the appropriate current collections.

    It is configured once, through :meth:`read_settings` or
    :meth:`from_config`, and then run once per event on a fresh store
    which holds the input hit collections under the bound hit keys.

    Attributes
    ----------
    state : BindingState
        Configuration state
    settings : ParentSettings
        Resolved settings (`None` unless bound)
    slice_counter : SliceCounter
        Counter used to derive the working hit keys of the last run
    num_slices : int
        Number of slices found in the last run
    """

    name = "neutrino_parent"

    def __init__(self, settings=None):
        """Initialize the parent algorithm.

        Parameters
        ----------
        settings : ParentSettings, optional
            Resolved settings. If not provided, the algorithm must be
            configured with :meth:`read_settings` before it can run.
        """
        self.state = BindingState.UNCONFIGURED
        self.settings = None
        self.slice_counter = None
        self.num_slices = None
        if settings is not None:
            self.settings = settings
            self.state = BindingState.BOUND

    @classmethod
    def from_config(cls, cfg):
        """Builds a configured parent algorithm.

        Parameters
        ----------
        cfg : dict
            Parent reconstruction configuration

        Returns
        -------
        NeutrinoParentAlgorithm
            Bound parent algorithm

        Raises
        ------
        ConfigError
            If the configuration cannot be bound
        """
        return cls(ParentSettings.read(cfg))

    def read_settings(self, cfg):
        """Reads and binds the configuration.

        Parameters
        ----------
        cfg : dict
            Parent reconstruction configuration

        Returns
        -------
        StatusCode
            `SUCCESS` if the settings are bound, the status code of the
            configuration error otherwise
        """
        if self.state is not BindingState.UNCONFIGURED:
            raise ValueError(
                f"Cannot configure a parent algorithm which is {self.state.value}."
            )

        try:
            self.settings = ParentSettings.read(cfg)

        except ConfigError as err:
            logger.error("Invalid parent algorithm configuration: %s", err)
            self.state = BindingState.FATAL
            return err.status

        self.state = BindingState.BOUND

        return StatusCode.SUCCESS

    def run(self, store):
        """Reconstructs one event.

        Parameters
        ----------
        store : CollectionStore
            Collection store holding the input hit collections

        Returns
        -------
        StatusCode
            `SUCCESS` or the first failure encountered
        """
        if self.state is not BindingState.BOUND:
            raise ValueError(
                "The parent algorithm cannot run, its configuration is "
                f"{self.state.value}."
            )

        settings = self.settings
        self.slice_counter = SliceCounter()
        self.num_slices = None

        # Initial reconstruction pass, view by view
        for view in View:
            status = self.run_view(store, view, settings.hit_keys[view])
            if status is not StatusCode.SUCCESS:
                return status

        # Whole-event three dimensional reconstruction
        status = self.run_pre_slicing(store)
        if status is not StatusCode.SUCCESS:
            return status

        # Slice the event into distinct interactions
        status, slices = self.run_slicing(store)
        if status is not StatusCode.SUCCESS:
            return status

        # Delete all the existing objects before reprocessing each slice
        status = as_status(settings.list_deletion.run(store))
        if status is not StatusCode.SUCCESS:
            logger.error("List deletion failed with status %s.", status.name)
            return status

        for i, slc in enumerate(slices):
            logger.debug("Processing slice %d/%d.", i + 1, len(slices))
            status = self.run_slice(store, slc)
            if status is not StatusCode.SUCCESS:
                return status

        return StatusCode.SUCCESS

    def run_view(self, store, view, hit_key):
        """Clusters the hits of one view and runs the 2D algorithms.

        Views with no cluster are skipped.

        Parameters
        ----------
        store : CollectionStore
            Collection store of the event
        view : View
            View being processed
        hit_key : ListKey
            Key of the hit collection to process

        Returns
        -------
        StatusCode
            Outcome of the view reconstruction
        """
        settings = self.settings
        status = store.replace_current(CollectionKind.HIT, hit_key)
        if status is not StatusCode.SUCCESS:
            logger.error("Could not select hit collection `%s`.", hit_key)
            return status

        status, clusters, _ = settings.clustering.run_clustering(store)
        status = as_status(status)
        if status is not StatusCode.SUCCESS:
            logger.error("Clustering of view %s failed.", view.name)
            return status

        if not len(clusters):
            logger.debug("No cluster in view %s (`%s`), skipping.", view.name, hit_key)
            return store.drop_current(CollectionKind.CLUSTER)

        cluster_key = settings.cluster_keys[view]
        status = store.save(CollectionKind.CLUSTER, cluster_key)
        if status is not StatusCode.SUCCESS:
            return status

        status = store.replace_current(CollectionKind.CLUSTER, cluster_key)
        if status is not StatusCode.SUCCESS:
            return status

        return run_sequence(settings.two_d_algorithms, store)

    def run_pre_slicing(self, store):
        """Runs the 3D algorithms, then the 3D hit algorithms, on the event."""
        status = run_sequence(self.settings.three_d_algorithms, store)
        if status is not StatusCode.SUCCESS:
            return status

        return run_sequence(self.settings.three_d_hit_algorithms, store)

    def run_slicing(self, store):
        """Partitions the event into slices.

        Parameters
        ----------
        store : CollectionStore
            Collection store of the event

        Returns
        -------
        StatusCode
            Outcome of the slicing tool
        List[Slice]
            Ordered list of slices
        """
        settings = self.settings
        status, slices = settings.slicing.slice(
            store, dict(settings.hit_keys), dict(settings.cluster_keys)
        )
        status = as_status(status)
        if status is not StatusCode.SUCCESS:
            logger.error("Slicing tool %r failed.", settings.slicing)
            return status, []

        self.num_slices = len(slices)
        logger.debug("Found %d slice(s).", self.num_slices)

        return StatusCode.SUCCESS, list(slices)

    def run_slice(self, store, slc):
        """Runs the full reconstruction on the hits of one slice.

        Parameters
        ----------
        store : CollectionStore
            Collection store of the event
        slc : Slice
            Slice to reconstruct

        Returns
        -------
        StatusCode
            Outcome of the slice reconstruction
        """
        settings = self.settings
        for view in View:
            working_key = self.slice_counter.next_key(settings.hit_keys[view])
            status = store.save(CollectionKind.HIT, working_key, slc.hits(view))
            if status is not StatusCode.SUCCESS:
                return status

            status = self.run_view(store, view, working_key)
            if status is not StatusCode.SUCCESS:
                return status

        algorithms = (
            settings.vertex_algorithms
            + settings.three_d_algorithms
            + settings.mop_up_algorithms
            + settings.three_d_hit_algorithms
            + settings.neutrino_algorithms
            + (settings.list_moving,)
        )

        return run_sequence(algorithms, store)
