"""Binding of the parent reconstruction settings.

All list names and algorithm identifiers are resolved once, when the
configuration is read. The run itself never looks anything up by name.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from larslice.algo import (
    AlgorithmBase,
    ClusteringBase,
    SlicingToolBase,
    algorithm_factory,
    tool_factory,
)
from larslice.config.errors import (
    ConfigCapabilityError,
    ConfigError,
    ConfigMissingError,
    ConfigResolutionError,
    ConfigTypeError,
)
from larslice.store import ListKey
from larslice.utils.enums import View

__all__ = ["ParentSettings"]


@dataclass(frozen=True)
class ParentSettings:
    """Resolved settings of the parent reconstruction.

    Attributes
    ----------
    hit_keys : Dict[View, ListKey]
        Key of the input hit collection of each view
    cluster_keys : Dict[View, ListKey]
        Key under which the clusters of each view are saved
    clustering : ClusteringBase
        Two-dimensional clustering algorithm
    slicing : SlicingToolBase
        Tool which partitions the event into slices
    list_deletion : AlgorithmBase
        Algorithm which erases the collections before slice processing
    list_moving : AlgorithmBase
        Algorithm which moves the output of each slice
    two_d_algorithms : Tuple[AlgorithmBase]
        Algorithms run on the clusters of each view
    three_d_algorithms : Tuple[AlgorithmBase]
        Algorithms which match clusters across views
    three_d_hit_algorithms : Tuple[AlgorithmBase]
        Algorithms which build three-dimensional hits
    vertex_algorithms : Tuple[AlgorithmBase]
        Algorithms which find the interaction vertex of a slice
    mop_up_algorithms : Tuple[AlgorithmBase]
        Algorithms which merge left-over clusters
    neutrino_algorithms : Tuple[AlgorithmBase]
        Algorithms which build the neutrino hierarchy of a slice
    """

    hit_keys: Dict[View, ListKey]
    cluster_keys: Dict[View, ListKey]
    clustering: ClusteringBase
    slicing: SlicingToolBase
    list_deletion: AlgorithmBase
    list_moving: AlgorithmBase
    two_d_algorithms: Tuple[AlgorithmBase, ...] = ()
    three_d_algorithms: Tuple[AlgorithmBase, ...] = ()
    three_d_hit_algorithms: Tuple[AlgorithmBase, ...] = ()
    vertex_algorithms: Tuple[AlgorithmBase, ...] = ()
    mop_up_algorithms: Tuple[AlgorithmBase, ...] = ()
    neutrino_algorithms: Tuple[AlgorithmBase, ...] = ()

    # Names of the ordered algorithm lists, as specified in the configuration
    _sequences = (
        "two_d_algorithms",
        "three_d_algorithms",
        "three_d_hit_algorithms",
        "vertex_algorithms",
        "mop_up_algorithms",
        "neutrino_algorithms",
    )

    def __post_init__(self):
        """Checks that the handles provide the expected capabilities."""
        for view in View:
            for keys in (self.hit_keys, self.cluster_keys):
                if not isinstance(keys.get(view), ListKey):
                    raise ConfigTypeError(f"Missing list key for view {view.name}.")

        # Each view works on its own lists
        for keys in (self.hit_keys, self.cluster_keys):
            names = [keys[view].name for view in View]
            if len(set(names)) != len(names):
                raise ConfigTypeError(
                    f"The views must be bound to distinct lists, got {names}."
                )

        _check(self.clustering, ClusteringBase, "two_d_clustering")
        _check(self.slicing, SlicingToolBase, "slicing")
        _check(self.list_deletion, AlgorithmBase, "list_deletion")
        _check(self.list_moving, AlgorithmBase, "list_moving")
        for key in self._sequences:
            for algo in getattr(self, key):
                _check(algo, AlgorithmBase, key)

    @classmethod
    def read(cls, cfg):
        """Reads and resolves every setting of the parent reconstruction.

        Each identifier is either an algorithm name, a configuration
        dictionary (`name` and keyword arguments) or an already
        instantiated object of the appropriate type.

        Parameters
        ----------
        cfg : dict
            Parent reconstruction configuration

        Returns
        -------
        ParentSettings
            Resolved settings

        Raises
        ------
        ConfigError
            If any setting is missing, malformed or cannot be resolved
        """
        if not isinstance(cfg, dict):
            raise ConfigTypeError(
                f"The parent configuration must be a mapping, got {type(cfg).__name__}."
            )

        # Bind the list names of each view
        hit_keys, cluster_keys = {}, {}
        for view in View:
            hit_keys[view] = _read_key(cfg, f"hit_list_name_{view.label}")
            cluster_keys[view] = _read_key(cfg, f"cluster_list_name_{view.label}")

        # Resolve the individual algorithms and tools
        kwargs = {
            "clustering": _resolve(
                algorithm_factory, _read(cfg, "two_d_clustering"), ClusteringBase
            ),
            "slicing": _resolve(tool_factory, _read(cfg, "slicing"), SlicingToolBase),
            "list_deletion": _resolve(
                algorithm_factory, _read(cfg, "list_deletion"), AlgorithmBase
            ),
            "list_moving": _resolve(
                algorithm_factory, _read(cfg, "list_moving"), AlgorithmBase
            ),
        }

        # Resolve the ordered algorithm lists
        for key in cls._sequences:
            value = _read(cfg, key)
            if value is None:
                value = []
            if not isinstance(value, (list, tuple)):
                raise ConfigTypeError(f"The `{key}` setting must be a list.")
            kwargs[key] = tuple(
                _resolve(algorithm_factory, v, AlgorithmBase) for v in value
            )

        return cls(hit_keys=hit_keys, cluster_keys=cluster_keys, **kwargs)


def _read(cfg, key):
    """Fetches a required setting."""
    if key not in cfg:
        raise ConfigMissingError(f"Missing required setting `{key}`.")

    return cfg[key]


def _read_key(cfg, key):
    """Fetches a required list name and turns it into a list key."""
    value = _read(cfg, key)
    if not isinstance(value, str) or not value:
        raise ConfigTypeError(f"The `{key}` setting must be a non-empty string.")

    return ListKey(value)


def _resolve(factory, value, base):
    """Resolves an identifier into an object of the required type."""
    if not isinstance(value, (str, dict)):
        _check(value, base, repr(value))
        return value

    try:
        obj = factory(value)
    except ConfigError:
        raise
    except Exception as err:
        raise ConfigResolutionError(f"Could not resolve `{value}`: {err}") from err

    _check(obj, base, value)

    return obj


def _check(obj, base, identifier):
    """Checks that an object provides the capability of a base class."""
    if not isinstance(obj, base):
        raise ConfigCapabilityError(
            f"`{identifier}` resolved to {type(obj).__name__}, which is not "
            f"a {base.__name__}."
        )
