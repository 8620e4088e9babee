"""Test the binding of the parent reconstruction settings."""

import pathlib

import pytest

from larslice.algo import AlgorithmToolBase, register_tool
from larslice.algo.cluster import ClusterSizeFilter, ProximityClustering
from larslice.algo.lists import ListDumpAlgorithm, ListMovingAlgorithm
from larslice.algo.slicing import DriftSlicingTool
from larslice.config import (
    ConfigCapabilityError,
    ConfigMissingError,
    ConfigResolutionError,
    ConfigTypeError,
    load_config_file,
)
from larslice.parent import BindingState, NeutrinoParentAlgorithm, ParentSettings
from larslice.store import ListKey
from larslice.utils.enums import StatusCode, View

from recording import RecordingSlicingTool


@register_tool
class VertexSelectionTool(AlgorithmToolBase):
    """Tool which cannot slice an event."""

    name = "vertex_selection"


def make_config(**overrides):
    """Builds a complete parent configuration out of built-in algorithms."""
    cfg = {
        "hit_list_name_u": "HitsU",
        "hit_list_name_v": "HitsV",
        "hit_list_name_w": "HitsW",
        "cluster_list_name_u": "ClustersU",
        "cluster_list_name_v": "ClustersV",
        "cluster_list_name_w": "ClustersW",
        "two_d_clustering": {"name": "proximity", "max_distance": 1.5},
        "slicing": "drift",
        "list_deletion": "list_deletion",
        "list_moving": {
            "name": "list_moving",
            "lists": {"cluster": ["ClustersU", "ClustersV", "ClustersW"]},
        },
        "two_d_algorithms": [{"name": "cluster_size_filter", "min_size": 2}],
        "three_d_algorithms": [],
        "three_d_hit_algorithms": [],
        "vertex_algorithms": [],
        "mop_up_algorithms": [],
        "neutrino_algorithms": ["list_dump"],
    }
    cfg.update(overrides)
    return cfg


class TestRead:
    """Successful resolution of a configuration."""

    def test_resolved(self):
        """Names and identifiers are resolved once."""
        settings = ParentSettings.read(make_config())

        assert settings.hit_keys == {v: ListKey(f"Hits{v.name}") for v in View}
        assert settings.cluster_keys[View.W] == ListKey("ClustersW")
        assert isinstance(settings.clustering, ProximityClustering)
        assert settings.clustering.max_distance == 1.5
        assert isinstance(settings.slicing, DriftSlicingTool)
        assert isinstance(settings.list_moving, ListMovingAlgorithm)
        assert isinstance(settings.two_d_algorithms[0], ClusterSizeFilter)
        assert settings.two_d_algorithms[0].min_size == 2
        assert isinstance(settings.neutrino_algorithms[0], ListDumpAlgorithm)
        assert settings.vertex_algorithms == ()

    def test_aliases(self):
        """Algorithms can be referred to by alias."""
        settings = ParentSettings.read(
            make_config(two_d_clustering="ProximityClusteringAlgorithm", slicing="OneSlice")
        )

        assert isinstance(settings.clustering, ProximityClustering)

    def test_null_sequence(self):
        """A null algorithm list is an empty list."""
        settings = ParentSettings.read(make_config(mop_up_algorithms=None))

        assert settings.mop_up_algorithms == ()

    def test_instances(self, log):
        """Already instantiated objects are accepted as is."""
        slicing = RecordingSlicingTool(log)
        settings = ParentSettings.read(make_config(slicing=slicing))

        assert settings.slicing is slicing

    def test_read_settings(self):
        """A valid configuration binds the parent algorithm."""
        parent = NeutrinoParentAlgorithm()

        assert parent.read_settings(make_config()) is StatusCode.SUCCESS
        assert parent.state is BindingState.BOUND
        assert isinstance(parent.settings, ParentSettings)


class TestErrors:
    """Configurations which cannot be bound."""

    @pytest.mark.parametrize(
        "key",
        [
            "hit_list_name_v",
            "cluster_list_name_w",
            "two_d_clustering",
            "slicing",
            "list_deletion",
            "list_moving",
            "two_d_algorithms",
            "three_d_algorithms",
            "three_d_hit_algorithms",
            "vertex_algorithms",
            "mop_up_algorithms",
            "neutrino_algorithms",
        ],
    )
    def test_missing(self, key):
        """Every setting is required."""
        cfg = make_config()
        del cfg[key]
        with pytest.raises(ConfigMissingError):
            ParentSettings.read(cfg)

    def test_missing_slicing(self):
        """A missing slicing tool makes the configuration fatal."""
        cfg = make_config()
        del cfg["slicing"]
        parent = NeutrinoParentAlgorithm()

        assert parent.read_settings(cfg) is StatusCode.NOT_FOUND
        assert parent.state is BindingState.FATAL

    def test_not_a_slicing_tool(self):
        """A tool without the slicing capability is rejected."""
        parent = NeutrinoParentAlgorithm()
        status = parent.read_settings(make_config(slicing="vertex_selection"))

        assert status is StatusCode.INVALID_PARAMETER
        assert parent.state is BindingState.FATAL
        with pytest.raises(ConfigCapabilityError):
            ParentSettings.read(make_config(slicing="vertex_selection"))

    def test_wrong_instance(self):
        """An object of the wrong type is rejected."""
        with pytest.raises(ConfigCapabilityError):
            ParentSettings.read(make_config(slicing=ClusterSizeFilter()))
        with pytest.raises(ConfigCapabilityError):
            ParentSettings.read(make_config(slicing=None))

    def test_not_a_clustering(self):
        """The 2D clustering must be a clustering algorithm."""
        with pytest.raises(ConfigCapabilityError):
            ParentSettings.read(make_config(two_d_clustering="list_dump"))

    def test_unknown_name(self):
        """Unknown algorithm names cannot be resolved."""
        with pytest.raises(ConfigResolutionError):
            ParentSettings.read(make_config(slicing="best_slicing"))

    def test_bad_arguments(self):
        """Invalid algorithm arguments cannot be resolved."""
        cfg = make_config(two_d_clustering={"name": "proximity", "radius": 2})
        with pytest.raises(ConfigResolutionError):
            ParentSettings.read(cfg)

    @pytest.mark.parametrize("name", ["", 3, None])
    def test_bad_list_name(self, name):
        """List names must be non-empty strings."""
        with pytest.raises(ConfigTypeError):
            ParentSettings.read(make_config(hit_list_name_u=name))

    @pytest.mark.parametrize(
        "overrides",
        [{"hit_list_name_v": "HitsU"}, {"cluster_list_name_w": "ClustersV"}],
    )
    def test_shared_list_name(self, overrides):
        """Two views cannot be bound to the same list."""
        with pytest.raises(ConfigTypeError, match="distinct"):
            ParentSettings.read(make_config(**overrides))

    def test_shared_list_name_fatal(self):
        """A shared list name makes the configuration fatal."""
        parent = NeutrinoParentAlgorithm()

        status = parent.read_settings(make_config(hit_list_name_w="HitsV"))
        assert status is StatusCode.INVALID_PARAMETER
        assert parent.state is BindingState.FATAL

    def test_bad_sequence(self):
        """Algorithm lists must be lists."""
        with pytest.raises(ConfigTypeError):
            ParentSettings.read(make_config(vertex_algorithms="list_dump"))

    def test_not_a_mapping(self):
        """The configuration must be a mapping."""
        with pytest.raises(ConfigTypeError):
            ParentSettings.read(["slicing"])
        with pytest.raises(ConfigTypeError):
            NeutrinoParentAlgorithm.from_config("slicing: drift")


def test_example_config():
    """The example configuration shipped with the package can be bound."""
    path = pathlib.Path(__file__).parents[1] / "config" / "parent.yaml"
    cfg = load_config_file(str(path))

    settings = ParentSettings.read(cfg["parent"])
    assert isinstance(settings.slicing, DriftSlicingTool)
    assert settings.list_moving.prefix == "Slice"
