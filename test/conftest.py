"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import pytest

from larslice.parent import NeutrinoParentAlgorithm, ParentSettings
from larslice.utils.enums import CollectionKind, View

from recording import (
    CLUSTER_KEYS,
    HIT_KEYS,
    RecordingAlgorithm,
    RecordingClustering,
    RecordingSlicingTool,
    RecordingStore,
    make_hits,
)


@pytest.fixture(name="log")
def fixture_log():
    """Shared call log of the stand-ins."""
    return []


@pytest.fixture(name="store")
def fixture_store(log):
    """Collection store holding three hits in each view."""
    store = RecordingStore(log)
    for i, view in enumerate(View):
        store.save(CollectionKind.HIT, HIT_KEYS[view], make_hits(view, offset=3 * i))
    return store


@pytest.fixture(name="make_parent")
def fixture_make_parent(log):
    """Factory which builds a bound parent algorithm out of stand-ins.

    Every handle can be overridden by keyword. By default each algorithm
    sequence holds a single recording algorithm named after the sequence.
    """

    def make_parent(**overrides):
        settings = {
            "hit_keys": HIT_KEYS,
            "cluster_keys": CLUSTER_KEYS,
            "clustering": RecordingClustering(log),
            "slicing": RecordingSlicingTool(log),
            "list_deletion": RecordingAlgorithm(
                "deletion", log, action=lambda s: s.reset([CollectionKind.CLUSTER])
            ),
            "list_moving": RecordingAlgorithm("moving", log),
            "two_d_algorithms": (RecordingAlgorithm("2d", log),),
            "three_d_algorithms": (RecordingAlgorithm("3d", log),),
            "three_d_hit_algorithms": (RecordingAlgorithm("3d_hit", log),),
            "vertex_algorithms": (RecordingAlgorithm("vertex", log),),
            "mop_up_algorithms": (RecordingAlgorithm("mop_up", log),),
            "neutrino_algorithms": (RecordingAlgorithm("neutrino", log),),
        }
        settings.update(overrides)
        return NeutrinoParentAlgorithm(ParentSettings(**settings))

    return make_parent
