"""Test the data structures exchanged between algorithms."""

import numpy as np
import pytest

from larslice.data import Cluster, HitList, Slice
from larslice.utils.enums import View, enum_factory


class TestHitList:
    """Hit collections of one view."""

    def test_defaults(self):
        """An empty hit list has consistent empty arrays."""
        hits = HitList(view=View.U)

        assert len(hits) == 0
        assert hits.points.shape == (0, 2)
        assert hits.charge.shape == (0,)

    def test_from_array(self):
        """Hits are read from (drift, wire, charge) rows."""
        hits = HitList.from_array(1, [[0.0, 1.0, 5.0], [2.0, 3.0, 7.0]], offset=10)

        assert hits.view is View.V
        np.testing.assert_array_equal(hits.index, [10, 11])
        np.testing.assert_array_equal(hits.points, [[0, 1], [2, 3]])
        np.testing.assert_array_equal(hits.charge, [5, 7])

    def test_inconsistent(self):
        """Arrays of different lengths are rejected."""
        with pytest.raises(AssertionError):
            HitList(view=View.U, index=[0, 1], points=[[0, 0]])

    def test_select(self):
        """Hits are selected by ID."""
        hits = HitList(view=View.W, index=[4, 5, 6], points=np.zeros((3, 2)))

        np.testing.assert_array_equal(hits.select([6, 4, 9]).index, [4, 6])

    def test_merge(self):
        """Merging keeps each hit once."""
        first = HitList(view=View.U, index=[0, 1], points=np.zeros((2, 2)))
        second = HitList(view=View.U, index=[1, 2], points=np.ones((2, 2)))

        merged = first.merge(second)
        np.testing.assert_array_equal(merged.index, [0, 1, 2])
        np.testing.assert_array_equal(merged.points[2], [1, 1])
        with pytest.raises(AssertionError):
            first.merge(HitList(view=View.V))

    def test_copy(self):
        """Copies do not share their arrays."""
        hits = HitList(view=View.U, points=np.zeros((2, 2)))
        copy = hits.copy()
        copy.points[0, 0] = 1.0

        assert hits.points[0, 0] == 0.0


def test_cluster():
    """Clusters know their size and drift extent."""
    cluster = Cluster(View.U, index=[3, 4], points=[[5.0, 0.0], [2.0, 1.0]])

    assert cluster.size == len(cluster) == 2
    assert cluster.drift_range == (2.0, 5.0)
    assert Cluster(View.U).drift_range == (np.inf, -np.inf)


def test_slice():
    """Views absent from a slice are empty."""
    slc = Slice.from_views({View.V: HitList(view=View.V, points=np.zeros((4, 2)))})

    assert slc.num_hits == 4
    assert len(slc.hits(View.U)) == 0
    assert slc.hits(View.W).view is View.W


def test_enum_factory():
    """Enumerated members are parsed from their names."""
    assert enum_factory("view", "w") is View.W
    assert enum_factory("view", ["u", "V"]) == [View.U, View.V]
    with pytest.raises(ValueError):
        enum_factory("view", "x")
