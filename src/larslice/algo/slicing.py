"""Slicing tools, which partition an event into candidate interactions."""

import numpy as np

from larslice.data import Slice
from larslice.utils.enums import CollectionKind, StatusCode, View
from larslice.utils.logger import logger

from .base import SlicingToolBase

__all__ = ["OneSliceTool", "DriftSlicingTool"]


class OneSliceTool(SlicingToolBase):
    """Places every hit of the event in a single slice.

    An event without any hit produces no slice.
    """

    name = "one_slice"
    aliases = ("OneSlice",)

    def slice(self, store, hit_keys, cluster_keys):
        """Builds one slice out of the full hit collection of each view."""
        hits = {}
        for view in View:
            if not store.has(CollectionKind.HIT, hit_keys[view]):
                logger.error("Missing hit collection `%s`.", hit_keys[view])
                return StatusCode.NOT_FOUND, []
            hits[view] = store.get(CollectionKind.HIT, hit_keys[view])

        slc = Slice.from_views(hits)
        if not slc.num_hits:
            return StatusCode.SUCCESS, []

        return StatusCode.SUCCESS, [slc]


class DriftSlicingTool(SlicingToolBase):
    """Groups the clusters of all views by their extent along the drift axis.

    The drift coordinate is shared by the three views, so clusters of
    different views which belong to the same interaction overlap in drift.
    The drift ranges of all clusters are merged into disjoint intervals and
    each interval produces one slice, holding the clustered hits it contains.
    Slices are ordered by increasing drift coordinate.
    """

    name = "drift"
    aliases = ("DriftSlicing",)

    def __init__(self, max_gap=1.0, min_hits=1):
        """Initialize the slicing parameters.

        Parameters
        ----------
        max_gap : float, default 1.0
            Maximum drift gap between two clusters of the same slice
        min_hits : int, default 1
            Minimum number of hits (all views) for a slice to be kept
        """
        assert max_gap >= 0, "The maximum drift gap must not be negative."
        self.max_gap = max_gap
        self.min_hits = min_hits

    def slice(self, store, hit_keys, cluster_keys):
        """Builds slices from overlapping clusters."""
        # Collect the clusters of every view (a view may have none)
        clusters = []
        for view in View:
            if not store.has(CollectionKind.HIT, hit_keys[view]):
                logger.error("Missing hit collection `%s`.", hit_keys[view])
                return StatusCode.NOT_FOUND, []
            if store.has(CollectionKind.CLUSTER, cluster_keys[view]):
                clusters.extend(store.get(CollectionKind.CLUSTER, cluster_keys[view]))

        clusters = [c for c in clusters if c.size]
        if not clusters:
            return StatusCode.SUCCESS, []

        # Merge the drift ranges into disjoint groups
        ranges = np.array([c.drift_range for c in clusters])
        order = np.argsort(ranges[:, 0], kind="stable")
        groups, group, upper = [], [order[0]], ranges[order[0], 1]
        for i in order[1:]:
            if ranges[i, 0] - upper > self.max_gap:
                groups.append(group)
                group, upper = [], -np.inf
            group.append(i)
            upper = max(upper, ranges[i, 1])
        groups.append(group)

        # Build one slice per group of clusters
        slices = []
        for group in groups:
            hits = {}
            for view in View:
                index = [clusters[i].index for i in group if clusters[i].view == view]
                all_hits = store.get(CollectionKind.HIT, hit_keys[view])
                if index:
                    hits[view] = all_hits.select(np.concatenate(index))
                else:
                    hits[view] = all_hits.subset(np.zeros(len(all_hits), dtype=bool))

            slc = Slice.from_views(hits)
            if slc.num_hits >= self.min_hits:
                slices.append(slc)

        logger.debug(
            "Grouped %d clusters into %d slices.", len(clusters), len(slices)
        )

        return StatusCode.SUCCESS, slices
