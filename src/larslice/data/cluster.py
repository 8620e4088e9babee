"""Module with the cluster data structure."""

from dataclasses import dataclass

import numpy as np

from larslice.utils.enums import View

__all__ = ["Cluster"]


@dataclass(eq=False)
class Cluster:
    """Group of hits in one view, as produced by a clustering algorithm.

    Attributes
    ----------
    view : View
        Wire-plane view of the hits in the cluster
    index : np.ndarray
        (N) IDs of the hits which make up the cluster
    points : np.ndarray
        (N, 2) Drift and wire coordinates of the hits
    """

    view: View
    index: np.ndarray = None
    points: np.ndarray = None

    def __post_init__(self):
        """Gives default values to the array attributes."""
        self.view = View(self.view)
        if self.index is None:
            self.index = np.empty(0, dtype=np.int64)
        if self.points is None:
            self.points = np.empty((0, 2), dtype=np.float32)
        self.index = np.asarray(self.index, dtype=np.int64)
        self.points = np.asarray(self.points, dtype=np.float32).reshape(-1, 2)

    def __len__(self):
        return len(self.index)

    @property
    def size(self):
        """Number of hits in the cluster."""
        return len(self.index)

    @property
    def drift_range(self):
        """(min, max) drift coordinate spanned by the cluster."""
        if not len(self.points):
            return (np.inf, -np.inf)

        return (float(self.points[:, 0].min()), float(self.points[:, 0].max()))
