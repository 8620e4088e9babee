"""Module with the hit collection data structure."""

from dataclasses import dataclass

import numpy as np

from larslice.utils.enums import View

__all__ = ["HitList"]


@dataclass(eq=False)
class HitList:
    """Collection of hits recorded in a single view.

    Attributes
    ----------
    view : View
        Wire-plane view the hits were recorded in
    index : np.ndarray
        (N) Unique hit IDs within the event
    points : np.ndarray
        (N, 2) Drift and wire coordinates of each hit
    charge : np.ndarray
        (N) Charge deposited in each hit
    """

    view: View
    index: np.ndarray = None
    points: np.ndarray = None
    charge: np.ndarray = None

    def __post_init__(self):
        """Gives default values to the array attributes and checks shapes."""
        self.view = View(self.view)
        if self.points is None:
            self.points = np.empty((0, 2), dtype=np.float32)
        self.points = np.asarray(self.points, dtype=np.float32).reshape(-1, 2)

        num_hits = len(self.points)
        if self.index is None:
            self.index = np.arange(num_hits, dtype=np.int64)
        if self.charge is None:
            self.charge = np.ones(num_hits, dtype=np.float32)
        self.index = np.asarray(self.index, dtype=np.int64)
        self.charge = np.asarray(self.charge, dtype=np.float32)

        assert len(self.index) == num_hits and len(self.charge) == num_hits, (
            f"Inconsistent number of hits: {len(self.index)} IDs, "
            f"{num_hits} points and {len(self.charge)} charges."
        )

    def __len__(self):
        return len(self.index)

    @classmethod
    def from_array(cls, view, hits, offset=0):
        """Builds a hit list from an (N, 3) array of (drift, wire, charge).

        Parameters
        ----------
        view : View
            View the hits belong to
        hits : np.ndarray
            (N, 3) Hit array
        offset : int, default 0
            Offset applied to the hit IDs, to keep them unique across views

        Returns
        -------
        HitList
            Hit list object
        """
        hits = np.asarray(hits, dtype=np.float32).reshape(-1, 3)
        index = offset + np.arange(len(hits), dtype=np.int64)

        return cls(view=view, index=index, points=hits[:, :2], charge=hits[:, 2])

    def subset(self, mask):
        """Returns the hits selected by a boolean mask or an index array.

        Parameters
        ----------
        mask : np.ndarray
            Boolean mask or positional index of the hits to keep

        Returns
        -------
        HitList
            New hit list with the selected hits only
        """
        return HitList(
            view=self.view,
            index=self.index[mask],
            points=self.points[mask],
            charge=self.charge[mask],
        )

    def select(self, index):
        """Returns the hits whose IDs appear in a list of hit IDs.

        Parameters
        ----------
        index : np.ndarray
            (M) List of hit IDs

        Returns
        -------
        HitList
            New hit list with the selected hits only
        """
        return self.subset(np.isin(self.index, index))

    def merge(self, other):
        """Returns a hit list with the hits of both lists (IDs deduplicated).

        Parameters
        ----------
        other : HitList
            Hit list to append to this one

        Returns
        -------
        HitList
            Merged hit list
        """
        assert other.view == self.view, (
            f"Cannot merge hits of view {other.view.name} into a hit list "
            f"of view {self.view.name}."
        )
        other = other.subset(~np.isin(other.index, self.index))

        return HitList(
            view=self.view,
            index=np.concatenate((self.index, other.index)),
            points=np.vstack((self.points, other.points)),
            charge=np.concatenate((self.charge, other.charge)),
        )

    def copy(self):
        """Returns an independant copy of the hit list."""
        return HitList(
            view=self.view,
            index=self.index.copy(),
            points=self.points.copy(),
            charge=self.charge.copy(),
        )
