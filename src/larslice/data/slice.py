"""Module with the slice data structure."""

from dataclasses import dataclass

from larslice.utils.enums import View

from .hit import HitList

__all__ = ["Slice"]


@dataclass(frozen=True)
class Slice:
    """Hits of each view assigned to one candidate interaction.

    Slices are produced by a slicing tool and never modified afterwards.

    Attributes
    ----------
    hits_u : HitList
        Hits of the slice in the U view
    hits_v : HitList
        Hits of the slice in the V view
    hits_w : HitList
        Hits of the slice in the W view
    """

    hits_u: HitList
    hits_v: HitList
    hits_w: HitList

    @classmethod
    def from_views(cls, hits):
        """Builds a slice from a dictionary which maps views onto hits.

        Views which are absent from the dictionary get an empty hit list.

        Parameters
        ----------
        hits : Dict[View, HitList]
            Hits of the slice in each view

        Returns
        -------
        Slice
            Slice object
        """
        lists = {v: hits.get(v, HitList(view=v)) for v in View}

        return cls(hits_u=lists[View.U], hits_v=lists[View.V], hits_w=lists[View.W])

    def hits(self, view):
        """Returns the hits of the slice in one view.

        Parameters
        ----------
        view : View
            View of interest

        Returns
        -------
        HitList
            Hits of the slice in that view
        """
        return getattr(self, f"hits_{View(view).label}")

    @property
    def num_hits(self):
        """Total number of hits in the slice, across all views."""
        return sum(len(self.hits(v)) for v in View)
