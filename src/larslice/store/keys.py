"""Keys used to address collections in the collection store."""

from dataclasses import dataclass
from typing import Optional

__all__ = ["ListKey", "SliceCounter"]


@dataclass(frozen=True)
class ListKey:
    """Name of a collection in the store.

    A key is either a base key, bound once from the configuration, or a
    working key derived from a base key and a counter value. Two keys are
    only equal if both their name and their counter match, so a working key
    can never be mistaken for a base key which happens to share its string
    representation (e.g. `Hits` + 1 and `Hits1`).

    Attributes
    ----------
    name : str
        Base name of the collection
    counter : int, optional
        Counter value appended to the base name for working keys
    """

    name: str
    counter: Optional[int] = None

    def __post_init__(self):
        """Checks that the key is well-formed."""
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"List names must be non-empty strings, got {self.name!r}.")
        if self.counter is not None and (
            not isinstance(self.counter, int) or self.counter < 0
        ):
            raise ValueError(
                f"List counters must be non-negative integers, got {self.counter!r}."
            )

    def __str__(self):
        if self.counter is None:
            return self.name

        return f"{self.name}{self.counter}"

    @property
    def is_working(self):
        """Whether this key was derived from a base key and a counter."""
        return self.counter is not None

    def working(self, counter):
        """Derives a working key from this base key.

        Parameters
        ----------
        counter : int
            Counter value

        Returns
        -------
        ListKey
            Working key
        """
        if self.is_working:
            raise ValueError(f"Cannot derive a working key from working key `{self}`.")

        return ListKey(self.name, counter)


class SliceCounter:
    """Monotonically increasing counter used to derive working keys.

    The counter is incremented once per derived key, so that no two keys
    derived within one event can collide, whatever their base key.
    """

    def __init__(self, start=0):
        """Initialize the counter.

        Parameters
        ----------
        start : int, default 0
            First value handed out
        """
        self.value = start
        self.keys = []

    def __len__(self):
        return len(self.keys)

    def next_key(self, base):
        """Derives the next working key from a base key.

        Parameters
        ----------
        base : ListKey
            Base key bound in the configuration

        Returns
        -------
        ListKey
            Unique working key
        """
        key = base.working(self.value)
        self.value += 1
        self.keys.append(key)

        return key
