"""Module which contains enumerated variables shared across the project."""

from enum import Enum, IntEnum

__all__ = ["View", "CollectionKind", "StatusCode", "enum_factory"]


class View(IntEnum):
    """Enumerates the three wire-plane projections, in processing order."""

    U = 0
    V = 1
    W = 2

    @property
    def label(self):
        """Lower-case suffix used to name per-view configuration keys."""
        return self.name.lower()


class CollectionKind(Enum):
    """Enumerates the types of collections held in the collection store."""

    HIT = "hit"
    CLUSTER = "cluster"
    VERTEX = "vertex"
    PARTICLE = "particle"


class StatusCode(IntEnum):
    """Outcome of any operation dispatched by the reconstruction.

    Anything other than `SUCCESS` is a failure which terminates the run.
    """

    SUCCESS = 0
    FAILURE = 1
    NOT_FOUND = 2
    NOT_INITIALIZED = 3
    ALREADY_PRESENT = 4
    INVALID_PARAMETER = 5


def enum_factory(enum, value):
    """Parses an enumerated object from string name(s) to member(s).

    Parameters
    ----------
    enum : str
        Name of the enumerated type
    value : Union[str, List[str]]
        Name or names of the enumerated objects (from config)

    Returns
    -------
    Union[Enum, List[Enum]]
        Member or members of the enumerated type
    """
    # Get the enumerated type
    ENUM_DICT = {"view": View, "kind": CollectionKind, "status": StatusCode}
    assert enum in ENUM_DICT, (
        f"Enumerated type not recognized: {enum}. Must be one of "
        f"{list(ENUM_DICT.keys())}."
    )
    enum = ENUM_DICT[enum]

    # Translate enumerated strings into members
    values = [value] if isinstance(value, str) else value
    members = []
    for v in values:
        if not hasattr(enum, v.upper()):
            raise ValueError(
                f"Enumerated object not recognized: {v}. Must be one "
                f"of {[e.name for e in enum]}."
            )
        members.append(getattr(enum, v.upper()))

    return members[0] if isinstance(value, str) else members
