"""Algorithms which manage the collections of the store themselves."""

import logging

from larslice.store import ListKey
from larslice.utils.enums import CollectionKind, StatusCode, enum_factory
from larslice.utils.logger import logger

from .base import AlgorithmBase

__all__ = ["ListDeletionAlgorithm", "ListMovingAlgorithm", "ListDumpAlgorithm"]


class ListDeletionAlgorithm(AlgorithmBase):
    """Erases collections from the store and clears every current collection.

    By default all object collections are erased but the input hits.
    """

    name = "list_deletion"
    aliases = ("ListDeletion",)

    def __init__(self, kinds=("cluster", "vertex", "particle")):
        """Initialize the list of collection types to erase.

        Parameters
        ----------
        kinds : Union[str, List[str]], default ('cluster', 'vertex', 'particle')
            Types of collections to erase
        """
        kinds = enum_factory("kind", kinds)
        self.kinds = [kinds] if isinstance(kinds, CollectionKind) else kinds

    def run(self, store):
        """Erases the collections."""
        store.reset(self.kinds)

        return StatusCode.SUCCESS


class ListMovingAlgorithm(AlgorithmBase):
    """Moves named collections under a prefixed name.

    Collections moved to an existing destination are appended to it, so the
    output of successive slices accumulates under the same name. Source
    collections which do not exist are skipped.
    """

    name = "list_moving"
    aliases = ("ListMoving",)

    def __init__(self, lists=None, prefix="Parent"):
        """Initialize the collections to move.

        Parameters
        ----------
        lists : Dict[str, List[str]], optional
            Names of the collections to move, for each collection type
        prefix : str, default 'Parent'
            Prefix prepended to the name of moved collections
        """
        assert prefix, "Must provide a non-empty prefix to move collections to."
        self.prefix = prefix
        self.lists = []
        for kind, names in (lists or {}).items():
            kind = enum_factory("kind", kind)
            names = [names] if isinstance(names, str) else names
            self.lists.extend((kind, ListKey(name)) for name in names)

    def run(self, store):
        """Moves the collections."""
        for kind, key in self.lists:
            if not store.has(kind, key):
                logger.debug("No %s collection `%s` to move.", kind.value, key)
                continue

            target = ListKey(f"{self.prefix}{key.name}")
            status = store.save(kind, target, store.get(kind, key))
            if status is not StatusCode.SUCCESS:
                return status

            status = store.delete(kind, key)
            if status is not StatusCode.SUCCESS:
                return status

        return StatusCode.SUCCESS


class ListDumpAlgorithm(AlgorithmBase):
    """Logs the content of the store."""

    name = "list_dump"
    aliases = ("ListDump",)

    def __init__(self, level="debug"):
        """Initialize the logging level.

        Parameters
        ----------
        level : str, default 'debug'
            Level at which to log the store content
        """
        self.level = logging.getLevelName(level.upper())
        assert isinstance(self.level, int), f"Logging level not recognized: {level}"

    def run(self, store):
        """Logs the size of every collection and the current ones."""
        current = {
            kind.value: str(store.current_key(kind))
            for kind in CollectionKind
            if store.current_key(kind) is not None
        }
        logger.log(self.level, "Store content: %s", store.summary())
        logger.log(self.level, "Current collections: %s", current)

        return StatusCode.SUCCESS
