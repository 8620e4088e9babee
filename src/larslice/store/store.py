"""In-memory collection store."""

from larslice.data import HitList
from larslice.utils.enums import CollectionKind, StatusCode
from larslice.utils.logger import logger

from .keys import ListKey

__all__ = ["CollectionStore"]


class CollectionStore:
    """Keyed store of typed collections with one current collection per type.

    Hit collections are stored as :class:`HitList` objects, every other kind
    of collection as a plain list of objects. Saving under an existing key
    appends to the existing collection.
    """

    # Base name of the collections generated by clustering algorithms
    temporary_name = "temporary"

    def __init__(self):
        """Initialize an empty store."""
        self._lists = {kind: {} for kind in CollectionKind}
        self._current = {kind: None for kind in CollectionKind}
        self._temporary = {kind: set() for kind in CollectionKind}
        self._num_temporary = 0

    def __repr__(self):
        return f"CollectionStore({self.summary()})"

    def keys(self, kind):
        """Returns the keys of all the collections of one type.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection

        Returns
        -------
        Tuple[ListKey]
            Collection keys, in order of creation
        """
        return tuple(self._lists[kind].keys())

    def has(self, kind, key):
        """Checks whether a collection exists under a key."""
        return key in self._lists[kind]

    def get(self, kind, key):
        """Returns the collection stored under a key.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection
        key : ListKey
            Collection key

        Returns
        -------
        Union[HitList, list]
            Stored collection
        """
        if key not in self._lists[kind]:
            raise KeyError(f"No {kind.value} collection stored under `{key}`.")

        return self._lists[kind][key]

    def current_key(self, kind):
        """Returns the key of the current collection of one type, if any."""
        return self._current[kind]

    def get_current(self, kind):
        """Returns the current collection of one type.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection

        Returns
        -------
        StatusCode
            `NOT_INITIALIZED` if there is no current collection
        Union[HitList, list]
            Current collection
        ListKey
            Key of the current collection
        """
        key = self._current[kind]
        if key is None:
            return StatusCode.NOT_INITIALIZED, None, None

        return StatusCode.SUCCESS, self._lists[kind][key], key

    def create_temporary(self, kind, collection):
        """Stores a collection under a generated key and makes it current.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection
        collection : Union[HitList, list]
            Collection to store

        Returns
        -------
        ListKey
            Generated key
        """
        key = ListKey(self.temporary_name, self._num_temporary)
        self._num_temporary += 1

        self._release_temporary(kind)
        self._lists[kind][key] = self._copy(collection)
        self._temporary[kind].add(key)
        self._current[kind] = key

        return key

    def save(self, kind, key, collection=None):
        """Stores a collection under a key.

        If no collection is provided, the content of the current collection
        is saved instead. A current temporary collection is consumed in the
        process and the current pointer is cleared. If a collection already
        exists under the key, the new content is appended to it.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection
        key : ListKey
            Key to store the collection under
        collection : Union[HitList, list], optional
            Collection to store

        Returns
        -------
        StatusCode
            Outcome of the operation
        """
        if collection is None:
            current = self._current[kind]
            if current is None:
                return StatusCode.NOT_INITIALIZED
            if current == key:
                return StatusCode.ALREADY_PRESENT

            collection = self._lists[kind][current]
            if current in self._temporary[kind]:
                self._release_temporary(kind)
                self._current[kind] = None

        collection = self._copy(collection)
        if key in self._lists[kind]:
            collection = self._merge(self._lists[kind][key], collection)
        self._lists[kind][key] = collection

        return StatusCode.SUCCESS

    def replace_current(self, kind, key):
        """Makes an existing collection the current one.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection
        key : ListKey
            Key of the collection to make current

        Returns
        -------
        StatusCode
            `NOT_FOUND` if there is no collection under this key
        """
        if key not in self._lists[kind]:
            return StatusCode.NOT_FOUND

        if self._current[kind] != key:
            self._release_temporary(kind)
        self._current[kind] = key

        return StatusCode.SUCCESS

    def drop_current(self, kind):
        """Discards the current collection of one type.

        A temporary collection is deleted, a named one is left untouched.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection

        Returns
        -------
        StatusCode
            `NOT_INITIALIZED` if there is no current collection
        """
        if self._current[kind] is None:
            return StatusCode.NOT_INITIALIZED

        self._release_temporary(kind)
        self._current[kind] = None

        return StatusCode.SUCCESS

    def delete(self, kind, key):
        """Deletes a collection.

        Parameters
        ----------
        kind : CollectionKind
            Type of collection
        key : ListKey
            Key of the collection to delete

        Returns
        -------
        StatusCode
            `NOT_FOUND` if there is no collection under this key
        """
        if key not in self._lists[kind]:
            return StatusCode.NOT_FOUND

        del self._lists[kind][key]
        self._temporary[kind].discard(key)
        if self._current[kind] == key:
            self._current[kind] = None

        return StatusCode.SUCCESS

    def reset(self, kinds=None):
        """Erases collections and clears every current pointer.

        Parameters
        ----------
        kinds : List[CollectionKind], optional
            Types of collections to erase. If not specified, erase all.
        """
        kinds = list(CollectionKind) if kinds is None else kinds
        for kind in kinds:
            self._lists[kind].clear()
            self._temporary[kind].clear()

        for kind in CollectionKind:
            self._release_temporary(kind)
            self._current[kind] = None

        logger.debug("Reset the %s collections of the store.", [k.value for k in kinds])

    def summary(self):
        """Returns the size of every stored collection.

        Returns
        -------
        Dict[str, Dict[str, int]]
            Number of elements in each collection, grouped by type
        """
        return {
            kind.value: {str(key): len(coll) for key, coll in lists.items()}
            for kind, lists in self._lists.items()
            if len(lists)
        }

    def _release_temporary(self, kind):
        """Deletes the current collection of one type if it is temporary."""
        current = self._current[kind]
        if current is not None and current in self._temporary[kind]:
            del self._lists[kind][current]
            self._temporary[kind].discard(current)
            self._current[kind] = None

    @staticmethod
    def _copy(collection):
        """Shallow copy of a collection, so the store owns its containers."""
        if isinstance(collection, HitList):
            return collection.copy()

        return list(collection)

    @staticmethod
    def _merge(existing, collection):
        """Appends the content of a collection to an existing one."""
        if isinstance(existing, HitList):
            return existing.merge(collection)

        return existing + collection
