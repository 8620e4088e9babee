"""Readers which load the hits of events from files."""

import glob
import os

import numpy as np

from larslice.data import HitList
from larslice.utils.enums import View
from larslice.utils.logger import logger

__all__ = ["NpzReader"]


class ReaderBase:
    """Common entry bookkeeping of all event readers.

    A reader exposes its events as a sequence: `len(reader)` entries, each
    returned by `reader[idx]` (or :meth:`get`) as a dictionary.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    file_paths : List[str]
        Sorted list of files matched by the file keys
    entry_index : List[int]
        Entries visited by the reader, in order
    """

    name = ""
    file_paths = None
    entry_index = None

    def __len__(self):
        return len(self.entry_index)

    def __getitem__(self, idx):
        return self.get(idx)

    def __iter__(self):
        for idx in range(len(self)):
            yield self.get(idx)

    def get(self, idx):
        """Returns the data of one entry, defined by each reader."""
        raise NotImplementedError

    def process_file_paths(self, file_keys, parent_path=None, max_print_files=10):
        """Expands the file keys into a list of existing files.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Glob pattern(s), or the path to a `.txt` file with one pattern
            per line
        parent_path : str, optional
            Directory against which relative paths are resolved (usually
            the directory of the configuration file)
        max_print_files : int, default 10
            Maximum number of file names to log
        """
        assert file_keys, "Must provide `file_keys` to locate the input files."
        if isinstance(file_keys, str):
            if file_keys.endswith(".txt"):
                file_list = _resolve(file_keys, parent_path)
                assert os.path.isfile(file_list), f"File list not found: {file_list}"
                with open(file_list, "r", encoding="utf-8") as f:
                    file_keys = [line.strip() for line in f if line.strip()]
            else:
                file_keys = [file_keys]

        self.file_paths = []
        for pattern in file_keys:
            pattern = _resolve(pattern, parent_path)
            matches = sorted(glob.glob(pattern))
            assert matches, f"No input file matches `{pattern}`."
            self.file_paths.extend(matches)

        shown = self.file_paths[:max_print_files]
        if len(self.file_paths) > max_print_files:
            shown.append("...")
        logger.info(
            "Will load %d file(s):\n - %s", len(self.file_paths), "\n - ".join(shown)
        )

    def process_entry_list(self, num_entries, n_entry=None, n_skip=None):
        """Selects the entries to visit.

        Parameters
        ----------
        num_entries : int
            Total number of entries available
        n_entry : int, optional
            Maximum number of entries to visit (-1 or None means all)
        n_skip : int, optional
            Number of entries to skip at the start
        """
        assert n_skip is None or n_skip >= 0, "`n_skip` must not be negative."
        start = n_skip or 0
        stop = num_entries
        if n_entry is not None and n_entry > -1:
            stop = min(num_entries, start + n_entry)

        self.entry_index = list(range(start, stop))


class NpzReader(ReaderBase):
    """Reads one event per NumPy `.npz` file.

    Each file holds up to three arrays, `hits_u`, `hits_v` and `hits_w`,
    of shape (N, 3): drift coordinate, wire coordinate and charge. A missing
    array is read as a view without any hit. Hit IDs are unique across the
    three views of an event.
    """

    name = "npz"

    # Name of the array which holds the hits of each view
    _keys = tuple((view, f"hits_{view.label}") for view in View)

    def __init__(self, file_keys, n_entry=None, n_skip=None, parent_path=None):
        """Initialize the reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Glob pattern(s) of the files to read
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        parent_path : str, optional
            Directory against which relative file keys are resolved
        """
        self.process_file_paths(file_keys, parent_path)
        self.process_entry_list(len(self.file_paths), n_entry, n_skip)

    def get(self, idx):
        """Loads the hits of one event.

        Parameters
        ----------
        idx : int
            Entry index

        Returns
        -------
        dict
            Event data: `index`, `file_path` and `hits` (Dict[View, HitList])
        """
        entry = self.entry_index[idx]
        file_path = self.file_paths[entry]
        hits, offset = {}, 0
        with np.load(file_path) as data:
            for view, key in self._keys:
                array = data[key] if key in data.files else np.empty((0, 3))
                hits[view] = HitList.from_array(view, array, offset=offset)
                offset += len(hits[view])

        return {"index": entry, "file_path": file_path, "hits": hits}


def _resolve(path, parent_path):
    """Joins a relative path onto a parent directory, if one is provided."""
    if parent_path is None or os.path.isabs(path):
        return path

    return os.path.join(parent_path, path)
