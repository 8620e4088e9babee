"""Event loop of the reconstruction.

The driver binds the parent reconstruction once, then feeds it the hits of
every event provided by the reader, each in a fresh collection store.
"""

import time

import yaml

from .config.errors import ConfigMissingError, ConfigTypeError
from .data import HitList
from .io import reader_factory
from .parent import NeutrinoParentAlgorithm
from .store import CollectionStore
from .utils.enums import CollectionKind, StatusCode, View
from .utils.logger import logger
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central LArSlice driver.

    Processes global configuration and runs the parent reconstruction on
    every event provided by the reader. It takes a configuration dictionary
    of the form:

    .. code-block:: yaml

        base:
          <Base driver configuration>
        io:
          <Input configuration>
        parent:
          <Parent reconstruction configuration>
    """

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary

        Raises
        ------
        ConfigError
            If a block is missing or the parent reconstruction configuration
            cannot be bound
        """
        # Check the top-level blocks
        if "parent" not in cfg:
            raise ConfigMissingError("Missing required block `parent`.")
        unknown = set(cfg) - {"base", "io", "parent"}
        if unknown:
            raise ConfigTypeError(f"Unknown configuration blocks: {sorted(unknown)}")

        # Process the full configuration dictionary and store it
        base, io, parent = self.process_config(**cfg)

        # Initialize the base driver configuration parameters
        self.initialize_base(**base)

        # Initialize the input
        self.reader = None
        if io is not None and "reader" in io:
            self.reader = reader_factory(io["reader"], parent_path=self.parent_path)

        # Initialize the parent reconstruction
        self.parent = NeutrinoParentAlgorithm.from_config(parent)

    def process_config(self, parent, io=None, base=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        parent : dict
            Parent reconstruction configuration dictionary
        io : dict, optional
            Input configuration dictionary
        base : dict, optional
            Base driver configuration dictionary

        Returns
        -------
        dict
            Processed configuration
        """
        # If there is no base configuration, make it empty (will use defaults)
        if base is None:
            base = {}

        # Set the verbosity of the logger
        verbosity = base.get("verbosity", "info")
        logger.setLevel(verbosity.upper())

        # Rebuild global configuration dictionary
        self.cfg = {"base": base, "parent": parent}
        if io is not None:
            self.cfg["io"] = io

        # Log environment information and configuration
        logger.info("Release version: %s\n", __version__)
        logger.info(yaml.dump(self.cfg, default_flow_style=None, sort_keys=False))

        return base, io, parent

    def initialize_base(self, verbosity="info", iterations=None, parent_path=None):
        """Initialize the base driver parameters.

        Parameters
        ----------
        verbosity : str, default 'info'
            Verbosity level to pass to the `logging` module. Pick one of
            'debug', 'info', 'warning', 'error', 'critical'.
        iterations : int, optional
            Number of entries to process (-1 or None means all entries)
        parent_path : str, optional
            Path to the parent directory of the configuration file
        """
        self.verbosity = verbosity
        self.iterations = iterations
        self.parent_path = parent_path

    def __len__(self):
        """Returns the number of events to process."""
        if self.reader is None:
            return 0

        num_events = len(self.reader)
        if self.iterations is not None and self.iterations > -1:
            num_events = min(num_events, self.iterations)

        return num_events

    def process(self, hits):
        """Runs the parent reconstruction on the hits of one event.

        Parameters
        ----------
        hits : Dict[View, HitList]
            Hits of each view. Missing views are considered empty.

        Returns
        -------
        StatusCode
            Outcome of the reconstruction
        CollectionStore
            Collection store at the end of the reconstruction
        """
        # Build a fresh store with the input hits under the bound names
        store = CollectionStore()
        settings = self.parent.settings
        for view in View:
            view_hits = hits.get(view, HitList(view=view))
            status = store.save(CollectionKind.HIT, settings.hit_keys[view], view_hits)
            if status is not StatusCode.SUCCESS:
                return status, store

        return self.parent.run(store), store

    def run(self):
        """Loops over the events provided by the reader.

        Processing stops at the first event which fails.

        Returns
        -------
        StatusCode
            `SUCCESS` or the failure of the first failed event
        """
        assert self.reader is not None, "Must provide a reader to loop over events."

        num_events = len(self)
        for idx in range(num_events):
            data = self.reader.get(idx)

            start = time.time()
            status, store = self.process(data["hits"])
            duration = time.time() - start

            if status is not StatusCode.SUCCESS:
                logger.error(
                    "Event %d (%s) failed with status %s.",
                    data["index"],
                    data["file_path"],
                    status.name,
                )
                return status

            logger.info(
                "Event %d: %d slice(s) reconstructed in %0.3f s",
                data["index"],
                self.parent.num_slices,
                duration,
            )
            logger.debug("Output collections: %s", store.summary())

        logger.info("Processed %d event(s).", num_events)

        return StatusCode.SUCCESS
