"""Top-level module of the LArSlice source code."""

# Import main workflow entry point
from .driver import Driver
from .version import __version__

# Import the orchestrator and its collection store
from .parent import NeutrinoParentAlgorithm
from .store import CollectionStore
