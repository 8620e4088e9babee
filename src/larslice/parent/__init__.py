"""Parent algorithm which sequences the slice-based reconstruction."""

from .parent import BindingState, NeutrinoParentAlgorithm, as_status, run_sequence
from .settings import ParentSettings
