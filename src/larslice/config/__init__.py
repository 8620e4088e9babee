"""Configuration loading system.

Provides:
- YAML loading with inline `!include` of other files
- Dot-notation overrides (`parent.slicing=drift`)
- Typed configuration errors

Main Entry Points
-----------------
load_config_file : Load a configuration file
load_config : Load a configuration string
"""

from .errors import (
    ConfigCapabilityError,
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigMissingError,
    ConfigPathError,
    ConfigResolutionError,
    ConfigTypeError,
)
from .load import apply_overrides, load_config, load_config_file, resolve_config_path

__all__ = [
    "load_config",
    "load_config_file",
    "apply_overrides",
    "resolve_config_path",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
    "ConfigMissingError",
    "ConfigResolutionError",
    "ConfigCapabilityError",
]
