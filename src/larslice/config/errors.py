"""Typed exceptions for configuration loading and settings binding.

Each exception carries the :class:`StatusCode` reported to the caller when
the configuration of the reconstruction is aborted.
"""

from larslice.utils.enums import StatusCode


class ConfigError(Exception):
    """Base exception for all configuration errors."""

    status = StatusCode.INVALID_PARAMETER


class ConfigIncludeError(ConfigError):
    """Raised when an included file cannot be found or loaded."""

    status = StatusCode.NOT_FOUND


class ConfigPathError(ConfigError):
    """Raised when a configuration path cannot be resolved or does not exist."""


class ConfigTypeError(ConfigError):
    """Raised when a setting or an operation has the wrong type."""


class ConfigMissingError(ConfigError):
    """Raised when a required setting is absent."""

    status = StatusCode.NOT_FOUND


class ConfigResolutionError(ConfigError):
    """Raised when an algorithm identifier cannot be instantiated."""


class ConfigCapabilityError(ConfigError):
    """Raised when an identifier resolves to an object of the wrong kind."""


class ConfigCycleError(ConfigIncludeError):
    """Raised when a circular include dependency is detected."""

    def __init__(self, cycle_path):
        """Initialize with the cycle path.

        Parameters
        ----------
        cycle_path : List[str]
            List of file paths showing the include cycle
        """
        self.cycle_path = cycle_path
        cycle_str = " -> ".join(cycle_path)
        super().__init__(f"Circular include detected: {cycle_str}")
