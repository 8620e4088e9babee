"""Configuration loading functions.

Configurations are YAML files. A block can be read from another file
with the `!include` tag, resolved relative to the including file or
through the directories listed in `LARSLICE_CONFIG_PATH`:

.. code-block:: yaml

    parent: !include parent_algorithms.yaml

Individual values can be overridden after loading with dot-notation
strings, e.g. `parent.slicing=drift`.
"""

import io
import os
from typing import Any, Dict, List, Optional, TextIO

import yaml

from .errors import (
    ConfigCycleError,
    ConfigIncludeError,
    ConfigPathError,
    ConfigTypeError,
)

__all__ = ["load_config", "load_config_file", "apply_overrides", "resolve_config_path"]

# Environment variable which lists additional configuration directories
SEARCH_PATH_VAR = "LARSLICE_CONFIG_PATH"

# Extensions tried when a configuration is referred to without one
EXTENSIONS = (".yaml", ".yml")


def resolve_config_path(
    filename: str, current_dir: str, search_paths: Optional[List[str]] = None
) -> str:
    """Finds a configuration file on disk.

    An absolute path is only checked for existence. A relative path is
    looked up in `current_dir` first, then in each search directory in
    order. The YAML extension may be omitted.

    Parameters
    ----------
    filename : str
        Name or path of the configuration file
    current_dir : str
        Directory of the including file (or working directory)
    search_paths : List[str], optional
        Additional directories. Defaults to the `LARSLICE_CONFIG_PATH`
        environment variable (colon-separated).

    Returns
    -------
    str
        Absolute path to the configuration file

    Raises
    ------
    ConfigIncludeError
        If the file cannot be found
    """
    if os.path.isabs(filename):
        if not os.path.isfile(filename):
            raise ConfigIncludeError(f"Configuration not found: {filename}")
        return filename

    if search_paths is None:
        search_paths = os.environ.get(SEARCH_PATH_VAR, "").split(":")
    directories = [current_dir] + [p.strip() for p in search_paths if p.strip()]

    suffixes = [""]
    if not filename.endswith(EXTENSIONS):
        suffixes += list(EXTENSIONS)
    for directory in directories:
        for suffix in suffixes:
            candidate = os.path.join(directory, filename + suffix)
            if os.path.isfile(candidate):
                return os.path.abspath(candidate)

    raise ConfigIncludeError(
        f"Configuration '{filename}' not found in any of: {directories} "
        f"(set {SEARCH_PATH_VAR} to add directories)."
    )


class ConfigLoader(yaml.SafeLoader):
    """Safe YAML loader which understands the `!include` tag.

    Includes are resolved relative to the directory of the file being
    loaded, so nested includes follow the location of their parent file.
    The chain of files being included is tracked to detect cycles.
    """

    def __init__(
        self,
        stream: TextIO,
        root_dir: Optional[str] = None,
        include_stack: Optional[List[str]] = None,
    ) -> None:
        """Initialize the loader.

        Parameters
        ----------
        stream : TextIO
            File or string stream
        root_dir : str, optional
            Directory used to resolve includes. Defaults to the directory of
            the stream file, or to the current working directory.
        include_stack : List[str], optional
            Absolute paths of the files which led to this one being loaded
        """
        if root_dir is None:
            path = getattr(stream, "name", None)
            root_dir = os.path.dirname(path) if isinstance(path, str) else os.getcwd()
        self.root_dir = root_dir
        self.include_stack = list(include_stack or [])
        super().__init__(stream)

    def include(self, node: yaml.ScalarNode) -> Any:
        """Replaces an `!include` node with the content of the named file."""
        path = resolve_config_path(self.construct_scalar(node), self.root_dir)
        path = os.path.abspath(path)
        if path in self.include_stack:
            raise ConfigCycleError(self.include_stack + [path])

        with open(path, "r", encoding="utf-8") as stream:
            loader = ConfigLoader(stream, include_stack=self.include_stack + [path])
            try:
                return loader.get_single_data()
            finally:
                loader.dispose()


ConfigLoader.add_constructor("!include", ConfigLoader.include)


def load_config(
    config_str: str,
    root_dir: Optional[str] = None,
    include_stack: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Parses a configuration string.

    Parameters
    ----------
    config_str : str
        YAML configuration
    root_dir : str, optional
        Directory used to resolve `!include` tags
    include_stack : List[str], optional
        Files already being loaded, an include of one of them is a cycle

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary (empty for an empty string)

    Raises
    ------
    ConfigCycleError
        If a file ends up including itself
    ConfigTypeError
        If the top level of the configuration is not a mapping
    """
    loader = ConfigLoader(
        io.StringIO(config_str), root_dir=root_dir, include_stack=include_stack
    )
    try:
        cfg = loader.get_single_data()
    finally:
        loader.dispose()

    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigTypeError(
            f"A configuration must be a mapping, got {type(cfg).__name__}."
        )

    return cfg


def load_config_file(cfg_path: str) -> Dict[str, Any]:
    """Reads a configuration file, includes resolved relative to it."""
    if not os.path.isfile(cfg_path):
        raise ConfigPathError(f"Configuration not found: {cfg_path}")

    with open(cfg_path, "r", encoding="utf-8") as stream:
        content = stream.read()

    path = os.path.abspath(cfg_path)
    return load_config(
        content, root_dir=os.path.dirname(path), include_stack=[path]
    )


def parse_value(value: Any) -> Any:
    """Interprets an override value as YAML, e.g. `3`, `null` or `[a, b]`.

    Strings which are not valid YAML are returned unchanged.
    """
    if not isinstance(value, str) or not value.strip():
        return value

    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def set_nested_value(config: Dict[str, Any], key_path: str, value: Any) -> None:
    """Sets a value deep in a configuration, creating missing blocks.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary (modified in place)
    key_path : str
        Dot-separated path, e.g. `parent.slicing.max_gap`
    value : Any
        Value to set

    Raises
    ------
    ConfigTypeError
        If an intermediate key holds something other than a block
    """
    *blocks, leaf = key_path.split(".")
    node = config
    for key in blocks:
        node = node.setdefault(key, {})
        if not isinstance(node, dict):
            raise ConfigTypeError(
                f"Cannot set '{key_path}': '{key}' is not a configuration block."
            )

    node[leaf] = value


def apply_overrides(config: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    """Applies `key.path=value` overrides to a configuration.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary (modified in place)
    overrides : List[str]
        Overrides, applied in order

    Returns
    -------
    Dict[str, Any]
        Updated configuration dictionary

    Raises
    ------
    ConfigPathError
        If an override does not have the `key.path=value` form
    """
    for override in overrides:
        key_path, sep, value = override.partition("=")
        if not sep or not key_path.strip():
            raise ConfigPathError(
                f"Invalid override '{override}', expected the form key.path=value."
            )
        set_nested_value(config, key_path.strip(), parse_value(value.strip()))

    return config
