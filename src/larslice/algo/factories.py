"""Construct algorithms and algorithm tools from their names."""

from larslice.utils.factory import instantiate, module_dict, register

from . import cluster, lists, slicing

__all__ = [
    "algorithm_factory",
    "tool_factory",
    "register_algorithm",
    "register_tool",
]

# Build a dictionary of available algorithms (clustering algorithms included)
ALGORITHM_DICT = {}
for module in [cluster, lists]:
    ALGORITHM_DICT.update(**module_dict(module))

# Build a dictionary of available algorithm tools
TOOL_DICT = {}
for module in [slicing]:
    TOOL_DICT.update(**module_dict(module))


def algorithm_factory(cfg):
    """Instantiates an algorithm from a configuration block.

    Parameters
    ----------
    cfg : Union[str, dict]
        Algorithm name or algorithm configuration dictionary

    Returns
    -------
    object
         Initialized algorithm object
    """
    return instantiate(ALGORITHM_DICT, cfg)


def tool_factory(cfg):
    """Instantiates an algorithm tool from a configuration block.

    Parameters
    ----------
    cfg : Union[str, dict]
        Tool name or tool configuration dictionary

    Returns
    -------
    object
         Initialized tool object
    """
    return instantiate(TOOL_DICT, cfg)


def register_algorithm(cls):
    """Makes an algorithm class available to the configuration by name."""
    return register(ALGORITHM_DICT, cls)


def register_tool(cls):
    """Makes an algorithm tool class available to the configuration by name."""
    return register(TOOL_DICT, cls)
