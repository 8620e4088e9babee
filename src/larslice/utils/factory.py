"""Name-based registries used to build algorithms, tools and readers.

A registry is a plain dictionary which maps every acceptable name of a class
(class name, `name` attribute and `aliases`) onto the class itself. Objects
are then built from the identifier found in the configuration: a bare name,
or a block holding the name and the constructor arguments.
"""

from copy import deepcopy

from .logger import logger


def module_dict(module, base=None):
    """Builds the registry of the classes defined in a module.

    Only the public classes listed in the module `__all__` (or, if it is not
    defined, in its namespace) which are defined within the module itself
    are registered.

    Parameters
    ----------
    module : module
        Module which defines the classes
    base : type, optional
        If specified, only register subclasses of this type

    Returns
    -------
    dict
        Registry which maps each acceptable name onto its class
    """
    registry = {}
    for attr in getattr(module, "__all__", dir(module)):
        if attr.startswith("_"):
            continue

        # Classes imported from elsewhere belong to another registry
        cls = getattr(module, attr)
        if not isinstance(cls, type) or module.__name__ not in cls.__module__:
            continue
        if base is not None and not issubclass(cls, base):
            continue

        for name in _names(cls):
            registry[name] = cls

    return registry


def register(registry, cls):
    """Adds a class to a registry under all of its names.

    Parameters
    ----------
    registry : dict
        Registry which maps names onto classes
    cls : type
        Class to register under its class name, `name` and `aliases`

    Returns
    -------
    type
        The class itself, so that this can be used as a decorator

    Raises
    ------
    ValueError
        If one of the names already refers to another class
    """
    names = _names(cls)
    for name in names:
        if registry.get(name, cls) is not cls:
            raise ValueError(
                f"Cannot register {cls.__name__} as '{name}', the name is "
                f"already taken by {registry[name].__name__}."
            )

    for name in names:
        registry[name] = cls

    return cls


def instantiate(registry, cfg, **kwargs):
    """Builds an object from its configuration identifier.

    Two forms of identifier are supported. A plain name builds the class
    with its default parameters:

    .. code-block:: yaml

        slicing: drift

    A block provides the name and the constructor arguments, either at the
    top level of the block or under `kwargs` (not both for one argument):

    .. code-block:: yaml

        slicing:
          name: drift
          max_gap: 5.0

    Parameters
    ----------
    registry : dict
        Registry which maps names onto classes
    cfg : Union[str, dict]
        Name or configuration block of the object
    **kwargs : dict, optional
        Additional arguments passed to the constructor

    Returns
    -------
    object
        Instantiated object

    Raises
    ------
    TypeError
        If the identifier is neither a name nor a block
    KeyError
        If the block does not provide a name
    ValueError
        If the name is not registered or an argument is ambiguous
    """
    if isinstance(cfg, str):
        cfg = {"name": cfg}
    if not isinstance(cfg, dict):
        raise TypeError(
            "An object must be identified by a name or a configuration block, "
            f"got {type(cfg).__name__} instead."
        )
    if "name" not in cfg:
        raise KeyError(f"The configuration block {cfg} does not provide a `name`.")

    # Look up the class
    block = deepcopy(cfg)
    name = block.pop("name")
    if name not in registry:
        raise ValueError(
            f"Unknown name '{name}'. Registered names: {sorted(registry)}"
        )
    cls = registry[name]

    # Gather the constructor arguments
    args = dict(block.pop("kwargs", None) or {}, **kwargs)
    ambiguous = set(block) & set(args)
    if ambiguous:
        raise ValueError(
            f"The arguments {sorted(ambiguous)} of '{name}' are provided both "
            "at the top level and under `kwargs`. Ambiguous."
        )
    args.update(block)

    try:
        return cls(**args)

    except Exception:
        logger.error("Failed to build %s with arguments: %s", cls.__name__, args)
        raise


def _names(cls):
    """Returns every name under which a class can be requested."""
    names = [cls.__name__]
    if getattr(cls, "name", None):
        names.append(cls.name)
    names.extend(getattr(cls, "aliases", ()))

    return names
