"""Functions needed to instantiate a class from a configuration dictionary.

This allows to generically convert a YAML block into an instantiated reader,
writer or post-processor with all the appropriate checks that the class
exists and is provided with appropriate arguments.
"""

from copy import deepcopy
from warnings import warn

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module, class_name=None):
    """Converts a module into a dictionary which maps class names onto classes.

    Each class is registered under its Python name, under its `name`
    attribute (if it has a non-empty one) and under each of its `aliases`.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes
    class_name : str, optional
        If specified and it matches a deprecated alias, warn about it

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    classes = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name.startswith("_"):
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not hasattr(cls, "__module__") or module.__name__ not in cls.__module__:
            continue

        classes[cls_name] = cls
        if getattr(cls, "name", None):
            classes[cls.name] = cls

        for alias in getattr(cls, "aliases", ()):
            if class_name is not None and class_name == alias:
                warn(
                    f"This name ({alias}) is deprecated. Use {cls.name} instead.",
                    DeprecationWarning,
                )
            classes[alias] = cls

    return classes


def instantiate(class_dict, cfg, alt_name=None, **kwargs):
    """Instantiates a class based on a configuration dictionary and a
    dictionary of possible classes to chose from.

    Supports configuration blocks of the form:

    .. code-block:: yaml

        reader:
          name: csv
          file_keys: data/*
          n_entry: 10

    or, equivalently, with the keyword arguments nested under `kwargs`.

    Parameters
    ----------
    class_dict : dict
        Dictionary which maps a class name onto an object class
    cfg : Union[str, dict]
        Configuration dictionary (or simply a class name)
    alt_name : str, optional
        Key under which the class name can be specified, beside `name`
    **kwargs : dict, optional
        Additional parameters to pass to the class constructor

    Returns
    -------
    object
        Instantiated object
    """
    # A bare string is the name of a class with no parameters
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    if alt_name is not None:
        assert (alt_name in config) ^ (
            "name" in config
        ), f"Should specify one of `name` or `{alt_name}`"
        name = alt_name if alt_name in config else "name"
    else:
        assert "name" in config, "Could not find the name of the class under `name`"
        name = "name"

    class_name = config.pop(name)
    if class_name not in class_dict:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps names "
            f"to classes. Available names: {list(class_dict.keys())}"
        )

    # Gather the arguments and keyword arguments to pass to the class
    args = config.pop("args", [])
    kwargs = dict(config.pop("kwargs", {}), **kwargs)
    for key in config:
        assert key not in kwargs, (
            f"The keyword argument {key} is provided at the top level "
            "and under `kwargs`. Ambiguous."
        )
    kwargs.update(config)

    # Intialize
    cls = class_dict[class_name]
    try:
        return cls(*args, **kwargs)

    except Exception as err:
        logger.error(
            f"Failed to instantiate {cls.__name__} with these arguments:\n"
            f"  - args: {args}\n  - kwargs: {kwargs}"
        )

        raise err
