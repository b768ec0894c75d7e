"""Dictionary operations used to assemble a configuration.

A configuration file may contain the following directives at its top level:
  - `include`: path or list of paths to other configuration files, merged
    in order before the content of the file itself
  - `override`: dictionary of dot-separated key paths and their new values
    (e.g. `geo.half_width: 128.175`), applied after the merge
  - `remove`: dot-separated key path or list of paths to delete
"""

from copy import deepcopy
from typing import Any, Dict, List, Tuple

import yaml

from .errors import ConfigOperationError, ConfigPathError

__all__ = [
    "deep_merge",
    "parse_value",
    "set_nested_value",
    "extract_directives",
]


def deep_merge(
    base_dict: Dict[str, Any], override_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Recursively merge override_dict into base_dict.

    Parameters
    ----------
    base_dict : Dict[str, Any]
        Base dictionary
    override_dict : Dict[str, Any]
        Override dictionary

    Returns
    -------
    Dict[str, Any]
        Merged dictionary (new copy)
    """
    result = deepcopy(base_dict)

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def parse_value(value: Any) -> Any:
    """Parse a string value into the appropriate Python type.

    Values provided on the command line are strings. They are interpreted
    as YAML scalars, lists or dictionaries.

    Parameters
    ----------
    value : Any
        Value to parse

    Returns
    -------
    Any
        Parsed value (non-string values are returned as is)
    """
    if not isinstance(value, str):
        return value

    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def set_nested_value(
    config: Dict[str, Any], key_path: str, value: Any = None, delete: bool = False
) -> Dict[str, Any]:
    """Set or delete a nested value using dot notation.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration dictionary, modified in place
    key_path : str
        Dot-separated path (e.g., "io.reader.file_keys")
    value : Any, optional
        Value to set (ignored if delete=True)
    delete : bool, default False
        If True, delete the key

    Returns
    -------
    Dict[str, Any]
        Modified configuration

    Raises
    ------
    ConfigPathError
        If the key to delete does not exist or if the path traverses a
        non-dictionary value
    """
    keys = key_path.split(".")
    current = config

    # Navigate to parent
    for i, key in enumerate(keys[:-1]):
        if key not in current:
            if delete:
                partial_path = ".".join(keys[: i + 1])
                raise ConfigPathError(
                    f"Cannot delete '{key_path}': path '{partial_path}' does not exist"
                )
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ConfigPathError(
                f"Cannot set '{key_path}': '{key}' is not a dictionary"
            )
        current = current[key]

    # Set or delete final value
    final_key = keys[-1]
    if delete:
        if final_key not in current:
            raise ConfigPathError(f"Cannot delete '{key_path}': key does not exist")
        del current[final_key]
    else:
        current[final_key] = value

    return config


def extract_directives(
    config_dict: Any,
) -> Tuple[List[str], Dict[str, Any], List[str], Dict[str, Any]]:
    """Extract include/override/remove directives from config dict.

    Parameters
    ----------
    config_dict : Any
        Loaded YAML configuration

    Returns
    -------
    Tuple[List[str], Dict[str, Any], List[str], Dict[str, Any]]
        (includes, overrides, removals, cleaned_config)

    Raises
    ------
    ConfigOperationError
        If directive has invalid type
    """
    if not isinstance(config_dict, dict):
        raise ConfigOperationError(
            f"A configuration must be a dictionary, got {type(config_dict)}"
        )

    includes, overrides, removals, cleaned_config = [], {}, [], {}
    for key, value in config_dict.items():
        if key == "include":
            if isinstance(value, str):
                includes.append(value)
            elif isinstance(value, list):
                includes.extend(value)
            else:
                raise ConfigOperationError(
                    f"'include' must be a string or list of strings, got {type(value)}"
                )
        elif key == "override":
            if not isinstance(value, dict):
                raise ConfigOperationError(
                    f"'override' must be a dictionary, got {type(value)}"
                )
            overrides = value
        elif key == "remove":
            if isinstance(value, str):
                removals.append(value)
            elif isinstance(value, list):
                removals.extend(value)
            else:
                raise ConfigOperationError(
                    f"'remove' must be a string or list of strings, got {type(value)}"
                )
        else:
            cleaned_config[key] = value

    return includes, overrides, removals, cleaned_config
