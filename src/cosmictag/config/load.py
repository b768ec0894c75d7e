"""Main configuration loading functions.

This module provides the entry points to load configurations:
- load_config(): Load from a YAML string
- load_config_file(): Load from a file path
- resolve_config_path(): Find an included file
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigCycleError, ConfigIncludeError
from .operations import deep_merge, extract_directives, parse_value, set_nested_value

__all__ = ["load_config", "load_config_file", "resolve_config_path"]

# Environment variable which lists additional directories to search includes in
CONFIG_PATH_VAR = "COSMICTAG_CONFIG_PATH"


def resolve_config_path(filename: str, current_dir: str) -> str:
    """Resolve a configuration file path.

    Resolution order:
    1. If absolute path, return as-is
    2. Try relative to current_dir, with and without a .yaml/.yml extension
    3. Search through the COSMICTAG_CONFIG_PATH directories

    Parameters
    ----------
    filename : str
        Config filename or path to resolve
    current_dir : str
        Directory of the config file doing the including

    Returns
    -------
    str
        Resolved absolute path

    Raises
    ------
    ConfigIncludeError
        If file cannot be found in any location
    """
    # If absolute path, check if it exists
    if os.path.isabs(filename):
        if os.path.isfile(filename):
            return filename
        raise ConfigIncludeError(f"Absolute path not found: {filename}")

    # Try relative to the current directory, then to the search paths
    env_paths = os.environ.get(CONFIG_PATH_VAR, "")
    search_dirs = [current_dir] + [p.strip() for p in env_paths.split(":") if p.strip()]
    for search_dir in search_dirs:
        path = os.path.join(search_dir, filename)
        for candidate in (path, path + ".yaml", path + ".yml"):
            if os.path.isfile(candidate):
                return os.path.abspath(candidate)

    raise ConfigIncludeError(
        f"Could not find included file '{filename}' in {search_dirs}"
    )


def _load_config_recursive(
    config_str: str,
    root_dir: str,
    identifier: str = "<string>",
    include_stack: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Recursively load config with cycle detection.

    Parameters
    ----------
    config_str : str
        YAML configuration string
    root_dir : str
        Root directory for resolving relative include paths
    identifier : str, default '<string>'
        Path of the file the configuration was read from
    include_stack : List[str], optional
        Stack of currently-loading files (for cycle detection)

    Returns
    -------
    Dict[str, Any]
        Configuration with its includes, overrides and removals applied
    """
    # Cycle detection
    include_stack = list(include_stack or [])
    if identifier in include_stack:
        raise ConfigCycleError(include_stack + [identifier])
    include_stack.append(identifier)

    # Load YAML
    try:
        main_config = yaml.safe_load(config_str)
    except yaml.YAMLError as exc:
        raise ConfigIncludeError(f"Error loading {identifier}: {exc}") from exc

    if main_config is None:
        return {}

    # Extract directives
    includes, overrides, removals, cleaned_config = extract_directives(main_config)

    # Process includes, in order
    config = {}
    for include_file in includes:
        include_path = resolve_config_path(include_file, root_dir)
        with open(include_path, "r", encoding="utf-8") as f:
            included_config = _load_config_recursive(
                f.read(),
                os.path.dirname(include_path),
                include_path,
                include_stack,
            )

        config = deep_merge(config, included_config)

    # Merge main config content
    config = deep_merge(config, cleaned_config)

    # Apply overrides and removals
    for key_path, value in overrides.items():
        config = set_nested_value(config, key_path, parse_value(value))
    for key_path in removals:
        config = set_nested_value(config, key_path, delete=True)

    return config


def load_config(config_str: str, root_dir: Optional[str] = None) -> Dict[str, Any]:
    """Load a configuration from a YAML string.

    Similar to yaml.safe_load(), with support for `include`, `override`
    and `remove` directives.

    Parameters
    ----------
    config_str : str
        YAML configuration string
    root_dir : str, optional
        Root directory for resolving relative include paths. If not provided,
        defaults to current working directory.

    Returns
    -------
    Dict[str, Any]
        Loaded and merged configuration

    Raises
    ------
    ConfigCycleError
        If circular include detected
    ConfigIncludeError
        If included file not found or can't be loaded
    ConfigPathError
        If a removal targets a non-existent path

    Examples
    --------
    >>> config = load_config("geo:\\n  half_width: 128.175")
    >>> config["geo"]["half_width"]
    128.175
    """
    if root_dir is None:
        root_dir = os.getcwd()

    return _load_config_recursive(config_str, root_dir)


def load_config_file(cfg_path: str) -> Dict[str, Any]:
    """Load a configuration from a file.

    The file's directory is used as the root directory for include
    resolution.

    Parameters
    ----------
    cfg_path : str
        Path to configuration file

    Returns
    -------
    Dict[str, Any]
        Loaded and merged configuration

    Raises
    ------
    ConfigIncludeError
        If the file or one of its includes cannot be found or loaded
    """
    cfg_path = os.path.abspath(cfg_path)
    if not os.path.isfile(cfg_path):
        raise ConfigIncludeError(f"Configuration file not found: {cfg_path}")

    with open(cfg_path, "r", encoding="utf-8") as f:
        config_str = f.read()

    return _load_config_recursive(config_str, os.path.dirname(cfg_path), cfg_path)
