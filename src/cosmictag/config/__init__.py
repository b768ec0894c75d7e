"""Configuration loading with support for includes and overrides.

Basic usage:

.. code-block:: python

    from cosmictag.config import load_config_file

    cfg = load_config_file("config/microboone.yaml")
"""

from .errors import (
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigOperationError,
    ConfigPathError,
)
from .load import load_config, load_config_file

__all__ = [
    "load_config",
    "load_config_file",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigOperationError",
]
