"""Configuration management.

Modules:
    settings: Config loading and validation
"""

from steam_update_check.config.settings import (
    CONFIG_ENV_VAR,
    CONFIG_FILE,
    CONFIG_SCHEMA,
    DEFAULT_CONFIG,
    get_config_path,
    load_config,
    validate_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE",
    "CONFIG_SCHEMA",
    "DEFAULT_CONFIG",
    "get_config_path",
    "load_config",
    "validate_config",
]
