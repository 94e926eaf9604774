"""Configuration management for steam-app-update-check.

Provides functions for loading and validating the optional configuration
file. The file is only ever read; a check leaves no state behind.
"""

import json
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from steam_update_check.api.client import API_URL, DEFAULT_TIMEOUT

# File paths
CONFIG_ENV_VAR = "STEAM_UPDATE_CHECK_CONFIG"
CONFIG_FILE = Path.home() / ".config" / "steam-app-update-check" / "config.json"

# Default configuration values
DEFAULT_CONFIG = {
    "api_url": API_URL,
    "timeout": DEFAULT_TIMEOUT,
    "default_appsdir": None,
}

# Config schema for validation
# Format: key -> (expected_types, required, validator_func or None)
# validator_func takes value and returns (is_valid, error_message)
ValidatorFunc = Callable[[Union[str, int, float, bool, None]], Tuple[bool, str]]

CONFIG_SCHEMA: dict[str, tuple[tuple, bool, Optional[ValidatorFunc]]] = {
    "api_url": (
        (str,),
        False,
        lambda v: (True, "")
        if v.startswith("http") and "{app_id}" in v
        else (False, "must be an HTTP/HTTPS URL containing '{app_id}'"),
    ),
    "timeout": (
        (int, float),
        False,
        lambda v: (True, "") if 0 < v <= 300 else (False, "must be between 0 and 300"),
    ),
    "default_appsdir": (
        (str, type(None)),
        False,
        lambda v: (True, "")
        if v is None or len(v) > 0
        else (False, "must be a non-empty string or null"),
    ),
}


def get_config_path() -> Path:
    """Get the path of the configuration file.

    Returns:
        The path named by STEAM_UPDATE_CHECK_CONFIG, or CONFIG_FILE.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def validate_config(config: dict) -> List[str]:
    """Validate configuration against schema.

    Args:
        config: Configuration dictionary to validate.

    Returns:
        List of validation error messages. Empty list if valid.
    """
    errors = []

    # Check for unknown keys
    for key in config:
        if key not in CONFIG_SCHEMA:
            errors.append(f"Unknown config key: '{key}'")

    for key, (expected_types, required, validator) in CONFIG_SCHEMA.items():
        if required and key not in config:
            errors.append(f"Missing required key: '{key}'")
            continue

        if key not in config:
            continue

        value = config[key]

        # bool is an int subclass, reject it for numeric fields
        if not isinstance(value, expected_types) or (
            isinstance(value, bool) and bool not in expected_types
        ):
            type_names = " or ".join(t.__name__ for t in expected_types)
            errors.append(
                f"'{key}' has invalid type: expected {type_names}, got {type(value).__name__}"
            )
            continue

        if validator and value is not None:
            is_valid, error_msg = validator(value)
            if not is_valid:
                errors.append(f"'{key}' {error_msg}")

    return errors


def load_config(
    config_file: Optional[Path] = None,
    silent: bool = False,
) -> dict:
    """Load configuration from file.

    Invalid values are reported and replaced by their defaults.

    Args:
        config_file: Optional path to config file. Defaults to get_config_path().
        silent: If True, suppress warning output. Default False.

    Returns:
        Configuration dictionary merged with defaults.
    """
    if config_file is None:
        config_file = get_config_path()

    if not config_file.exists():
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, encoding="utf-8") as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        if not silent:
            print(f"Warning: Could not read config file {config_file}: {e}", file=sys.stderr)
        return DEFAULT_CONFIG.copy()

    if not isinstance(config, dict):
        if not silent:
            print(f"Warning: Config file {config_file} is not a JSON object", file=sys.stderr)
        return DEFAULT_CONFIG.copy()

    errors = validate_config(config)
    if errors:
        if not silent:
            print("Warning: Config validation errors:", file=sys.stderr)
            for error in errors:
                print(f"  - {error}", file=sys.stderr)
        valid = {
            key: value
            for key, value in config.items()
            if key in CONFIG_SCHEMA and not validate_config({key: value})
        }
    else:
        valid = config

    # Merge with defaults for any missing keys
    return {**DEFAULT_CONFIG, **valid}


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "CONFIG_SCHEMA",
    "get_config_path",
    "validate_config",
    "load_config",
]
