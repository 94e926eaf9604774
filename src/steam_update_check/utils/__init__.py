"""Utility functions.

Modules:
    platform: Platform detection and Steam client discovery
"""

from steam_update_check.utils.platform import (
    ClientLocator,
    UnsupportedLocator,
    WindowsRegistryLocator,
    get_client_locator,
)

__all__ = [
    "ClientLocator",
    "UnsupportedLocator",
    "WindowsRegistryLocator",
    "get_client_locator",
]
