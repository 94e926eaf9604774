"""Platform detection and Steam client discovery.

Finding the Steam client is the only platform-specific part of an update
check. It sits behind the ``ClientLocator`` interface, picked once from
the host platform, so the manifest locator itself stays platform-agnostic.
"""

from __future__ import annotations

import logging
import platform
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from steam_update_check.errors import ClientNotFoundError, UnsupportedPlatformError

logger = logging.getLogger(__name__)

# Registry location written by the Steam installer
STEAM_REGISTRY_KEY = r"SOFTWARE\Valve\Steam"
STEAM_REGISTRY_VALUE = "InstallPath"


class ClientLocator(ABC):
    """Finds the install directory of the Steam client."""

    @abstractmethod
    def find_client_path(self) -> Path:
        """Return the Steam client install directory.

        Raises:
            UnsupportedPlatformError: If discovery is not available here.
            ClientNotFoundError: If the client could not be found.
        """


class UnsupportedLocator(ClientLocator):
    """Locator for platforms without automatic discovery."""

    def __init__(self, system: str = ""):
        self.system = system

    def find_client_path(self) -> Path:
        raise UnsupportedPlatformError(
            "Automatic manifest location detection is only available in Windows.",
            details=f"Detected platform: {self.system}" if self.system else None,
        )


class WindowsRegistryLocator(ClientLocator):
    """Reads the Steam install path from the Windows registry.

    Steam is a 32-bit installer, so its key lives in the 32-bit registry view.
    """

    def __init__(self, key: str = STEAM_REGISTRY_KEY, value: str = STEAM_REGISTRY_VALUE):
        self.key = key
        self.value = value

    def find_client_path(self) -> Path:
        try:
            import winreg
        except ImportError as e:
            raise ClientNotFoundError(
                "Automatic manifest location detection failed to access the system registry."
            ) from e

        try:
            base_key = winreg.ConnectRegistry(None, winreg.HKEY_LOCAL_MACHINE)
        except OSError as e:
            raise ClientNotFoundError(
                "Automatic manifest location detection failed to access the system registry.",
                details=str(e),
            ) from e

        with base_key:
            try:
                steam_key = winreg.OpenKey(
                    base_key,
                    self.key,
                    0,
                    winreg.KEY_READ | winreg.KEY_WOW64_32KEY,
                )
            except OSError as e:
                raise ClientNotFoundError(
                    "Automatic manifest location detection failed to locate Steam "
                    "in the system registry.",
                    details=str(e),
                ) from e

            with steam_key:
                try:
                    install_path, _ = winreg.QueryValueEx(steam_key, self.value)
                except OSError as e:
                    raise ClientNotFoundError(
                        "Automatic manifest location detection failed to locate Steam "
                        "install location in the system registry.",
                        details=str(e),
                    ) from e

        if not isinstance(install_path, str) or not install_path:
            raise ClientNotFoundError(
                "Automatic manifest location detection failed to locate Steam "
                "install location in the system registry."
            )

        logger.debug("Steam install path from registry: %s", install_path)
        return Path(install_path)


def get_client_locator(system: Optional[str] = None) -> ClientLocator:
    """Pick the client locator for the host platform.

    Args:
        system: Platform name as returned by ``platform.system()``.
            Detected when omitted.

    Returns:
        A WindowsRegistryLocator on Windows, an UnsupportedLocator elsewhere.
    """
    if system is None:
        system = platform.system()
    if system == "Windows":
        return WindowsRegistryLocator()
    return UnsupportedLocator(system)


__all__ = [
    "STEAM_REGISTRY_KEY",
    "STEAM_REGISTRY_VALUE",
    "ClientLocator",
    "UnsupportedLocator",
    "WindowsRegistryLocator",
    "get_client_locator",
]
