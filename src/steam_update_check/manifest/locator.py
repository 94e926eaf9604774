"""Locate the installed manifest of a Steam app.

Either an explicit steamapps directory is given, or the Steam client is
discovered through the platform's ``ClientLocator`` and its library index
is searched for the library holding the app.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from steam_update_check.errors import (
    AppNotInAnyLibraryError,
    InvalidDirectoryError,
    LibraryIndexMissingError,
    ManifestNotFoundError,
)
from steam_update_check.manifest.tree import ObjectNode, TreeParseError, load_tree
from steam_update_check.utils.platform import ClientLocator, get_client_locator

logger = logging.getLogger(__name__)

APPS_DIR_NAME = "steamapps"
LIBRARY_INDEX_FILE = "libraryfolders.vdf"


def manifest_filename(app_id: str) -> str:
    """Return the manifest file name for an app id."""
    return f"appmanifest_{app_id}.acf"


def resolve_apps_dir(apps_dir: Union[str, Path]) -> Path:
    """Normalize a user-supplied directory to the steamapps directory.

    Accepts either the steamapps directory itself or its parent.

    Raises:
        InvalidDirectoryError: If the directory or its steamapps child is missing.
    """
    path = Path(os.path.abspath(apps_dir))
    if not path.is_dir():
        raise InvalidDirectoryError(f"Specified AppsDir does not exist: {apps_dir}")

    if path.name.lower() != APPS_DIR_NAME:
        path = path / APPS_DIR_NAME
        if not path.is_dir():
            raise InvalidDirectoryError(
                f'Could not locate "{APPS_DIR_NAME}" folder in AppsDir: {apps_dir}'
            )
    return path


def find_library_path(index: ObjectNode, app_id: str) -> Optional[str]:
    """Return the root path of the first library that lists ``app_id``.

    Entries that are not objects or lack an ``apps`` object or ``path``
    value are skipped.
    """
    for name, entry in index:
        if not isinstance(entry, ObjectNode):
            continue
        apps = entry.get_object("apps")
        path = entry.get_scalar("path")
        if apps is None or path is None:
            logger.debug("Skipping library entry %s without apps or path", name)
            continue
        if app_id in apps.names():
            return path.value
    return None


def collapse_separators(path: str) -> str:
    """Collapse the doubled backslashes used for escaping in index paths."""
    return path.replace("\\\\", "\\")


def discover_manifest(app_id: str, client_locator: ClientLocator) -> Path:
    """Find an app's manifest through the Steam client's library index."""
    client_path = client_locator.find_client_path()

    index_path = client_path / APPS_DIR_NAME / LIBRARY_INDEX_FILE
    if not index_path.is_file():
        raise LibraryIndexMissingError(
            "Automatic manifest location detection failed to locate Steam library "
            f"directory information file ({LIBRARY_INDEX_FILE}).",
            details=str(index_path),
        )

    try:
        index = load_tree(index_path)
    except (OSError, TreeParseError) as e:
        raise LibraryIndexMissingError(
            "Automatic manifest location detection failed to read Steam library "
            f"directory information file ({LIBRARY_INDEX_FILE}).",
            details=str(e),
        ) from e
    if index is None:
        raise LibraryIndexMissingError(
            "Automatic manifest location detection failed to read Steam library "
            f"directory information file ({LIBRARY_INDEX_FILE}).",
            details="no library folders listed",
        )

    library_path = find_library_path(index, app_id)
    if library_path is None:
        raise AppNotInAnyLibraryError(
            f"Automatic manifest location detection failed to locate app {app_id} "
            "in any Steam library."
        )
    library_path = collapse_separators(library_path)
    logger.debug("App %s is installed in library %s", app_id, library_path)

    manifest_path = Path(library_path) / APPS_DIR_NAME / manifest_filename(app_id)
    if not manifest_path.is_file():
        raise ManifestNotFoundError(
            f"Automatic manifest location detection failed to locate the manifest "
            f"for app {app_id} in the detected location.",
            details=str(manifest_path),
        )
    return manifest_path


def locate_manifest(
    app_id: str,
    apps_dir: Optional[Union[str, Path]] = None,
    client_locator: Optional[ClientLocator] = None,
) -> Path:
    """Return the path of an installed app's manifest.

    Args:
        app_id: Steam app id.
        apps_dir: Optional steamapps directory (or its parent). When given,
            no platform discovery takes place.
        client_locator: Locator used for discovery. Picked from the host
            platform when omitted.

    Returns:
        Path to the existing ``appmanifest_<id>.acf`` file.

    Raises:
        LocateError: The specific subclass names the step that failed.
    """
    if apps_dir is not None:
        directory = resolve_apps_dir(apps_dir)
        manifest_path = directory / manifest_filename(app_id)
        if not manifest_path.is_file():
            raise ManifestNotFoundError(
                f"{manifest_filename(app_id)} not found at {directory}"
            )
        logger.debug("Using manifest %s", manifest_path)
        return manifest_path

    if client_locator is None:
        client_locator = get_client_locator()
    manifest_path = discover_manifest(app_id, client_locator)
    logger.debug("Discovered manifest %s", manifest_path)
    return manifest_path


__all__ = [
    "APPS_DIR_NAME",
    "LIBRARY_INDEX_FILE",
    "manifest_filename",
    "resolve_apps_dir",
    "find_library_path",
    "collapse_separators",
    "discover_manifest",
    "locate_manifest",
]
