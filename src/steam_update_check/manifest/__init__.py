"""Installed app manifests.

Modules:
    tree: KeyValues object/scalar tree loaded with ``vdf``
    locator: Finding the manifest of an installed app
    extractor: Reading the update time and branch out of a manifest
"""

from steam_update_check.manifest.extractor import (
    DEFAULT_BRANCH,
    AppManifest,
    extract_manifest,
    resolve_branch,
)
from steam_update_check.manifest.locator import locate_manifest, manifest_filename
from steam_update_check.manifest.tree import (
    ObjectNode,
    ScalarNode,
    TreeParseError,
    load_tree,
    parse_tree,
)

__all__ = [
    "DEFAULT_BRANCH",
    "AppManifest",
    "extract_manifest",
    "resolve_branch",
    "locate_manifest",
    "manifest_filename",
    "ObjectNode",
    "ScalarNode",
    "TreeParseError",
    "load_tree",
    "parse_tree",
]
