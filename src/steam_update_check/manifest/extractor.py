"""Extract update information from a parsed app manifest."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from steam_update_check.errors import (
    MalformedFieldError,
    MissingFieldError,
    UnrecognizedFormatError,
)
from steam_update_check.manifest.tree import Node, ObjectNode

DEFAULT_BRANCH = "public"

LAST_UPDATED_KEY = "LastUpdated"
USER_CONFIG_KEY = "UserConfig"
BETA_KEY = "BetaKey"

_UNSIGNED_INT_RE = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class AppManifest:
    """Fields of an installed app manifest relevant to update checks."""

    last_updated: int
    user_branch_key: Optional[str] = None


def resolve_branch(branch_override: Optional[str], user_branch_key: Optional[str]) -> str:
    """Pick the branch to check.

    A non-empty override wins, then the branch selected in the Steam
    client, then the default public branch.
    """
    if branch_override:
        return branch_override
    if user_branch_key:
        return user_branch_key
    return DEFAULT_BRANCH


def parse_last_updated(value: str) -> int:
    """Parse a LastUpdated value as a non-negative base-10 integer.

    Raises:
        MalformedFieldError: If the value is not an unsigned integer.
    """
    text = value.strip()
    if not _UNSIGNED_INT_RE.match(text):
        raise MalformedFieldError(
            f"{LAST_UPDATED_KEY} property value could not be parsed.",
            details=f"{LAST_UPDATED_KEY}={value!r}",
        )
    return int(text)


def extract_manifest(tree: Optional[Node], branch_override: Optional[str] = None) -> AppManifest:
    """Read the last update time and selected branch from a manifest tree.

    The manifest's own branch key is only read when no override is given.

    Raises:
        UnrecognizedFormatError: If ``tree`` is not an object node.
        MissingFieldError: If LastUpdated is absent.
        MalformedFieldError: If LastUpdated is not an unsigned integer.
    """
    if not isinstance(tree, ObjectNode):
        raise UnrecognizedFormatError("manifest format is not recognized.")

    last_updated_node = tree.get_scalar(LAST_UPDATED_KEY)
    if last_updated_node is None:
        raise MissingFieldError(f"manifest is missing {LAST_UPDATED_KEY} property.")
    last_updated = parse_last_updated(last_updated_node.value)

    user_branch_key = None
    if not branch_override:
        user_config = tree.get_object(USER_CONFIG_KEY)
        if user_config is not None:
            beta_key = user_config.get_scalar(BETA_KEY)
            if beta_key is not None and beta_key.value:
                user_branch_key = beta_key.value

    return AppManifest(last_updated=last_updated, user_branch_key=user_branch_key)


__all__ = [
    "DEFAULT_BRANCH",
    "AppManifest",
    "resolve_branch",
    "parse_last_updated",
    "extract_manifest",
]
