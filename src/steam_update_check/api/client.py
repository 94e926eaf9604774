"""Client for the public Steam app info service.

Fetches the published build time of an app branch from the steamcmd.net
info API, which mirrors Steam's PICS product info as JSON.
"""

from __future__ import annotations

import http.client
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from steam_update_check._version import __version__
from steam_update_check.errors import (
    FieldNotFoundError,
    InvalidResponseError,
    RemoteFieldMalformedError,
    ServiceError,
    TransportError,
)

logger = logging.getLogger(__name__)

# API endpoint, templated with the app id
API_URL = "https://api.steamcmd.net/v1/info/{app_id}"

DEFAULT_TIMEOUT = 10  # seconds

_SIGNED_INT_RE = re.compile(r"^[+-]?[0-9]+$")

_MISSING = object()


@dataclass(frozen=True)
class RemoteBranchInfo:
    """Published state of an app branch."""

    published: int


def branch_time_path(app_id: str, branch: str) -> list[str]:
    """Return the keys leading to a branch's publish time in the response."""
    return ["data", app_id, "depots", "branches", branch, "timeupdated"]


def select_path(
    document: Any,
    path: Union[str, Sequence[str]],
    default: Any = None,
) -> Optional[Any]:
    """Look up a nested value by dotted path.

    Args:
        document: Parsed JSON document.
        path: Keys joined with ``.``, or a sequence of keys.
        default: Returned if any node along the path is missing. A JSON
            null present at the path is returned as None.

    Returns:
        The value at the path, or ``default``.
    """
    keys = path.split(".") if isinstance(path, str) else path
    node = document
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def parse_timestamp(value: Any) -> Optional[int]:
    """Parse a timestamp transmitted as a base-10 integer string.

    JSON integers are accepted through their string form; booleans,
    floats, containers and null are not.
    """
    if value is None or isinstance(value, (bool, float, dict, list)):
        return None
    text = str(value).strip()
    if not _SIGNED_INT_RE.match(text):
        return None
    return int(text)


def build_request(app_id: str, api_url: str = API_URL) -> Request:
    """Build the info request for an app."""
    return Request(
        api_url.format(app_id=quote(app_id, safe="")),
        headers={
            "Accept": "application/json",
            "User-Agent": f"steam-app-update-check/{__version__}",
        },
    )


def fetch_app_info(app_id: str, timeout: float = DEFAULT_TIMEOUT, api_url: str = API_URL) -> dict:
    """Fetch the info document of an app.

    One request, no retries.

    Raises:
        ServiceError: If the service answers with an error status.
        TransportError: If no response could be obtained.
        InvalidResponseError: If the body is not a JSON object.
    """
    req = build_request(app_id, api_url)
    logger.debug("GET %s", req.full_url)

    try:
        with urlopen(req, timeout=timeout) as response:
            body = response.read()
    except HTTPError as e:
        raise ServiceError(e.code, str(e.reason or "")) from e
    except URLError as e:
        raise TransportError(f"Network error: {e.reason}") from e
    except TimeoutError as e:
        raise TransportError(f"Connection timed out after {timeout}s") from e
    except OSError as e:
        raise TransportError(f"Network error: {e}") from e
    except http.client.HTTPException as e:
        raise TransportError(f"Connection dropped while reading the response: {e!r}") from e

    try:
        document = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidResponseError(
            "Response from Steam API request is not valid JSON.",
            details=str(e),
        ) from e
    if not isinstance(document, dict):
        raise InvalidResponseError("Response from Steam API request is not a JSON object.")
    return document


def fetch_branch_info(
    app_id: str,
    branch: str,
    timeout: float = DEFAULT_TIMEOUT,
    api_url: str = API_URL,
) -> RemoteBranchInfo:
    """Fetch the published build time of an app branch.

    Raises:
        FetchError: The specific subclass names what went wrong.
    """
    document = fetch_app_info(app_id, timeout=timeout, api_url=api_url)

    keys = branch_time_path(app_id, branch)
    dotted = ".".join(keys)
    value = select_path(document, keys, default=_MISSING)
    if value is _MISSING:
        raise FieldNotFoundError(
            f'Failed to find token "{dotted}" in response from Steam API request.'
        )

    published = parse_timestamp(value)
    if published is None:
        raise RemoteFieldMalformedError(
            f'Failed to parse token "{dotted}" in response from Steam API request.',
            details=f"value={value!r}",
        )
    return RemoteBranchInfo(published=published)


def fetch_remote_time(
    app_id: str,
    branch: str,
    timeout: float = DEFAULT_TIMEOUT,
    api_url: str = API_URL,
) -> int:
    """Return the published build time of an app branch in epoch seconds."""
    return fetch_branch_info(app_id, branch, timeout=timeout, api_url=api_url).published


__all__ = [
    "API_URL",
    "DEFAULT_TIMEOUT",
    "RemoteBranchInfo",
    "branch_time_path",
    "select_path",
    "parse_timestamp",
    "build_request",
    "fetch_app_info",
    "fetch_branch_info",
    "fetch_remote_time",
]
