"""Remote app info.

Modules:
    client: steamcmd.net info API client
"""

from steam_update_check.api.client import (
    API_URL,
    DEFAULT_TIMEOUT,
    RemoteBranchInfo,
    fetch_branch_info,
    fetch_remote_time,
    select_path,
)

__all__ = [
    "API_URL",
    "DEFAULT_TIMEOUT",
    "RemoteBranchInfo",
    "fetch_branch_info",
    "fetch_remote_time",
    "select_path",
]
