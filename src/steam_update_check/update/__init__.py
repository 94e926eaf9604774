"""Update checking.

Modules:
    checker: Timestamp comparison and the check workflow
"""

from steam_update_check.update.checker import (
    CheckOutcome,
    CheckRequest,
    CheckState,
    UpdateCheck,
    check_for_update,
    compare_timestamps,
)

__all__ = [
    "compare_timestamps",
    "CheckRequest",
    "CheckOutcome",
    "CheckState",
    "UpdateCheck",
    "check_for_update",
]
