"""Steam App Update Check - CLI tool to detect updates of installed Steam apps.

Compares the last update time recorded in an installed app's manifest with
the time its branch was last published on Steam, and reports the result
through the process exit code.
"""

from steam_update_check._version import __version__
from steam_update_check.update.checker import (
    CheckOutcome,
    CheckRequest,
    check_for_update,
    compare_timestamps,
)

__all__ = [
    "__version__",
    "CheckOutcome",
    "CheckRequest",
    "check_for_update",
    "compare_timestamps",
]
