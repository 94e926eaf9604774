"""Terminal color handling and detection.

Provides ANSI color codes for terminal output with automatic
detection of color support.
"""

import os
import platform
import sys
from typing import Optional, TextIO

NO_COLOR_ENV_VAR = "STEAM_UPDATE_CHECK_NO_COLOR"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


def supports_color(stream: Optional[TextIO] = None) -> bool:
    """Check if a stream supports color output.

    Args:
        stream: Stream to check. Defaults to stdout.

    Returns:
        True if colors should be displayed, False otherwise.
    """
    if stream is None:
        stream = sys.stdout
    # Any non-empty value disables color
    if os.environ.get(NO_COLOR_ENV_VAR) or os.environ.get("NO_COLOR"):
        return False
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False
    if platform.system() == "Windows":
        return bool(os.environ.get("TERM") or os.environ.get("WT_SESSION"))
    return True


def disable_colors() -> None:
    """Blank out every color code."""
    for attr in dir(Colors):
        if not attr.startswith("_"):
            setattr(Colors, attr, "")


def init_colors() -> None:
    """Initialize colors based on terminal support.

    Disables all color codes if the terminal doesn't support colors.
    """
    if not supports_color():
        disable_colors()


# Auto-initialize on import
init_colors()
