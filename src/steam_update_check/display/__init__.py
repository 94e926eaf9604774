"""Terminal output.

Modules:
    colors: ANSI color codes and terminal detection
    console: Logging setup for diagnostics on stderr
"""

from steam_update_check.display.colors import Colors, disable_colors, supports_color
from steam_update_check.display.console import ColorFormatter, configure_logging

__all__ = [
    "Colors",
    "disable_colors",
    "supports_color",
    "ColorFormatter",
    "configure_logging",
]
