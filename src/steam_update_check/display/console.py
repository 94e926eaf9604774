"""Console logging for the command-line tool.

Diagnostics go to stderr through the standard ``logging`` package so the
core modules only need ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from steam_update_check.display.colors import Colors, supports_color

_HANDLER_MARK = "_added_by_configure_logging"


class ColorFormatter(logging.Formatter):
    """Formatter that colors the message by level."""

    def __init__(self, use_color: bool = True):
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_color:
            return message
        if record.levelno >= logging.ERROR:
            color = Colors.RED
        elif record.levelno >= logging.WARNING:
            color = Colors.YELLOW
        elif record.levelno <= logging.DEBUG:
            color = Colors.GRAY
        else:
            return message
        return f"{color}{message}{Colors.RESET}"


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the package logger for command-line use.

    Removes handlers added by earlier calls, so it can be called repeatedly.

    Args:
        verbose: Log debug messages.
        quiet: Log errors only. Ignored when verbose is set.
        stream: Destination stream. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    if stream is None:
        stream = sys.stderr

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger("steam_update_check")
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(use_color=supports_color(stream)))
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)
    return logger


__all__ = ["ColorFormatter", "configure_logging"]
