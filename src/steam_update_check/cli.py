"""Command-line interface for steam-app-update-check.

This module provides the main entry point and argument parsing. The
check result is reported through the exit code, see ``ExitCode``.
"""

import argparse
import logging
import platform
import sys
from typing import List, Optional

from steam_update_check._version import __version__
from steam_update_check.display.colors import Colors, disable_colors
from steam_update_check.display.console import configure_logging
from steam_update_check.errors import ExitCode, UsageError, format_error_for_user

logger = logging.getLogger(__name__)

PROG = "steam-app-update-check"

# Options whose value may itself start with a single dash
VALUE_OPTIONS = ("--appsdir", "--branch")


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting.

    argparse exits with status 2 on errors, which callers of this tool
    would read as "no update available".
    """

    def error(self, message: str):
        raise UsageError(message)


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return number


def create_parser() -> ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = ArgumentParser(
        prog=PROG,
        description=(
            "Checks if there is an update available for an installed Steam app.\n"
            "Returns 2 if no update is available or 3 if an update is available."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
        epilog="""
Exit codes:
  0  Usage printed, nothing checked
  1  The check could not be completed (see the error output)
  2  No update is available
  3  An update is available

Examples:
  steam-app-update-check 228980
  steam-app-update-check 228980 --branch beta
  steam-app-update-check 228980 --appsdir "D:/SteamLibrary/steamapps"
""",
    )

    parser.add_argument(
        "app_id",
        nargs="?",
        metavar="APP_ID",
        help="The Steam App ID of the app to check for an update",
    )
    parser.add_argument(
        "--appsdir",
        metavar="PATH",
        help=(
            "Path to a directory containing the steamapps directory with information "
            "about the app. If not specified, will check Steam library directories."
        ),
    )
    parser.add_argument(
        "--branch",
        metavar="NAME",
        help=(
            "The branch of the app to check for an update. If not specified, will "
            "check the branch the installed app is currently using."
        ),
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        metavar="SECONDS",
        help="Request timeout in seconds (default: 10)",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output including the compared timestamps",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and system information",
    )
    parser.add_argument("--help", "-h", action="store_true", help="Show this help message")

    return parser


def _attach_option_values(argv: List[str]) -> List[str]:
    """Join value options with their value so argparse accepts ``-x`` values.

    A following token is taken as the value unless it starts with ``--``.
    """
    result = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if (
            arg in VALUE_OPTIONS
            and i + 1 < len(argv)
            and not argv[i + 1].startswith("--")
        ):
            result.append(f"{arg}={argv[i + 1]}")
            i += 2
            continue
        result.append(arg)
        i += 1
    return result


def parse_args(parser: ArgumentParser, argv: List[str]) -> argparse.Namespace:
    """Parse command-line arguments.

    Raises:
        UsageError: If the arguments are invalid.
    """
    args = parser.parse_args(_attach_option_values(argv))
    if args.app_id is None and not (args.help or args.version):
        raise UsageError("Not enough positional arguments")
    return args


def print_version() -> None:
    """Print version and system information."""
    print(
        f"{PROG} {__version__} "
        f"(Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}, "
        f"{platform.system()} {platform.machine()})"
    )


def print_result(outcome) -> None:
    """Print a one-line summary of a completed check."""
    if outcome.update_available:
        print(
            f"{Colors.YELLOW}Update available{Colors.RESET} on branch "
            f"{Colors.CYAN}{outcome.branch}{Colors.RESET}"
        )
    else:
        print(
            f"{Colors.GREEN}Up to date{Colors.RESET} on branch "
            f"{Colors.CYAN}{outcome.branch}{Colors.RESET}"
        )


def _on_exit(code: int) -> int:
    logger.debug("Returning %d", code)
    return int(code)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the steam-app-update-check CLI.

    Args:
        argv: Command-line arguments without the program name.
            Defaults to sys.argv[1:].

    Returns:
        Process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()

    # Nothing to check: print usage without touching the disk or network
    if not argv:
        parser.print_help()
        return int(ExitCode.HELP)

    try:
        args = parse_args(parser, argv)
    except UsageError as e:
        configure_logging()
        logger.error(format_error_for_user(e))
        parser.print_help()
        return int(ExitCode.CHECK_FAILED)

    if args.no_color:
        disable_colors()
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.help:
        parser.print_help()
        return _on_exit(ExitCode.HELP)

    if args.version:
        print_version()
        return _on_exit(ExitCode.HELP)

    from steam_update_check.config.settings import load_config
    from steam_update_check.update.checker import CheckRequest, check_for_update

    config = load_config(silent=args.quiet)

    request = CheckRequest(
        app_id=args.app_id,
        apps_dir=args.appsdir or config["default_appsdir"],
        branch_override=args.branch,
    )
    outcome = check_for_update(
        request,
        timeout=args.timeout or config["timeout"],
        api_url=config["api_url"],
    )

    if not outcome.succeeded:
        logger.error(format_error_for_user(outcome.error, verbose=args.verbose))
    elif not args.quiet:
        print_result(outcome)

    return _on_exit(outcome.exit_code)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


__all__ = [
    "ArgumentParser",
    "create_parser",
    "parse_args",
    "print_version",
    "print_result",
    "main",
    "run",
]
