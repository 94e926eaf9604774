"""Categorized error handling with actionable messages.

Every failure of an update check is one of the structured error types
below. They are raised where the problem is detected and turned into a
failed check outcome by the orchestrator, so the process exit code stays
stable for scripting integration.
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Exit codes for scripting integration.

    - 0: Usage printed, no check run
    - 1: Check could not complete
    - 2: Check completed, no update available
    - 3: Check completed, update available
    """

    HELP = 0
    CHECK_FAILED = 1
    NO_UPDATE = 2
    UPDATE_AVAILABLE = 3


class SteamUpdateCheckError(Exception):
    """Base exception for steam-app-update-check with structured error info.

    Attributes:
        message: Human-readable error message.
        code: Exit code for scripting.
        suggestion: Actionable recovery suggestion.
        details: Optional additional context.
    """

    code: ClassVar[ExitCode] = ExitCode.CHECK_FAILED
    suggestion: ClassVar[str] = ""

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: str | None = None,
    ):
        self.message = message
        self._suggestion = suggestion
        self.details = details
        super().__init__(message)

    def get_suggestion(self) -> str:
        """Get the recovery suggestion."""
        return self._suggestion or self.suggestion

    def format_full(self) -> str:
        """Format the complete error message with suggestion."""
        parts = [f"Error: {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        suggestion = self.get_suggestion()
        if suggestion:
            parts.append(f"Suggestion: {suggestion}")
        return "\n".join(parts)


class UsageError(SteamUpdateCheckError):
    """Command line could not be parsed."""

    suggestion = "Run 'steam-app-update-check --help' to see the available options."


# Locate Errors


class LocateError(SteamUpdateCheckError):
    """The installed app manifest could not be located."""


class UnsupportedPlatformError(LocateError):
    """Automatic Steam discovery is not available on this platform."""

    suggestion = "Pass --appsdir with the path to the steamapps directory of the app."


class ClientNotFoundError(LocateError):
    """The Steam client install location could not be read."""

    suggestion = (
        "Make sure Steam is installed, or pass --appsdir with the path "
        "to the steamapps directory of the app."
    )


class LibraryIndexMissingError(LocateError):
    """The Steam library index (libraryfolders.vdf) is missing or unreadable."""

    suggestion = "Start Steam once so it rebuilds its library folder list, or pass --appsdir."


class AppNotInAnyLibraryError(LocateError):
    """No Steam library lists the requested app."""

    suggestion = "Check the app id, or pass --appsdir if the app lives outside Steam's libraries."


class ManifestNotFoundError(LocateError):
    """The appmanifest_<id>.acf file does not exist where expected."""

    suggestion = "Ensure the app is installed and the app id is correct."


class InvalidDirectoryError(LocateError):
    """The directory given with --appsdir is not usable."""

    suggestion = "Point --appsdir at a steamapps directory or its parent."


# Extract Errors


class ExtractError(SteamUpdateCheckError):
    """The local app manifest does not hold the expected fields."""


class UnrecognizedFormatError(ExtractError):
    """The manifest is not a key-value tree with a root object."""

    suggestion = (
        "The manifest appears corrupted. "
        "Verify the app's files in Steam to regenerate it."
    )


class MissingFieldError(ExtractError):
    """A required manifest field is absent."""

    suggestion = "Verify the app's files in Steam to regenerate the manifest."


class MalformedFieldError(ExtractError):
    """A manifest field holds a value that cannot be parsed."""

    suggestion = "Verify the app's files in Steam to regenerate the manifest."


# Fetch Errors


class FetchError(SteamUpdateCheckError):
    """The published branch information could not be fetched."""

    suggestion = "Try again later."


class TransportError(FetchError):
    """The request did not reach the service or no response arrived."""

    suggestion = "Check your internet connection and try again."


class ServiceError(FetchError):
    """The service answered with a non-success HTTP status."""

    def __init__(
        self,
        status: int,
        reason: str = "",
        suggestion: str | None = None,
        details: str | None = None,
    ):
        self.status = status
        message = f"Steam API request returned error code {status}"
        if reason:
            message += f" {reason}"
        super().__init__(message, suggestion=suggestion, details=details)

    def get_suggestion(self) -> str:
        if self._suggestion:
            return self._suggestion
        if self.status == 404:
            return "Check that the app id is correct."
        if self.status == 429:
            return "The service is rate limiting requests. Wait a few minutes before trying again."
        if self.status >= 500:
            return "The Steam info service is experiencing issues. Try again later."
        return self.suggestion


class FieldNotFoundError(FetchError):
    """The response has no timestamp for the requested app and branch."""

    suggestion = "Check that the branch exists for this app and is public."


class RemoteFieldMalformedError(FetchError):
    """The published timestamp is not an integer string."""


class InvalidResponseError(FetchError):
    """The response body is not a JSON object."""


def format_error_for_user(error: Exception, verbose: bool = False) -> str:
    """Format any exception for user display.

    Args:
        error: Exception to format.
        verbose: If True, include details and suggestions.

    Returns:
        Formatted error message string.
    """
    if isinstance(error, SteamUpdateCheckError):
        if verbose:
            return error.format_full()
        return f"Error: {error.message}"
    else:
        return f"Error: {error}"


def get_exit_code(error: Exception) -> int:
    """Get the exit code for an exception.

    Args:
        error: Exception to get code for.

    Returns:
        Integer exit code.
    """
    if isinstance(error, SteamUpdateCheckError):
        return error.code
    return ExitCode.CHECK_FAILED


__all__ = [
    "ExitCode",
    "SteamUpdateCheckError",
    "UsageError",
    # Locate errors
    "LocateError",
    "UnsupportedPlatformError",
    "ClientNotFoundError",
    "LibraryIndexMissingError",
    "AppNotInAnyLibraryError",
    "ManifestNotFoundError",
    "InvalidDirectoryError",
    # Extract errors
    "ExtractError",
    "UnrecognizedFormatError",
    "MissingFieldError",
    "MalformedFieldError",
    # Fetch errors
    "FetchError",
    "TransportError",
    "ServiceError",
    "FieldNotFoundError",
    "RemoteFieldMalformedError",
    "InvalidResponseError",
    # Utilities
    "format_error_for_user",
    "get_exit_code",
]
