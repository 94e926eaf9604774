"""Update availability check for an installed Steam app.

Runs the check in a fixed forward order: locate the installed manifest,
extract its update time and branch, fetch the branch's published time,
and compare the two. The first failure ends the check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from steam_update_check.api.client import API_URL, DEFAULT_TIMEOUT, fetch_remote_time
from steam_update_check.errors import (
    ExitCode,
    ManifestNotFoundError,
    SteamUpdateCheckError,
    UnrecognizedFormatError,
)
from steam_update_check.manifest.extractor import extract_manifest, resolve_branch
from steam_update_check.manifest.locator import locate_manifest
from steam_update_check.manifest.tree import TreeParseError, load_tree
from steam_update_check.utils.platform import ClientLocator

logger = logging.getLogger(__name__)

RemoteTimeFetcher = Callable[..., int]


def compare_timestamps(local: int, remote: int) -> bool:
    """Return True if the published build is newer than the installed one."""
    return remote > local


@dataclass(frozen=True)
class CheckRequest:
    """What to check.

    Attributes:
        app_id: Steam app id.
        apps_dir: Optional steamapps directory; skips Steam discovery.
        branch_override: Optional branch to check instead of the installed one.
    """

    app_id: str
    apps_dir: Optional[Union[str, Path]] = None
    branch_override: Optional[str] = None


@dataclass(frozen=True)
class CheckOutcome:
    """Result of an update check.

    Build with ``success()`` or ``failure()``.
    """

    succeeded: bool
    update_available: bool = False
    error: Optional[SteamUpdateCheckError] = None
    branch: Optional[str] = None
    local_time: Optional[int] = None
    remote_time: Optional[int] = None

    @classmethod
    def success(
        cls,
        update_available: bool,
        branch: Optional[str] = None,
        local_time: Optional[int] = None,
        remote_time: Optional[int] = None,
    ) -> "CheckOutcome":
        return cls(
            succeeded=True,
            update_available=update_available,
            branch=branch,
            local_time=local_time,
            remote_time=remote_time,
        )

    @classmethod
    def failure(cls, error: SteamUpdateCheckError) -> "CheckOutcome":
        return cls(succeeded=False, error=error)

    @property
    def exit_code(self) -> ExitCode:
        if not self.succeeded:
            return ExitCode.CHECK_FAILED
        return ExitCode.UPDATE_AVAILABLE if self.update_available else ExitCode.NO_UPDATE


class CheckState(Enum):
    INIT = "init"
    LOCATING = "locating"
    EXTRACTING = "extracting"
    FETCHING = "fetching"
    COMPARING = "comparing"
    DONE = "done"


class UpdateCheck:
    """A single-use update check for one request.

    Args:
        request: What to check.
        client_locator: Steam client locator used when the request has no
            apps directory. Picked from the host platform when omitted.
        fetcher: Callable returning the published time for
            ``(app_id, branch, timeout=..., api_url=...)``.
        timeout: Request timeout in seconds.
        api_url: Info API endpoint template.
    """

    def __init__(
        self,
        request: CheckRequest,
        client_locator: Optional[ClientLocator] = None,
        fetcher: RemoteTimeFetcher = fetch_remote_time,
        timeout: float = DEFAULT_TIMEOUT,
        api_url: str = API_URL,
    ):
        self.request = request
        self.client_locator = client_locator
        self.fetcher = fetcher
        self.timeout = timeout
        self.api_url = api_url
        self.state = CheckState.INIT
        self.outcome: Optional[CheckOutcome] = None

    def _enter(self, state: CheckState) -> None:
        logger.debug("check %s: %s -> %s", self.request.app_id, self.state.value, state.value)
        self.state = state

    def _finish(self, outcome: CheckOutcome) -> CheckOutcome:
        self._enter(CheckState.DONE)
        self.outcome = outcome
        return outcome

    def _load_manifest(self, manifest_path: Path):
        try:
            return load_tree(manifest_path)
        except FileNotFoundError as e:
            raise ManifestNotFoundError(
                f"{manifest_path.name} not found at {manifest_path.parent}"
            ) from e
        except (OSError, TreeParseError) as e:
            raise UnrecognizedFormatError(
                f"{manifest_path.name}: manifest format is not recognized.",
                details=str(e),
            ) from e

    def run(self) -> CheckOutcome:
        """Run the check.

        Returns:
            The outcome. Failures are reported in the outcome, not raised.

        Raises:
            RuntimeError: If this check has already run.
        """
        if self.state is not CheckState.INIT:
            raise RuntimeError("UpdateCheck instances are single-use")

        request = self.request
        try:
            self._enter(CheckState.LOCATING)
            manifest_path = locate_manifest(
                request.app_id,
                apps_dir=request.apps_dir,
                client_locator=self.client_locator,
            )

            self._enter(CheckState.EXTRACTING)
            tree = self._load_manifest(manifest_path)
            try:
                manifest = extract_manifest(tree, request.branch_override)
            except SteamUpdateCheckError as e:
                e.message = f"{manifest_path.name}: {e.message}"
                raise
            branch = resolve_branch(request.branch_override, manifest.user_branch_key)
            local_time = manifest.last_updated

            self._enter(CheckState.FETCHING)
            remote_time = self.fetcher(
                request.app_id, branch, timeout=self.timeout, api_url=self.api_url
            )
        except SteamUpdateCheckError as e:
            logger.debug("check %s failed in %s: %s", request.app_id, self.state.value, e.message)
            return self._finish(CheckOutcome.failure(e))

        self._enter(CheckState.COMPARING)
        logger.debug("branch=%s", branch)
        logger.debug("local=%s", local_time)
        logger.debug("remote=%s", remote_time)
        update_available = compare_timestamps(local_time, remote_time)

        return self._finish(
            CheckOutcome.success(
                update_available,
                branch=branch,
                local_time=local_time,
                remote_time=remote_time,
            )
        )


def check_for_update(request: CheckRequest, **kwargs) -> CheckOutcome:
    """Run a one-off update check.

    Keyword arguments are passed to ``UpdateCheck``.
    """
    return UpdateCheck(request, **kwargs).run()


__all__ = [
    "compare_timestamps",
    "CheckRequest",
    "CheckOutcome",
    "CheckState",
    "UpdateCheck",
    "check_for_update",
]
