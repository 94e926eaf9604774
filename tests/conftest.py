"""
Pytest fixtures for steam-app-update-check tests.

Test imports use the src/steam_update_check/ package via --import-mode=importlib
(see pyproject.toml).
"""

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from steam_update_check.utils.platform import ClientLocator


# ═══════════════════════════════════════════════════════════════════════════════
# Path Constants
# ═══════════════════════════════════════════════════════════════════════════════

PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"

APP_ID = "228980"

# Load fixtures data
FIXTURES_DIR = Path(__file__).parent / "fixtures"
with open(FIXTURES_DIR / "steamcmd_responses.json") as f:
    FIXTURES = json.load(f)

MANIFEST_TEXT = (FIXTURES_DIR / "appmanifest_228980.acf").read_text(encoding="utf-8")
LIBRARY_INDEX_TEMPLATE = (FIXTURES_DIR / "libraryfolders.vdf").read_text(encoding="utf-8")


def _make_manifest(last_updated="100", beta_key=None, app_id=APP_ID) -> str:
    """Build a minimal app manifest."""
    lines = [
        '"AppState"',
        "{",
        f'\t"appid"\t\t"{app_id}"',
        f'\t"LastUpdated"\t\t"{last_updated}"',
    ]
    if beta_key is not None:
        lines += ['\t"UserConfig"', "\t{", f'\t\t"BetaKey"\t\t"{beta_key}"', "\t}"]
    lines.append("}")
    return "\n".join(lines) + "\n"


def _make_response(app_id=APP_ID, branches=None) -> dict:
    """Build a steamcmd.net info response with the given branch times."""
    if branches is None:
        branches = {"public": "100"}
    return {
        "data": {
            app_id: {
                "depots": {
                    "branches": {
                        name: {"buildid": "1", "timeupdated": time}
                        for name, time in branches.items()
                    }
                }
            }
        },
        "status": "success",
    }


def _mock_response(payload) -> MagicMock:
    """Build a urlopen() context manager returning ``payload``."""
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    response = MagicMock()
    response.read.return_value = body
    response.__enter__ = MagicMock(return_value=response)
    response.__exit__ = MagicMock(return_value=False)
    return response


def _escape(path) -> str:
    return str(path).replace("\\", "\\\\")


class _FakeClientLocator(ClientLocator):
    """Client locator returning a fixed Steam directory and counting calls."""

    def __init__(self, client_path=None, error=None):
        self.client_path = client_path
        self.error = error
        self.calls = 0

    def find_client_path(self) -> Path:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return Path(self.client_path)


# ═══════════════════════════════════════════════════════════════════════════════
# API Response Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def info_response():
    """Info response for app 228980 with public and beta branches."""
    return json.loads(json.dumps(FIXTURES["app_228980"]))


@pytest.fixture
def info_without_depots():
    """Info response without depot information."""
    return json.loads(json.dumps(FIXTURES["app_without_depots"]))


@pytest.fixture
def info_malformed_time():
    """Info response whose public timeupdated is not a number."""
    return json.loads(json.dumps(FIXTURES["app_malformed_time"]))


@pytest.fixture
def mock_urlopen():
    """Mock urlopen for API testing."""
    with patch("steam_update_check.api.client.urlopen") as mock:
        yield mock


# ═══════════════════════════════════════════════════════════════════════════════
# Filesystem Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def apps_dir(tmp_path):
    """A steamapps directory holding the sample manifest."""
    directory = tmp_path / "library" / "steamapps"
    directory.mkdir(parents=True)
    (directory / f"appmanifest_{APP_ID}.acf").write_text(MANIFEST_TEXT, encoding="utf-8")
    return directory


@pytest.fixture
def write_manifest(tmp_path):
    """Write a manifest into a fresh steamapps directory and return the directory."""

    def _write(text, app_id=APP_ID):
        directory = tmp_path / "apps" / "steamapps"
        directory.mkdir(parents=True, exist_ok=True)
        (directory / f"appmanifest_{app_id}.acf").write_text(text, encoding="utf-8")
        return directory

    return _write


@pytest.fixture
def steam_install(tmp_path):
    """A Steam install with two libraries; app 228980 lives in the first.

    Returns:
        (steam_dir, library_dir) tuple.
    """
    steam_dir = tmp_path / "Steam"
    library_dir = tmp_path / "SteamLibrary"
    (steam_dir / "steamapps").mkdir(parents=True)
    (library_dir / "steamapps").mkdir(parents=True)

    # Steam writes paths with doubled backslashes
    index = LIBRARY_INDEX_TEMPLATE.replace("{steam}", _escape(steam_dir)).replace(
        "{library}", _escape(library_dir)
    )
    (steam_dir / "steamapps" / "libraryfolders.vdf").write_text(index, encoding="utf-8")
    (steam_dir / "steamapps" / f"appmanifest_{APP_ID}.acf").write_text(
        MANIFEST_TEXT, encoding="utf-8"
    )
    return steam_dir, library_dir


@pytest.fixture
def fake_locator(steam_install):
    """Client locator pointing at the steam_install fixture."""
    steam_dir, _ = steam_install
    return _FakeClientLocator(steam_dir)


# ═══════════════════════════════════════════════════════════════════════════════
# Factory Fixtures
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def make_manifest():
    """Factory for minimal manifest text: (last_updated, beta_key, app_id)."""
    return _make_manifest


@pytest.fixture
def make_response():
    """Factory for info responses: (app_id, branches={name: timeupdated})."""
    return _make_response


@pytest.fixture
def mock_response():
    """Factory for urlopen() responses returning a JSON payload or raw bytes."""
    return _mock_response


@pytest.fixture
def locator_factory():
    """Factory for fake client locators: (client_path, error)."""
    return _FakeClientLocator


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers configure_logging() attached during a test."""
    yield
    logger = logging.getLogger("steam_update_check")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
