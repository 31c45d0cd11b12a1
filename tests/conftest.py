"""Root conftest: test infrastructure for all tests.

Provides:
- Isolation from the developer's environment (.env file, GITHUB_TOKEN, ...)
- Shared reference time and window
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tests.helpers.mock_factories import NOW, WINDOW

# Settings fields that could leak in from the shell running the tests
_SETTINGS_ENV = (
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "GITHUB_API_VERSION",
    "USER_AGENT",
    "CONCURRENCY",
    "REQUEST_TIMEOUT",
    "CONNECT_TIMEOUT",
    "HTTP2",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run every test in an empty directory with no settings in the environment."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def window() -> timedelta:
    return WINDOW
