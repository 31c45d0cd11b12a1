"""Trailing activity window.

All timestamps are normalized to UTC before comparison. A timestamp that
cannot be parsed is never defaulted into or out of the window: the error
propagates to whichever operation needed it.
"""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from orgkpi.services.github.exceptions import TimestampParseError
from orgkpi.services.github.helpers import parse_timestamp
from orgkpi.services.github.types import Repository

__all__ = ["TimestampParseError", "filter_repositories", "in_window", "parse_timestamp"]


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        raise TimestampParseError(ts.isoformat(), "naive datetime")
    return ts.astimezone(UTC)


def in_window(timestamp: datetime, now: datetime, window: timedelta) -> bool:
    """Return True when ``now - timestamp <= window``."""
    return _as_utc(now) - _as_utc(timestamp) <= window


def filter_repositories(
    repositories: Iterable[Repository],
    now: datetime,
    window: timedelta,
) -> list[Repository]:
    """Keep repositories pushed to within the window, preserving order."""
    return [r for r in repositories if in_window(r.last_pushed_at, now, window)]
