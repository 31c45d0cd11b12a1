"""
GitHub API helper utilities.

Provides rate limit handling and error response processing for GitHub API calls.
"""

import logging
from datetime import UTC, datetime

import httpx

from orgkpi.services.github.exceptions import GitHubAPIError, TimestampParseError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Raise for any non-2xx response from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        resource: Human-readable name of what was requested, for error context

    Raises:
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Resource not found: {resource}", 404)
    elif response.status_code in (403, 429):
        if rate_info.is_exhausted or response.status_code == 429:
            logger.warning(f"GitHub rate limit exhausted while fetching {resource}")
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                response.status_code,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError(f"GitHub API forbidden: {resource}", 403)
    raise GitHubAPIError(
        f"GitHub API error {response.status_code} for {resource}", response.status_code
    )


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp (e.g. ``2024-05-01T12:00:00Z``) into UTC.

    Raises:
        TimestampParseError: If the value is not a string, is malformed, or
            carries no UTC offset
    """
    if not isinstance(value, str):
        raise TimestampParseError(value, "expected a string")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise TimestampParseError(value) from e
    if parsed.tzinfo is None:
        raise TimestampParseError(value, "missing UTC offset")
    return parsed.astimezone(UTC)
