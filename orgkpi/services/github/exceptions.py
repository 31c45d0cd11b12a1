"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class EmptyRepositoryError(GitHubAPIError):
    """Repository has no commits yet.

    GitHub answers a commit listing on an empty repository with 409 Conflict
    ("Git Repository is empty.") instead of an empty page.
    """

    def __init__(self, repo_name: str):
        self.repo_name = repo_name
        super().__init__(f"Git repository is empty: {repo_name}", status_code=409)


class TimestampParseError(ValueError):
    """Malformed or offset-less timestamp in an API payload."""

    def __init__(self, value: object, reason: str = "not an RFC 3339 timestamp"):
        self.value = value
        super().__init__(f"Invalid timestamp {value!r}: {reason}")
