"""
GitHub service package.

Usage: `from orgkpi.services.github import GitHubReadOperations, Repository`

Module structure:
- read_operations.py: Repository listing, commit pages, membership checks
- http_client.py: Per-run AsyncClient construction
- helpers.py: Rate limit handling, error and timestamp utilities
- types.py: Data types for API payloads
- exceptions.py: Custom exceptions
- constants.py: API constants
"""

from orgkpi.services.github.constants import PAGE_SIZE
from orgkpi.services.github.exceptions import (
    EmptyRepositoryError,
    GitHubAPIError,
    TimestampParseError,
)
from orgkpi.services.github.helpers import RateLimitInfo, handle_error_response, parse_timestamp
from orgkpi.services.github.http_client import create_github_client, github_client
from orgkpi.services.github.read_operations import GitHubReadOperations
from orgkpi.services.github.types import (
    CommitRecord,
    Identity,
    MembershipResult,
    Page,
    Repository,
)

__all__ = [
    # Operations
    "GitHubReadOperations",
    # HTTP client lifecycle
    "create_github_client",
    "github_client",
    # Utilities
    "handle_error_response",
    "parse_timestamp",
    "RateLimitInfo",
    # Exceptions
    "EmptyRepositoryError",
    "GitHubAPIError",
    "TimestampParseError",
    # Types
    "CommitRecord",
    "Identity",
    "MembershipResult",
    "Page",
    "Repository",
    # Constants
    "PAGE_SIZE",
]
