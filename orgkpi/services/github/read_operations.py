"""
GitHub API read operations.

Provides the read-only operations the contributor crawl needs:
- Organization repository listing
- Paginated commit listings (one page per call)
- Organization membership checks
"""

import logging
from typing import Any

import httpx

from orgkpi.services.github.constants import (
    DEFAULT_API_URL,
    DEFAULT_API_VERSION,
    ORG_REPOS_SORT,
    PAGE_SIZE,
)
from orgkpi.services.github.exceptions import EmptyRepositoryError, GitHubAPIError
from orgkpi.services.github.helpers import handle_error_response, parse_timestamp
from orgkpi.services.github.types import (
    CommitRecord,
    Identity,
    MembershipResult,
    Page,
    Repository,
)

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    The HTTP client is owned by the caller and shared between every
    concurrent request made through this object.
    """

    def __init__(
        self,
        token: str,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_API_URL,
        api_version: str = DEFAULT_API_VERSION,
    ):
        self.token = token
        self.client = client
        self.base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version,
        }

    def _normalize_repo(self, data: dict[str, Any]) -> Repository:
        """Convert GitHub API response to Repository dataclass."""
        return Repository(
            api_url=data["url"],
            last_pushed_at=parse_timestamp(data.get("pushed_at")),
            full_name=data.get("full_name"),
        )

    @staticmethod
    def _normalize_identity(data: dict[str, Any] | None) -> Identity | None:
        if not isinstance(data, dict):
            return None
        return Identity(login=data.get("login"), profile_url=data.get("html_url"))

    @staticmethod
    def _raw_date(person: dict[str, Any] | None) -> str | None:
        if not isinstance(person, dict):
            return None
        return person.get("date")

    def _normalize_commit(self, data: dict[str, Any]) -> CommitRecord:
        """Convert a commit listing entry to CommitRecord.

        Dates are kept as sent; the walker parses them as it reaches each commit.
        """
        meta = data.get("commit")
        if not isinstance(meta, dict):
            meta = None
        return CommitRecord(
            author_identity=self._normalize_identity(data.get("author")),
            committer_identity=self._normalize_identity(data.get("committer")),
            author_date=self._raw_date(meta.get("author")) if meta else None,
            committer_date=self._raw_date(meta.get("committer")) if meta else None,
            has_metadata=meta is not None,
            sha=data.get("sha"),
        )

    async def list_org_repos(self, org: str) -> list[Repository]:
        """
        Fetch an organization's repositories, most recently pushed first.

        Only the first page (up to 100 repositories) is requested.

        Args:
            org: Organization login

        Returns:
            List of Repository with UTC push timestamps

        Raises:
            GitHubAPIError: On any non-2xx response
            TimestampParseError: If a repository carries a malformed pushed_at
        """
        response = await self.client.get(
            f"{self.base_url}/orgs/{org}/repos",
            headers=self._headers,
            params={"per_page": PAGE_SIZE, "sort": ORG_REPOS_SORT},
        )
        handle_error_response(response, f"organization {org}")

        data: list[dict[str, Any]] = response.json()
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise GitHubAPIError(
                f"Unexpected repository listing for organization {org}", response.status_code
            )
        if len(data) >= PAGE_SIZE:
            logger.warning(
                f"Organization {org} returned {len(data)} repositories; "
                "only the first page is crawled"
            )
        return [self._normalize_repo(r) for r in data]

    async def get_commits_page(self, repo_api_url: str, page: int) -> Page:
        """
        Fetch one page of a repository's commits, newest first.

        Args:
            repo_api_url: Repository API URL (https://api.github.com/repos/owner/name)
            page: Page number (1-indexed)

        Returns:
            Up to PAGE_SIZE CommitRecord; empty when history is exhausted

        Raises:
            EmptyRepositoryError: Repository has no commits (409)
            GitHubAPIError: For any other non-2xx response, or a body that is
                not a list of commit objects
        """
        response = await self.client.get(
            f"{repo_api_url}/commits",
            headers=self._headers,
            params={"page": page, "per_page": PAGE_SIZE},
        )

        if response.status_code == 409:
            raise EmptyRepositoryError(repo_api_url)
        handle_error_response(response, f"commits of {repo_api_url} (page {page})")

        data = response.json()
        if not isinstance(data, list) or not all(isinstance(c, dict) for c in data):
            raise GitHubAPIError(
                f"Unexpected commit listing for {repo_api_url} (page {page})",
                response.status_code,
            )
        return [self._normalize_commit(c) for c in data]

    async def check_membership(self, org: str, login: str) -> MembershipResult:
        """
        Check whether a user is a member of the organization.

        Returns:
            MembershipResult; is_member is False only on 404

        Raises:
            GitHubAPIError: For any other non-2xx response (indeterminate)
        """
        response = await self.client.get(
            f"{self.base_url}/orgs/{org}/memberships/{login}",
            headers=self._headers,
        )

        if response.status_code == 404:
            return MembershipResult(login=login, is_member=False)
        handle_error_response(response, f"membership of {login} in {org}")
        return MembershipResult(login=login, is_member=True)
