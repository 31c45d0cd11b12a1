"""Data types for GitHub API responses."""

from dataclasses import dataclass
from datetime import datetime

from orgkpi.services.github.helpers import parse_timestamp


@dataclass(frozen=True)
class Repository:
    """Organization repository as returned by the listing endpoint."""

    api_url: str
    last_pushed_at: datetime  # Always UTC
    full_name: str | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.api_url


@dataclass(frozen=True)
class Identity:
    """GitHub account linked to a commit author or committer."""

    login: str | None
    profile_url: str | None  # html_url of the account

    @property
    def is_complete(self) -> bool:
        """Only identities with both a login and a profile URL are aggregated."""
        return bool(self.login) and bool(self.profile_url)


@dataclass(frozen=True)
class CommitRecord:
    """A single commit from a repository's history.

    Identities are None when the git author/committer is not linked to a
    GitHub account. Dates are the raw RFC 3339 strings from the commit
    metadata, None when the API omitted them; they are parsed only when a
    walk reaches the commit.
    """

    author_identity: Identity | None
    committer_identity: Identity | None
    author_date: str | None
    committer_date: str | None
    has_metadata: bool = True
    sha: str | None = None

    @property
    def has_dates(self) -> bool:
        return self.author_date is not None or self.committer_date is not None

    def parse_timestamps(self) -> list[datetime]:
        """Present dates as UTC datetimes, author first.

        Raises:
            TimestampParseError: If a present date is malformed
        """
        return [
            parse_timestamp(value)
            for value in (self.author_date, self.committer_date)
            if value is not None
        ]


# One page of a commit listing, newest first, at most PAGE_SIZE records
Page = list[CommitRecord]


@dataclass(frozen=True)
class MembershipResult:
    """Outcome of an organization membership check."""

    login: str
    is_member: bool
