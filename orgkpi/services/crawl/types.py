"""Result types for the contributor crawl."""

from dataclasses import dataclass, field

from orgkpi.services.crawl.exceptions import RepositoryWalkError
from orgkpi.services.github.types import CommitRecord, Repository


@dataclass
class WalkResult:
    """Outcome of walking one repository."""

    repository: Repository
    commits: list[CommitRecord] = field(default_factory=list)
    pages_fetched: int = 0
    empty_repository: bool = False  # 409 on the commit listing
    error: RepositoryWalkError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CrawlResult:
    """Union of successful walks plus per-repository failures."""

    commits: list[CommitRecord]
    errors: list[RepositoryWalkError]
    results: list[WalkResult]  # Completion order


@dataclass
class CrawlReport:
    """Everything a run produced, handed to the output layer."""

    identities: dict[str, str]  # login -> profile URL
    repositories_listed: int
    repositories_in_window: int
    errors: list[RepositoryWalkError] = field(default_factory=list)
