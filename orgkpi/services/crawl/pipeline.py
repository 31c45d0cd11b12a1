"""
Contributor crawl pipeline.

list repositories -> window pre-filter -> concurrent commit walks ->
identity aggregation -> optional membership filter.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from orgkpi.services.crawl.aggregator import aggregate_identities
from orgkpi.services.crawl.coordinator import DEFAULT_CONCURRENCY, crawl_repositories
from orgkpi.services.crawl.membership import filter_members
from orgkpi.services.crawl.types import CrawlReport, WalkResult
from orgkpi.services.crawl.window import filter_repositories
from orgkpi.services.github import GitHubReadOperations
from orgkpi.services.github.types import MembershipResult, Repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrawlOptions:
    """What to crawl and how."""

    org: str
    days: int
    concurrency: int = DEFAULT_CONCURRENCY
    members_only: bool = False

    @property
    def window(self) -> timedelta:
        return timedelta(days=self.days)


class CrawlObserver:
    """Progress hooks for a crawl. The base class ignores every event."""

    def stage_started(self, stage: str, total: int) -> None:
        pass

    def page_fetched(self, repository: Repository, page: int) -> None:
        pass

    def repository_done(self, result: WalkResult) -> None:
        pass

    def membership_checked(self, result: MembershipResult) -> None:
        pass

    def stage_finished(self, stage: str) -> None:
        pass


async def run_crawl(
    github: GitHubReadOperations,
    options: CrawlOptions,
    now: datetime | None = None,
    observer: CrawlObserver | None = None,
) -> CrawlReport:
    """
    Find everyone who committed to ``options.org`` within the window.

    Args:
        github: API operations bound to a live client
        options: Organization, window and concurrency
        now: Reference time; defaults to the current UTC time, taken once
        observer: Optional progress observer

    Returns:
        CrawlReport with the login -> profile URL mapping

    Raises:
        GitHubAPIError / httpx.HTTPError: Repository listing failed
        TimestampParseError: A repository carried a malformed pushed_at
        MembershipCheckError: A membership check was indeterminate
    """
    now = now or datetime.now(UTC)
    observer = observer or CrawlObserver()

    repos = await github.list_org_repos(options.org)
    in_window = filter_repositories(repos, now, options.window)
    logger.info(
        f"A total of {len(in_window)} repos have been modified "
        f"in the last {options.days} days."
    )
    logger.debug(f"Repos: {[r.display_name for r in in_window]}")

    observer.stage_started("commits", len(in_window))
    crawl = await crawl_repositories(
        github,
        in_window,
        now,
        options.window,
        concurrency=options.concurrency,
        on_result=observer.repository_done,
        on_page=observer.page_fetched,
    )
    observer.stage_finished("commits")

    identities = aggregate_identities(crawl.commits)
    logger.info(f"Found {len(identities)} distinct contributors")

    if options.members_only:
        observer.stage_started("members", len(identities))
        identities = await filter_members(
            github,
            options.org,
            identities,
            concurrency=options.concurrency,
            on_result=observer.membership_checked,
        )
        observer.stage_finished("members")

    return CrawlReport(
        identities=identities,
        repositories_listed=len(repos),
        repositories_in_window=len(in_window),
        errors=crawl.errors,
    )
