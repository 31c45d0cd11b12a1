"""Concurrent crawl across an organization's repositories."""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta

from orgkpi.services.crawl.concurrency import bounded_as_completed
from orgkpi.services.crawl.exceptions import RepositoryWalkError
from orgkpi.services.crawl.types import CrawlResult, WalkResult
from orgkpi.services.crawl.walker import PageCallback, walk_repository
from orgkpi.services.github import GitHubReadOperations
from orgkpi.services.github.types import CommitRecord, Repository

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 4


async def crawl_repositories(
    fetcher: GitHubReadOperations,
    repositories: Iterable[Repository],
    now: datetime,
    window: timedelta,
    concurrency: int = DEFAULT_CONCURRENCY,
    on_result: Callable[[WalkResult], None] | None = None,
    on_page: PageCallback | None = None,
) -> CrawlResult:
    """
    Walk every repository with at most ``concurrency`` walks in flight.

    A failed walk is logged and reported in ``CrawlResult.errors``; it never
    stops the other walks and its commits are not part of the result.

    Args:
        fetcher: Commit page source shared by all walks
        repositories: Window-filtered repositories, in dispatch order
        now: Reference time for the window
        window: Trailing window length
        concurrency: Maximum walks in flight
        on_result: Called on the collecting task for each finished walk
        on_page: Called with (repository, page number) after every fetched page

    Returns:
        CrawlResult with the union of successful walks' commits
    """

    async def walk(repository: Repository) -> WalkResult:
        try:
            return await walk_repository(fetcher, repository, now, window, on_page=on_page)
        except RepositoryWalkError as e:
            return WalkResult(repository=repository, error=e)

    commits: list[CommitRecord] = []
    errors: list[RepositoryWalkError] = []
    results: list[WalkResult] = []

    async for result in bounded_as_completed(repositories, walk, concurrency):
        results.append(result)
        if result.error is not None:
            logger.error(str(result.error))
            errors.append(result.error)
        else:
            commits.extend(result.commits)
        if on_result:
            on_result(result)

    logger.info(
        f"Crawled {len(results)} repositories: {len(commits)} commits in window, "
        f"{len(errors)} failed"
    )
    return CrawlResult(commits=commits, errors=errors, results=results)
