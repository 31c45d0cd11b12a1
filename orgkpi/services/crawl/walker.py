"""Commit history walk for a single repository.

Pages are requested from 1 upward. GitHub returns commits newest first, so
once a commit's author and committer dates both fall outside the window,
nothing later in the history can be inside it and the walk stops there.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from orgkpi.services.crawl.exceptions import RepositoryWalkError
from orgkpi.services.crawl.types import WalkResult
from orgkpi.services.crawl.window import in_window
from orgkpi.services.github import GitHubReadOperations
from orgkpi.services.github.exceptions import EmptyRepositoryError
from orgkpi.services.github.types import Page, Repository

logger = logging.getLogger(__name__)

PageCallback = Callable[[Repository, int], None]


async def walk_repository(
    fetcher: GitHubReadOperations,
    repository: Repository,
    now: datetime,
    window: timedelta,
    on_page: PageCallback | None = None,
) -> WalkResult:
    """
    Collect the commits of one repository that fall inside the window.

    Args:
        fetcher: Anything with an async ``get_commits_page(api_url, page)``
        repository: Repository to walk
        now: Reference time for the window
        window: Trailing window length
        on_page: Called with (repository, page number) after each fetched page

    Returns:
        WalkResult holding a newest-first, gap-free prefix of the history

    Raises:
        RepositoryWalkError: On any fetch or parse failure other than an
            empty repository
    """
    result = WalkResult(repository=repository)
    previous: datetime | None = None
    page = 1

    while True:
        logger.info(f"Getting repo: {repository.display_name} page: {page}")
        try:
            records: Page = await fetcher.get_commits_page(repository.api_url, page)
        except EmptyRepositoryError:
            logger.info(f"Repository {repository.display_name} is empty")
            result.empty_repository = True
            return result
        except Exception as e:
            # Transport, HTTP and payload failures all end only this walk
            raise RepositoryWalkError(repository, e) from e

        result.pages_fetched += 1
        if on_page:
            on_page(repository, page)

        if not records:
            return result

        for record in records:
            # Commits without metadata can't be placed in time
            if not record.has_metadata or not record.has_dates:
                continue

            # Dates are parsed only once the walk reaches this commit
            try:
                timestamps = record.parse_timestamps()
                inside = any(in_window(ts, now, window) for ts in timestamps)
            except ValueError as e:
                raise RepositoryWalkError(repository, e) from e

            newest = max(timestamps)
            if previous is not None and newest > previous:
                logger.debug(
                    f"Out-of-order commit {record.sha} in {repository.display_name}"
                )
            previous = newest

            if not inside:
                logger.debug(
                    f"Stopping {repository.display_name} at page {page}: "
                    f"commit {record.sha} is older than the window"
                )
                return result

            result.commits.append(record)

        page += 1
