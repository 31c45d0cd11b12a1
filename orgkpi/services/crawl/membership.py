"""Organization membership filtering."""

import logging
from collections.abc import Callable

import httpx

from orgkpi.services.crawl.concurrency import bounded_as_completed
from orgkpi.services.crawl.coordinator import DEFAULT_CONCURRENCY
from orgkpi.services.crawl.exceptions import MembershipCheckError
from orgkpi.services.github import GitHubReadOperations
from orgkpi.services.github.exceptions import GitHubAPIError
from orgkpi.services.github.types import MembershipResult

logger = logging.getLogger(__name__)


async def filter_members(
    checker: GitHubReadOperations,
    org: str,
    identities: dict[str, str],
    concurrency: int = DEFAULT_CONCURRENCY,
    on_result: Callable[[MembershipResult], None] | None = None,
) -> dict[str, str]:
    """
    Keep only the identities whose login is a member of ``org``.

    Raises:
        MembershipCheckError: On the first check that is neither a member
            nor a 404; pending checks are cancelled
    """

    async def check(login: str) -> MembershipResult:
        try:
            return await checker.check_membership(org, login)
        except (GitHubAPIError, httpx.HTTPError) as e:
            raise MembershipCheckError(login, e) from e

    members: dict[str, str] = {}
    async for result in bounded_as_completed(list(identities), check, concurrency):
        if on_result:
            on_result(result)
        if result.is_member:
            members[result.login] = identities[result.login]
        else:
            logger.debug(f"{result.login} is not a member of {org}")

    logger.info(f"{len(members)} of {len(identities)} contributors are members of {org}")
    return members
