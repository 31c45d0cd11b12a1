"""
HTTP client for GitHub API operations.

A single AsyncClient is created per run and shared by every concurrent
request of that run, so connections are pooled across repository walks and
membership checks. The owner of the client closes it when the run ends.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from orgkpi.config.settings import Settings

logger = logging.getLogger(__name__)


def create_github_client(settings: Settings) -> httpx.AsyncClient:
    """
    Create an HTTP client configured for GitHub API calls.

    Auth headers are passed per-request by GitHubReadOperations, not stored
    on the client.
    """
    client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout),
        # Pool sized to the concurrency limit so no admitted task waits on a connection
        limits=httpx.Limits(
            max_connections=max(settings.concurrency, 1) * 2,
            max_keepalive_connections=max(settings.concurrency, 1),
        ),
        headers={"User-Agent": settings.user_agent},
        http2=settings.http2,
    )
    logger.debug("Created GitHub HTTP client with connection pooling")
    return client


@asynccontextmanager
async def github_client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    """Yield a GitHub HTTP client and close it on exit."""
    client = create_github_client(settings)
    try:
        yield client
    finally:
        await client.aclose()
        logger.debug("Closed GitHub HTTP client")
