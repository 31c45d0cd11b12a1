"""
Command line entry point.

Usage:
    orgkpi --org aosc-dev --days 30 [--to-markdown] [--filter-org-user] [--thread 4]

The token is read from --token, or GITHUB_TOKEN in the environment or a .env file.
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import httpx
from pydantic import ValidationError
from tqdm import tqdm

from orgkpi import __version__
from orgkpi.config import Settings
from orgkpi.config.settings import LOG_LEVELS
from orgkpi.services.crawl import (
    CrawlObserver,
    CrawlOptions,
    MembershipCheckError,
    WalkResult,
    run_crawl,
)
from orgkpi.services.github import GitHubReadOperations, github_client
from orgkpi.services.github.exceptions import GitHubAPIError, TimestampParseError
from orgkpi.services.github.types import MembershipResult, Repository
from orgkpi.services.output import render_lines

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    # Results go to stdout, so logs stay on stderr
    logging.basicConfig(
        level=level.upper(),
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


class TqdmObserver(CrawlObserver):
    """Progress bars on stderr, one per crawl stage."""

    DESCRIPTIONS = {"commits": "Crawling repos", "members": "Checking members"}
    UNITS = {"commits": "repo", "members": "user"}

    def __init__(self) -> None:
        self._bar: tqdm | None = None
        self._pages = 0

    def stage_started(self, stage: str, total: int) -> None:
        self._bar = tqdm(
            total=total,
            desc=self.DESCRIPTIONS.get(stage, stage),
            unit=self.UNITS.get(stage, "it"),
            file=sys.stderr,
            leave=False,
        )

    def page_fetched(self, repository: Repository, page: int) -> None:
        self._pages += 1
        if self._bar is not None:
            self._bar.set_postfix(pages=self._pages)

    def repository_done(self, result: WalkResult) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def membership_checked(self, result: MembershipResult) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def stage_finished(self, stage: str) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {number}")
    return number


def _log_level(value: str) -> str:
    level = value.upper()
    if level not in LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"invalid level {value!r} (choose from {', '.join(LOG_LEVELS)})"
        )
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgkpi",
        description="List contributors who committed to an organization's repositories recently",
    )
    parser.add_argument("--org", required=True, help="Organization name")
    parser.add_argument(
        "--days", required=True, type=_non_negative_int, help="Days for query kpi"
    )
    parser.add_argument(
        "--to-markdown", action="store_true", help="Result output to markdown format"
    )
    parser.add_argument(
        "--filter-org-user",
        action="store_true",
        help="Only list users who are members of the organization",
    )
    parser.add_argument(
        "--thread",
        type=_positive_int,
        default=None,
        help="Concurrent requests (default: 4, or CONCURRENCY)",
    )
    parser.add_argument("--token", default=None, help="GitHub token (default: GITHUB_TOKEN)")
    parser.add_argument("--progress", action="store_true", help="Show progress bars")
    parser.add_argument(
        "--log-level", type=_log_level, default=None, help="Logging level (default: INFO)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_settings(args: argparse.Namespace, settings: Settings | None = None) -> Settings:
    """Apply command line overrides on top of environment settings."""
    settings = settings or Settings()
    overrides: dict[str, object] = {}
    if args.token:
        overrides["github_token"] = args.token
    if args.thread is not None:
        overrides["concurrency"] = args.thread
    if args.log_level:
        overrides["log_level"] = args.log_level
    return settings.model_copy(update=overrides)


async def _run(args: argparse.Namespace, settings: Settings) -> dict[str, str]:
    options = CrawlOptions(
        org=args.org,
        days=args.days,
        concurrency=settings.concurrency,
        members_only=args.filter_org_user,
    )
    observer = TqdmObserver() if args.progress else None
    async with github_client(settings) as client:
        github = GitHubReadOperations(
            settings.github_token,
            client,
            base_url=settings.github_api_url,
            api_version=settings.github_api_version,
        )
        report = await run_crawl(github, options, observer=observer)

    if report.errors:
        logger.warning(f"{len(report.errors)} repositories could not be crawled")
    return report.identities


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValidationError as e:
        parser.error(f"invalid settings in environment: {e}")
    setup_logging(settings.log_level)

    if not settings.github_enabled:
        logger.error("No GitHub token: pass --token or set GITHUB_TOKEN")
        return 1

    try:
        identities = asyncio.run(_run(args, settings))
    except MembershipCheckError as e:
        logger.error(f"Network is not reachable: {e}")
        return 1
    except GitHubAPIError as e:
        logger.error(f"Failed to list repositories of {args.org}: {e.message}")
        return 1
    except TimestampParseError as e:
        logger.error(str(e))
        return 1
    except httpx.HTTPError as e:
        logger.error(f"Request to GitHub failed: {e}")
        return 1

    for line in render_lines(identities, markdown=args.to_markdown):
        print(line)
    return 0
