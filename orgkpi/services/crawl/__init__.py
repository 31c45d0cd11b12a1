"""
Contributor crawl package.

Module structure:
- window.py: Timestamp parsing and the trailing activity window
- walker.py: Paged commit walk of one repository with early termination
- coordinator.py: Bounded concurrent walks with per-repository failure isolation
- aggregator.py: login -> profile URL reduction
- membership.py: Organization membership filter
- concurrency.py: Sliding-window task execution
- pipeline.py: End-to-end run
"""

from orgkpi.services.crawl.aggregator import aggregate_identities, iter_identities
from orgkpi.services.crawl.concurrency import bounded_as_completed
from orgkpi.services.crawl.coordinator import DEFAULT_CONCURRENCY, crawl_repositories
from orgkpi.services.crawl.exceptions import MembershipCheckError, RepositoryWalkError
from orgkpi.services.crawl.membership import filter_members
from orgkpi.services.crawl.pipeline import CrawlObserver, CrawlOptions, run_crawl
from orgkpi.services.crawl.types import CrawlReport, CrawlResult, WalkResult
from orgkpi.services.crawl.walker import walk_repository
from orgkpi.services.crawl.window import filter_repositories, in_window, parse_timestamp

__all__ = [
    # Pipeline
    "run_crawl",
    "CrawlOptions",
    "CrawlObserver",
    # Stages
    "walk_repository",
    "crawl_repositories",
    "aggregate_identities",
    "iter_identities",
    "filter_members",
    "bounded_as_completed",
    # Window
    "filter_repositories",
    "in_window",
    "parse_timestamp",
    # Exceptions
    "MembershipCheckError",
    "RepositoryWalkError",
    # Types
    "CrawlReport",
    "CrawlResult",
    "WalkResult",
    # Constants
    "DEFAULT_CONCURRENCY",
]
