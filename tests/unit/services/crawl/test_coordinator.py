"""Unit tests for the concurrent crawl coordinator."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock

import httpx
import pytest

from orgkpi.services.crawl.coordinator import crawl_repositories
from orgkpi.services.crawl.exceptions import RepositoryWalkError
from orgkpi.services.crawl.types import WalkResult
from orgkpi.services.github.exceptions import EmptyRepositoryError, GitHubAPIError
from orgkpi.services.github.read_operations import GitHubReadOperations

from tests.helpers.mock_factories import (
    NOW,
    WINDOW,
    FakeGitHub,
    commit_json,
    make_commit,
    make_repository,
    server_error,
    stamp,
)


class TestFailureIsolation:
    """A failing repository never takes its siblings down."""

    @pytest.mark.asyncio
    async def test_failed_walk_reported_not_raised(self, caplog):
        repo_a = make_repository("a")
        repo_b = make_repository("b")
        github = FakeGitHub(
            pages={
                repo_a.api_url: httpx.ConnectError("connection reset"),
                repo_b.api_url: [[make_commit(1, author="bob")]],
            }
        )

        with caplog.at_level(logging.ERROR, logger="orgkpi.services.crawl.coordinator"):
            result = await crawl_repositories(github, [repo_a, repo_b], NOW, WINDOW)

        assert [c.author_identity.login for c in result.commits] == ["bob"]
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], RepositoryWalkError)
        assert result.errors[0].repository == repo_a
        assert "test-org/a" in caplog.text

    @pytest.mark.asyncio
    async def test_partial_commits_of_failed_walk_excluded(self):
        repo = make_repository("flaky")
        github = FakeGitHub(pages={repo.api_url: [[make_commit(1, author="carol")], server_error()]})

        result = await crawl_repositories(github, [repo], NOW, WINDOW)

        assert result.commits == []
        assert len(result.errors) == 1
        assert result.results[0].ok is False

    @pytest.mark.asyncio
    async def test_empty_repository_is_not_an_error(self):
        empty = make_repository("empty")
        full = make_repository("full")
        github = FakeGitHub(
            pages={
                empty.api_url: EmptyRepositoryError(empty.api_url),
                full.api_url: [[make_commit(2)]],
            }
        )

        result = await crawl_repositories(github, [empty, full], NOW, WINDOW)

        assert result.errors == []
        assert len(result.commits) == 1
        by_name = {r.repository.full_name: r for r in result.results}
        assert by_name["test-org/empty"].empty_repository is True

    @pytest.mark.asyncio
    async def test_unexpected_body_fails_only_that_repository(self):
        repo_a = make_repository("a")
        repo_b = make_repository("b")
        bodies = {
            f"{repo_a.api_url}/commits": {"message": "weird"},
            f"{repo_b.api_url}/commits": [commit_json(date=stamp(NOW), login="bob")],
        }

        async def fake_get(url, **kwargs):
            if kwargs["params"]["page"] > 1:
                return httpx.Response(200, json=[])
            return httpx.Response(200, json=bodies[url])

        client = AsyncMock()
        client.get.side_effect = fake_get
        github = GitHubReadOperations("ghp_test", client)

        result = await crawl_repositories(github, [repo_a, repo_b], NOW, WINDOW)

        assert [c.author_identity.login for c in result.commits] == ["bob"]
        assert len(result.errors) == 1
        assert result.errors[0].repository == repo_a
        assert isinstance(result.errors[0].cause, GitHubAPIError)

    @pytest.mark.asyncio
    async def test_non_api_exception_fails_only_that_repository(self):
        repo_a = make_repository("a")
        repo_b = make_repository("b")
        github = FakeGitHub(
            pages={
                repo_a.api_url: AttributeError("'str' object has no attribute 'get'"),
                repo_b.api_url: [[make_commit(1, author="bob")]],
            }
        )

        result = await crawl_repositories(github, [repo_a, repo_b], NOW, WINDOW)

        assert [c.author_identity.login for c in result.commits] == ["bob"]
        assert [e.repository for e in result.errors] == [repo_a]

    @pytest.mark.asyncio
    async def test_malformed_date_past_the_window_does_not_fail(self):
        repo = make_repository("old-history")
        github = FakeGitHub(
            pages={
                repo.api_url: [
                    [
                        make_commit(1, author="bob"),
                        make_commit(author="old", date="2026-01-01T00:00:00Z"),
                        make_commit(author="broken", date="garbage"),
                    ]
                ]
            }
        )

        result = await crawl_repositories(github, [repo], NOW, WINDOW, concurrency=1)

        assert result.errors == []
        assert [c.author_identity.login for c in result.commits] == ["bob"]


class TestConcurrency:
    """Tests for the concurrency limit and collection."""

    @pytest.mark.asyncio
    async def test_never_more_than_limit_in_flight(self):
        repos = [make_repository(f"r{i}") for i in range(5)]
        github = FakeGitHub(
            pages={r.api_url: [[make_commit(1)]] for r in repos},
            latency=0.01,
        )

        result = await crawl_repositories(github, repos, NOW, WINDOW, concurrency=2)

        assert github.max_in_flight == 2
        assert len(result.results) == 5
        assert len(result.commits) == 5

    @pytest.mark.asyncio
    async def test_limit_of_one_walks_sequentially(self):
        repos = [make_repository(f"r{i}") for i in range(3)]
        github = FakeGitHub(pages={r.api_url: [[make_commit(1)]] for r in repos}, latency=0.001)

        await crawl_repositories(github, repos, NOW, WINDOW, concurrency=1)

        assert github.max_in_flight == 1
        # Each walk finishes before the next starts
        assert [url for url, _ in github.calls] == [
            repos[0].api_url,
            repos[0].api_url,
            repos[1].api_url,
            repos[1].api_url,
            repos[2].api_url,
            repos[2].api_url,
        ]

    @pytest.mark.asyncio
    async def test_invalid_limit_rejected(self):
        with pytest.raises(ValueError):
            await crawl_repositories(FakeGitHub(), [make_repository()], NOW, WINDOW, concurrency=0)

    @pytest.mark.asyncio
    async def test_no_repositories(self):
        result = await crawl_repositories(FakeGitHub(), [], NOW, WINDOW)

        assert result.commits == []
        assert result.errors == []
        assert result.results == []

    @pytest.mark.asyncio
    async def test_on_result_called_per_repository(self):
        repos = [make_repository(f"r{i}") for i in range(3)]
        github = FakeGitHub(pages={repos[0].api_url: server_error()})
        seen: list[WalkResult] = []

        await crawl_repositories(github, repos, NOW, WINDOW, on_result=seen.append)

        assert sorted(r.repository.full_name for r in seen) == [
            "test-org/r0",
            "test-org/r1",
            "test-org/r2",
        ]
        assert sum(1 for r in seen if not r.ok) == 1

    @pytest.mark.asyncio
    async def test_on_page_called_per_fetched_page(self):
        repos = [make_repository("r0"), make_repository("r1")]
        github = FakeGitHub(
            pages={repos[0].api_url: [[make_commit(1)]], repos[1].api_url: [[make_commit(30)]]}
        )
        seen: list[tuple[str, int]] = []

        await crawl_repositories(
            github,
            repos,
            NOW,
            WINDOW,
            on_page=lambda repo, page: seen.append((repo.full_name, page)),
        )

        assert sorted(seen) == [("test-org/r0", 1), ("test-org/r0", 2), ("test-org/r1", 1)]
