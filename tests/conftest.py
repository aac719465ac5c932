# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Shared pytest fixtures.

Usage:
    def test_something(pr_factory, profile_factory):
        pr = pr_factory(repo='torvalds/linux', stars=500, state=PRState.MERGED)
        profile = profile_factory(login='alice', pull_requests=[pr])
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from osscontrib.classes import PRState, PullRequest, Repository, UserProfile

BASE_TIME = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class PRBuilder:
    """Builds PullRequests with sensible defaults and unique URLs."""

    def __init__(self):
        self._counter = 0

    def __call__(
        self,
        repo: str = 'octo-org/project',
        stars: int = 100,
        state: PRState = PRState.MERGED,
        created_at: Optional[datetime] = None,
        title: Optional[str] = None,
        days_ago: Optional[int] = None,
    ) -> PullRequest:
        self._counter += 1
        if created_at is None:
            created_at = BASE_TIME - timedelta(days=days_ago if days_ago is not None else self._counter)
        owner = repo.split('/', 1)[0]
        return PullRequest(
            title=title or f'Change #{self._counter}',
            url=f'https://github.com/{repo}/pull/{self._counter}',
            state=state,
            created_at=created_at,
            repository=Repository(
                full_name=repo,
                star_count=stars,
                owner_avatar_url=f'https://avatars.example.com/{owner}',
            ),
        )


@pytest.fixture
def pr_factory() -> PRBuilder:
    return PRBuilder()


@pytest.fixture
def profile_factory():
    def _make(login: str = 'alice', pull_requests: Optional[List[PullRequest]] = None, name: str = 'Alice') -> UserProfile:
        return UserProfile(
            login=login,
            avatar_url=f'https://avatars.example.com/{login}',
            name=name,
            pull_requests=list(pull_requests or []),
        )

    return _make


def graphql_pr_node(
    repo: str = 'octo-org/project',
    stars: int = 100,
    state: str = 'MERGED',
    created_at: str = '2024-05-01T10:00:00Z',
    number: int = 1,
) -> Dict[str, Any]:
    owner = repo.split('/', 1)[0]
    return {
        'title': f'PR {number} to {repo}',
        'url': f'https://github.com/{repo}/pull/{number}',
        'state': state,
        'createdAt': created_at,
        'repository': {
            'nameWithOwner': repo,
            'stargazerCount': stars,
            'owner': {'avatarUrl': f'https://avatars.example.com/{owner}'},
        },
    }


def graphql_user_payload(login: str = 'alice', nodes: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return {
        'data': {
            'user': {
                'name': login.title(),
                'login': login,
                'avatarUrl': f'https://avatars.example.com/{login}',
                'pullRequests': {'nodes': list(nodes or [])},
            }
        }
    }


@pytest.fixture
def user_payload():
    """GraphQL response body for 'alice' with three pull requests in two repositories."""
    return graphql_user_payload(
        'alice',
        [
            graphql_pr_node('big/repo', 500, 'OPEN', '2024-05-03T10:00:00Z', 3),
            graphql_pr_node('small/repo', 10, 'MERGED', '2024-05-02T10:00:00Z', 2),
            graphql_pr_node('big/repo', 500, 'MERGED', '2024-05-01T10:00:00Z', 1),
        ],
    )


@pytest.fixture
def pr_node():
    return graphql_pr_node


@pytest.fixture
def payload_factory():
    return graphql_user_payload
