# The MIT License (MIT)
# Copyright © 2025 Entrius

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

GITHUB_DOMAIN = 'https://github.com/'


def parse_github_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp ('2024-05-01T10:00:00Z') into an aware UTC datetime."""
    return datetime.fromisoformat(value.rstrip("Z")).replace(tzinfo=timezone.utc)


class PRState(Enum):
    """Pull request state as reported by GitHub"""

    OPEN = "OPEN"
    MERGED = "MERGED"
    CLOSED = "CLOSED"


class SortKey(Enum):
    """Ordering applied to repository groups"""

    BY_STARS_DESC = "stars"
    BY_CREATED_DESC = "latest"
    BY_CREATED_ASC = "oldest"

    @classmethod
    def from_option(cls, value: str) -> 'SortKey':
        """Parse a CLI/UI option value ('stars', 'latest', 'oldest')."""
        return cls(value.strip().lower())


class StateFilter(Enum):
    """State filter applied to the pull requests inside each group"""

    ALL = "all"
    OPEN = "open"
    MERGED = "merged"
    CLOSED = "closed"

    @classmethod
    def from_option(cls, value: str) -> 'StateFilter':
        return cls(value.strip().lower())

    def matches(self, state: PRState) -> bool:
        if self is StateFilter.ALL:
            return True
        return state.value.lower() == self.value


@dataclass
class Repository:
    """Repository a pull request was opened against"""

    full_name: str
    star_count: int
    owner_avatar_url: str

    @property
    def owner(self) -> str:
        return self.full_name.split("/", 1)[0]

    @property
    def html_url(self) -> str:
        return f"{GITHUB_DOMAIN}{self.full_name}"

    @classmethod
    def from_graphql(cls, repo_raw: Dict[str, Any]) -> 'Repository':
        return cls(
            full_name=repo_raw['nameWithOwner'],
            star_count=int(repo_raw['stargazerCount']),
            owner_avatar_url=repo_raw['owner']['avatarUrl'],
        )


@dataclass
class PullRequest:
    """A single pull request contribution"""

    title: str
    url: str
    state: PRState
    created_at: datetime
    repository: Repository

    def is_owned_by(self, login: str) -> bool:
        """True if the pull request targets a repository owned by ``login``."""
        return self.repository.owner == login

    @classmethod
    def from_graphql(cls, pr_raw: Dict[str, Any]) -> 'PullRequest':
        """Create a PullRequest from a GraphQL ``pullRequests.nodes`` entry"""
        return cls(
            title=pr_raw['title'],
            url=pr_raw['url'],
            state=PRState(pr_raw['state'].upper()),
            created_at=parse_github_timestamp(pr_raw['createdAt']),
            repository=Repository.from_graphql(pr_raw['repository']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'url': self.url,
            'state': self.state.value,
            'created_at': self.created_at.isoformat(),
            'repository': self.repository.full_name,
            'repository_url': self.repository.html_url,
            'star_count': self.repository.star_count,
        }


@dataclass
class UserProfile:
    """A GitHub user and their most recent pull requests (newest first)"""

    login: str
    avatar_url: str
    name: Optional[str] = None
    pull_requests: List[PullRequest] = field(default_factory=list)

    @property
    def total_contributions(self) -> int:
        """Number of pull requests returned upstream, own repositories included."""
        return len(self.pull_requests)

    @property
    def html_url(self) -> str:
        return f"{GITHUB_DOMAIN}{self.login}"

    @classmethod
    def from_graphql(cls, user_raw: Dict[str, Any]) -> 'UserProfile':
        """Create a UserProfile from the GraphQL ``user`` object"""
        nodes = (user_raw.get('pullRequests') or {}).get('nodes') or []
        return cls(
            login=user_raw['login'],
            avatar_url=user_raw['avatarUrl'],
            name=user_raw.get('name'),
            pull_requests=[PullRequest.from_graphql(pr_raw) for pr_raw in nodes if pr_raw],
        )


@dataclass
class RepositoryGroup:
    """Pull requests of one repository, as shown under a single header.

    ``avatar_url``, ``star_count`` and ``created_at`` come from the first pull
    request of the group in upstream order, before any state filter is applied.
    """

    key: str
    avatar_url: str
    star_count: int
    created_at: datetime
    pull_requests: List[PullRequest] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pull_requests)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'repository': self.key,
            'avatar_url': self.avatar_url,
            'star_count': self.star_count,
            'pull_requests': [pr.to_dict() for pr in self.pull_requests],
        }


class FetchError(Exception):
    """Base class for a failed contribution lookup"""

    def __init__(self, username: str, reason: str = ''):
        self.username = username
        self.reason = reason
        super().__init__(f"Lookup for '{username}' failed: {reason}" if reason else f"Lookup for '{username}' failed")


class LookupNotFound(FetchError):
    """GitHub has no user with this login, or returned no user object"""


class LookupTransportFailure(FetchError):
    """Network error, non-200 response, or a response that could not be parsed"""

    def __init__(self, username: str, reason: str = '', status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(username, reason)


@dataclass
class LookupResult:
    """Outcome of a single fetch: exactly one of ``profile`` / ``error`` is set."""

    username: str
    profile: Optional[UserProfile] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.profile is not None

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, LookupNotFound)
