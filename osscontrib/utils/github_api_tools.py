# Entrius 2025
import asyncio
import time
from dataclasses import dataclass
from typing import Dict, Optional

import bittensor as bt
import requests

from osscontrib.classes import (
    FetchError,
    LookupNotFound,
    LookupResult,
    LookupTransportFailure,
    UserProfile,
)
from osscontrib.constants import (
    BASE_GITHUB_API_URL,
    DEFAULT_REQUEST_TIMEOUT,
    GITHUB_GRAPHQL_PATH,
    MAX_PULL_REQUESTS,
    RATE_LIMIT_MIN_REMAINING,
)
from osscontrib.utils.utils import mask_secret


@dataclass
class RateLimitInfo:
    """Represents GitHub API rate limit information extracted from response headers."""

    limit: int  # Maximum requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_timestamp: int  # Unix timestamp when the rate limit resets
    used: int  # Requests used in current window

    @property
    def is_exceeded(self) -> bool:
        """Check if rate limit has been exceeded."""
        return self.remaining == 0

    @property
    def seconds_until_reset(self) -> int:
        """Calculate seconds until rate limit resets."""
        current_time = int(time.time())
        return max(0, self.reset_timestamp - current_time)

    def __str__(self) -> str:
        return (
            f"RateLimit(remaining={self.remaining}/{self.limit}, used={self.used}, "
            f"resets_in={self.seconds_until_reset}s)"
        )


def parse_rate_limit_headers(response: requests.Response) -> Optional[RateLimitInfo]:
    """
    Parse GitHub API rate limit information from response headers.

    Args:
        response: The HTTP response from GitHub API

    Returns:
        RateLimitInfo object if headers are present, None otherwise
    """
    headers = response.headers

    try:
        limit = int(headers.get('X-RateLimit-Limit', 0))
        remaining = int(headers.get('X-RateLimit-Remaining', 0))
        reset_timestamp = int(headers.get('X-RateLimit-Reset', 0))
        used = int(headers.get('X-RateLimit-Used', 0))

        if limit == 0 and reset_timestamp == 0:
            return None

        return RateLimitInfo(limit=limit, remaining=remaining, reset_timestamp=reset_timestamp, used=used)
    except (ValueError, TypeError) as e:
        bt.logging.debug(f"Could not parse rate limit headers: {e}")
        return None


def check_preemptive_rate_limit(response: requests.Response) -> None:
    """
    Log a warning when the GitHub API rate limit is close to exhausted.
    Lookups never wait or retry, this is for monitoring only.

    Args:
        response: The HTTP response from GitHub API
    """
    rate_limit_info = parse_rate_limit_headers(response)

    if rate_limit_info:
        bt.logging.debug(f"GitHub API {rate_limit_info}")
        if rate_limit_info.is_exceeded:
            bt.logging.warning(
                f"GitHub API rate limit exhausted after {rate_limit_info.used} requests, "
                f"resets in {rate_limit_info.seconds_until_reset}s"
            )
        elif rate_limit_info.remaining <= RATE_LIMIT_MIN_REMAINING:
            bt.logging.warning(
                f"Approaching GitHub API rate limit: {rate_limit_info.remaining} requests remaining, "
                f"resets in {rate_limit_info.seconds_until_reset}s"
            )


# core github graphql query
QUERY = """
    query($username: String!, $limit: Int!) {
      user(login: $username) {
        name
        login
        avatarUrl
        pullRequests(first: $limit, orderBy: {field: CREATED_AT, direction: DESC}) {
          nodes {
            title
            url
            state
            createdAt
            repository {
              nameWithOwner
              stargazerCount
              owner {
                avatarUrl
              }
            }
          }
        }
      }
    }
    """


def make_graphql_headers(token: Optional[str]) -> Dict[str, str]:
    """Build GitHub GraphQL HTTP headers.

    Args:
        token (Optional[str]): GitHub PAT, omitted from the headers when empty
    Returns:
        Dict[str, str]: Mapping of HTTP header names to values.
    """
    headers = {'Content-Type': 'application/json'}
    if token:
        headers['Authorization'] = f'Bearer {token}'
    return headers


def _is_not_found_error(errors: list) -> bool:
    return any(isinstance(error, dict) and error.get('type') == 'NOT_FOUND' for error in errors)


class ContributionFetcher:
    """Looks up a GitHub user's profile and most recent pull requests.

    The token, endpoint and timeout are fixed at construction. Every call to
    ``fetch`` makes exactly one GraphQL request: no retries, no caching.
    """

    def __init__(
        self,
        token: Optional[str],
        api_url: str = BASE_GITHUB_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self._token = token
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout

    def __repr__(self) -> str:
        token = mask_secret(self._token) if self._token else None
        return f"ContributionFetcher(api_url={self.api_url!r}, timeout={self.timeout}, token={token})"

    @property
    def graphql_url(self) -> str:
        return f"{self.api_url}{GITHUB_GRAPHQL_PATH}"

    def query_user(self, username: str) -> UserProfile:
        """
        Fetch a user's profile and first page of pull requests.

        Args:
            username (str): GitHub login to look up

        Returns:
            UserProfile: Normalized profile with up to MAX_PULL_REQUESTS pull requests

        Raises:
            LookupNotFound: GitHub has no such user
            LookupTransportFailure: Network error, non-200 status or malformed response
        """
        variables = {"username": username, "limit": MAX_PULL_REQUESTS}

        try:
            response = requests.post(
                self.graphql_url,
                headers=make_graphql_headers(self._token),
                json={"query": QUERY, "variables": variables},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            bt.logging.error(f"GraphQL request for '{username}' failed: {e}")
            raise LookupTransportFailure(username, f"connection error: {e}") from e

        if response.status_code != 200:
            bt.logging.error(f"GraphQL request for '{username}' failed with status {response.status_code}")
            raise LookupTransportFailure(
                username, f"status {response.status_code}", status_code=response.status_code
            )

        check_preemptive_rate_limit(response)

        try:
            data = response.json()
        except ValueError as e:
            bt.logging.error(f"Failed to parse GraphQL response for '{username}': {e}")
            raise LookupTransportFailure(username, "malformed response", status_code=200) from e

        if not isinstance(data, dict):
            bt.logging.error(f"Unexpected GraphQL payload for '{username}': {type(data).__name__}")
            raise LookupTransportFailure(username, "malformed response", status_code=200)

        errors = data.get('errors') or []
        if errors:
            if _is_not_found_error(errors):
                bt.logging.warning(f"GitHub user '{username}' not found")
                raise LookupNotFound(username, "NOT_FOUND")
            bt.logging.error(f"GraphQL errors for '{username}': {errors}")
            raise LookupTransportFailure(username, f"GraphQL errors: {errors}", status_code=200)

        user_data = (data.get('data') or {}).get('user')
        if not user_data:
            bt.logging.warning(f"GitHub returned no user object for '{username}'")
            raise LookupNotFound(username, "no user returned")

        try:
            return UserProfile.from_graphql(user_data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            bt.logging.error(f"Malformed user data for '{username}': {e}")
            raise LookupTransportFailure(username, f"malformed user data: {e}", status_code=200) from e

    def fetch(self, username: str) -> LookupResult:
        """
        Look up ``username`` and wrap the outcome in a LookupResult.

        Args:
            username (str): GitHub login, must be non-empty

        Returns:
            LookupResult: profile on success, a FetchError otherwise
        """
        if not username or not username.strip():
            raise ValueError("username must be a non-empty string")

        bt.logging.info(f"Fetching contributions for '{username}'")
        if self._token:
            bt.logging.debug(f"Using GitHub token {mask_secret(self._token)}")
        else:
            bt.logging.warning("No GitHub token configured, GraphQL requests will be rejected")

        try:
            profile = self.query_user(username)
        except FetchError as e:
            return LookupResult(username=username, error=e)

        bt.logging.info(f"Fetched {profile.total_contributions} pull requests for '{profile.login}'")
        return LookupResult(username=username, profile=profile)

    async def fetch_async(self, username: str) -> LookupResult:
        """Run ``fetch`` in a worker thread so the event loop is not blocked."""
        return await asyncio.to_thread(self.fetch, username)


def fetch_user_contributions(username: str, token: Optional[str], **kwargs) -> LookupResult:
    """One-shot lookup with a throwaway fetcher."""
    return ContributionFetcher(token, **kwargs).fetch(username)
