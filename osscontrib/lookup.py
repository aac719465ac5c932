# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Lookup session: the single authoritative state behind a contributions view.

    Idle -> Loading -> Loaded(profile, sort, filter)
                    -> LookupFailed(error)

Every lookup bumps a generation counter. A fetch that completes after a newer
lookup has started is discarded, so a slow response for an old username can
never overwrite the current one. Sort and filter changes re-aggregate the
loaded profile without fetching again.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Union

import bittensor as bt

from osscontrib.aggregation import aggregate, exclude_self_contributions
from osscontrib.classes import (
    FetchError,
    LookupResult,
    RepositoryGroup,
    SortKey,
    StateFilter,
    UserProfile,
)
from osscontrib.constants import LOOKUP_FAILED_HINT, LOOKUP_FAILED_TITLE
from osscontrib.utils.github_api_tools import ContributionFetcher


@dataclass(frozen=True)
class Idle:
    """No lookup has been requested yet"""


@dataclass(frozen=True)
class Loading:
    username: str
    generation: int


@dataclass(frozen=True)
class LookupFailed:
    """Not-found and transport failures share one user-facing message."""

    username: str
    error: FetchError

    @property
    def title(self) -> str:
        return LOOKUP_FAILED_TITLE

    @property
    def hint(self) -> str:
        return LOOKUP_FAILED_HINT


@dataclass(frozen=True)
class Loaded:
    profile: UserProfile
    sort: SortKey = SortKey.BY_STARS_DESC
    state_filter: StateFilter = StateFilter.ALL

    @property
    def groups(self) -> List[RepositoryGroup]:
        return aggregate(self.profile, self.sort, self.state_filter)

    @property
    def empty_contributions(self) -> bool:
        """Valid user with nothing contributed to other people's repositories."""
        return not exclude_self_contributions(self.profile.pull_requests, self.profile.login)


LookupState = Union[Idle, Loading, LookupFailed, Loaded]


class ContributionLookup:
    """Drives lookups for one view and holds its current state."""

    def __init__(
        self,
        fetcher: ContributionFetcher,
        sort: SortKey = SortKey.BY_STARS_DESC,
        state_filter: StateFilter = StateFilter.ALL,
    ):
        self._fetcher = fetcher
        self._sort = sort
        self._state_filter = state_filter
        self._generation = 0
        self._state: LookupState = Idle()

    @property
    def state(self) -> LookupState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def sort(self) -> SortKey:
        return self._sort

    @property
    def state_filter(self) -> StateFilter:
        return self._state_filter

    def begin(self, username: str) -> int:
        """Enter Loading for ``username`` and return the new generation id."""
        self._generation += 1
        self._state = Loading(username=username, generation=self._generation)
        return self._generation

    def complete(self, generation: int, result: LookupResult) -> LookupState:
        """Apply a finished fetch unless a newer lookup has superseded it."""
        if generation != self._generation:
            bt.logging.debug(
                f"Discarding superseded lookup for '{result.username}' "
                f"(generation {generation}, current {self._generation})"
            )
            return self._state

        if result.ok:
            self._state = Loaded(profile=result.profile, sort=self._sort, state_filter=self._state_filter)
        else:
            if result.not_found:
                bt.logging.info(f"No GitHub user '{result.username}'")
            else:
                bt.logging.warning(f"Lookup for '{result.username}' failed: {result.error.reason}")
            self._state = LookupFailed(username=result.username, error=result.error)
        return self._state

    async def lookup(self, username: str) -> LookupState:
        """Fetch ``username`` and return the state current once it resolves."""
        generation = self.begin(username)
        result = await self._fetcher.fetch_async(username)
        return self.complete(generation, result)

    def set_sort(self, sort: SortKey) -> LookupState:
        self._sort = sort
        if isinstance(self._state, Loaded):
            self._state = replace(self._state, sort=sort)
        return self._state

    def set_state_filter(self, state_filter: StateFilter) -> LookupState:
        self._state_filter = state_filter
        if isinstance(self._state, Loaded):
            self._state = replace(self._state, state_filter=state_filter)
        return self._state

    @property
    def profile(self) -> Optional[UserProfile]:
        if isinstance(self._state, Loaded):
            return self._state.profile
        return None
