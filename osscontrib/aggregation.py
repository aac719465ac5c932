# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Turns a flat list of pull requests into the grouped view shown to users.

Pipeline: drop self-owned PRs -> group by repository -> order groups ->
filter PRs by state -> drop empty groups. Every function here is pure.
"""

from typing import Callable, Dict, List

from osscontrib.classes import (
    PullRequest,
    RepositoryGroup,
    SortKey,
    StateFilter,
    UserProfile,
)


def exclude_self_contributions(pull_requests: List[PullRequest], login: str) -> List[PullRequest]:
    """Drop pull requests opened against repositories owned by ``login``."""
    return [pr for pr in pull_requests if not pr.is_owned_by(login)]


def group_by_repository(pull_requests: List[PullRequest]) -> List[RepositoryGroup]:
    """Partition pull requests by repository, keeping first-seen order.

    Groups appear in the order their first pull request appears, and pull
    requests keep their relative order inside each group.
    """
    groups: Dict[str, RepositoryGroup] = {}
    for pr in pull_requests:
        key = pr.repository.full_name
        group = groups.get(key)
        if group is None:
            group = RepositoryGroup(
                key=key,
                avatar_url=pr.repository.owner_avatar_url,
                star_count=pr.repository.star_count,
                created_at=pr.created_at,
            )
            groups[key] = group
        group.pull_requests.append(pr)
    return list(groups.values())


_SORT_FIELDS: Dict[SortKey, Callable[[RepositoryGroup], object]] = {
    SortKey.BY_STARS_DESC: lambda group: group.star_count,
    SortKey.BY_CREATED_DESC: lambda group: group.created_at,
    SortKey.BY_CREATED_ASC: lambda group: group.created_at,
}


def sort_groups(groups: List[RepositoryGroup], sort: SortKey) -> List[RepositoryGroup]:
    """Order groups by their first pull request, ties broken by repository name."""
    ordered = sorted(groups, key=lambda group: group.key)
    descending = sort in (SortKey.BY_STARS_DESC, SortKey.BY_CREATED_DESC)
    # sorted() is stable with reverse=True, so the name order survives ties
    return sorted(ordered, key=_SORT_FIELDS[sort], reverse=descending)


def filter_groups(groups: List[RepositoryGroup], state_filter: StateFilter) -> List[RepositoryGroup]:
    """Apply the state filter inside each group and drop groups left empty.

    Returns new group objects; header fields are carried over unchanged.
    """
    filtered = []
    for group in groups:
        prs = [pr for pr in group.pull_requests if state_filter.matches(pr.state)]
        if not prs:
            continue
        filtered.append(
            RepositoryGroup(
                key=group.key,
                avatar_url=group.avatar_url,
                star_count=group.star_count,
                created_at=group.created_at,
                pull_requests=prs,
            )
        )
    return filtered


def aggregate(
    profile: UserProfile,
    sort: SortKey = SortKey.BY_STARS_DESC,
    state_filter: StateFilter = StateFilter.ALL,
) -> List[RepositoryGroup]:
    """Build the ordered, filtered repository groups for ``profile``.

    An empty result means the user has no contributions to other people's
    repositories matching ``state_filter``.
    """
    contributions = exclude_self_contributions(profile.pull_requests, profile.login)
    groups = sort_groups(group_by_repository(contributions), sort)
    return filter_groups(groups, state_filter)


def count_pull_requests(groups: List[RepositoryGroup]) -> int:
    return sum(len(group) for group in groups)
