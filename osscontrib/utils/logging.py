from typing import TYPE_CHECKING, List

import bittensor as bt

if TYPE_CHECKING:
    from osscontrib.classes import RepositoryGroup, UserProfile


def log_contribution_groups(profile: 'UserProfile', groups: List['RepositoryGroup']) -> None:
    """Log the aggregated view for debugging."""
    total_prs = sum(len(group) for group in groups)
    bt.logging.info(
        f"@{profile.login}: {profile.total_contributions} pull requests returned, "
        f"{total_prs} shown across {len(groups)} repositories"
    )

    if not groups:
        return

    max_name_len = max(len(group.key) for group in groups)
    for group in groups:
        states = {}
        for pr in group.pull_requests:
            states[pr.state.value] = states.get(pr.state.value, 0) + 1
        state_str = ', '.join(f'{state.lower()}: {count}' for state, count in sorted(states.items()))
        bt.logging.debug(f'  ├─ {group.key:<{max_name_len}}  {group.star_count:>7} stars  {state_str}')
