# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Contribution lookup commands.

Commands:
    osscontrib show <username>     Show a user's open-source pull requests
    osscontrib share <username>    Print share text and share links
"""

import asyncio
import json
import sys

import bittensor as bt
import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from osscontrib.classes import SortKey, StateFilter, UserProfile
from osscontrib.cli.tables import DEFAULT_TABLE_THEME, TABLE_THEMES, build_group_table
from osscontrib.config import load_config
from osscontrib.constants import NO_CONTRIBUTIONS_MESSAGE
from osscontrib.lookup import ContributionLookup, Loaded, LookupFailed
from osscontrib.share import ShareLinks, build_share_links
from osscontrib.utils.github_api_tools import ContributionFetcher
from osscontrib.utils.logging import log_contribution_groups

console = Console()

SORT_CHOICES = [key.value for key in SortKey]
STATE_CHOICES = [state.value for state in StateFilter]


def print_error(message: str) -> None:
    """Print a standardized error message."""
    console.print(f'\n  [red]✗[/red] {message}\n')


def print_lookup_failure(state: LookupFailed) -> None:
    """Both not-found and transport failures look the same to the user."""
    console.print(f'\n[bold red]{state.title}[/bold red]')
    console.print(f'{state.hint}\n')
    bt.logging.debug(f'Lookup failure detail: {state.error!r}')


def print_profile_header(profile: UserProfile, links: ShareLinks) -> None:
    lines = []
    if profile.name:
        lines.append(f'[bold]{escape(profile.name)}[/bold]')
    lines.append(f'[cyan]@{profile.login}[/cyan]  [dim]{links.profile_url}[/dim]')
    lines.append(f'[dim]Avatar: {profile.avatar_url}[/dim]')
    console.print(Panel('\n'.join(lines), title='My Open-Source Contribution on GitHub', expand=False))


def print_share_links(links: ShareLinks) -> None:
    console.print(f'[bold]Share on X:[/bold] [blue]{links.x_url}[/blue]')
    console.print(f'[bold]Share on LinkedIn:[/bold] [blue]{links.linkedin_url}[/blue]')
    console.print(f'[bold]Support Us:[/bold] [blue]{links.support_url}[/blue]\n')


def run_lookup(username: str, sort: SortKey, state_filter: StateFilter):
    """Perform one lookup with the configured fetcher and return the final state."""
    config = load_config()
    fetcher = ContributionFetcher(config.github_token, api_url=config.api_url, timeout=config.timeout)
    lookup = ContributionLookup(fetcher, sort=sort, state_filter=state_filter)
    return asyncio.run(lookup.lookup(username)), config


@click.command('show')
@click.argument('username')
@click.option(
    '--sort',
    'sort_option',
    type=click.Choice(SORT_CHOICES),
    default=SortKey.BY_STARS_DESC.value,
    show_default=True,
    help='Order repositories by star count, latest PR or oldest PR',
)
@click.option(
    '--state',
    'state_option',
    type=click.Choice(STATE_CHOICES),
    default=StateFilter.ALL.value,
    show_default=True,
    help='Only show pull requests in this state',
)
@click.option(
    '--theme',
    type=click.Choice(list(TABLE_THEMES)),
    default=DEFAULT_TABLE_THEME,
    show_default=True,
    help='Table style',
)
@click.option('--json', 'as_json', is_flag=True, help='Print the repository groups as JSON')
def show(username: str, sort_option: str, state_option: str, theme: str, as_json: bool):
    """
    Show a user's pull requests to other people's repositories.

    \b
    Example:
        osscontrib show octocat
        osscontrib show octocat --sort latest --state merged
    """
    if not username.strip():
        raise click.BadParameter('Username cannot be empty', param_hint='USERNAME')

    sort = SortKey.from_option(sort_option)
    state_filter = StateFilter.from_option(state_option)
    state, config = run_lookup(username.strip(), sort, state_filter)

    if isinstance(state, LookupFailed):
        if as_json:
            click.echo(json.dumps({'error': state.title, 'username': state.username}))
        else:
            print_lookup_failure(state)
        sys.exit(1)

    if not isinstance(state, Loaded):
        print_error(f'Lookup for {username} did not complete')
        sys.exit(1)

    profile = state.profile
    groups = state.groups
    log_contribution_groups(profile, groups)

    if as_json:
        payload = {
            'login': profile.login,
            'name': profile.name,
            'avatar_url': profile.avatar_url,
            'html_url': profile.html_url,
            'total_contributions': profile.total_contributions,
            'sort': sort.value,
            'state': state_filter.value,
            'empty_contributions': state.empty_contributions,
            'repositories': [group.to_dict() for group in groups],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    links = build_share_links(profile.login, profile.total_contributions, config.base_url)
    print_profile_header(profile, links)
    print_share_links(links)

    if state.empty_contributions:
        console.print(f'[yellow]{NO_CONTRIBUTIONS_MESSAGE}[/yellow]')
        return

    if not groups:
        console.print(f'[yellow]No {state_filter.value} pull requests found.[/yellow]')
        return

    console.print(f'[dim]Sort: {sort.value} • State: {state_filter.value}[/dim]\n')
    for group in groups:
        console.print(build_group_table(group, theme=theme))
        console.print()


@click.command('share')
@click.argument('username')
def share(username: str):
    """
    Print the share message and share links for a user.

    \b
    Example:
        osscontrib share octocat
    """
    if not username.strip():
        raise click.BadParameter('Username cannot be empty', param_hint='USERNAME')

    state, config = run_lookup(username.strip(), SortKey.BY_STARS_DESC, StateFilter.ALL)

    if not isinstance(state, Loaded):
        if isinstance(state, LookupFailed):
            print_lookup_failure(state)
        sys.exit(1)

    links = build_share_links(state.profile.login, state.profile.total_contributions, config.base_url)
    console.print(Panel(escape(links.text), title='Share text', expand=False))
    print_share_links(links)


def register_contribution_commands(cli):
    """Register lookup commands with the root CLI group."""
    cli.add_command(show)
    cli.add_alias('show', 's')
    cli.add_command(share)
