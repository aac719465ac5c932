# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Reusable Rich table presets."""

from dataclasses import dataclass

from rich import box
from rich.markup import escape
from rich.table import Table

from osscontrib.classes import PRState, RepositoryGroup
from osscontrib.share import format_number


@dataclass(frozen=True)
class TableTheme:
    box_style: box.Box
    header_style: str
    border_style: str
    show_lines: bool
    pad_edge: bool


TABLE_THEMES = {
    # Full wrapped grid
    'square': TableTheme(
        box_style=box.SQUARE,
        header_style='bold magenta',
        border_style='grey35',
        show_lines=True,
        pad_edge=True,
    ),

    # Minimal separators with a heavier header rule
    'minimal': TableTheme(
        box_style=box.MINIMAL_HEAVY_HEAD,
        header_style='bold white',
        border_style='grey50',
        show_lines=False,
        pad_edge=False,
    ),
}

DEFAULT_TABLE_THEME = 'minimal'

STATE_COLORS = {
    PRState.OPEN: 'green',
    PRState.MERGED: 'magenta',
    PRState.CLOSED: 'red',
}

# dd/mm/yyyy, as the web tool shows dates
DATE_FORMAT = '%d/%m/%Y'


def build_table(theme: str = DEFAULT_TABLE_THEME, **kwargs) -> Table:
    """Create a Rich table using a named visual theme."""
    preset = TABLE_THEMES.get(theme, TABLE_THEMES[DEFAULT_TABLE_THEME])
    params = {
        'box': preset.box_style,
        'header_style': preset.header_style,
        'border_style': preset.border_style,
        'show_lines': preset.show_lines,
        'pad_edge': preset.pad_edge,
    }
    params.update(kwargs)
    return Table(**params)


def colorize_state(state: PRState) -> str:
    """Wrap the state with its Rich color tag."""
    color = STATE_COLORS.get(state, 'white')
    return f'[{color}]{state.value}[/{color}]'


def group_title(group: RepositoryGroup) -> str:
    return f'{group.key} \U0001F31F {format_number(group.star_count)}'


def build_group_table(group: RepositoryGroup, theme: str = DEFAULT_TABLE_THEME) -> Table:
    """Build a Rich table for one repository's pull requests."""
    table = build_table(theme=theme, title=group_title(group), title_style='bold cyan', show_header=True)
    table.add_column('Title', style='green', max_width=60)
    table.add_column('State', justify='center')
    table.add_column('Created', style='yellow')
    table.add_column('URL', style='blue', max_width=70)

    for pr in group.pull_requests:
        table.add_row(
            escape(pr.title or 'Untitled'),
            colorize_state(pr.state),
            pr.created_at.strftime(DATE_FORMAT),
            pr.url,
        )

    return table
