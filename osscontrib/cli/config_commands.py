# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
CLI commands for managing osscontrib configuration.

Users can configure:
- GitHub token used for GraphQL lookups
- Public base URL used in share links
- GitHub API URL and request timeout
"""

import math

import click
from rich.console import Console

from osscontrib import config as config_module
from osscontrib.cli.tables import build_table
from osscontrib.config import CONFIG_KEYS, display_value, load_config_file, save_config_file

console = Console()


@click.group(name='config', invoke_without_command=True)
@click.pass_context
def config(ctx):
    """Manage CLI configuration.

    Values set here are used when the matching environment variable
    (GITHUB_TOKEN, OSSCONTRIB_BASE_URL, OSSCONTRIB_API_URL,
    OSSCONTRIB_TIMEOUT) is not set.

    \b
    Examples:
        osscontrib config                              # Show current config
        osscontrib config set base_url https://oss.example.com
        osscontrib config clear --force
    """
    # If no subcommand, show current config
    if ctx.invoked_subcommand is None:
        show_config()


def show_config():
    """Display current configuration."""
    values = load_config_file()

    if not values:
        console.print('\n[yellow]No configuration set.[/yellow]')
        console.print('[dim]Use "osscontrib config set <key> <value>" to set values.[/dim]')
        console.print(f'\n[dim]Available keys: {", ".join(CONFIG_KEYS)}[/dim]')
        return

    console.print('\n[bold cyan]osscontrib Configuration[/bold cyan]\n')

    table = build_table(theme='square', show_header=True)
    table.add_column('Setting', style='cyan')
    table.add_column('Value', style='green')

    for key, value in sorted(values.items()):
        table.add_row(key, display_value(key, value))

    console.print(table)
    console.print(f'\n[dim]Config file: {config_module.CONFIG_FILE}[/dim]')


@config.command('set')
@click.argument('key', type=click.Choice(CONFIG_KEYS))
@click.argument('value', type=str)
def config_set(key: str, value: str):
    """Set a configuration value.

    \b
    Examples:
        osscontrib config set base_url https://oss.example.com
        osscontrib config set timeout 10
    """
    if key == 'timeout':
        try:
            timeout = float(value)
            if not math.isfinite(timeout) or timeout <= 0:
                raise ValueError
        except ValueError:
            raise click.BadParameter(f'timeout must be a positive finite number (got {value})', param_hint='value')

    values = load_config_file()
    old_value = values.get(key)
    values[key] = value

    try:
        save_config_file(values)
    except IOError as e:
        console.print(f'[red]Failed to save config: {e}[/red]')
        raise SystemExit(1)

    if old_value is not None:
        console.print(
            f'[green]Updated {key}:[/green] {display_value(key, old_value)} → {display_value(key, value)}'
        )
    else:
        console.print(f'[green]Set {key}:[/green] {display_value(key, value)}')


@config.command('clear')
@click.option('--force', '-f', is_flag=True, help='Skip confirmation')
def config_clear(force: bool):
    """Clear all configuration.

    \b
    Example:
        osscontrib config clear
        osscontrib config clear --force
    """
    config_file = config_module.CONFIG_FILE
    if not config_file.exists():
        console.print('[yellow]No configuration to clear.[/yellow]')
        return

    if not force and not click.confirm('Clear all configuration?', default=False):
        console.print('[yellow]Cancelled.[/yellow]')
        return

    try:
        config_file.unlink()
        console.print('[green]Configuration cleared.[/green]')
    except IOError as e:
        console.print(f'[red]Failed to clear config: {e}[/red]')


def register_config_commands(cli):
    """Register config commands with a parent CLI group."""
    cli.add_command(config)
