# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
osscontrib CLI - Main entry point

Usage:
    osscontrib show <username>      - Show open-source contributions (alias: s)
    osscontrib share <username>     - Print share text and links
    osscontrib config               - Show/set CLI configuration
"""

import click
from dotenv import load_dotenv

from osscontrib import __version__
from osscontrib.cli.config_commands import register_config_commands
from osscontrib.cli.contribution_commands import register_contribution_commands


class AliasGroup(click.Group):
    """Click Group that supports command aliases without duplicate help entries."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._aliases = {}  # alias -> canonical name

    def add_alias(self, name, alias):
        """Register an alias for an existing command."""
        self._aliases[alias] = name

    def get_command(self, ctx, cmd_name):
        # Resolve alias to canonical name
        canonical = self._aliases.get(cmd_name, cmd_name)
        return super().get_command(ctx, canonical)

    def format_commands(self, ctx, formatter):
        """Write the help text, appending aliases to command descriptions."""
        # Build reverse map: canonical -> list of aliases
        alias_map = {}
        for alias, canonical in self._aliases.items():
            alias_map.setdefault(canonical, []).append(alias)

        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.commands.get(subcommand)
            if cmd is None or cmd.hidden:
                continue
            help_text = cmd.get_short_help_str(limit=150)
            aliases = alias_map.get(subcommand)
            if aliases:
                alias_str = ', '.join(sorted(aliases))
                subcommand = f'{subcommand}, {alias_str}'
            commands.append((subcommand, help_text))

        if commands:
            with formatter.section('Commands'):
                formatter.write_dl(commands)


@click.group(cls=AliasGroup)
@click.version_option(version=__version__, prog_name='osscontrib')
def cli():
    """osscontrib - Browse a GitHub user's open-source pull requests"""
    pass


register_contribution_commands(cli)
register_config_commands(cli)


def main():
    """Main entry point for the CLI"""
    load_dotenv()
    cli()


if __name__ == '__main__':
    main()
