"""Main CLI entry point for dotgit."""

import logging

import click
from colorama import init

from dotgit import __version__
from dotgit.cli.output import BANNER
from dotgit.cli.commands import (init_cmd, ignore_cmd, add_cmd, commit_cmd,
                                 log_cmd, branch_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class DotgitGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=DotgitGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """A minimal snapshot-based version control system."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(levelname)s %(name)s: %(message)s',
        )


# Register commands
cli.add_command(init_cmd)
cli.add_command(ignore_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(log_cmd)
cli.add_command(branch_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
