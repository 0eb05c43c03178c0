"""Ignore command - show effective ignore rules."""

import click
from pathlib import Path
from dotgit.core.repository import Repository
from dotgit.core.config import get_config
from dotgit.utils.ignore import get_ignore_matcher
from dotgit.cli.output import info


@click.command('ignore')
def ignore_cmd():
    """
    Show current ignore rules.

    Prints the built-in defaults followed by rules from .dotgitignore.
    Works outside a repository too, using the current directory.
    """
    repo = Repository.find_repository()
    root = repo.work_tree if repo else Path.cwd()
    ignorecase = get_config(repo).get_bool('core', 'ignorecase')

    matcher = get_ignore_matcher(root, ignorecase=ignorecase)

    click.echo(info("Current ignore rules:"))
    for rule in matcher.rules:
        click.echo(f"- {rule}")
