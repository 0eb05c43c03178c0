"""Log command - show stored commits."""

import click
from dotgit.core.repository import Repository
from dotgit.core.exceptions import DotgitError
from dotgit.cli.output import error, warning, format_size
from colorama import Fore, Style


def format_commit(commit):
    """Render one commit as log lines."""
    lines = [
        f"{Fore.YELLOW}commit {commit.id}{Style.RESET_ALL}",
        f"Date:   {commit.timestamp}",
        "",
    ]
    for line in commit.message.split('\n'):
        lines.append(f"    {line}")
    lines.append("")
    for entry in commit.files:
        lines.append(f"    {entry.path} ({format_size(entry.size)})")
    return lines


@click.command('log')
@click.option('--chronological', is_flag=True,
              help='Sort newest first by commit time instead of storage order')
def log_cmd(chronological):
    """
    Show all stored commits.

    Lists each commit's id, timestamp, message and files with their
    sizes. By default commits appear in the order the object directory
    lists them, which is not necessarily the order they were made.

    Examples:
        dotgit log
        dotgit log --chronological
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a dotgit repository"))
        return

    def report_skipped(object_id, e):
        click.echo(warning(f"Skipping {object_id}: {e}"))

    try:
        commits = repo.objects.log(chronological=chronological, on_error=report_skipped)
    except DotgitError as e:
        click.echo(error(str(e)))
        return

    if not commits:
        click.echo(warning("No commits yet"))
        return

    for i, commit in enumerate(commits):
        if i:
            click.echo()
        for line in format_commit(commit):
            click.echo(line)
