"""Commit command - record staged files as a commit object."""

import click
from dotgit.core.repository import Repository
from dotgit.core.exceptions import DotgitError, NothingToCommitError
from dotgit.cli.output import success, error, info, warning


@click.command('commit')
@click.option('-m', '--message', help='Commit message')
def commit_cmd(message):
    """
    Record staged files in a new commit.

    Snapshots every staged file into an immutable commit object, then
    empties the staging area.

    Examples:
        dotgit commit -m "Initial commit"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a dotgit repository"))
        return

    if not message or not message.strip():
        click.echo(error("Commit message required. Use -m \"message\""))
        return

    try:
        with repo.lock():
            staging = repo.staging()
            file_count = len(staging)

            commit_id = repo.objects.commit(staging, message)

            # The object is durable now; a failure below leaves a stale stage
            try:
                staging.clear()
            except DotgitError as e:
                click.echo(success(f"Created commit {commit_id[:7]}"))
                click.echo(warning(f"Could not clear staging area: {e}"))
                return
    except NothingToCommitError:
        click.echo(error("Nothing to commit (staging area is empty)"))
        click.echo(info("Use 'dotgit add <file>' to stage changes"))
        return
    except (DotgitError, ValueError) as e:
        click.echo(error(f"Failed to create commit: {e}"))
        return

    click.echo(success(f"Created commit {commit_id[:7]}"))
    click.echo(info(f"Message: {message}"))
    click.echo(info(f"Files: {file_count}"))
