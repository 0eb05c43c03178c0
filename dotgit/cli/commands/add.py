"""Add command - stage files for commit."""

import click
from pathlib import Path
from dotgit.core.repository import Repository, REPO_DIR_NAME
from dotgit.core.exceptions import DotgitError
from dotgit.utils.ignore import get_ignore_matcher
from dotgit.cli.output import success, error, info, warning


def collect_files(repo, resolved_path, matcher, force):
    """
    Expand a directory argument into the files to stage.

    Returns:
        (files, ignored) lists of paths
    """
    files = []
    ignored = []

    for file_path in sorted(resolved_path.rglob('*')):
        if not file_path.is_file():
            continue

        rel_path = repo.relative_path(file_path)
        if REPO_DIR_NAME in Path(rel_path).parts:
            continue

        if not force and matcher.is_ignored(rel_path):
            ignored.append(rel_path)
            continue

        files.append(file_path)

    return files, ignored


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
@click.option('-f', '--force', is_flag=True, help='Add ignored files')
def add_cmd(paths, force):
    """
    Add file contents to the staging area.

    The file's bytes are captured now; edit the file again and it must be
    re-added to stage the new content. Directories are added recursively.

    Files matching the ignore rules are skipped unless --force is used.
    A failure on one path is reported and does not stop the others.

    Examples:
        dotgit add file.txt
        dotgit add src/
        dotgit add -f ignored_file.log
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a dotgit repository"))
        return

    ignorecase = repo.config.get_bool('core', 'ignorecase')
    matcher = get_ignore_matcher(repo.work_tree, ignorecase=ignorecase)

    added_files = []
    failed_files = []
    ignored_files = []

    try:
        with repo.lock():
            staging = repo.staging()

            for path_arg in paths:
                resolved_path = Path(path_arg)
                if not resolved_path.is_absolute():
                    resolved_path = Path.cwd() / resolved_path

                try:
                    rel_path = repo.relative_path(resolved_path)
                except ValueError as e:
                    failed_files.append((path_arg, str(e)))
                    continue

                if REPO_DIR_NAME in Path(rel_path).parts:
                    failed_files.append((path_arg, "Cannot add repository internals"))
                    continue

                try:
                    if resolved_path.is_dir():
                        if rel_path != '.' and not force and matcher.is_ignored(rel_path, is_dir=True):
                            ignored_files.append(rel_path + '/')
                            continue
                        targets, skipped = collect_files(repo, resolved_path, matcher, force)
                        ignored_files.extend(skipped)
                    else:
                        if not force and matcher.is_ignored(rel_path):
                            ignored_files.append(rel_path)
                            continue
                        targets = [resolved_path]
                except ValueError as e:
                    failed_files.append((path_arg, str(e)))
                    continue

                for target in targets:
                    try:
                        entry = staging.add_file(target)
                        added_files.append(entry.path)
                    except (DotgitError, ValueError) as e:
                        failed_files.append((path_arg, str(e)))
    except DotgitError as e:
        click.echo(error(str(e)))
        return

    if added_files:
        click.echo(success(f"Added {len(added_files)} file(s) to staging area"))
        for file in added_files:
            click.echo(info(f"  {file}"))

    if ignored_files:
        click.echo()
        click.echo(warning(f"Ignored {len(ignored_files)} file(s) matching ignore rules"))
        if len(ignored_files) <= 5:
            for file in ignored_files:
                click.echo(warning(f"  {file}"))
        else:
            for file in ignored_files[:3]:
                click.echo(warning(f"  {file}"))
            click.echo(warning(f"  ... and {len(ignored_files) - 3} more"))
        click.echo(info("Use 'dotgit add -f <file>' to force add ignored files"))

    if failed_files:
        click.echo()
        click.echo(error(f"Failed to add {len(failed_files)} file(s):"))
        for file, reason in failed_files:
            click.echo(error(f"  {file}: {reason}"))

    if not added_files and not failed_files and not ignored_files:
        click.echo(error("No files matched"))
