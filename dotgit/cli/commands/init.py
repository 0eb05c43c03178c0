"""Initialize a new dotgit repository."""

import click
from pathlib import Path
from dotgit.core.repository import Repository
from dotgit.core.exceptions import AlreadyExistsError, DotgitError
from dotgit.utils.ignore import get_ignore_matcher
from dotgit.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new dotgit repository.

    Creates a .dotgit directory with the standard layout. Fails if a
    repository already exists at PATH.

    Examples:
        dotgit init                 # Initialize in current directory
        dotgit init my-project      # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()
    repo = Repository(str(repo_path))

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo.init()

        ignorecase = repo.config.get_bool('core', 'ignorecase')
        matcher = get_ignore_matcher(repo.work_tree, ignorecase=ignorecase)
    except AlreadyExistsError:
        click.echo(error(f"Repository already exists at {repo.dotgit_dir}"))
        click.echo(info("Use an empty directory or different path"))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except (DotgitError, OSError) as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty dotgit repository in {repo.dotgit_dir}"))
    click.echo(info(f"Loaded {len(matcher.rules)} ignore rule(s)"))
    click.echo()
    click.echo(info("You can now start tracking files with:"))
    click.echo(info("  dotgit add <file>"))
    click.echo(info("  dotgit commit -m 'message'"))
