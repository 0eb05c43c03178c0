"""Branch command - manage branches."""

import click
from dotgit.core.repository import Repository
from dotgit.core.exceptions import DotgitError
from dotgit.cli.output import success, error, warning
from colorama import Fore, Style


@click.command('branch')
@click.option('-d', '--delete', 'delete_branch_name', metavar='BRANCH', help='Delete a branch')
@click.option('-v', '--verbose', is_flag=True, help='Show each branch target')
@click.argument('branch_name', required=False)
def branch_cmd(delete_branch_name, verbose, branch_name):
    """
    List, create, or delete branches.

    With no arguments, lists branches. The current branch is marked with *.
    With one argument, creates a new branch. New branches point at 'main'.

    Examples:
        dotgit branch                 # List branches
        dotgit branch feature         # Create 'feature'
        dotgit branch -d feature      # Delete 'feature'
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a dotgit repository"))
        return

    refs = repo.refs

    if delete_branch_name:
        try:
            with repo.lock():
                refs.delete_branch(delete_branch_name)
        except DotgitError as e:
            click.echo(error(str(e)))
            return
        click.echo(success(f"Deleted branch {delete_branch_name}"))
        return

    if branch_name:
        try:
            with repo.lock():
                target = refs.create_branch(branch_name)
        except (DotgitError, ValueError) as e:
            click.echo(error(str(e)))
            return
        click.echo(success(f"Created branch '{branch_name}' -> {target}"))
        return

    branches = refs.list_branches()
    if not branches:
        click.echo(warning("No branches found"))
        return

    try:
        current_branch = refs.get_current_branch()
    except DotgitError as e:
        click.echo(warning(str(e)))
        current_branch = None

    for name in sorted(branches):
        if name == current_branch:
            prefix = f"{Fore.GREEN}* {Style.RESET_ALL}"
            name_color = Fore.GREEN
        else:
            prefix = "  "
            name_color = ""

        if verbose:
            try:
                target = refs.read_branch(name)
            except DotgitError:
                target = "?"
            click.echo(f"{prefix}{name_color}{name:<20}{Style.RESET_ALL} {target}")
        else:
            click.echo(f"{prefix}{name_color}{name}{Style.RESET_ALL}")
