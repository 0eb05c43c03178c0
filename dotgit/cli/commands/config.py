"""Config command - manage repository configuration."""

import click
from dotgit.core.repository import Repository
from dotgit.core.config import Config, get_config
from dotgit.core.exceptions import NotARepositoryError
from dotgit.cli.output import success, error, info


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        dotgit config set core.ignorecase false
        dotgit config set --global core.ignorecase false
    """
    repo = None
    if not is_global:
        try:
            repo = Repository.discover()
        except NotARepositoryError as e:
            click.echo(error(str(e)))
            click.echo(info("Use --global to set the global config"))
            return

    try:
        section, option = Config.split_key(key)
        get_config(repo).set(section, option, value, global_config=is_global)
    except (ValueError, OSError) as e:
        click.echo(error(f"Cannot set {key}: {e}"))
        return

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
def config_get(key):
    """
    Get a config value.

    Environment variables (DOTGIT_<SECTION>_<KEY>) take precedence over
    the repository config, which takes precedence over the global config.

    Examples:
        dotgit config get core.ignorecase
    """
    try:
        section, option = Config.split_key(key)
    except ValueError as e:
        click.echo(error(str(e)))
        return

    value = get_config(Repository.find_repository()).get(section, option)
    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        return
    click.echo(value)


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """
    List all config values.

    Examples:
        dotgit config list
        dotgit config list --global
    """
    repo = None if is_global else Repository.find_repository()
    scopes = get_config(repo).list_all(global_only=is_global)

    if not scopes['global'] and not scopes['repository']:
        click.echo(info("No configuration set"))
        return

    for scope, title in (('repository', "Repository config:"), ('global', "Global config:")):
        if not scopes[scope]:
            continue
        click.echo(info(title))
        for key, value in scopes[scope].items():
            click.echo(f"  {key}={value}")
