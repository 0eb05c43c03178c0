"""CLI commands for dotgit."""

from dotgit.cli.commands.init import init_cmd
from dotgit.cli.commands.ignore import ignore_cmd
from dotgit.cli.commands.add import add_cmd
from dotgit.cli.commands.commit import commit_cmd
from dotgit.cli.commands.log import log_cmd
from dotgit.cli.commands.branch import branch_cmd
from dotgit.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'ignore_cmd', 'add_cmd', 'commit_cmd', 'log_cmd',
           'branch_cmd', 'config_cmd']
