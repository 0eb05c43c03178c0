"""Integration tests for branch management workflow."""

import pytest
from dotgit.cli.main import cli


def test_branch_lifecycle(runner, in_repo):
    """Test create, list and delete through the CLI."""
    result = runner.invoke(cli, ['branch', 'feature'])
    assert result.exit_code == 0
    assert "Created branch 'feature'" in result.output

    result = runner.invoke(cli, ['branch'])
    assert 'feature' in result.output.split()

    result = runner.invoke(cli, ['branch', '-d', 'feature'])
    assert 'Deleted branch feature' in result.output

    result = runner.invoke(cli, ['branch'])
    assert 'feature' not in result.output


def test_branch_list_empty(runner, in_repo):
    """Test listing with no branches is reported, not an error."""
    result = runner.invoke(cli, ['branch'])
    assert result.exit_code == 0
    assert 'No branches found' in result.output


def test_branch_marks_current(runner, in_repo):
    """Test the branch HEAD names is starred."""
    runner.invoke(cli, ['branch', 'main'])
    runner.invoke(cli, ['branch', 'feature'])

    lines = runner.invoke(cli, ['branch']).output.splitlines()
    assert '  feature' in lines
    assert '* main' in lines


def test_branch_verbose_shows_target(runner, in_repo):
    """Test -v prints the literal target."""
    runner.invoke(cli, ['branch', 'feature'])
    output = runner.invoke(cli, ['branch', '-v']).output
    assert 'feature' in output
    assert output.split()[-1] == 'main'


def test_branch_duplicate(runner, in_repo):
    """Test creating an existing branch is reported."""
    runner.invoke(cli, ['branch', 'feature'])
    result = runner.invoke(cli, ['branch', 'feature'])
    assert result.exit_code == 0
    assert 'already exists' in result.output


def test_branch_delete_missing(runner, in_repo):
    """Test deleting an unknown branch is reported."""
    result = runner.invoke(cli, ['branch', '-d', 'ghost'])
    assert result.exit_code == 0
    assert 'not found' in result.output


def test_branch_invalid_name(runner, in_repo):
    """Test invalid names are reported."""
    result = runner.invoke(cli, ['branch', 'a/b'])
    assert 'Invalid branch name' in result.output
    assert in_repo.refs.list_branches() == set()


def test_branch_list_with_unreadable_head(runner, in_repo):
    """Test listing still works when HEAD cannot be read."""
    runner.invoke(cli, ['branch', 'feature'])
    in_repo.head_file.unlink()
    in_repo.head_file.mkdir()

    result = runner.invoke(cli, ['branch'])
    assert result.exit_code == 0
    assert result.exception is None
    assert 'Cannot read HEAD' in result.output
    assert '  feature' in result.output.splitlines()
