"""Integration tests for repository initialization."""

import json
import pytest
from pathlib import Path
from dotgit.cli.main import cli


def test_init_creates_dotgit_directory(runner, temp_dir, monkeypatch):
    """Test that init creates the .dotgit layout in the current directory."""
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['init'])

    assert result.exit_code == 0
    assert 'Initialized empty dotgit repository' in result.output
    assert (temp_dir / '.dotgit' / 'objects').is_dir()
    assert (temp_dir / '.dotgit' / 'refs' / 'heads').is_dir()
    assert (temp_dir / '.dotgit' / 'HEAD').read_text() == 'ref: refs/heads/main\n'
    assert json.loads((temp_dir / '.dotgit' / 'index').read_text()) == []


def test_init_reports_ignore_rules(runner, temp_dir, monkeypatch):
    """Test init loads the default ignore rules."""
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['init'])
    assert 'Loaded 11 ignore rule(s)' in result.output


def test_init_new_directory(runner, temp_dir, monkeypatch):
    """Test init creates the target directory when missing."""
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['init', 'project'])

    assert result.exit_code == 0
    assert (temp_dir / 'project' / '.dotgit' / 'HEAD').exists()


def test_double_init_fails_with_nonzero_exit(runner, temp_dir, monkeypatch):
    """Test re-initializing is an error that exits non-zero."""
    monkeypatch.chdir(temp_dir)
    runner.invoke(cli, ['init'])
    head_before = (temp_dir / '.dotgit' / 'HEAD').read_text()

    result = runner.invoke(cli, ['init'])

    assert result.exit_code != 0
    assert 'already exists' in result.output
    assert (temp_dir / '.dotgit' / 'HEAD').read_text() == head_before


def test_init_on_file_path_fails(runner, temp_dir, monkeypatch):
    """Test init fails when the target is a regular file."""
    monkeypatch.chdir(temp_dir)
    (temp_dir / 'not-a-dir').write_text('x')

    result = runner.invoke(cli, ['init', 'not-a-dir'])
    assert result.exit_code != 0
    assert 'Failed to initialize' in result.output


def test_commands_outside_repository(runner, temp_dir, monkeypatch):
    """Test other commands report a missing repository without failing the process."""
    monkeypatch.chdir(temp_dir)
    for args in (['add', 'x'], ['commit', '-m', 'x'], ['log'], ['branch']):
        result = runner.invoke(cli, args)
        assert result.exit_code == 0, args
        assert 'Not a dotgit repository' in result.output


def test_ignore_command(runner, in_repo):
    """Test ignore prints defaults then .dotgitignore rules."""
    (in_repo.work_tree / '.dotgitignore').write_text('# build output\n*.log\n')
    result = runner.invoke(cli, ['ignore'])

    assert result.exit_code == 0
    assert 'Current ignore rules:' in result.output
    lines = result.output.splitlines()
    assert '- .dotgit/' in lines
    assert lines[-1] == '- *.log'


def test_ignore_command_outside_repository(runner, temp_dir, monkeypatch):
    """Test ignore works without a repository."""
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['ignore'])
    assert result.exit_code == 0
    assert '- node_modules/' in result.output


def test_version_option(runner):
    """Test --version prints the package version."""
    result = runner.invoke(cli, ['--version'])
    assert result.exit_code == 0
    assert '0.1.0' in result.output


def test_verbose_flag(runner, in_repo):
    """Test -v is accepted before a command."""
    (in_repo.work_tree / 'a.txt').write_text('hello')
    result = runner.invoke(cli, ['-v', 'add', 'a.txt'])
    assert result.exit_code == 0
    assert 'Added 1 file(s)' in result.output


def test_ignore_command_with_invalid_rule(runner, in_repo):
    """Test ignore lists the usable rules when one cannot be compiled."""
    (in_repo.work_tree / '.dotgitignore').write_text('[z-a]\n*.log\n')
    result = runner.invoke(cli, ['ignore'])

    assert result.exit_code == 0
    assert '- [z-a]' not in result.output
    assert result.output.splitlines()[-1] == '- *.log'


def test_init_with_invalid_ignore_rule(runner, temp_dir, monkeypatch):
    """Test init succeeds when .dotgitignore holds a bad rule."""
    monkeypatch.chdir(temp_dir)
    (temp_dir / '.dotgitignore').write_text('[z-a]\n')

    result = runner.invoke(cli, ['init'])
    assert result.exit_code == 0
    assert 'Loaded 11 ignore rule(s)' in result.output
