"""Shared pytest fixtures for dotgit tests."""

import os
import pytest
import tempfile
import shutil
from pathlib import Path
from click.testing import CliRunner
from dotgit.core.repository import Repository
from dotgit.core.config import Config
from dotgit.core.index import StagedEntry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's global config and DOTGIT_* variables."""
    home = tmp_path / 'home'
    home.mkdir()
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.dotgitconfig')
    for key in list(os.environ):
        if key.startswith('DOTGIT_'):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def staging(repo):
    """Staging area loaded from a fresh repository."""
    return repo.staging()


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Initialized repository that is also the current directory."""
    monkeypatch.chdir(repo.work_tree)
    return repo


def make_entry(path='a.txt', content=b'hello', staged_at='2024-01-01T00:00:00.000Z'):
    """Staged entry with a fixed capture time."""
    return StagedEntry.create(path, content, staged_at=staged_at)


def object_files(repo):
    """Names of regular files directly inside objects/."""
    return sorted(p.name for p in repo.objects_dir.iterdir() if p.is_file())
