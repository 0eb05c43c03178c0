"""Core functionality for dotgit.

This module contains the core data structures:
- Repository layout and initialization
- Staging area (index)
- Commit objects and the object store
- Branch references
- Configuration management

For ignore rules, see dotgit.utils
"""

from dotgit.core.objects import CommitObject
from dotgit.core.repository import Repository
from dotgit.core.index import StagingArea, StagedEntry
from dotgit.core.store import ObjectStore
from dotgit.core.refs import RefManager
from dotgit.core.config import Config, get_config
from dotgit.core.exceptions import (
    DotgitError,
    NotARepositoryError,
    AlreadyExistsError,
    NotFoundError,
    NothingToCommitError,
    CorruptObjectError,
    StorageError,
    RepositoryLockedError,
)

__all__ = [
    'CommitObject',
    'Repository',
    'StagingArea',
    'StagedEntry',
    'ObjectStore',
    'RefManager',
    'Config',
    'get_config',
    'DotgitError',
    'NotARepositoryError',
    'AlreadyExistsError',
    'NotFoundError',
    'NothingToCommitError',
    'CorruptObjectError',
    'StorageError',
    'RepositoryLockedError',
]
