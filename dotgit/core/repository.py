"""Repository management for dotgit."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .exceptions import (AlreadyExistsError, NotARepositoryError,
                         RepositoryLockedError, StorageError)

logger = logging.getLogger(__name__)

REPO_DIR_NAME = '.dotgit'

DEFAULT_CONFIG = '\n'.join([
    '[core]',
    '\trepositoryformatversion = 0',
    '\tfilemode = false',
    '\tbare = false',
    '\tlogallrefupdates = true',
    '\tsymlinks = false',
    '\tignorecase = true',
]) + '\n'


class Repository:
    """
    Represents a dotgit repository.

    A repository owns the .dotgit directory layout. Staging, commit
    storage and branch refs are reached through the ``staging()``,
    ``objects`` and ``refs`` accessors.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.dotgit_dir = self.work_tree / REPO_DIR_NAME
        self.objects_dir = self.dotgit_dir / 'objects'
        self.refs_dir = self.dotgit_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.tags_dir = self.refs_dir / 'tags'
        self.logs_dir = self.dotgit_dir / 'logs'
        self.hooks_dir = self.dotgit_dir / 'hooks'
        self.stash_dir = self.dotgit_dir / 'stash'
        self.head_file = self.dotgit_dir / 'HEAD'
        self.index_file = self.dotgit_dir / 'index'
        self.config_file = self.dotgit_dir / 'config'
        self.head_log_file = self.logs_dir / 'HEAD'
        self.lock_file = self.dotgit_dir / 'index.lock'

        # Managers are created lazily to avoid circular imports
        self._ref_manager = None
        self._object_store = None
        self._config = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def objects(self):
        """Get ObjectStore instance."""
        if self._object_store is None:
            from .store import ObjectStore
            self._object_store = ObjectStore(self)
        return self._object_store

    @property
    def config(self):
        """Get Config instance bound to this repository."""
        if self._config is None:
            from .config import Config
            self._config = Config(self.config_file)
        return self._config

    def staging(self):
        """
        Load the staging area fresh from disk.

        Returns:
            StagingArea: staging set as currently persisted
        """
        from .index import StagingArea
        return StagingArea(self).load()

    def exists(self) -> bool:
        """True if the .dotgit directory is present."""
        return self.dotgit_dir.is_dir()

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .dotgit directory structure:
        .dotgit/
        ├── objects/       # Commit objects, one file per id
        │   ├── info/
        │   └── pack/
        ├── refs/
        │   ├── heads/     # Branch references
        │   └── tags/
        ├── logs/
        │   ├── HEAD
        │   └── refs/heads/
        ├── hooks/
        ├── stash/
        ├── HEAD           # Current branch pointer
        ├── index          # Staging area (JSON)
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            AlreadyExistsError: If the repository already exists
            StorageError: If the layout cannot be written
        """
        if self.dotgit_dir.exists():
            raise AlreadyExistsError(f"Repository already exists at {self.dotgit_dir}")

        directories = [
            self.dotgit_dir,
            self.heads_dir,
            self.tags_dir,
            self.objects_dir / 'info',
            self.objects_dir / 'pack',
            self.logs_dir / 'refs' / 'heads',
            self.hooks_dir,
            self.stash_dir,
        ]

        try:
            for directory in directories:
                directory.mkdir(parents=True, exist_ok=True)

            self.head_file.write_text('ref: refs/heads/main\n')
            self.config_file.write_text(DEFAULT_CONFIG)
            self.head_log_file.write_text('')
        except OSError as e:
            raise StorageError(f"Cannot create repository at {self.dotgit_dir}: {e}") from e

        # Persist an empty staging set so the index holds a valid document
        self.staging().save()

        logger.debug("Initialized repository layout at %s", self.dotgit_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / REPO_DIR_NAME).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def discover(cls, path: str = '.') -> 'Repository':
        """
        Like find_repository, but a missing repository is an error.

        Raises:
            NotARepositoryError: If no .dotgit directory is found
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise NotARepositoryError(
                f"Not a dotgit repository (or any parent of {Path(path).resolve()})"
            )
        return repo

    @contextmanager
    def lock(self) -> Iterator[Path]:
        """
        Hold the advisory repository lock for the duration of a mutating command.

        The lock file is created exclusively and always removed on exit.

        Raises:
            RepositoryLockedError: If another command holds the lock
            StorageError: If the lock file cannot be created
        """
        try:
            fd = os.open(str(self.lock_file), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError:
            raise RepositoryLockedError(
                f"Unable to lock {self.lock_file}: another dotgit process may be running. "
                f"Remove the file if no other process is active."
            )
        except OSError as e:
            raise StorageError(f"Cannot create lock file {self.lock_file}: {e}") from e

        try:
            try:
                os.write(fd, f"{os.getpid()}\n".encode())
            finally:
                os.close(fd)
            logger.debug("Acquired lock %s", self.lock_file)
            yield self.lock_file
        finally:
            try:
                self.lock_file.unlink()
            except FileNotFoundError:
                pass
            logger.debug("Released lock %s", self.lock_file)

    def relative_path(self, filepath) -> str:
        """
        Convert a path to a repository-relative POSIX string.

        Raises:
            ValueError: If the path is outside the work tree
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = self.work_tree / file_path
        # Resolve the parent only, so a symlinked file keeps its own name
        file_path = Path(os.path.abspath(file_path))
        file_path = file_path.parent.resolve() / file_path.name
        try:
            return file_path.relative_to(self.work_tree).as_posix()
        except ValueError:
            raise ValueError(f"Path is outside repository: {filepath}")

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
