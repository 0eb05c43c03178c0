"""Object storage for dotgit commits."""

import logging
import os
import re
from pathlib import Path
from typing import Callable, List, Optional

from .exceptions import (CorruptObjectError, NotFoundError, NothingToCommitError,
                         StorageError)
from .objects import CommitObject
from ..utils.fs import write_bytes_atomic

logger = logging.getLogger(__name__)

OBJECT_ID_RE = re.compile(r'^[0-9a-f]{40}$')


class ObjectStore:
    """
    Flat, content-addressed store of commit objects.

    Each commit is a JSON file named by its full id directly inside
    ``objects/``. There is no fan-out into subdirectories; ``info/`` and
    ``pack/`` are reserved and never read.
    """

    def __init__(self, repo):
        """
        Initialize object store.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.objects_dir: Path = repo.objects_dir

    def object_path(self, object_id: str) -> Path:
        """Filesystem path for an object id."""
        return self.objects_dir / object_id

    def exists(self, object_id: str) -> bool:
        """Check if an object exists."""
        return self.object_path(object_id).is_file()

    def write(self, commit: CommitObject) -> str:
        """
        Persist a commit under its id.

        Writing an id that already exists is a no-op when the stored copy
        reads back intact. A damaged copy is replaced.

        Returns:
            str: the commit id
        """
        object_id = commit.id
        path = self.object_path(object_id)

        if path.exists():
            try:
                self.read(object_id)
                return object_id
            except (CorruptObjectError, NotFoundError) as e:
                logger.warning("Rewriting damaged object %s: %s", object_id, e)

        try:
            write_bytes_atomic(path, commit.serialize())
        except OSError as e:
            raise StorageError(f"Cannot write object {object_id}: {e}") from e

        logger.debug("Wrote object %s (%d files)", object_id, len(commit.files))
        return object_id

    def commit(self, staging, message: str, timestamp: Optional[str] = None) -> str:
        """
        Snapshot the staging area into a new commit object.

        The staging area is not modified; callers clear it once the
        object is safely written.

        Args:
            staging: StagingArea to snapshot
            message: Commit message
            timestamp: ISO-8601 time (defaults to now)

        Returns:
            str: id of the new commit

        Raises:
            NothingToCommitError: If nothing is staged
            ValueError: If the message is empty
            StorageError: If the object cannot be written
        """
        if len(staging) == 0:
            raise NothingToCommitError("Nothing to commit (staging area is empty)")

        commit = CommitObject.create(message=message, files=list(staging), timestamp=timestamp)
        return self.write(commit)

    def list(self) -> List[str]:
        """
        Enumerate stored commit ids.

        Only files named by a full commit id count. Order is whatever the
        filesystem returns for a directory listing, which is not
        chronological.
        """
        if not self.objects_dir.is_dir():
            return []

        try:
            names = os.listdir(self.objects_dir)
        except OSError as e:
            raise StorageError(f"Cannot list objects in {self.objects_dir}: {e}") from e

        return [
            name for name in names
            if OBJECT_ID_RE.match(name) and (self.objects_dir / name).is_file()
        ]

    def read(self, object_id: str) -> CommitObject:
        """
        Read a commit object.

        Raises:
            NotFoundError: If no object exists for the id
            CorruptObjectError: If the stored content is not a valid commit
            StorageError: If the object file cannot be read
        """
        if not OBJECT_ID_RE.match(object_id):
            raise NotFoundError(f"Object {object_id} not found")

        path = self.object_path(object_id)

        try:
            data = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            raise NotFoundError(f"Object {object_id} not found")
        except OSError as e:
            raise StorageError(f"Cannot read object {object_id}: {e}") from e

        return CommitObject.deserialize(data, expected_id=object_id)

    def log(self, chronological: bool = False,
            on_error: Optional[Callable[[str, Exception], None]] = None) -> List[CommitObject]:
        """
        Read every stored commit.

        Args:
            chronological: Sort newest first by embedded timestamp instead
                of using listing order
            on_error: If given, objects that cannot be read are passed to
                it as (object_id, error) and left out of the result

        Raises:
            CorruptObjectError: If an object cannot be decoded and no
                on_error callback was given
        """
        commits = []
        for object_id in self.list():
            try:
                commits.append(self.read(object_id))
            except (CorruptObjectError, NotFoundError) as e:
                if on_error is None:
                    raise
                logger.debug("Skipping object %s: %s", object_id, e)
                on_error(object_id, e)

        if chronological:
            commits.sort(key=lambda c: c.timestamp, reverse=True)
        return commits
