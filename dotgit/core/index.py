"""Index (staging area) implementation."""

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .exceptions import NotFoundError, StorageError
from ..utils.fs import write_text_atomic

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class StagedEntry:
    """
    A single file queued for the next commit.

    Content is captured when the file is staged, so later edits to the
    working copy do not leak into the commit.
    """
    path: str           # Repository-relative POSIX path
    content: bytes      # File bytes at stage time
    size: int           # len(content)
    staged_at: str      # ISO-8601 UTC timestamp

    @classmethod
    def create(cls, path: str, content: bytes, staged_at: Optional[str] = None) -> 'StagedEntry':
        """Build an entry, deriving size and capture time."""
        return cls(
            path=path,
            content=content,
            size=len(content),
            staged_at=staged_at or utc_timestamp(),
        )

    def to_dict(self) -> dict:
        """JSON-ready form; content is base64 encoded."""
        return {
            'content': base64.b64encode(self.content).decode('ascii'),
            'size': self.size,
            'stagedAt': self.staged_at,
        }

    @classmethod
    def from_dict(cls, path: str, data: dict) -> 'StagedEntry':
        """
        Rebuild an entry from its JSON form.

        Raises:
            ValueError: If a field is missing or malformed
        """
        if not isinstance(path, str) or not isinstance(data, dict):
            raise ValueError(f"Malformed entry for {path!r}")
        try:
            content = base64.b64decode(data['content'], validate=True)
            size = int(data['size'])
            staged_at = str(data['stagedAt'])
        except (KeyError, TypeError, binascii.Error) as e:
            raise ValueError(f"Malformed entry for {path!r}: {e}") from e
        return cls(path=path, content=content, size=size, staged_at=staged_at)

    def __repr__(self) -> str:
        """String representation."""
        return f"StagedEntry({self.path}, size={self.size})"


class StagingArea:
    """
    dotgit staging area.

    Holds an ordered mapping of path -> StagedEntry. The set is loaded
    fresh for each command and written back after every mutation, so a
    crash never loses entries staged before the one in flight.

    On disk the index is a JSON array of ``[path, entry]`` pairs.
    """

    def __init__(self, repo):
        """
        Initialize an empty staging area bound to a repository.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.index_path: Path = repo.index_file
        self.entries: Dict[str, StagedEntry] = {}

    def load(self) -> 'StagingArea':
        """
        Read the persisted index.

        A missing or malformed index yields an empty set.

        Returns:
            StagingArea: self for method chaining

        Raises:
            StorageError: If the index exists but cannot be read
        """
        try:
            raw = self.index_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            self.entries = {}
            return self
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read index {self.index_path}: {e}") from e

        self.entries = self._parse(raw)
        logger.debug("Loaded %d staged entries from %s", len(self.entries), self.index_path)
        return self

    def _parse(self, raw: str) -> Dict[str, StagedEntry]:
        if not raw.strip():
            return {}

        try:
            pairs = json.loads(raw)
            if not isinstance(pairs, list):
                raise ValueError("index is not a JSON array")
            entries = {}
            for pair in pairs:
                path, data = pair
                entries[path] = StagedEntry.from_dict(path, data)
            return entries
        except (ValueError, TypeError) as e:
            logger.warning("Ignoring malformed index %s: %s", self.index_path, e)
            return {}

    def save(self) -> None:
        """
        Write the whole set to disk, replacing the previous index.

        Raises:
            StorageError: If the index cannot be written
        """
        pairs = [[path, entry.to_dict()] for path, entry in self.entries.items()]
        try:
            write_text_atomic(self.index_path, json.dumps(pairs))
        except OSError as e:
            raise StorageError(f"Cannot write index {self.index_path}: {e}") from e
        logger.debug("Saved %d staged entries to %s", len(self.entries), self.index_path)

    def add_entry(self, path: str, content: bytes) -> StagedEntry:
        """
        Stage content under path and persist immediately.

        A previously staged entry for the same path is replaced.

        Args:
            path: Repository-relative path
            content: File bytes

        Returns:
            StagedEntry: the new entry
        """
        entry = StagedEntry.create(path, content)
        self.entries[path] = entry
        self.save()
        return entry

    def add_file(self, filepath) -> StagedEntry:
        """
        Stage a working-tree file.

        Args:
            filepath: Path to file (absolute or relative to the work tree)

        Returns:
            StagedEntry: the new entry

        Raises:
            NotFoundError: If the file does not exist
            ValueError: If the path is not a regular file or is outside the repository
            StorageError: If the file cannot be read or the index cannot be written
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = self.repo.work_tree / file_path

        if not file_path.exists():
            raise NotFoundError(f"File not found: {filepath}")

        if not file_path.is_file():
            raise ValueError(f"Not a file: {filepath}")

        rel_path = self.repo.relative_path(file_path)

        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read {filepath}: {e}") from e

        return self.add_entry(rel_path, content)

    def remove_entry(self, path: str) -> bool:
        """
        Unstage a path.

        Returns:
            True if the path was staged
        """
        if path not in self.entries:
            return False
        del self.entries[path]
        self.save()
        return True

    def get_entry(self, path: str) -> Optional[StagedEntry]:
        """Get entry by path."""
        return self.entries.get(path)

    def clear(self) -> None:
        """Empty the staging area and persist the empty state."""
        self.entries.clear()
        self.save()

    @property
    def paths(self) -> List[str]:
        """Staged paths in insertion order."""
        return list(self.entries)

    def __iter__(self) -> Iterator[StagedEntry]:
        return iter(self.entries.values())

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        """Number of staged entries."""
        return len(self.entries)

    def __repr__(self) -> str:
        """String representation."""
        return f"StagingArea(entries={len(self.entries)})"
