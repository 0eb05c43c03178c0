"""Commit objects for dotgit."""

import hashlib
import json
from typing import Optional, Sequence, Tuple

from .exceptions import CorruptObjectError
from .index import StagedEntry, utc_timestamp


class CommitObject:
    """
    Represents an immutable commit.

    A commit captures:
    - The commit message
    - A creation timestamp
    - Whole-file snapshots of everything that was staged

    The id is the SHA-1 of the canonical encoding of those three fields;
    it is always derived, never assigned.
    """

    __slots__ = ('_message', '_timestamp', '_files', '_id')

    def __init__(self, message: str, timestamp: str, files: Sequence[StagedEntry]):
        """
        Initialize a commit.

        Args:
            message: Commit message (must be non-empty)
            timestamp: ISO-8601 creation time
            files: Snapshots in staging order

        Raises:
            ValueError: If the message is empty
        """
        if not message or not message.strip():
            raise ValueError("Commit message must not be empty")
        self._message = message
        self._timestamp = timestamp
        self._files: Tuple[StagedEntry, ...] = tuple(files)
        self._id: Optional[str] = None

    @property
    def message(self) -> str:
        return self._message

    @property
    def timestamp(self) -> str:
        return self._timestamp

    @property
    def files(self) -> Tuple[StagedEntry, ...]:
        return self._files

    @property
    def id(self) -> str:
        """40-character SHA-1 of the canonical encoding."""
        if self._id is None:
            self._id = hashlib.sha1(self.canonical_bytes()).hexdigest()
        return self._id

    def _payload(self) -> dict:
        return {
            'message': self._message,
            'timestamp': self._timestamp,
            'files': [
                dict(entry.to_dict(), path=entry.path)
                for entry in self._files
            ],
        }

    def canonical_bytes(self) -> bytes:
        """
        Encode message, timestamp and files deterministically.

        Keys are sorted and separators are compact, so the same field
        values always give the same bytes. File order is kept as staged.
        """
        return json.dumps(
            self._payload(),
            sort_keys=True,
            separators=(',', ':'),
            ensure_ascii=False,
        ).encode('utf-8')

    def serialize(self) -> bytes:
        """
        Serialize commit for storage.

        Returns:
            bytes: JSON document including the id
        """
        payload = self._payload()
        payload['id'] = self.id
        return json.dumps(payload, indent=2, ensure_ascii=False).encode('utf-8')

    @classmethod
    def deserialize(cls, data: bytes, expected_id: Optional[str] = None) -> 'CommitObject':
        """
        Rebuild a commit from stored bytes.

        Args:
            data: Serialized commit
            expected_id: Id the object was stored under, verified if given

        Raises:
            CorruptObjectError: If the data is not a valid commit encoding
        """
        try:
            payload = json.loads(data.decode('utf-8'))
            if not isinstance(payload, dict):
                raise ValueError("commit is not a JSON object")
            files = [
                StagedEntry.from_dict(item['path'], item)
                for item in payload['files']
            ]
            commit = cls(
                message=payload['message'],
                timestamp=payload['timestamp'],
                files=files,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise CorruptObjectError(f"Invalid commit encoding: {e}") from e

        stored_id = payload.get('id')
        for claimed in (stored_id, expected_id):
            if claimed is not None and claimed != commit.id:
                raise CorruptObjectError(
                    f"Commit id mismatch: stored as {claimed}, content hashes to {commit.id}"
                )
        return commit

    @classmethod
    def create(
        cls,
        message: str,
        files: Sequence[StagedEntry],
        timestamp: Optional[str] = None
    ) -> 'CommitObject':
        """
        Create a new commit.

        Args:
            message: Commit message
            files: Staged entries to snapshot
            timestamp: ISO-8601 time (defaults to now)

        Returns:
            CommitObject: New commit object
        """
        return cls(message=message, timestamp=timestamp or utc_timestamp(), files=files)

    @property
    def total_size(self) -> int:
        return sum(entry.size for entry in self._files)

    def __eq__(self, other) -> bool:
        return isinstance(other, CommitObject) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        """String representation."""
        msg_preview = self._message.split('\n')[0][:50]
        return f"CommitObject(id={self.id[:7]}, files={len(self._files)}, msg='{msg_preview}')"
