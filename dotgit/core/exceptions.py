"""Exceptions raised by dotgit core operations."""


class DotgitError(Exception):
    """Base exception for dotgit."""
    pass


class NotARepositoryError(DotgitError):
    """Raised when no .dotgit directory can be found."""
    pass


class AlreadyExistsError(DotgitError):
    """Raised when a repository or branch already exists."""
    pass


class NotFoundError(DotgitError):
    """Raised when an object, branch or file to stage does not exist."""
    pass


class NothingToCommitError(DotgitError):
    """Raised when committing an empty staging area."""
    pass


class CorruptObjectError(DotgitError):
    """Raised when a stored commit object cannot be decoded."""
    pass


class StorageError(DotgitError):
    """Raised on filesystem failures other than a missing file."""
    pass


class RepositoryLockedError(DotgitError):
    """Raised when another command holds the repository lock."""
    pass
