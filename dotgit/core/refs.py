"""Reference management for dotgit."""

import logging
from pathlib import Path
from typing import Optional, Set

from .exceptions import AlreadyExistsError, NotFoundError, StorageError
from ..utils.fs import is_temp_file, write_text_atomic

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = 'main'
SYMREF_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'


class RefManager:
    """
    Manages branch references and HEAD.

    Branch refs live as plain files under refs/heads. A new branch stores
    the literal target ``main`` rather than a commit id, so branches are
    names only; there is no branch-from-HEAD resolution.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.heads_dir: Path = repo.heads_dir
        self.head_file: Path = repo.head_file

    def branch_path(self, name: str) -> Path:
        """Path of the ref file for a branch."""
        return self.heads_dir / name

    @staticmethod
    def validate_branch_name(name: str) -> None:
        """
        Reject names that cannot be stored as a single ref file.

        Raises:
            ValueError: If the name is invalid
        """
        if not name or not name.strip():
            raise ValueError("Branch name must not be empty")
        if '/' in name or '\\' in name:
            raise ValueError(f"Invalid branch name '{name}': path separators are not allowed")
        if name.startswith('.') or name.startswith('-'):
            raise ValueError(f"Invalid branch name '{name}': must not start with '.' or '-'")
        if name.endswith('.lock'):
            raise ValueError(f"Invalid branch name '{name}': must not end with '.lock'")

    def read_head(self) -> Optional[str]:
        """
        Read HEAD.

        Returns:
            The symbolic target (e.g. 'refs/heads/main'), the raw content for
            a detached HEAD, or None if HEAD is missing

        Raises:
            StorageError: If HEAD exists but cannot be read
        """
        try:
            content = self.head_file.read_text().strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read HEAD: {e}") from e

        if content.startswith(SYMREF_PREFIX):
            return content[len(SYMREF_PREFIX):]
        return content

    def get_current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name or None if HEAD is missing or detached
        """
        target = self.read_head()
        if target and target.startswith(HEADS_PREFIX):
            return target[len(HEADS_PREFIX):]
        return None

    def branch_exists(self, name: str) -> bool:
        """Check if a branch ref file exists."""
        return self.branch_path(name).is_file()

    def read_branch(self, name: str) -> str:
        """
        Read a branch target.

        Raises:
            NotFoundError: If the branch does not exist
        """
        try:
            return self.branch_path(name).read_text().strip()
        except (FileNotFoundError, IsADirectoryError):
            raise NotFoundError(f"Branch '{name}' not found")
        except OSError as e:
            raise StorageError(f"Cannot read branch '{name}': {e}") from e

    def list_branches(self) -> Set[str]:
        """
        List all branches.

        Returns:
            Set of branch names (empty if there are none)
        """
        if not self.heads_dir.is_dir():
            return set()

        return {
            entry.name
            for entry in self.heads_dir.iterdir()
            if entry.is_file() and not is_temp_file(entry)
        }

    def create_branch(self, name: str) -> str:
        """
        Create a new branch pointing at the literal target 'main'.

        Args:
            name: Branch name

        Returns:
            str: the target written

        Raises:
            ValueError: If the name is invalid
            AlreadyExistsError: If the branch exists
            StorageError: If the ref cannot be written
        """
        self.validate_branch_name(name)

        path = self.branch_path(name)
        if path.exists():
            raise AlreadyExistsError(f"Branch '{name}' already exists")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            write_text_atomic(path, DEFAULT_BRANCH)
        except OSError as e:
            raise StorageError(f"Cannot create branch '{name}': {e}") from e

        logger.debug("Created branch %s -> %s", name, DEFAULT_BRANCH)
        return DEFAULT_BRANCH

    def delete_branch(self, name: str) -> None:
        """
        Delete a branch.

        The current branch is not protected.

        Raises:
            NotFoundError: If the branch does not exist
            StorageError: If the ref cannot be removed
        """
        path = self.branch_path(name)
        if not name or '/' in name or '\\' in name or not path.is_file():
            raise NotFoundError(f"Branch '{name}' not found")

        try:
            path.unlink()
        except FileNotFoundError:
            raise NotFoundError(f"Branch '{name}' not found")
        except OSError as e:
            raise StorageError(f"Cannot delete branch '{name}': {e}") from e

        logger.debug("Deleted branch %s", name)
