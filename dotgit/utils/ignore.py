"""Ignore rules for .dotgitignore files."""

import logging
import re
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = '.dotgitignore'

DEFAULT_IGNORE_RULES = [
    '.dotgit/',
    '.dotgitignore',
    '.DS_Store',
    'Thumbs.db',
    'desktop.ini',
    'node_modules/',
    'npm-debug.log',
    '*.swp',
    '*~',
    '.idea/',
    '.vscode/',
]


def _normalize(path: str) -> str:
    path = path.replace('\\', '/')
    if path.startswith('./'):
        path = path[2:]
    return path.rstrip('/')


class IgnorePattern:
    """A single gitignore-style rule."""

    def __init__(self, pattern: str, negation: bool = False,
                 directory_only: bool = False, ignorecase: bool = False):
        """
        Initialize an ignore pattern.

        Args:
            pattern: The glob pattern, without '!' or trailing '/'
            negation: If True, matching paths are un-ignored
            directory_only: If True, only directories (and their contents) match
            ignorecase: Match case-insensitively
        """
        self.pattern = pattern
        self.negation = negation
        self.directory_only = directory_only
        self._regex = re.compile(self._translate(pattern), re.IGNORECASE if ignorecase else 0)

    @property
    def rule(self) -> str:
        """The rule as it would be written in an ignore file."""
        return ('!' if self.negation else '') + self.pattern + ('/' if self.directory_only else '')

    @staticmethod
    def _translate(pattern: str) -> str:
        """Convert a gitignore-style glob to a regex."""
        anchored = pattern.startswith('/')
        body = pattern.lstrip('/')
        parts = []
        i = 0

        while i < len(body):
            c = body[i]
            if c == '*':
                if body[i:i + 3] == '**/':
                    # Zero or more directories
                    parts.append('(?:.*/)?')
                    i += 3
                elif body[i:i + 2] == '**':
                    parts.append('.*')
                    i += 2
                else:
                    parts.append('[^/]*')
                    i += 1
            elif c == '?':
                parts.append('[^/]')
                i += 1
            elif c == '[':
                j = i + 1
                if j < len(body) and body[j] == '!':
                    j += 1
                if j < len(body) and body[j] == ']':
                    j += 1
                while j < len(body) and body[j] != ']':
                    j += 1
                if j < len(body):
                    char_class = body[i:j + 1]
                    if char_class.startswith('[!'):
                        char_class = '[^' + char_class[2:]
                    parts.append(char_class)
                    i = j + 1
                else:
                    # Unterminated class, treat '[' literally
                    parts.append(re.escape(c))
                    i += 1
            else:
                parts.append(re.escape(c))
                i += 1

        regex = ''.join(parts)

        # A rule with no inner slash matches at any depth
        if anchored or '/' in body:
            prefix = '^'
        else:
            prefix = '(?:^|/)'

        return prefix + regex + '(?:/.*)?$'

    def matches(self, path: str, is_dir: bool = False) -> bool:
        """
        Check if a path matches this pattern.

        Args:
            path: Path relative to the repository root
            is_dir: Whether the path itself is a directory
        """
        path = _normalize(path)

        if not self.directory_only:
            return bool(self._regex.search(path))

        if is_dir and self._regex.search(path):
            return True

        # Inside a matching directory: test each proper ancestor
        segments = path.split('/')
        for i in range(1, len(segments)):
            if self._regex.search('/'.join(segments[:i])):
                return True
        return False

    def __repr__(self) -> str:
        return f"IgnorePattern({self.rule!r})"


class IgnoreMatcher:
    """Answers whether a path is excluded. The last matching rule wins."""

    def __init__(self, ignorecase: bool = False):
        """Initialize empty matcher."""
        self.ignorecase = ignorecase
        self.patterns: List[IgnorePattern] = []
        self._cache: dict = {}

    def add_pattern(self, line: str) -> Optional[IgnorePattern]:
        """
        Add one line of an ignore file.

        Blank lines and comments are skipped. A rule that does not compile
        is logged and skipped.

        Returns:
            The parsed pattern, or None if the line held no usable rule
        """
        raw = line = line.strip()
        if not line or line.startswith('#'):
            return None

        negation = line.startswith('!')
        if negation:
            line = line[1:]

        directory_only = line.endswith('/')
        if directory_only:
            line = line.rstrip('/')

        if not line:
            return None

        try:
            pattern = IgnorePattern(line, negation, directory_only, self.ignorecase)
        except re.error as e:
            logger.warning("Skipping invalid ignore rule %r: %s", raw, e)
            return None

        self.patterns.append(pattern)
        self._cache.clear()
        return pattern

    def add_patterns(self, lines: List[str]) -> None:
        """Add multiple rules."""
        for line in lines:
            self.add_pattern(line)

    def load_file(self, path: Path) -> bool:
        """
        Load rules from an ignore file.

        A missing file is not an error. Any other read failure is logged
        and the existing rules are kept.

        Returns:
            True if the file was loaded
        """
        try:
            content = Path(path).read_text(encoding='utf-8')
        except FileNotFoundError:
            return False
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to load ignore file %s: %s", path, e)
            return False

        self.add_patterns(content.splitlines())
        return True

    def is_ignored(self, path: str, is_dir: bool = False) -> bool:
        """
        Check if a path should be ignored.

        Args:
            path: Path relative to the repository root
            is_dir: Whether the path is a directory

        Returns:
            True if the path is excluded
        """
        cache_key = (path, is_dir)
        if cache_key in self._cache:
            return self._cache[cache_key]

        ignored = False
        for pattern in self.patterns:
            if pattern.matches(path, is_dir):
                ignored = not pattern.negation

        self._cache[cache_key] = ignored
        return ignored

    @property
    def rules(self) -> List[str]:
        """Effective rules in evaluation order."""
        return [pattern.rule for pattern in self.patterns]


def get_ignore_matcher(repo_root: Path, ignorecase: bool = False) -> IgnoreMatcher:
    """
    Build a fresh matcher for a repository.

    Rules come from the built-in defaults followed by the repository's
    .dotgitignore, if present.

    Args:
        repo_root: Path to repository root
        ignorecase: Match case-insensitively (core.ignorecase)

    Returns:
        Configured IgnoreMatcher instance
    """
    matcher = IgnoreMatcher(ignorecase=ignorecase)
    matcher.add_patterns(DEFAULT_IGNORE_RULES)
    matcher.load_file(Path(repo_root) / IGNORE_FILE_NAME)
    return matcher
