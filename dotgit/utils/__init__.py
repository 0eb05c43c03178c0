"""Utilities module for common helper functions.

This module contains:
- Ignore rule matching (.dotgitignore)
- Atomic file writes
"""

from dotgit.utils.ignore import IgnoreMatcher, IgnorePattern, get_ignore_matcher

__all__ = [
    'IgnoreMatcher', 'IgnorePattern', 'get_ignore_matcher',
]
