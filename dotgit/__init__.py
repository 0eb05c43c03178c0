"""dotgit - a minimal snapshot-based version control system."""

__version__ = '0.1.0'

from dotgit.core.repository import Repository
from dotgit.core.objects import CommitObject
from dotgit.core.index import StagingArea, StagedEntry

__all__ = [
    'Repository',
    'CommitObject',
    'StagingArea',
    'StagedEntry',
]
