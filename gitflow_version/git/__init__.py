"""
Repository access for version resolution.

Two implementations of RepositoryAccess are provided:
    - GitRepository reads an on-disk repository through GitPython
    - InMemoryRepository holds a synthetic commit graph
"""

from .access import (
    BranchRef,
    InMemoryRepository,
    RepositoryAccess,
    commits_by_annotation,
    filter_branches_at,
)
from .repository import GitRepository

__all__ = [
    "BranchRef",
    "GitRepository",
    "InMemoryRepository",
    "RepositoryAccess",
    "commits_by_annotation",
    "filter_branches_at",
]
