"""Read-only repository access used by the version resolver."""

from abc import ABCMeta, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from gitflow_version.versioning.exceptions import InvalidRepository


@dataclass(frozen=True)
class BranchRef:
    """A branch name and the commit at its tip."""

    name: str
    commit: str


class RepositoryAccess(metaclass=ABCMeta):
    """
    Minimal view of a repository needed to resolve a version.

    Commits are identified by their lowercase hex hash. Implementations only
    read; nothing here mutates the repository.
    """

    @abstractmethod
    def head_commit(self) -> str:
        """Return the hash of the commit HEAD resolves to."""

    @abstractmethod
    def branches(self) -> List[BranchRef]:
        """Return every branch with its tip commit."""

    @abstractmethod
    def parents(self, commit: str) -> List[str]:
        """Return the direct parents of a commit, in parent order."""

    @abstractmethod
    def tags(self) -> Dict[str, str]:
        """Return tag names mapped to the commit they peel to."""

    def ancestors(self, commit: str) -> Iterator[str]:
        """
        Walk a commit and its ancestry breadth first.

        The starting commit is yielded first. Each commit is yielded once,
        parents are visited in parent order.
        """
        seen = {commit}
        queue = deque([commit])
        while queue:
            current = queue.popleft()
            yield current
            for parent in self.parents(current):
                if parent not in seen:
                    seen.add(parent)
                    queue.append(parent)

    def close(self) -> None:
        pass

    def __enter__(self) -> "RepositoryAccess":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


@dataclass
class InMemoryRepository(RepositoryAccess):
    """
    Repository held entirely in memory.

    Example:
        repo = InMemoryRepository(
            commits={"aa": [], "bb": ["aa"]},
            head="bb",
            branch_tips={"develop": "bb"},
        )
    """

    commits: Dict[str, List[str]] = field(default_factory=dict)
    head: Optional[str] = None
    branch_tips: Dict[str, str] = field(default_factory=dict)
    tag_targets: Dict[str, str] = field(default_factory=dict)

    def head_commit(self) -> str:
        if self.head is None:
            raise InvalidRepository("<memory>", "HEAD does not point at a commit")
        return self.head

    def branches(self) -> List[BranchRef]:
        return [BranchRef(name, commit) for name, commit in self.branch_tips.items()]

    def parents(self, commit: str) -> List[str]:
        return list(self.commits.get(commit, ()))

    def tags(self) -> Dict[str, str]:
        return dict(self.tag_targets)

    @classmethod
    def linear(cls, hashes: Sequence[str], branch: str) -> "InMemoryRepository":
        """Build a single-branch history, oldest commit first."""
        commits: Dict[str, List[str]] = {}
        previous: Optional[str] = None
        for commit in hashes:
            commits[commit] = [previous] if previous is not None else []
            previous = commit
        return cls(commits=commits, head=previous, branch_tips={branch: previous})


def commits_by_annotation(
    names_to_commits: Mapping[str, str],
) -> Dict[str, List[str]]:
    """Invert a name -> commit mapping into commit -> names."""
    result: Dict[str, List[str]] = {}
    for name, commit in names_to_commits.items():
        result.setdefault(commit, []).append(name)
    return result


def filter_branches_at(branches: Iterable[BranchRef], commit: str) -> List[BranchRef]:
    """Keep the branches whose tip is the given commit, preserving order."""
    return [branch for branch in branches if branch.commit == commit]
