"""GitPython-backed repository access."""

import logging
from pathlib import Path
from typing import Dict, List, Union

from git import Repo
from git.exc import BadName, BadObject, InvalidGitRepositoryError, NoSuchPathError

from gitflow_version.versioning.exceptions import InvalidRepository

from .access import BranchRef, RepositoryAccess

# raised by GitPython when an object named by a ref or a commit header is absent
MISSING_OBJECT = (ValueError, BadName, BadObject)

logger = logging.getLogger(__name__)


class GitRepository(RepositoryAccess):
    """
    Read-only view of an on-disk git repository.

    Use as a context manager so the underlying handle is released whether
    resolution succeeds or fails:

        with GitRepository.open(path) as repo:
            head = repo.head_commit()
    """

    def __init__(self, repo: Repo, include_remote_branches: bool = False):
        self._repo = repo
        self.include_remote_branches = include_remote_branches
        self._parents: Dict[str, List[str]] = {}

    @classmethod
    def open(
        cls, path: Union[str, Path], include_remote_branches: bool = False
    ) -> "GitRepository":
        """
        Open the repository at path.

        Raises:
            InvalidRepository: If path does not exist or is not a git repository
        """
        path = Path(path)
        try:
            repo = Repo(path.as_posix())
        except NoSuchPathError as e:
            raise InvalidRepository(str(path), "path does not exist") from e
        except InvalidGitRepositoryError as e:
            raise InvalidRepository(str(path), "not a git repository") from e
        logger.debug(f"Opened git repository at {repo.git_dir}")
        return cls(repo, include_remote_branches=include_remote_branches)

    @property
    def path(self) -> str:
        return self._repo.working_tree_dir or self._repo.git_dir

    def head_commit(self) -> str:
        try:
            return self._repo.head.commit.hexsha
        except MISSING_OBJECT as e:
            # Unborn branch or HEAD pointing at something that is not a commit
            raise InvalidRepository(
                self.path, f"HEAD does not resolve to a commit ({e})"
            ) from e

    def branches(self) -> List[BranchRef]:
        refs: List[BranchRef] = []
        for head in self._repo.heads:
            try:
                refs.append(BranchRef(head.name, head.commit.hexsha))
            except MISSING_OBJECT:
                logger.debug(f"Skipping branch {head.path}: no commit at its tip")

        if not self.include_remote_branches:
            return refs

        # Remote-tracking branches are reported without the remote prefix.
        # A remote branch matching a local one at the same commit is the same branch.
        seen = set(refs)
        for remote in self._repo.remotes:
            for ref in remote.refs:
                if ref.remote_head == "HEAD":
                    continue
                try:
                    branch = BranchRef(ref.remote_head, ref.commit.hexsha)
                except MISSING_OBJECT:
                    logger.debug(f"Skipping remote branch {ref.path}: no commit")
                    continue
                if branch not in seen:
                    seen.add(branch)
                    refs.append(branch)
        return refs

    def parents(self, commit: str) -> List[str]:
        """
        Return the parents of a commit.

        Raises:
            InvalidRepository: If the commit object is not in the repository,
                as happens past the boundary of a shallow clone
        """
        if commit not in self._parents:
            try:
                self._parents[commit] = [
                    parent.hexsha for parent in self._repo.commit(commit).parents
                ]
            except MISSING_OBJECT as e:
                raise InvalidRepository(
                    self.path,
                    f"commit {commit} is missing, history may be shallow ({e})",
                ) from e
        return list(self._parents[commit])

    def tags(self) -> Dict[str, str]:
        targets: Dict[str, str] = {}
        for tag in self._repo.tags:
            try:
                targets[tag.name] = tag.commit.hexsha
            except MISSING_OBJECT:
                logger.debug(f"Skipping tag {tag.name}: does not point at a commit")
        return targets

    def close(self) -> None:
        self._repo.close()
