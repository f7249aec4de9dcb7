import io
import logging
from pathlib import Path
from typing import Iterable, Optional

import pytest
from git import Actor, Repo

from gitflow_version.config import CONFIG_ENV_VAR


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("gitflow_version")
    logger.addHandler(handler)
    previous_level = logger.level
    logger.setLevel(logging.DEBUG)

    yield log_stream  # Yield the stream to the test function

    # Cleanup after the test
    logger.removeHandler(handler)
    logger.setLevel(previous_level)
    log_stream.close()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep a developer's settings file out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


# git fixtures


class GitHistoryBuilder:
    """Helper class to build commit graphs in a real repository for testing."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path.as_posix())
        self.actor = Actor("Test Author", "author@example.com")
        self._count = 0

    def commit(self, parents: Optional[Iterable[str]] = None, message: str = "") -> str:
        """Create an empty-tree commit with the given parents and return its hash."""
        self._count += 1
        parent_commits = [self.repo.commit(p) for p in (parents or [])]
        commit = self.repo.index.commit(
            message or f"commit {self._count}",
            parent_commits=parent_commits,
            head=False,
            author=self.actor,
            committer=self.actor,
        )
        return commit.hexsha

    def chain(self, length: int, parent: Optional[str] = None) -> list:
        """Create a linear run of commits on top of parent, oldest first."""
        hashes = []
        for _ in range(length):
            parent = self.commit([parent] if parent else [])
            hashes.append(parent)
        return hashes

    def branch(self, name: str, commit: str) -> None:
        self.repo.create_head(name, self.repo.commit(commit), force=True)

    def tag(self, name: str, commit: str, message: Optional[str] = None) -> None:
        if message is None:
            self.repo.create_tag(name, ref=self.repo.commit(commit))
        else:
            self.repo.create_tag(name, ref=self.repo.commit(commit), message=message)

    def checkout(self, branch: str) -> None:
        """Point HEAD at a branch without touching the working tree."""
        self.repo.head.reference = self.repo.heads[branch]

    def detach(self, commit: str) -> None:
        self.repo.head.reference = self.repo.commit(commit)


@pytest.fixture
def git_history(tmp_path, monkeypatch):
    """Fixture providing an empty repository and a builder for its history."""
    for var in ("GIT_AUTHOR", "GIT_COMMITTER"):
        monkeypatch.setenv(f"{var}_NAME", "Test Author")
        monkeypatch.setenv(f"{var}_EMAIL", "author@example.com")
    builder = GitHistoryBuilder(tmp_path / "repo")
    yield builder
    builder.repo.close()
