"""
Tests for the GitPython-backed repository access and end-to-end resolution.

Tests marked 'integration' create real repositories in a temporary
directory and need the git executable.
"""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest
from git import Repo
from git.exc import BadName, BadObject

from gitflow_version import get_info_from_path
from gitflow_version.config import ResolverSettings
from gitflow_version.git import BranchRef, GitRepository
from gitflow_version.model import Alpha, Development, Local, Production, SemverBase
from gitflow_version.versioning.exceptions import (
    AmbiguousBranch,
    InvalidRepository,
    NoBranchAtHead,
)


@pytest.mark.short
class TestOpen:
    def test_missing_path(self, tmp_path):
        with pytest.raises(InvalidRepository, match="does not exist"):
            GitRepository.open(tmp_path / "nowhere")

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(InvalidRepository, match="not a git repository"):
            GitRepository.open(tmp_path)

    def test_handle_released_on_error(self, tmp_path):
        with patch("gitflow_version.git.repository.Repo") as MockRepo:
            mock_repo = MagicMock()
            mock_repo.head.commit.hexsha = "ab" * 20
            mock_repo.heads = []
            MockRepo.return_value = mock_repo

            with pytest.raises(NoBranchAtHead):
                get_info_from_path(tmp_path, settings=ResolverSettings())

            mock_repo.close.assert_called_once()

    def test_missing_commit_object(self, tmp_path):
        mock_repo = MagicMock()
        mock_repo.working_tree_dir = str(tmp_path)
        mock_repo.commit.side_effect = BadName("deadbeef")
        repo = GitRepository(mock_repo)

        with pytest.raises(InvalidRepository, match="deadbeef is missing") as excinfo:
            repo.parents("deadbeef")
        assert excinfo.value.path == str(tmp_path)
        assert isinstance(excinfo.value.__cause__, BadName)

    def test_tag_on_missing_object_skipped(self):
        good, broken = MagicMock(), MagicMock()
        good.name = "v1.0.0"
        good.commit.hexsha = "ab" * 20
        broken.name = "v0.9.0"
        type(broken).commit = PropertyMock(side_effect=BadObject(b"\x00" * 20))
        mock_repo = MagicMock()
        mock_repo.tags = [good, broken]

        assert GitRepository(mock_repo).tags() == {"v1.0.0": "ab" * 20}


@pytest.mark.integration
class TestGitRepository:
    def test_unborn_head(self, git_history):
        with GitRepository.open(git_history.path) as repo:
            with pytest.raises(InvalidRepository, match="HEAD"):
                repo.head_commit()

    def test_reads_graph(self, git_history):
        root, second = git_history.chain(2)
        side = git_history.commit([root])
        merge = git_history.commit([second, side])
        git_history.branch("develop", merge)
        git_history.branch("feature/x", side)
        git_history.checkout("develop")

        with GitRepository.open(git_history.path) as repo:
            assert repo.head_commit() == merge
            assert sorted(repo.branches(), key=lambda b: b.name) == [
                BranchRef("develop", merge),
                BranchRef("feature/x", side),
            ]
            assert repo.parents(merge) == [second, side]
            assert repo.parents(root) == []
            assert list(repo.ancestors(merge)) == [merge, second, side, root]

    def test_tags_peel_to_commits(self, git_history):
        root, tip = git_history.chain(2)
        git_history.tag("v1.0.0", root)
        git_history.tag("v1.1.0-rc.1", tip, message="annotated")

        with GitRepository.open(git_history.path) as repo:
            assert repo.tags() == {"v1.0.0": root, "v1.1.0-rc.1": tip}

    def test_hash_is_lowercase_hex(self, git_history):
        (tip,) = git_history.chain(1)
        git_history.branch("develop", tip)
        git_history.checkout("develop")

        with GitRepository.open(git_history.path) as repo:
            head = repo.head_commit()
        assert len(head) == 40
        assert all(c in "0123456789abcdef" for c in head)


@pytest.mark.integration
class TestGetInfoFromPath:
    def test_gitflow_lifecycle(self, git_history):
        # develop with a feature merged in
        d1, d2 = git_history.chain(2)
        f1 = git_history.commit([d2])
        d3 = git_history.commit([d2, f1])
        git_history.branch("develop", d3)
        git_history.branch("feature/search", f1)

        git_history.checkout("develop")
        info = get_info_from_path(git_history.path)
        assert info.branch_name == "develop"
        assert info.version == Development()
        assert info.commit_hash == d3
        assert info.build_number == 5

        git_history.checkout("feature/search")
        assert get_info_from_path(git_history.path).version == Local()

        # release branch with one published candidate
        r1 = git_history.commit([d3])
        git_history.tag("v1.4.0-rc.1", r1)
        r2 = git_history.commit([r1])
        git_history.branch("v1.4.0", r2)
        git_history.checkout("v1.4.0")
        info = get_info_from_path(git_history.path)
        assert info.version.get_semver() == "v1.4.0-rc.2"
        assert isinstance(info.version, Alpha)

        # released onto master
        git_history.tag("v1.4.0-rc.2", r2)
        m1 = git_history.commit([d1, r2])
        git_history.branch("master", m1)
        git_history.checkout("master")
        info = get_info_from_path(git_history.path)
        assert info.version == Production(semver=SemverBase(major=1, minor=4, patch=0))
        assert str(info.version) == "Prod: v1.4.0"

    def test_two_branches_at_head(self, git_history):
        (tip,) = git_history.chain(1)
        git_history.branch("develop", tip)
        git_history.branch("feature/new", tip)
        git_history.checkout("feature/new")

        with pytest.raises(AmbiguousBranch) as excinfo:
            get_info_from_path(git_history.path)
        assert sorted(excinfo.value.branches) == ["develop", "feature/new"]

    def test_detached_head(self, git_history):
        first, second = git_history.chain(2)
        git_history.branch("develop", second)
        git_history.detach(first)

        with pytest.raises(NoBranchAtHead):
            get_info_from_path(git_history.path)

    def test_repository_settings_file(self, git_history):
        (tip,) = git_history.chain(1)
        git_history.branch("trunk", tip)
        git_history.checkout("trunk")
        (git_history.path / ".gitflow-version.cfg").write_text(
            "[gitflow]\ndevelop_branch = trunk\n"
        )

        assert get_info_from_path(git_history.path).version == Development()

    def test_shallow_clone(self, git_history, tmp_path):
        history = git_history.chain(5)
        git_history.branch("develop", history[-1])
        git_history.checkout("develop")

        clone_path = tmp_path / "shallow"
        Repo.clone_from(
            f"file://{git_history.path.as_posix()}", clone_path.as_posix(), depth=2
        ).close()

        with pytest.raises(InvalidRepository, match="shallow") as excinfo:
            get_info_from_path(clone_path)
        assert excinfo.value.__cause__ is not None

    def test_remote_branches(self, git_history, tmp_path):
        first, second = git_history.chain(2)
        git_history.branch("develop", second)
        git_history.branch("v2.0.0", first)
        git_history.checkout("develop")

        clone = Repo.clone_from(git_history.path.as_posix(), (tmp_path / "clone").as_posix())
        try:
            clone.head.reference = clone.commit(first)
        finally:
            clone.close()
        clone_path = tmp_path / "clone"

        with pytest.raises(NoBranchAtHead):
            get_info_from_path(clone_path)

        settings = ResolverSettings(include_remote_branches=True)
        info = get_info_from_path(clone_path, settings=settings)
        assert info.branch_name == "v2.0.0"
        assert info.version.get_semver() == "v2.0.0-rc.1"

        # local develop and origin/develop are the same branch
        with GitRepository.open(clone_path, include_remote_branches=True) as repo:
            names = sorted(branch.name for branch in repo.branches())
        assert names == ["develop", "v2.0.0"]
