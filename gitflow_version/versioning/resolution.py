"""Resolve the gitflow version of a repository's current commit."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from gitflow_version.config import ResolverSettings, load_settings
from gitflow_version.git.access import BranchRef, RepositoryAccess, filter_branches_at
from gitflow_version.git.repository import GitRepository
from gitflow_version.model.version import GitflowInfo

from .build_number import count_build_number
from .exceptions import AmbiguousBranch, NoBranchAtHead
from .resolver import resolve_version

logger = logging.getLogger(__name__)


def select_head_branch(branches: List[BranchRef], head: str) -> BranchRef:
    """
    Pick the single branch whose tip is head.

    Raises:
        NoBranchAtHead: If no branch points at head
        AmbiguousBranch: If several branches point at head
    """
    at_head = filter_branches_at(branches, head)
    if not at_head:
        raise NoBranchAtHead(head)
    if len(at_head) > 1:
        raise AmbiguousBranch(head, [branch.name for branch in at_head])
    return at_head[0]


def resolve_info(
    repo: RepositoryAccess, settings: Optional[ResolverSettings] = None
) -> GitflowInfo:
    """
    Resolve version information from an open repository.

    Args:
        repo: Repository to read
        settings: Branch naming and build number settings (defaults if None)

    Returns:
        GitflowInfo snapshot of the current commit
    """
    settings = settings or ResolverSettings()

    head = repo.head_commit()
    branch = select_head_branch(repo.branches(), head)
    logger.debug(f"HEAD {head} is the tip of '{branch.name}'")

    version = resolve_version(branch.name, head, repo, settings)
    build_number = count_build_number(head, repo.parents, settings.build_number_mode)

    info = GitflowInfo(
        branch_name=branch.name,
        version=version,
        commit_hash=head,
        build_number=build_number,
    )
    logger.info(f"{info.branch_name}@{info.short_hash}: {info.version} build {build_number}")
    return info


def get_info_from_path(
    path: Union[str, Path],
    settings: Optional[ResolverSettings] = None,
    config_path: Optional[Union[str, Path]] = None,
) -> GitflowInfo:
    """
    Open the repository at path and resolve its current version.

    Settings are loaded from the configuration file when not given.
    The repository handle is released before returning.

    Raises:
        InvalidRepository: If path is not a repository or HEAD has no commit
        ResolutionError: If the version cannot be determined
    """
    path = Path(path)
    if settings is None:
        settings = load_settings(repo_path=path, config_path=config_path)

    with GitRepository.open(
        path, include_remote_branches=settings.include_remote_branches
    ) as repo:
        return resolve_info(repo, settings)

