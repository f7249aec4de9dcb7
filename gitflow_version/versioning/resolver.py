"""
Classification of the checked out commit into a version kind.

| branch              | kind        | version                                  |
|---------------------|-------------|------------------------------------------|
| master, main        | Production  | merged release, else nearest ancestor    |
| vX.Y.Z              | Alpha       | X.Y.Z, rc one above the highest rc tag   |
| develop             | Development | none                                     |
| anything else       | Local       | none                                     |
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from gitflow_version.config import ResolverSettings
from gitflow_version.git.access import RepositoryAccess, commits_by_annotation
from gitflow_version.model.version import (
    MAX_COMPONENT,
    Alpha,
    Development,
    Local,
    Production,
    SemverBase,
    SemverRC,
    VersionInfo,
)

from .exceptions import (
    ComponentOutOfRange,
    NoReleaseAncestor,
    SemverParseError,
    UnclassifiableBranch,
)
from .parser import PREFIX, format_semver, is_release_branch_name, parse_semver

logger = logging.getLogger(__name__)


class BranchKind(str, Enum):
    PRODUCTION = "production"
    RELEASE = "release"
    DEVELOP = "develop"
    FEATURE = "feature"


def classify_branch(
    branch_name: str, settings: Optional[ResolverSettings] = None
) -> BranchKind:
    """
    Map a branch name to its gitflow role.

    Any name that is not a production, release or develop branch is a
    feature branch.

    Raises:
        UnclassifiableBranch: If the name is empty or only whitespace
    """
    settings = settings or ResolverSettings()
    if not isinstance(branch_name, str) or not branch_name.strip():
        raise UnclassifiableBranch(str(branch_name))

    if branch_name in settings.production_branches:
        return BranchKind.PRODUCTION
    if is_release_branch_name(branch_name):
        return BranchKind.RELEASE
    if branch_name == settings.develop_branch:
        return BranchKind.DEVELOP
    return BranchKind.FEATURE


def _parse_quietly(name: str) -> Optional[VersionInfo]:
    """Parse a tag or branch name, None if it is not a version."""
    if not name.startswith(PREFIX):
        return None
    try:
        return parse_semver(name)
    except SemverParseError as e:
        logger.debug(f"Ignoring '{name}': {e}")
        return None


def _release_base(version: VersionInfo) -> SemverBase:
    if isinstance(version, Production):
        return version.semver
    if isinstance(version, Alpha):
        return version.semver.base
    raise TypeError(f"{version!r} carries no release version")


def next_release_candidate(
    base: SemverBase, head: str, repo: RepositoryAccess
) -> SemverRC:
    """
    Pick the release candidate number for a commit on a release branch.

    The highest rc among tags of the same base reachable from head, plus one.
    A commit already tagged as a candidate of this base keeps its tag.

    Raises:
        ComponentOutOfRange: If the next candidate would exceed 255
    """
    tags_by_commit = commits_by_annotation(repo.tags())

    for name in tags_by_commit.get(head, ()):
        version = _parse_quietly(name)
        if isinstance(version, Alpha) and version.semver.base == base:
            logger.debug(f"Head {head[:7]} already tagged {name}")
            return version.semver

    highest = 0
    for commit in repo.ancestors(head):
        for name in tags_by_commit.get(commit, ()):
            version = _parse_quietly(name)
            if isinstance(version, Alpha) and version.semver.base == base:
                highest = max(highest, version.semver.rc)

    rc = highest + 1
    if rc > MAX_COMPONENT:
        raise ComponentOutOfRange(
            f"{format_semver(base)}-rc.{rc}", "rc", rc, MAX_COMPONENT
        )
    logger.debug(f"Highest reachable rc for {format_semver(base)}: {highest}")
    return SemverRC(base=base, rc=rc)


def _release_annotations(
    repo: RepositoryAccess, settings: ResolverSettings
) -> Dict[str, List[VersionInfo]]:
    """Versions carried by tags and release branches, keyed by commit."""
    names: Dict[str, List[str]] = commits_by_annotation(repo.tags())
    for branch in repo.branches():
        if classify_branch(branch.name, settings) is BranchKind.RELEASE:
            names.setdefault(branch.commit, []).append(branch.name)

    annotations: Dict[str, List[VersionInfo]] = {}
    for commit, commit_names in names.items():
        versions = [v for v in map(_parse_quietly, commit_names) if v is not None]
        if versions:
            annotations[commit] = versions
    return annotations


def _by_depth(
    repo: RepositoryAccess, starts: List[str], excluded: Optional[Set[str]] = None
) -> Iterable[List[str]]:
    """
    Yield the ancestry of starts one breadth-first level at a time.

    Commits in excluded are neither yielded nor walked through.
    """
    excluded = excluded or set()
    level = [commit for commit in starts if commit not in excluded]
    seen = set(excluded) | set(level)
    while level:
        yield level
        following = []
        for commit in level:
            for parent in repo.parents(commit):
                if parent not in seen:
                    seen.add(parent)
                    following.append(parent)
        level = following


def _nearest_release(
    levels: Iterable[List[str]], annotations: Dict[str, List[VersionInfo]]
) -> Optional[SemverBase]:
    """Highest release base on the first level that carries any."""
    for level in levels:
        found = [
            _release_base(version)
            for commit in level
            for version in annotations.get(commit, ())
        ]
        if found:
            return max(found, key=lambda b: b.sort_key())
    return None


def production_release(
    branch_name: str,
    head: str,
    repo: RepositoryAccess,
    settings: Optional[ResolverSettings] = None,
) -> SemverBase:
    """
    Find the release a production commit ships.

    A release tag or release branch on head itself wins. When head merges
    other lines into its first parent, the merged side is searched first,
    leaving out everything the first parent already reaches, so a merge
    reports the release it brings in even when the merged tip is untagged.
    Otherwise, or when the merged side carries no release, the whole ancestry
    is searched level by level. At the first level holding any release the
    highest base wins.

    Raises:
        NoReleaseAncestor: If no ancestor carries a release version
    """
    settings = settings or ResolverSettings()
    annotations = _release_annotations(repo, settings)

    parents = repo.parents(head)
    if head not in annotations and len(parents) > 1:
        mainline = set(repo.ancestors(parents[0]))
        base = _nearest_release(_by_depth(repo, parents[1:], mainline), annotations)
        if base is not None:
            logger.debug(f"Release {base} merged into {head[:7]}")
            return base

    base = _nearest_release(_by_depth(repo, [head]), annotations)
    if base is None:
        raise NoReleaseAncestor(branch_name, head)
    logger.debug(f"Release {base} found in the ancestry of {head[:7]}")
    return base


def resolve_version(
    branch_name: str,
    head: str,
    repo: RepositoryAccess,
    settings: Optional[ResolverSettings] = None,
) -> VersionInfo:
    """
    Resolve the version kind of head, checked out on branch_name.

    Raises:
        UnclassifiableBranch: If the branch name cannot be classified
        SemverParseError: If a release branch name is not a valid version
        NoReleaseAncestor: If a production commit has no release ancestry
    """
    settings = settings or ResolverSettings()
    kind = classify_branch(branch_name, settings)
    logger.debug(f"Branch '{branch_name}' classified as {kind.value}")

    if kind is BranchKind.PRODUCTION:
        return Production(semver=production_release(branch_name, head, repo, settings))
    if kind is BranchKind.RELEASE:
        base = _release_base(parse_semver(branch_name))
        return Alpha(semver=next_release_candidate(base, head, repo))
    if kind is BranchKind.DEVELOP:
        return Development()
    if kind is BranchKind.FEATURE:
        return Local()
    raise UnclassifiableBranch(branch_name)
