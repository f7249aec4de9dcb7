"""
Build numbers derived from commit ancestry.

In the default PATHS mode a commit counts one for every parent edge plus
everything its parents count:

    count(c) = sum(1 + count(p) for p in parents(c))

A root commit is 0 and a linear history of depth N is N. Shared ancestors
are not deduplicated, so history that diverges and rejoins counts a common
ancestor once per path it lies on. UNIQUE mode counts distinct ancestors
instead.
"""

import logging
from typing import Callable, Dict, List

from gitflow_version.config import BuildNumberMode
from gitflow_version.model.version import MAX_BUILD_NUMBER

from .exceptions import BuildNumberOverflow

logger = logging.getLogger(__name__)

ParentLookup = Callable[[str], List[str]]


def count_paths(head: str, parents: ParentLookup) -> int:
    """Count ancestry per path, memoised per commit."""
    counts: Dict[str, int] = {}
    stack = [head]
    while stack:
        commit = stack[-1]
        if commit in counts:
            stack.pop()
            continue
        pending = [p for p in parents(commit) if p not in counts]
        if pending:
            stack.extend(pending)
            continue
        counts[commit] = sum(1 + counts[p] for p in parents(commit))
        stack.pop()
    return counts[head]


def count_unique(head: str, parents: ParentLookup) -> int:
    """Count distinct commits reachable from head, head excluded."""
    seen = {head}
    stack = [head]
    while stack:
        for parent in parents(stack.pop()):
            if parent not in seen:
                seen.add(parent)
                stack.append(parent)
    return len(seen) - 1


def count_build_number(
    head: str,
    parents: ParentLookup,
    mode: BuildNumberMode = BuildNumberMode.PATHS,
) -> int:
    """
    Compute the build number of a commit.

    Args:
        head: Hash of the commit being built
        parents: Callable returning the parent hashes of a commit
        mode: Counting policy

    Returns:
        Build number in the unsigned 64-bit range

    Raises:
        BuildNumberOverflow: If the count does not fit in 64 bits
    """
    if mode is BuildNumberMode.UNIQUE:
        build_number = count_unique(head, parents)
    else:
        build_number = count_paths(head, parents)

    if build_number > MAX_BUILD_NUMBER:
        raise BuildNumberOverflow(build_number)
    logger.debug(f"Build number for {head[:7]} ({mode.value}): {build_number}")
    return build_number
