"""
Version resolution for gitflow repositories.

LAYERS:
=======

1. **Parsing** (parser.py):
   - parse_semver: tag text such as v1.2.3 or v1.2.3-rc.4 to a VersionInfo
   - format_semver: the inverse rendering

2. **Classification** (resolver.py):
   - classify_branch: branch name to gitflow role
   - resolve_version: role plus tag history to Production, Alpha,
     Development or Local

3. **Build numbers** (build_number.py):
   - count_build_number: ancestry depth of the built commit

4. **Orchestration** (resolution.py):
   - resolve_info: everything above against an open repository
   - get_info_from_path: the same for a repository on disk

5. **Exception Hierarchy** (exceptions.py):
   - GitflowVersionError and its subclasses, shared by every layer
"""

from .exceptions import (
    AmbiguousBranch,
    BuildMetadataNotAllowed,
    BuildNumberOverflow,
    ComponentOutOfRange,
    ConfigError,
    GitflowVersionError,
    InvalidRepository,
    MalformedVersion,
    MissingOrInvalidRc,
    MissingPrefix,
    NoBranchAtHead,
    NoReleaseAncestor,
    ResolutionError,
    SemverParseError,
    UnclassifiableBranch,
    UnsupportedPrerelease,
)
from .parser import format_semver, is_release_branch_name, parse_semver
from .build_number import count_build_number
from .resolver import BranchKind, classify_branch, resolve_version
from .resolution import get_info_from_path, resolve_info, select_head_branch

__all__ = [
    # Resolution
    "get_info_from_path",
    "resolve_info",
    "select_head_branch",
    "resolve_version",
    "classify_branch",
    "BranchKind",
    "count_build_number",
    # Text conversion
    "parse_semver",
    "format_semver",
    "is_release_branch_name",
    # Exceptions
    "GitflowVersionError",
    "ConfigError",
    "InvalidRepository",
    "ResolutionError",
    "NoBranchAtHead",
    "AmbiguousBranch",
    "UnclassifiableBranch",
    "NoReleaseAncestor",
    "BuildNumberOverflow",
    "SemverParseError",
    "MissingPrefix",
    "MalformedVersion",
    "BuildMetadataNotAllowed",
    "ComponentOutOfRange",
    "UnsupportedPrerelease",
    "MissingOrInvalidRc",
]
