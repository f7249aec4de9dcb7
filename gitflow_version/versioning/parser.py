"""
Conversion between tag-style version strings and VersionInfo values.

Accepted forms are ``vX.Y.Z`` (a production release) and ``vX.Y.Z-rc.W``
(release candidate W of X.Y.Z). Every component is limited to 0-255 and the
release candidate number starts at 1.
"""

import re
from typing import Union

from gitflow_version.model.version import (
    MAX_COMPONENT,
    Alpha,
    Production,
    SemverBase,
    SemverRC,
)

from .exceptions import (
    BuildMetadataNotAllowed,
    ComponentOutOfRange,
    MalformedVersion,
    MissingOrInvalidRc,
    MissingPrefix,
    UnsupportedPrerelease,
)

PREFIX = "v"
RC_LABEL = "rc"

# semver.org grammar without the leading 'v'
_SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9][0-9]*)\.(?P<minor>0|[1-9][0-9]*)\.(?P<patch>0|[1-9][0-9]*)"
    r"(?:-(?P<pre>(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9][0-9]*|[0-9]*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

RELEASE_BRANCH_PATTERN = re.compile(r"^v[0-9]+\.[0-9]+\.[0-9]+$")
_DIGITS = re.compile(r"[0-9]+")


def _component(text: str, name: str, value: str) -> int:
    number = int(value)
    if number > MAX_COMPONENT:
        raise ComponentOutOfRange(text, name, number, MAX_COMPONENT)
    return number


def _parse_rc(text: str, prerelease: str) -> int:
    parts = prerelease.split(".")
    if parts[0] != RC_LABEL:
        raise UnsupportedPrerelease(text, parts[0])
    if len(parts) < 2:
        raise MissingOrInvalidRc(text)
    if len(parts) > 2:
        raise MissingOrInvalidRc(text, ".".join(parts[1:]))

    segment = parts[1]
    if not _DIGITS.fullmatch(segment):
        raise MissingOrInvalidRc(text, segment)
    rc = int(segment)
    if rc < 1 or rc > MAX_COMPONENT:
        raise MissingOrInvalidRc(text, segment)
    return rc


def parse_semver(text: str) -> Union[Production, Alpha]:
    """
    Parse a tag-style version string.

    Args:
        text: Version string such as ``v1.2.3`` or ``v1.2.3-rc.4``

    Returns:
        Production for a plain release, Alpha for a release candidate

    Raises:
        MissingPrefix: If the string does not start with 'v'
        MalformedVersion: If the remainder is not a semantic version
        BuildMetadataNotAllowed: If a '+metadata' suffix is present
        ComponentOutOfRange: If major, minor or patch exceed 255
        UnsupportedPrerelease: If the prerelease label is not 'rc'
        MissingOrInvalidRc: If the rc number is absent or not in 1-255
    """
    if not isinstance(text, str) or not text.startswith(PREFIX):
        raise MissingPrefix(str(text))

    match = _SEMVER_PATTERN.fullmatch(text[len(PREFIX) :])
    if match is None:
        raise MalformedVersion(text)
    if match.group("build") is not None:
        raise BuildMetadataNotAllowed(text, match.group("build"))

    base = SemverBase(
        major=_component(text, "major", match.group("major")),
        minor=_component(text, "minor", match.group("minor")),
        patch=_component(text, "patch", match.group("patch")),
    )

    prerelease = match.group("pre")
    if prerelease is None:
        return Production(semver=base)
    return Alpha(semver=SemverRC(base=base, rc=_parse_rc(text, prerelease)))


def format_semver(semver: Union[SemverBase, SemverRC]) -> str:
    """Render a version payload in the form accepted by parse_semver."""
    if isinstance(semver, SemverRC):
        b = semver.base
        return f"{PREFIX}{b.major}.{b.minor}.{b.patch}-{RC_LABEL}.{semver.rc}"
    return f"{PREFIX}{semver.major}.{semver.minor}.{semver.patch}"


def is_release_branch_name(name: str) -> bool:
    """Check whether a branch name has the vX.Y.Z release form."""
    return bool(RELEASE_BRANCH_PATTERN.fullmatch(name))
