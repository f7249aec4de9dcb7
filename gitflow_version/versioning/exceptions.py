"""
Exception classes for the versioning module.
"""

from typing import Optional, Sequence


class GitflowVersionError(Exception):
    """Base exception for all gitflow-version errors."""

    pass


class ConfigError(GitflowVersionError):
    """Raised when a settings file holds an invalid value."""

    def __init__(self, key: str, value: str, message: str = ""):
        self.key = key
        self.value = value
        detail = f": {message}" if message else ""
        super().__init__(f"Invalid value '{value}' for setting '{key}'{detail}")


class InvalidRepository(GitflowVersionError):
    """Raised when a path is not an openable repository or its history cannot be read."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        if reason:
            super().__init__(f"Invalid repository at {path}: {reason}")
        else:
            super().__init__(f"Invalid repository at {path}")


class ResolutionError(GitflowVersionError):
    """Base exception for failures while deriving a version."""

    pass


class NoBranchAtHead(ResolutionError):
    """Raised when no branch points at the current commit."""

    def __init__(self, commit: str):
        self.commit = commit
        super().__init__(f"Commit {commit} is not the tip of any branch")


class AmbiguousBranch(ResolutionError):
    """Raised when more than one branch points at the current commit."""

    def __init__(self, commit: str, branches: Sequence[str]):
        self.commit = commit
        self.branches = list(branches)
        super().__init__(
            f"Commit {commit} is the tip of several branches: "
            f"{', '.join(self.branches)}"
        )


class UnclassifiableBranch(ResolutionError):
    """Raised when a branch name cannot be mapped to a version kind."""

    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(f"Cannot classify branch name '{branch}'")


class NoReleaseAncestor(ResolutionError):
    """Raised when a production commit has no release version in its ancestry."""

    def __init__(self, branch: str, commit: str):
        self.branch = branch
        self.commit = commit
        super().__init__(
            f"No release tag or release branch found in the ancestry of "
            f"{commit} on '{branch}'"
        )


class BuildNumberOverflow(ResolutionError):
    """Raised when the build number does not fit in an unsigned 64-bit integer."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Build number {value} exceeds the unsigned 64-bit range")


class SemverParseError(ResolutionError):
    """Base exception for version strings rejected by the parser."""

    def __init__(self, text: str, message: str):
        self.text = text
        super().__init__(f"Invalid version '{text}': {message}")


class MissingPrefix(SemverParseError):
    def __init__(self, text: str):
        super().__init__(text, "must start with 'v'")


class MalformedVersion(SemverParseError):
    def __init__(self, text: str, expected_format: str = "vX.Y.Z or vX.Y.Z-rc.W"):
        self.expected_format = expected_format
        super().__init__(text, f"expected format {expected_format}")


class BuildMetadataNotAllowed(SemverParseError):
    def __init__(self, text: str, metadata: str):
        self.metadata = metadata
        super().__init__(text, f"build metadata '+{metadata}' is not allowed")


class ComponentOutOfRange(SemverParseError):
    def __init__(self, text: str, component: str, value: int, maximum: int = 255):
        self.component = component
        self.value = value
        super().__init__(
            text, f"{component} component {value} is outside the range 0-{maximum}"
        )


class UnsupportedPrerelease(SemverParseError):
    def __init__(self, text: str, label: str):
        self.label = label
        super().__init__(text, f"unsupported prerelease '{label}', expected 'rc'")


class MissingOrInvalidRc(SemverParseError):
    def __init__(self, text: str, segment: Optional[str] = None):
        self.segment = segment
        if segment is None:
            message = "expected rc.W at end of version"
        else:
            message = f"invalid release candidate number '{segment}'"
        super().__init__(text, message)
