"""Pydantic models for gitflow versions and resolution results."""

import json
from typing import Annotated, Any, Dict, Literal, Optional, Union

import yaml
from packaging.version import Version as PackagingVersion
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

MAX_COMPONENT = 255
MAX_BUILD_NUMBER = 2**64 - 1

Component = Annotated[int, Field(ge=0, le=MAX_COMPONENT)]


def validate_commit_hash(v: str) -> str:
    """Validate that a commit hash is lowercase hex of a whole number of bytes."""
    if not v or len(v) % 2 != 0:
        raise ValueError("commit hash must be a non-empty hex string of even length")
    if any(c not in "0123456789abcdef" for c in v):
        raise ValueError("commit hash must be lowercase hexadecimal")
    return v


class SemverBase(BaseModel):
    """A released major.minor.patch triple."""

    model_config = ConfigDict(frozen=True)

    major: Component
    minor: Component
    patch: Component

    def __str__(self) -> str:
        from gitflow_version.versioning.parser import format_semver

        return format_semver(self)

    def sort_key(self) -> PackagingVersion:
        return PackagingVersion(f"{self.major}.{self.minor}.{self.patch}")


class SemverRC(BaseModel):
    """A release candidate scoped to one base version."""

    model_config = ConfigDict(frozen=True)

    base: SemverBase
    rc: Annotated[int, Field(ge=1, le=MAX_COMPONENT)]

    def __str__(self) -> str:
        from gitflow_version.versioning.parser import format_semver

        return format_semver(self)

    def sort_key(self) -> PackagingVersion:
        b = self.base
        return PackagingVersion(f"{b.major}.{b.minor}.{b.patch}rc{self.rc}")


class _Version(BaseModel):
    """Behaviour shared by the VersionInfo variants."""

    model_config = ConfigDict(frozen=True)

    def get_semver(self) -> Optional[str]:
        """Tag-compatible version string, or None for builds without one."""
        semver = getattr(self, "semver", None)
        return str(semver) if semver is not None else None

    def is_production(self) -> bool:
        return isinstance(self, Production)

    def is_alpha(self) -> bool:
        return isinstance(self, Alpha)

    def is_development(self) -> bool:
        return isinstance(self, Development)

    def is_local(self) -> bool:
        return isinstance(self, Local)


class Production(_Version):
    """Production release, built from master/main."""

    kind: Literal["production"] = "production"
    semver: SemverBase

    def __str__(self) -> str:
        return f"Prod: {self.semver}"

    def sort_key(self) -> PackagingVersion:
        return self.semver.sort_key()


class Alpha(_Version):
    """Release candidate, built from a vX.Y.Z release branch."""

    kind: Literal["alpha"] = "alpha"
    semver: SemverRC

    def __str__(self) -> str:
        return f"Alpha: {self.semver}"

    def sort_key(self) -> PackagingVersion:
        return self.semver.sort_key()


class Development(_Version):
    kind: Literal["development"] = "development"

    def __str__(self) -> str:
        return "Development"


class Local(_Version):
    kind: Literal["local"] = "local"

    def __str__(self) -> str:
        return "Local"


# Closed set: adding a variant means touching every isinstance dispatch
VersionInfo = Annotated[
    Union[Production, Alpha, Development, Local], Field(discriminator="kind")
]

version_info_adapter: TypeAdapter = TypeAdapter(VersionInfo)


class GitflowInfo(BaseModel):
    """Snapshot of a single version resolution."""

    model_config = ConfigDict(frozen=True)

    branch_name: str
    version: VersionInfo
    commit_hash: str
    build_number: Annotated[int, Field(ge=0, le=MAX_BUILD_NUMBER)]

    @field_validator("commit_hash")
    @classmethod
    def validate_commit_hash_field(cls, v: str) -> str:
        return validate_commit_hash(v)

    @property
    def short_hash(self) -> str:
        return self.commit_hash[:7]

    @property
    def semver(self) -> Optional[str]:
        return self.version.get_semver()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "GitflowInfo":
        return cls.model_validate_json(text)

    def to_yaml(self) -> str:
        """Serialize to YAML, keeping the declared field order."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    @classmethod
    def from_yaml(cls, text: str) -> "GitflowInfo":
        data = yaml.safe_load(text)
        if not isinstance(data, dict):
            raise ValueError("YAML document must be a mapping")
        return cls.model_validate(data)
