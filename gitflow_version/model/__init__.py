"""Data models for gitflow version resolution."""

from .version import (
    Alpha,
    Development,
    GitflowInfo,
    Local,
    Production,
    SemverBase,
    SemverRC,
    VersionInfo,
    version_info_adapter,
)

__all__ = [
    "Alpha",
    "Development",
    "GitflowInfo",
    "Local",
    "Production",
    "SemverBase",
    "SemverRC",
    "VersionInfo",
    "version_info_adapter",
]
