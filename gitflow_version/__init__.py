"""Build-time semantic versions from the state of a gitflow repository."""

# versioning must load before config, which imports its exceptions
from .versioning import *  # noqa: F401,F403
from .versioning import __all__ as _versioning_all
from .config import BuildNumberMode, ResolverSettings, load_settings
from .git import GitRepository, InMemoryRepository, RepositoryAccess
from .log import configure_logging
from .model import (
    Alpha,
    Development,
    GitflowInfo,
    Local,
    Production,
    SemverBase,
    SemverRC,
    VersionInfo,
)

__version__ = "0.1.0"

__all__ = list(_versioning_all) + [
    "Alpha",
    "BuildNumberMode",
    "Development",
    "GitRepository",
    "GitflowInfo",
    "InMemoryRepository",
    "Local",
    "Production",
    "RepositoryAccess",
    "ResolverSettings",
    "SemverBase",
    "SemverRC",
    "VersionInfo",
    "configure_logging",
    "load_settings",
]
