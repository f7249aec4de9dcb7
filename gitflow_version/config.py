"""Settings for version resolution, read from an optional INI file."""

import configparser
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from gitflow_version.versioning.exceptions import ConfigError

APP_NAME = "gitflow-version"
CONFIG_ENV_VAR = "GITFLOW_VERSION_CONFIG"
REPO_CONFIG_NAME = f".{APP_NAME}.cfg"
SECTION = "gitflow"

logger = logging.getLogger(__name__)


class BuildNumberMode(str, Enum):
    """How ancestors are counted into a build number."""

    # every path through the parent graph counts, shared ancestors repeat
    PATHS = "paths"
    # each distinct ancestor counts once
    UNIQUE = "unique"


@dataclass(frozen=True)
class ResolverSettings:
    production_branches: Tuple[str, ...] = ("master", "main")
    develop_branch: str = "develop"
    build_number_mode: BuildNumberMode = BuildNumberMode.PATHS
    include_remote_branches: bool = False


class ConfigAccessor:
    """
    A dict-like accessor for configuration files.

    Missing sections or keys fall back to the given default. A file that
    cannot be parsed raises ConfigError.

    Usage:
        config = ConfigAccessor(Path("repo/.gitflow-version.cfg"))
        value = config.get('gitflow', 'develop_branch', default='develop')
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path
        self.config = configparser.ConfigParser()
        if self.config_path is not None and self.config_path.exists():
            try:
                self.config.read(self.config_path)
            except configparser.Error as e:
                raise ConfigError(
                    "config_path", str(self.config_path), f"not a settings file ({e.message})"
                ) from e

    def get(self, section: str, key: str, default: Any = None) -> Any:
        try:
            return self.config[section][key]
        except KeyError:
            return default

    def getboolean(self, section: str, key: str, default: bool = False) -> bool:
        value = self.get(section, key)
        if value is None:
            return default
        try:
            return self.config.BOOLEAN_STATES[value.strip().lower()]
        except KeyError:
            raise ConfigError(key, value, "expected a boolean")


def find_config_file(
    repo_path: Optional[Union[str, Path]] = None,
    config_path: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """
    Locate the settings file.

    Lookup order: explicit path, the GITFLOW_VERSION_CONFIG environment
    variable, then .gitflow-version.cfg at the repository root.
    """
    if config_path is not None:
        return Path(config_path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    if repo_path is not None:
        candidate = Path(repo_path) / REPO_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _split_names(value: str) -> Tuple[str, ...]:
    return tuple(name.strip() for name in value.split(",") if name.strip())


def load_settings(
    repo_path: Optional[Union[str, Path]] = None,
    config_path: Optional[Union[str, Path]] = None,
) -> ResolverSettings:
    """
    Load resolver settings, using defaults for anything not configured.

    A settings file named explicitly or through GITFLOW_VERSION_CONFIG must
    exist; only the repository file is optional.

    Raises:
        ConfigError: If the settings file is missing, unreadable, or holds
            an invalid value
    """
    path = find_config_file(repo_path, config_path)
    if path is None:
        return ResolverSettings()
    if not path.is_file():
        raise ConfigError("config_path", str(path), "file does not exist")

    logger.debug(f"Reading settings from {path}")
    accessor = ConfigAccessor(path)
    defaults = ResolverSettings()

    production = defaults.production_branches
    raw_production = accessor.get(SECTION, "production_branches")
    if raw_production is not None:
        production = _split_names(raw_production)
        if not production:
            raise ConfigError("production_branches", raw_production, "empty list")

    develop = accessor.get(SECTION, "develop_branch", defaults.develop_branch).strip()
    if not develop:
        raise ConfigError("develop_branch", develop, "empty name")
    if develop in production:
        raise ConfigError(
            "develop_branch", develop, "also listed in production_branches"
        )

    raw_mode = accessor.get(SECTION, "build_number_mode", defaults.build_number_mode.value)
    try:
        mode = BuildNumberMode(raw_mode.strip().lower())
    except ValueError:
        raise ConfigError(
            "build_number_mode",
            raw_mode,
            f"expected one of {', '.join(m.value for m in BuildNumberMode)}",
        )

    return ResolverSettings(
        production_branches=production,
        develop_branch=develop,
        build_number_mode=mode,
        include_remote_branches=accessor.getboolean(
            SECTION, "include_remote_branches", defaults.include_remote_branches
        ),
    )
