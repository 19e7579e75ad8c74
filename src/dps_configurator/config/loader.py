"""Configuration file discovery and engine configuration."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "y", "on"}


@dataclass
class ConfigPaths:
    """Discovered configuration paths."""

    # Directories
    local_dir: Optional[Path] = None  # .dps/ in current directory
    user_dir: Optional[Path] = None  # ~/.config/dps/

    # Specific files (resolved from directories)
    env_file: Optional[Path] = None
    presets_file: Optional[Path] = None

    def __post_init__(self):
        """Resolve file paths from directories."""
        # Priority: local > user
        self.env_file = self._find_file(".env")
        self.presets_file = self._find_file("presets.yaml")

    def _find_file(self, filename: str) -> Optional[Path]:
        """Find a config file in priority order."""
        for directory in (self.local_dir, self.user_dir):
            if directory:
                candidate = directory / filename
                if candidate.exists():
                    return candidate
        return None


def get_config_paths() -> ConfigPaths:
    """
    Discover configuration paths.

    Priority order (highest to lowest):
    1. .dps/ in current directory
    2. ~/.config/dps/

    Returns:
        ConfigPaths with discovered locations
    """
    local_dir = Path.cwd() / ".dps"
    local_dir = local_dir if local_dir.exists() else None

    user_dir = Path.home() / ".config" / "dps"
    user_dir = user_dir if user_dir.exists() else None

    return ConfigPaths(local_dir=local_dir, user_dir=user_dir)


@dataclass
class EngineConfig:
    """Runtime options of the configurator."""

    # Environment variable prefix for setting overrides
    prefix: str = "DPS"

    # Confirm without the menu when everything validates
    auto_confirm: bool = False

    # Extra YAML preset declarations
    presets_file: Optional[Path] = None

    # .env file that was loaded, if any
    env_file: Optional[Path] = None

    # Where to write the export script (stdout when None)
    export_path: Optional[Path] = None

    verbose: bool = False


def _parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in TRUE_VALUES


def load_engine_config(
    paths: Optional[ConfigPaths] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> EngineConfig:
    """
    Load engine options from .env files and the environment.

    The first .env found (local .dps/ before ~/.config/dps/) is loaded into
    the process environment without overriding variables that are already
    set. Then DPS_CONFIG_PREFIX, DPS_AUTO_CONFIRM and DPS_PRESETS_FILE are
    read.
    """
    paths = paths or get_config_paths()

    if paths.env_file:
        if environ is None:
            load_dotenv(paths.env_file, override=False)
        else:
            file_values = dotenv_values(paths.env_file)
            environ = {
                **{k: v for k, v in file_values.items() if v is not None},
                **environ,
            }
        logger.debug(f"Loaded environment from {paths.env_file}")

    env = os.environ if environ is None else environ

    presets_raw = env.get("DPS_PRESETS_FILE", "").strip()
    if presets_raw:
        presets_file: Optional[Path] = Path(presets_raw).expanduser()
    else:
        presets_file = paths.presets_file

    return EngineConfig(
        prefix=env.get("DPS_CONFIG_PREFIX", "").strip() or "DPS",
        auto_confirm=_parse_bool(env.get("DPS_AUTO_CONFIRM")),
        presets_file=presets_file,
        env_file=paths.env_file,
    )
