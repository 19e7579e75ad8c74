"""Configuration module for dps-configurator."""

from .loader import ConfigPaths, EngineConfig, get_config_paths, load_engine_config
from .presets_file import load_presets_from_file, register_presets

__all__ = [
    "ConfigPaths",
    "EngineConfig",
    "get_config_paths",
    "load_engine_config",
    "load_presets_from_file",
    "register_presets",
]
