"""Declarative preset files.

A YAML file can add presets and settings on top of the built-in ones::

    presets:
      - name: monitoring
        display: Monitoring
        priority: 70
        settings:
          - name: PROMETHEUS_ENABLE
            type: toggle
            default: false
          - name: PROMETHEUS_PORT
            type: port
            default: 9090
            min: 1024
            visible_all: PROMETHEUS_ENABLE==true

Keys other than the common setting fields are passed to the setting's type
as attributes.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from dps_configurator.errors import PresetFileError

logger = logging.getLogger(__name__)

PRESET_KEYS = {"name", "display", "priority", "enabled", "settings"}
SETTING_FIELDS = {
    "display",
    "default",
    "exportable",
    "required",
    "visible_all",
    "visible_any",
}


def _require(entry: dict[str, Any], key: str, where: str) -> Any:
    value = entry.get(key)
    if value in (None, ""):
        raise PresetFileError(f"{where}: missing '{key}'")
    return value


def _scalar(value: Any) -> Any:
    # YAML reads true/false as booleans; str() would store "True"
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _register_setting(store, preset_name: str, entry: Any, index: int) -> None:
    where = f"preset '{preset_name}' setting #{index}"
    if not isinstance(entry, dict):
        raise PresetFileError(f"{where}: expected a mapping, got {type(entry).__name__}")

    name = str(_require(entry, "name", where))
    type_name = str(_require(entry, "type", f"{where} ({name})"))

    options = {key: entry[key] for key in SETTING_FIELDS if key in entry}
    if "default" in options:
        options["default"] = _scalar(options["default"])
    attrs = {
        key: value
        for key, value in entry.items()
        if key not in SETTING_FIELDS and key not in ("name", "type")
    }
    store.create(name, type_name, preset=preset_name, **options, **attrs)


def register_presets(store, data: Any, source: str = "<data>") -> list[str]:
    """Create the presets described by an already-parsed document.

    Returns:
        Names of the presets created, in file order.
    """
    if not isinstance(data, dict) or not isinstance(data.get("presets"), list):
        raise PresetFileError(f"{source}: expected a top-level 'presets' list")

    created: list[str] = []
    for index, entry in enumerate(data["presets"], 1):
        if not isinstance(entry, dict):
            raise PresetFileError(f"{source}: preset #{index} must be a mapping")

        unknown = sorted(set(entry) - PRESET_KEYS)
        if unknown:
            raise PresetFileError(
                f"{source}: preset #{index} has unknown key(s): {', '.join(unknown)}"
            )

        name = str(_require(entry, "name", f"{source}: preset #{index}"))
        store.create_preset(
            name,
            display=entry.get("display"),
            priority=entry.get("priority", 50),
            enabled=bool(entry.get("enabled", True)),
        )
        for setting_index, setting_entry in enumerate(entry.get("settings") or [], 1):
            _register_setting(store, name, setting_entry, setting_index)

        created.append(name)

    return created


def load_presets_from_file(store, file_path: Path) -> list[str]:
    """
    Load presets from a YAML file into ``store``.

    Args:
        store: ConfigStore to register into
        file_path: Path to the presets YAML file

    Returns:
        Names of the presets created

    Raises:
        PresetFileError: If the file cannot be read or parsed.
        ConfiguratorError: For structural mistakes in the declarations.
    """
    file_path = Path(file_path).expanduser()
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise PresetFileError(f"Cannot read presets file {file_path}: {e}") from e
    except yaml.YAMLError as e:
        raise PresetFileError(f"Invalid YAML in {file_path}: {e}") from e

    created = register_presets(store, data, source=str(file_path))
    logger.info(f"Loaded {len(created)} preset(s) from {file_path}")
    return created
