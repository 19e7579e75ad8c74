"""Environment variable import.

Every setting can be overridden before the menu starts through
``<PREFIX>_<NAME>`` (e.g. ``DPS_HOSTNAME=web01``). Invalid overrides are
kept and reported so the menu can ask for them again.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Optional

from dps_configurator.settings.export import env_var_name, parse_export

if TYPE_CHECKING:
    from dps_configurator.settings.store import ConfigStore

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """Outcome of an environment import."""

    # Setting names imported, in import order
    imported: list[str] = field(default_factory=list)

    # Setting names whose imported value failed validation
    invalid: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.imported)


def import_env(
    store: "ConfigStore",
    prefix: str = "DPS",
    environ: Optional[Mapping[str, str]] = None,
) -> ImportSummary:
    """Import ``<PREFIX>_<NAME>`` overrides for every declared setting.

    Args:
        store: Store to write into.
        prefix: Variable prefix; a trailing underscore is optional.
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        ImportSummary listing imported and invalid settings.
    """
    environ = os.environ if environ is None else environ
    summary = ImportSummary()

    for setting in store.settings_sorted():
        var = env_var_name(prefix, setting.name)
        if var not in environ:
            continue

        result = store.set(setting.name, environ[var], origin="env", strict=False)
        summary.imported.append(setting.name)
        shown = setting.display_value if setting.setting_type.masked else result.value

        if result.valid:
            logger.debug(f"Imported {var} -> {setting.name}={shown}")
        else:
            summary.invalid.append(setting.name)
            logger.warning(f"Invalid value in {var} ({shown!r}): {result.error}")

    if summary.imported:
        logger.info(
            f"Imported {summary.count} setting(s) from environment "
            f"({len(summary.invalid)} invalid)"
        )
    return summary


def import_env_file(store: "ConfigStore", path: Path, prefix: str = "DPS") -> ImportSummary:
    """Import overrides from a dotenv file or a previous export script."""
    path = Path(path).expanduser()
    text = path.read_text(encoding="utf-8")
    logger.debug(f"Importing settings from {path}")
    return import_env(store, prefix=prefix, environ=parse_export(text))
