"""Export settings as a shell-sourceable script.

Each exported setting becomes ``export <PREFIX>_<NAME>="<value>"``, grouped
under ``# preset: <name>`` comments in preset priority order.
"""

import io
import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from dotenv import dotenv_values

if TYPE_CHECKING:
    from dps_configurator.settings.store import ConfigStore, Setting

logger = logging.getLogger(__name__)

# Characters with meaning inside a double-quoted shell string
_SHELL_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "$": "\\$", "`": "\\`"})


def env_var_name(prefix: str, name: str) -> str:
    """Build the environment variable name for a setting.

    >>> env_var_name("DPS", "HOSTNAME")
    'DPS_HOSTNAME'
    """
    prefix = prefix.rstrip("_")
    return f"{prefix}_{name}" if prefix else name


def quote_value(value: str) -> str:
    """Quote a value for a double-quoted shell string."""
    return '"' + value.translate(_SHELL_ESCAPES) + '"'


def _render(
    settings: list["Setting"],
    prefix: str,
    title: str,
    header: bool,
    today: Optional[date],
) -> str:
    lines: list[str] = []
    if header:
        stamp = (today or date.today()).isoformat()
        lines.extend([f"# {title} at {stamp}", ""])

    current_preset = None
    for setting in settings:
        if setting.preset != current_preset:
            if current_preset is not None:
                lines.append("")
            lines.append(f"# preset: {setting.preset}")
            current_preset = setting.preset
        lines.append(f"export {env_var_name(prefix, setting.name)}={quote_value(setting.value)}")

    return "\n".join(lines) + "\n"


def export_all(
    store: "ConfigStore",
    prefix: str = "DPS",
    header: bool = True,
    today: Optional[date] = None,
) -> str:
    """Export every exportable setting, defaults included."""
    settings = [s for s in store.settings_sorted() if s.exportable]
    return _render(settings, prefix, "Config export (all settings)", header, today)


def export_non_defaults(
    store: "ConfigStore",
    prefix: str = "DPS",
    header: bool = True,
    today: Optional[date] = None,
) -> str:
    """Export exportable settings whose value did not come from the default."""
    settings = [
        s for s in store.settings_sorted() if s.exportable and s.origin != "default"
    ]
    return _render(settings, prefix, "Config export", header, today)


def parse_export(text: str) -> dict[str, str]:
    """Read an export script back into a ``{VAR: value}`` mapping."""
    values = dotenv_values(stream=io.StringIO(text), interpolate=False)
    # python-dotenv only decodes the escapes it knows; undo the shell ones
    return {
        key: (value or "").replace("\\$", "$").replace("\\`", "`")
        for key, value in values.items()
    }


def write_export(path: Path, text: str) -> Path:
    """Write an export script, creating parent directories as needed."""
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote configuration export to {path}")
    return path
