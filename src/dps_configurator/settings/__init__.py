"""Settings engine for dps-configurator.

Provides the setting/preset store, visibility conditions, apply hooks,
validation, environment import and export.
"""

from .conditions import Condition, is_visible, parse_condition, parse_conditions, visible_settings
from .env_import import ImportSummary, import_env, import_env_file
from .export import (
    env_var_name,
    export_all,
    export_non_defaults,
    parse_export,
    quote_value,
    write_export,
)
from .hooks import MAX_APPLY_DEPTH, dispatch_apply
from .store import APPLY_ORIGINS, ORIGINS, ConfigStore, Preset, Setting
from .validation import ValidationReport, validate_all, validate_preset, validate_setting
from .validators import ValidationResult

__all__ = [
    # Store
    "APPLY_ORIGINS",
    "ORIGINS",
    "ConfigStore",
    "Preset",
    "Setting",
    # Visibility
    "Condition",
    "is_visible",
    "parse_condition",
    "parse_conditions",
    "visible_settings",
    # Apply hooks
    "MAX_APPLY_DEPTH",
    "dispatch_apply",
    # Validation
    "ValidationReport",
    "ValidationResult",
    "validate_all",
    "validate_preset",
    "validate_setting",
    # Import / export
    "ImportSummary",
    "env_var_name",
    "export_all",
    "export_non_defaults",
    "import_env",
    "import_env_file",
    "parse_export",
    "quote_value",
    "write_export",
]
