"""Setting and preset registry.

The store owns every ``Setting`` and ``Preset`` record of one configuration
run, and ``get`` / ``set`` are the only paths that read or write values.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Literal, Optional, Sequence, Union

from dps_configurator.errors import (
    DuplicatePresetError,
    DuplicateSettingError,
    MissingAttributeError,
    UnknownPresetError,
    UnknownSettingError,
)
from dps_configurator.setting_types.base import SettingType, TypeCatalog
from dps_configurator.settings.conditions import Condition, parse_conditions
from dps_configurator.settings.hooks import dispatch_apply
from dps_configurator.settings.validators import ValidationResult

logger = logging.getLogger(__name__)


Origin = Literal["default", "env", "prompt", "auto", "manual"]

ORIGINS: tuple[str, ...] = ("default", "env", "prompt", "auto", "manual")

# Writes from these origins trigger apply hooks
APPLY_ORIGINS = frozenset({"prompt", "env", "manual"})

ConditionSpec = Union[None, str, Sequence[str]]
CrossFieldValidator = Callable[["ConfigStore"], list[str]]


def _default_display(name: str) -> str:
    return name.replace("_", " ").capitalize()


@dataclass
class Setting:
    """A single typed configuration value and its metadata."""

    # Globally unique name, also the env var suffix
    name: str

    # Resolved behavior from the catalog
    setting_type: SettingType

    # Owning preset name
    preset: str

    # Label shown in prompts and summaries
    display: str

    default: str = ""
    value: str = ""
    origin: str = "default"

    # Whether the value is written by the export engine
    exportable: bool = True

    # Whether an empty value counts as an error
    required: bool = False

    # Frozen attribute struct of the setting's type
    attrs: Any = None

    visible_all: tuple[Condition, ...] = ()
    visible_any: tuple[Condition, ...] = ()

    def check(self, value: Optional[str] = None) -> Optional[str]:
        """Return an error message for ``value`` (or the current value), None if valid."""
        value = self.value if value is None else value
        if not value:
            return "Value is required" if self.required else None
        if not self.setting_type.validate(value, self.attrs):
            return self.setting_type.error_message(value, self.attrs)
        return None

    @property
    def display_value(self) -> str:
        if not self.value:
            return "(not set)"
        return self.setting_type.display(self.value, self.attrs)

    @property
    def origin_indicator(self) -> str:
        """Return short indicator for display: [D], [E], [P], [A] or [M]."""
        indicators = {
            "default": "[D]",
            "env": "[E]",
            "prompt": "[P]",
            "auto": "[A]",
            "manual": "[M]",
        }
        return indicators.get(self.origin, "[?]")


@dataclass
class Preset:
    """A named group of settings shown as one menu entry."""

    name: str
    display: str
    priority: int = 50
    enabled: bool = True

    # Setting names in declaration order
    settings: list[str] = field(default_factory=list)

    # Returns cross-field error messages; empty when consistent
    validator: Optional[CrossFieldValidator] = None


class ConfigStore:
    """Registry of presets and settings for one configuration run."""

    def __init__(self, catalog: Optional[TypeCatalog] = None):
        if catalog is None:
            from dps_configurator.setting_types import build_default_catalog

            catalog = build_default_catalog()
        self.catalog = catalog
        self._settings: dict[str, Setting] = {}
        self._presets: dict[str, Preset] = {}

        # Settings whose apply hook is currently running, outermost first
        self.apply_stack: list[str] = []

    # =========================================================================
    # Registration
    # =========================================================================

    def create_preset(
        self,
        name: str,
        display: Optional[str] = None,
        priority: int = 50,
        enabled: bool = True,
        validator: Optional[CrossFieldValidator] = None,
    ) -> Preset:
        """Register a preset.

        Raises:
            DuplicatePresetError: If a preset with this name exists.
        """
        if name in self._presets:
            raise DuplicatePresetError(f"Preset '{name}' is already registered")

        preset = Preset(
            name=name,
            display=display or _default_display(name),
            priority=int(priority),
            enabled=enabled,
            validator=validator,
        )
        self._presets[name] = preset
        logger.debug(f"Registered preset {name} (priority {preset.priority})")
        return preset

    def create(
        self,
        name: str,
        setting_type: str,
        preset: str,
        display: Optional[str] = None,
        default: Any = "",
        exportable: bool = True,
        required: bool = False,
        visible_all: ConditionSpec = None,
        visible_any: ConditionSpec = None,
        **attrs: Any,
    ) -> Setting:
        """Declare a setting inside an existing preset.

        Args:
            name: Unique setting name (e.g. ``HOSTNAME``).
            setting_type: Catalog type name (e.g. ``hostname``).
            preset: Owning preset name.
            display: Label for prompts; derived from ``name`` if omitted.
            default: Initial value, stored with origin ``default``.
            exportable: Whether the export engine writes this setting.
            required: Whether an empty value is an error.
            visible_all: Conditions that must all hold (``"A==x B!=y"`` or a list).
            visible_any: Conditions of which at least one must hold.
            **attrs: Type-specific attributes (``min``, ``max``, ``options`` ...).

        Raises:
            DuplicateSettingError, UnknownTypeError, UnknownPresetError,
            MissingAttributeError, InvalidConditionError, UnknownSettingError
        """
        if name in self._settings:
            raise DuplicateSettingError(f"Setting '{name}' is already registered")

        resolved_type = self.catalog.get(setting_type)
        owner = self.preset(preset)
        parsed_attrs = resolved_type.parse_attrs(attrs)

        conditions_all = tuple(parse_conditions(visible_all))
        conditions_any = tuple(parse_conditions(visible_any))
        for condition in conditions_all + conditions_any:
            if condition.setting not in self._settings:
                raise UnknownSettingError(
                    f"Setting '{name}' is conditioned on '{condition.setting}', "
                    "which is not declared before it"
                )

        default_value = "" if default is None else resolved_type.normalize(str(default))
        setting = Setting(
            name=name,
            setting_type=resolved_type,
            preset=owner.name,
            display=display or _default_display(name),
            default=default_value,
            value=default_value,
            origin="default",
            exportable=exportable,
            required=required,
            attrs=parsed_attrs,
            visible_all=conditions_all,
            visible_any=conditions_any,
        )
        self._settings[name] = setting
        owner.settings.append(name)
        return setting

    # =========================================================================
    # Values
    # =========================================================================

    def get(self, name: str) -> str:
        """Return the current value of a setting."""
        return self.setting(name).value

    def set(
        self,
        name: str,
        value: Any,
        origin: Origin = "manual",
        strict: bool = True,
    ) -> ValidationResult:
        """Normalize, check and store a value.

        With ``strict`` an invalid value is rejected and nothing changes.
        Without it the value is stored anyway, but apply hooks only run for
        valid values.
        """
        if origin not in ORIGINS:
            raise ValueError(f"Unknown origin '{origin}'")

        setting = self.setting(name)
        raw = "" if value is None else str(value)
        normalized = setting.setting_type.normalize(raw)
        error = setting.check(normalized)

        if error and strict:
            logger.debug(f"Rejected {name}={normalized!r} ({origin}): {error}")
            return ValidationResult(valid=False, value=normalized, error=error)

        setting.value = normalized
        setting.origin = origin

        if error:
            return ValidationResult(valid=False, value=normalized, error=error)

        if origin in APPLY_ORIGINS and setting.setting_type.has_apply:
            dispatch_apply(self, setting)

        return ValidationResult(valid=True, value=normalized)

    def origin(self, name: str) -> str:
        return self.setting(name).origin

    def get_meta(self, name: str, key: str) -> Any:
        """Return a type-specific attribute of a setting.

        Raises:
            MissingAttributeError: If the setting's type has no such attribute.
        """
        attrs = self.setting(name).attrs
        if key not in {f.name for f in fields(attrs)}:
            raise MissingAttributeError(f"Setting '{name}' has no attribute '{key}'")
        return getattr(attrs, key)

    # =========================================================================
    # Lookup
    # =========================================================================

    def setting(self, name: str) -> Setting:
        try:
            return self._settings[name]
        except KeyError:
            raise UnknownSettingError(f"Unknown setting '{name}'") from None

    def preset(self, name: str) -> Preset:
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownPresetError(f"Unknown preset '{name}'") from None

    def presets_sorted(self, enabled_only: bool = False) -> list[Preset]:
        """Presets by priority, ties kept in registration order."""
        presets = sorted(self._presets.values(), key=lambda p: p.priority)
        if enabled_only:
            presets = [p for p in presets if p.enabled]
        return presets

    def settings_sorted(self) -> list[Setting]:
        """Settings by preset priority, then declaration order."""
        return [
            self._settings[name]
            for preset in self.presets_sorted()
            for name in preset.settings
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._settings

    def __len__(self) -> int:
        return len(self._settings)

    # Defined last: the name shadows the builtin inside the class body
    def list(self, preset: Optional[str] = None) -> list[str]:
        """Setting names in declaration order, optionally for one preset."""
        if preset is None:
            return list(self._settings)
        return list(self.preset(preset).settings)

