"""Base classes for setting types and the type catalog."""

from abc import ABC, abstractmethod
from dataclasses import MISSING, dataclass, field, fields
from typing import TYPE_CHECKING, Any, Mapping, Optional

from dps_configurator.errors import (
    DuplicateTypeError,
    MissingAttributeError,
    UnknownTypeError,
)

if TYPE_CHECKING:
    from dps_configurator.settings.store import ConfigStore


# =============================================================================
# Typed attribute structs
# =============================================================================


def _coerce_int(type_name: str, key: str, raw: Any) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise MissingAttributeError(
            f"Type '{type_name}' attribute '{key}' must be an integer, got {raw!r}"
        ) from e


def _coerce_float(type_name: str, key: str, raw: Any) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise MissingAttributeError(
            f"Type '{type_name}' attribute '{key}' must be a number, got {raw!r}"
        ) from e


def _coerce_options(type_name: str, key: str, raw: Any) -> tuple[str, ...]:
    # Accept "a|b|c" as well as a list
    if isinstance(raw, str):
        options = tuple(part.strip() for part in raw.split("|") if part.strip())
    elif isinstance(raw, (list, tuple)):
        options = tuple(str(part) for part in raw)
    else:
        raise MissingAttributeError(
            f"Type '{type_name}' attribute '{key}' must be a list or 'a|b|c' string"
        )
    if not options:
        raise MissingAttributeError(f"Type '{type_name}' requires non-empty '{key}'")
    return options


def attrs_from_raw(attrs_class: type, type_name: str, raw: Mapping[str, Any]) -> Any:
    """Build a frozen attribute struct from declaration keyword arguments.

    Raises:
        MissingAttributeError: For unknown keys, malformed values, or missing
            required attributes.
    """
    known = {f.name: f for f in fields(attrs_class)}
    unknown = sorted(set(raw) - set(known))
    if unknown:
        raise MissingAttributeError(
            f"Type '{type_name}' does not accept attribute(s): {', '.join(unknown)}"
        )

    values: dict[str, Any] = {}
    for key, value in raw.items():
        coerce = known[key].metadata.get("coerce")
        values[key] = coerce(type_name, key, value) if coerce else value

    try:
        return attrs_class(**values)
    except TypeError as e:
        required = [
            f.name for f in fields(attrs_class) if f.name not in values and _is_required(f)
        ]
        raise MissingAttributeError(
            f"Type '{type_name}' requires attribute(s): {', '.join(required) or '?'}"
        ) from e


def _is_required(f) -> bool:
    return f.default is MISSING and f.default_factory is MISSING


@dataclass(frozen=True)
class NoAttrs:
    """Attribute struct for types without options."""


@dataclass(frozen=True)
class IntRange:
    """Inclusive integer bounds."""

    min: Optional[int] = field(default=None, metadata={"coerce": _coerce_int})
    max: Optional[int] = field(default=None, metadata={"coerce": _coerce_int})


@dataclass(frozen=True)
class FloatRange:
    """Inclusive decimal bounds."""

    min: Optional[float] = field(default=None, metadata={"coerce": _coerce_float})
    max: Optional[float] = field(default=None, metadata={"coerce": _coerce_float})


@dataclass(frozen=True)
class ChoiceAttrs:
    """Allowed values for a choice setting, in display order."""

    options: tuple[str, ...] = field(metadata={"coerce": _coerce_options})


@dataclass(frozen=True)
class LengthAttrs:
    """Optional length bounds for free-form strings."""

    min_length: Optional[int] = field(default=None, metadata={"coerce": _coerce_int})
    max_length: Optional[int] = field(default=None, metadata={"coerce": _coerce_int})


@dataclass(frozen=True)
class SecretAttrs:
    """Minimum length for secrets."""

    min_length: int = field(default=8, metadata={"coerce": _coerce_int})


# =============================================================================
# SettingType interface
# =============================================================================


class SettingType(ABC):
    """Behavior bundle shared by every setting of one kind.

    Only ``validate`` is mandatory; the other hooks default to no-ops so a
    type only overrides what it needs.
    """

    # Catalog key referenced by setting declarations
    name: str = ""

    # Frozen dataclass describing accepted declaration attributes
    attrs_class: type = NoAttrs

    # Attribute values merged under the declared ones
    default_attrs: Mapping[str, Any] = {}

    # Whether values should be hidden while typing and in summaries
    masked: bool = False

    def parse_attrs(self, raw: Mapping[str, Any]) -> Any:
        """Turn declaration keyword arguments into this type's attribute struct."""
        merged = {**self.default_attrs, **raw}
        return attrs_from_raw(self.attrs_class, self.name, merged)

    @abstractmethod
    def validate(self, value: str, attrs: Any) -> bool:
        """Return True when ``value`` is acceptable for this type."""
        pass

    def normalize(self, value: str) -> str:
        return value

    def display(self, value: str, attrs: Any) -> str:
        return value

    def error_message(self, value: str, attrs: Any) -> str:
        return f"Invalid value: {value}"

    def prompt_hint(self, attrs: Any) -> str:
        return ""

    def apply(self, value: str, attrs: Any) -> list[tuple[str, str]]:
        """Return derived ``(setting, value)`` writes triggered by ``value``."""
        return []

    @property
    def has_apply(self) -> bool:
        """True when the subclass overrides ``apply``."""
        return type(self).apply is not SettingType.apply

    def __repr__(self) -> str:
        return f"<SettingType {self.name}>"


# =============================================================================
# Catalog
# =============================================================================


class TypeCatalog:
    """Registry of setting types keyed by name.

    A catalog belongs to one ``ConfigStore``; there is no process-wide
    instance.
    """

    def __init__(self) -> None:
        self._types: dict[str, SettingType] = {}

    def register(self, setting_type: SettingType) -> SettingType:
        """Register a setting type."""
        if not setting_type.name:
            raise ValueError(f"SettingType {setting_type.__class__.__name__} has no name")
        if setting_type.name in self._types:
            raise DuplicateTypeError(f"SettingType '{setting_type.name}' is already registered")
        self._types[setting_type.name] = setting_type
        return setting_type

    def get(self, name: str) -> SettingType:
        """Get a setting type by name."""
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(f"Unknown setting type '{name}'") from None

    def validate(self, store: "ConfigStore", name: str) -> bool:
        """Run a setting's type validation against its current value."""
        setting = store.setting(name)
        setting_type = self.get(setting.setting_type.name)
        return setting_type.validate(setting.value, setting.attrs)

    def names(self) -> list[str]:
        """Get list of all registered type names."""
        return list(self._types.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)
