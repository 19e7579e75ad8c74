"""Error types for the configurator.

Structural errors (``ConfiguratorError`` subclasses) are raised while presets,
settings and types are being registered and abort startup. Value problems are
never raised: they are reported as ``ValidationError`` / ``CrossFieldError``
records and counted by the validation engine.
"""

from dataclasses import dataclass


class ConfiguratorError(Exception):
    """Base class for structural configuration errors."""

    pass


class DuplicateSettingError(ConfiguratorError):
    """A setting with the same name is already registered."""

    pass


class DuplicatePresetError(ConfiguratorError):
    """A preset with the same name is already registered."""

    pass


class DuplicateTypeError(ConfiguratorError):
    """A setting type with the same name is already in the catalog."""

    pass


class UnknownTypeError(ConfiguratorError):
    """A setting references a type that is not in the catalog."""

    pass


class UnknownSettingError(ConfiguratorError):
    """A lookup or condition references an undeclared setting."""

    pass


class UnknownPresetError(ConfiguratorError):
    """A setting or lookup references an undeclared preset."""

    pass


class MissingAttributeError(ConfiguratorError):
    """A type-specific attribute is missing or malformed (e.g. choice without options)."""

    pass


class InvalidConditionError(ConfiguratorError):
    """A visibility condition could not be parsed."""

    pass


class ApplyCycleError(ConfiguratorError):
    """Apply hooks re-entered a setting that is already being applied."""

    pass


class PresetFileError(ConfiguratorError):
    """A YAML preset file is unreadable or malformed."""

    pass


class ConfigurationAborted(Exception):
    """Raised when the user aborts the interactive configuration (e.g., Ctrl+C)."""

    pass


@dataclass(frozen=True)
class ValidationError:
    """A single setting whose current value fails its type's validation."""

    setting: str
    preset: str
    message: str

    def __str__(self) -> str:
        return f"{self.setting}: {self.message}"


@dataclass(frozen=True)
class CrossFieldError:
    """A preset-level invariant spanning several settings is violated."""

    preset: str
    message: str

    def __str__(self) -> str:
        return f"{self.preset}: {self.message}"
