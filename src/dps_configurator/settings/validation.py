"""Validation engine.

Failures are collected into a ``ValidationReport`` and counted; nothing in
this module raises for a bad value.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional, Union

from dps_configurator.errors import CrossFieldError, ValidationError
from dps_configurator.settings.conditions import is_visible, visible_settings

if TYPE_CHECKING:
    from dps_configurator.settings.store import ConfigStore

logger = logging.getLogger(__name__)

ReportedError = Union[ValidationError, CrossFieldError]


@dataclass
class ValidationReport:
    """Collected validation failures for one or more presets."""

    errors: list[ReportedError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [str(error) for error in self.errors]

    @property
    def failing_settings(self) -> list[str]:
        """Names of settings with a per-setting failure, without duplicates."""
        names: list[str] = []
        for error in self.errors:
            if isinstance(error, ValidationError) and error.setting not in names:
                names.append(error.setting)
        return names

    @property
    def failing_presets(self) -> list[str]:
        """Presets that reported a cross-field failure."""
        names: list[str] = []
        for error in self.errors:
            if isinstance(error, CrossFieldError) and error.preset not in names:
                names.append(error.preset)
        return names

    def extend(self, other: "ValidationReport") -> None:
        self.errors.extend(other.errors)


def validate_setting(store: "ConfigStore", name: str) -> list[ValidationError]:
    """Check one setting's current value.

    An invisible setting is never validated and yields no errors.
    """
    if not is_visible(store, name):
        return []
    setting = store.setting(name)
    error = setting.check()
    if error is None:
        return []
    return [ValidationError(setting=name, preset=setting.preset, message=error)]


def validate_preset(store: "ConfigStore", name: str) -> ValidationReport:
    """Validate every visible setting of a preset, then its cross-field rules."""
    preset = store.preset(name)
    report = ValidationReport()

    for setting_name in visible_settings(store, name):
        report.errors.extend(validate_setting(store, setting_name))

    if preset.validator is not None:
        for message in preset.validator(store):
            report.errors.append(CrossFieldError(preset=name, message=message))

    if report.errors:
        logger.debug(f"Preset {name}: {report.error_count} error(s)")
    return report


def validate_all(store: "ConfigStore", presets: Optional[Iterable[str]] = None) -> ValidationReport:
    """Validate the given presets, or every enabled preset by priority."""
    if presets is None:
        presets = [preset.name for preset in store.presets_sorted(enabled_only=True)]

    report = ValidationReport()
    for name in presets:
        report.extend(validate_preset(store, name))
    return report
