"""Primitive setting types: text, numbers, toggles, choices, secrets, paths."""

import re
from typing import Any

from dps_configurator.setting_types.base import (
    ChoiceAttrs,
    FloatRange,
    IntRange,
    LengthAttrs,
    NoAttrs,
    SecretAttrs,
    SettingType,
)
from dps_configurator.settings.validators import (
    TOGGLE_FALSE,
    TOGGLE_TRUE,
    validate_choice,
    validate_float,
    validate_int,
    validate_string,
    validate_toggle,
)

_PATH_RE = re.compile(r"^(/|~|\.)")
_URL_RE = re.compile(r"^(https?|git|ssh)://")


def _range_hint(min_value: Any, max_value: Any, unit: str = "") -> str:
    if min_value is not None and max_value is not None:
        return f"({min_value}-{max_value}{unit})"
    if min_value is not None:
        return f"(min: {min_value}{unit})"
    if max_value is not None:
        return f"(max: {max_value}{unit})"
    return ""


class TextType(SettingType):
    """Free text, always valid."""

    name = "text"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return True

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(text input)"


class StringType(SettingType):
    """Free text with optional length bounds."""

    name = "string"
    attrs_class = LengthAttrs

    def validate(self, value: str, attrs: LengthAttrs) -> bool:
        return validate_string(value, attrs.min_length, attrs.max_length).valid

    def error_message(self, value: str, attrs: LengthAttrs) -> str:
        if attrs.min_length is not None and attrs.max_length is not None:
            return f"Length must be between {attrs.min_length} and {attrs.max_length} characters"
        result = validate_string(value, attrs.min_length, attrs.max_length)
        return result.error or "Invalid string"

    def prompt_hint(self, attrs: LengthAttrs) -> str:
        return _range_hint(attrs.min_length, attrs.max_length, " chars")


class IntType(SettingType):
    name = "int"
    attrs_class = IntRange

    def validate(self, value: str, attrs: IntRange) -> bool:
        return validate_int(value, attrs.min, attrs.max).valid

    def error_message(self, value: str, attrs: IntRange) -> str:
        return validate_int(value, attrs.min, attrs.max).error or "Out of range"

    def prompt_hint(self, attrs: IntRange) -> str:
        return _range_hint(attrs.min, attrs.max)


class FloatType(SettingType):
    name = "float"
    attrs_class = FloatRange

    def validate(self, value: str, attrs: FloatRange) -> bool:
        return validate_float(value, attrs.min, attrs.max).valid

    def error_message(self, value: str, attrs: FloatRange) -> str:
        return validate_float(value, attrs.min, attrs.max).error or "Out of range"

    def prompt_hint(self, attrs: FloatRange) -> str:
        return _range_hint(attrs.min, attrs.max) or "(decimal number)"


class ToggleType(SettingType):
    """Boolean stored as ``true`` / ``false``."""

    name = "toggle"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return validate_toggle(value).valid

    def normalize(self, value: str) -> str:
        lowered = value.strip().lower()
        if lowered in TOGGLE_TRUE:
            return "true"
        if lowered in TOGGLE_FALSE:
            return "false"
        return value

    def display(self, value: str, attrs: NoAttrs) -> str:
        if value == "true":
            return "✓"
        if value == "false":
            return "✗"
        return value

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return validate_toggle(value).error or "Invalid toggle"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(true/false, enabled/disabled)"


class QuestionType(SettingType):
    """Yes/no answer stored as ``yes`` / ``no``."""

    name = "question"

    _ANSWERS = {"yes": "yes", "y": "yes", "no": "no", "n": "no"}

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return value.strip().lower() in self._ANSWERS

    def normalize(self, value: str) -> str:
        return self._ANSWERS.get(value.strip().lower(), value)

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Enter yes or no"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(yes/no)"


class ChoiceType(SettingType):
    name = "choice"
    attrs_class = ChoiceAttrs

    def validate(self, value: str, attrs: ChoiceAttrs) -> bool:
        return validate_choice(value, attrs.options).valid

    def error_message(self, value: str, attrs: ChoiceAttrs) -> str:
        return f"Must be one of: {', '.join(attrs.options)}"

    def prompt_hint(self, attrs: ChoiceAttrs) -> str:
        return f"({', '.join(attrs.options)})"


def mask_secret(value: str) -> str:
    """Mask a secret for display.

    A single character is fully masked. Other values shorter than 9
    characters reveal only their last character; longer ones reveal a tenth
    of their length (between 1 and 4 characters) at each end.
    """
    if not value:
        return "(not set)"
    length = len(value)
    if length < 2:
        return "*"
    if length < 9:
        return "*" * (length - 1) + value[-1]
    show = max(1, min(4, length // 10))
    return value[:show] + "*" * (length - show * 2) + value[-show:]


class SecretType(SettingType):
    name = "secret"
    attrs_class = SecretAttrs
    masked = True

    def validate(self, value: str, attrs: SecretAttrs) -> bool:
        return len(value) >= attrs.min_length

    def display(self, value: str, attrs: SecretAttrs) -> str:
        return mask_secret(value)

    def error_message(self, value: str, attrs: SecretAttrs) -> str:
        return f"Must be at least {attrs.min_length} characters"

    def prompt_hint(self, attrs: SecretAttrs) -> str:
        return f"(min: {attrs.min_length} chars, hidden)"


class PathType(SettingType):
    name = "path"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_PATH_RE.match(value))

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid path (must start with /, ~, or .)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(absolute or relative path)"


class UrlType(SettingType):
    name = "url"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_URL_RE.match(value))

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid URL (must start with http://, https://, git://, or ssh://)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(http://, https://, git://, or ssh://)"


PRIMITIVE_TYPES = (
    TextType,
    StringType,
    IntType,
    FloatType,
    ToggleType,
    QuestionType,
    ChoiceType,
    SecretType,
    PathType,
    UrlType,
)
