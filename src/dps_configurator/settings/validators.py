"""Value checks shared by the built-in setting types.

Each check returns a ``ValidationResult`` holding either the parsed value or
the message the menu prints under the offending setting.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence

_INT_RE = re.compile(r"^-?[0-9]+$")
_UNSIGNED_RE = re.compile(r"^[0-9]+$")
_NUMBER_RE = re.compile(r"^-?[0-9]+(\.[0-9]+)?$")

TOGGLE_TRUE = ("true", "enabled", "1")
TOGGLE_FALSE = ("false", "disabled", "0")


@dataclass
class ValidationResult:
    """Outcome of one check; ``error`` is the message shown next to the field."""

    valid: bool
    value: Any = None
    error: Optional[str] = None


def _range_error(
    min_value: Optional[float],
    max_value: Optional[float],
    subject: str = "Must be",
) -> str:
    if min_value is not None and max_value is not None:
        return f"{subject} between {min_value} and {max_value}"
    if min_value is not None:
        return f"{subject} >= {min_value}"
    if max_value is not None:
        return f"{subject} <= {max_value}"
    return "Out of range"


def validate_int(
    value: str,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> ValidationResult:
    """Check that ``value`` is a signed whole number inside the optional bounds.

    Bounds are inclusive. On success ``result.value`` holds the parsed int.
    """
    value = value.strip()
    if not _INT_RE.match(value):
        return ValidationResult(
            valid=False,
            error="Must be an integer (no letters or special characters)",
        )

    parsed = int(value)
    if (min_value is not None and parsed < min_value) or (
        max_value is not None and parsed > max_value
    ):
        return ValidationResult(valid=False, error=_range_error(min_value, max_value))

    return ValidationResult(valid=True, value=parsed)


def validate_port(value: str, min_value: int = 1, max_value: int = 65535) -> ValidationResult:
    """Validate a TCP/UDP port number (unsigned, inside the given range)."""
    value = value.strip()
    if not _UNSIGNED_RE.match(value):
        return ValidationResult(
            valid=False,
            error="Port must be numeric (no letters or special characters)",
        )

    parsed = int(value)
    if parsed < min_value or parsed > max_value:
        return ValidationResult(
            valid=False,
            error=f"Port must be between {min_value} and {max_value}",
        )

    return ValidationResult(valid=True, value=parsed)


def validate_float(
    value: str,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> ValidationResult:
    """Like ``validate_int`` for plain decimals (no exponent, no leading dot)."""
    value = value.strip()
    if not _NUMBER_RE.match(value):
        return ValidationResult(valid=False, error="Must be a number (integer or decimal)")

    parsed = float(value)
    if (min_value is not None and parsed < min_value) or (
        max_value is not None and parsed > max_value
    ):
        return ValidationResult(valid=False, error=_range_error(min_value, max_value))

    return ValidationResult(valid=True, value=parsed)


def validate_toggle(value: str) -> ValidationResult:
    """Validate a toggle value.

    Accepts: true, false, enabled, disabled, 1, 0 (case-insensitive).
    """
    lowered = value.strip().lower()
    if lowered in TOGGLE_TRUE:
        return ValidationResult(valid=True, value=True)
    if lowered in TOGGLE_FALSE:
        return ValidationResult(valid=True, value=False)

    return ValidationResult(valid=False, error="Enter true, false, enabled, or disabled")


def validate_choice(value: str, choices: Sequence[str]) -> ValidationResult:
    """Validate a choice from a list of valid options.

    Matching is exact: the stored value ends up in generated system
    configuration, so ``GRUB`` and ``grub`` are different answers.
    """
    if value in choices:
        return ValidationResult(valid=True, value=value)

    return ValidationResult(valid=False, error=f"Must be one of: {', '.join(choices)}")


def validate_string(
    value: str,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> ValidationResult:
    """Validate a string value with optional length constraints."""
    if min_length is not None and len(value) < min_length:
        return ValidationResult(
            valid=False,
            error=f"Must be at least {min_length} characters",
        )

    if max_length is not None and len(value) > max_length:
        return ValidationResult(
            valid=False,
            error=f"Must be at most {max_length} characters",
        )

    return ValidationResult(valid=True, value=value)


def is_number(value: str) -> bool:
    """Return True when ``value`` is a plain decimal number."""
    return bool(_NUMBER_RE.match(value.strip()))
