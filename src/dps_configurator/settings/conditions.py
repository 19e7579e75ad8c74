"""Visibility conditions.

A condition compares another setting's current value with a literal, e.g.
``NETWORK_METHOD==static`` or ``SWAP_SIZE_MIB>0``. Settings carry an "all"
list and an "any" list of conditions; a setting without conditions is
always visible.
"""

import operator
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence, Union

from dps_configurator.errors import InvalidConditionError
from dps_configurator.settings.validators import is_number

if TYPE_CHECKING:
    from dps_configurator.settings.store import ConfigStore, Setting


# Longest operators first so "<=" is not read as "<"
_CONDITION_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)(==|!=|<=|>=|<|>)(.*)$")

OPERATORS: dict[str, Callable[[object, object], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


@dataclass(frozen=True)
class Condition:
    """A single ``SETTING<op>literal`` comparison."""

    setting: str
    op: str
    operand: str

    def evaluate(self, value: str) -> bool:
        """Compare ``value`` against the operand.

        Both sides are compared as numbers when both parse as numbers,
        otherwise as strings.
        """
        compare = OPERATORS[self.op]
        if is_number(value) and is_number(self.operand):
            return compare(float(value), float(self.operand))
        return compare(value, self.operand)

    def __str__(self) -> str:
        return f"{self.setting}{self.op}{self.operand}"


def parse_condition(text: str) -> Condition:
    """Parse ``"VAR==value"`` into a ``Condition``.

    Raises:
        InvalidConditionError: If the text is not ``NAME<op>literal``.
    """
    match = _CONDITION_RE.match(text.strip())
    if not match:
        raise InvalidConditionError(
            f"Invalid condition '{text}' (expected NAME<op>value with op in "
            f"{', '.join(OPERATORS)})"
        )
    return Condition(setting=match.group(1), op=match.group(2), operand=match.group(3))


def parse_conditions(spec: Union[None, str, Sequence[str]]) -> list[Condition]:
    """Parse a space-separated condition string or a list of condition strings."""
    if not spec:
        return []
    if isinstance(spec, str):
        parts = spec.split()
    else:
        parts = [str(part) for part in spec]
    return [parse_condition(part) for part in parts]


def _conditions_hold(store: "ConfigStore", setting: "Setting") -> bool:
    if setting.visible_all and not all(
        condition.evaluate(store.get(condition.setting)) for condition in setting.visible_all
    ):
        return False
    if setting.visible_any and not any(
        condition.evaluate(store.get(condition.setting)) for condition in setting.visible_any
    ):
        return False
    return True


def is_visible(store: "ConfigStore", name: str) -> bool:
    """Return True when the setting's visibility conditions hold."""
    return _conditions_hold(store, store.setting(name))


def visible_settings(store: "ConfigStore", preset: Optional[str] = None) -> list[str]:
    """Names of the currently visible settings, in declaration order."""
    return [name for name in store.list(preset) if is_visible(store, name)]
