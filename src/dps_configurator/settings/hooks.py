"""Apply-hook dispatch.

When a setting whose type declares ``apply`` receives a user-driven value,
the derived writes the type returns are stored on their target settings
with origin ``auto``.
"""

import logging
from typing import TYPE_CHECKING

from dps_configurator.errors import ApplyCycleError

if TYPE_CHECKING:
    from dps_configurator.settings.store import ConfigStore, Setting

logger = logging.getLogger(__name__)

# Nested apply hooks allowed before a cascade is treated as runaway
MAX_APPLY_DEPTH = 8


def dispatch_apply(store: "ConfigStore", setting: "Setting") -> int:
    """Run the apply hook of ``setting`` and store the derived values.

    Returns:
        Number of derived values written.

    Raises:
        ApplyCycleError: If the hook re-enters a setting already being
            applied or nests deeper than ``MAX_APPLY_DEPTH``.
    """
    stack = store.apply_stack
    if setting.name in stack:
        chain = " -> ".join(stack + [setting.name])
        raise ApplyCycleError(f"Apply hook cycle detected: {chain}")
    if len(stack) >= MAX_APPLY_DEPTH:
        raise ApplyCycleError(
            f"Apply hooks nested deeper than {MAX_APPLY_DEPTH} levels at {setting.name}"
        )

    stack.append(setting.name)
    written = 0
    try:
        writes = setting.setting_type.apply(setting.value, setting.attrs)
        for target, value in writes:
            if target not in store:
                logger.debug(f"{setting.name}: skipping undeclared target {target}")
                continue
            result = store.set(target, value, origin="auto")
            if not result.valid:
                logger.warning(
                    f"{setting.name}={setting.value} derived invalid {target}={value!r}: "
                    f"{result.error}"
                )
                continue
            logger.debug(f"{setting.name}: applied {target}={result.value}")
            written += 1
    finally:
        stack.pop()

    return written
