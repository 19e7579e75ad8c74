"""Terminal prompt utilities for dps-configurator."""

from dps_configurator.errors import ConfigurationAborted

from .prompt_utils import is_interactive, q_password, q_select, safe_prompt

__all__ = [
    "ConfigurationAborted",
    "is_interactive",
    "q_password",
    "q_select",
    "safe_prompt",
]
