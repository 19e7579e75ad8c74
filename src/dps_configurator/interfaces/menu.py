"""Interactive configuration menu.

Drives the confirmation workflow as a small state machine:

    VALIDATING -> PROMPT_ERRORS -> VALIDATING -> MENU_DISPLAY
    MENU_DISPLAY -> PRESET_EDIT -> MENU_DISPLAY
    MENU_DISPLAY -> CONFIRMED | ABORTED

Presets are listed by number; "X" confirms once everything validates and
"Q" (or Ctrl+C) aborts.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dps_configurator.errors import ConfigurationAborted
from dps_configurator.settings.conditions import is_visible, visible_settings
from dps_configurator.settings.store import ConfigStore, Setting
from dps_configurator.settings.validation import (
    ValidationReport,
    validate_all,
    validate_preset,
)
from dps_configurator.setting_types.primitive import ChoiceType
from dps_configurator.setup.prompt_utils import q_password, q_select, safe_prompt

logger = logging.getLogger(__name__)


class MenuState(Enum):
    VALIDATING = "validating"
    PROMPT_ERRORS = "prompt_errors"
    MENU_DISPLAY = "menu_display"
    PRESET_EDIT = "preset_edit"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"


TERMINAL_STATES = (MenuState.CONFIRMED, MenuState.ABORTED)


class ConfigurationMenu:
    """Terminal workflow that validates, edits and confirms a store.

    Args:
        store: Populated configuration store.
        console: Rich console used for all output.
        prompt: Free-text prompt, ``safe_prompt``-compatible.
        password_prompt: Hidden-input prompt for masked settings.
        select_prompt: Selection prompt for choice settings.
        auto_confirm: Confirm without showing the menu when nothing fails.
    """

    def __init__(
        self,
        store: ConfigStore,
        console: Optional[Console] = None,
        prompt: Callable[..., str] = safe_prompt,
        password_prompt: Callable[..., str] = q_password,
        select_prompt: Callable[..., Optional[str]] = q_select,
        auto_confirm: bool = False,
    ):
        self.store = store
        self.console = console or Console()
        self.prompt = prompt
        self.password_prompt = password_prompt
        self.select_prompt = select_prompt
        self.auto_confirm = auto_confirm

        self.state = MenuState.VALIDATING
        self.report = ValidationReport()
        self.selected_preset: Optional[str] = None
        self.status: Optional[str] = None

    # =========================================================================
    # State machine
    # =========================================================================

    def run(self) -> MenuState:
        """Run until the configuration is confirmed or aborted."""
        self.state = MenuState.VALIDATING
        handlers = {
            MenuState.VALIDATING: self._validate,
            MenuState.PROMPT_ERRORS: self._prompt_errors,
            MenuState.MENU_DISPLAY: self._menu,
            MenuState.PRESET_EDIT: self._edit_selected,
        }

        try:
            while self.state not in TERMINAL_STATES:
                next_state = handlers[self.state]()
                logger.debug(f"Menu: {self.state.value} -> {next_state.value}")
                self.state = next_state
        except ConfigurationAborted:
            self.state = MenuState.ABORTED

        if self.state is MenuState.ABORTED:
            self.console.print("[yellow]Configuration aborted.[/yellow]")
        else:
            self.console.print("[green]Configuration confirmed.[/green]")
        return self.state

    def _validate(self) -> MenuState:
        self.report = validate_all(self.store)
        if self.report.ok:
            return MenuState.MENU_DISPLAY
        return MenuState.PROMPT_ERRORS

    def _prompt_errors(self) -> MenuState:
        self.console.print(
            Panel(
                "\n".join(f"[red]✗[/red] {escape(message)}" for message in self.report.messages),
                title=f"{self.report.error_count} configuration error(s)",
                border_style="red",
            )
        )
        self.prompt_errors(self.report)
        return MenuState.VALIDATING

    def _menu(self) -> MenuState:
        if self.auto_confirm and self.report.ok:
            logger.info("Auto-confirm enabled and configuration is valid")
            return MenuState.CONFIRMED

        presets = self.store.presets_sorted(enabled_only=True)
        self._print_menu(presets)

        choice = self.prompt("\nChoice", default="", allow_cancel=True).strip().lower()
        if not choice:
            return MenuState.MENU_DISPLAY
        if choice == "q":
            return MenuState.ABORTED
        if choice == "x":
            self.report = validate_all(self.store)
            if self.report.ok:
                self.render_summary()
                return MenuState.CONFIRMED
            self.status = (
                f"[yellow]Cannot confirm: {self.report.error_count} error(s) remaining[/yellow]"
            )
            return MenuState.MENU_DISPLAY

        try:
            idx = int(choice) - 1
        except ValueError:
            idx = -1
        if 0 <= idx < len(presets):
            self.selected_preset = presets[idx].name
            return MenuState.PRESET_EDIT

        self.console.print("[red]Invalid option[/red]")
        return MenuState.MENU_DISPLAY

    def _edit_selected(self) -> MenuState:
        name = self.selected_preset
        self.prompt_preset(name)
        self.report = validate_all(self.store)
        self.status = f"[green]✓ {escape(self.store.preset(name).display)} updated[/green]"
        return MenuState.MENU_DISPLAY

    # =========================================================================
    # Workflows
    # =========================================================================

    def prompt_errors(self, report: ValidationReport) -> None:
        """Ask again for every failing setting.

        A cross-field failure re-prompts every visible setting of its preset.
        """
        for name in report.failing_settings:
            if is_visible(self.store, name):
                self.prompt_setting(name)
        for preset in report.failing_presets:
            self.prompt_preset(preset)

    def prompt_preset(self, name: str) -> None:
        """Prompt each visible setting of a preset until the preset validates."""
        preset = self.store.preset(name)
        while True:
            self.console.print(f"\n[bold cyan]{escape(preset.display)}[/bold cyan]")
            # Visibility is re-evaluated per setting as earlier answers change it
            for setting_name in self.store.list(name):
                if is_visible(self.store, setting_name):
                    self.prompt_setting(setting_name)

            report = validate_preset(self.store, name)
            if report.ok:
                return
            for message in report.messages:
                self.console.print(f"  [red]Error: {escape(message)}[/red]")
            self.console.print("  [yellow]Please review the settings again.[/yellow]")

    def prompt_setting(self, name: str) -> None:
        """Prompt for one setting until it holds a valid value.

        Blank input keeps the current value.
        """
        setting = self.store.setting(name)
        hint = setting.setting_type.prompt_hint(setting.attrs)
        label = f"  {setting.display} {hint}".rstrip()

        while True:
            answer = self._ask(setting, label)
            old_display = setting.display_value

            if not answer or answer == setting.value:
                error = setting.check()
                if error is None:
                    return
                self.console.print(f"    [red]Error: {escape(error)}[/red]")
                self.console.print("    Please try again.")
                continue

            result = self.store.set(name, answer, origin="prompt")
            if not result.valid:
                self.console.print(f"    [red]Error: {escape(result.error)}[/red]")
                self.console.print("    Please try again.")
                continue

            if setting.display_value != old_display:
                self.console.print(
                    f"    [green]Updated:[/green] {escape(old_display)}"
                    f" -> {escape(setting.display_value)}"
                )
            return

    def _ask(self, setting: Setting, label: str) -> str:
        if setting.setting_type.masked:
            if setting.value:
                label = f"{label} [{setting.display_value}]"
            return self.password_prompt(label, allow_cancel=True)
        if isinstance(setting.setting_type, ChoiceType):
            answer = self.select_prompt(
                label,
                choices=list(setting.attrs.options),
                default=setting.value or None,
                allow_cancel=True,
            )
            return answer or ""
        return self.prompt(label, default=setting.value, allow_cancel=True)

    # =========================================================================
    # Rendering
    # =========================================================================

    def _print_menu(self, presets: list) -> None:
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("#", style="cyan", width=4)
        table.add_column("Preset", width=20)
        table.add_column("Status", width=12)
        table.add_column("Settings")

        for i, preset in enumerate(presets, 1):
            errors = validate_preset(self.store, preset.name).error_count
            status = "[green]✓[/green]" if not errors else f"[red]{errors} error(s)[/red]"
            shown = ", ".join(
                f"{self.store.setting(n).display}: {self.store.setting(n).display_value}"
                for n in visible_settings(self.store, preset.name)
            )
            table.add_row(str(i), escape(preset.display), status, f"[dim]{escape(shown)}[/dim]")

        self.console.print(Panel("[bold]Installer Configuration[/bold]", border_style="cyan"))
        self.console.print(table)
        if self.status:
            self.console.print(self.status)
            self.status = None
        self.console.print("\n  \\[x] Confirm and continue")
        self.console.print("  \\[q] Abort")

    def render_summary(self) -> None:
        """Print every visible setting with its value and origin."""
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Setting", style="cyan", width=32)
        table.add_column("Value", width=30)
        table.add_column("Origin", width=5)

        for preset in self.store.presets_sorted(enabled_only=True):
            for name in visible_settings(self.store, preset.name):
                setting = self.store.setting(name)
                table.add_row(
                    escape(setting.display),
                    escape(setting.display_value),
                    escape(setting.origin_indicator),
                )

        self.console.print(table)
