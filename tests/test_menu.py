"""Tests for the interactive configuration menu."""

from io import StringIO

from rich.console import Console

from dps_configurator.errors import ConfigurationAborted
from dps_configurator.interfaces import ConfigurationMenu, MenuState
from dps_configurator.presets import register_default_presets
from dps_configurator.settings import ConfigStore
from dps_configurator.setting_types.system import DiskType


class _DummyConsole:
    """Fake console for capturing output."""

    def __init__(self):
        self.printed = []

    def print(self, *args, **kwargs):
        self.printed.append(" ".join(str(a) for a in args))


class _Script:
    """Scripted answers for a prompt callable; blank answers return the default."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.labels = []

    def __call__(self, label, default="", allow_cancel=False, **kwargs):
        self.labels.append(label)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer or default or ""


def _store():
    store = ConfigStore()
    register_default_presets(store, target_disk="")
    store.preset("disk").enabled = False
    return store


def _menu(store, prompt, select=None, password=None, auto_confirm=False):
    console = _DummyConsole()
    menu = ConfigurationMenu(
        store,
        console=console,
        prompt=prompt,
        select_prompt=select or _Script(),
        password_prompt=password or _Script(),
        auto_confirm=auto_confirm,
    )
    return menu, console


def test_auto_confirm_skips_menu_when_valid():
    prompt = _Script()
    menu, console = _menu(_store(), prompt, auto_confirm=True)

    assert menu.run() is MenuState.CONFIRMED
    assert prompt.labels == []
    assert any("Configuration confirmed." in line for line in console.printed)


def test_confirm_with_x():
    menu, console = _menu(_store(), _Script("X"))
    assert menu.run() is MenuState.CONFIRMED
    assert any("Confirm and continue" in line for line in console.printed)


def test_abort_with_q():
    menu, console = _menu(_store(), _Script("q"))
    assert menu.run() is MenuState.ABORTED
    assert any("Configuration aborted." in line for line in console.printed)


def test_ctrl_c_aborts():
    menu, _ = _menu(_store(), _Script(ConfigurationAborted()))
    assert menu.run() is MenuState.ABORTED


def test_invalid_option_redisplays_menu():
    menu, console = _menu(_store(), _Script("42", "abc", "", "q"))
    assert menu.run() is MenuState.ABORTED
    assert sum("Invalid option" in line for line in console.printed) == 2


def test_errors_are_prompted_before_menu():
    store = _store()
    store.set("SSH_PORT", "99999", origin="env", strict=False)
    prompt = _Script("70000", "2222", "x")
    menu, console = _menu(store, prompt)

    assert menu.run() is MenuState.CONFIRMED
    assert store.get("SSH_PORT") == "2222"
    assert store.origin("SSH_PORT") == "prompt"
    assert any("Port must be between 1 and 65535" in line for line in console.printed)
    assert any("Please try again." in line for line in console.printed)
    assert any("99999 -> 2222" in line for line in console.printed)
    assert prompt.labels[0].strip().startswith("SSH Port")


def test_hidden_invalid_setting_does_not_block_confirmation():
    store = _store()
    store.set("SSH_PORT", "99999", origin="env", strict=False)
    store.set("SSH_ENABLE", "false")
    menu, _ = _menu(store, _Script("x"))
    assert menu.run() is MenuState.CONFIRMED


def test_edit_preset_from_menu():
    store = _store()
    prompt = _Script(
        "2",  # Network
        "Web01",
        "",
        "",
        "10.0.0.5",
        "",
        "10.0.0.1",
        "x",
    )
    select = _Script("static")
    menu, console = _menu(store, prompt, select=select)

    assert menu.run() is MenuState.CONFIRMED
    assert store.get("HOSTNAME") == "web01"
    assert store.get("NETWORK_METHOD") == "static"
    assert store.get("NETWORK_IP") == "10.0.0.5"
    assert store.get("NETWORK_GATEWAY") == "10.0.0.1"
    assert select.labels[0].strip().startswith("Network Method")
    assert any("Network updated" in line for line in console.printed)
    assert any("nixos -> web01" in line for line in console.printed)


def test_cross_field_failure_reprompts_preset():
    store = _store()
    store.set("NETWORK_METHOD", "static")
    store.set("NETWORK_IP", "10.0.0.5")
    store.set("NETWORK_GATEWAY", "10.0.0.5")
    prompt = _Script("", "", "", "", "", "", "", "", "", "", "", "10.0.0.1")
    select = _Script("static", "static")
    menu, console = _menu(store, prompt, select=select)

    menu.prompt_preset("network")

    assert store.get("NETWORK_GATEWAY") == "10.0.0.1"
    assert any("Gateway cannot be the same as IP address" in line for line in console.printed)
    assert any("Please review the settings again." in line for line in console.printed)
    assert prompt.answers == []


def test_blank_answer_for_required_setting_asks_again():
    store = _store()
    store.set("NETWORK_METHOD", "static")
    menu, console = _menu(store, _Script("", "10.0.0.5"))

    menu.prompt_setting("NETWORK_IP")

    assert store.get("NETWORK_IP") == "10.0.0.5"
    assert any("Value is required" in line for line in console.printed)


def test_masked_settings_use_password_prompt():
    store = ConfigStore()
    store.create_preset("access")
    store.create("ROOT_PASSWORD", "secret", preset="access", required=True)
    password = _Script("short", "correct-horse")
    menu, console = _menu(store, _Script(), password=password)

    menu.prompt_setting("ROOT_PASSWORD")

    assert store.get("ROOT_PASSWORD") == "correct-horse"
    assert len(password.labels) == 2
    assert not any("correct-horse" in line for line in console.printed)


def test_confirm_refused_while_errors_remain():
    store = _store()
    menu, console = _menu(store, _Script("x"))
    store.set("SSH_PORT", "0", origin="env", strict=False)

    assert menu._menu() is MenuState.MENU_DISPLAY
    assert "Cannot confirm: 1 error(s) remaining" in menu.status


def test_values_with_markup_are_printed_literally():
    store = _store()
    output = StringIO()
    menu = ConfigurationMenu(
        store,
        console=Console(file=output, width=400),
        prompt=_Script("vim [/x]"),
        select_prompt=_Script(),
        password_prompt=_Script(),
    )

    menu.prompt_setting("ADDITIONAL_PACKAGES")
    menu.render_summary()
    menu._print_menu(store.presets_sorted(enabled_only=True))

    assert store.get("ADDITIONAL_PACKAGES") == "vim [/x]"
    text = output.getvalue()
    assert "-> vim [/x]" in text
    assert text.count("vim [/x]") >= 3
    assert "[D]" in text


def test_error_echoing_markup_is_printed_literally(monkeypatch):
    monkeypatch.setattr(DiskType, "validate", lambda self, value, attrs: value == "/dev/vda")
    monkeypatch.setattr("dps_configurator.setting_types.system.detect_disks", lambda: [])
    store = ConfigStore()
    store.create_preset("disk")
    store.create("DISK_TARGET", "disk", preset="disk", required=True)
    output = StringIO()
    menu = ConfigurationMenu(
        store,
        console=Console(file=output, width=400),
        prompt=_Script("/dev/[/x]", "/dev/vda"),
        select_prompt=_Script(),
        password_prompt=_Script(),
    )

    menu.prompt_setting("DISK_TARGET")

    assert store.get("DISK_TARGET") == "/dev/vda"
    assert "Error: '/dev/[/x]' is not a valid block device" in output.getvalue()
