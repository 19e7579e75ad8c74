"""Tests for the dps-config command line entry point."""

import os

import pytest

from dps_configurator import __version__
from dps_configurator.cli import (
    EXIT_ABORTED,
    EXIT_CONFIG_ERROR,
    EXIT_CONFIRMED,
    apply_args_to_config,
    main,
    parse_args,
)
from dps_configurator.config import EngineConfig
from dps_configurator.setting_types.system import DiskType


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Isolate config discovery and DPS_* overrides, and fake a target disk."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    for key in [k for k in os.environ if k.startswith("DPS_")]:
        monkeypatch.delenv(key)
    monkeypatch.setattr("dps_configurator.presets.disk.default_disk", lambda: "/dev/vda")
    monkeypatch.setattr(DiskType, "validate", lambda self, value, attrs: value == "/dev/vda")
    return tmp_path


def test_parse_args_defaults():
    args = parse_args([])
    assert args.prefix is None
    assert args.export is None
    assert args.export_all is False
    assert args.no_menu is False


def test_apply_args_to_config(tmp_path):
    args = parse_args(
        ["--prefix", " NIX ", "--auto-confirm", "--export", str(tmp_path / "out.sh"), "-v"]
    )
    config = apply_args_to_config(args, EngineConfig())
    assert config.prefix == "NIX"
    assert config.auto_confirm is True
    assert config.export_path == tmp_path / "out.sh"
    assert config.verbose is True


def test_version(capsys):
    assert main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_no_menu_exports_overrides_to_stdout(clean_env, monkeypatch, capsys):
    monkeypatch.setenv("DPS_HOSTNAME", "Web01")

    assert main(["--no-menu"]) == EXIT_CONFIRMED

    out = capsys.readouterr().out
    assert out.startswith("# Config export at ")
    assert 'export DPS_HOSTNAME="web01"' in out
    assert "DPS_SSH_PORT" not in out


def test_no_menu_export_all_to_file(clean_env):
    target = clean_env / "exports" / "config.sh"

    assert main(["--no-menu", "--export-all", "--export", str(target)]) == EXIT_CONFIRMED

    text = target.read_text(encoding="utf-8")
    assert 'export DPS_DISK_TARGET="/dev/vda"' in text
    assert 'export DPS_SSH_PORT="22"' in text


def test_no_menu_with_invalid_override(clean_env, monkeypatch, capsys):
    monkeypatch.setenv("DPS_SSH_PORT", "99999")
    assert main(["--no-menu"]) == EXIT_ABORTED
    assert capsys.readouterr().out == ""


def test_auto_confirm_skips_prompts(clean_env, monkeypatch, capsys):
    monkeypatch.setenv("DPS_AUTO_CONFIRM", "true")
    monkeypatch.setenv("NIX_ADMIN_USER", "ops")

    assert main(["--prefix", "NIX"]) == EXIT_CONFIRMED
    assert 'export NIX_ADMIN_USER="ops"' in capsys.readouterr().out


def test_env_file_import(clean_env, capsys):
    previous = clean_env / "previous.sh"
    previous.write_text('export DPS_BOOTLOADER="grub"\n', encoding="utf-8")

    assert main(["--no-menu", "--env-file", str(previous)]) == EXIT_CONFIRMED
    assert 'export DPS_BOOTLOADER="grub"' in capsys.readouterr().out


def test_missing_env_file(clean_env):
    assert main(["--no-menu", "--env-file", str(clean_env / "nope.sh")]) == EXIT_CONFIG_ERROR


def test_broken_presets_file(clean_env):
    broken = clean_env / "presets.yaml"
    broken.write_text("presets: {}\n", encoding="utf-8")
    assert main(["--no-menu", "--presets-file", str(broken)]) == EXIT_CONFIG_ERROR


def test_presets_file_settings_are_exported(clean_env, monkeypatch, capsys):
    extra = clean_env / "presets.yaml"
    extra.write_text(
        "presets:\n"
        "  - name: monitoring\n"
        "    priority: 70\n"
        "    settings:\n"
        "      - name: PROMETHEUS_PORT\n"
        "        type: port\n"
        "        default: 9090\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("DPS_PROMETHEUS_PORT", "9100")

    assert main(["--no-menu", "--presets-file", str(extra)]) == EXIT_CONFIRMED
    out = capsys.readouterr().out
    assert "# preset: monitoring" in out
    assert 'export DPS_PROMETHEUS_PORT="9100"' in out


def test_menu_keeps_stdout_sourceable(clean_env, monkeypatch, capsys):
    answers = iter(["1", "DE", "x"])
    monkeypatch.setattr("builtins.input", lambda: next(answers))

    assert main([]) == EXIT_CONFIRMED
    captured = capsys.readouterr()

    lines = [line for line in captured.out.splitlines() if line]
    assert lines
    assert all(line.startswith(("#", "export ")) for line in lines)
    assert 'export DPS_TIMEZONE="Europe/Berlin"' in captured.out
    assert "Choice: " in captured.err
