"""Tests for environment variable import."""

import logging

from dps_configurator.presets import register_default_presets
from dps_configurator.settings import ConfigStore, import_env, import_env_file


def _store():
    store = ConfigStore()
    register_default_presets(store, target_disk="")
    return store


def test_imports_prefixed_variables():
    store = _store()
    summary = import_env(
        store,
        environ={"DPS_HOSTNAME": "Web01", "DPS_SSH_PORT": "2222", "HOSTNAME": "ignored"},
    )

    assert summary.imported == ["HOSTNAME", "SSH_PORT"]
    assert summary.invalid == []
    assert summary.count == 2
    assert store.get("HOSTNAME") == "web01"
    assert store.origin("HOSTNAME") == "env"
    assert store.setting("SSH_PORT").origin_indicator == "[E]"


def test_invalid_values_are_kept_and_counted(caplog):
    store = _store()
    with caplog.at_level(logging.WARNING):
        summary = import_env(store, environ={"DPS_SSH_PORT": "99999"})

    assert summary.invalid == ["SSH_PORT"]
    assert store.get("SSH_PORT") == "99999"
    assert store.origin("SSH_PORT") == "env"
    assert "DPS_SSH_PORT" in caplog.text


def test_custom_prefix_and_trailing_underscore():
    store = _store()
    import_env(store, prefix="NIX_", environ={"NIX_ADMIN_USER": "ops", "DPS_HOSTNAME": "x1"})
    assert store.get("ADMIN_USER") == "ops"
    assert store.get("HOSTNAME") == "nixos"


def test_country_import_runs_apply_hook():
    store = _store()
    import_env(store, environ={"DPS_COUNTRY": "fr", "DPS_TIMEZONE": "UTC"})
    assert store.get("COUNTRY") == "FR"
    assert store.get("LOCALE") == "fr_FR.UTF-8"
    assert store.origin("LOCALE") == "auto"
    # Explicit overrides later in priority order win over derived values
    assert store.get("TIMEZONE") == "UTC"
    assert store.origin("TIMEZONE") == "env"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("DPS_BOOTLOADER", "grub")
    store = _store()
    import_env(store)
    assert store.get("BOOTLOADER") == "grub"


def test_import_env_file(tmp_path):
    env_file = tmp_path / "previous.sh"
    env_file.write_text(
        "# Config export at 2024-01-01\n"
        "\n"
        "# preset: network\n"
        'export DPS_HOSTNAME="build-box"\n'
        "DPS_FS_TYPE=ext4\n",
        encoding="utf-8",
    )
    store = _store()
    summary = import_env_file(store, env_file)
    assert summary.imported == ["HOSTNAME", "FS_TYPE"]
    assert store.get("HOSTNAME") == "build-box"
    assert store.get("FS_TYPE") == "ext4"
