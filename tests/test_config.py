"""Tests for configuration discovery and engine options."""

from pathlib import Path

from dps_configurator.config import ConfigPaths, get_config_paths, load_engine_config


def test_config_paths_prefer_local_over_user(tmp_path):
    local_dir = tmp_path / "local"
    user_dir = tmp_path / "user"
    local_dir.mkdir()
    user_dir.mkdir()
    (local_dir / ".env").write_text("DPS_AUTO_CONFIRM=1\n", encoding="utf-8")
    (user_dir / ".env").write_text("DPS_AUTO_CONFIRM=0\n", encoding="utf-8")
    (user_dir / "presets.yaml").write_text("presets: []\n", encoding="utf-8")

    paths = ConfigPaths(local_dir=local_dir, user_dir=user_dir)
    assert paths.env_file == local_dir / ".env"
    assert paths.presets_file == user_dir / "presets.yaml"


def test_get_config_paths_discovers_directories(tmp_path, monkeypatch):
    home = tmp_path / "home"
    (home / ".config" / "dps").mkdir(parents=True)
    work = tmp_path / "work"
    (work / ".dps").mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)

    paths = get_config_paths()
    assert paths.local_dir == work / ".dps"
    assert paths.user_dir == home / ".config" / "dps"
    assert paths.env_file is None


def test_get_config_paths_without_directories(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    paths = get_config_paths()
    assert paths.local_dir is None
    assert paths.user_dir is None


def test_engine_config_defaults():
    config = load_engine_config(paths=ConfigPaths(), environ={})
    assert config.prefix == "DPS"
    assert config.auto_confirm is False
    assert config.presets_file is None
    assert config.export_path is None


def test_engine_config_from_environment():
    config = load_engine_config(
        paths=ConfigPaths(),
        environ={
            "DPS_CONFIG_PREFIX": "NIX",
            "DPS_AUTO_CONFIRM": "yes",
            "DPS_PRESETS_FILE": "~/presets.yaml",
        },
    )
    assert config.prefix == "NIX"
    assert config.auto_confirm is True
    assert config.presets_file == Path("~/presets.yaml").expanduser()


def test_env_file_values_yield_to_environment(tmp_path):
    local_dir = tmp_path / ".dps"
    local_dir.mkdir()
    (local_dir / ".env").write_text(
        "DPS_AUTO_CONFIRM=true\nDPS_CONFIG_PREFIX=FILE\n", encoding="utf-8"
    )
    (local_dir / "presets.yaml").write_text("presets: []\n", encoding="utf-8")

    config = load_engine_config(
        paths=ConfigPaths(local_dir=local_dir),
        environ={"DPS_CONFIG_PREFIX": "ENV"},
    )
    assert config.auto_confirm is True
    assert config.prefix == "ENV"
    assert config.env_file == local_dir / ".env"
    assert config.presets_file == local_dir / "presets.yaml"


def test_env_file_loaded_into_process_environment(tmp_path, monkeypatch):
    monkeypatch.delenv("DPS_AUTO_CONFIRM", raising=False)
    monkeypatch.setenv("DPS_CONFIG_PREFIX", "KEEP")
    local_dir = tmp_path / ".dps"
    local_dir.mkdir()
    (local_dir / ".env").write_text(
        "DPS_AUTO_CONFIRM=on\nDPS_CONFIG_PREFIX=FILE\n", encoding="utf-8"
    )

    config = load_engine_config(paths=ConfigPaths(local_dir=local_dir))
    assert config.auto_confirm is True
    assert config.prefix == "KEEP"
