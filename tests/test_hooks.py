"""Tests for apply-hook dispatch."""

import logging

import pytest

from dps_configurator.errors import ApplyCycleError
from dps_configurator.setting_types import NoAttrs, SettingType, build_default_catalog
from dps_configurator.settings import ConfigStore, dispatch_apply


def _region_store(with_variant=True):
    store = ConfigStore()
    store.create_preset("quick", priority=10)
    store.create_preset("region", priority=50)
    store.create("COUNTRY", "country", preset="quick", exportable=False)
    store.create("TIMEZONE", "timezone", preset="region", default="UTC")
    store.create("LOCALE", "locale", preset="region", default="en_US.UTF-8")
    store.create("KEYBOARD_LAYOUT", "keyboard", preset="region", default="us")
    if with_variant:
        store.create("KEYBOARD_VARIANT", "keyboard_variant", preset="region")
    return store


def test_country_fills_region_settings():
    store = _region_store()
    result = store.set("COUNTRY", "de", origin="prompt")

    assert result.valid is True
    assert store.get("COUNTRY") == "DE"
    assert store.get("TIMEZONE") == "Europe/Berlin"
    assert store.get("LOCALE") == "de_DE.UTF-8"
    assert store.get("KEYBOARD_LAYOUT") == "de"
    assert store.get("KEYBOARD_VARIANT") == "nodeadkeys"
    for name in ("TIMEZONE", "LOCALE", "KEYBOARD_LAYOUT", "KEYBOARD_VARIANT"):
        assert store.origin(name) == "auto"
        assert store.setting(name).origin_indicator == "[A]"
    assert store.apply_stack == []


def test_country_without_variant_keeps_previous_variant():
    store = _region_store()
    store.set("KEYBOARD_VARIANT", "intl")
    store.set("COUNTRY", "US", origin="env")
    assert store.get("KEYBOARD_LAYOUT") == "us"
    assert store.get("KEYBOARD_VARIANT") == "intl"
    assert store.origin("KEYBOARD_VARIANT") == "manual"


def test_undeclared_targets_are_skipped():
    store = _region_store(with_variant=False)
    assert dispatch_apply(store, store.setting("COUNTRY")) == 0

    store.set("COUNTRY", "CH")
    assert store.get("KEYBOARD_LAYOUT") == "ch"
    assert "KEYBOARD_VARIANT" not in store


def test_default_and_auto_writes_do_not_apply():
    store = _region_store()
    store.create_preset("extra")
    store.create("HOME_COUNTRY", "country", preset="extra", default="FR")
    assert store.get("TIMEZONE") == "UTC"

    store.set("COUNTRY", "FR", origin="auto")
    assert store.get("TIMEZONE") == "UTC"


def test_invalid_values_do_not_apply():
    store = _region_store()
    store.set("COUNTRY", "XX", origin="env", strict=False)
    assert store.get("COUNTRY") == "XX"
    assert store.get("TIMEZONE") == "UTC"


class _PingType(SettingType):
    name = "ping"

    def validate(self, value, attrs: NoAttrs) -> bool:
        return True

    def apply(self, value, attrs):
        return [("PONG", value)]


class _PongType(_PingType):
    name = "pong"

    def apply(self, value, attrs):
        return [("PING", value)]


class _BadTargetType(_PingType):
    name = "bad_target"

    def apply(self, value, attrs):
        return [("PORT", "not-a-port")]


def _custom_store():
    catalog = build_default_catalog()
    for setting_type in (_PingType(), _PongType(), _BadTargetType()):
        catalog.register(setting_type)
    store = ConfigStore(catalog=catalog)
    store.create_preset("custom")
    return store


def test_cycle_is_detected():
    store = _custom_store()
    store.create("PING", "ping", preset="custom")
    store.create("PONG", "pong", preset="custom")

    # PONG is written with origin auto, so the cascade stops there
    assert store.set("PING", "x").valid is True
    assert store.get("PONG") == "x"

    # Re-entering a setting already on the stack is a cycle
    store.apply_stack.append("PING")
    with pytest.raises(ApplyCycleError):
        dispatch_apply(store, store.setting("PING"))
    store.apply_stack.clear()


def test_invalid_derived_value_is_logged_and_skipped(caplog):
    store = _custom_store()
    store.create("PORT", "port", preset="custom", default="22")
    store.create("TRIGGER", "bad_target", preset="custom")

    with caplog.at_level(logging.WARNING):
        store.set("TRIGGER", "go")

    assert store.get("PORT") == "22"
    assert "derived invalid PORT" in caplog.text
