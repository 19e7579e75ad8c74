"""Region preset: timezone, locales and keyboard."""

PRESET = "region"


def register(store) -> None:
    store.create_preset(PRESET, display="Region", priority=50)

    store.create("TIMEZONE", "timezone", preset=PRESET, display="Timezone", default="UTC")
    store.create("LOCALE", "locale", preset=PRESET, display="Primary Locale", default="en_US.UTF-8")
    store.create("LOCALE_EXTRA", "text", preset=PRESET, display="Additional Locales", default="")
    store.create(
        "KEYBOARD_LAYOUT", "keyboard", preset=PRESET, display="Keyboard Layout", default="us"
    )
    store.create(
        "KEYBOARD_VARIANT",
        "keyboard_variant",
        preset=PRESET,
        display="Keyboard Variant (optional)",
        default="",
    )
