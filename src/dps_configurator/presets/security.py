"""Security preset: secure boot, firewall and hardening switches."""

PRESET = "security"


def register(store) -> None:
    store.create_preset(PRESET, display="Security", priority=40)

    store.create(
        "SECURE_BOOT", "toggle", preset=PRESET, display="Enable Secure Boot", default="false"
    )
    store.create(
        "SECURE_BOOT_METHOD",
        "choice",
        preset=PRESET,
        display="Secure Boot Method",
        default="lanzaboote",
        options="lanzaboote|sbctl",
        visible_all="SECURE_BOOT==true",
    )
    store.create(
        "FIREWALL_ENABLE", "toggle", preset=PRESET, display="Enable Firewall", default="true"
    )
    store.create(
        "HARDENING_ENABLE",
        "toggle",
        preset=PRESET,
        display="Apply Security Hardening",
        default="true",
    )
    store.create(
        "FAIL2BAN_ENABLE", "toggle", preset=PRESET, display="Enable Fail2Ban", default="false"
    )
