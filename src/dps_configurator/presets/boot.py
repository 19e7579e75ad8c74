"""Boot loader preset."""

PRESET = "boot"


def register(store) -> None:
    store.create_preset(PRESET, display="Boot", priority=30)

    store.create("UEFI_MODE", "toggle", preset=PRESET, display="UEFI Mode", default="true")
    store.create(
        "BOOTLOADER",
        "choice",
        preset=PRESET,
        display="Bootloader",
        default="systemd-boot",
        options="systemd-boot|grub|refind",
    )
