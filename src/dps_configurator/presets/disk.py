"""Disk preset: target device, encryption and partition layout."""

from typing import Optional

from dps_configurator.setting_types.system import default_disk

PRESET = "disk"

KEY_METHODS = "urandom|openssl|manual"


def register(store, target_disk: Optional[str] = None) -> None:
    """Declare the disk settings.

    Args:
        store: Store to register into.
        target_disk: Default for ``DISK_TARGET``; the first detected disk
            when omitted.
    """
    if target_disk is None:
        target_disk = default_disk()

    store.create_preset(PRESET, display="Disk", priority=20)

    store.create(
        "DISK_TARGET",
        "disk",
        preset=PRESET,
        display="Target Disk",
        default=target_disk,
        required=True,
    )
    store.create("ENCRYPTION", "toggle", preset=PRESET, display="Enable Encryption", default="true")
    store.create(
        "PARTITION_STRATEGY",
        "choice",
        preset=PRESET,
        display="Partition Strategy",
        default="fast",
        options="fast|disko",
    )
    store.create(
        "AUTO_APPROVE_DISK_PURGE",
        "toggle",
        preset=PRESET,
        display="Auto-approve Disk Purge",
        default="false",
    )
    store.create(
        "DISKO_USER_FILE",
        "path",
        preset=PRESET,
        display="Disko File (override)",
        default="",
        visible_all="PARTITION_STRATEGY==disko",
    )

    # Filesystem layout
    store.create(
        "FS_TYPE",
        "choice",
        preset=PRESET,
        display="Filesystem Type",
        default="btrfs",
        options="btrfs|ext4",
    )
    store.create(
        "SWAP_SIZE_MIB", "int", preset=PRESET, display="Swap Size (MiB)", default="0", min=0
    )
    store.create(
        "SEPARATE_HOME", "toggle", preset=PRESET, display="Separate /home", default="false"
    )
    store.create(
        "HOME_SIZE",
        "disk_size",
        preset=PRESET,
        display="/home Size (if separate)",
        default="20G",
        visible_all="SEPARATE_HOME==true",
    )

    # Encryption
    store.create(
        "ENCRYPTION_KEY_METHOD",
        "choice",
        preset=PRESET,
        display="Encryption Key Method",
        default="urandom",
        options=KEY_METHODS,
        visible_all="ENCRYPTION==true",
    )
    store.create(
        "ENCRYPTION_KEY_LENGTH",
        "int",
        preset=PRESET,
        display="Encryption Key Length",
        default="64",
        min=32,
        max=512,
        visible_all="ENCRYPTION==true",
    )
    store.create(
        "ENCRYPTION_USE_PASSPHRASE",
        "toggle",
        preset=PRESET,
        display="Use Passphrase",
        default="false",
        visible_all="ENCRYPTION==true",
    )
    store.create(
        "ENCRYPTION_UNLOCK_MODE",
        "choice",
        preset=PRESET,
        display="Encryption Unlock Mode",
        default="manual",
        options="manual|dropbear|tpm|keyfile",
        visible_all="ENCRYPTION==true",
    )
    store.create(
        "ENCRYPTION_PASSPHRASE_METHOD",
        "choice",
        preset=PRESET,
        display="Passphrase Generation Method",
        default="urandom",
        options=KEY_METHODS,
        visible_all="ENCRYPTION==true ENCRYPTION_USE_PASSPHRASE==true",
    )
    store.create(
        "ENCRYPTION_PASSPHRASE_LENGTH",
        "int",
        preset=PRESET,
        display="Passphrase Length",
        default="32",
        min=16,
        max=512,
        visible_all="ENCRYPTION==true ENCRYPTION_USE_PASSPHRASE==true",
    )
