"""Access preset: admin account and SSH server."""

import logging

logger = logging.getLogger(__name__)

PRESET = "access"


def validate_access(store) -> list[str]:
    """Warn about password-only SSH; never blocks confirmation."""
    if store.get("SSH_ENABLE") == "true" and store.get("SSH_USE_KEY") == "false":
        logger.warning(
            "SSH password authentication is less secure than key-based authentication"
        )
    return []


def register(store) -> None:
    store.create_preset(PRESET, display="Access", priority=45, validator=validate_access)

    store.create(
        "ADMIN_USER",
        "username",
        preset=PRESET,
        display="Admin Username",
        default="admin",
        required=True,
    )
    store.create(
        "SUDO_PASSWORD_REQUIRED",
        "toggle",
        preset=PRESET,
        display="Require Password for Sudo",
        default="true",
    )
    store.create(
        "SSH_ENABLE",
        "toggle",
        preset=PRESET,
        display="Enable SSH Server",
        default="true",
        required=True,
    )
    store.create(
        "SSH_PORT",
        "port",
        preset=PRESET,
        display="SSH Port",
        default="22",
        visible_all="SSH_ENABLE==true",
    )
    store.create(
        "SSH_USE_KEY",
        "toggle",
        preset=PRESET,
        display="Use SSH Key Authentication",
        default="true",
        visible_all="SSH_ENABLE==true",
    )
    store.create(
        "SSH_KEY_TYPE",
        "choice",
        preset=PRESET,
        display="SSH Key Type",
        default="ed25519",
        options="ed25519|rsa|ecdsa",
        visible_all="SSH_ENABLE==true SSH_USE_KEY==true",
    )
    store.create(
        "SSH_KEY_PASSPHRASE",
        "toggle",
        preset=PRESET,
        display="Protect Key with Passphrase",
        default="false",
        visible_all="SSH_ENABLE==true SSH_USE_KEY==true",
    )
