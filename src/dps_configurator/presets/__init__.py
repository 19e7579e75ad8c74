"""Built-in presets of the installer configuration."""

from typing import Optional

from . import access, boot, disk, network, packages, quick, region, security

# Registration order breaks priority ties
PRESET_MODULES = (quick, network, disk, boot, security, access, region, packages)


def register_default_presets(store, target_disk: Optional[str] = None) -> None:
    """Register every built-in preset on ``store``."""
    for module in PRESET_MODULES:
        if module is disk:
            module.register(store, target_disk=target_disk)
        else:
            module.register(store)


__all__ = ["PRESET_MODULES", "register_default_presets"]
