"""System setting types: user names, block devices and disk sizes."""

import logging
import re
from pathlib import Path
from typing import Optional

from dps_configurator.setting_types.base import NoAttrs, SettingType

logger = logging.getLogger(__name__)

_USERNAME_RE = re.compile(r"^[a-z_][a-z0-9_-]{1,31}$")
_DISK_SIZE_RE = re.compile(r"^[0-9]+[KMGT]?$")

# Whole-disk device names; partitions and loop devices are excluded
DISK_PATTERNS = ("sd[a-z]", "nvme[0-9]*n[0-9]", "nvme[0-9]*n[0-9][0-9]", "vd[a-z]")


def detect_disks(dev_root: Optional[Path] = None) -> list[str]:
    """List whole-disk block devices under ``/dev``, sorted by path."""
    dev_root = dev_root or Path("/dev")
    found: set[str] = set()
    for pattern in DISK_PATTERNS:
        for candidate in dev_root.glob(pattern):
            try:
                if candidate.is_block_device():
                    found.add(str(candidate))
            except OSError as e:
                logger.debug(f"Skipping {candidate}: {e}")
    disks = sorted(found)
    logger.debug(f"Detected disks: {disks}")
    return disks


def default_disk(dev_root: Optional[Path] = None) -> str:
    """First detected disk, or an empty string when none is present."""
    disks = detect_disks(dev_root)
    return disks[0] if disks else ""


class UsernameType(SettingType):
    name = "username"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_USERNAME_RE.match(value))

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid username (2-32 chars, start with lowercase letter or underscore)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(2-32 chars, lowercase, start with letter or underscore)"


class DiskType(SettingType):
    """Path to an existing block device."""

    name = "disk"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        if not value:
            return False
        try:
            return Path(value).is_block_device()
        except OSError:
            return False

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return f"'{value}' is not a valid block device"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        disks = detect_disks()
        if disks:
            return f"({', '.join(disks)})"
        return "(no disks detected)"


class DiskSizeType(SettingType):
    name = "disk_size"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_DISK_SIZE_RE.match(value))

    def normalize(self, value: str) -> str:
        return value.strip().upper()

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid disk size format (examples: 8G, 500M, 1T, 50G)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(e.g., 8G, 500M, 1T)"


SYSTEM_TYPES = (UsernameType, DiskType, DiskSizeType)
