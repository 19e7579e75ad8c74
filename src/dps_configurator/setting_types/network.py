"""Network setting types: hostname, IPv4 address, netmask and port."""

import ipaddress
import re

from dps_configurator.setting_types.base import IntRange, NoAttrs, SettingType
from dps_configurator.settings.validators import validate_port

_HOSTNAME_RE = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$")
_OCTET_RE = re.compile(r"^(0|[1-9][0-9]{0,2})$")
_CIDR_RE = re.compile(r"^[0-9]{1,2}$")


def is_host_address(value: str) -> bool:
    """Check a dotted-quad host address.

    Octets have no leading zeros, the first octet is not 0 and the last
    octet is neither 0 nor 255.
    """
    octets = value.split(".")
    if len(octets) != 4 or not all(_OCTET_RE.match(octet) for octet in octets):
        return False
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return octets[0] != "0" and octets[3] not in ("0", "255")


def netmask_to_prefix(mask: str) -> int:
    """Convert a dotted netmask or a CIDR prefix length to a prefix length.

    Raises:
        ValueError: If ``mask`` is neither.
    """
    mask = mask.strip()
    if _CIDR_RE.match(mask):
        prefix = int(mask)
        if not 0 <= prefix <= 32:
            raise ValueError(f"CIDR prefix out of range: {mask}")
        return prefix
    network = ipaddress.IPv4Network(f"0.0.0.0/{mask}")
    # ipaddress also accepts host masks (0.0.0.255)
    if str(network.netmask) != mask:
        raise ValueError(f"Not a netmask: {mask}")
    return network.prefixlen


def same_subnet(address: str, other: str, mask: str) -> bool:
    """Return True when both addresses fall in the same network under ``mask``."""
    prefix = netmask_to_prefix(mask)
    network = ipaddress.IPv4Network(f"{address}/{prefix}", strict=False)
    return ipaddress.IPv4Address(other) in network


class HostnameType(SettingType):
    """RFC 1123 host label, stored lowercase."""

    name = "hostname"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_HOSTNAME_RE.match(value))

    def normalize(self, value: str) -> str:
        return value.strip().lower()

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return (
            "Invalid hostname. Use 1-63 alphanumeric characters and hyphens "
            "(no leading/trailing hyphens)"
        )

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(alphanumeric, hyphens allowed, no leading/trailing hyphens)"


class IpType(SettingType):
    name = "ip"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return is_host_address(value)

    def normalize(self, value: str) -> str:
        return value.strip()

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid IP address format (example: 192.168.1.1)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(e.g., 192.168.1.10)"


class NetmaskType(SettingType):
    """Subnet mask; CIDR input is stored as a dotted quad."""

    name = "netmask"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        if not value or value.count(".") not in (0, 3):
            return False
        try:
            netmask_to_prefix(value)
        except ValueError:
            return False
        return True

    def normalize(self, value: str) -> str:
        value = value.strip()
        if _CIDR_RE.match(value) and int(value) <= 32:
            return str(ipaddress.IPv4Network(f"0.0.0.0/{value}").netmask)
        return value

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid network mask. Use CIDR (e.g., 24) or dotted decimal (e.g., 255.255.255.0)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(CIDR: 24 or dotted: 255.255.255.0)"


class PortType(SettingType):
    name = "port"
    attrs_class = IntRange
    default_attrs = {"min": 1, "max": 65535}

    def validate(self, value: str, attrs: IntRange) -> bool:
        return validate_port(value, attrs.min, attrs.max).valid

    def error_message(self, value: str, attrs: IntRange) -> str:
        return validate_port(value, attrs.min, attrs.max).error or "Invalid port"

    def prompt_hint(self, attrs: IntRange) -> str:
        return f"({attrs.min}-{attrs.max})"


NETWORK_TYPES = (HostnameType, IpType, NetmaskType, PortType)
