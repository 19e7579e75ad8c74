"""Network preset: hostname, DHCP or static addressing, DNS servers."""

import logging

from dps_configurator.setting_types.network import is_host_address, same_subnet

logger = logging.getLogger(__name__)

PRESET = "network"


def validate_network(store) -> list[str]:
    """Check the static address, netmask and gateway against each other."""
    if store.get("NETWORK_METHOD") != "static":
        return []

    ip = store.get("NETWORK_IP")
    mask = store.get("NETWORK_MASK")
    gateway = store.get("NETWORK_GATEWAY")

    if ip and gateway and ip == gateway:
        return ["Gateway cannot be the same as IP address"]

    # Malformed values are already reported per setting
    if not (is_host_address(ip) and is_host_address(gateway) and mask):
        return []

    try:
        if not same_subnet(ip, gateway, mask):
            return [f"Gateway {gateway} must be in the same subnet as {ip}/{mask}"]
    except ValueError as e:
        logger.debug(f"Skipping subnet check: {e}")
    return []


def register(store) -> None:
    store.create_preset(PRESET, display="Network", priority=10, validator=validate_network)

    store.create(
        "HOSTNAME", "hostname", preset=PRESET, display="Hostname", default="nixos", required=True
    )
    store.create(
        "NETWORK_METHOD",
        "choice",
        preset=PRESET,
        display="Network Method",
        default="dhcp",
        options="dhcp|static",
    )
    store.create(
        "NETWORK_DNS_PRIMARY", "ip", preset=PRESET, display="Primary DNS", default="1.1.1.1"
    )
    store.create(
        "NETWORK_DNS_SECONDARY", "ip", preset=PRESET, display="Secondary DNS", default="1.0.0.1"
    )

    # Static addressing
    store.create(
        "NETWORK_IP",
        "ip",
        preset=PRESET,
        display="IP Address",
        default="",
        required=True,
        visible_all="NETWORK_METHOD==static",
    )
    store.create(
        "NETWORK_MASK",
        "netmask",
        preset=PRESET,
        display="Network Mask",
        default="255.255.255.0",
        visible_all="NETWORK_METHOD==static",
    )
    store.create(
        "NETWORK_GATEWAY",
        "ip",
        preset=PRESET,
        display="Gateway",
        default="",
        required=True,
        visible_all="NETWORK_METHOD==static",
    )
