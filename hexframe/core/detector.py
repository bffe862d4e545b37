"""
Protocol detection from a canonical hex string.
"""

from __future__ import annotations

from hexframe.core.hexdump import normalize_hex

# Offsets in hex digits (two per byte)
MIN_DETECT_LENGTH = 24
ETHER_TYPE_SLICE = slice(24, 28)
IPV4_MIN_LENGTH = 68
IP_PROTOCOL_SLICE = slice(46, 48)

ETHERTYPE_IP = "0800"
ETHERTYPE_ARP = "0806"

IP_PROTOCOLS = {
    "06": "tcp",
    "11": "udp",
}


def detect_protocol(hex_data: str | None) -> str | None:
    """
    Guess the protocol stack of a frame.

    Returns:
        One of "ethernet", "arp", "ipv4", "tcp", "udp", or None when fewer
        than 12 bytes are available
    """
    hex_data = normalize_hex(hex_data)
    if len(hex_data) < MIN_DETECT_LENGTH:
        return None

    ether_type = hex_data[ETHER_TYPE_SLICE]
    if ether_type == ETHERTYPE_ARP:
        return "arp"
    if ether_type == ETHERTYPE_IP:
        if len(hex_data) >= IPV4_MIN_LENGTH:
            return IP_PROTOCOLS.get(hex_data[IP_PROTOCOL_SLICE], "ipv4")
        return "ipv4"
    return "ethernet"
