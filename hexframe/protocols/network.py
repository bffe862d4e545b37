"""
Network layer field decoders (ARP, IPv4).
"""

from __future__ import annotations

from hexframe.protocols.base import (
    BaseFieldDecoder,
    Layer,
    format_ip,
    format_mac,
    read_decimal,
    read_int,
    tail,
)
from hexframe.protocols.link import ETHERNET_HEADER_LEN, EthernetDecoder
from hexframe.protocols.registry import register_decoder

ARP_MIN_LEN = 56
ARP_FULL_LEN = 84

# Ethernet header + 20-byte IPv4 header
IPV4_MIN_LEN = 68


@register_decoder('arp', Layer.NETWORK, min_length=ARP_MIN_LEN)
class ARPDecoder(EthernetDecoder):
    """
    ARP over Ethernet decoder.

    The hardware/protocol address-length byte pair at [36:38] is not exposed
    and the opcode is read from [38:42], one byte earlier than the wire
    layout puts it. Frames written by the encoder carry the address lengths
    06/04, so the decoded opcode of a request reads "0400". Kept as-is until
    the intended layout is confirmed.
    """

    def decode(self, hex_data: str) -> dict[str, str]:
        if len(hex_data) < ARP_MIN_LEN:
            return {}
        fields = self.decode_header(hex_data)
        fields.update({
            'hwType': hex_data[28:32],
            'protoType': hex_data[32:36],
            'opcode': hex_data[38:42],
            'srcMac': format_mac(hex_data[44:56]),
            'srcIp': format_ip(hex_data[56:64]),
            'dstMac': format_mac(hex_data[64:76]),
            'dstIp': format_ip(hex_data[76:84]),
            'data': tail(hex_data, ARP_FULL_LEN),
        })
        return fields


@register_decoder('ipv4', Layer.NETWORK, min_length=IPV4_MIN_LEN)
class IPv4Decoder(EthernetDecoder):
    """IPv4 over Ethernet decoder."""

    def decode_ipv4(self, hex_data: str) -> dict[str, str]:
        """Decode Ethernet + IPv4 header fields, without the payload."""
        if len(hex_data) < IPV4_MIN_LEN:
            return {}

        version_ihl = read_int(hex_data, 28, 30)
        flags_frag = read_int(hex_data, 40, 44)

        fields = self.decode_header(hex_data)
        fields.update({
            'version': str(version_ihl >> 4),
            'ihl': str(version_ihl & 0x0F),
            'tos': read_decimal(hex_data, 30, 32),
            'total_length': read_decimal(hex_data, 32, 36),
            'identification': read_decimal(hex_data, 36, 40),
            'flags': str((flags_frag >> 13) & 0x7),
            'fragment_offset': str(flags_frag & 0x1FFF),
            'ttl': read_decimal(hex_data, 44, 46),
            'protocol': read_decimal(hex_data, 46, 48),
            'header_checksum': read_decimal(hex_data, 48, 52),
            'srcIp': format_ip(hex_data[52:60]),
            'dstIp': format_ip(hex_data[60:68]),
        })
        return fields

    def decode(self, hex_data: str) -> dict[str, str]:
        fields = self.decode_ipv4(hex_data)
        if not fields:
            return {}
        # IHL counts 32-bit words, 8 hex digits each
        header_len = int(fields['ihl']) * 8
        fields['data'] = tail(hex_data, ETHERNET_HEADER_LEN + header_len)
        return fields
