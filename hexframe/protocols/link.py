"""
Link layer field decoder (Ethernet II).
"""

from __future__ import annotations

from hexframe.protocols.base import BaseFieldDecoder, Layer, format_mac, tail
from hexframe.protocols.registry import register_decoder

# dst MAC (6) + src MAC (6) + EtherType (2) bytes
ETHERNET_HEADER_LEN = 28


@register_decoder('ethernet', Layer.DATA_LINK, min_length=ETHERNET_HEADER_LEN)
class EthernetDecoder(BaseFieldDecoder):
    """Ethernet II header decoder."""

    def decode_header(self, hex_data: str) -> dict[str, str]:
        """Decode the 14-byte Ethernet header shared by every stack."""
        return {
            'dst_mac': format_mac(hex_data[0:12]),
            'src_mac': format_mac(hex_data[12:24]),
            'ether_type': hex_data[24:28],
        }

    def decode(self, hex_data: str) -> dict[str, str]:
        if len(hex_data) < ETHERNET_HEADER_LEN:
            return {}
        fields = self.decode_header(hex_data)
        fields['data'] = tail(hex_data, ETHERNET_HEADER_LEN)
        return fields
