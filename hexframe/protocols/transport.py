"""
Transport layer field decoders (TCP, UDP over IPv4).

Both assume a 20-byte IPv4 header: the transport header starts at hex
offset 68 whatever the IHL says.
"""

from __future__ import annotations

from hexframe.protocols.base import Layer, read_decimal, read_int, tail
from hexframe.protocols.network import IPV4_MIN_LEN, IPv4Decoder
from hexframe.protocols.registry import register_decoder

TRANSPORT_START = IPV4_MIN_LEN

TCP_MIN_LEN = 88
TCP_FULL_LEN = TRANSPORT_START + 40

UDP_MIN_LEN = TRANSPORT_START + 16


def _flag(nibble: int | None, mask: int) -> str | None:
    if nibble is None:
        return None
    return '1' if nibble & mask else '0'


def _update_present(fields: dict[str, str], values: dict[str, str | None]) -> None:
    for key, value in values.items():
        if value is not None:
            fields[key] = value


@register_decoder('tcp', Layer.TRANSPORT, min_length=IPV4_MIN_LEN)
class TCPDecoder(IPv4Decoder):
    """
    TCP over IPv4 decoder.

    Data offset and flags are read from the nibbles at [92], [93] and [94]:
    data_offset is nibble[92] // 4, URG/ACK come from nibble[93] and
    PSH/RST/SYN/FIN from nibble[94]. On the wire the flags byte is [94:96],
    so these values are likely wrong for real segments; the offsets are kept
    so imported frames decode the same way they always have.
    """

    def decode(self, hex_data: str) -> dict[str, str]:
        if len(hex_data) < TCP_MIN_LEN:
            return super().decode(hex_data)

        start = TRANSPORT_START
        fields = self.decode_ipv4(hex_data)
        offset_nibble = read_int(hex_data, start + 24, start + 25)
        high_flags = read_int(hex_data, start + 25, start + 26)
        low_flags = read_int(hex_data, start + 26, start + 27)

        _update_present(fields, {
            'srcPort': read_decimal(hex_data, start, start + 4),
            'dstPort': read_decimal(hex_data, start + 4, start + 8),
            'seq': read_decimal(hex_data, start + 8, start + 16),
            'ack': read_decimal(hex_data, start + 16, start + 24),
            'data_offset': None if offset_nibble is None else str(offset_nibble // 4),
            'reserved': '0',
            'flag_urg': _flag(high_flags, 0x2),
            'flag_ack': _flag(high_flags, 0x1),
            'flag_psh': _flag(low_flags, 0x8),
            'flag_rst': _flag(low_flags, 0x4),
            'flag_syn': _flag(low_flags, 0x2),
            'flag_fin': _flag(low_flags, 0x1),
            'window_size': read_decimal(hex_data, start + 28, start + 32),
            'checksum': read_decimal(hex_data, start + 32, start + 36),
            'urgent_pointer': read_decimal(hex_data, start + 36, start + 40),
        })
        fields['data'] = tail(hex_data, TCP_FULL_LEN)
        return fields


@register_decoder('udp', Layer.TRANSPORT, min_length=IPV4_MIN_LEN)
class UDPDecoder(IPv4Decoder):
    """UDP over IPv4 decoder."""

    def decode(self, hex_data: str) -> dict[str, str]:
        if len(hex_data) < UDP_MIN_LEN:
            return super().decode(hex_data)

        start = TRANSPORT_START
        fields = self.decode_ipv4(hex_data)
        fields.update({
            'srcPort': read_decimal(hex_data, start, start + 4),
            'dstPort': read_decimal(hex_data, start + 4, start + 8),
            'length': read_decimal(hex_data, start + 8, start + 12),
            'checksum': read_decimal(hex_data, start + 12, start + 16),
            'data': tail(hex_data, UDP_MIN_LEN),
        })
        return fields
