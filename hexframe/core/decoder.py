"""
Field decoding entry point: canonical hex + protocol key -> field map.
"""

from __future__ import annotations

from hexframe.core.hexdump import normalize_hex
from hexframe.protocols.registry import DecoderRegistry, get_global_registry

# Registers the built-in decoders
import hexframe.protocols  # noqa: F401


def decode_fields(
    hex_data: str | None,
    protocol: str | None,
    registry: DecoderRegistry | None = None,
) -> dict[str, str]:
    """
    Recover structured fields from raw hex.

    Args:
        hex_data: Hex digits; whitespace and stray characters are ignored
        protocol: Protocol key ("ethernet", "arp", "ipv4", "tcp", "udp")
        registry: Decoder registry (defaults to global)

    Returns:
        A fresh field map; {} for empty input, unknown protocols or frames
        shorter than the protocol's minimum
    """
    if not hex_data or not protocol:
        return {}
    if registry is None:
        registry = get_global_registry()

    decoder = registry.create_instance(protocol)
    if decoder is None:
        return {}

    hex_data = normalize_hex(hex_data)
    if not decoder.can_decode(hex_data):
        return {}
    return decoder.decode(hex_data)
