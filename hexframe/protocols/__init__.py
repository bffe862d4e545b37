"""Field decoder modules."""

from hexframe.protocols.base import (
    BaseFieldDecoder,
    Layer,
    format_ip,
    format_mac,
)
from hexframe.protocols.registry import (
    DecoderRegistry,
    get_global_registry as get_decoder_registry,
    register_decoder,
)

# Importing the decoder modules registers them with the global registry
from hexframe.protocols.link import EthernetDecoder
from hexframe.protocols.network import ARPDecoder, IPv4Decoder
from hexframe.protocols.transport import TCPDecoder, UDPDecoder

__all__ = [
    'BaseFieldDecoder',
    'Layer',
    'format_ip',
    'format_mac',
    'DecoderRegistry',
    'get_decoder_registry',
    'register_decoder',
    'EthernetDecoder',
    'ARPDecoder',
    'IPv4Decoder',
    'TCPDecoder',
    'UDPDecoder',
]
