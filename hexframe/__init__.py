"""
hexframe - Ethernet frame field codec

Turns field maps for Ethernet, ARP, IPv4, TCP and UDP frames into wire
bytes and hex dumps, and recovers field maps from captured hex.

Example usage:
    from hexframe import FrameCodec

    codec = FrameCodec(substitutions={'__LOCAL_MAC__': '00:11:22:33:44:55',
                                      '__LOCAL_IP__': '192.168.1.10'})

    # Live preview, 16 bytes per line
    print(codec.encode({'dstIp': '192.168.1.1', 'srcMac': '__LOCAL_MAC__'}, 'arp'))

    # Bytes ready to send
    data = codec.encode_bytes({'dstPort': '53', 'data': 'hello'}, 'udp')

    # Back from captured hex
    frame = codec.import_dump(open('capture.txt').read())
    print(frame.protocol, frame.fields)
"""

from hexframe.core.codec import FrameCodec
from hexframe.core.decoder import decode_fields
from hexframe.core.detector import detect_protocol
from hexframe.core.encoder import ByteEncoder, encode, encode_bytes, encode_tokens
from hexframe.core.frame import Frame
from hexframe.core.hexdump import generate_hex_dump, normalize_hex, parse_hex_dump, split_frames
from hexframe.core.placeholder import AddressKind, LOCAL_IP, LOCAL_MAC
from hexframe.core.reader import PcapReader, read_pcap, write_pcap
from hexframe.core.sanitizer import sanitize
from hexframe.core.schema import (
    ARP_SCHEMA,
    DEFAULT_SCHEMAS,
    ETHERNET_SCHEMA,
    IPV4_SCHEMA,
    TCP_SCHEMA,
    UDP_SCHEMA,
    FieldSpec,
    ProtocolSchema,
    SchemaRegistry,
    SemanticType,
    schema_for,
)
from hexframe.errors import (
    HexFrameError,
    UnknownProtocolError,
    UnresolvableField,
    UnresolvedPlaceholder,
    UnresolvedPlaceholderWarning,
    UnsupportedPayloadEncoding,
)
from hexframe.protocols.base import BaseFieldDecoder
from hexframe.protocols.registry import register_decoder, get_global_registry
from hexframe.templates import (
    DEFAULT_TEMPLATES,
    TemplateStore,
    merge_default_templates,
    restore_placeholders,
)
from hexframe.exporters import (
    to_dataframe,
    to_dict,
    to_json,
    to_csv,
    FrameExporter
)

# Short aliases
decode = decode_fields
detect = detect_protocol
parse_dump = parse_hex_dump
generate_dump = generate_hex_dump

__version__ = "0.1.0"

__all__ = [
    # Main class
    'FrameCodec',
    'Frame',

    # Codec functions
    'encode',
    'encode_tokens',
    'encode_bytes',
    'ByteEncoder',
    'decode_fields',
    'decode',
    'detect_protocol',
    'detect',
    'sanitize',

    # Hex dumps
    'parse_hex_dump',
    'generate_hex_dump',
    'parse_dump',
    'generate_dump',
    'normalize_hex',
    'split_frames',

    # Schemas
    'SemanticType',
    'FieldSpec',
    'ProtocolSchema',
    'SchemaRegistry',
    'DEFAULT_SCHEMAS',
    'ETHERNET_SCHEMA',
    'ARP_SCHEMA',
    'IPV4_SCHEMA',
    'TCP_SCHEMA',
    'UDP_SCHEMA',
    'schema_for',

    # Placeholders
    'AddressKind',
    'LOCAL_MAC',
    'LOCAL_IP',

    # Errors
    'HexFrameError',
    'UnknownProtocolError',
    'UnresolvableField',
    'UnresolvedPlaceholder',
    'UnsupportedPayloadEncoding',
    'UnresolvedPlaceholderWarning',

    # Field decoders
    'BaseFieldDecoder',
    'register_decoder',
    'get_global_registry',

    # Templates
    'DEFAULT_TEMPLATES',
    'TemplateStore',
    'merge_default_templates',
    'restore_placeholders',

    # Pcap I/O
    'PcapReader',
    'read_pcap',
    'write_pcap',

    # Exporters
    'to_dataframe',
    'to_dict',
    'to_json',
    'to_csv',
    'FrameExporter',
]
