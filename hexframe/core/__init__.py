"""Core hexframe modules."""

from hexframe.core.codec import FrameCodec
from hexframe.core.decoder import decode_fields
from hexframe.core.detector import detect_protocol
from hexframe.core.encoder import ByteEncoder, encode, encode_bytes, encode_tokens
from hexframe.core.frame import Frame
from hexframe.core.hexdump import (
    clean_hex_string,
    generate_hex_dump,
    is_valid_hex_string,
    normalize_hex,
    parse_hex_dump,
    split_frames,
)
from hexframe.core.placeholder import AddressKind, DynamicRef, Literal, LOCAL_IP, LOCAL_MAC
from hexframe.core.reader import PcapReader, read_pcap, write_pcap
from hexframe.core.sanitizer import sanitize, sanitize_fields
from hexframe.core.schema import (
    DEFAULT_SCHEMAS,
    FieldSpec,
    ProtocolSchema,
    SchemaRegistry,
    SemanticType,
    schema_for,
)

__all__ = [
    'FrameCodec',
    'decode_fields',
    'detect_protocol',
    'ByteEncoder',
    'encode',
    'encode_bytes',
    'encode_tokens',
    'Frame',
    'clean_hex_string',
    'generate_hex_dump',
    'is_valid_hex_string',
    'normalize_hex',
    'parse_hex_dump',
    'split_frames',
    'AddressKind',
    'DynamicRef',
    'Literal',
    'LOCAL_IP',
    'LOCAL_MAC',
    'PcapReader',
    'read_pcap',
    'write_pcap',
    'sanitize',
    'sanitize_fields',
    'DEFAULT_SCHEMAS',
    'FieldSpec',
    'ProtocolSchema',
    'SchemaRegistry',
    'SemanticType',
    'schema_for',
]
