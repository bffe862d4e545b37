"""
FrameCodec - entry point for frame encoding, decoding and dump I/O.

Combines the schema registry, encoder, detector, decoder and hex dump
transcoder into one configured object.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from hexframe.core.decoder import decode_fields
from hexframe.core.detector import detect_protocol
from hexframe.core.encoder import BYTES_PER_LINE, MIN_FRAME_SIZE, ByteEncoder
from hexframe.core.frame import Frame
from hexframe.core.hexdump import generate_hex_dump, parse_hex_dump, split_frames
from hexframe.core.placeholder import AddressKind, normalize_substitutions
from hexframe.core.sanitizer import sanitize
from hexframe.core.schema import DEFAULT_SCHEMAS, ProtocolSchema, SchemaRegistry


class FrameCodec:
    """
    Main entry point for describing frames as fields and bytes.

    Examples:
        Live preview of an ARP request:
            >>> from hexframe import FrameCodec
            >>> codec = FrameCodec(substitutions={'__LOCAL_MAC__': '00:11:22:33:44:55',
            ...                                   '__LOCAL_IP__': '192.168.1.10'})
            >>> print(codec.encode({'dstIp': '192.168.1.1'}, 'arp'))

        Import a hex dump file:
            >>> frame = codec.load_dump('capture.txt')
            >>> print(frame.protocol, frame.fields['srcIp'])

        Bytes for transmission (raises on values that cannot be sent):
            >>> data = codec.encode_bytes(fields, 'udp')

    Args:
        strict: Raise on unencodable values instead of rendering ``??``
            (default: False)
        min_frame_size: Frames are right-padded with zero bytes to this
            size (default: 64, the Ethernet minimum)
        bytes_per_line: Bytes per line in previews and dumps (default: 16)
        substitutions: Addresses of the active interface, keyed by
            ``AddressKind`` or by the sentinel strings ``__LOCAL_MAC__`` /
            ``__LOCAL_IP__`` (default: None)
        schemas: Schema registry (default: the built-in five protocols)
    """

    def __init__(
        self,
        strict: bool = False,
        min_frame_size: int = MIN_FRAME_SIZE,
        bytes_per_line: int = BYTES_PER_LINE,
        substitutions: Mapping[AddressKind | str, str] | None = None,
        schemas: SchemaRegistry = DEFAULT_SCHEMAS,
    ):
        if min_frame_size < 0:
            raise ValueError(f"min_frame_size must not be negative, got {min_frame_size}")
        if bytes_per_line <= 0:
            raise ValueError(f"bytes_per_line must be positive, got {bytes_per_line}")

        self.strict = strict
        self.min_frame_size = min_frame_size
        self.bytes_per_line = bytes_per_line
        self.substitutions = normalize_substitutions(substitutions, strict=True)
        self.schemas = schemas

        self._preview_encoder = ByteEncoder(strict=strict, min_frame_size=min_frame_size)
        self._strict_encoder = ByteEncoder(strict=True, min_frame_size=min_frame_size)

    def set_local_addresses(self, mac: str | None = None, ip: str | None = None) -> None:
        """
        Update the active interface addresses used for dynamic placeholders.

        ``None`` leaves an address unchanged; an empty string clears it.
        """
        for kind, value in ((AddressKind.MAC, mac), (AddressKind.IP, ip)):
            if value is None:
                continue
            self.substitutions.pop(kind, None)
            self.substitutions.update(normalize_substitutions({kind: value}))

    def schema(self, protocol: str | ProtocolSchema) -> ProtocolSchema:
        """Resolve a protocol key to its schema."""
        if isinstance(protocol, ProtocolSchema):
            return protocol
        return self.schemas.require(protocol)

    def sanitize(self, protocol: str, key: str, value):
        """Clean one edited value; unknown keys pass through unchanged."""
        spec = self.schema(protocol).field(key)
        if spec is None:
            return value
        return sanitize(value, spec, protocol)

    def encode(self, fields: Mapping[str, object], protocol: str | ProtocolSchema) -> str:
        """Multi-line hex preview of ``fields``."""
        return self._preview_encoder.encode(
            fields, self.schema(protocol), self.substitutions, self.bytes_per_line
        )

    def encode_hex(self, fields: Mapping[str, object], protocol: str | ProtocolSchema) -> str:
        """Flat hex of ``fields``; may contain ``??`` in preview mode."""
        tokens = self._preview_encoder.encode_tokens(fields, self.schema(protocol), self.substitutions)
        return ''.join(tokens)

    def encode_bytes(self, fields: Mapping[str, object], protocol: str | ProtocolSchema) -> bytes:
        """Frame bytes for transmission; always strict."""
        tokens = self._strict_encoder.encode_tokens(fields, self.schema(protocol), self.substitutions)
        return bytes.fromhex(''.join(tokens))

    def decode(self, hex_data: str, protocol: str) -> dict[str, str]:
        return decode_fields(hex_data, protocol)

    def detect(self, hex_data: str) -> str | None:
        return detect_protocol(hex_data)

    def parse_dump(self, text: str) -> str:
        return parse_hex_dump(text)

    def generate_dump(self, hex_data: str) -> str:
        return generate_hex_dump(hex_data, self.bytes_per_line)

    def import_dump(self, text: str, protocol: str | None = None) -> Frame:
        """Parse dump text, detect the protocol (unless given) and decode it."""
        return Frame.from_hex(parse_hex_dump(text), protocol)

    def import_sequence(self, text: str) -> list[Frame]:
        """One frame per non-blank line."""
        return [Frame.from_hex(hex_data) for hex_data in split_frames(text)]

    def export_dump(self, fields: Mapping[str, object], protocol: str | ProtocolSchema) -> str:
        """Encode ``fields`` strictly and render the bytes as dump text."""
        return generate_hex_dump(self.encode_bytes(fields, protocol).hex().upper(), self.bytes_per_line)

    def load_dump(self, path: str | Path, protocol: str | None = None) -> Frame:
        """Read a hex dump text file (UTF-8)."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Hex dump file not found: {path}")
        frame = self.import_dump(path.read_text(encoding='utf-8'), protocol)
        frame.name = path.name
        return frame

    def save_dump(self, path: str | Path, fields: Mapping[str, object], protocol: str | ProtocolSchema) -> None:
        """Write ``fields`` as a hex dump text file (UTF-8)."""
        Path(path).write_text(self.export_dump(fields, protocol) + '\n', encoding='utf-8')
