"""
Byte encoder: field value map + protocol schema -> hex byte tokens.

Fields are rendered in schema (wire) order. Fields carrying a bit width are
packed MSB-first with their neighbours until the group is byte aligned,
which is how the IPv4 version/IHL byte, the IPv4 flags/fragment-offset
word and the TCP data-offset/flags word are built.

Preview encoding never raises: a value that fits no rule renders as the
``??`` token. Strict encoding, used right before a frame is handed to a
sender, raises instead.
"""

from __future__ import annotations

import re
import warnings
from typing import Mapping

from hexframe.core.placeholder import (
    AddressKind,
    classify,
    normalize_substitutions,
    resolve,
)
from hexframe.core.schema import FieldSpec, ProtocolSchema, SemanticType
from hexframe.errors import (
    UnresolvableField,
    UnresolvedPlaceholder,
    UnresolvedPlaceholderWarning,
    UnsupportedPayloadEncoding,
)

INVALID_TOKEN = "??"
PAD_TOKEN = "00"

# Ethernet minimum frame size in bytes
MIN_FRAME_SIZE = 64
BYTES_PER_LINE = 16

_HEX = re.compile(r'[0-9a-fA-F]+')
_DEC = re.compile(r'[0-9]+')
_MAC_SEGMENT = re.compile(r'[0-9a-fA-F]{1,2}')
_WHITESPACE = re.compile(r'\s+')


def _split_bytes(hex_text: str) -> list[str]:
    return [hex_text[i:i + 2].upper() for i in range(0, len(hex_text), 2)]


def mac_tokens(text: str) -> list[str] | None:
    """``AA:BB:CC:DD:EE:FF`` or ``AABBCCDDEEFF`` -> six byte tokens."""
    if ':' in text:
        segments = text.split(':')
        if len(segments) != 6 or not all(_MAC_SEGMENT.fullmatch(s) for s in segments):
            return None
        return [s.upper().zfill(2) for s in segments]
    if len(text) == 12 and _HEX.fullmatch(text):
        return _split_bytes(text)
    return None


def ipv4_tokens(text: str) -> list[str] | None:
    """Dotted decimal or 8 bare hex digits -> four byte tokens."""
    if '.' in text:
        octets = text.split('.')
        if len(octets) != 4 or not all(_DEC.fullmatch(o) for o in octets):
            return None
        values = [int(o) for o in octets]
        if any(v > 0xFF for v in values):
            return None
        return [f"{v:02X}" for v in values]
    if len(text) == 8 and _HEX.fullmatch(text):
        return _split_bytes(text)
    return None


def parse_number(value: object, semantic_type: SemanticType) -> int | None:
    """
    Parse a numeric field value.

    Hex words are read as hex; unsigned integers as decimal. Either accepts
    an explicit ``0x`` prefix. Returns None if the value is not a number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    text = str(value).strip()
    if text[:2].lower() == '0x':
        digits, pattern, base = text[2:], _HEX, 16
    elif semantic_type is SemanticType.HEX_WORD:
        digits, pattern, base = text, _HEX, 16
    else:
        digits, pattern, base = text, _DEC, 10
    if not pattern.fullmatch(digits):
        return None
    return int(digits, base)


def int_tokens(number: int, width: int) -> list[str] | None:
    """Render ``number`` as ``width`` big-endian byte tokens."""
    if number < 0 or number >= 1 << (width * 8):
        return None
    return _split_bytes(f"{number:0{width * 2}X}")


def payload_tokens(text: str, text_payload: bool) -> list[str] | None:
    """
    Render a payload field.

    Args:
        text: Payload as typed
        text_payload: True for protocols that accept ASCII payloads (tcp/udp)

    Returns:
        Byte tokens, or None when a hex-only payload is not hex
    """
    compact = _WHITESPACE.sub('', text)
    if text_payload:
        if compact and len(compact) % 2 == 0 and _HEX.fullmatch(compact):
            return _split_bytes(compact)
        return [f"{b:02X}" for b in text.encode('utf-8')]
    if not compact:
        return []
    if not _HEX.fullmatch(compact):
        return None
    if len(compact) % 2:
        compact += '0'
    return _split_bytes(compact)


def wrap_tokens(tokens: list[str], per_line: int = BYTES_PER_LINE) -> str:
    """Join tokens with spaces, ``per_line`` tokens per line."""
    lines = [' '.join(tokens[i:i + per_line]) for i in range(0, len(tokens), per_line)]
    return '\n'.join(lines)


class ByteEncoder:
    """
    Renders field value maps to hex byte tokens.

    Args:
        strict: Raise on values that cannot be encoded instead of rendering
            ``??`` (transmission mode). Default: False (preview mode)
        min_frame_size: Minimum frame size in bytes; shorter frames are
            right-padded with ``00``. Default: 64
    """

    def __init__(self, strict: bool = False, min_frame_size: int = MIN_FRAME_SIZE):
        self.strict = strict
        self.min_frame_size = min_frame_size

    def encode_tokens(
        self,
        fields: Mapping[str, object],
        schema: ProtocolSchema,
        substitutions: Mapping[AddressKind | str, str] | None = None,
    ) -> list[str]:
        """Render ``fields`` to a flat, padded list of byte tokens."""
        subs = normalize_substitutions(substitutions, strict=self.strict)
        tokens: list[str] = []
        group: list[tuple[FieldSpec, object]] = []
        group_bits = 0

        for spec in schema.fields:
            value = self._resolve(spec, fields.get(spec.key), subs)
            if spec.is_packed:
                group.append((spec, value))
                group_bits += spec.bits
                if group_bits % 8 == 0:
                    tokens.extend(self._pack(group, group_bits))
                    group, group_bits = [], 0
                continue
            if value == "":
                continue
            tokens.extend(self._render(spec, value, schema))

        while len(tokens) < self.min_frame_size:
            tokens.append(PAD_TOKEN)
        return tokens

    def encode(
        self,
        fields: Mapping[str, object],
        schema: ProtocolSchema,
        substitutions: Mapping[AddressKind | str, str] | None = None,
        bytes_per_line: int = BYTES_PER_LINE,
    ) -> str:
        """Render ``fields`` as multi-line hex text."""
        return wrap_tokens(self.encode_tokens(fields, schema, substitutions), bytes_per_line)

    def _resolve(self, spec: FieldSpec, raw: object, subs: Mapping[AddressKind, str]) -> object:
        if raw is None or raw == "":
            raw = spec.placeholder
        if isinstance(raw, int) and not isinstance(raw, bool):
            # Numbers are kept as-is so hex words are not re-read as hex digits
            return raw
        value = classify(raw)
        text, resolved = resolve(value, subs)
        if not resolved:
            if self.strict:
                raise UnresolvedPlaceholder(spec.key, text, "no substitution supplied")
            warnings.warn(
                f"No substitution for {value.sentinel} in field {spec.key!r}; "
                f"rendering the literal text",
                UnresolvedPlaceholderWarning,
                stacklevel=2,
            )
        return text

    def _render(self, spec: FieldSpec, value: object, schema: ProtocolSchema) -> list[str]:
        kind = spec.semantic_type
        text = str(value)
        if kind is SemanticType.MAC:
            tokens = mac_tokens(text.strip())
        elif kind is SemanticType.IPV4:
            tokens = ipv4_tokens(text.strip())
        elif kind is SemanticType.PAYLOAD:
            tokens = payload_tokens(text, schema.text_payload)
            if tokens is None and self.strict:
                raise UnsupportedPayloadEncoding(
                    spec.key, text, f"{schema.key} payloads must be hex"
                )
        else:
            number = parse_number(value, kind)
            tokens = None if number is None else int_tokens(number, spec.width or 1)

        if tokens is None:
            return self._invalid(spec, text)
        return tokens

    def _pack(self, group: list[tuple[FieldSpec, object]], total_bits: int) -> list[str]:
        combined = 0
        for spec, value in group:
            number = 0 if value == "" else parse_number(value, spec.semantic_type)
            if number is None or number >= 1 << spec.bits:
                return self._invalid(spec, value)
            combined = (combined << spec.bits) | number
        return int_tokens(combined, total_bits // 8)

    def _invalid(self, spec: FieldSpec, value: object) -> list[str]:
        if self.strict:
            raise UnresolvableField(spec.key, value, f"not a valid {spec.semantic_type.value}")
        return [INVALID_TOKEN]


def encode(
    fields: Mapping[str, object],
    schema: ProtocolSchema,
    substitutions: Mapping[AddressKind | str, str] | None = None,
    *,
    strict: bool = False,
    min_frame_size: int = MIN_FRAME_SIZE,
    bytes_per_line: int = BYTES_PER_LINE,
) -> str:
    """Encode a field map to multi-line hex text (preview unless ``strict``)."""
    encoder = ByteEncoder(strict=strict, min_frame_size=min_frame_size)
    return encoder.encode(fields, schema, substitutions, bytes_per_line)


def encode_tokens(
    fields: Mapping[str, object],
    schema: ProtocolSchema,
    substitutions: Mapping[AddressKind | str, str] | None = None,
    *,
    strict: bool = False,
    min_frame_size: int = MIN_FRAME_SIZE,
) -> list[str]:
    """Encode a field map to a flat list of byte tokens."""
    encoder = ByteEncoder(strict=strict, min_frame_size=min_frame_size)
    return encoder.encode_tokens(fields, schema, substitutions)


def encode_bytes(
    fields: Mapping[str, object],
    schema: ProtocolSchema,
    substitutions: Mapping[AddressKind | str, str] | None = None,
    *,
    min_frame_size: int = MIN_FRAME_SIZE,
) -> bytes:
    """Transmission encoding: strict, returns the raw frame bytes."""
    tokens = encode_tokens(fields, schema, substitutions, strict=True, min_frame_size=min_frame_size)
    return bytes.fromhex(''.join(tokens))
