"""
Per-keystroke cleanup of raw field values.
"""

from __future__ import annotations

import re

from hexframe.core.schema import FieldSpec, SemanticType, TEXT_PAYLOAD_PROTOCOLS

_NOT_MAC = re.compile(r'[^0-9a-fA-F:]')
_NOT_IPV4 = re.compile(r'[^0-9.]')
_NOT_DIGIT = re.compile(r'[^0-9]')
_NOT_HEX_WORD = re.compile(r'[^0-9a-fA-Fx]')
_NOT_HEX = re.compile(r'[^0-9a-fA-F]')

BYTES_PER_PAYLOAD_LINE = 16


def group_hex_bytes(value: str, per_line: int = BYTES_PER_PAYLOAD_LINE) -> str:
    """Re-group hex digits into uppercase byte pairs, ``per_line`` per line."""
    raw = _NOT_HEX.sub('', value).upper()
    pairs = [raw[i:i + 2] for i in range(0, len(raw), 2)]
    lines = [' '.join(pairs[i:i + per_line]) for i in range(0, len(pairs), per_line)]
    return '\n'.join(lines)


def sanitize(value, spec: FieldSpec, protocol: str) -> object:
    """
    Clean a raw editor value against its field's semantic type.

    Args:
        value: Raw value as typed; non-strings are returned unchanged
        spec: Field spec of the edited field
        protocol: Key of the protocol owning the field

    Returns:
        Cleaned value truncated to ``spec.max_length``. Hex payloads are
        truncated to that many digits before being regrouped.
    """
    if not isinstance(value, str):
        return value

    kind = spec.semantic_type
    cleaned = value

    if kind is SemanticType.MAC:
        cleaned = _NOT_MAC.sub('', value)
        if ':' not in cleaned and len(cleaned) == 12:
            upper = cleaned.upper()
            cleaned = ':'.join(upper[i:i + 2] for i in range(0, 12, 2))
    elif kind is SemanticType.IPV4:
        cleaned = _NOT_IPV4.sub('', value)
    elif kind is SemanticType.UNSIGNED_INT:
        cleaned = _NOT_DIGIT.sub('', value)
    elif kind is SemanticType.HEX_WORD:
        cleaned = _NOT_HEX_WORD.sub('', value)
    elif kind is SemanticType.PAYLOAD and protocol not in TEXT_PAYLOAD_PROTOCOLS:
        # Hex payload limits count digits, not the grouping separators
        raw = _NOT_HEX.sub('', value)
        if spec.max_length:
            raw = raw[:spec.max_length]
        return group_hex_bytes(raw)

    if spec.max_length and len(cleaned) > spec.max_length:
        cleaned = cleaned[:spec.max_length]
    return cleaned


def sanitize_fields(fields: dict, schema) -> dict:
    """Sanitize every known field of a field map; unknown keys are kept as-is."""
    result = {}
    for key, value in fields.items():
        spec = schema.field(key)
        result[key] = value if spec is None else sanitize(value, spec, schema.key)
    return result
