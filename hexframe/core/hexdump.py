"""
Hex dump text <-> canonical hex string.

Dump lines look like the ones Wireshark exports::

    0000  ff ff ff ff ff ff 00 11  22 33 44 55 08 06 00 01
    0010  08 00 06 04 00 01 00 11  22 33 44 55 c0 a8 01 01
"""

from __future__ import annotations

import re

_OFFSET_LINE = re.compile(r'^(?:[0-9a-fA-F]{4}\s+|[0-9a-fA-F]{5,8}  )((?:[0-9a-fA-F]{2}\s*)+)')
_PURE_HEX_LINE = re.compile(r'^([0-9a-fA-F\s]+)$')
_WHITESPACE = re.compile(r'\s+')
_NOT_HEX = re.compile(r'[^0-9A-F]')

# Bytes after which an extra space is inserted within a line
GROUP_SIZE = 8


def parse_hex_dump(text: str | None) -> str:
    """
    Parse hex dump text into a canonical hex string.

    Each non-blank line may start with a hex offset followed by
    whitespace-separated byte pairs, or be a bare run of hex digits. The
    offset is 4 digits, or 5 to 8 digits followed by two spaces once a dump
    passes 64 KiB. Lines matching neither form are skipped.

    Args:
        text: Hex dump text

    Returns:
        Uppercase hex string, "" for empty input
    """
    if not text or not isinstance(text, str):
        return ""

    parts = []
    for line in text.strip().splitlines():
        if not line.strip():
            continue
        match = _OFFSET_LINE.match(line)
        if match:
            parts.append(_WHITESPACE.sub('', match.group(1)))
            continue
        match = _PURE_HEX_LINE.match(line)
        if match:
            parts.append(_WHITESPACE.sub('', match.group(1)))

    return ''.join(parts).upper()


def generate_hex_dump(hex_string: str | None, bytes_per_line: int = 16) -> str:
    """
    Format a hex string as offset-annotated dump text.

    Args:
        hex_string: Contiguous hex digits; odd length is left-padded with "0"
        bytes_per_line: Bytes shown per line (default: 16)

    Returns:
        Dump text, one line per ``bytes_per_line`` bytes
    """
    if not hex_string or not isinstance(hex_string, str):
        return ""
    if bytes_per_line <= 0:
        raise ValueError(f"bytes_per_line must be positive, got {bytes_per_line}")

    if len(hex_string) % 2:
        hex_string = '0' + hex_string

    lines = []
    step = bytes_per_line * 2
    for offset, start in enumerate(range(0, len(hex_string), step)):
        chunk = hex_string[start:start + step]
        pairs = [chunk[i:i + 2] for i in range(0, len(chunk), 2)]
        body = ''
        for index, pair in enumerate(pairs):
            if index and index % GROUP_SIZE == 0:
                body += ' '
            body += (' ' if index else '') + pair
        lines.append(f"{offset * bytes_per_line:04X}  {body}")

    return '\n'.join(lines)


def clean_hex_string(text: str | None) -> str:
    """Remove whitespace and uppercase."""
    if not text or not isinstance(text, str):
        return ""
    return _WHITESPACE.sub('', text).upper()


def is_valid_hex_string(text: str | None) -> bool:
    """True for non-empty, even-length hex once whitespace is removed."""
    cleaned = clean_hex_string(text)
    if not cleaned:
        return False
    return not _NOT_HEX.search(cleaned) and len(cleaned) % 2 == 0


def normalize_hex(text: str | None) -> str:
    """
    Prepare untrusted input for detection and decoding.

    Whitespace and non-hex characters are dropped and a trailing odd nibble
    is truncated, so the result is always canonical.
    """
    cleaned = _NOT_HEX.sub('', clean_hex_string(text))
    if len(cleaned) % 2:
        cleaned = cleaned[:-1]
    return cleaned


def split_frames(text: str | None) -> list[str]:
    """Read one frame per non-blank line, as in batch sequence imports."""
    if not text or not isinstance(text, str):
        return []
    frames = []
    for line in text.splitlines():
        hex_string = parse_hex_dump(line)
        if hex_string:
            frames.append(hex_string)
    return frames
