"""
Field decoder base classes and helpers.

All offsets are in hex digits (two per byte) into a canonical hex string.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum


class Layer(IntEnum):
    """Protocol layer enumeration."""
    DATA_LINK = 2
    NETWORK = 3
    TRANSPORT = 4


def format_mac(hex_mac: str) -> str:
    """``001122334455`` -> ``00:11:22:33:44:55``; "" unless 12 digits."""
    if len(hex_mac) != 12:
        return ""
    return ':'.join(hex_mac[i:i + 2] for i in range(0, 12, 2)).upper()


def format_ip(hex_ip: str) -> str:
    """``C0A80101`` -> ``192.168.1.1``; "" unless 8 digits."""
    if len(hex_ip) != 8:
        return ""
    return '.'.join(str(int(hex_ip[i:i + 2], 16)) for i in range(0, 8, 2))


def read_int(hex_data: str, start: int, end: int) -> int | None:
    """Integer value of ``hex_data[start:end]``, None if not fully present."""
    if len(hex_data) < end:
        return None
    return int(hex_data[start:end], 16)


def read_decimal(hex_data: str, start: int, end: int) -> str | None:
    value = read_int(hex_data, start, end)
    return None if value is None else str(value)


def tail(hex_data: str, start: int) -> str:
    """Everything from ``start`` on, "" when nothing is left."""
    return hex_data[start:] if len(hex_data) > start else ""


class BaseFieldDecoder(ABC):
    """
    Abstract base class for field decoders.

    A decoder extracts the fields of one protocol stack from fixed offsets
    of a canonical hex string. Decoders never raise on short input: they
    return an empty or partial field map instead.
    """

    # Protocol key, matching the schema key
    name: str = ""

    # Layer of the outermost header this decoder adds
    layer: Layer = Layer.DATA_LINK

    # Hex digits required before any field is extracted
    min_length: int = 0

    def can_decode(self, hex_data: str) -> bool:
        return len(hex_data) >= self.min_length

    @abstractmethod
    def decode(self, hex_data: str) -> dict[str, str]:
        """
        Extract fields from a canonical hex string.

        Args:
            hex_data: Uppercase hex digits, even length

        Returns:
            Field map with string values, {} when too short
        """

    @classmethod
    def decoder_id(cls) -> str:
        """Get unique decoder identifier."""
        return f"{cls.layer.name.lower()}.{cls.name}"
