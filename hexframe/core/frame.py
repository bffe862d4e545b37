"""
Decoded frame record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from hexframe.core.decoder import decode_fields
from hexframe.core.detector import detect_protocol
from hexframe.core.hexdump import generate_hex_dump, normalize_hex


@dataclass
class Frame:
    """
    A frame as canonical hex together with its decoded fields.

    Attributes:
        hex: Canonical uppercase hex string
        protocol: Detected or assigned protocol key, None if unknown
        fields: Decoded field map
        timestamp: Capture timestamp for frames read from pcap files
        name: Optional label (file name, template name)
    """
    hex: str
    protocol: str | None = None
    fields: dict[str, str] = field(default_factory=dict)
    timestamp: float | None = None
    name: str = ""

    @classmethod
    def from_hex(cls, hex_data: str, protocol: str | None = None, **kwargs) -> Frame:
        """Detect (unless given) the protocol and decode the fields."""
        hex_data = normalize_hex(hex_data)
        if protocol is None:
            protocol = detect_protocol(hex_data)
        return cls(
            hex=hex_data,
            protocol=protocol,
            fields=decode_fields(hex_data, protocol),
            **kwargs,
        )

    @classmethod
    def from_bytes(cls, data: bytes, protocol: str | None = None, **kwargs) -> Frame:
        return cls.from_hex(data.hex(), protocol, **kwargs)

    @property
    def length(self) -> int:
        """Frame length in bytes."""
        return len(self.hex) // 2

    def to_bytes(self) -> bytes:
        return bytes.fromhex(self.hex)

    def to_hex_dump(self, bytes_per_line: int = 16) -> str:
        return generate_hex_dump(self.hex, bytes_per_line)

    def to_dict(self) -> dict[str, Any]:
        return {
            'name': self.name,
            'timestamp': self.timestamp,
            'protocol': self.protocol,
            'length': self.length,
            'hex': self.hex,
            'fields': dict(self.fields),
        }
