"""
Protocol schema registry.

Each protocol is an ordered list of field specs in wire order. The default
registry is built once at import and is read-only; encoder and decoder
calls receive the schema they work on explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from hexframe.errors import UnknownProtocolError


class SemanticType(Enum):
    """How a field value is sanitized and rendered to bytes."""
    MAC = "mac"
    IPV4 = "ipv4"
    HEX_WORD = "hex-word"
    UNSIGNED_INT = "unsigned-int"
    PAYLOAD = "ascii-or-hex-payload"


# Protocols whose payload may be typed as ASCII text
TEXT_PAYLOAD_PROTOCOLS = frozenset({"tcp", "udp"})


@dataclass(frozen=True)
class FieldSpec:
    """Definition of a single editable field.

    Attributes:
        key: Field key used in field value maps
        semantic_type: Rendering/sanitizing rule
        placeholder: Value used when the field is left empty
        max_length: Maximum number of characters accepted by the editor
        width: Width in bytes for numeric fields
        bits: Bit width for fields packed together with their neighbours
    """
    key: str
    semantic_type: SemanticType
    placeholder: str = ""
    max_length: int = 0
    width: int | None = None
    bits: int | None = None

    @property
    def is_packed(self) -> bool:
        return self.bits is not None


@dataclass(frozen=True)
class ProtocolSchema:
    """Ordered field specs of one protocol."""
    key: str
    fields: tuple[FieldSpec, ...]

    def __post_init__(self):
        if not self.key:
            raise ValueError("Schema must have a key")
        seen = set()
        pending_bits = 0
        for spec in self.fields:
            if spec.key in seen:
                raise ValueError(f"Schema {self.key}: duplicate field {spec.key}")
            seen.add(spec.key)
            if spec.is_packed:
                pending_bits += spec.bits
            elif pending_bits % 8:
                raise ValueError(
                    f"Schema {self.key}: bit fields before {spec.key} "
                    f"are not byte aligned ({pending_bits} bits)"
                )
            else:
                pending_bits = 0
        if pending_bits % 8:
            raise ValueError(f"Schema {self.key}: trailing bit fields are not byte aligned")

    def field(self, key: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.key == key:
                return spec
        return None

    def keys(self) -> list[str]:
        return [spec.key for spec in self.fields]

    @property
    def text_payload(self) -> bool:
        """Whether the payload field accepts ASCII text."""
        return self.key in TEXT_PAYLOAD_PROTOCOLS


class SchemaRegistry:
    """Immutable mapping of protocol key to schema."""

    def __init__(self, schemas: Mapping[str, ProtocolSchema] | list[ProtocolSchema]):
        if isinstance(schemas, Mapping):
            items = dict(schemas)
        else:
            items = {schema.key: schema for schema in schemas}
        self._schemas = MappingProxyType(items)

    def get(self, key: str | None) -> ProtocolSchema | None:
        if key is None:
            return None
        return self._schemas.get(key)

    def require(self, key: str) -> ProtocolSchema:
        schema = self.get(key)
        if schema is None:
            raise UnknownProtocolError(key)
        return schema

    def keys(self) -> list[str]:
        return list(self._schemas.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._schemas

    def __iter__(self) -> Iterator[ProtocolSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)


def _mac(key: str, placeholder: str) -> FieldSpec:
    return FieldSpec(key, SemanticType.MAC, placeholder, 17)


def _ip(key: str, placeholder: str) -> FieldSpec:
    return FieldSpec(key, SemanticType.IPV4, placeholder, 15)


def _uint(key: str, placeholder: str, width: int) -> FieldSpec:
    # Decimal digits needed for the largest value of the field
    max_length = len(str((1 << (width * 8)) - 1))
    return FieldSpec(key, SemanticType.UNSIGNED_INT, placeholder, max_length, width=width)


def _hexword(key: str, placeholder: str, width: int = 2) -> FieldSpec:
    return FieldSpec(key, SemanticType.HEX_WORD, placeholder, width * 2 + 2, width=width)


def _bits(key: str, placeholder: str, bits: int) -> FieldSpec:
    max_length = len(str((1 << bits) - 1))
    return FieldSpec(key, SemanticType.UNSIGNED_INT, placeholder, max_length, bits=bits)


def _payload(placeholder: str) -> FieldSpec:
    return FieldSpec("data", SemanticType.PAYLOAD, placeholder, 256)


def _ethernet_header(ether_type: str, dst_mac: str = "AA:BB:CC:DD:EE:FF") -> tuple[FieldSpec, ...]:
    return (
        _mac("dst_mac", dst_mac),
        _mac("src_mac", "00:11:22:33:44:55"),
        _hexword("ether_type", ether_type),
    )


def _ipv4_header(protocol: str, total_length: str) -> tuple[FieldSpec, ...]:
    return _ethernet_header("0800") + (
        _bits("version", "4", 4),
        _bits("ihl", "5", 4),
        _uint("tos", "0", 1),
        _uint("total_length", total_length, 2),
        _uint("identification", "0", 2),
        _bits("flags", "0", 3),
        _bits("fragment_offset", "0", 13),
        _uint("ttl", "64", 1),
        _uint("protocol", protocol, 1),
        _uint("header_checksum", "0", 2),
        _ip("srcIp", "192.168.1.1"),
        _ip("dstIp", "192.168.1.2"),
    )


ETHERNET_SCHEMA = ProtocolSchema("ethernet", _ethernet_header("0800") + (
    _payload("00"),
))

ARP_SCHEMA = ProtocolSchema("arp", _ethernet_header("0806", dst_mac="FF:FF:FF:FF:FF:FF") + (
    _uint("hwType", "1", 2),
    _hexword("protoType", "0800"),
    _uint("hwSize", "6", 1),
    _uint("protoSize", "4", 1),
    _uint("opcode", "1", 2),
    _mac("srcMac", "00:11:22:33:44:55"),
    _ip("srcIp", "192.168.1.1"),
    _mac("dstMac", "00:00:00:00:00:00"),
    _ip("dstIp", "192.168.1.2"),
    _payload("00"),
))

IPV4_SCHEMA = ProtocolSchema("ipv4", _ipv4_header("6", "20") + (
    _payload("00"),
))

TCP_SCHEMA = ProtocolSchema("tcp", _ipv4_header("6", "40") + (
    _uint("srcPort", "12345", 2),
    _uint("dstPort", "80", 2),
    _uint("seq", "0", 4),
    _uint("ack", "0", 4),
    _bits("data_offset", "5", 4),
    _bits("reserved", "0", 6),
    _bits("flag_urg", "0", 1),
    _bits("flag_ack", "0", 1),
    _bits("flag_psh", "0", 1),
    _bits("flag_rst", "0", 1),
    _bits("flag_syn", "0", 1),
    _bits("flag_fin", "0", 1),
    _uint("window_size", "8192", 2),
    _uint("checksum", "0", 2),
    _uint("urgent_pointer", "0", 2),
    _payload(""),
))

UDP_SCHEMA = ProtocolSchema("udp", _ipv4_header("17", "28") + (
    _uint("srcPort", "12345", 2),
    _uint("dstPort", "80", 2),
    _uint("length", "8", 2),
    _uint("checksum", "0", 2),
    _payload(""),
))

DEFAULT_SCHEMAS = SchemaRegistry([
    ETHERNET_SCHEMA,
    ARP_SCHEMA,
    IPV4_SCHEMA,
    TCP_SCHEMA,
    UDP_SCHEMA,
])


def schema_for(protocol: str | None, registry: SchemaRegistry = DEFAULT_SCHEMAS) -> ProtocolSchema | None:
    """Look up a protocol schema; returns None for unknown keys."""
    return registry.get(protocol)
