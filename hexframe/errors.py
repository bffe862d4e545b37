"""
Exception and warning types raised by the frame codec.

Decoding and detection never raise. Encoding raises only in strict
(transmission) mode; preview encoding renders bad values as ``??``.
"""

from __future__ import annotations


class HexFrameError(Exception):
    """Base class for all hexframe errors."""


class UnknownProtocolError(HexFrameError, KeyError):
    """Raised when a protocol key has no schema."""

    def __init__(self, protocol: str):
        self.protocol = protocol
        super().__init__(f"Unknown protocol: {protocol!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnresolvableField(HexFrameError, ValueError):
    """A field value matches no rule of its semantic type."""

    def __init__(self, key: str, value: object, reason: str = ""):
        self.key = key
        self.value = value
        message = f"Cannot encode field {key!r} with value {value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnresolvedPlaceholder(UnresolvableField):
    """A dynamic address reference had no substitution."""


class UnsupportedPayloadEncoding(UnresolvableField):
    """Non-hex payload supplied to a protocol that only carries hex payloads."""


class UnresolvedPlaceholderWarning(UserWarning):
    """Preview encoding fell back to the literal sentinel text."""
