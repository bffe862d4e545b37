"""
Dynamic address placeholders.

Field values and schema placeholders may hold the sentinels
``__LOCAL_MAC__`` / ``__LOCAL_IP__``. They stand for the address of the
active interface and are resolved against a substitution map at render time.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union


class AddressKind(Enum):
    """Kind of address a dynamic reference points to."""
    MAC = "__LOCAL_MAC__"
    IP = "__LOCAL_IP__"


LOCAL_MAC = AddressKind.MAC.value
LOCAL_IP = AddressKind.IP.value


@dataclass(frozen=True)
class Literal:
    """A plain value typed in by the operator."""
    value: str


@dataclass(frozen=True)
class DynamicRef:
    """A reference to an address supplied later by the caller."""
    kind: AddressKind

    @property
    def sentinel(self) -> str:
        return self.kind.value


FieldValue = Union[Literal, DynamicRef]


def classify(value: object) -> FieldValue:
    """Wrap a raw field value into ``Literal`` or ``DynamicRef``."""
    if isinstance(value, (Literal, DynamicRef)):
        return value
    if isinstance(value, AddressKind):
        return DynamicRef(value)
    text = "" if value is None else str(value)
    for kind in AddressKind:
        if text == kind.value:
            return DynamicRef(kind)
    return Literal(text)


def normalize_substitutions(
    substitutions: Mapping[AddressKind | str, str] | None,
    strict: bool = False,
) -> dict[AddressKind, str]:
    """
    Accept substitution maps keyed by ``AddressKind`` or by sentinel string.

    Empty values are dropped. Unknown keys raise ``ValueError`` when
    ``strict`` is set, otherwise they are skipped with a warning.
    """
    if not substitutions:
        return {}
    result: dict[AddressKind, str] = {}
    for key, value in substitutions.items():
        try:
            kind = key if isinstance(key, AddressKind) else AddressKind(key)
        except ValueError:
            message = (f"Unknown substitution key {key!r}, expected one of "
                       f"{[k.value for k in AddressKind]}")
            if strict:
                raise ValueError(message) from None
            warnings.warn(f"{message}; ignoring it", stacklevel=2)
            continue
        if value is not None and value != "":
            result[kind] = str(value)
    return result


def resolve(
    value: FieldValue,
    substitutions: Mapping[AddressKind, str]
) -> tuple[str, bool]:
    """
    Resolve a classified value to text.

    Returns:
        (text, resolved) where ``resolved`` is False for a dynamic reference
        with no substitution; its text is then the literal sentinel.
    """
    if isinstance(value, Literal):
        return value.value, True
    replacement = substitutions.get(value.kind)
    if replacement is None:
        return value.sentinel, False
    return replacement, True
