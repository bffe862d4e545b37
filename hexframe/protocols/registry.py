"""
Field decoder registry with decorator support.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from hexframe.protocols.base import Layer

if TYPE_CHECKING:
    from hexframe.protocols.base import BaseFieldDecoder


class DecoderRegistry:
    """
    Registry of field decoders, keyed by protocol name.

    Supports registration via decorator and querying decoders by name or
    layer.
    """

    def __init__(self):
        self._decoders: dict[str, type[BaseFieldDecoder]] = {}
        self._by_layer: dict[int, list[str]] = {}

    def register(self, decoder_cls: type[BaseFieldDecoder]) -> type[BaseFieldDecoder]:
        """Register a decoder class."""
        if not decoder_cls.name:
            raise ValueError(f"Decoder {decoder_cls.__name__} must have a name")

        if decoder_cls.name in self._decoders:
            raise ValueError(f"Decoder {decoder_cls.decoder_id()} already registered")

        self._decoders[decoder_cls.name] = decoder_cls
        self._by_layer.setdefault(decoder_cls.layer.value, []).append(decoder_cls.name)
        return decoder_cls

    def get(self, name: str | None) -> type[BaseFieldDecoder] | None:
        """Get decoder class by protocol name."""
        if name is None:
            return None
        return self._decoders.get(name)

    def get_by_layer(self, layer: Layer) -> list[type[BaseFieldDecoder]]:
        """Get all decoders whose outermost header is on ``layer``."""
        names = self._by_layer.get(layer.value, [])
        return [self._decoders[n] for n in names if n in self._decoders]

    def list_decoders(self) -> list[str]:
        """List all registered protocol names."""
        return list(self._decoders.keys())

    def create_instance(self, name: str | None) -> BaseFieldDecoder | None:
        """Create an instance of a registered decoder."""
        decoder_cls = self.get(name)
        if decoder_cls:
            return decoder_cls()
        return None

    def unregister(self, name: str) -> bool:
        """Unregister a decoder by protocol name."""
        decoder_cls = self._decoders.pop(name, None)
        if decoder_cls is None:
            return False
        layer_names = self._by_layer.get(decoder_cls.layer.value, [])
        self._by_layer[decoder_cls.layer.value] = [n for n in layer_names if n != name]
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._decoders


# Global registry instance
_global_registry = DecoderRegistry()


def get_global_registry() -> DecoderRegistry:
    """Get the global decoder registry."""
    return _global_registry


def register_decoder(
    name: str,
    layer: Layer,
    min_length: int = 0,
    registry: DecoderRegistry | None = None
) -> Callable[[type[BaseFieldDecoder]], type[BaseFieldDecoder]]:
    """
    Decorator to register a field decoder.

    Args:
        name: Protocol key the decoder handles
        layer: Layer of the outermost header the decoder adds
        min_length: Hex digits required before any field is extracted
        registry: Registry to use (defaults to global)

    Example:
        @register_decoder('udp', Layer.TRANSPORT, min_length=68)
        class UDPDecoder(IPv4Decoder):
            pass
    """
    if registry is None:
        registry = _global_registry

    def decorator(cls: type[BaseFieldDecoder]) -> type[BaseFieldDecoder]:
        cls.name = name
        cls.layer = layer
        cls.min_length = min_length
        return registry.register(cls)

    return decorator
