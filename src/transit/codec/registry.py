"""Codec registry.

Codecs are looked up by name so a transport can be configured from a string
(command line, environment, config file) instead of importing a codec class.
"""

from __future__ import annotations

from ..exceptions import CodecConfigurationError
from .base import Codec

# Global registry: codec name -> codec class
CODEC_REGISTRY: dict[str, type[Codec]] = {}


def register_codec(codec_class: type[Codec]) -> type[Codec]:
    """Register a codec class under its ``name``.

    Can be used as a class decorator.

    Args:
        codec_class: Codec subclass with a ``name`` class attribute

    Returns:
        codec_class, unchanged

    Raises:
        ValueError: If the class has no name or the name is already taken

    Example:
        >>> @register_codec
        ... class UpperCodec(RawCodec):
        ...     name = "upper"
    """
    name = getattr(codec_class, "name", None)
    if not isinstance(name, str) or not name:
        raise ValueError(f"{codec_class.__name__} has no codec name")

    existing = CODEC_REGISTRY.get(name)
    if existing is not None and existing is not codec_class:
        raise ValueError(
            f"Codec name '{name}' already registered to {existing.__name__}"
        )

    CODEC_REGISTRY[name] = codec_class
    return codec_class


def unregister_codec(name: str) -> None:
    """Remove a codec from the registry (mostly for tests)."""
    CODEC_REGISTRY.pop(name, None)


def available_codecs() -> list[str]:
    """Return the names of all registered codecs, sorted."""
    return sorted(CODEC_REGISTRY)


def get_codec(name: str) -> Codec:
    """Instantiate the codec registered under name.

    Raises:
        CodecConfigurationError: If no codec has that name
    """
    try:
        codec_class = CODEC_REGISTRY[name.lower()]
    except KeyError:
        raise CodecConfigurationError(
            f"Unknown codec '{name}', available: {', '.join(available_codecs())}"
        ) from None
    return codec_class()


def resolve_codec(codec: Codec | str | None) -> Codec:
    """Turn a codec instance or name into a codec instance.

    Raises:
        CodecConfigurationError: If codec is None or not a known codec
    """
    if codec is None:
        raise CodecConfigurationError(
            "No codec selected. Pass codec= (one of "
            f"{', '.join(available_codecs())}) or set TRANSIT_CODEC."
        )
    if isinstance(codec, Codec):
        return codec
    if isinstance(codec, str):
        return get_codec(codec)
    raise CodecConfigurationError(f"Expected a Codec or codec name, got {codec!r}")
