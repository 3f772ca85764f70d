"""Encoded size calculation utilities.

This module answers "how big will this datagram be?" without opening a socket,
so callers can check a value against a buffer or path MTU before sending it.
"""

from __future__ import annotations

from typing import Any

from ..buffer import MAX_DATAGRAM_SIZE
from ..codec import Codec, resolve_codec


def encoded_size(value: Any, codec: Codec | str, payload_type: Any = None) -> int:
    """Calculate the encoded size of a value in bytes.

    The size depends on the value, not just its type: strings, bytes and lists
    encode to different lengths.

    Args:
        value: Value to encode
        codec: Codec instance or registered codec name
        payload_type: Declared payload type (defaults to type(value))

    Returns:
        Number of bytes one datagram carrying value would hold

    Raises:
        CodecConfigurationError: If the codec is unknown or cannot carry the type
        SerializeError: If the value cannot be encoded

    Example:
        >>> encoded_size("hello", "raw")
        5
        >>> encoded_size("hello", "json")
        7
    """
    codec = resolve_codec(codec)
    if payload_type is None:
        payload_type = type(value)
    codec.check(payload_type)
    return len(codec.dumps(value, payload_type))


def fits_datagram(
    value: Any,
    codec: Codec | str,
    payload_type: Any = None,
    capacity: int = MAX_DATAGRAM_SIZE,
) -> bool:
    """Check whether a value encodes to at most capacity bytes.

    Args:
        value: Value to encode
        codec: Codec instance or registered codec name
        payload_type: Declared payload type (defaults to type(value))
        capacity: Buffer capacity to compare against (default 65535)

    Example:
        >>> fits_datagram(b"x" * 2000, "raw", capacity=1024)
        False
    """
    return encoded_size(value, codec, payload_type) <= capacity
