"""Codec strategy interface.

A codec converts between an in-memory value of a payload type and the bytes of
one datagram. Transports hold exactly one codec, chosen at construction, and
never look at encoded bytes except through it.

Subclasses implement ``_encode`` and ``_decode`` and raise SerializeError or
DeserializeError for failures they understand. Anything else that escapes is
reported as GenericError, so callers only ever see TransitError subclasses.
"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Protocol, TypeVar

from ..exceptions import CodecConfigurationError, GenericError, TransitError

T = TypeVar("T")


class WritableStream(Protocol):
    """Minimal output stream a codec writes encoded bytes to."""

    def write(self, chunk: bytes | bytearray | memoryview, /) -> int: ...


class Codec(ABC):
    """Abstract encode/decode strategy.

    Attributes:
        name: Registry name of the codec (e.g. "msgpack")
        schema_aware: True if decoding checks the payload's structure, so a
            datagram encoded from a different type is rejected
    """

    name: ClassVar[str]
    schema_aware: ClassVar[bool] = False

    def check(self, payload_type: Any) -> None:
        """Verify this codec can carry payload_type.

        Called once when a Transport is built.

        Raises:
            CodecConfigurationError: If payload_type is not supported
        """
        if payload_type is None:
            raise CodecConfigurationError(f"{self.name} codec needs a payload type")

    def encode(self, value: T, payload_type: type[T] | Any, stream: WritableStream) -> None:
        """Encode value and write the result to stream.

        Args:
            value: Value to encode
            payload_type: Declared payload type of the transport
            stream: Destination for the encoded bytes

        Raises:
            SerializeError: If the value cannot be encoded
            GenericError: For any other codec failure
        """
        try:
            self._encode(value, payload_type, stream)
        except TransitError:
            raise
        except Exception as err:
            raise GenericError(err) from err

    def decode(self, data: bytes | memoryview, payload_type: type[T] | Any) -> T:
        """Decode one datagram's bytes into payload_type.

        Args:
            data: Exactly the bytes of one datagram
            payload_type: Type to decode into

        Returns:
            Decoded value

        Raises:
            DeserializeError: If the bytes do not decode into payload_type
            GenericError: For any other codec failure
        """
        try:
            return self._decode(data, payload_type)
        except TransitError:
            raise
        except Exception as err:
            raise GenericError(err) from err

    def dumps(self, value: Any, payload_type: Any = None) -> bytes:
        """Encode value to a bytes object, without a transport.

        Args:
            value: Value to encode
            payload_type: Declared type, defaults to type(value)
        """
        if payload_type is None:
            payload_type = type(value)
        stream = io.BytesIO()
        self.encode(value, payload_type, stream)
        return stream.getvalue()

    def loads(self, data: bytes | memoryview, payload_type: type[T] | Any) -> T:
        """Decode bytes produced by dumps() or received from the wire."""
        return self.decode(data, payload_type)

    @abstractmethod
    def _encode(self, value: Any, payload_type: Any, stream: WritableStream) -> None:
        pass

    @abstractmethod
    def _decode(self, data: bytes | memoryview, payload_type: Any) -> Any:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
