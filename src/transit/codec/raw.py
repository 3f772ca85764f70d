"""Raw byte conversion codec (no schema).

The value supplies its own bytes and the payload type rebuilds itself from
them. Nothing about the type travels on the wire, so a datagram sent as one
type can decode successfully as another: a transport using RawCodec gets only
the validation the payload type performs itself (UTF-8 well-formedness for
str, whatever ``from_bytes`` checks for custom types).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..exceptions import CodecConfigurationError, DeserializeError, SerializeError
from .base import Codec, WritableStream


@runtime_checkable
class RawConvertible(Protocol):
    """Types that convert themselves to and from raw bytes.

    Example:
        >>> import struct
        >>> class Ping:
        ...     def __init__(self, seq: int) -> None:
        ...         self.seq = seq
        ...     def __bytes__(self) -> bytes:
        ...         return struct.pack(">I", self.seq)
        ...     @classmethod
        ...     def from_bytes(cls, data: bytes) -> "Ping":
        ...         (seq,) = struct.unpack(">I", data)
        ...         return cls(seq)
    """

    def __bytes__(self) -> bytes: ...

    @classmethod
    def from_bytes(cls, data: bytes) -> Any: ...


_BINARY_TYPES = (bytes, bytearray)


class RawCodec(Codec):
    """Zero-schema codec for str, bytes, bytearray and RawConvertible types.

    str is sent as UTF-8, bytes and bytearray as themselves. Decoding str
    rejects malformed UTF-8 with DeserializeError.
    """

    name = "raw"
    schema_aware = False

    def check(self, payload_type: Any) -> None:
        super().check(payload_type)
        try:
            if issubclass(payload_type, (str, *_BINARY_TYPES, RawConvertible)):
                return
        except TypeError as err:
            # Generic aliases such as list[int] are not classes
            raise CodecConfigurationError(
                f"raw codec needs a class as payload type, got {payload_type!r}"
            ) from err
        raise CodecConfigurationError(
            f"raw codec cannot carry {payload_type.__name__}: expected str, bytes, "
            f"bytearray, or a type with __bytes__ and from_bytes()"
        )

    def _encode(self, value: Any, payload_type: Any, stream: WritableStream) -> None:
        if isinstance(payload_type, type) and not isinstance(value, payload_type):
            raise SerializeError(
                TypeError(
                    f"Expected {payload_type.__name__}, got {type(value).__name__}"
                )
            )

        if isinstance(value, str):
            try:
                stream.write(value.encode("utf-8"))
            except UnicodeEncodeError as err:
                raise SerializeError(err) from err
        elif isinstance(value, _BINARY_TYPES):
            stream.write(value)
        else:
            try:
                data = bytes(value)
            except (TypeError, ValueError) as err:
                raise SerializeError(err) from err
            stream.write(data)

    def _decode(self, data: bytes | memoryview, payload_type: Any) -> Any:
        if issubclass(payload_type, str):
            try:
                text = str(data, "utf-8")
            except UnicodeDecodeError as err:
                raise DeserializeError(err) from err
            if payload_type is str:
                return text
            try:
                return payload_type(text)
            except (TypeError, ValueError) as err:
                raise DeserializeError(err) from err

        if issubclass(payload_type, _BINARY_TYPES):
            return payload_type(data)

        try:
            return payload_type.from_bytes(bytes(data))
        except Exception as err:
            # from_bytes is user code and may raise anything
            raise DeserializeError(err) from err
