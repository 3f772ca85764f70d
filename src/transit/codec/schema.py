"""Shared machinery for schema-aware codecs.

Schema-aware codecs describe the payload type with a Pydantic TypeAdapter. The
adapter serializes outgoing values (refusing values of the wrong type) and
validates incoming data against the payload's structure, so a datagram that was
encoded from a different type fails with DeserializeError instead of producing a
wrong value.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, get_origin

from pydantic import PydanticSchemaGenerationError, PydanticUserError, TypeAdapter

from ..exceptions import CodecConfigurationError, DeserializeError, SerializeError
from .base import Codec, WritableStream


class SchemaCodec(Codec):
    """Base class for codecs that validate payloads against a Pydantic schema.

    Subclasses implement ``_serialize`` (value -> bytes) and ``_deserialize``
    (bytes -> validated value) in terms of a TypeAdapter.
    """

    schema_aware = True

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def adapter(self, payload_type: Any) -> TypeAdapter[Any]:
        """Return the (cached) TypeAdapter for payload_type.

        Raises:
            CodecConfigurationError: If Pydantic cannot build a schema for the type
        """
        try:
            return self._adapters[payload_type]
        except KeyError:
            pass
        except TypeError:
            # Unhashable annotation, build without caching
            return self._build_adapter(payload_type)

        adapter = self._build_adapter(payload_type)
        self._adapters[payload_type] = adapter
        return adapter

    def _build_adapter(self, payload_type: Any) -> TypeAdapter[Any]:
        try:
            return TypeAdapter(payload_type)
        except (PydanticSchemaGenerationError, PydanticUserError, TypeError) as err:
            raise CodecConfigurationError(
                f"{self.name} codec cannot handle payload type {payload_type!r}: {err}"
            ) from err

    def check(self, payload_type: Any) -> None:
        super().check(payload_type)
        self.adapter(payload_type)

    def _encode(self, value: Any, payload_type: Any, stream: WritableStream) -> None:
        adapter = self.adapter(payload_type)
        self._check_value(value, payload_type, adapter)
        try:
            data = self._serialize(value, adapter)
        except (ValueError, TypeError, OverflowError) as err:
            raise SerializeError(err) from err

        max_bytes = getattr(payload_type, "transit_max_bytes", None)
        if max_bytes is not None and len(data) > max_bytes:
            raise SerializeError(
                OverflowError(
                    f"Encoded {payload_type.__name__} is {len(data)} bytes, "
                    f"exceeds transit_max_bytes={max_bytes}"
                )
            )

        stream.write(data)

    @staticmethod
    def _check_value(value: Any, payload_type: Any, adapter: TypeAdapter[Any]) -> None:
        """Refuse values that are not of payload_type before serializing them.

        Serializers only read the fields the schema names, so a value of another
        model type would otherwise encode as an empty or partial payload.
        """
        if (
            payload_type is not Any
            and get_origin(payload_type) is None
            and isinstance(payload_type, type)
        ):
            if not isinstance(value, payload_type):
                raise SerializeError(
                    TypeError(
                        f"Expected {payload_type.__name__}, got {type(value).__name__}"
                    )
                )
            return

        try:
            adapter.validate_python(value, strict=True)
        except ValueError as err:
            raise SerializeError(err) from err

    def _decode(self, data: bytes | memoryview, payload_type: Any) -> Any:
        adapter = self.adapter(payload_type)
        try:
            return self._deserialize(data, adapter)
        except (ValueError, TypeError) as err:
            # pydantic's ValidationError is a ValueError
            raise DeserializeError(err) from err

    @abstractmethod
    def _serialize(self, value: Any, adapter: TypeAdapter[Any]) -> bytes:
        pass

    @abstractmethod
    def _deserialize(self, data: bytes | memoryview, adapter: TypeAdapter[Any]) -> Any:
        pass
