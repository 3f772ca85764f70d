"""JSON codec (schema-aware text)."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter
from pydantic_core import to_json

from .schema import SchemaCodec


class JsonCodec(SchemaCodec):
    """Text codec: Pydantic schema + JSON wire format.

    Encoding and validation both run in pydantic-core. bytes values are carried
    as UTF-8 text, so bytes that are not valid UTF-8 fail with SerializeError;
    use MsgpackCodec or RawCodec for arbitrary binary data.

    Non-finite floats are written as the ``Infinity``, ``-Infinity`` and ``NaN``
    constants, which pydantic's JSON parser reads back, instead of ``null``.
    """

    name = "json"

    def _serialize(self, value: Any, adapter: TypeAdapter[Any]) -> bytes:
        obj = adapter.dump_python(value, mode="python", warnings="error")
        return to_json(obj, inf_nan_mode="constants")

    def _deserialize(self, data: bytes | memoryview, adapter: TypeAdapter[Any]) -> Any:
        return adapter.validate_json(bytes(data))
