"""MessagePack codec (schema-aware binary)."""

from __future__ import annotations

from typing import Any

import msgpack
from pydantic import TypeAdapter
from pydantic_core import to_jsonable_python

from .schema import SchemaCodec


class MsgpackCodec(SchemaCodec):
    """Binary codec: Pydantic schema + MessagePack wire format.

    Models are sent as maps keyed by field name, so decoding into a type with
    different fields fails. bytes travel as MessagePack bin, str as str.
    Values MessagePack has no native type for (enums, datetimes, UUIDs, ...)
    are sent in their JSON-compatible form and restored by validation.

    Example:
        >>> codec = MsgpackCodec()
        >>> codec.loads(codec.dumps([1, 2, 3], list[int]), list[int])
        [1, 2, 3]
    """

    name = "msgpack"

    def _serialize(self, value: Any, adapter: TypeAdapter[Any]) -> bytes:
        obj = adapter.dump_python(value, mode="python", warnings="error")
        return msgpack.packb(obj, default=to_jsonable_python, use_bin_type=True)

    def _deserialize(self, data: bytes | memoryview, adapter: TypeAdapter[Any]) -> Any:
        obj = msgpack.unpackb(data, raw=False)
        return adapter.validate_python(obj)
