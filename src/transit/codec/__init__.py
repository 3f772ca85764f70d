"""Codec strategies for transit.

This package provides the encode/decode strategies a Transport can be built
with: schema-aware binary (MessagePack), schema-aware text (JSON) and raw byte
conversion.
"""

from __future__ import annotations

from .base import Codec, WritableStream
from .json_codec import JsonCodec
from .msgpack_codec import MsgpackCodec
from .raw import RawCodec, RawConvertible
from .registry import (
    CODEC_REGISTRY,
    available_codecs,
    get_codec,
    register_codec,
    resolve_codec,
    unregister_codec,
)
from .schema import SchemaCodec

register_codec(MsgpackCodec)
register_codec(JsonCodec)
register_codec(RawCodec)

__all__ = [
    "Codec",
    "SchemaCodec",
    "WritableStream",
    "MsgpackCodec",
    "JsonCodec",
    "RawCodec",
    "RawConvertible",
    "CODEC_REGISTRY",
    "register_codec",
    "unregister_codec",
    "get_codec",
    "resolve_codec",
    "available_codecs",
]
