"""transit: Typed UDP Datagram Transport

Send and receive typed values over UDP without handling buffers or byte
encoding yourself. A Transport binds one UDP socket, owns one reusable
datagram buffer, and encodes every value with the codec it was built with.

Key Features:
- One value per datagram, no extra framing
- Pluggable codecs: MessagePack and JSON (schema-aware, Pydantic-validated)
  or raw bytes/UTF-8 text
- Several codecs side by side in one process
- One error hierarchy for socket and (de)serialization failures

Quick Start:
    >>> from transit import Transport, TransitModel
    >>>
    >>> class Test(TransitModel):
    ...     ten: int
    >>>
    >>> rx = Transport("127.0.0.1:0", Test, codec="msgpack")
    >>> tx = Transport("127.0.0.1:0", Test, codec="msgpack")
    >>> tx.send_to(Test(ten=10), rx.local_addr())
    >>> value, sender = rx.recv_from()
    >>> value
    Test(ten=10)

UDP delivery semantics are unchanged: datagrams may be lost, duplicated or
reordered, and nothing is authenticated or encrypted.
"""

from __future__ import annotations

__version__ = "0.3.0"

from .address import SocketAddress
from .buffer import MAX_DATAGRAM_SIZE, DatagramBuffer
from .codec import (
    Codec,
    JsonCodec,
    MsgpackCodec,
    RawCodec,
    RawConvertible,
    available_codecs,
    get_codec,
    register_codec,
)
from .config import TransportConfig
from .exceptions import (
    CodecConfigurationError,
    DeserializeError,
    GenericError,
    IoError,
    SerializeError,
    TransitError,
)
from .models import TransitModel
from .transport import Transport
from .utils import encoded_size, fits_datagram

__all__ = [
    # Core API
    "Transport",
    "TransportConfig",
    "SocketAddress",
    "TransitModel",
    # Codecs
    "Codec",
    "MsgpackCodec",
    "JsonCodec",
    "RawCodec",
    "RawConvertible",
    "register_codec",
    "get_codec",
    "available_codecs",
    # Buffer
    "DatagramBuffer",
    "MAX_DATAGRAM_SIZE",
    # Exceptions
    "TransitError",
    "IoError",
    "SerializeError",
    "DeserializeError",
    "GenericError",
    "CodecConfigurationError",
    # Sizing
    "encoded_size",
    "fits_datagram",
    # Version
    "__version__",
]
