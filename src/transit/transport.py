"""Typed UDP transport.

Transport binds one UDP socket and exchanges values of a single payload type
over it. Encoding goes through the codec chosen at construction into a buffer
that is allocated once and reused, and only the bytes actually produced are
sent. Receiving decodes only the bytes of the datagram just read.

Every call is a single blocking attempt: no retries, no background threads.
Failures surface as TransitError subclasses carrying the original cause.
"""

from __future__ import annotations

import logging
import socket as pysocket
from typing import Any, Generic, TypeVar

from .address import AddressLike, SocketAddress, bind_udp, resolve
from .buffer import MAX_DATAGRAM_SIZE, DatagramBuffer
from .codec import Codec, resolve_codec
from .config import TransportConfig, default_codec_name
from .exceptions import IoError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Transport(Generic[T]):
    """Send and receive values of one type over UDP.

    The payload type is fixed for the lifetime of the transport. Schema-aware
    codecs use it to validate incoming datagrams; RawCodec only uses it to
    rebuild the value from bytes.

    Attributes:
        payload_type: Type of every value sent and received
        codec: Codec used for every datagram

    Examples:
        ```python
        from transit import Transport, TransitModel

        class Reading(TransitModel):
            sensor: str
            value: float

        with Transport("127.0.0.1:0", Reading, codec="msgpack") as rx, \\
                Transport("127.0.0.1:0", Reading, codec="msgpack") as tx:
            tx.send_to(Reading(sensor="t1", value=21.5), rx.local_addr())
            reading, sender = rx.recv_from()
        ```

    Sharing one Transport between threads needs external locking: send_to()
    and recv_from() both use the same buffer.
    """

    def __init__(
        self,
        address: AddressLike,
        payload_type: type[T] | Any,
        codec: Codec | str | None = None,
        *,
        buffer_size: int = MAX_DATAGRAM_SIZE,
    ) -> None:
        """Bind a UDP socket and prepare the codec and buffer.

        Args:
            address: Local address, "host:port", (host, port) or SocketAddress.
                Port 0 picks an ephemeral port.
            payload_type: Type of the values this transport carries
            codec: Codec instance or registered name; defaults to TRANSIT_CODEC
            buffer_size: Datagram buffer capacity in bytes (1-65535)

        Raises:
            CodecConfigurationError: If no usable codec is selected
            ValueError: If buffer_size is out of range
            IoError: If the address cannot be resolved or bound
        """
        if codec is None:
            codec = default_codec_name()
        self._codec = resolve_codec(codec)
        self._codec.check(payload_type)
        self._payload_type = payload_type
        self._buffer = DatagramBuffer(buffer_size)
        self._socket = self._bind(address)

        logger.debug(
            "Bound %s transport for %r on %s",
            self._codec.name,
            payload_type,
            self.local_addr(),
        )

    @classmethod
    def from_config(cls, config: TransportConfig, payload_type: type[T] | Any) -> Transport[T]:
        """Build a transport from a TransportConfig."""
        return cls(
            config.address,
            payload_type,
            codec=config.codec,
            buffer_size=config.buffer_size,
        )

    @staticmethod
    def _bind(address: AddressLike) -> pysocket.socket:
        try:
            return bind_udp(address)
        except OSError as err:
            raise IoError(err) from err

    @property
    def payload_type(self) -> type[T] | Any:
        return self._payload_type

    @property
    def codec(self) -> Codec:
        return self._codec

    @property
    def buffer_size(self) -> int:
        return self._buffer.capacity

    @property
    def socket(self) -> pysocket.socket:
        """The underlying socket, e.g. to set a timeout with settimeout()."""
        return self._socket

    @property
    def closed(self) -> bool:
        return self._socket.fileno() == -1

    def send_to(self, value: T, destination: AddressLike) -> None:
        """Encode value and send it as one datagram to destination.

        Args:
            value: Value of the transport's payload type
            destination: "host:port", (host, port) or SocketAddress

        Raises:
            SerializeError: If the value cannot be encoded or does not fit the buffer
            IoError: If destination cannot be resolved or the send fails
        """
        writer = self._buffer.writer()
        self._codec.encode(value, self._payload_type, writer)
        payload = self._buffer.written(writer)

        sockaddr = self._destination(destination)
        try:
            self._socket.sendto(payload, sockaddr)
        except OSError as err:
            raise IoError(err) from err

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Sent %d bytes to %s", writer.count, SocketAddress.from_sockaddr(sockaddr)
            )

    def recv_from(self) -> tuple[T, SocketAddress]:
        """Block until one datagram arrives and decode it.

        Returns:
            Tuple of (decoded value, sender address)

        Raises:
            IoError: If the receive fails, times out, or the datagram exceeds
                the buffer capacity
            DeserializeError: If the datagram does not decode into payload_type
        """
        try:
            payload, sockaddr = self._buffer.recv_into(self._socket)
        except OSError as err:
            raise IoError(err) from err

        sender = SocketAddress.from_sockaddr(sockaddr)
        logger.debug("Received %d bytes from %s", len(payload), sender)

        value = self._codec.decode(payload, self._payload_type)
        return value, sender

    def local_addr(self) -> SocketAddress:
        """Return the address the socket is bound to.

        Raises:
            IoError: If the OS cannot report it (e.g. the transport is closed)
        """
        try:
            return SocketAddress.from_sockaddr(self._socket.getsockname())
        except OSError as err:
            raise IoError(err) from err

    def close(self) -> None:
        """Close the socket. Calling close() more than once is harmless."""
        if not self.closed:
            logger.debug("Closing transport on %s", self.local_addr())
        self._socket.close()

    def _destination(self, destination: AddressLike) -> tuple:
        """Resolve destination to a sockaddr usable with this socket's family."""
        try:
            candidates = resolve(destination, family=self._socket.family)
        except OSError as err:
            raise IoError(err) from err
        if not candidates:
            raise IoError(OSError(f"Destination {destination!r} did not resolve"))
        return candidates[0][4]

    def __enter__(self) -> Transport[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        where = "closed" if self.closed else str(self.local_addr())
        name = getattr(self._payload_type, "__name__", repr(self._payload_type))
        return f"Transport[{name}]({where}, codec={self._codec.name!r})"
