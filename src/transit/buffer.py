"""Reusable datagram buffer.

Each Transport owns one DatagramBuffer, allocated once and reused for every
send and receive. The send path writes through a BufferWriter that tracks the
exact number of bytes produced, so only those bytes go on the wire. The receive
path hands the decoder only the byte range the socket reported, so residue from
an earlier, longer datagram is never visible.
"""

from __future__ import annotations

import errno
import socket

from .exceptions import IoError, SerializeError

# Largest payload representable in a UDP length field (IPv4/IPv6, no jumbograms)
MAX_DATAGRAM_SIZE = 65535


class BufferWriter:
    """Writable stream over a DatagramBuffer that counts bytes written.

    Codecs receive this object as their output stream. Writing past the buffer
    capacity raises SerializeError instead of truncating.
    """

    def __init__(self, buffer: DatagramBuffer) -> None:
        self._view = buffer.view
        self._capacity = buffer.capacity
        self.count = 0

    def write(self, chunk: bytes | bytearray | memoryview) -> int:
        """Append chunk to the buffer.

        Args:
            chunk: Bytes-like object to append

        Returns:
            Number of bytes written (always len(chunk))

        Raises:
            SerializeError: If the chunk does not fit in the remaining capacity
        """
        size = len(chunk)
        end = self.count + size
        if end > self._capacity:
            raise SerializeError(
                OverflowError(
                    f"Encoded payload needs at least {end} bytes, "
                    f"buffer capacity is {self._capacity} bytes"
                )
            )
        self._view[self.count:end] = chunk
        self.count = end
        return size

    def writable(self) -> bool:
        return True

    def flush(self) -> None:
        pass


class DatagramBuffer:
    """A single contiguous byte region reused across datagrams.

    The backing bytearray holds one sentinel byte beyond the declared capacity.
    A receive that fills the sentinel is a datagram larger than the capacity
    and is reported as an error rather than silently truncated.

    Attributes:
        capacity: Largest datagram, in bytes, this buffer accepts
    """

    def __init__(self, capacity: int = MAX_DATAGRAM_SIZE) -> None:
        if not 0 < capacity <= MAX_DATAGRAM_SIZE:
            raise ValueError(f"capacity must be 1-{MAX_DATAGRAM_SIZE}, got {capacity}")

        self.capacity = capacity
        self._data = bytearray(capacity + 1)
        self.view = memoryview(self._data)

    def __len__(self) -> int:
        return self.capacity

    def writer(self) -> BufferWriter:
        """Start a new encode at the beginning of the buffer."""
        return BufferWriter(self)

    def written(self, writer: BufferWriter) -> memoryview:
        """Return the exact byte range produced by writer."""
        return self.view[: writer.count]

    def recv_into(self, sock: socket.socket) -> tuple[memoryview, tuple]:
        """Receive one datagram from sock into the buffer.

        Args:
            sock: Bound UDP socket

        Returns:
            Tuple of (view of the received bytes, raw socket address)

        Raises:
            OSError: If the socket read fails
            IoError: If the datagram is larger than the buffer capacity
        """
        nbytes, address = sock.recvfrom_into(self.view)
        if nbytes > self.capacity:
            raise IoError(
                OSError(
                    errno.EMSGSIZE,
                    f"Datagram from {address[0]}:{address[1]} exceeds "
                    f"buffer capacity of {self.capacity} bytes",
                )
            )
        return self.view[:nbytes], address
