"""Raw datagram inspector.

Binds a plain UDP socket and prints every datagram it receives. It works below
the Transport layer on purpose: no codec is involved, so it shows exactly what
is on the wire whatever codec the sender used.
"""

from __future__ import annotations

import logging
import socket
from typing import TextIO

from ..address import SocketAddress

logger = logging.getLogger(__name__)

# One byte more than the largest UDP payload, so nothing is ever truncated
RECV_BUFFER_SIZE = 65536


def format_datagram(payload: bytes, as_string: bool = False) -> str:
    """Render one datagram for display.

    Args:
        payload: Datagram bytes
        as_string: Decode as UTF-8 text instead of listing byte values

    Returns:
        Printable representation

    Raises:
        UnicodeDecodeError: If as_string is set and payload is not valid UTF-8

    Example:
        >>> format_datagram(b"hi")
        '[104, 105]'
        >>> format_datagram(b"hi", as_string=True)
        'hi'
    """
    if as_string:
        return payload.decode("utf-8")
    return "[" + ", ".join(str(b) for b in payload) + "]"


def inspect_datagrams(
    sock: socket.socket,
    out: TextIO,
    as_string: bool = False,
    count: int | None = None,
) -> int:
    """Print datagrams from sock to out until count have been shown.

    Args:
        sock: Bound UDP socket
        out: Stream to print to
        as_string: Print payloads as UTF-8 text
        count: Stop after this many datagrams (None: run forever)

    Returns:
        Number of datagrams printed

    Raises:
        OSError: If a receive fails
        UnicodeDecodeError: If as_string is set and a payload is not UTF-8
    """
    buffer = bytearray(RECV_BUFFER_SIZE)
    view = memoryview(buffer)
    seen = 0
    while count is None or seen < count:
        nbytes, sockaddr = sock.recvfrom_into(view)
        logger.debug("%d bytes from %s", nbytes, SocketAddress.from_sockaddr(sockaddr))
        print(format_datagram(bytes(view[:nbytes]), as_string), file=out, flush=True)
        seen += 1
    return seen
