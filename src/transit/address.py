"""Socket address parsing and resolution."""

from __future__ import annotations

import socket
from typing import NamedTuple, Union


class SocketAddress(NamedTuple):
    """A resolved UDP endpoint (host + port)."""

    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @classmethod
    def from_sockaddr(cls, sockaddr: tuple) -> SocketAddress:
        """Build from the tuple returned by recvfrom/getsockname.

        IPv6 socket addresses carry flowinfo and scope_id, which are dropped.
        """
        return cls(sockaddr[0], sockaddr[1])


AddressLike = Union[str, tuple, SocketAddress]


def parse_address(address: AddressLike) -> tuple[str, int]:
    """Split an address into (host, port).

    Accepts ``"host:port"``, ``"[v6-host]:port"``, ``(host, port)`` tuples and
    SocketAddress instances.

    Raises:
        ValueError: If the address is malformed

    Example:
        >>> parse_address("127.0.0.1:9000")
        ('127.0.0.1', 9000)
        >>> parse_address("[::1]:9000")
        ('::1', 9000)
    """
    if isinstance(address, tuple):
        if len(address) < 2:
            raise ValueError(f"Address tuple needs (host, port), got {address!r}")
        host, port = address[0], address[1]
    elif isinstance(address, str):
        if address.startswith("["):
            host, sep, rest = address[1:].partition("]")
            if not sep or not rest.startswith(":"):
                raise ValueError(f"Invalid IPv6 address {address!r}, expected [host]:port")
            port = rest[1:]
        else:
            host, sep, port = address.rpartition(":")
            if not sep:
                raise ValueError(f"Invalid address {address!r}, expected host:port")
    else:
        raise ValueError(f"Unsupported address type: {type(address).__name__}")

    try:
        port_number = int(port)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Invalid port {port!r} in address {address!r}") from err

    if not 0 <= port_number <= 65535:
        raise ValueError(f"Port must be 0-65535, got {port_number}")

    return str(host), port_number


def resolve(
    address: AddressLike, family: int = socket.AF_UNSPEC, passive: bool = False
) -> list[tuple]:
    """Resolve an address into getaddrinfo candidates for UDP.

    Args:
        address: Address to resolve
        family: Restrict results to this address family
        passive: Resolve for bind(); an empty host means the wildcard address

    Returns:
        List of (family, type, proto, canonname, sockaddr) tuples, in resolver order

    Raises:
        OSError: If parsing or resolution fails (socket.gaierror is an OSError)
    """
    try:
        host, port = parse_address(address)
    except ValueError as err:
        raise OSError(str(err)) from err

    flags = socket.AI_PASSIVE if passive else 0
    return socket.getaddrinfo(
        host or None, port, family, socket.SOCK_DGRAM, socket.IPPROTO_UDP, flags
    )


def bind_udp(address: AddressLike) -> socket.socket:
    """Bind a UDP socket to the first usable candidate for address.

    Candidates whose socket cannot be created (unsupported family, descriptor
    limits) or bound are skipped; the last failure is raised if none works.

    Raises:
        OSError: If the address cannot be resolved or no candidate can be bound
    """
    last_error: OSError | None = None
    for family, socktype, proto, _canonname, sockaddr in resolve(address, passive=True):
        try:
            sock = socket.socket(family, socktype, proto)
        except OSError as err:
            last_error = err
            continue
        try:
            sock.bind(sockaddr)
        except OSError as err:
            sock.close()
            last_error = err
            continue
        return sock

    if last_error is None:
        last_error = OSError(f"Address {address!r} resolved to no usable endpoints")
    raise last_error
