"""Tests for address parsing and resolution."""

from __future__ import annotations

import errno
import socket
from typing import Any

import pytest

from transit import SocketAddress
from transit.address import bind_udp, parse_address, resolve


class TestParseAddress:
    """Tests for parse_address()."""

    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            ("127.0.0.1:9000", ("127.0.0.1", 9000)),
            ("localhost:0", ("localhost", 0)),
            ("[::1]:9000", ("::1", 9000)),
            (":9000", ("", 9000)),
            (("127.0.0.1", 9000), ("127.0.0.1", 9000)),
            (("::1", 9000, 0, 0), ("::1", 9000)),
            (SocketAddress("10.0.0.1", 53), ("10.0.0.1", 53)),
        ],
    )
    def test_valid(self, address: object, expected: tuple[str, int]) -> None:
        """Test accepted address forms."""
        assert parse_address(address) == expected  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "address",
        ["127.0.0.1", "127.0.0.1:http", "127.0.0.1:70000", "[::1]9000", "[::1", ("host",), 9000],
    )
    def test_invalid(self, address: object) -> None:
        """Test malformed addresses raise ValueError."""
        with pytest.raises(ValueError):
            parse_address(address)  # type: ignore[arg-type]


class TestResolve:
    """Tests for resolve()."""

    def test_numeric_ipv4(self) -> None:
        """Test a numeric IPv4 address resolves to itself."""
        candidates = resolve("127.0.0.1:9000")
        assert candidates
        family, socktype, _proto, _name, sockaddr = candidates[0]
        assert family == socket.AF_INET
        assert socktype == socket.SOCK_DGRAM
        assert sockaddr == ("127.0.0.1", 9000)

    def test_family_filter(self) -> None:
        """Test results are restricted to the requested family."""
        candidates = resolve("127.0.0.1:9000", family=socket.AF_INET)
        assert all(c[0] == socket.AF_INET for c in candidates)

    def test_passive_wildcard(self) -> None:
        """Test an empty host resolves to a wildcard bind address."""
        candidates = resolve(":0", family=socket.AF_INET, passive=True)
        assert candidates[0][4] == ("0.0.0.0", 0)

    def test_malformed_raises_os_error(self) -> None:
        """Test parse errors surface as OSError."""
        with pytest.raises(OSError, match="expected host:port"):
            resolve("no-port-here")


class TestSocketAddress:
    """Tests for SocketAddress."""

    def test_str_ipv4(self) -> None:
        assert str(SocketAddress("127.0.0.1", 9000)) == "127.0.0.1:9000"

    def test_str_ipv6(self) -> None:
        assert str(SocketAddress("::1", 9000)) == "[::1]:9000"

    def test_from_ipv6_sockaddr(self) -> None:
        """Test flowinfo and scope_id are dropped."""
        assert SocketAddress.from_sockaddr(("::1", 9000, 0, 0)) == SocketAddress("::1", 9000)

    def test_is_tuple(self) -> None:
        """Test it can be passed straight to socket calls."""
        host, port = SocketAddress("127.0.0.1", 1)
        assert (host, port) == ("127.0.0.1", 1)


class TestBindUdp:
    """Tests for bind_udp()."""

    def test_binds_ephemeral_port(self) -> None:
        sock = bind_udp("127.0.0.1:0")
        try:
            host, port = sock.getsockname()
            assert host == "127.0.0.1"
            assert port != 0
        finally:
            sock.close()

    def test_address_in_use(self) -> None:
        first = bind_udp("127.0.0.1:0")
        try:
            with pytest.raises(OSError) as exc_info:
                bind_udp(first.getsockname())
            assert exc_info.value.errno == errno.EADDRINUSE
        finally:
            first.close()

    def test_socket_creation_failure_raised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a failure to create the socket is raised as OSError."""

        def no_descriptors(*args: Any) -> socket.socket:
            raise OSError(errno.EMFILE, "Too many open files")

        monkeypatch.setattr(socket, "socket", no_descriptors)

        with pytest.raises(OSError) as exc_info:
            bind_udp("127.0.0.1:0")
        assert exc_info.value.errno == errno.EMFILE

    def test_falls_through_to_next_candidate(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a candidate whose socket cannot be created is skipped."""
        candidate = resolve("127.0.0.1:0", passive=True)[0]
        real_socket = socket.socket
        calls: list[int] = []

        def flaky_socket(*args: Any) -> socket.socket:
            calls.append(1)
            if len(calls) == 1:
                raise OSError(errno.EAFNOSUPPORT, "Address family not supported")
            return real_socket(*args)

        monkeypatch.setattr("transit.address.resolve", lambda *a, **kw: [candidate, candidate])
        monkeypatch.setattr(socket, "socket", flaky_socket)

        sock = bind_udp("127.0.0.1:0")
        try:
            assert len(calls) == 2
            assert sock.getsockname()[0] == "127.0.0.1"
        finally:
            sock.close()
