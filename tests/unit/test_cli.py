"""Tests for the datagram inspector CLI."""

from __future__ import annotations

import io
import socket
import subprocess
import sys
from collections.abc import Iterator

import pytest

from transit import __version__
from transit.cli.main import main
from transit.address import bind_udp
from transit.cli.sniffer import format_datagram, inspect_datagrams


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = subprocess.run(
        [sys.executable, "-m", "transit.cli.main", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "print every UDP datagram received" in result.stdout
    assert "--string" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "transit.cli.main", "--version"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert f"transit {__version__}" in result.stdout


def test_cli_bind_failure(capsys: pytest.CaptureFixture[str]) -> None:
    """Test an unusable address exits with a diagnostic."""
    assert main(["not-an-address"]) == 1
    assert "Could not bind socket" in capsys.readouterr().err


def test_cli_invalid_count(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--count", "0", "127.0.0.1:0"]) == 1
    assert "--count must be at least 1" in capsys.readouterr().err


class TestFormatDatagram:
    """Tests for rendering payloads."""

    def test_bytes(self) -> None:
        assert format_datagram(b"\x09\x00\xff") == "[9, 0, 255]"

    def test_empty(self) -> None:
        assert format_datagram(b"") == "[]"

    def test_string(self) -> None:
        assert format_datagram("héllo".encode(), as_string=True) == "héllo"

    def test_invalid_utf8(self) -> None:
        with pytest.raises(UnicodeDecodeError):
            format_datagram(b"\xff", as_string=True)


class TestInspectDatagrams:
    """Tests for the receive-and-print loop."""

    @pytest.fixture
    def bound(self) -> Iterator[socket.socket]:
        sock = bind_udp("127.0.0.1:0")
        sock.settimeout(5.0)
        yield sock
        sock.close()

    def _send(self, sock: socket.socket, *payloads: bytes) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sender:
            for payload in payloads:
                sender.sendto(payload, sock.getsockname())

    def test_prints_byte_lists(self, bound: socket.socket) -> None:
        self._send(bound, b"hi", b"\x09")
        out = io.StringIO()

        assert inspect_datagrams(bound, out, count=2) == 2
        assert out.getvalue().splitlines() == ["[104, 105]", "[9]"]

    def test_prints_strings(self, bound: socket.socket) -> None:
        self._send(bound, b"hello")
        out = io.StringIO()

        inspect_datagrams(bound, out, as_string=True, count=1)
        assert out.getvalue() == "hello\n"

    def test_receive_timeout_raises(self, bound: socket.socket) -> None:
        bound.settimeout(0.05)
        with pytest.raises(OSError):
            inspect_datagrams(bound, io.StringIO(), count=1)

    def test_cli_address_in_use(
        self, bound: socket.socket, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test the CLI reports an address another socket holds."""
        host, port = bound.getsockname()
        assert main([f"{host}:{port}"]) == 1
        assert "Could not bind socket" in capsys.readouterr().err
