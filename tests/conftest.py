"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from transit import Transport

RECV_TIMEOUT = 5.0


@pytest.fixture
def make_transport() -> Iterator[Callable[..., Transport[Any]]]:
    """Factory for loopback transports, closed after the test.

    Receives time out after RECV_TIMEOUT seconds so a lost datagram fails the
    test instead of hanging it.
    """
    created: list[Transport[Any]] = []

    def factory(payload_type: Any, codec: Any = "msgpack", **kwargs: Any) -> Transport[Any]:
        transport = Transport("127.0.0.1:0", payload_type, codec=codec, **kwargs)
        transport.socket.settimeout(RECV_TIMEOUT)
        created.append(transport)
        return transport

    yield factory

    for transport in created:
        transport.close()


@pytest.fixture
def sample_payload() -> bytes:
    """Sample binary payload for testing."""
    return b"Hello, datagram world!"


@pytest.fixture(autouse=True)
def _no_codec_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a TRANSIT_CODEC set in the shell from leaking into tests."""
    monkeypatch.delenv("TRANSIT_CODEC", raising=False)
