"""Transport configuration.

TransportConfig collects the settings needed to build a Transport, so they can
come from code, the environment, or a command line without the Transport
knowing where they came from.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .buffer import MAX_DATAGRAM_SIZE

ENV_ADDRESS = "TRANSIT_ADDRESS"
ENV_CODEC = "TRANSIT_CODEC"
ENV_BUFFER_SIZE = "TRANSIT_BUFFER_SIZE"


@dataclass
class TransportConfig:
    """Configuration for a Transport.

    Attributes:
        address: Local address to bind, as "host:port" (default "127.0.0.1:0",
            an ephemeral loopback port)
        codec: Codec name, e.g. "msgpack", "json" or "raw" (default None: the
            codec must then be given when the Transport is built)
        buffer_size: Capacity of the reusable datagram buffer in bytes
            (default 65535, the UDP maximum). A smaller value is a hard limit:
            larger datagrams fail instead of being truncated.

    Examples:
        ```python
        from transit import Transport, TransportConfig

        config = TransportConfig(address="0.0.0.0:9000", codec="json")
        transport = Transport.from_config(config, payload_type=str)

        # Or from TRANSIT_ADDRESS / TRANSIT_CODEC / TRANSIT_BUFFER_SIZE
        transport = Transport.from_config(TransportConfig.from_env(), payload_type=str)
        ```
    """

    address: str = "127.0.0.1:0"
    codec: str | None = None
    buffer_size: int = MAX_DATAGRAM_SIZE

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.address:
            raise ValueError("address must not be empty")

        if not 0 < self.buffer_size <= MAX_DATAGRAM_SIZE:
            raise ValueError(
                f"buffer_size must be 1-{MAX_DATAGRAM_SIZE}, got {self.buffer_size}"
            )

        if self.codec is not None:
            self.codec = self.codec.strip().lower() or None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TransportConfig:
        """Build a config from TRANSIT_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        kwargs: dict[str, object] = {}
        if environ.get(ENV_ADDRESS):
            kwargs["address"] = environ[ENV_ADDRESS]
        if environ.get(ENV_CODEC):
            kwargs["codec"] = environ[ENV_CODEC]
        if environ.get(ENV_BUFFER_SIZE):
            try:
                kwargs["buffer_size"] = int(environ[ENV_BUFFER_SIZE])
            except ValueError as err:
                raise ValueError(
                    f"{ENV_BUFFER_SIZE} must be an integer, got {environ[ENV_BUFFER_SIZE]!r}"
                ) from err

        return cls(**kwargs)  # type: ignore[arg-type]


def default_codec_name() -> str | None:
    """Codec name from TRANSIT_CODEC, or None if unset."""
    name = os.environ.get(ENV_CODEC, "").strip().lower()
    return name or None
