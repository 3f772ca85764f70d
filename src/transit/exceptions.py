"""Exception hierarchy for transit.

Every per-call failure of a Transport is reported as a TransitError. The set of
subclasses is closed: IoError, SerializeError, DeserializeError and GenericError.
Each one wraps the exception that caused it, so ``str()`` and the traceback chain
show the original cause instead of a generic message.

CodecConfigurationError is deliberately outside this hierarchy. It signals a
broken setup (no codec selected, unsupported payload type) and is raised once,
when the Transport is built, never from send_to() or recv_from().
"""

from __future__ import annotations

from typing import ClassVar


class TransitError(Exception):
    """Base exception for all per-call transit errors.

    Attributes:
        cause: The underlying exception (socket error, codec error, ...)
    """

    kind: ClassVar[str] = "TransitError"

    def __init__(self, cause: BaseException | str) -> None:
        if isinstance(cause, str):
            cause = Exception(cause)
        super().__init__(cause)
        self.cause = cause
        self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.kind}: {self.cause}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cause!r})"


class IoError(TransitError):
    """Raised when the socket layer fails.

    Examples:
        - Address already in use, invalid, or permission denied on bind
        - Destination host cannot be resolved
        - Network unreachable on send
        - Receive timed out (socket timeout configured by the caller)
        - Incoming datagram larger than the transport buffer
    """

    kind = "IoError"

    @property
    def errno(self) -> int | None:
        """The OS error number of the wrapped OSError, if any."""
        return getattr(self.cause, "errno", None)


class SerializeError(TransitError):
    """Raised when the active codec cannot encode an outgoing value.

    Examples:
        - Value does not match the transport's payload type
        - Encoded form exceeds the buffer capacity or transit_max_bytes
        - Value contains data the wire format cannot represent
    """

    kind = "SerializeError"


class DeserializeError(TransitError):
    """Raised when incoming bytes cannot be decoded into the payload type.

    Examples:
        - Datagram was encoded from a structurally different type
        - Malformed or truncated payload
        - Invalid UTF-8 received by a raw text transport
    """

    kind = "DeserializeError"


class GenericError(TransitError):
    """Raised for codec failures that are neither clearly encode nor decode errors."""

    kind = "Error"


class CodecConfigurationError(Exception):
    """Raised when a Transport cannot be built with the requested codec.

    Examples:
        - No codec given and none configured through TRANSIT_CODEC
        - Unknown codec name
        - Payload type the codec cannot handle
    """

    pass
