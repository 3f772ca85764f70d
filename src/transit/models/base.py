"""Base payload model and transit-specific Pydantic configuration.

Any Pydantic model can travel over a Transport. TransitModel adds the settings
that make schema-aware codecs strict about shape, plus an optional per-type
size limit.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class TransitModel(BaseModel):
    """Base class for structured datagram payloads.

    Extra fields are forbidden, so a datagram encoded from a different model
    that happens to share some field names is still rejected on decode.

    Example:
        >>> from typing import ClassVar, Optional
        >>> from pydantic import Field
        >>> class Position(TransitModel):
        ...     vehicle_id: int = Field(ge=0, le=255)
        ...     lat: float
        ...     lon: float
        ...
        ...     transit_max_bytes: ClassVar[Optional[int]] = 64

    Attributes:
        transit_max_bytes: Maximum encoded size in bytes (optional, checked on encode)
    """

    model_config = ConfigDict(
        # Forbid extra fields not defined in schema
        extra="forbid",
        # Validate on assignment
        validate_assignment=True,
    )

    transit_max_bytes: ClassVar[int | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        max_bytes = cls.transit_max_bytes
        if max_bytes is not None and (not isinstance(max_bytes, int) or max_bytes <= 0):
            raise TypeError(
                f"{cls.__name__}.transit_max_bytes must be a positive int, got {max_bytes!r}"
            )
