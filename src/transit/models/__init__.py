"""Payload models for transit."""

from __future__ import annotations

from .base import TransitModel

__all__ = [
    "TransitModel",
]
