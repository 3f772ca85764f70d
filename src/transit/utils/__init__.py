"""Utility functions for transit.

This module provides encoded size calculation helpers.
"""

from __future__ import annotations

from .sizing import encoded_size, fits_datagram

__all__ = [
    "encoded_size",
    "fits_datagram",
]
