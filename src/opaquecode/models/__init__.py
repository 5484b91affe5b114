"""Declarative error-code types for opaquecode.

This module provides the ErrorCode base class for defining nested error codes
as Pydantic models.
"""

from __future__ import annotations

from .base import ErrorCode

__all__ = [
    "ErrorCode",
]
