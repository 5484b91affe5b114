"""Utility functions for opaquecode.

This module provides the stable code hash and code space calculations.
"""

from __future__ import annotations

from .capacity import (
    code_space,
    collision_probability,
    max_composite_length,
    recommended_code_length,
)
from .hashing import derive_code, position_hash

__all__ = [
    # Hashing
    "derive_code",
    "position_hash",
    # Capacity
    "code_space",
    "collision_probability",
    "recommended_code_length",
    "max_composite_length",
]
