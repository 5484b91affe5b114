"""Opaque code codec for opaquecode.

This module provides code assignment, collision checking, encoding and
decoding for schemas of nested tagged unions.
"""

from __future__ import annotations

from .assigner import assign
from .collisions import CodeCollision, CollisionResult, check
from .decoder import CodeValue, decode, decode_step
from .encoder import encode, encode_value
from .schema import SchemaModel, Variant
from .table import CodeTable

__all__ = [
    "assign",
    "check",
    "encode",
    "encode_value",
    "decode",
    "decode_step",
    "SchemaModel",
    "Variant",
    "CodeTable",
    "CodeValue",
    "CodeCollision",
    "CollisionResult",
]
