"""opaquecode: Opaque Error Codes

A Python library that assigns short, stable, reversible opaque codes to the
cases of nested error-code types, and reconstructs the original error from a
code. Codes are safe to show to users: they reveal nothing about the error,
but a developer can decode them back to the exact case, at every nesting level.

Key Features:
- Deterministic codes derived from a fixed, documented hash
- Collision reporting with remediation hints
- Nested codes joined by a configurable delimiter ("8BUT-gjmR-Tk1iR6")
- Strict decoding with a precise error taxonomy
- Pydantic-based declarative error codes

Quick Start:
    >>> from opaquecode import ErrorCode
    >>>
    >>> class CodingErrorCode(ErrorCode):
    ...     opaque_code_cases = {"encoding": None, "decoding": None}
    >>>
    >>> class ErrorCodes(ErrorCode):
    ...     opaque_code_cases = {"coding": CodingErrorCode, "repository": None}
    >>>
    >>> ErrorCodes.of("repository").opaque_code
    '6DWR'
    >>> ErrorCodes.from_opaque_code("6DWR")
    ErrorCodes(case='repository', child=None)

Lower-level API:
    >>> from opaquecode import SchemaModel, assign, check, decode, encode
    >>> schema = SchemaModel.build("ErrorCodes", {"repository": None, "network": None})
    >>> table = assign(schema)
    >>> check(table).ok
    True
    >>> decode(table, encode(table, "repository")).variant.name
    'repository'
"""

from __future__ import annotations

from .codec import (
    CodeCollision,
    CodeTable,
    CodeValue,
    CollisionResult,
    SchemaModel,
    Variant,
    assign,
    check,
    decode,
    decode_step,
    encode,
    encode_value,
)
from .config import DEFAULT_ALPHABET, DEFAULT_CODE_LENGTH, DEFAULT_DELIMITER, GenerationConfig
from .exceptions import (
    ChildDecodeError,
    CodeCollisionError,
    ConfigError,
    DecodeError,
    EmptyInputError,
    EncodeError,
    OpaqueCodeError,
    SchemaError,
    UnrecognizedTokenError,
    UnusedTrailingComponentsError,
)
from .models import ErrorCode
from .utils import (
    code_space,
    collision_probability,
    derive_code,
    max_composite_length,
    recommended_code_length,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "assign",
    "check",
    "encode",
    "encode_value",
    "decode",
    "decode_step",
    # Schema and tables
    "SchemaModel",
    "Variant",
    "CodeTable",
    "CodeValue",
    "CodeCollision",
    "CollisionResult",
    # Configuration
    "GenerationConfig",
    "DEFAULT_ALPHABET",
    "DEFAULT_CODE_LENGTH",
    "DEFAULT_DELIMITER",
    # Declarative error codes
    "ErrorCode",
    # Exceptions
    "OpaqueCodeError",
    "ConfigError",
    "SchemaError",
    "EncodeError",
    "CodeCollisionError",
    "DecodeError",
    "EmptyInputError",
    "UnrecognizedTokenError",
    "UnusedTrailingComponentsError",
    "ChildDecodeError",
    # Utilities
    "derive_code",
    "code_space",
    "collision_probability",
    "recommended_code_length",
    "max_composite_length",
    # Version
    "__version__",
]
