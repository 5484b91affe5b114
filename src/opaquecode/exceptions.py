"""Exception hierarchy for opaquecode.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from OpaqueCodeError for easy catching of any opaquecode-specific error.

Decode-time failures (subclasses of DecodeError) are the recoverable part of the
taxonomy. ConfigError, SchemaError and EncodeError signal caller bugs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .codec.collisions import CodeCollision


class OpaqueCodeError(Exception):
    """Base exception for all opaquecode errors."""

    pass


class ConfigError(OpaqueCodeError, ValueError):
    """Raised when a generation configuration is invalid.

    Examples:
        - Code length below 1
        - Empty alphabet
        - Delimiter that is also an alphabet character
    """

    pass


class SchemaError(OpaqueCodeError):
    """Raised when a schema or code table is invalid.

    Examples:
        - Duplicate variant names
        - Cyclic child-schema graph
        - Manual codes missing a variant, or naming an unknown one
        - A code that is empty or contains the delimiter
    """

    pass


class EncodeError(OpaqueCodeError):
    """Raised when encode() is called with a value that cannot come from its table.

    Examples:
        - Variant is not a member of the table
        - Leaf variant given a child code
        - Composite variant given no child code
    """

    pass


class CodeCollisionError(OpaqueCodeError):
    """Raised when a caller chooses to treat code collisions as fatal.

    Attributes:
        collisions: Every group of variants sharing one code
    """

    def __init__(self, collisions: Sequence[CodeCollision], message: str | None = None) -> None:
        self.collisions = tuple(collisions)
        if message is None:
            described = "; ".join(str(collision) for collision in self.collisions)
            message = f"Opaque code collision: {described}"
        super().__init__(message)


class DecodeError(OpaqueCodeError):
    """Raised when a composite code cannot be decoded against a table."""

    @property
    def root_cause(self) -> DecodeError:
        """The innermost failure of the chain (this error for non-nested failures)."""
        return self

    @property
    def depth(self) -> int:
        """Nesting level at which the failure occurred (0 for the outermost schema)."""
        return 0


class EmptyInputError(DecodeError):
    """The code (or the part handed to a child schema) is empty."""

    def __init__(self) -> None:
        super().__init__("Opaque code is empty")


class UnrecognizedTokenError(DecodeError):
    """A token matches no code in the table.

    Attributes:
        token: The unmatched token
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unrecognized opaque code: {token!r}")


class UnusedTrailingComponentsError(DecodeError):
    """A leaf variant was followed by components nothing can consume.

    Attributes:
        components: The leftover tokens, in order
    """

    def __init__(self, components: Sequence[str]) -> None:
        self.components = list(components)
        super().__init__(f"Unused opaque code components: {self.components!r}")


class ChildDecodeError(DecodeError):
    """The child schema of a composite variant failed to decode its remainder.

    Attributes:
        variant_name: Name of the composite variant whose child failed
        inner: The child's own DecodeError
    """

    def __init__(self, inner: DecodeError, variant_name: str | None = None) -> None:
        self.inner = inner
        self.variant_name = variant_name
        where = f" of {variant_name!r}" if variant_name else ""
        super().__init__(f"Child code{where} failed to decode: {inner}")

    @property
    def root_cause(self) -> DecodeError:
        return self.inner.root_cause

    @property
    def depth(self) -> int:
        return self.inner.depth + 1
