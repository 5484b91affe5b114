"""Composite code decoder.

This module provides decode(), which reconstructs a (possibly nested) value
from a composite code, and decode_step(), which decodes a single level.

Decoding runs top-down in one of two shapes, chosen per schema:

- Splitting mode (schema has a composite variant): the code is split on the
  delimiter, the first token selects the variant, and for a composite variant
  the remaining tokens are re-joined and handed to the child schema's table.
- Flat mode (leaf-only schema): the whole code is a single token. Nothing is
  split, so a flat schema never reports unused trailing components.

Every failure is raised as a DecodeError subclass; nothing is corrected or
skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..exceptions import (
    ChildDecodeError,
    DecodeError,
    EmptyInputError,
    UnrecognizedTokenError,
    UnusedTrailingComponentsError,
)
from .schema import Variant
from .table import CodeTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodeValue:
    """A selected variant and, for composite variants, the decoded child value.

    Attributes:
        variant: Selected variant
        child: Decoded payload for composite variants, None for leaves
    """

    variant: Variant
    child: Optional[CodeValue] = None

    @property
    def path(self) -> List[str]:
        """Variant names from the outermost level down."""
        names = [self.variant.name]
        if self.child is not None:
            names.extend(self.child.path)
        return names

    def __str__(self) -> str:
        if self.child is None:
            return self.variant.name
        return f"{self.variant.name}({self.child})"


def decode_step(table: CodeTable, code: str) -> Tuple[Variant, Optional[str]]:
    """Decode the outermost level of a composite code.

    Args:
        table: Code table of the outermost schema
        code: Composite code

    Returns:
        Tuple (variant, remainder). The remainder is the code to hand to the
        variant's child table for composite variants (possibly empty, which
        the child rejects), and None for leaves.

    Raises:
        EmptyInputError: If code is empty
        UnrecognizedTokenError: If the leading token matches no code
        UnusedTrailingComponentsError: If a leaf is followed by more components
    """
    if not code:
        raise EmptyInputError()

    if not table.schema.has_composite:
        variant = table.variant_for(code)
        if variant is None:
            raise UnrecognizedTokenError(code)
        return variant, None

    delimiter = table.config.delimiter
    if delimiter:
        head, *tail = code.split(delimiter)
        variant = table.variant_for(head)
        if variant is None:
            raise UnrecognizedTokenError(head)
        if not variant.is_composite:
            if tail:
                raise UnusedTrailingComponentsError(tail)
            return variant, None
        return variant, delimiter.join(tail)

    # Empty delimiter: codes are concatenated, so match the longest code prefix
    candidates = sorted(set(table.values()), key=len, reverse=True)
    matched = next((candidate for candidate in candidates if code.startswith(candidate)), None)
    variant = table.variant_for(matched) if matched is not None else None
    if variant is None:
        raise UnrecognizedTokenError(code)

    remainder = code[len(matched) :]
    if not variant.is_composite:
        if remainder:
            raise UnusedTrailingComponentsError([remainder])
        return variant, None
    return variant, remainder


def decode(table: CodeTable, code: str) -> CodeValue:
    """Decode a composite code into a (possibly nested) value.

    Args:
        table: Code table of the outermost schema
        code: Composite code, as produced by encode()

    Returns:
        The decoded CodeValue

    Raises:
        EmptyInputError: If code is empty
        UnrecognizedTokenError: If the leading token matches no code
        UnusedTrailingComponentsError: If a leaf is followed by more components
        ChildDecodeError: If a child schema failed; ``root_cause`` and
            ``depth`` locate the innermost failure

    Examples:
        ```python
        from opaquecode import ChildDecodeError, DecodeError, assign, decode

        table = assign(errors)
        value = decode(table, "8BUT-gjmR-Tk1iR6")
        value.path  # ["networking", "httpStatusCode", "badRequest"]

        try:
            decode(table, "8BUT-gjmR-XXXXXX")
        except ChildDecodeError as err:
            print(err.depth, err.root_cause)  # 2 Unrecognized opaque code: 'XXXXXX'
        ```
    """
    variant, remainder = decode_step(table, code)
    logger.debug("Decoded %s from %r", table.schema.qualified_name(variant), code)

    if remainder is None:
        return CodeValue(variant)

    try:
        child = decode(table.child_table(variant), remainder)
    except DecodeError as err:
        raise ChildDecodeError(err, variant.name) from err

    return CodeValue(variant, child)
