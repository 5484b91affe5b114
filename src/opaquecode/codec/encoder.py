"""Composite code encoder.

This module provides encode(), which turns a selected variant (plus, for a
composite variant, the already-encoded code of its payload) into a composite
code string. Encoding runs bottom-up: the child is encoded against its own
table first, then wrapped by the parent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..exceptions import EncodeError
from .schema import Variant
from .table import CodeTable

if TYPE_CHECKING:
    from .decoder import CodeValue


def encode(table: CodeTable, variant: Variant | str, child_code: Optional[str] = None) -> str:
    """Encode a selected variant to its composite code.

    The child's type is opaque here: ``child_code`` is whatever the child
    schema's own encoder produced, and is appended verbatim.

    Args:
        table: Code table of the variant's schema
        variant: Selected variant (or its name)
        child_code: Composite code of the payload, required for composite variants

    Returns:
        ``code`` for a leaf, ``code + delimiter + child_code`` for a composite

    Raises:
        EncodeError: If the variant is not in the table, a leaf is given a
            child code, or a composite is given none. These are caller bugs,
            not conditions to recover from.

    Examples:
        ```python
        from opaquecode import assign, encode

        table = assign(errors)
        encode(table, "repository")  # "6DWR"

        status_code = encode(table.child_table("networking"), "badRequest")
        encode(table, "networking", status_code)  # "8BUT-..."
        ```
    """
    schema = table.schema
    name = variant if isinstance(variant, str) else variant.name

    try:
        selected = schema.variant(name)
        code = table.code_for(selected)
    except KeyError as err:
        raise EncodeError(f"{name!r} is not a variant of {schema.name}") from err

    if isinstance(variant, Variant) and variant != selected:
        raise EncodeError(f"{variant!r} does not belong to schema {schema.name}")

    if not selected.is_composite:
        if child_code is not None:
            raise EncodeError(f"{schema.qualified_name(selected)} is a leaf and takes no child code")
        return code

    if child_code is None:
        raise EncodeError(f"{schema.qualified_name(selected)} is composite and requires a child code")

    return code + table.config.delimiter + child_code


def encode_value(table: CodeTable, value: CodeValue) -> str:
    """Encode a (possibly nested) CodeValue, child first.

    Args:
        table: Code table of the value's top-level schema
        value: Value to encode, as returned by decode()

    Returns:
        Composite code

    Raises:
        EncodeError: If the value does not fit the table's schema tree
    """
    child_code = None
    if value.child is not None:
        try:
            child_table = table.child_table(value.variant)
        except KeyError as err:
            raise EncodeError(
                f"{table.schema.qualified_name(value.variant)} has no child schema"
            ) from err
        child_code = encode_value(child_table, value.child)

    return encode(table, value.variant, child_code)
