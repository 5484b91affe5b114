"""Deterministic code assignment.

This module provides the assign() function that derives one opaque code per
variant of a schema. A code depends only on the qualified variant name, the
alphabet and the code length, so the same schema always produces the same
table, in every process and on every machine.

assign() never fails because of collisions. Run check() on the result and
decide what to do with a collision (fail, retry longer, or supply manual codes).
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from ..config import DEFAULT_CONFIG, GenerationConfig
from ..exceptions import SchemaError
from ..utils.hashing import derive_code
from .schema import SchemaModel
from .table import CodeTable

logger = logging.getLogger(__name__)


def assign(
    schema: SchemaModel,
    config: Optional[GenerationConfig] = None,
    *,
    child_tables: Optional[Mapping[str, CodeTable]] = None,
) -> CodeTable:
    """Assign opaque codes to every variant of a schema.

    Child schemas of composite variants are assigned with the same config
    unless their table is supplied in ``child_tables`` (keyed by the
    composite variant's name). Supply child tables to give a child schema its
    own config or manual codes.

    Args:
        schema: Schema to assign codes for
        config: Generation configuration (defaults to GenerationConfig())
        child_tables: Pre-built tables for composite variants' child schemas

    Returns:
        Immutable CodeTable

    Raises:
        SchemaError: If the child-schema graph is cyclic or a supplied child
            table does not match its variant

    Examples:
        ```python
        from opaquecode import GenerationConfig, SchemaModel, assign

        status = SchemaModel.build("HTTPStatusCode", {"badRequest": None, "notFound": None})
        networking = SchemaModel.build(
            "NetworkingErrorCode",
            {"httpStatusCode": status, "noInternet": None, "badRequest": None},
        )

        # Give the status codes six characters, everything else the default four
        status_table = assign(status, GenerationConfig(code_length=6))
        table = assign(networking, child_tables={"httpStatusCode": status_table})
        ```
    """
    config = config or DEFAULT_CONFIG
    return _assign(schema, config, child_tables, {}, ())


def resolve_child_tables(
    schema: SchemaModel,
    config: GenerationConfig,
    child_tables: Optional[Mapping[str, CodeTable]] = None,
) -> Dict[str, CodeTable]:
    """Child tables for every composite variant, generating the ones not supplied.

    Raises:
        SchemaError: If the child-schema graph is cyclic
    """
    return _resolve_children(schema, config, child_tables, {}, (schema,))


def _assign(
    schema: SchemaModel,
    config: GenerationConfig,
    child_tables: Optional[Mapping[str, CodeTable]],
    memo: Dict[int, CodeTable],
    ancestors: tuple[SchemaModel, ...],
) -> CodeTable:
    if any(ancestor is schema for ancestor in ancestors):
        cycle = " -> ".join(ancestor.name for ancestor in ancestors + (schema,))
        raise SchemaError(f"Cyclic child schema: {cycle}")

    # Same schema object reached through two variants shares one table
    cached = memo.get(id(schema))
    if cached is not None and not child_tables:
        return cached

    children = _resolve_children(schema, config, child_tables, memo, ancestors + (schema,))
    codes = {
        variant.name: derive_code(schema.qualified_name(variant), config.alphabet, config.code_length)
        for variant in schema.variants()
    }

    logger.debug(
        "Assigned %d codes for %s (length=%d, alphabet=%d chars)",
        len(codes),
        schema.name,
        config.code_length,
        len(config.alphabet),
    )

    table = CodeTable(schema, codes, config, children)
    if not child_tables:
        memo[id(schema)] = table
    return table


def _resolve_children(
    schema: SchemaModel,
    config: GenerationConfig,
    child_tables: Optional[Mapping[str, CodeTable]],
    memo: Dict[int, CodeTable],
    ancestors: tuple[SchemaModel, ...],
) -> Dict[str, CodeTable]:
    supplied = dict(child_tables or {})
    children: Dict[str, CodeTable] = {}

    for variant in schema.variants():
        if variant.child is None:
            continue
        if variant.name in supplied:
            children[variant.name] = supplied.pop(variant.name)
        else:
            children[variant.name] = _assign(variant.child, config, None, memo, ancestors)

    if supplied:
        raise SchemaError(
            f"Child tables given for variants of {schema.name} that are not composite: "
            f"{sorted(supplied)}"
        )

    return children
