"""Collision reporting for code tables.

This module provides check(), which verifies that the codes of a table are
pairwise distinct. It reports every group of variants sharing a code and
suggests remediations, but never retries on its own: a longer code changes the
external format, so escalation is the caller's decision.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from ..exceptions import CodeCollisionError
from .schema import SchemaModel, Variant
from .table import CodeTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodeCollision:
    """A group of variants within one schema that share a code.

    Attributes:
        code: The shared code
        variants: Every variant assigned that code, in schema order
        schema: Schema the variants belong to
        code_length: Code length of the table the collision was found in
        generated: Whether that table's codes were generated (False for manual tables)
    """

    code: str
    variants: Tuple[Variant, ...]
    schema: SchemaModel = field(repr=False, compare=False)
    code_length: int = field(default=0, compare=False)
    generated: bool = field(default=True, compare=False)

    @property
    def variant_names(self) -> List[str]:
        return [variant.name for variant in self.variants]

    @property
    def suggested_code_length(self) -> int | None:
        """Length to reassign this collision's table with, or None for manual codes."""
        return self.code_length + 1 if self.generated else None

    def __str__(self) -> str:
        names = ", ".join(self.schema.qualified_name(variant) for variant in self.variants)
        return f"{self.code!r} shared by {names}"


@dataclass(frozen=True)
class CollisionResult:
    """Outcome of check().

    A result is truthy when there are no collisions, so ``if check(table):``
    reads as "if the table is usable". With ``recursive=True`` the groups can
    come from child tables with their own length; each group records the
    length and origin of the table it was found in.

    Attributes:
        groups: One CodeCollision per shared code (empty when ok)
        code_length: Code length of the table that was checked
        generated: Whether the checked table's codes were generated
    """

    groups: Tuple[CodeCollision, ...] = ()
    code_length: int = 0
    generated: bool = True

    @property
    def ok(self) -> bool:
        return not self.groups

    def __bool__(self) -> bool:
        return self.ok

    def __iter__(self) -> Iterator[CodeCollision]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def suggested_code_length(self) -> int | None:
        """Code length to retry assign() with for the first colliding generated table.

        None when nothing collided or every collision is in manual codes.
        """
        for group in self.groups:
            if group.suggested_code_length is not None:
                return group.suggested_code_length
        return None

    def remediations(self) -> List[str]:
        """Human-readable ways to resolve the collisions (empty when ok)."""
        if self.ok:
            return []

        # Generated schemas grouped by their current length
        by_length: Dict[int, List[str]] = {}
        for group in self.groups:
            if group.generated:
                names = by_length.setdefault(group.code_length, [])
                if group.schema.name not in names:
                    names.append(group.schema.name)

        hints = [
            f"Increase the code length from {length} to {length + 1} for "
            f"{', '.join(names)} and assign again (this changes every code)"
            for length, names in by_length.items()
        ]
        schemas = sorted({group.schema.name for group in self.groups})
        hints.append(
            f"Declare manual codes for {', '.join(schemas)} with CodeTable.manual() "
            f"so every variant has a distinct code"
        )
        return hints

    def raise_for_collisions(self) -> None:
        """Raise CodeCollisionError if any code is shared.

        Raises:
            CodeCollisionError: If the result is not ok
        """
        if not self.ok:
            raise CodeCollisionError(self.groups)


def check(table: CodeTable, *, recursive: bool = False) -> CollisionResult:
    """Check that all codes of a table are pairwise distinct.

    Uniqueness is only required within one table: a parent and a child schema
    may use the same code, since each level is decoded against its own table.

    Args:
        table: Table to check
        recursive: Also check every child table reachable from ``table``

    Returns:
        CollisionResult listing every group of variants that share a code

    Example:
        >>> result = check(assign(schema, GenerationConfig(code_length=1)))
        >>> for collision in result:
        ...     print(collision)
        >>> result.remediations()
    """
    groups: List[CodeCollision] = []
    for checked in _tables(table, recursive):
        groups.extend(_collisions(checked))

    result = CollisionResult(tuple(groups), table.config.code_length, table.generated)
    if not result.ok:
        logger.warning(
            "%d opaque code collision(s) in %s: %s",
            len(groups),
            table.schema.name,
            "; ".join(str(group) for group in groups),
        )
    return result


def _collisions(table: CodeTable) -> List[CodeCollision]:
    by_code: Dict[str, List[Variant]] = {}
    for variant in table.schema.variants():
        by_code.setdefault(table[variant.name], []).append(variant)

    return [
        CodeCollision(
            code, tuple(variants), table.schema, table.config.code_length, table.generated
        )
        for code, variants in by_code.items()
        if len(variants) > 1
    ]


def _tables(table: CodeTable, recursive: bool) -> Iterator[CodeTable]:
    yield table
    if not recursive:
        return

    seen = {id(table)}
    pending = list(table.child_tables.values())
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.extend(current.child_tables.values())
