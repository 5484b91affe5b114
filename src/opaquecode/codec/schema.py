"""Schema model for tagged unions.

This module describes a tagged union as an ordered sequence of variants. A
variant is either a leaf (no payload) or composite (its payload is another
tagged union, described by a child SchemaModel). Schemas form a tree through
those child references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Tuple

from ..exceptions import SchemaError


@dataclass(frozen=True)
class Variant:
    """One labeled alternative of a tagged union.

    Attributes:
        name: Variant name, unique within its schema
        child: Schema of the payload for composite variants, None for leaves
    """

    name: str
    child: Optional[SchemaModel] = None

    @property
    def is_composite(self) -> bool:
        return self.child is not None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SchemaModel:
    """Read-only description of one tagged union.

    Variant order only matters for presentation and for the order collisions
    are reported in. Decoding is by code value, never by position.

    Example:
        >>> status = SchemaModel.build("HTTPStatusCode", {"badRequest": None, "notFound": None})
        >>> errors = SchemaModel.build("ErrorCodes", {"networking": status, "repository": None})
        >>> errors.variant("networking").is_composite
        True
    """

    name: str
    _variants: Tuple[Variant, ...] = field(default=(), repr=False)

    def __init__(self, name: str, variants: Tuple[Variant, ...] | list[Variant] = ()) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "_variants", tuple(variants))
        self._validate()

    @classmethod
    def build(cls, name: str, variants: Mapping[str, Optional[SchemaModel]]) -> SchemaModel:
        """Create a schema from a mapping of variant name to child schema (or None).

        Args:
            name: Schema name, used to qualify variant names when deriving codes
            variants: Variant names in declaration order, each mapped to its child schema

        Returns:
            SchemaModel instance
        """
        return cls(name, [Variant(variant_name, child) for variant_name, child in variants.items()])

    def _validate(self) -> None:
        if not self.name:
            raise SchemaError("Schema name must not be empty")

        seen: set[str] = set()
        for variant in self._variants:
            if not isinstance(variant, Variant):
                raise SchemaError(f"Schema {self.name}: expected Variant, got {type(variant).__name__}")
            if not variant.name:
                raise SchemaError(f"Schema {self.name}: variant name must not be empty")
            if variant.name in seen:
                raise SchemaError(f"Schema {self.name}: duplicate variant name {variant.name!r}")
            seen.add(variant.name)

    def variants(self) -> Tuple[Variant, ...]:
        """Variants in declaration order."""
        return self._variants

    def variant(self, name: str) -> Variant:
        """Look up a variant by name.

        Raises:
            KeyError: If no variant has that name
        """
        for variant in self._variants:
            if variant.name == name:
                return variant
        raise KeyError(f"{self.name} has no variant named {name!r}")

    def qualified_name(self, variant: Variant | str) -> str:
        """Name hashed to derive a variant's code: ``"<schema>.<variant>"``."""
        variant_name = variant if isinstance(variant, str) else variant.name
        return f"{self.name}.{variant_name}"

    @property
    def has_composite(self) -> bool:
        """Whether any variant carries a child schema."""
        return any(variant.is_composite for variant in self._variants)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Variant):
            return item in self._variants
        return any(variant.name == item for variant in self._variants)

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)
