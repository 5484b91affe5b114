"""Immutable code tables.

A CodeTable maps every variant of one schema to its opaque code and carries
what encode() and decode() need besides the codes: the schema, the generation
config (for the delimiter) and the tables of composite variants' child schemas.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from ..config import DEFAULT_CONFIG, GenerationConfig
from ..exceptions import SchemaError
from .schema import SchemaModel, Variant


class CodeTable(Mapping[str, str]):
    """Mapping of variant name to opaque code for one schema.

    Tables are built by assign() or CodeTable.manual() and never change
    afterwards, so one table can be shared freely between threads.

    Attributes:
        schema: Schema the codes belong to
        config: Configuration the codes were generated (or declared) with
        generated: False when the codes were supplied by the caller

    Example:
        >>> table = assign(schema)
        >>> table["repository"]
        '6DWR'
        >>> table.variant_for("6DWR").name
        'repository'
    """

    def __init__(
        self,
        schema: SchemaModel,
        codes: Mapping[str, str],
        config: GenerationConfig = DEFAULT_CONFIG,
        child_tables: Optional[Mapping[str, CodeTable]] = None,
        *,
        generated: bool = True,
    ) -> None:
        self.schema = schema
        self.config = config
        self.generated = generated
        self._codes = MappingProxyType({v.name: codes[v.name] for v in schema.variants() if v.name in codes})
        self._children = MappingProxyType(dict(child_tables or {}))
        self._validate(codes)

        # First variant wins on duplicate codes; check() reports the duplicates
        by_code: dict[str, Variant] = {}
        for variant in schema.variants():
            by_code.setdefault(self._codes[variant.name], variant)
        self._by_code = MappingProxyType(by_code)

    @classmethod
    def manual(
        cls,
        schema: SchemaModel,
        codes: Mapping[str, str],
        config: Optional[GenerationConfig] = None,
        *,
        child_tables: Optional[Mapping[str, CodeTable]] = None,
    ) -> CodeTable:
        """Create a table from caller-supplied codes, bypassing code generation.

        Codes only need to be non-empty and free of the delimiter; they do not
        have to match the configured length or alphabet. Child tables that are
        not supplied are generated with ``config``.

        Args:
            schema: Schema the codes belong to
            codes: One code per variant name
            config: Configuration providing the delimiter (and the generation
                settings for missing child tables)
            child_tables: Tables for composite variants' child schemas

        Returns:
            CodeTable instance

        Raises:
            SchemaError: If a variant is missing a code, an unknown variant is
                named, or a code is empty or contains the delimiter
        """
        from .assigner import resolve_child_tables

        config = config or DEFAULT_CONFIG
        children = resolve_child_tables(schema, config, child_tables)
        return cls(schema, codes, config, children, generated=False)

    def _validate(self, codes: Mapping[str, str]) -> None:
        unknown = sorted(set(codes) - {variant.name for variant in self.schema.variants()})
        if unknown:
            raise SchemaError(f"Codes given for unknown variants of {self.schema.name}: {unknown}")

        delimiter = self.config.delimiter
        for variant in self.schema.variants():
            code = self._codes.get(variant.name)
            if code is None:
                raise SchemaError(f"{self.schema.qualified_name(variant)} has no opaque code")
            if not isinstance(code, str) or not code:
                raise SchemaError(
                    f"{self.schema.qualified_name(variant)}: opaque code must be a non-empty string"
                )
            if delimiter and delimiter in code:
                raise SchemaError(
                    f"{self.schema.qualified_name(variant)}: opaque code {code!r} "
                    f"contains the delimiter {delimiter!r}"
                )

            if variant.is_composite:
                child = self._children.get(variant.name)
                if child is None:
                    raise SchemaError(f"{self.schema.qualified_name(variant)} has no child code table")
                if child.schema != variant.child:
                    raise SchemaError(
                        f"{self.schema.qualified_name(variant)}: child table is for schema "
                        f"{child.schema.name}, expected {variant.child.name}"  # type: ignore[union-attr]
                    )
            elif variant.name in self._children:
                raise SchemaError(f"{self.schema.qualified_name(variant)} is a leaf but has a child table")

    def code_for(self, variant: Variant | str) -> str:
        """Code of a variant (or variant name).

        Raises:
            KeyError: If the variant is not part of this table
        """
        if isinstance(variant, Variant):
            if variant not in self.schema:
                raise KeyError(f"{variant.name!r} is not a variant of {self.schema.name}")
            return self._codes[variant.name]
        return self._codes[variant]

    def variant_for(self, code: str) -> Optional[Variant]:
        """Variant whose code equals ``code``, or None."""
        return self._by_code.get(code)

    def child_table(self, variant: Variant | str) -> CodeTable:
        """Code table of a composite variant's child schema.

        Raises:
            KeyError: If the variant is unknown or a leaf
        """
        name = variant if isinstance(variant, str) else variant.name
        return self._children[name]

    @property
    def child_tables(self) -> Mapping[str, CodeTable]:
        return self._children

    def codes(self) -> list[str]:
        """All codes in schema order (duplicates included)."""
        return [self._codes[variant.name] for variant in self.schema.variants()]

    def __getitem__(self, key: str) -> str:
        return self._codes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeTable):
            return NotImplemented
        return (
            self.schema == other.schema
            and self.config == other.config
            and dict(self._codes) == dict(other._codes)
            and dict(self._children) == dict(other._children)
        )

    def __hash__(self) -> int:
        return hash((self.schema, self.config, tuple(self._codes.items())))

    def __repr__(self) -> str:
        return f"CodeTable({self.schema.name}, {dict(self._codes)!r})"
