"""Tests for code assignment."""

from __future__ import annotations

import pytest

from opaquecode import (
    CodeTable,
    GenerationConfig,
    SchemaError,
    SchemaModel,
    Variant,
    assign,
)


class TestAssign:
    """Test assign() on single schemas."""

    def test_flat_schema(self, status_schema: SchemaModel) -> None:
        """Test one code per variant, derived from the qualified name."""
        table = assign(status_schema)

        assert dict(table) == {"badRequest": "L4Tk", "notFound": "ezKf"}
        assert table.generated

    def test_code_length(self, status_schema: SchemaModel) -> None:
        """Test the configured length is used."""
        table = assign(status_schema, GenerationConfig(code_length=6))

        assert dict(table) == {"badRequest": "Tk1iR6", "notFound": "Kf0Lg1"}

    def test_deterministic(self, errors_schema: SchemaModel) -> None:
        """Test identical inputs give identical tables."""
        assert assign(errors_schema) == assign(errors_schema)

    def test_schema_name_qualifies_codes(self) -> None:
        """Test the same variant name in two schemas gets different codes."""
        first = assign(SchemaModel.build("NetworkingErrorCode", {"badRequest": None}))
        second = assign(SchemaModel.build("HTTPStatusCode", {"badRequest": None}))

        assert first["badRequest"] == "dyhu"
        assert second["badRequest"] == "L4Tk"

    def test_order_does_not_change_codes(self) -> None:
        """Test codes depend on names, not positions."""
        forward = assign(SchemaModel.build("Flat", {"alpha": None, "beta": None, "gamma": None}))
        backward = assign(SchemaModel.build("Flat", {"gamma": None, "beta": None, "alpha": None}))

        assert dict(forward) == dict(backward) == {
            "alpha": "j4PO",
            "beta": "PYhq",
            "gamma": "SL8f",
        }

    def test_empty_schema(self) -> None:
        """Test a schema without variants gives an empty table."""
        assert len(assign(SchemaModel("Empty"))) == 0

    def test_codes_never_contain_delimiter(self, errors_schema: SchemaModel) -> None:
        """Test generated codes only use alphabet characters."""
        config = GenerationConfig(alphabet="abcdefgh", delimiter="x", code_length=8)
        table = assign(errors_schema, config)

        for code in table.values():
            assert "x" not in code
            assert set(code) <= set("abcdefgh")


class TestAssignNested:
    """Test assign() through child schemas."""

    def test_children_assigned_with_same_config(self, errors_schema: SchemaModel) -> None:
        """Test child schemas inherit the config when no table is supplied."""
        table = assign(errors_schema)
        networking = table.child_table("networking")

        assert dict(table) == {"networking": "8BUT", "repository": "6DWR", "coding": "OB21"}
        assert dict(networking) == {"httpStatusCode": "gjmR", "noInternet": "T8X4", "badRequest": "dyhu"}
        assert dict(networking.child_table("httpStatusCode")) == {
            "badRequest": "L4Tk",
            "notFound": "ezKf",
        }
        assert dict(table.child_table("coding")) == {"encoding": "650p", "decoding": "wFqf"}

    def test_supplied_child_table(self, errors_table: CodeTable) -> None:
        """Test a supplied child table keeps its own config."""
        status = errors_table.child_table("networking").child_table("httpStatusCode")

        assert status.config.code_length == 6
        assert status["badRequest"] == "Tk1iR6"

    def test_shared_child_schema(self, status_schema: SchemaModel) -> None:
        """Test one child schema reached twice shares one table."""
        schema = SchemaModel.build("Both", {"first": status_schema, "second": status_schema})
        table = assign(schema)

        assert table.child_table("first") is table.child_table("second")

    def test_child_table_for_leaf(self, status_schema: SchemaModel) -> None:
        """Test a child table for a leaf variant is rejected."""
        with pytest.raises(SchemaError, match="not composite"):
            assign(status_schema, child_tables={"badRequest": assign(status_schema)})

    def test_child_table_for_wrong_schema(
        self, networking_schema: SchemaModel, coding_schema: SchemaModel
    ) -> None:
        """Test a child table must belong to the variant's child schema."""
        with pytest.raises(SchemaError, match="expected HTTPStatusCode"):
            assign(networking_schema, child_tables={"httpStatusCode": assign(coding_schema)})

    def test_cyclic_schema(self) -> None:
        """Test a schema that contains itself is rejected."""
        schema = SchemaModel("Loop", [Variant("leaf")])
        # Schemas are immutable; build the cycle the only way it can exist
        object.__setattr__(schema, "_variants", (Variant("leaf"), Variant("again", schema)))

        with pytest.raises(SchemaError, match="Cyclic"):
            assign(schema)
