"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from opaquecode import CodeTable, GenerationConfig, SchemaModel, assign


@pytest.fixture
def status_schema() -> SchemaModel:
    """Leaf-only schema of HTTP status errors."""
    return SchemaModel.build("HTTPStatusCode", {"badRequest": None, "notFound": None})


@pytest.fixture
def networking_schema(status_schema: SchemaModel) -> SchemaModel:
    """Schema with one composite variant."""
    return SchemaModel.build(
        "NetworkingErrorCode",
        {"httpStatusCode": status_schema, "noInternet": None, "badRequest": None},
    )


@pytest.fixture
def coding_schema() -> SchemaModel:
    """Leaf-only schema of coding errors."""
    return SchemaModel.build("CodingErrorCode", {"encoding": None, "decoding": None})


@pytest.fixture
def errors_schema(networking_schema: SchemaModel, coding_schema: SchemaModel) -> SchemaModel:
    """Three-level schema: ErrorCodes -> NetworkingErrorCode -> HTTPStatusCode."""
    return SchemaModel.build(
        "ErrorCodes",
        {"networking": networking_schema, "repository": None, "coding": coding_schema},
    )


@pytest.fixture
def errors_table(errors_schema: SchemaModel, status_schema: SchemaModel) -> CodeTable:
    """Code table of errors_schema with six-character HTTP status codes."""
    status_table = assign(status_schema, GenerationConfig(code_length=6))
    networking = errors_schema.variant("networking").child
    assert networking is not None
    networking_table = assign(networking, child_tables={"httpStatusCode": status_table})
    return assign(errors_schema, child_tables={"networking": networking_table})
