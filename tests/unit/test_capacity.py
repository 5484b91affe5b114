"""Tests for code space calculations."""

from __future__ import annotations

import pytest

from opaquecode import (
    CodeTable,
    GenerationConfig,
    SchemaModel,
    assign,
    code_space,
    collision_probability,
    max_composite_length,
    recommended_code_length,
)


def test_code_space_default() -> None:
    """Test 62 characters at length 4."""
    assert code_space(GenerationConfig()) == 62**4


def test_collision_probability_trivial() -> None:
    """Test zero or one variant cannot collide."""
    config = GenerationConfig(code_length=1)

    assert collision_probability(0, config) == 0.0
    assert collision_probability(1, config) == 0.0


def test_collision_probability_pigeonhole() -> None:
    """Test more variants than codes always collide."""
    config = GenerationConfig(code_length=1, alphabet="abcde")
    assert collision_probability(6, config) == 1.0


def test_collision_probability_two_variants() -> None:
    """Test two variants collide with probability 1 / space."""
    config = GenerationConfig(code_length=1, alphabet="abcde")
    assert collision_probability(2, config) == pytest.approx(0.2)


def test_collision_probability_grows_with_variants() -> None:
    """Test more variants means more risk."""
    config = GenerationConfig()
    assert collision_probability(100, config) > collision_probability(10, config)


def test_recommended_code_length() -> None:
    """Test the recommendation keeps risk under the threshold."""
    length = recommended_code_length(100, 62, max_probability=0.01)

    assert length == 4
    assert collision_probability(100, GenerationConfig(code_length=length)) <= 0.01
    assert collision_probability(100, GenerationConfig(code_length=length - 1)) > 0.01


def test_recommended_code_length_trivial() -> None:
    """Test a single variant needs one character."""
    assert recommended_code_length(1, 62) == 1


def test_recommended_code_length_invalid() -> None:
    """Test invalid arguments are rejected."""
    with pytest.raises(ValueError):
        recommended_code_length(10, 1)
    with pytest.raises(ValueError):
        recommended_code_length(10, 62, max_probability=0.0)


def test_max_composite_length(errors_table: CodeTable) -> None:
    """Test the deepest, longest path is measured."""
    # "8BUT-gjmR-Tk1iR6"
    assert max_composite_length(errors_table) == 16


def test_max_composite_length_flat(status_schema: SchemaModel) -> None:
    """Test flat tables measure a single code."""
    assert max_composite_length(assign(status_schema)) == 4
