"""Code space and collision likelihood calculations.

This module provides functions to reason about a configuration before (or
after) assigning codes: how many distinct codes exist, how likely a schema of a
given size is to collide, and how long composite codes can get.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..config import GenerationConfig

if TYPE_CHECKING:
    from ..codec.table import CodeTable


def code_space(config: GenerationConfig) -> int:
    """Number of distinct codes a configuration can produce.

    Example:
        >>> code_space(GenerationConfig())
        14776336  # 62 ** 4
    """
    return len(config.alphabet) ** config.code_length


def collision_probability(variant_count: int, config: GenerationConfig) -> float:
    """Probability that at least two of ``variant_count`` codes collide.

    Treats derived codes as uniformly distributed over the code space
    (birthday bound). The result is exact for that model, not an approximation.

    Args:
        variant_count: Number of variants in one schema
        config: Generation configuration

    Returns:
        Probability in [0.0, 1.0]
    """
    return _birthday_probability(variant_count, code_space(config))


def recommended_code_length(
    variant_count: int,
    alphabet_size: int,
    max_probability: float = 0.01,
) -> int:
    """Smallest code length that keeps collision probability under a threshold.

    Args:
        variant_count: Number of variants in one schema
        alphabet_size: Number of distinct alphabet characters
        max_probability: Acceptable collision probability (default 1%)

    Returns:
        Recommended code length (at least 1)

    Raises:
        ValueError: If alphabet_size < 2 or max_probability is not in (0, 1]
    """
    if alphabet_size < 2:
        raise ValueError(f"alphabet_size must be >= 2, got {alphabet_size}")
    if not 0.0 < max_probability <= 1.0:
        raise ValueError(f"max_probability must be in (0, 1], got {max_probability}")

    length = 1
    while True:
        if _birthday_probability(variant_count, alphabet_size**length) <= max_probability:
            return length
        length += 1


def max_composite_length(table: CodeTable) -> int:
    """Length of the longest composite code a table (and its children) can produce.

    Example:
        >>> max_composite_length(assign(schema))  # 3 nesting levels, length 4, "-"
        14
    """
    longest = 0
    for variant in table.schema.variants():
        length = len(table[variant.name])
        if variant.is_composite:
            length += len(table.config.delimiter) + max_composite_length(
                table.child_table(variant)
            )
        longest = max(longest, length)

    return longest


def _birthday_probability(variant_count: int, space: int) -> float:
    if variant_count > space:
        return 1.0

    no_collision = 1.0
    for taken in range(variant_count):
        no_collision *= (space - taken) / space

    return 1.0 - no_collision
