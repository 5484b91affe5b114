#!/usr/bin/env python3
"""Collision handling example for opaquecode.

Short codes collide. check() reports every collision and suggests two fixes:
retry with a longer code, or declare manual codes. Which one to use is up to
the caller, since a longer code changes every published code.
"""

from __future__ import annotations

from opaquecode import CodeTable, GenerationConfig, SchemaModel, assign, check, recommended_code_length


def main() -> None:
    """Run the collision handling example."""
    colors = SchemaModel.build("Color", {"red": None, "green": None, "blue": None})
    config = GenerationConfig(code_length=1)

    result = check(assign(colors, config))
    for collision in result:
        print(f"Collision: {collision}")
    for hint in result.remediations():
        print(f"  fix: {hint}")
    print()

    # Fix 1: escalate the code length
    assert result.suggested_code_length is not None
    longer = assign(colors, config.with_code_length(result.suggested_code_length))
    print(f"Length {result.suggested_code_length}: {dict(longer)} ok={check(longer).ok}")

    # Fix 2: hand-picked codes
    manual = CodeTable.manual(colors, {"red": "R", "green": "G", "blue": "B"})
    print(f"Manual:   {dict(manual)} ok={check(manual).ok}")
    print()

    print(f"Recommended length for 1000 variants: {recommended_code_length(1000, 62)}")


if __name__ == "__main__":
    main()
