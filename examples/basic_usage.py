#!/usr/bin/env python3
"""Basic usage example for opaquecode.

This example demonstrates:
1. Describing nested tagged unions with SchemaModel
2. Assigning codes and checking them for collisions
3. Encoding a nested value bottom-up
4. Decoding it back, and what decode failures look like
"""

from __future__ import annotations

from opaquecode import (
    ChildDecodeError,
    DecodeError,
    GenerationConfig,
    SchemaModel,
    assign,
    check,
    decode,
    encode,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("opaquecode Basic Usage Example")
    print("=" * 60)
    print()

    # Describe the error taxonomy
    print("1. Describing the schema...")
    status = SchemaModel.build("HTTPStatusCode", {"badRequest": None, "notFound": None})
    networking = SchemaModel.build(
        "NetworkingErrorCode",
        {"httpStatusCode": status, "noInternet": None, "badRequest": None},
    )
    errors = SchemaModel.build("ErrorCodes", {"networking": networking, "repository": None})
    print(f"   {errors.name}: {[variant.name for variant in errors.variants()]}")
    print()

    # Assign codes, giving HTTP status codes six characters
    print("2. Assigning codes...")
    status_table = assign(status, GenerationConfig(code_length=6))
    networking_table = assign(networking, child_tables={"httpStatusCode": status_table})
    table = assign(errors, child_tables={"networking": networking_table})

    result = check(table, recursive=True)
    result.raise_for_collisions()
    for name, code in table.items():
        print(f"   {errors.qualified_name(name):<30} {code}")
    print()

    # Encode bottom-up: child first, then wrap
    print("3. Encoding networking(httpStatusCode(badRequest))...")
    status_code = encode(status_table, "badRequest")
    networking_code = encode(networking_table, "httpStatusCode", status_code)
    code = encode(table, "networking", networking_code)
    print(f"   {code}")
    print()

    # Decode top-down
    print("4. Decoding...")
    value = decode(table, code)
    print(f"   {code} -> {value}")

    for bad in ("", "ZZZZ", "6DWR-extra", "8BUT-gjmR-ZZZZZZ"):
        try:
            decode(table, bad)
        except ChildDecodeError as err:
            print(f"   {bad!r}: {type(err.root_cause).__name__} at level {err.depth}")
        except DecodeError as err:
            print(f"   {bad!r}: {type(err).__name__}")
    print()


if __name__ == "__main__":
    main()
