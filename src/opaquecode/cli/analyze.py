"""Error code analysis CLI commands."""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import sys
from pathlib import Path

from ..codec.collisions import check
from ..codec.table import CodeTable
from ..models.base import ErrorCode
from ..utils.capacity import code_space, collision_probability, max_composite_length


def load_module(file_path: Path, module_name: str = "user_module") -> object:
    """Load a Python file as a module.

    Args:
        file_path: Path to Python file containing error code definitions
        module_name: Name to register the module under

    Returns:
        The loaded module
    """
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def find_error_codes(module: object) -> list[type[ErrorCode]]:
    """All ErrorCode subclasses defined (not imported) in a module."""
    module_name = getattr(module, "__name__", None)
    return [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not ErrorCode and issubclass(obj, ErrorCode) and obj.__module__ == module_name
    ]


def analyze_file(file_path: Path) -> bool:
    """Analyze all ErrorCode classes in a Python file.

    Args:
        file_path: Path to Python file containing error code definitions

    Returns:
        True when no class has colliding codes
    """
    module = load_module(file_path)
    error_codes = find_error_codes(module)

    if not error_codes:
        print(f"No ErrorCode classes found in {file_path}")
        return True

    print("|" * 7, "opaquecode: Opaque Error Codes", "|" * 7)
    print(f"{len(error_codes)} error code{'s' if len(error_codes) != 1 else ''} loaded.")
    print()

    clean = True
    for error_code in error_codes:
        clean = analyze_error_code(error_code) and clean

    return clean


def analyze_error_code(error_code: type[ErrorCode]) -> bool:
    """Print the code table of one ErrorCode class and report collisions.

    Args:
        error_code: ErrorCode subclass to analyze

    Returns:
        True when the class's own codes are pairwise distinct
    """
    table = error_code.build_opaque_code_table()
    config = table.config
    source = "generated" if table.generated else "manual"

    print(f"{'=' * 19} {error_code.__name__} {'=' * 19}")
    print(
        f"{len(table)} cases, {source} codes of length {config.code_length} "
        f"from {len(config.alphabet)} characters, delimiter {config.delimiter!r}"
    )
    if table.generated:
        probability = collision_probability(len(table), config)
        print(f"Code space: {code_space(config)} (collision probability {probability:.2e})")
    print(f"Longest composite code: {max_composite_length(table)} characters")
    print()

    _print_cases(table)
    print()

    result = check(table)
    if result.ok:
        print("No collisions.")
    else:
        for collision in result:
            print(f"COLLISION: {collision}")
        for hint in result.remediations():
            print(f"  fix: {hint}")

    print()
    return result.ok


def _print_cases(table: CodeTable) -> None:
    for index, variant in enumerate(table.schema.variants(), 1):
        description = f"{index}. {variant.name}"
        if variant.child is not None:
            description += f"({variant.child.name})"
        dots = "." * max(1, 54 - len(description) - len(table[variant.name]))
        print(f"        {description}{dots}{table[variant.name]}")


def load_error_code(target: str) -> type[ErrorCode]:
    """Resolve ``"path/to/file.py:ClassName"`` or ``"package.module:ClassName"``.

    Raises:
        ValueError: If the target is malformed or does not name an ErrorCode class
    """
    location, separator, class_name = target.rpartition(":")
    if not separator or not location or not class_name:
        raise ValueError(f"Expected FILE:CLASS or MODULE:CLASS, got {target!r}")

    if location.endswith(".py"):
        file_path = Path(location)
        if not file_path.exists():
            raise ValueError(f"File not found: {file_path}")
        module = load_module(file_path)
    else:
        module = importlib.import_module(location)

    error_code = getattr(module, class_name, None)
    if not (isinstance(error_code, type) and issubclass(error_code, ErrorCode)):
        raise ValueError(f"{class_name} in {location} is not an ErrorCode class")
    return error_code


def decode_target(target: str, opaque_code: str) -> ErrorCode:
    """Decode an opaque code against the ErrorCode class named by ``target``.

    Raises:
        ValueError: If the target cannot be resolved
        DecodeError: If the code does not decode
    """
    return load_error_code(target).from_opaque_code(opaque_code)
