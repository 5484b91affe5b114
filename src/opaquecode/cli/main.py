"""Main CLI entry point for opaquecode."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file, decode_target
from ..exceptions import ChildDecodeError, DecodeError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the opaquecode CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="opaquecode",
        description="opaquecode: Opaque Error Codes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  opaquecode --analyze errors.py                    Show code tables and collisions
  opaquecode --decode errors.py:ErrorCodes 6DWR     Decode an opaque code
  opaquecode --version                              Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze ErrorCode classes and report code collisions",
    )

    parser.add_argument(
        "--decode",
        nargs=2,
        metavar=("TARGET", "CODE"),
        help="Decode CODE with the ErrorCode class TARGET (FILE:CLASS or MODULE:CLASS)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"opaquecode {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            return 0 if analyze_file(file_path) else 1
        except Exception as e:
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # Handle --decode
    if args.decode:
        target, opaque_code = args.decode
        try:
            error_code = decode_target(target, opaque_code)
        except ChildDecodeError as e:
            print(f"Error: {e}", file=sys.stderr)
            print(f"  innermost failure at level {e.depth}: {e.root_cause}", file=sys.stderr)
            return 1
        except (DecodeError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(error_code)
        return 0

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
