#!/usr/bin/env python3
"""Example error code definitions.

Analyze them with the CLI:

    opaquecode --analyze examples/errors.py
    opaquecode --decode examples/errors.py:ErrorCodes 8BUT-gjmR-Tk1iR6
"""

from __future__ import annotations

from opaquecode import ErrorCode


class ErrorCodes(ErrorCode):
    """Top-level error codes of an app."""

    opaque_code_cases = {
        "networking": "NetworkingErrorCode",
        "repository": None,
        "coding": "CodingErrorCode",
    }


class NetworkingErrorCode(ErrorCode):
    """Errors raised by the networking layer."""

    opaque_code_cases = {
        "httpStatusCode": "HTTPStatusCode",
        "noInternet": None,
        "badRequest": None,
    }


class HTTPStatusCode(ErrorCode):
    """HTTP status codes, with longer opaque codes."""

    opaque_code_cases = {"badRequest": None, "notFound": None}
    opaque_code_length = 6


class CodingErrorCode(ErrorCode):
    """Errors raised while encoding or decoding payloads."""

    opaque_code_cases = {"encoding": None, "decoding": None}


def main() -> None:
    """Print a few codes and decode them again."""
    errors = [
        ErrorCodes.of(
            "networking",
            NetworkingErrorCode.of("httpStatusCode", HTTPStatusCode.of("badRequest")),
        ),
        ErrorCodes.of("repository"),
        ErrorCodes.of("coding", CodingErrorCode.of("decoding")),
    ]

    for error in errors:
        code = error.opaque_code
        print(f"{str(error):<75} -> {code}")
        assert ErrorCodes.from_opaque_code(code) == error


if __name__ == "__main__":
    main()
