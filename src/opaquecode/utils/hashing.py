"""Stable string hashing for code derivation.

This module provides the fixed hash used to turn a qualified variant name into
an opaque code. Python's built-in hash() is salted per process, so it can never
be used here: codes are persisted and exchanged, and the same name must map to
the same code on every machine and every run.

The hash is a DJB2-style fold over the UTF-8 bytes of the input, run once per
output character with a position-dependent seed:

    h = 5381 * (position + length)
    for each byte b:
        h = (h << 5) + h + (b * b mod 256)      # signed 64-bit, wrapping

The output character is ``alphabet[|h| mod len(alphabet)]``.
"""

from __future__ import annotations

DJB2_SEED = 5381

_MASK_64 = (1 << 64) - 1
_SIGN_64 = 1 << 63


def _to_signed_64(value: int) -> int:
    value &= _MASK_64
    return value - (1 << 64) if value & _SIGN_64 else value


def position_hash(data: bytes, position: int, length: int) -> int:
    """Calculate the signed 64-bit hash of ``data`` for one output position.

    Args:
        data: Bytes to hash
        position: Zero-based index of the output character
        length: Total number of output characters

    Returns:
        Signed 64-bit hash value

    Example:
        >>> position_hash(b"", 0, 4)
        21524
    """
    h = _to_signed_64(DJB2_SEED * (position + length))

    for byte in data:
        h = _to_signed_64((h << 5) + h + ((byte * byte) & 0xFF))

    return h


def derive_code(identifier: str, alphabet: str, length: int) -> str:
    """Derive a deterministic code of ``length`` characters from ``identifier``.

    Args:
        identifier: Text to hash (normally ``"Schema.variant"``)
        alphabet: Characters to draw from, already de-duplicated and sorted
        length: Number of characters to produce

    Returns:
        The derived code

    Raises:
        ValueError: If alphabet is empty or length is not positive

    Example:
        >>> from opaquecode.config import DEFAULT_ALPHABET
        >>> derive_code("ErrorCodes.repository", DEFAULT_ALPHABET, 4)
        '6DWR'
    """
    if not alphabet:
        raise ValueError("alphabet must not be empty")
    if length < 1:
        raise ValueError(f"length must be >= 1, got {length}")

    data = identifier.encode("utf-8")
    size = len(alphabet)

    return "".join(
        alphabet[abs(position_hash(data, position, length)) % size] for position in range(length)
    )
