"""Generation configuration for opaque codes.

This module provides the GenerationConfig model describing how codes are
derived (length and alphabet) and how nesting levels are joined (delimiter).
"""

from __future__ import annotations

import logging
import string
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CODE_LENGTH = 4
DEFAULT_ALPHABET = "".join(sorted(string.ascii_letters + string.digits))
DEFAULT_DELIMITER = "-"

# Fewer distinct characters than this makes collisions likely at any practical length
MIN_RECOMMENDED_ALPHABET_SIZE = 5


class GenerationConfig(BaseModel):
    """Configuration for code generation and composite code layout.

    Attributes:
        code_length: Number of characters in every generated code (default 4).
            Shorter codes are easier to report but collide more often.

        alphabet: Characters codes are drawn from (default ``[0-9A-Za-z]``).
            Duplicates are dropped and the remaining characters are sorted by
            code point, so ``"cba"`` and ``"abcabc"`` describe the same alphabet.

        delimiter: Separator placed between the codes of nesting levels
            (default ``"-"``). An empty delimiter concatenates codes directly.

    Examples:
        ```python
        from opaquecode import GenerationConfig

        # Defaults: 4 characters from [0-9A-Za-z], joined by "-"
        config = GenerationConfig()

        # Longer codes after a collision report
        config = config.with_code_length(5)

        # Upper-case only, dot separated
        config = GenerationConfig(alphabet="ABCDEFGHJKLMNPQRSTUVWXYZ", delimiter=".")
        ```

    Raises:
        ConfigError: If any value is invalid
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code_length: int = Field(default=DEFAULT_CODE_LENGTH, ge=1)
    alphabet: str = DEFAULT_ALPHABET
    delimiter: str = DEFAULT_DELIMITER

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as err:
            raise ConfigError(f"Invalid generation config: {err}") from err

    @field_validator("alphabet")
    @classmethod
    def _normalize_alphabet(cls, value: str) -> str:
        characters = "".join(sorted(set(value)))
        if not characters:
            raise ValueError("alphabet must contain at least one character")
        if len(characters) < MIN_RECOMMENDED_ALPHABET_SIZE:
            logger.warning(
                "Alphabet %r has only %d distinct characters; codes will collide easily",
                characters,
                len(characters),
            )
        return characters

    @model_validator(mode="after")
    def _check_delimiter(self) -> GenerationConfig:
        if len(self.delimiter) == 1 and self.delimiter in self.alphabet:
            raise ValueError(
                f"delimiter {self.delimiter!r} is part of the alphabet; "
                f"codes could contain it and decoding would be ambiguous"
            )
        return self

    def with_code_length(self, code_length: int) -> GenerationConfig:
        """Return a copy of this config with a different code length."""
        return GenerationConfig(
            code_length=code_length, alphabet=self.alphabet, delimiter=self.delimiter
        )


DEFAULT_CONFIG = GenerationConfig()
