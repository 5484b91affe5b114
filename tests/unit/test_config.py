"""Tests for generation configuration."""

from __future__ import annotations

import logging

import pytest

from opaquecode import DEFAULT_ALPHABET, ConfigError, GenerationConfig


class TestGenerationConfig:
    """Test GenerationConfig defaults and validation."""

    def test_defaults(self) -> None:
        """Test default length, alphabet and delimiter."""
        config = GenerationConfig()

        assert config.code_length == 4
        assert config.delimiter == "-"
        assert len(config.alphabet) == 62
        assert config.alphabet == DEFAULT_ALPHABET

    def test_default_alphabet_sorted(self) -> None:
        """Test the default alphabet reads digits, upper case, lower case."""
        assert DEFAULT_ALPHABET.startswith("0123456789ABC")
        assert DEFAULT_ALPHABET.endswith("xyz")

    def test_alphabet_deduplicated_and_sorted(self) -> None:
        """Test duplicate characters are dropped and the rest sorted."""
        config = GenerationConfig(alphabet="edcbaabcde")
        assert config.alphabet == "abcde"

    def test_equivalent_alphabets_equal(self) -> None:
        """Test configs with equivalent alphabets compare equal."""
        assert GenerationConfig(alphabet="cbaed") == GenerationConfig(alphabet="abcde")

    def test_empty_alphabet(self) -> None:
        """Test empty alphabet is rejected."""
        with pytest.raises(ConfigError):
            GenerationConfig(alphabet="")

    def test_zero_length(self) -> None:
        """Test code length below 1 is rejected."""
        with pytest.raises(ConfigError):
            GenerationConfig(code_length=0)

    def test_delimiter_in_alphabet(self) -> None:
        """Test a delimiter that codes could contain is rejected."""
        with pytest.raises(ConfigError, match="delimiter"):
            GenerationConfig(alphabet="abcde-", delimiter="-")

    def test_empty_delimiter_allowed(self) -> None:
        """Test empty delimiter means direct concatenation."""
        assert GenerationConfig(delimiter="").delimiter == ""

    def test_config_error_is_value_error(self) -> None:
        """Test ConfigError can be caught as ValueError."""
        with pytest.raises(ValueError):
            GenerationConfig(code_length=-1)

    def test_frozen(self) -> None:
        """Test configs cannot be modified."""
        config = GenerationConfig()
        with pytest.raises(Exception):
            config.code_length = 5  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Test unknown options are rejected."""
        with pytest.raises(ConfigError):
            GenerationConfig(length=4)  # type: ignore[call-arg]

    def test_with_code_length(self) -> None:
        """Test escalation keeps alphabet and delimiter."""
        config = GenerationConfig(alphabet="abcdef", delimiter=".")
        longer = config.with_code_length(5)

        assert longer.code_length == 5
        assert longer.alphabet == "abcdef"
        assert longer.delimiter == "."
        assert config.code_length == 4

    def test_small_alphabet_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test fewer than five characters is accepted with a warning."""
        with caplog.at_level(logging.WARNING, logger="opaquecode.config"):
            config = GenerationConfig(alphabet="ab")

        assert config.alphabet == "ab"
        assert "collide" in caplog.text
