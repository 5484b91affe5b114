"""Property-based tests using hypothesis."""

from __future__ import annotations

from hypothesis import assume, given
from hypothesis import strategies as st

from opaquecode import (
    DEFAULT_ALPHABET,
    DecodeError,
    GenerationConfig,
    SchemaModel,
    assign,
    check,
    decode,
    derive_code,
    encode,
    encode_value,
)

variant_names = st.from_regex(r"[a-z][A-Za-z0-9]{0,11}", fullmatch=True)
variant_name_sets = st.lists(variant_names, min_size=1, max_size=12, unique=True)
alphabets = st.text(alphabet=DEFAULT_ALPHABET, min_size=5, max_size=62)

STATUS = SchemaModel.build("HTTPStatusCode", {"badRequest": None, "notFound": None})
NETWORKING = SchemaModel.build(
    "NetworkingErrorCode", {"httpStatusCode": STATUS, "noInternet": None, "badRequest": None}
)
ERRORS = SchemaModel.build("ErrorCodes", {"networking": NETWORKING, "repository": None})
ERRORS_TABLE = assign(ERRORS)


class TestHashingProperties:
    """Property-based tests for code derivation."""

    @given(identifier=st.text(), length=st.integers(min_value=1, max_value=16))
    def test_derive_code_shape(self, identifier: str, length: int) -> None:
        """Test codes have the requested length and use only the alphabet."""
        code = derive_code(identifier, DEFAULT_ALPHABET, length)

        assert len(code) == length
        assert set(code) <= set(DEFAULT_ALPHABET)

    @given(identifier=st.text(), length=st.integers(min_value=1, max_value=16))
    def test_derive_code_deterministic(self, identifier: str, length: int) -> None:
        """Test derivation depends on nothing but its inputs."""
        assert derive_code(identifier, DEFAULT_ALPHABET, length) == derive_code(
            identifier, DEFAULT_ALPHABET, length
        )

    @given(alphabet=alphabets, names=variant_name_sets)
    def test_alphabet_order_does_not_matter(self, alphabet: str, names: list[str]) -> None:
        """Test the alphabet is normalized before codes are drawn from it."""
        schema = SchemaModel.build("Fuzz", {name: None for name in names})
        forward = assign(schema, GenerationConfig(alphabet=alphabet))
        backward = assign(schema, GenerationConfig(alphabet=alphabet[::-1]))

        assert dict(forward) == dict(backward)


class TestCodecProperties:
    """Property-based tests for encode/decode."""

    @given(names=variant_name_sets, length=st.integers(min_value=1, max_value=8))
    def test_leaf_roundtrip_when_collision_free(self, names: list[str], length: int) -> None:
        """Test every leaf code decodes to its own variant when codes are unique."""
        schema = SchemaModel.build("Fuzz", {name: None for name in names})
        table = assign(schema, GenerationConfig(code_length=length))
        result = check(table)

        if result.ok:
            assert len(set(table.values())) == len(table)
            for variant in schema:
                assert decode(table, encode(table, variant)).variant == variant
        else:
            shared = {collision.code for collision in result}
            assert len(set(table.values())) < len(table)
            assert all(list(table.values()).count(code) > 1 for code in shared)

    @given(parent=variant_name_sets, child=variant_name_sets)
    def test_nested_roundtrip(self, parent: list[str], child: list[str]) -> None:
        """Test nested values survive encode then decode."""
        inner = SchemaModel.build("Inner", {name: None for name in child})
        outer = SchemaModel.build("Outer", {name: inner for name in parent})
        table = assign(outer)
        assume(check(table, recursive=True).ok)

        for parent_variant in outer:
            for child_variant in inner:
                code = encode(
                    table, parent_variant, encode(table.child_table(parent_variant), child_variant)
                )
                value = decode(table, code)

                assert value.path == [parent_variant.name, child_variant.name]
                assert encode_value(table, value) == code

    @given(text=st.text(alphabet=DEFAULT_ALPHABET + "-", max_size=24))
    def test_decode_is_strict(self, text: str) -> None:
        """Test arbitrary input either fails with a DecodeError or re-encodes exactly."""
        try:
            value = decode(ERRORS_TABLE, text)
        except DecodeError:
            return

        assert encode_value(ERRORS_TABLE, value) == text

    @given(names=variant_name_sets)
    def test_assign_deterministic(self, names: list[str]) -> None:
        """Test assigning twice yields the same table."""
        schema = SchemaModel.build("Fuzz", {name: None for name in names})

        assert assign(schema) == assign(schema)
