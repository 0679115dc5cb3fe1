"""
Tests for core/form.py
Logic testing: Decision/Branch, Equivalence partitioning, Boundary Value coverage
"""
import pytest

from fetch_request.core.form import (
    FormBody,
    FormBodyBuilder,
    canonicalize_encoded_form_component,
    encode_form_component,
)


class TestEncodeFormComponent:
    """Tests for encode_form_component."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Ada", "Ada"),
            ("a b", "a%20b"),
            ("c+d", "c%2Bd"),
            ("x/y?z&w=v", "x%2Fy%3Fz%26w%3Dv"),
            ("100%", "100%25"),
            ("~*-._", "%7E*-._"),
            ("é", "%C3%A9"),
        ],
    )
    def test_encode(self, raw, expected):
        assert encode_form_component(raw) == expected


class TestCanonicalizeEncodedFormComponent:
    """Tests for canonicalize_encoded_form_component."""

    @pytest.mark.parametrize(
        "encoded,expected",
        [
            ("a%20b", "a%20b"),
            ("a+b", "a+b"),
            ("100%", "100%25"),
            ("%zz", "%25zz"),
            ("a b", "a%20b"),
            ("%2F/", "%2F%2F"),
        ],
    )
    def test_canonicalize(self, encoded, expected):
        assert canonicalize_encoded_form_component(encoded) == expected


class TestFormBodyBuilder:
    """Tests for FormBodyBuilder and FormBody."""

    # Path: single field
    def test_single_field(self):
        body = FormBodyBuilder().add("name", "Ada").build()

        assert body.to_bytes() == b"name=Ada"
        assert body.content_length == 8
        assert str(body.content_type) == "application/x-www-form-urlencoded"

    # Path: fields joined in insertion order
    def test_field_order(self):
        body = (
            FormBodyBuilder()
            .add("b", "2")
            .add("a", "1")
            .add("b", "3")
            .build()
        )

        assert body.to_bytes() == b"b=2&a=1&b=3"
        assert body.size == 3

    # Decision: encoded fields are not encoded again
    def test_mixed_encoded(self):
        body = FormBodyBuilder().add("q", "a b").add_encoded("r", "a%20b").build()

        assert body.to_bytes() == b"q=a%20b&r=a%20b"

    # Path: accessors return encoded and decoded forms
    def test_accessors(self):
        body = FormBodyBuilder().add("a b", "c+d").build()

        assert body.encoded_name(0) == "a%20b"
        assert body.encoded_value(0) == "c%2Bd"
        assert body.name(0) == "a b"
        assert body.value(0) == "c+d"

    # Decision: '+' in an already-encoded value decodes as space
    def test_encoded_plus_decodes_as_space(self):
        body = FormBodyBuilder().add_encoded("q", "a+b").build()

        assert body.value(0) == "a b"

    # Boundary: empty form
    def test_empty_form(self):
        builder = FormBodyBuilder()
        body = builder.build()

        assert len(builder) == 0
        assert isinstance(body, FormBody)
        assert body.to_bytes() == b""
        assert body.content_length == 0

    # Path: content_length matches written bytes
    def test_length_matches_bytes(self):
        body = FormBodyBuilder().add("name", "Zoë Ä").add("x", "&=").build()

        assert body.content_length == len(body.to_bytes())
