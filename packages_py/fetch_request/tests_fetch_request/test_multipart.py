"""
Tests for core/multipart.py
Logic testing: Decision/Branch, Boundary Value, Error Path coverage
"""
import pytest

from fetch_request.core.body import create_body
from fetch_request.core.multipart import MultipartBody, MultipartBodyBuilder, Part
from fetch_request.errors import RequestBuilderError


class TestPart:
    """Tests for Part."""

    # Path: form-data text field
    def test_create_form_data_value(self):
        part = Part.create_form_data("field", value="1")

        assert part.headers == (("Content-Disposition", 'form-data; name="field"'),)
        assert part.body.to_bytes() == b"1"
        assert part.body.content_type is None

    # Path: form-data file field
    def test_create_form_data_file(self):
        body = create_body(b"PNG", "image/png")
        part = Part.create_form_data("avatar", filename="me.png", body=body)

        assert part.headers == (
            ("Content-Disposition", 'form-data; name="avatar"; filename="me.png"'),
        )
        assert part.body is body

    # Path: quoting escapes CR, LF and double quotes
    def test_create_form_data_escaping(self):
        part = Part.create_form_data('a"b\r\n', value="x")

        assert part.headers[0][1] == 'form-data; name="a%22b%0D%0A"'

    # Error Path: both value and body
    def test_create_form_data_value_and_body(self):
        with pytest.raises(ValueError):
            Part.create_form_data("a", value="1", body=create_body(b"1"))

    # Error Path: neither value nor body
    def test_create_form_data_neither(self):
        with pytest.raises(ValueError):
            Part.create_form_data("a")

    @pytest.mark.parametrize("name", ["Content-Type", "content-length"])
    def test_rejects_body_headers(self, name):
        with pytest.raises(ValueError, match="Unexpected header"):
            Part.create(create_body(b"x"), {name: "1"})


class TestMultipartBody:
    """Tests for MultipartBody layout."""

    # Path: single text part
    def test_single_part_layout(self):
        body = MultipartBodyBuilder("BOUNDARY").add_form_data_part("a", "1").build()

        assert body.to_bytes() == (
            b"--BOUNDARY\r\n"
            b'Content-Disposition: form-data; name="a"\r\n'
            b"Content-Length: 1\r\n"
            b"\r\n"
            b"1\r\n"
            b"--BOUNDARY--\r\n"
        )
        assert str(body.content_type) == "multipart/form-data; boundary=BOUNDARY"
        assert body.content_type.parameter("boundary") == "BOUNDARY"

    # Path: typed part emits its Content-Type
    def test_typed_part_layout(self):
        body = (
            MultipartBodyBuilder("B")
            .add_part(create_body(b'{"k":1}', "application/json"), [("X-Part", "one")])
            .build()
        )

        assert body.to_bytes() == (
            b"--B\r\n"
            b"X-Part: one\r\n"
            b"Content-Type: application/json\r\n"
            b"Content-Length: 7\r\n"
            b"\r\n"
            b'{"k":1}\r\n'
            b"--B--\r\n"
        )

    # Path: content_length equals written length
    def test_content_length_matches(self):
        body = (
            MultipartBodyBuilder("xyz")
            .add_form_data_part("a", "1")
            .add_form_data_part("file", filename="f.txt", body=create_body("hello", "text/plain"))
            .build()
        )

        assert body.content_length == len(body.to_bytes())
        assert len(body.parts) == 2

    # Boundary: unknown part length makes the total unknown
    def test_unknown_length(self, chunked_body):
        body = MultipartBodyBuilder("B").add_part(chunked_body).build()

        assert body.content_length is None
        assert body.to_bytes() == (
            b"--B\r\n"
            b"Content-Type: application/octet-stream\r\n"
            b"\r\n"
            b"abcd\r\n"
            b"--B--\r\n"
        )

    # Decision: boundary with non-token characters is quoted in the content type
    def test_quoted_boundary(self):
        body = MultipartBodyBuilder("a b").add_form_data_part("a", "1").build()

        assert str(body.content_type) == 'multipart/form-data; boundary="a b"'
        assert body.boundary == "a b"

    # Path: default boundary is generated
    def test_default_boundary(self):
        first = MultipartBodyBuilder().add_form_data_part("a", "1").build()
        second = MultipartBodyBuilder().add_form_data_part("a", "1").build()

        assert first.boundary
        assert first.boundary != second.boundary


class TestMultipartBodyBuilder:
    """Tests for MultipartBodyBuilder."""

    # Decision: custom multipart subtype
    def test_set_type(self):
        body = MultipartBodyBuilder("B").set_type("multipart/mixed").add_form_data_part("a", "1").build()

        assert str(body.type) == "multipart/mixed"
        assert str(body.content_type) == "multipart/mixed; boundary=B"

    # Error Path: non-multipart type
    def test_set_type_rejects_non_multipart(self):
        with pytest.raises(ValueError):
            MultipartBodyBuilder("B").set_type("text/plain")

    # Error Path: no parts
    def test_build_without_parts(self):
        with pytest.raises(RequestBuilderError, match="at least one part"):
            MultipartBodyBuilder("B").build()

    # Path: ready-made parts keep insertion order
    def test_add_parts_in_order(self):
        first = Part.create_form_data("first", value="1")
        second = Part.create_form_data("second", value="2")

        builder = MultipartBodyBuilder("B").add(first).add(second)
        body = builder.build()

        assert len(builder) == 2
        assert isinstance(body, MultipartBody)
        assert body.parts == (first, second)
