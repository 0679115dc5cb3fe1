"""
Multipart bodies.

Layout written by MultipartBody.write_to:

    --<boundary>\r\n
    <part header>: <value>\r\n          (zero or more)
    Content-Type: <part type>\r\n       (when the part body has one)
    Content-Length: <part length>\r\n   (when the part body knows it)
    \r\n
    <part payload>\r\n
    ...
    --<boundary>--\r\n
"""
import io
import re
from dataclasses import dataclass
from typing import BinaryIO, List, Optional, Tuple, Union

from ..config import DEFAULT_CONFIG
from ..errors import RequestBuilderError
from ..media_type import MediaType
from ..types import CONTENT_LENGTH, CONTENT_TYPE, HeaderPair, HeadersInput, normalize_headers
from .body import RequestBody, create_body

CRLF = b"\r\n"
DASHDASH = b"--"

_TOKEN = re.compile(r"[a-zA-Z0-9\-!#$%&'*+.^_`{|}~]+")


def _quote_form_value(value: str) -> str:
    """Quote a Content-Disposition parameter, escaping CR, LF and '"'."""
    escaped = value.replace("\n", "%0A").replace("\r", "%0D").replace('"', "%22")
    return f'"{escaped}"'


@dataclass(frozen=True)
class Part:
    """One part of a multipart body: its own headers plus a body."""

    headers: Tuple[HeaderPair, ...]
    body: RequestBody

    def __post_init__(self):
        for name, _ in self.headers:
            if name.lower() in (CONTENT_TYPE.lower(), CONTENT_LENGTH.lower()):
                raise ValueError(f"Unexpected header: {name}; it is derived from the part body")

    @classmethod
    def create(cls, body: RequestBody, headers: Optional[HeadersInput] = None) -> "Part":
        return cls(headers=tuple(normalize_headers(headers)), body=body)

    @classmethod
    def create_form_data(
        cls,
        name: str,
        value: Optional[str] = None,
        filename: Optional[str] = None,
        body: Optional[RequestBody] = None,
    ) -> "Part":
        """
        Create a form-data part.

        Pass ``value`` for a plain text field, or ``body`` (optionally with
        ``filename``) for file content.
        """
        if (value is None) == (body is None):
            raise ValueError("exactly one of value or body is required")
        if body is None:
            body = create_body(value)

        disposition = f"form-data; name={_quote_form_value(name)}"
        if filename is not None:
            disposition += f"; filename={_quote_form_value(filename)}"
        return cls(headers=(("Content-Disposition", disposition),), body=body)


class MultipartBody(RequestBody):
    """A body made of ordered parts separated by a boundary."""

    def __init__(self, boundary: str, media_type: MediaType, parts: List[Part]):
        self._boundary = boundary
        self._original_type = media_type
        boundary_param = boundary if _TOKEN.fullmatch(boundary) else f'"{boundary}"'
        self._content_type = MediaType.parse(f"{media_type}; boundary={boundary_param}")
        self._parts: Tuple[Part, ...] = tuple(parts)

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def type(self) -> MediaType:
        """The multipart type without the boundary parameter."""
        return self._original_type

    @property
    def parts(self) -> Tuple[Part, ...]:
        return self._parts

    @property
    def content_type(self) -> MediaType:
        return self._content_type

    @property
    def content_length(self) -> Optional[int]:
        counter = io.BytesIO()
        total = 0
        for part in self._parts:
            length = part.body.content_length
            if length is None:
                return None
            self._write_part_head(counter, part, length)
            total += length
        self._write_tail(counter)
        return total + counter.tell() + len(CRLF) * len(self._parts)

    def write_to(self, sink: BinaryIO) -> None:
        for part in self._parts:
            self._write_part_head(sink, part, part.body.content_length)
            part.body.write_to(sink)
            sink.write(CRLF)
        self._write_tail(sink)

    def _write_part_head(self, sink: BinaryIO, part: Part, length: Optional[int]) -> None:
        boundary = self._boundary.encode("utf-8")
        sink.write(DASHDASH + boundary + CRLF)
        for name, value in part.headers:
            sink.write(f"{name}: {value}".encode("utf-8") + CRLF)
        if part.body.content_type is not None:
            sink.write(f"{CONTENT_TYPE}: {part.body.content_type}".encode("utf-8") + CRLF)
        if length is not None:
            sink.write(f"{CONTENT_LENGTH}: {length}".encode("utf-8") + CRLF)
        sink.write(CRLF)

    def _write_tail(self, sink: BinaryIO) -> None:
        sink.write(DASHDASH + self._boundary.encode("utf-8") + DASHDASH + CRLF)

    def __repr__(self) -> str:
        return f"MultipartBody(type={str(self._original_type)!r}, boundary={self._boundary!r}, parts={len(self._parts)})"


class MultipartBodyBuilder:
    """Accumulates parts in insertion order."""

    def __init__(self, boundary: Optional[str] = None):
        self._boundary = boundary or DEFAULT_CONFIG.boundary_factory()
        self._type = DEFAULT_CONFIG.multipart_type
        self._parts: List[Part] = []

    def set_type(self, media_type: Union[MediaType, str]) -> "MultipartBodyBuilder":
        media_type = MediaType.coerce(media_type)
        if media_type.type != "multipart":
            raise ValueError(f"multipart != {media_type}")
        self._type = media_type
        return self

    def add_part(self, body: RequestBody, headers: Optional[HeadersInput] = None) -> "MultipartBodyBuilder":
        return self.add(Part.create(body, headers))

    def add_form_data_part(
        self,
        name: str,
        value: Optional[str] = None,
        filename: Optional[str] = None,
        body: Optional[RequestBody] = None,
    ) -> "MultipartBodyBuilder":
        return self.add(Part.create_form_data(name, value=value, filename=filename, body=body))

    def add(self, part: Part) -> "MultipartBodyBuilder":
        self._parts.append(part)
        return self

    def __len__(self) -> int:
        return len(self._parts)

    def build(self) -> MultipartBody:
        if not self._parts:
            raise RequestBuilderError("Multipart body must have at least one part.")
        return MultipartBody(self._boundary, self._type, self._parts)
