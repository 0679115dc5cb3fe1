"""
Type definitions for fetch_request.
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

import httpx

from .media_type import MediaType

if TYPE_CHECKING:
    from .core.body import RequestBody


# HTTP methods
HttpMethod = Literal[
    "GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS",
    "PROPPATCH", "REPORT",
]

# Header pairs as accepted from the binding layer
HeaderPair = Tuple[str, str]
HeadersInput = Union[Mapping[str, str], Sequence[HeaderPair]]

CONTENT_TYPE = "Content-Type"
CONTENT_LENGTH = "Content-Length"

# Methods that must carry a request body
METHODS_REQUIRING_BODY = frozenset({"POST", "PUT", "PATCH", "PROPPATCH", "REPORT"})

# Methods that must not carry a request body
METHODS_FORBIDDING_BODY = frozenset({"GET", "HEAD"})


def requires_request_body(method: str) -> bool:
    """Whether ``method`` must be sent with a body."""
    return method.upper() in METHODS_REQUIRING_BODY


def permits_request_body(method: str) -> bool:
    """Whether ``method`` may be sent with a body."""
    return method.upper() not in METHODS_FORBIDDING_BODY


class BodyMode(str, Enum):
    """How a builder obtains its body; fixed at construction."""
    NONE = "none"
    FORM = "form"
    MULTIPART = "multipart"
    RAW = "raw"

    @classmethod
    def from_flags(cls, has_body: bool, is_form_encoded: bool, is_multipart: bool) -> "BodyMode":
        """Derive the mode; form wins when both form and multipart are set."""
        if is_form_encoded:
            return cls.FORM
        if is_multipart:
            return cls.MULTIPART
        if has_body:
            return cls.RAW
        return cls.NONE


def normalize_headers(headers: Optional[HeadersInput]) -> List[HeaderPair]:
    """Copy a mapping or a sequence of pairs into a list of pairs."""
    if headers is None:
        return []
    if isinstance(headers, httpx.Headers):
        items: Iterable = [
            (name.decode(headers.encoding), value.decode(headers.encoding))
            for name, value in headers.raw
        ]
    elif isinstance(headers, Mapping):
        items = headers.items()
    else:
        items = headers
    return [(str(name), str(value)) for name, value in items]


@dataclass(frozen=True)
class Request:
    """An immutable, fully assembled outbound HTTP request."""

    method: str
    url: httpx.URL
    headers: Tuple[HeaderPair, ...] = ()
    body: Optional["RequestBody"] = None

    def header(self, name: str) -> Optional[str]:
        """Return the last value of header ``name`` (case-insensitive)."""
        values = self.header_values(name)
        return values[-1] if values else None

    def header_values(self, name: str) -> List[str]:
        """Return every value of header ``name`` in order (case-insensitive)."""
        lowered = name.lower()
        return [value for key, value in self.headers if key.lower() == lowered]

    @property
    def content_type(self) -> Optional[MediaType]:
        """The body's media type, or the literal Content-Type header when bodiless."""
        if self.body is not None:
            return self.body.content_type
        literal = self.header(CONTENT_TYPE)
        return MediaType.parse(literal) if literal is not None else None

    def wire_headers(self) -> List[HeaderPair]:
        """Headers as sent: explicit headers plus those describing the body."""
        result = list(self.headers)
        if self.body is None:
            return result

        content_type = self.body.content_type
        if content_type is not None:
            result.append((CONTENT_TYPE, str(content_type)))
        content_length = self.body.content_length
        if content_length is not None:
            result.append((CONTENT_LENGTH, str(content_length)))
        return result
