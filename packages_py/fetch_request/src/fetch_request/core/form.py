"""
application/x-www-form-urlencoded bodies.
"""
import re
from typing import BinaryIO, List, Tuple
from urllib.parse import quote, unquote_plus

from ..config import FORM_CONTENT_TYPE
from ..media_type import MediaType
from .body import RequestBody

FORM_MEDIA_TYPE = MediaType.parse(FORM_CONTENT_TYPE)

# '%' not followed by two hex digits
_LONE_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_form_component(value: str) -> str:
    """Percent-encode a raw form name or value. Space becomes %20, '+' becomes %2B."""
    return quote(value, safe="*").replace("~", "%7E")


def canonicalize_encoded_form_component(value: str) -> str:
    """Encode characters illegal in a form body, keeping %XX triplets and '+'."""
    value = _LONE_PERCENT.sub("%25", value)
    return quote(value, safe="*%+").replace("~", "%7E")


class FormBody(RequestBody):
    """Ordered, already-encoded name/value pairs."""

    def __init__(self, encoded_pairs: List[Tuple[str, str]]):
        self._pairs: Tuple[Tuple[str, str], ...] = tuple(encoded_pairs)
        self._payload = "&".join(f"{name}={value}" for name, value in self._pairs).encode("ascii")

    @property
    def content_type(self) -> MediaType:
        return FORM_MEDIA_TYPE

    @property
    def content_length(self) -> int:
        return len(self._payload)

    @property
    def size(self) -> int:
        return len(self._pairs)

    def encoded_name(self, index: int) -> str:
        return self._pairs[index][0]

    def encoded_value(self, index: int) -> str:
        return self._pairs[index][1]

    def name(self, index: int) -> str:
        return unquote_plus(self.encoded_name(index))

    def value(self, index: int) -> str:
        return unquote_plus(self.encoded_value(index))

    def write_to(self, sink: BinaryIO) -> None:
        sink.write(self._payload)

    def __repr__(self) -> str:
        return f"FormBody(size={self.size}, length={self.content_length})"


class FormBodyBuilder:
    """Accumulates form fields in insertion order."""

    def __init__(self):
        self._pairs: List[Tuple[str, str]] = []

    def add(self, name: str, value: str) -> "FormBodyBuilder":
        """Add a field whose name and value are not yet encoded."""
        self._pairs.append((encode_form_component(name), encode_form_component(value)))
        return self

    def add_encoded(self, name: str, value: str) -> "FormBodyBuilder":
        """Add a field whose name and value are already percent-encoded."""
        self._pairs.append(
            (canonicalize_encoded_form_component(name), canonicalize_encoded_form_component(value))
        )
        return self

    def __len__(self) -> int:
        return len(self._pairs)

    def build(self) -> FormBody:
        return FormBody(self._pairs)
