"""
Request body types.

A body knows its media type, its length when that is known up front, and how
to write its bytes to a binary sink. The transport decides when to call
``write_to``; nothing here performs I/O beyond writing to the given sink.
"""
import io
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional, Union

from ..errors import MalformedContentTypeError
from ..media_type import MediaType

DEFAULT_CHARSET = "utf-8"


class RequestBody(ABC):
    """Payload of an outbound request."""

    @property
    @abstractmethod
    def content_type(self) -> Optional[MediaType]:
        """Media type of the payload, if any."""

    @property
    def content_length(self) -> Optional[int]:
        """Number of bytes ``write_to`` will produce, or None when unknown."""
        return None

    @abstractmethod
    def write_to(self, sink: BinaryIO) -> None:
        """Write the payload to ``sink``."""

    def to_bytes(self) -> bytes:
        """Collect the payload into memory."""
        buffer = io.BytesIO()
        self.write_to(buffer)
        return buffer.getvalue()


class BytesBody(RequestBody):
    """A body backed by an in-memory byte string."""

    def __init__(self, content: bytes, content_type: Optional[MediaType] = None):
        self._content = bytes(content)
        self._content_type = content_type

    @property
    def content_type(self) -> Optional[MediaType]:
        return self._content_type

    @property
    def content_length(self) -> int:
        return len(self._content)

    def write_to(self, sink: BinaryIO) -> None:
        sink.write(self._content)

    def __repr__(self) -> str:
        return f"BytesBody(content_type={str(self._content_type) if self._content_type else None!r}, length={len(self._content)})"


def create_body(
    content: Union[str, bytes, bytearray, memoryview],
    content_type: Union[MediaType, str, None] = None,
) -> BytesBody:
    """
    Create a body from text or bytes.

    Text is encoded with the media type's charset. When the media type names no
    charset, UTF-8 is used and appended to the media type.
    """
    media_type = MediaType.coerce(content_type) if content_type is not None else None

    if isinstance(content, str):
        charset = media_type.charset if media_type is not None else None
        if charset is None:
            charset = DEFAULT_CHARSET
            if media_type is not None:
                media_type = MediaType.parse(f"{media_type}; charset={DEFAULT_CHARSET}")
        try:
            encoded = content.encode(charset)
        except LookupError as e:
            raise MalformedContentTypeError(str(media_type), f"unknown charset {charset!r}") from e
        return BytesBody(encoded, media_type)

    return BytesBody(bytes(content), media_type)


def empty_body() -> BytesBody:
    """A zero-length body with no media type."""
    return BytesBody(b"")


class ContentTypeOverridingBody(RequestBody):
    """Reports a different media type; length and bytes come from the delegate."""

    def __init__(self, delegate: RequestBody, content_type: MediaType):
        self._delegate = delegate
        self._content_type = content_type

    @property
    def delegate(self) -> RequestBody:
        return self._delegate

    @property
    def content_type(self) -> MediaType:
        return self._content_type

    @property
    def content_length(self) -> Optional[int]:
        return self._delegate.content_length

    def write_to(self, sink: BinaryIO) -> None:
        self._delegate.write_to(sink)

    def __repr__(self) -> str:
        return f"ContentTypeOverridingBody({self._delegate!r}, content_type={str(self._content_type)!r})"
