"""
Media type (content type) parsing.

Accepts ``type/subtype`` followed by any number of ``; name=value``
parameters, where the value is either a token or a quoted string:

    MediaType.parse("text/plain; charset=utf-8")
    MediaType.parse('multipart/form-data; boundary="abc 123"')

``str()`` of a parsed media type returns the original text unchanged, so a
value read from a header is emitted back exactly as it was given.
"""
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import MalformedContentTypeError

_TOKEN = r"[a-zA-Z0-9\-!#$%&'*+.^_`{|}~]+"
_QUOTED = r'"([^"\r\n\x00]*)"'
_TYPE_SUBTYPE = re.compile(rf"({_TOKEN})/({_TOKEN})")
_PARAMETER = re.compile(rf";[ \t]*(?:({_TOKEN})=(?:({_TOKEN})|{_QUOTED}))?")


@dataclass(frozen=True)
class MediaType:
    """An RFC 2045 media type."""

    text: str
    type: str
    subtype: str
    parameters: Tuple[Tuple[str, str], ...] = field(default=())

    @classmethod
    def parse(cls, value: str) -> "MediaType":
        """Parse ``value``, raising MalformedContentTypeError on failure."""
        if not isinstance(value, str):
            raise MalformedContentTypeError(repr(value), "not a string")

        match = _TYPE_SUBTYPE.match(value)
        if match is None:
            raise MalformedContentTypeError(value, "expected type/subtype")

        parameters = []
        charset: Optional[str] = None
        pos = match.end()
        while pos < len(value):
            # Whitespace before each ';' is tolerated.
            while pos < len(value) and value[pos] in " \t":
                pos += 1
            if pos == len(value):
                break

            param = _PARAMETER.match(value, pos)
            if param is None:
                raise MalformedContentTypeError(
                    value, f"unexpected text at {pos}: {value[pos:]!r}"
                )
            pos = param.end()

            name = param.group(1)
            if name is None:
                continue
            param_value = param.group(2) if param.group(2) is not None else param.group(3)

            if name.lower() == "charset":
                if charset is not None and param_value.lower() != charset.lower():
                    raise MalformedContentTypeError(value, "multiple different charsets")
                charset = param_value
            parameters.append((name, param_value))

        return cls(
            text=value,
            type=match.group(1).lower(),
            subtype=match.group(2).lower(),
            parameters=tuple(parameters),
        )

    @classmethod
    def coerce(cls, value: "MediaType | str") -> "MediaType":
        """Return ``value`` unchanged if already a MediaType, otherwise parse it."""
        if isinstance(value, MediaType):
            return value
        return cls.parse(value)

    def parameter(self, name: str) -> Optional[str]:
        """Return the first parameter named ``name`` (case-insensitive)."""
        lowered = name.lower()
        for key, value in self.parameters:
            if key.lower() == lowered:
                return value
        return None

    @property
    def charset(self) -> Optional[str]:
        return self.parameter("charset")

    @property
    def essence(self) -> str:
        """``type/subtype`` without parameters."""
        return f"{self.type}/{self.subtype}"

    def __str__(self) -> str:
        return self.text
