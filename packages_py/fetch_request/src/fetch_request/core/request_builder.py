"""
Request builder for fetch_request.

A RequestBuilder is created once per outbound call by the binding layer,
receives the call's template variables, headers and body pieces, and is
consumed by a single build() that returns an immutable Request.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

import httpx

from ..config import BuilderConfig, ResolvedBuilderConfig, resolve_config
from ..errors import (
    BodyModeError,
    BuilderConsumedError,
    MalformedUrlError,
    MethodBodyError,
    MissingTemplateError,
    UriTemplateError,
)
from ..media_type import MediaType
from ..types import (
    CONTENT_TYPE,
    BodyMode,
    HeaderPair,
    HeadersInput,
    Request,
    normalize_headers,
    permits_request_body,
    requires_request_body,
)
from .body import RequestBody
from .body_selector import resolve_content_type, select_body
from .form import FormBodyBuilder
from .multipart import MultipartBodyBuilder, Part
from .uri_template import UriTemplate

logger = logging.getLogger("fetch_request.request_builder")

_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_SENSITIVE_HEADERS = ("authorization", "proxy-authorization", "cookie", "x-api-key")


def _mask_headers_for_logging(headers: List[HeaderPair]) -> List[HeaderPair]:
    """Mask credential-bearing header values for safe logging."""
    masked = []
    for name, value in headers:
        if name.lower() in _SENSITIVE_HEADERS:
            value = value[:6] + "***" if len(value) > 6 else "***"
        masked.append((name, value))
    return masked


def _check_header(name: str, value: str) -> None:
    if not isinstance(name, str) or not _TOKEN.match(name):
        raise ValueError(f"Invalid header name: {name!r}")
    if not isinstance(value, str):
        raise ValueError(f"Header value for {name} must be a str, got {type(value).__name__}")
    if any(ch in value for ch in "\r\n\x00"):
        raise ValueError(f"Invalid header value for {name}: contains CR, LF or NUL")


# Body slots: exactly one per builder, chosen at construction.

@dataclass
class NoBodySlot:
    mode: BodyMode = field(default=BodyMode.NONE, init=False)


@dataclass
class FormSlot:
    builder: FormBodyBuilder = field(default_factory=FormBodyBuilder)
    mode: BodyMode = field(default=BodyMode.FORM, init=False)


@dataclass
class MultipartSlot:
    builder: MultipartBodyBuilder
    mode: BodyMode = field(default=BodyMode.MULTIPART, init=False)


@dataclass
class RawSlot:
    body: Optional[RequestBody] = None
    mode: BodyMode = field(default=BodyMode.RAW, init=False)


BodySlot = Union[NoBodySlot, FormSlot, MultipartSlot, RawSlot]


class RequestBuilder:
    """Accumulates one request's parts and assembles them into a Request."""

    def __init__(
        self,
        method: str,
        base_url: Union[str, httpx.URL],
        template: Union[str, UriTemplate, None] = None,
        headers: Optional[HeadersInput] = None,
        content_type: Union[MediaType, str, None] = None,
        has_body: bool = False,
        is_form_encoded: bool = False,
        is_multipart: bool = False,
        config: Optional[BuilderConfig] = None,
    ):
        if not isinstance(method, str) or not _TOKEN.match(method):
            raise ValueError(f"Invalid HTTP method: {method!r}")

        self._config: ResolvedBuilderConfig = resolve_config(config)
        self._method = method
        self._base_url = self._parse_base_url(base_url)
        self._template = template
        self._variables: Dict[str, str] = {}
        self._headers: List[HeaderPair] = []
        self._content_type: Optional[MediaType] = None
        for name, value in normalize_headers(headers):
            if name.lower() == CONTENT_TYPE.lower():
                self._content_type = MediaType.parse(value)
            else:
                self._headers.append((name, value))
        if content_type is not None:
            self._content_type = MediaType.coerce(content_type)
        self._has_body = has_body
        self._built = False

        if is_form_encoded and is_multipart:
            logger.warning(
                f"RequestBuilder: both is_form_encoded and is_multipart set for "
                f"{method} {base_url}; using form encoding"
            )
        self._slot: BodySlot = self._create_slot(
            BodyMode.from_flags(has_body, is_form_encoded, is_multipart)
        )

        logger.debug(
            f"RequestBuilder: method={method}, base_url={self._base_url}, "
            f"mode={self._slot.mode.value}, has_body={has_body}"
        )

    def _parse_base_url(self, base_url: Union[str, httpx.URL]) -> httpx.URL:
        try:
            url = httpx.URL(base_url)
        except (httpx.InvalidURL, TypeError) as e:
            raise MalformedUrlError(str(base_url), reason=str(e)) from e
        if url.scheme not in self._config.allowed_schemes or not url.host:
            raise MalformedUrlError(str(base_url), reason="base URL must be absolute with an allowed scheme")
        return url

    def _create_slot(self, mode: BodyMode) -> BodySlot:
        if mode is BodyMode.FORM:
            return FormSlot()
        if mode is BodyMode.MULTIPART:
            builder = MultipartBodyBuilder(boundary=self._config.boundary_factory())
            builder.set_type(self._config.multipart_type)
            return MultipartSlot(builder)
        if mode is BodyMode.RAW:
            return RawSlot()
        return NoBodySlot()

    @property
    def method(self) -> str:
        return self._method

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    @property
    def mode(self) -> BodyMode:
        return self._slot.mode

    @property
    def content_type(self) -> Optional[MediaType]:
        """The explicit content type, if one was set."""
        return self._content_type

    def _ensure_building(self) -> None:
        if self._built:
            raise BuilderConsumedError("RequestBuilder has already been built")

    def _wrong_mode(self, operation: str, expected: BodyMode) -> BodyModeError:
        return BodyModeError(
            f"{operation} requires body mode '{expected.value}', "
            f"but this builder was created with mode '{self._slot.mode.value}'"
        )

    def set_template(self, template: Union[str, UriTemplate]) -> None:
        """Replace the pending URL template. The last call before build() wins."""
        self._ensure_building()
        self._template = template

    def add_header(self, name: str, value: str) -> None:
        """
        Add a header.

        Content-Type (any case) is not appended; it is parsed and becomes the
        explicit content type, replacing any earlier one. Other names are
        appended, and repeated names accumulate.
        """
        self._ensure_building()
        if isinstance(name, str) and name.lower() == CONTENT_TYPE.lower():
            # Parse first so a malformed value leaves the current type in place.
            self._content_type = MediaType.parse(value)
            return
        _check_header(name, value)
        self._headers.append((name, value))

    def add_variable(self, name: str, value: str) -> None:
        """Bind a template variable. The last write per name wins."""
        self._ensure_building()
        self._variables[name] = value

    def add_form_field(self, name: str, value: str, encoded: bool = False) -> None:
        """Append a form field; ``encoded`` means name and value are already percent-encoded."""
        self._ensure_building()
        slot = self._slot
        if not isinstance(slot, FormSlot):
            raise self._wrong_mode("add_form_field", BodyMode.FORM)
        if encoded:
            slot.builder.add_encoded(name, value)
        else:
            slot.builder.add(name, value)

    def add_part(self, part: Union[Part, RequestBody], headers: Optional[HeadersInput] = None) -> None:
        """Append a multipart part, either a ready Part or a body with its part headers."""
        self._ensure_building()
        slot = self._slot
        if not isinstance(slot, MultipartSlot):
            raise self._wrong_mode("add_part", BodyMode.MULTIPART)
        if isinstance(part, Part):
            if headers is not None:
                raise ValueError("headers cannot be given with a ready Part")
            slot.builder.add(part)
        else:
            slot.builder.add_part(part, headers)

    def set_body(self, body: RequestBody) -> None:
        """Set the raw body. The last call wins."""
        self._ensure_building()
        slot = self._slot
        if not isinstance(slot, RawSlot):
            raise self._wrong_mode("set_body", BodyMode.RAW)
        slot.body = body

    def _resolve_url(self) -> httpx.URL:
        if self._template is None:
            raise MissingTemplateError(
                f"No URL template set for {self._method} {self._base_url}"
            )

        template = self._template
        try:
            if not isinstance(template, UriTemplate):
                template = UriTemplate(template)
            expanded = template.expand(self._variables)
        except UriTemplateError as e:
            raise MalformedUrlError(str(self._base_url), str(self._template), str(e)) from e

        try:
            url = self._base_url.join(expanded)
        except (httpx.InvalidURL, ValueError) as e:
            raise MalformedUrlError(str(self._base_url), expanded, str(e)) from e

        if url.scheme not in self._config.allowed_schemes or not url.host:
            raise MalformedUrlError(str(self._base_url), expanded)

        logger.debug(f"RequestBuilder._resolve_url: template={template.template!r}, url={url}")
        return url

    def _select_body(self) -> Optional[RequestBody]:
        slot = self._slot
        return select_body(
            explicit_body=slot.body if isinstance(slot, RawSlot) else None,
            form=slot.builder if isinstance(slot, FormSlot) else None,
            multipart=slot.builder if isinstance(slot, MultipartSlot) else None,
            has_body=self._has_body,
        )

    def _check_method_body(self, body: Optional[RequestBody]) -> None:
        if not self._config.enforce_method_body:
            return
        if body is None and requires_request_body(self._method):
            raise MethodBodyError(f"method {self._method} must have a request body.")
        if body is not None and not permits_request_body(self._method):
            raise MethodBodyError(f"method {self._method} must not have a request body.")

    def build(self) -> Request:
        """Assemble the request. Valid once; the builder is unusable afterwards."""
        self._ensure_building()

        url = self._resolve_url()
        body = self._select_body()
        body, content_type_header = resolve_content_type(body, self._content_type)
        self._check_method_body(body)

        headers = list(self._headers)
        if content_type_header is not None:
            headers.append(content_type_header)

        request = Request(
            method=self._method,
            url=url,
            headers=tuple(headers),
            body=body,
        )
        self._built = True

        logger.debug(
            f"RequestBuilder.build: {self._method} {url}, "
            f"headers={_mask_headers_for_logging(headers)}, body={body!r}"
        )
        return request
