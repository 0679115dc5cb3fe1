"""
Request assembly for declarative HTTP clients.

Turns a URL template, template variables, header directives and a body
description (raw, form-encoded or multipart) into one immutable Request.
Built requests convert to httpx.Request for sending.
"""
from .types import (
    HttpMethod,
    BodyMode,
    Request,
    requires_request_body,
    permits_request_body,
)
from .errors import (
    RequestBuilderError,
    MalformedContentTypeError,
    MalformedUrlError,
    UriTemplateError,
    BodyModeError,
    MissingTemplateError,
    BuilderConsumedError,
    MethodBodyError,
)
from .config import (
    BuilderConfig,
    ResolvedBuilderConfig,
    resolve_config,
)
from .media_type import MediaType
from .core.uri_template import UriTemplate, expand_template
from .core.body import (
    RequestBody,
    BytesBody,
    ContentTypeOverridingBody,
    create_body,
)
from .core.form import FormBody, FormBodyBuilder
from .core.multipart import MultipartBody, MultipartBodyBuilder, Part
from .core.body_selector import select_body, resolve_content_type
from .core.request_builder import RequestBuilder
from .adapters.httpx_adapter import to_httpx_request
from .factory import create_request_builder

__all__ = [
    # Types
    "HttpMethod",
    "BodyMode",
    "Request",
    "requires_request_body",
    "permits_request_body",
    # Errors
    "RequestBuilderError",
    "MalformedContentTypeError",
    "MalformedUrlError",
    "UriTemplateError",
    "BodyModeError",
    "MissingTemplateError",
    "BuilderConsumedError",
    "MethodBodyError",
    # Config
    "BuilderConfig",
    "ResolvedBuilderConfig",
    "resolve_config",
    # Media types
    "MediaType",
    # Templates
    "UriTemplate",
    "expand_template",
    # Bodies
    "RequestBody",
    "BytesBody",
    "ContentTypeOverridingBody",
    "create_body",
    "FormBody",
    "FormBodyBuilder",
    "MultipartBody",
    "MultipartBodyBuilder",
    "Part",
    "select_body",
    "resolve_content_type",
    # Builder
    "RequestBuilder",
    "create_request_builder",
    # Adapters
    "to_httpx_request",
]

__version__ = "0.1.0"
