"""
Core modules for fetch_request.
"""
from .body import BytesBody, ContentTypeOverridingBody, RequestBody, create_body, empty_body
from .body_selector import resolve_content_type, select_body
from .form import FormBody, FormBodyBuilder
from .multipart import MultipartBody, MultipartBodyBuilder, Part
from .request_builder import RequestBuilder
from .uri_template import UriTemplate, expand_template

__all__ = [
    "RequestBody",
    "BytesBody",
    "ContentTypeOverridingBody",
    "create_body",
    "empty_body",
    "select_body",
    "resolve_content_type",
    "FormBody",
    "FormBodyBuilder",
    "MultipartBody",
    "MultipartBodyBuilder",
    "Part",
    "RequestBuilder",
    "UriTemplate",
    "expand_template",
]
