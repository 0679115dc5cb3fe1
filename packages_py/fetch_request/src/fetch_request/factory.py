"""
Factory functions for creating request builders.
"""
from typing import Optional, Union

import httpx

from .config import BuilderConfig
from .core.request_builder import RequestBuilder
from .core.uri_template import UriTemplate
from .media_type import MediaType
from .types import HeadersInput, requires_request_body


def create_request_builder(
    method: str,
    base_url: Union[str, httpx.URL],
    template: Union[str, UriTemplate, None] = None,
    *,
    headers: Optional[HeadersInput] = None,
    content_type: Union[MediaType, str, None] = None,
    has_body: Optional[bool] = None,
    form_encoded: bool = False,
    multipart: bool = False,
    config: Optional[BuilderConfig] = None,
) -> RequestBuilder:
    """
    Create a RequestBuilder.

    When ``has_body`` is None it is inferred from the method: only methods
    that must carry a body (POST, PUT, PATCH, PROPPATCH, REPORT) get one.

    Example:
        builder = create_request_builder("POST", "https://api.example.com/", "users/{id}")
        builder.add_variable("id", "42")
        request = builder.build()
    """
    if has_body is None:
        has_body = requires_request_body(method)

    return RequestBuilder(
        method,
        base_url,
        template=template,
        headers=headers,
        content_type=content_type,
        has_body=has_body,
        is_form_encoded=form_encoded,
        is_multipart=multipart,
        config=config,
    )
