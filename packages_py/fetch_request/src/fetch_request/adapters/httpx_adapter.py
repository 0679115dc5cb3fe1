"""
httpx adapter for fetch_request.

Converts a built Request into an httpx.Request so it can be sent with
``httpx.Client.send`` or ``httpx.AsyncClient.send``.
"""
import logging
from typing import Optional

import httpx

from ..types import Request

logger = logging.getLogger("fetch_request.httpx_adapter")


def to_httpx_request(request: Request, extensions: Optional[dict] = None) -> httpx.Request:
    """Build the httpx.Request equivalent of ``request``."""
    content = request.body.to_bytes() if request.body is not None else None
    headers = httpx.Headers(request.wire_headers())

    logger.debug(
        f"to_httpx_request: {request.method} {request.url}, "
        f"content_length={len(content) if content is not None else None}"
    )
    return httpx.Request(
        method=request.method,
        url=request.url,
        headers=headers,
        content=content,
        extensions=extensions,
    )
