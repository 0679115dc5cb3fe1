"""
Body selection and content-type reconciliation, applied once at build time.
"""
import logging
from typing import Optional, Tuple

from ..media_type import MediaType
from ..types import CONTENT_TYPE, HeaderPair
from .body import ContentTypeOverridingBody, RequestBody, empty_body
from .form import FormBodyBuilder
from .multipart import MultipartBodyBuilder

logger = logging.getLogger("fetch_request.body_selector")


def select_body(
    explicit_body: Optional[RequestBody] = None,
    form: Optional[FormBodyBuilder] = None,
    multipart: Optional[MultipartBodyBuilder] = None,
    has_body: bool = False,
) -> Optional[RequestBody]:
    """
    Pick the body a request is sent with.

    Priority, highest first:
    1. ``explicit_body`` when set
    2. the built form body when a form builder is present
    3. the built multipart body when a multipart builder is present
    4. a zero-length body when ``has_body`` is true
    5. no body
    """
    if explicit_body is not None:
        logger.debug("select_body: using explicit body")
        return explicit_body
    if form is not None:
        logger.debug(f"select_body: building form body with {len(form)} field(s)")
        return form.build()
    if multipart is not None:
        logger.debug(f"select_body: building multipart body with {len(multipart)} part(s)")
        return multipart.build()
    if has_body:
        # Body is absent but the method carries one; send it empty.
        logger.debug("select_body: no body supplied, using empty body")
        return empty_body()
    return None


def resolve_content_type(
    body: Optional[RequestBody],
    content_type: Optional[MediaType],
) -> Tuple[Optional[RequestBody], Optional[HeaderPair]]:
    """
    Reconcile an explicit content type with the selected body.

    Returns the body to send and an extra header to append, if any:
    - explicit type and a body: the body wrapped so it reports the explicit type
    - explicit type and no body: a literal Content-Type header
    - no explicit type: both unchanged, no header
    """
    if content_type is None:
        return body, None
    if body is not None:
        logger.debug(f"resolve_content_type: overriding body content type with {content_type}")
        return ContentTypeOverridingBody(body, content_type), None
    logger.debug(f"resolve_content_type: no body, emitting {CONTENT_TYPE} header {content_type}")
    return None, (CONTENT_TYPE, str(content_type))
