"""
Configuration for fetch_request.
"""
import re
import uuid
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .media_type import MediaType


def _default_boundary() -> str:
    """Default multipart boundary using UUID4."""
    return uuid.uuid4().hex


# Default values
DEFAULT_ALLOWED_SCHEMES: Tuple[str, ...] = ("http", "https")
DEFAULT_MULTIPART_TYPE = "multipart/form-data"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")


@dataclass
class BuilderConfig:
    """Request builder configuration. ``None`` fields fall back to defaults."""

    allowed_schemes: Optional[Tuple[str, ...]] = None
    multipart_type: Optional[str] = None
    boundary_factory: Optional[Callable[[], str]] = None
    enforce_method_body: bool = True


@dataclass(frozen=True)
class ResolvedBuilderConfig:
    """Request builder configuration with defaults applied."""

    allowed_schemes: Tuple[str, ...]
    multipart_type: MediaType
    boundary_factory: Callable[[], str]
    enforce_method_body: bool


def validate_config(config: BuilderConfig) -> None:
    """Validate builder configuration."""
    if config.allowed_schemes is not None:
        if not config.allowed_schemes:
            raise ValueError("allowed_schemes must not be empty")
        for scheme in config.allowed_schemes:
            if not isinstance(scheme, str) or not _SCHEME.match(scheme):
                raise ValueError(f"Invalid scheme in allowed_schemes: {scheme!r}")

    if config.multipart_type is not None:
        media_type = MediaType.parse(config.multipart_type)
        if media_type.type != "multipart":
            raise ValueError(f"multipart_type must be multipart/*, got: {config.multipart_type}")


def resolve_config(config: Optional[BuilderConfig] = None) -> ResolvedBuilderConfig:
    """Resolve builder configuration with defaults."""
    if config is None:
        config = BuilderConfig()
    validate_config(config)

    allowed = config.allowed_schemes or DEFAULT_ALLOWED_SCHEMES
    return ResolvedBuilderConfig(
        allowed_schemes=tuple(scheme.lower() for scheme in allowed),
        multipart_type=MediaType.parse(config.multipart_type or DEFAULT_MULTIPART_TYPE),
        boundary_factory=config.boundary_factory or _default_boundary,
        enforce_method_body=config.enforce_method_body,
    )


DEFAULT_CONFIG = resolve_config()
