"""
Exceptions raised while assembling a request.
"""


class RequestBuilderError(Exception):
    """Base class for request assembly failures."""


class MalformedContentTypeError(RequestBuilderError, ValueError):
    """A content-type value could not be parsed as a media type."""

    def __init__(self, value: str, reason: str = ""):
        self.value = value
        message = f"Malformed content type: {value}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedUrlError(RequestBuilderError, ValueError):
    """Base URL and expanded template do not form a valid absolute URL."""

    def __init__(self, base_url: str, expanded: str = None, reason: str = ""):
        self.base_url = base_url
        self.expanded = expanded
        if expanded is None:
            message = f"Malformed URL. Base: {base_url}"
        else:
            message = f"Malformed URL. Base: {base_url}, Expanded Template: {expanded}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UriTemplateError(RequestBuilderError, ValueError):
    """A URI template could not be parsed."""

    def __init__(self, template: str, position: int, reason: str):
        self.template = template
        self.position = position
        super().__init__(f"Malformed URI template at index {position}: {reason}: {template!r}")


class BodyModeError(RequestBuilderError, TypeError):
    """A body mutator was called on a builder constructed for another body mode."""


class MissingTemplateError(RequestBuilderError, RuntimeError):
    """build() was called before a URL template was set."""


class BuilderConsumedError(RequestBuilderError, RuntimeError):
    """The builder was used after build()."""


class MethodBodyError(RequestBuilderError, ValueError):
    """The HTTP method disagrees with the presence of a body."""
