"""
Shared fixtures for fetch_request tests.
"""
from typing import BinaryIO, List, Optional

import httpx
import pytest

from fetch_request.config import BuilderConfig
from fetch_request.core.body import RequestBody
from fetch_request.media_type import MediaType


BASE_URL = "https://api.example.com/"
BOUNDARY = "test-boundary"


class ChunkedBody(RequestBody):
    """Body of unknown length, written in chunks."""

    def __init__(self, chunks: List[bytes], content_type: Optional[str] = None):
        self._chunks = chunks
        self._content_type = MediaType.parse(content_type) if content_type else None

    @property
    def content_type(self) -> Optional[MediaType]:
        return self._content_type

    def write_to(self, sink: BinaryIO) -> None:
        for chunk in self._chunks:
            sink.write(chunk)


class RecordingTransport(httpx.MockTransport):
    """Mock transport that records every request it handles."""

    def __init__(self, status_code: int = 200):
        self.requests: List[httpx.Request] = []
        self._status_code = status_code
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self._status_code, json={"success": True})


@pytest.fixture
def base_url():
    """Base URL used by builder tests."""
    return BASE_URL


@pytest.fixture
def fixed_boundary_config():
    """BuilderConfig with a deterministic multipart boundary."""
    return BuilderConfig(boundary_factory=lambda: BOUNDARY)


@pytest.fixture
def chunked_body():
    """Body with unknown length."""
    return ChunkedBody([b"ab", b"cd"], "application/octet-stream")


@pytest.fixture
def recording_transport():
    """httpx transport recording sent requests."""
    return RecordingTransport()
