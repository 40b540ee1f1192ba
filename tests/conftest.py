import json
from io import BytesIO
from unittest.mock import patch

import httpx
import pytest
from PIL import Image

from pdf_server.sdk.capture import BrowserDetector


@pytest.fixture
def make_png():
    """Factory for solid-colour PNG bytes of a given pixel size."""

    def _make(width: int = 100, height: int = 100, color=(200, 30, 30)) -> bytes:
        buffer = BytesIO()
        Image.new("RGB", (width, height), color).save(buffer, format="PNG")
        return buffer.getvalue()

    return _make


@pytest.fixture
def no_browser():
    """Pretend Crawl4AI is not installed."""
    with patch.object(
        BrowserDetector, "_check_browser_availability", return_value=False
    ):
        yield


@pytest.fixture
def with_browser():
    with patch.object(
        BrowserDetector, "_check_browser_availability", return_value=True
    ):
        yield


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    def json_body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def transport_factory():
    return RecordingTransport
