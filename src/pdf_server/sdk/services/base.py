"""
Common behaviour for URL-to-PDF services.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from ..config import get_logger
from ..exceptions import NetworkError, TimeoutError
from ..models import PDFMetadata, PDFResult
from ..raster import images_to_pdf
from ..validators import FilenameBuilder

logger = get_logger("services")


class PDFService(ABC):
    """A way of turning a URL into a PDF."""

    name: str = ""
    label: str = ""
    description: str = ""
    requires_api_key: bool = False

    def __init__(
        self,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    def is_configured(self) -> bool:
        return True

    @abstractmethod
    async def render(self, url: str, filename: Optional[str] = None) -> PDFResult:
        """Render the URL and return the resulting PDF or its download link."""
        pass

    def info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "requires_api_key": self.requires_api_key,
            "configured": self.is_configured(),
        }

    def _client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout), transport=self.transport, **kwargs
        )

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one request, mapping transport failures to SDK exceptions."""
        try:
            async with self._client() as client:
                return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise TimeoutError(
                f"{self.label} did not respond within {self.timeout}s",
                {"service": self.name, "url": url},
            ) from e
        except httpx.HTTPError as e:
            logger.error("%s request to %s failed: %s", self.name, url, e)
            raise NetworkError(
                f"Could not reach {self.label}: {str(e)}", {"service": self.name}
            ) from e

    async def _rasterize(
        self, image: bytes, url: str, filename: Optional[str]
    ) -> PDFResult:
        """Turn a downloaded screenshot into a paged PDF result."""
        loop = asyncio.get_event_loop()
        content, pages = await loop.run_in_executor(None, images_to_pdf, image, url)
        return PDFResult(
            filename=filename
            or FilenameBuilder.pdf_filename(None, FilenameBuilder.WEBPAGE_DEFAULT),
            content=content,
            metadata=PDFMetadata(
                source_type="url",
                service=self.name,
                size_bytes=len(content),
                page_count=pages,
            ),
        )


def error_message(response: httpx.Response, default: str) -> str:
    """Best-effort error text from a JSON error body."""
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict):
        return data.get("error") or data.get("Error") or data.get("message") or default
    return default
