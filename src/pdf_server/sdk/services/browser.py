"""
Local headless browser services (no third party involved).
"""

from typing import Optional

from ..capture import BrowserCapture, BrowserDetector
from ..models import PDFMetadata, PDFResult
from ..validators import FilenameBuilder
from .base import PDFService


class BrowserPDFService(PDFService):
    """The browser's own print-to-PDF."""

    name = "browser"
    label = "Headless Browser"
    description = "Open Source"

    def __init__(
        self,
        capture: Optional[BrowserCapture] = None,
        detector: Optional[BrowserDetector] = None,
    ):
        super().__init__(timeout=capture.timeout if capture else 10)
        self.capture = capture or BrowserCapture(timeout=self.timeout)
        self.detector = detector or BrowserDetector()

    def is_configured(self) -> bool:
        return self.detector.is_available()

    async def render(self, url: str, filename: Optional[str] = None) -> PDFResult:
        content = await self.capture.print_pdf(url)
        return PDFResult(
            filename=filename
            or FilenameBuilder.pdf_filename(None, FilenameBuilder.WEBPAGE_DEFAULT),
            content=content,
            metadata=PDFMetadata(
                source_type="url", service=self.name, size_bytes=len(content)
            ),
        )


class CaptureService(BrowserPDFService):
    """Full-page screenshot sliced across A4 pages."""

    name = "capture"
    label = "Page Capture"
    description = "Rendered screenshot, no API key required"

    async def render(self, url: str, filename: Optional[str] = None) -> PDFResult:
        image = await self.capture.screenshot(url)
        return await self._rasterize(image, url, filename)
