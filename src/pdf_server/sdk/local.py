"""
Local PDF generator.

This module provides the PDFGenerator class, a thin wrapper that validates
input, delegates to text authoring or to the webpage converter, and times
the result.
"""

import asyncio
import time
from typing import Any, Dict, List, Optional

import httpx

from .config import SDKConfig, get_logger
from .exceptions import ConversionError
from .models import PDFOptions, PDFResult
from .services import ServiceConfig, describe_services
from .sync import SyncGeneratorMixin
from .text_pdf import count_pages, render_text_pdf
from .url_converter import WebpagePDFConverter
from .validators import FilenameBuilder, TextValidator
from .core.generation import (
    classify_generation_error,
    create_text_result,
    describe_result,
    stamp_processing_time,
)


class PDFGenerator(SyncGeneratorMixin):
    """
    Text and webpage to PDF generator.

    Examples:
        Text:
        >>> generator = PDFGenerator()
        >>> result = await generator.generate_text("Hello", filename="greeting")
        >>> Path(result.filename).write_bytes(result.content)

        Webpage through a paid service:
        >>> generator = PDFGenerator(services=ServiceConfig(api2pdf_api_key="..."))
        >>> result = await generator.generate_url("https://example.com", service="api2pdf")
        >>> print(result.download_url, result.metadata.cost)
    """

    def __init__(
        self,
        services: Optional[ServiceConfig] = None,
        default_service: str = "auto",
        max_text_length: int = 1_000_000,
        debug: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the generator.

        Args:
            services: Credentials and endpoints for URL-to-PDF services
            default_service: Service used when a URL request names none
            max_text_length: Maximum accepted text length in characters
            debug: Enable debug logging
            transport: Optional httpx transport shared by all services
        """
        self.services = services or ServiceConfig()
        self.options = PDFOptions(
            default_service=default_service,
            timeout=self.services.timeout,
            capture_timeout=self.services.capture_timeout,
            viewport_width=self.services.viewport_width,
            viewport_height=self.services.viewport_height,
            max_text_length=max_text_length,
        )

        self.config = SDKConfig(debug=debug)
        self.config.setup_logging()
        self.logger = get_logger("generator")

        self._url_converter = WebpagePDFConverter(self.services, transport=transport)

    @classmethod
    def remote(cls, endpoint: str, api_key: Optional[str] = None, timeout: int = 30):
        """Create a client for a remote pdf-server with a matching interface."""
        from .remote import RemotePDFClient

        return RemotePDFClient(endpoint, api_key, timeout)

    async def generate_text(
        self, text: str, filename: Optional[str] = None
    ) -> PDFResult:
        """
        Lay text out on A4 pages.

        Raises:
            InvalidInputError: If the text is empty
            FileSizeError: If the text exceeds ``max_text_length``
        """
        start_time = time.time()
        TextValidator.validate_text(text, self.options.max_text_length)
        name = FilenameBuilder.pdf_filename(filename, FilenameBuilder.TEXT_DEFAULT)

        try:
            loop = asyncio.get_event_loop()
            content = await loop.run_in_executor(None, render_text_pdf, text, name)
            pages = count_pages(text)
        except Exception as e:
            self.logger.error("Text PDF generation failed: %s", e)
            raise classify_generation_error(e, {"filename": name, "length": len(text)})

        result = create_text_result(content, name, pages, time.time() - start_time)
        self.logger.info("Generated %s", describe_result(result))
        return result

    async def generate_url(
        self,
        url: str,
        filename: Optional[str] = None,
        service: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> PDFResult:
        """
        Turn a webpage into a PDF.

        Args:
            url: Page to render
            filename: Download name without extension
            service: Service name or "auto" for the fallback chain
            api_key: Per-request key for services that need one

        Raises:
            InvalidInputError: If the URL or service is invalid, or a key is missing
            ServiceError: If a third-party service rejected the request
            NetworkError: If a service could not be reached
            TimeoutError: If a service did not answer in time
        """
        start_time = time.time()
        service = service or self.options.default_service

        try:
            result = await self._url_converter.convert_url(
                url, filename=filename, service=service, api_key=api_key
            )
        except ConversionError:
            raise
        except Exception as e:
            self.logger.error("URL PDF generation failed for %s: %s", url, e)
            raise classify_generation_error(e, {"url": url, "service": service})

        stamp_processing_time(result, time.time() - start_time)
        self.logger.info("Generated %s", describe_result(result))
        return result

    def list_services(self) -> List[Dict[str, Any]]:
        return describe_services(self.services)
