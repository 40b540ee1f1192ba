"""
Webpage to PDF with an ordered fallback chain.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from .capture import BrowserDetector
from .config import get_logger
from .exceptions import ConversionError, InvalidInputError
from .models import PDFMetadata, PDFResult
from .services import PDFService, ServiceConfig, create_service
from .text_pdf import render_notice_pdf
from .validators import FilenameBuilder, URLValidator

logger = get_logger("url_converter")

AUTO = "auto"


class ConversionStrategy(ABC):
    """One step of the fallback chain."""

    name: str = ""

    @abstractmethod
    async def convert(self, url: str, filename: Optional[str]) -> PDFResult:
        pass


class ServiceStrategy(ConversionStrategy):
    """Delegates to a PDFService."""

    def __init__(self, service: PDFService):
        self.service = service
        self.name = service.name

    async def convert(self, url: str, filename: Optional[str]) -> PDFResult:
        return await self.service.render(url, filename)


class NoticeStrategy(ConversionStrategy):
    """Last resort: a PDF explaining why the page could not be captured."""

    name = "notice"

    def __init__(self):
        self.reason = "No capture strategy was available"

    async def convert(self, url: str, filename: Optional[str]) -> PDFResult:
        loop = asyncio.get_event_loop()
        content = await loop.run_in_executor(None, render_notice_pdf, url, self.reason)
        return PDFResult(
            filename=filename
            or FilenameBuilder.pdf_filename(None, FilenameBuilder.WEBPAGE_DEFAULT),
            content=content,
            metadata=PDFMetadata(
                source_type="url",
                service=self.name,
                size_bytes=len(content),
                page_count=1,
            ),
        )


class StrategyManager:
    """Runs strategies in order until one succeeds."""

    def __init__(self, strategies: List[ConversionStrategy], notice: NoticeStrategy):
        self.strategies = strategies
        self.notice = notice

    async def convert_url(self, url: str, filename: Optional[str]) -> PDFResult:
        warnings = []
        for strategy in self.strategies:
            try:
                result = await strategy.convert(url, filename)
                result.metadata.warnings.extend(warnings)
                return result
            except ConversionError as e:
                logger.warning(
                    "Strategy %s failed for %s: %s", strategy.name, url, e
                )
                warnings.append(f"{strategy.name}: {e}")

        self.notice.reason = warnings[-1] if warnings else self.notice.reason
        result = await self.notice.convert(url, filename)
        result.metadata.warnings.extend(warnings)
        return result


class WebpagePDFConverter:
    """URL to PDF using a named service or the automatic fallback chain."""

    FALLBACK_CHAIN = ["capture", "screenshot"]

    def __init__(
        self,
        config: ServiceConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.transport = transport
        self._browser_detector = BrowserDetector()

    def _create_strategy_manager(self) -> StrategyManager:
        strategies: List[ConversionStrategy] = []
        for name in self.FALLBACK_CHAIN:
            service = create_service(name, self.config, transport=self.transport)
            if not service.is_configured():
                logger.debug("Skipping %s in fallback chain: not available", name)
                continue
            strategies.append(ServiceStrategy(service))
        return StrategyManager(strategies, NoticeStrategy())

    async def convert_url(
        self,
        url: str,
        filename: Optional[str] = None,
        service: str = AUTO,
        api_key: Optional[str] = None,
    ) -> PDFResult:
        validated_url = URLValidator.validate_url(url)
        service = (service or AUTO).strip().lower()

        logger.info(
            "Converting URL: %s (service=%s, browser_available=%s)",
            validated_url,
            service,
            self._browser_detector.is_available(),
        )

        if service == AUTO:
            name = FilenameBuilder.pdf_filename(filename, FilenameBuilder.WEBPAGE_DEFAULT)
            manager = self._create_strategy_manager()
            return await manager.convert_url(validated_url, name)

        pdf_service = create_service(
            service, self.config, api_key=api_key, transport=self.transport
        )
        if not pdf_service.is_configured():
            if pdf_service.requires_api_key:
                message = f"Please enter your {pdf_service.label} API key first"
            else:
                message = f"{pdf_service.label} is not available on this server"
            raise InvalidInputError(message, {"service": pdf_service.name})

        name = (
            FilenameBuilder.pdf_filename(filename, FilenameBuilder.WEBPAGE_DEFAULT)
            if filename
            else None
        )
        return await pdf_service.render(validated_url, name)
