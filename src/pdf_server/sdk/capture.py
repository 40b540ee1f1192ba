"""
Headless browser capture using Crawl4AI.
"""

import asyncio
import base64
import importlib.util
from typing import Optional

from .config import get_logger
from .exceptions import CaptureError

logger = get_logger("capture")


class BrowserDetector:
    """Detects browser availability for page capture."""

    def __init__(self):
        self._browser_available = self._check_browser_availability()

    def is_available(self) -> bool:
        """Check if browser support is available."""
        return self._browser_available

    def _check_browser_availability(self) -> bool:
        """Check if browser support (Crawl4AI) is installed."""
        available = importlib.util.find_spec("crawl4ai") is not None
        if not available:
            logger.debug("Crawl4AI not available, browser capture disabled")
        return available


class BrowserCapture:
    """Loads a page in headless Chromium and returns a screenshot or PDF."""

    def __init__(
        self,
        timeout: int = 10,
        viewport_width: int = 1024,
        viewport_height: int = 768,
        user_agent: Optional[str] = None,
        proxy: Optional[str] = None,
        debug: bool = False,
    ):
        self.timeout = timeout
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height
        self.user_agent = user_agent
        self.proxy = proxy
        self.debug = debug

    async def screenshot(self, url: str) -> bytes:
        """Full-page PNG of the rendered page."""
        result = await self._crawl(url, screenshot=True)
        if not result.screenshot:
            raise CaptureError(f"No screenshot captured for {url}", {"url": url})
        return base64.b64decode(result.screenshot)

    async def print_pdf(self, url: str) -> bytes:
        """The browser's own print-to-PDF output."""
        result = await self._crawl(url, pdf=True)
        if not result.pdf:
            raise CaptureError(f"No PDF captured for {url}", {"url": url})
        return result.pdf

    async def _crawl(self, url: str, screenshot: bool = False, pdf: bool = False):
        try:
            from crawl4ai import AsyncWebCrawler, BrowserConfig, CacheMode, CrawlerRunConfig
        except ImportError:
            raise CaptureError("Crawl4AI not available for browser capture")

        browser_config_kwargs = {
            "browser_type": "chromium",
            "headless": True,
            "verbose": self.debug,
            "viewport_width": self.viewport_width,
            "viewport_height": self.viewport_height,
        }
        if self.user_agent:
            browser_config_kwargs["user_agent"] = self.user_agent
        if self.proxy:
            browser_config_kwargs["proxy"] = self.proxy

        run_config = CrawlerRunConfig(
            page_timeout=self.timeout * 1000,
            cache_mode=CacheMode.BYPASS,
            remove_overlay_elements=True,
            screenshot=screenshot,
            pdf=pdf,
        )

        try:
            async with AsyncWebCrawler(config=BrowserConfig(**browser_config_kwargs)) as crawler:
                result = await asyncio.wait_for(
                    crawler.arun(url, config=run_config),
                    timeout=self.timeout * 2,
                )
        except asyncio.TimeoutError:
            raise CaptureError(
                f"Page capture timed out after {self.timeout}s", {"url": url}
            )
        except Exception as e:
            logger.error("Browser capture failed for %s: %s", url, e)
            raise CaptureError(f"Failed to capture page: {str(e)}", {"url": url})

        if not result.success:
            raise CaptureError(
                f"Failed to load {url}: {result.error_message}", {"url": url}
            )
        return result
