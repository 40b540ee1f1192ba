"""
Screenshot services: the page arrives as an image and is rasterized into a PDF.
"""

from typing import Optional
from urllib.parse import quote

import httpx

from ..exceptions import InvalidInputError, ServiceError
from ..models import PDFResult
from .base import PDFService, error_message, logger

HCTI_ENDPOINT = "https://hcti.io/v1/image"
SCREENSHOT_ENDPOINT = "https://image.thum.io/get/png/fullpage/width/{width}/{url}"


class HtmlCssToImageService(PDFService):
    """htmlcsstoimage.com, authenticated with HTTP basic auth (user id, api key)."""

    name = "htmlcsstoimage"
    label = "HTML/CSS to Image"
    description = "Alternative"
    requires_api_key = True

    def __init__(
        self,
        user_id: Optional[str],
        api_key: Optional[str],
        endpoint: str = HCTI_ENDPOINT,
        viewport_width: int = 1024,
        viewport_height: int = 768,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.user_id = user_id
        self.api_key = api_key
        self.endpoint = endpoint
        self.viewport_width = viewport_width
        self.viewport_height = viewport_height

    def is_configured(self) -> bool:
        return bool(self.user_id and self.api_key)

    async def render(self, url: str, filename: Optional[str] = None) -> PDFResult:
        if not self.is_configured():
            raise InvalidInputError(
                "Please enter your HTML/CSS to Image user id and API key first",
                {"service": self.name},
            )

        response = await self._request(
            "POST",
            self.endpoint,
            auth=(self.user_id, self.api_key),
            json={
                "url": url,
                "viewport_width": self.viewport_width,
                "viewport_height": self.viewport_height,
                "device_scale": 1,
            },
        )
        if not response.is_success:
            raise ServiceError(
                f"Error: {error_message(response, 'Failed to create screenshot')}",
                {"service": self.name, "status_code": response.status_code},
            )

        try:
            image_url = response.json().get("url")
        except ValueError:
            image_url = None
        if not image_url:
            raise ServiceError(
                "Failed to create screenshot - no image link received",
                {"service": self.name},
            )

        logger.info("HTML/CSS to Image created %s for %s", image_url, url)
        image = await self._request("GET", image_url)
        if not image.is_success:
            raise ServiceError(
                f"Could not download screenshot (HTTP {image.status_code})",
                {"service": self.name, "status_code": image.status_code},
            )
        return await self._rasterize(image.content, url, filename)


class ScreenshotService(PDFService):
    """Public screenshot API that needs no key; the URL is part of the path."""

    name = "screenshot"
    label = "Screenshot API"
    description = "Public screenshot service"

    def __init__(
        self,
        endpoint: str = SCREENSHOT_ENDPOINT,
        width: int = 1024,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.endpoint = endpoint
        self.width = width

    def screenshot_url(self, url: str) -> str:
        return self.endpoint.format(width=self.width, url=quote(url, safe=":/?&=#"))

    async def render(self, url: str, filename: Optional[str] = None) -> PDFResult:
        response = await self._request(
            "GET", self.screenshot_url(url), follow_redirects=True
        )
        if not response.is_success:
            raise ServiceError(
                f"Screenshot service returned HTTP {response.status_code}",
                {"service": self.name, "status_code": response.status_code},
            )

        content_type = response.headers.get("content-type", "")
        if not content_type.startswith("image/"):
            raise ServiceError(
                f"Screenshot service returned {content_type or 'no content type'}",
                {"service": self.name},
            )
        return await self._rasterize(response.content, url, filename)
