"""
Service lookup by name.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx

from ..capture import BrowserCapture
from ..exceptions import InvalidInputError
from .api2pdf import DEFAULT_ENDPOINT as API2PDF_ENDPOINT, Api2PdfService
from .base import PDFService
from .browser import BrowserPDFService, CaptureService
from .screenshots import (
    HCTI_ENDPOINT,
    SCREENSHOT_ENDPOINT,
    HtmlCssToImageService,
    ScreenshotService,
)

SERVICE_NAMES: List[str] = [
    "api2pdf",
    "htmlcsstoimage",
    "browser",
    "capture",
    "screenshot",
]


@dataclass
class ServiceConfig:
    """Credentials and endpoints for every service."""

    api2pdf_api_key: Optional[str] = None
    api2pdf_endpoint: str = API2PDF_ENDPOINT
    hcti_user_id: Optional[str] = None
    hcti_api_key: Optional[str] = None
    hcti_endpoint: str = HCTI_ENDPOINT
    screenshot_endpoint: str = SCREENSHOT_ENDPOINT
    timeout: int = 30
    capture_timeout: int = 10
    viewport_width: int = 1024
    viewport_height: int = 768
    user_agent: Optional[str] = None
    proxy: Optional[str] = None
    debug: bool = False


def _split_hcti_key(api_key: str, config: ServiceConfig):
    """A per-request HTML/CSS to Image key may be given as ``user_id:api_key``."""
    if ":" in api_key:
        user_id, key = api_key.split(":", 1)
        return user_id, key
    return config.hcti_user_id, api_key


def create_service(
    name: str,
    config: ServiceConfig,
    api_key: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PDFService:
    """Build the named service; ``api_key`` overrides the configured key."""
    name = (name or "").strip().lower()

    if name == "api2pdf":
        return Api2PdfService(
            api_key=api_key or config.api2pdf_api_key,
            endpoint=config.api2pdf_endpoint,
            timeout=config.timeout,
            transport=transport,
        )
    if name == "htmlcsstoimage":
        user_id, key = config.hcti_user_id, config.hcti_api_key
        if api_key:
            user_id, key = _split_hcti_key(api_key, config)
        return HtmlCssToImageService(
            user_id=user_id,
            api_key=key,
            endpoint=config.hcti_endpoint,
            viewport_width=config.viewport_width,
            viewport_height=config.viewport_height,
            timeout=config.timeout,
            transport=transport,
        )
    if name == "screenshot":
        return ScreenshotService(
            endpoint=config.screenshot_endpoint,
            width=config.viewport_width,
            timeout=config.timeout,
            transport=transport,
        )
    if name in ("browser", "capture"):
        capture = BrowserCapture(
            timeout=config.capture_timeout,
            viewport_width=config.viewport_width,
            viewport_height=config.viewport_height,
            user_agent=config.user_agent,
            proxy=config.proxy,
            debug=config.debug,
        )
        service_class = BrowserPDFService if name == "browser" else CaptureService
        return service_class(capture=capture)

    raise InvalidInputError(
        f"Unknown PDF service: {name or '(empty)'}",
        {"available": SERVICE_NAMES + ["auto"]},
    )


def describe_services(config: ServiceConfig) -> List[Dict]:
    return [create_service(name, config).info() for name in SERVICE_NAMES]
