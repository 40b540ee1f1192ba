"""
API2PDF (https://api2pdf.com) headless Chrome URL-to-PDF service.
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ..exceptions import InvalidInputError, ServiceError
from ..models import PDFMetadata, PDFResult
from ..validators import FilenameBuilder
from .base import PDFService, logger

DEFAULT_ENDPOINT = "https://v2.api2pdf.com/chrome/pdf/url"

FULL_PAGE_OPTIONS: Dict[str, Any] = {
    "displayHeaderFooter": False,
    "printBackground": True,
    "format": "A4",
    "landscape": False,
    "preferCSSPageSize": False,
    "generateTaggedPDF": False,
    "waitTime": 5000,
    "emulateMedia": "screen",
    "fullPage": True,
    "viewport": {"width": 1920, "height": 1080, "deviceScaleFactor": 1},
    "margin": {"top": "0.2in", "bottom": "0.2in", "left": "0.2in", "right": "0.2in"},
    "extraHTTPHeaders": {"Accept-Language": "en-US,en;q=0.9"},
}

RELAY_OPTIONS: Dict[str, Any] = {
    "landscape": False,
    "displayHeaderFooter": False,
    "printBackground": True,
    "format": "A4",
    "margin": {"top": "0.5in", "bottom": "0.5in", "left": "0.5in", "right": "0.5in"},
}


@dataclass
class Api2PdfResponse:
    """Normalized API2PDF reply.

    The service has answered in two shapes over time: ``FileUrl``/``MbOut``/
    ``Cost``/``Success``/``Error`` and ``pdf``/``mbOut``/``cost``/``success``/
    ``error``. Both map onto these fields.
    """

    status_code: int
    success: bool
    pdf_url: Optional[str] = None
    mb_out: float = 0.0
    cost: Optional[float] = None
    error: Optional[str] = None
    response_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def size_bytes(self) -> int:
        return int(self.mb_out * 1024 * 1024)


def build_payload(
    url: str, filename: Optional[str], options: Dict[str, Any]
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "url": url,
        "inlinePdf": True,
        "options": copy.deepcopy(options),
    }
    if filename:
        payload["fileName"] = filename
    return payload


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def parse_response(status_code: int, data: Any) -> Api2PdfResponse:
    if not isinstance(data, dict):
        data = {}

    pdf_url = _first(data, "FileUrl", "pdf")
    flag = _first(data, "Success", "success")
    success = bool(flag) if flag is not None else pdf_url is not None
    if not 200 <= status_code < 300:
        success = False

    return Api2PdfResponse(
        status_code=status_code,
        success=success,
        pdf_url=pdf_url,
        mb_out=float(_first(data, "MbOut", "mbOut") or 0.0),
        cost=_first(data, "Cost", "cost"),
        error=_first(data, "Error", "error"),
        response_id=_first(data, "ResponseId", "responseId"),
    )


class Api2PdfService(PDFService):
    name = "api2pdf"
    label = "API2PDF"
    description = "Premium Quality"
    requires_api_key = True

    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key.strip() if api_key else None
        self.endpoint = endpoint

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def convert(
        self,
        url: str,
        filename: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Api2PdfResponse:
        """Call the service and return its normalized reply.

        A reply the service marks as failed is returned, not raised; only an
        undecodable body raises ``ServiceError``.
        """
        if not self.api_key:
            raise InvalidInputError(
                "Please enter your API2PDF API key first", {"service": self.name}
            )

        payload = build_payload(url, filename, FULL_PAGE_OPTIONS if options is None else options)
        response = await self._request(
            "POST",
            self.endpoint,
            headers={"Authorization": self.api_key, "Content-Type": "application/json"},
            json=payload,
        )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "API2PDF returned a non-JSON reply (HTTP %s) for %s",
                response.status_code,
                url,
            )
            raise ServiceError(
                f"API2PDF returned an unreadable response (HTTP {response.status_code})",
                {"service": self.name, "status_code": response.status_code},
            ) from e

        result = parse_response(response.status_code, data)
        logger.info(
            "API2PDF responded %s for %s (success=%s, mb_out=%s, cost=%s, response_id=%s)",
            response.status_code,
            url,
            result.success,
            result.mb_out,
            result.cost,
            result.response_id,
        )
        return result

    async def render(self, url: str, filename: Optional[str] = None) -> PDFResult:
        filename = filename or FilenameBuilder.timestamped()
        reply = await self.convert(url, filename)

        if not reply.ok:
            raise ServiceError(
                f"Error: {reply.error or 'Failed to generate PDF'}",
                {"service": self.name, "status_code": reply.status_code},
            )
        if not reply.pdf_url:
            raise ServiceError(
                "Failed to generate PDF - no download link received",
                {"service": self.name},
            )

        return PDFResult(
            filename=filename,
            download_url=reply.pdf_url,
            metadata=PDFMetadata(
                source_type="url",
                service=self.name,
                size_bytes=reply.size_bytes,
                cost=reply.cost,
            ),
        )
