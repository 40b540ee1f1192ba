import asyncio
from typing import Any, Dict, List, Optional

import httpx

from .config import get_logger
from .exceptions import NetworkError, TimeoutError
from .models import PDFResult
from .sync import sync_wrapper
from .validators import FilenameBuilder, TextValidator, URLValidator
from .core.remote import (
    build_auth_headers,
    build_text_payload,
    build_url_payload,
    calculate_retry_delay,
    parse_http_error_response,
    parse_link_response,
    parse_pdf_response,
    should_retry_request,
)

logger = get_logger("remote")


class RemotePDFClient:
    """Client for a running pdf-server."""

    def __init__(
        self,
        endpoint: str,
        api_key: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=build_auth_headers(api_key),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def generate_text(
        self, text: str, filename: Optional[str] = None
    ) -> PDFResult:
        """Render text on the server."""
        TextValidator.validate_text(text)
        response = await self._request(
            "POST", "/convert/text", json=build_text_payload(text, filename)
        )
        return parse_pdf_response(
            response.content,
            response.headers,
            FilenameBuilder.pdf_filename(filename, FilenameBuilder.TEXT_DEFAULT),
        )

    async def generate_url(
        self,
        url: str,
        filename: Optional[str] = None,
        service: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> PDFResult:
        """Render a webpage on the server; hosted PDFs come back as a link."""
        url = URLValidator.validate_url(url)
        response = await self._request(
            "POST",
            "/convert/url",
            json=build_url_payload(url, filename, service, api_key),
        )
        if response.headers.get("content-type", "").startswith("application/json"):
            return parse_link_response(response.json())
        return parse_pdf_response(
            response.content,
            response.headers,
            FilenameBuilder.pdf_filename(filename, FilenameBuilder.WEBPAGE_DEFAULT),
        )

    async def relay(self, url: str, filename: Optional[str] = None) -> Dict[str, Any]:
        """Call the API2PDF relay endpoint and return its JSON reply."""
        payload: Dict[str, Any] = {"url": url}
        if filename:
            payload["filename"] = filename
        response = await self._request("POST", "/generate-pdf", json=payload)
        return response.json()

    async def list_services(self) -> List[Dict[str, Any]]:
        response = await self._request("GET", "/services")
        return response.json().get("services", [])

    async def health(self) -> Dict[str, Any]:
        response = await self._request("GET", "/health")
        return response.json()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.endpoint}{path}"
        attempt = 0
        while True:
            try:
                response = await self._client.request(method, url, **kwargs)
                break
            except Exception as e:
                if not should_retry_request(attempt, self.max_retries, e):
                    if isinstance(e, httpx.TimeoutException):
                        raise TimeoutError(f"Request to {url} timed out") from e
                    if isinstance(e, (httpx.HTTPError, ConnectionError)):
                        raise NetworkError(f"Could not reach {url}: {e}") from e
                    raise
                delay = calculate_retry_delay(attempt, self.retry_delay)
                logger.warning(
                    "Request to %s failed (%s), retrying in %.1fs", url, e, delay
                )
                attempt += 1
                await asyncio.sleep(delay)

        if response.status_code >= 400:
            try:
                data = response.json()
            except ValueError:
                data = {}
            raise parse_http_error_response(data, response.status_code, response.text)
        return response

    def generate_text_sync(self, text: str, filename: Optional[str] = None) -> PDFResult:
        """Synchronous version of generate_text."""
        return sync_wrapper(self.generate_text)(text, filename)

    def generate_url_sync(self, url: str, **options: Any) -> PDFResult:
        """Synchronous version of generate_url."""
        return sync_wrapper(self.generate_url)(url, **options)
