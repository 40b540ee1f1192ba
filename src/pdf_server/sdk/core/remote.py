"""
Pure functions for remote API operations.

Functions for building API payloads, parsing responses, and handling
authentication without I/O dependencies.
"""

import re
from urllib.parse import unquote
from typing import Any, Dict, Mapping, Optional

import httpx

from ..exceptions import (
    ConversionError,
    FileSizeError,
    InvalidInputError,
    NetworkError,
    ServiceError,
    TimeoutError,
)
from ..models import PDFMetadata, PDFResult

_FILENAME_RE = re.compile(r'filename="?([^";]+)"?')
_FILENAME_STAR_RE = re.compile(r"filename\*=UTF-8''([^;]+)", re.IGNORECASE)


def build_text_payload(text: str, filename: Optional[str]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"text": text}
    if filename:
        payload["filename"] = filename
    return payload


def build_url_payload(
    url: str,
    filename: Optional[str] = None,
    service: Optional[str] = None,
    api_key: Optional[str] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"url": url}
    if filename:
        payload["filename"] = filename
    if service:
        payload["service"] = service
    if api_key:
        payload["api_key"] = api_key
    return payload


def build_auth_headers(api_key: Optional[str]) -> Dict[str, str]:
    """Build authentication headers."""
    headers = {"User-Agent": "pdf-server-sdk/1.0"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def filename_from_disposition(header: Optional[str], default: str) -> str:
    if not header:
        return default
    encoded = _FILENAME_STAR_RE.search(header)
    if encoded:
        return unquote(encoded.group(1).strip())
    match = _FILENAME_RE.search(header)
    return match.group(1) if match else default


def _int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    value = headers.get(name)
    try:
        return int(value) if value is not None else None
    except ValueError:
        return None


def parse_pdf_response(
    content: bytes, headers: Mapping[str, str], default_filename: str
) -> PDFResult:
    """Build a result from an ``application/pdf`` response."""
    warnings = headers.get("x-pdf-warnings")
    return PDFResult(
        filename=filename_from_disposition(
            headers.get("content-disposition"), default_filename
        ),
        content=content,
        metadata=PDFMetadata(
            source_type=headers.get("x-pdf-source", "unknown"),
            service=headers.get("x-pdf-service", "unknown"),
            size_bytes=len(content),
            page_count=_int_header(headers, "x-pdf-pages"),
            warnings=warnings.split("; ") if warnings else [],
        ),
        request_id=headers.get("x-request-id", ""),
    )


def parse_link_response(response_data: Dict[str, Any]) -> PDFResult:
    """Build a result from the JSON body returned for hosted PDFs."""
    if not response_data.get("success", False):
        error = response_data.get("error") or {}
        raise ConversionError(
            error.get("message", "Unknown error"), error.get("details") or {}
        )

    return PDFResult(
        filename=response_data.get("filename", "webpage.pdf"),
        download_url=response_data.get("download_url"),
        metadata=PDFMetadata(
            source_type="url",
            service=response_data.get("service", "unknown"),
            size_bytes=response_data.get("filesize", 0),
            cost=response_data.get("cost"),
            warnings=response_data.get("warnings", []),
        ),
        request_id=response_data.get("request_id", ""),
    )


def map_status_code_to_exception(
    status_code: int, message: str, details: Dict[str, Any]
) -> ConversionError:
    """Map HTTP status codes to appropriate SDK exceptions."""
    if status_code == 400:
        return InvalidInputError(message, details)
    elif status_code == 408 or status_code == 504:
        return TimeoutError(message, details)
    elif status_code == 413:
        return FileSizeError(message, details)
    elif status_code == 502:
        return ServiceError(message, details)
    elif status_code == 503:
        return NetworkError(message, details)
    else:
        return ConversionError(f"Server error ({status_code}): {message}", details)


def parse_http_error_response(
    response_data: Any, status_code: int, response_text: str
) -> ConversionError:
    """Parse HTTP error response and return appropriate exception."""
    if isinstance(response_data, dict) and "error" in response_data:
        error_info = response_data["error"]
        if isinstance(error_info, str):
            return map_status_code_to_exception(status_code, error_info, {})
        if isinstance(error_info, dict):
            message = error_info.get("message", f"HTTP {status_code}")
            details = error_info.get("details") or {}
            return map_status_code_to_exception(status_code, message, details)
    return map_status_code_to_exception(
        status_code, response_text or f"HTTP {status_code}", {}
    )


def should_retry_request(attempt: int, max_retries: int, exception: Exception) -> bool:
    """Retry network errors and timeouts, never HTTP errors."""
    if attempt >= max_retries:
        return False

    retry_exceptions = (
        httpx.TimeoutException,
        httpx.NetworkError,
        ConnectionError,
    )
    return isinstance(exception, retry_exceptions)


def calculate_retry_delay(attempt: int, base_delay: float) -> float:
    """Calculate exponential backoff delay for retry attempts."""
    return base_delay * (2**attempt)
