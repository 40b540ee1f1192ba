"""
Error mapping and response generation functions.
"""

from typing import Tuple
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_408_REQUEST_TIMEOUT,
    HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from ..sdk.exceptions import (
    CaptureError,
    FileSizeError,
    InvalidInputError,
    NetworkError,
    ServiceError,
    TimeoutError,
)


def map_conversion_error(error: Exception) -> Tuple[str, str, int, list]:
    """Map SDK exceptions to HTTP error responses.

    Args:
        error: SDK exception to map

    Returns:
        Tuple of (error_code, message, status_code, suggestions)
    """
    if isinstance(error, InvalidInputError):
        return (
            "INVALID_INPUT",
            str(error),
            HTTP_400_BAD_REQUEST,
            ["Check input format", "Use a full http:// or https:// URL"],
        )
    elif isinstance(error, FileSizeError):
        return (
            "TEXT_TOO_LARGE",
            str(error),
            HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            ["Split the text into smaller documents"],
        )
    elif isinstance(error, TimeoutError):
        return (
            "TIMEOUT",
            str(error),
            HTTP_408_REQUEST_TIMEOUT,
            ["Try again later", "Choose a different PDF service"],
        )
    elif isinstance(error, ServiceError):
        return (
            "SERVICE_ERROR",
            str(error),
            HTTP_502_BAD_GATEWAY,
            ["Check your API key", "Choose a different PDF service"],
        )
    elif isinstance(error, CaptureError):
        return (
            "CAPTURE_FAILED",
            str(error),
            HTTP_422_UNPROCESSABLE_ENTITY,
            [
                "Check that the URL is publicly accessible",
                "Use service 'auto' to fall back to a screenshot",
            ],
        )
    elif isinstance(error, NetworkError):
        return (
            "NETWORK_ERROR",
            str(error),
            HTTP_503_SERVICE_UNAVAILABLE,
            ["Check network connectivity", "Try again later"],
        )
    else:  # ConversionError or generic
        return (
            "GENERATION_FAILED",
            str(error),
            HTTP_500_INTERNAL_SERVER_ERROR,
            ["Try again", "Contact support if issue persists"],
        )
