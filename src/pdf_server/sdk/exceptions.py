"""
Custom exceptions for the PDF Server SDK.
"""

from typing import Dict, Any, Optional


class ConversionError(Exception):
    """Base exception for PDF generation errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputError(ConversionError):
    """Raised when input data is invalid or a required key is missing."""

    pass


class NetworkError(ConversionError):
    """Raised when network operations fail."""

    pass


class TimeoutError(ConversionError):
    """Raised when generation exceeds timeout limit."""

    pass


class FileSizeError(ConversionError):
    """Raised when input size exceeds limits."""

    pass


class ServiceError(ConversionError):
    """Raised when a third-party PDF service rejects the request."""

    pass


class CaptureError(ConversionError):
    """Raised when the headless browser cannot load or capture a page."""

    pass
