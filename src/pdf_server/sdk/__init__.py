"""
PDF Server SDK

Python SDK for text and webpage to PDF generation.
"""

from .local import PDFGenerator
from .remote import RemotePDFClient
from .models import PDFResult, PDFMetadata, PDFOptions
from .services import ServiceConfig, SERVICE_NAMES
from .exceptions import (
    ConversionError,
    InvalidInputError,
    NetworkError,
    TimeoutError,
    FileSizeError,
    ServiceError,
    CaptureError,
)

__version__ = "0.1.0"

__all__ = [
    "PDFGenerator",
    "RemotePDFClient",
    "PDFResult",
    "PDFMetadata",
    "PDFOptions",
    "ServiceConfig",
    "SERVICE_NAMES",
    "ConversionError",
    "InvalidInputError",
    "NetworkError",
    "TimeoutError",
    "FileSizeError",
    "ServiceError",
    "CaptureError",
]
