from .base import PDFService
from .api2pdf import Api2PdfService, Api2PdfResponse, FULL_PAGE_OPTIONS, RELAY_OPTIONS
from .browser import BrowserPDFService, CaptureService
from .screenshots import HtmlCssToImageService, ScreenshotService
from .registry import SERVICE_NAMES, ServiceConfig, create_service, describe_services

__all__ = [
    "PDFService",
    "Api2PdfService",
    "Api2PdfResponse",
    "FULL_PAGE_OPTIONS",
    "RELAY_OPTIONS",
    "BrowserPDFService",
    "CaptureService",
    "HtmlCssToImageService",
    "ScreenshotService",
    "SERVICE_NAMES",
    "ServiceConfig",
    "create_service",
    "describe_services",
]
