from typing import Any, Dict, List, Optional
import uuid

from pydantic import BaseModel, Field

from .sdk.models import PDFResult


class TextPDFRequest(BaseModel):
    text: str
    filename: Optional[str] = None


class URLPDFRequest(BaseModel):
    url: str
    filename: Optional[str] = None
    service: Optional[str] = None
    api_key: Optional[str] = None


class RelayRequest(BaseModel):
    url: Optional[str] = None
    filename: Optional[str] = None


class PDFLinkResponse(BaseModel):
    """Reply for PDFs hosted by a third-party service."""

    success: bool = True
    download_url: str
    filename: str
    filesize: int
    size_mb: float
    cost: Optional[float] = None
    service: str
    message: str = "Your PDF is ready!"
    warnings: List[str] = Field(default_factory=list)
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4()}")

    @classmethod
    def from_result(cls, result: PDFResult) -> "PDFLinkResponse":
        return cls(
            download_url=result.download_url,
            filename=result.filename,
            filesize=result.metadata.size_bytes,
            size_mb=round(result.size_mb, 2),
            cost=result.metadata.cost,
            service=result.metadata.service,
            warnings=result.metadata.warnings,
            request_id=result.request_id,
        )


class ConvertError(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    suggestions: Optional[List[str]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ConvertError
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4()}")

    @classmethod
    def create_error(
        cls,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ) -> "ErrorResponse":
        return cls(
            error=ConvertError(
                code=code, message=message, details=details, suggestions=suggestions
            )
        )


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: int
    browser_available: bool


class ServiceInfo(BaseModel):
    name: str
    label: str
    description: str
    requires_api_key: bool
    configured: bool


class ServicesResponse(BaseModel):
    default: str
    services: List[ServiceInfo]
