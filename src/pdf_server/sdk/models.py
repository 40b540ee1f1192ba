"""
Data models for generation results and metadata.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import uuid


@dataclass
class PDFMetadata:
    """
    Metadata about the generation process.

    Attributes:
        source_type: Type of source input ("text" or "url")
        service: Name of the service or strategy that produced the PDF
        size_bytes: Size of the produced PDF in bytes (reported by the
            service when the PDF is only available as a link)
        page_count: Number of pages when the PDF was authored locally
        cost: Cost estimate reported by a paid service
        processing_time: Time taken for generation in seconds
        warnings: Non-fatal problems, e.g. fallback steps that failed

    Example:
        >>> metadata = result.metadata
        >>> print(f"{metadata.service} produced {metadata.size_bytes} bytes")
    """

    source_type: str
    service: str
    size_bytes: int = 0
    page_count: Optional[int] = None
    cost: Optional[float] = None
    processing_time: float = 0.0
    warnings: List[str] = field(default_factory=list)


@dataclass
class PDFResult:
    """
    Result of a PDF generation operation.

    Either ``content`` holds the PDF bytes, or ``download_url`` points at a
    file hosted by a third-party service.

    Example:
        >>> result = await generator.generate_text("Hello")
        >>> Path(result.filename).write_bytes(result.content)
    """

    filename: str
    metadata: PDFMetadata
    content: Optional[bytes] = None
    download_url: Optional[str] = None
    success: bool = True
    request_id: str = field(default_factory=lambda: f"req_{uuid.uuid4()}")

    @property
    def is_download_link(self) -> bool:
        return self.content is None and self.download_url is not None

    @property
    def size_mb(self) -> float:
        return self.metadata.size_bytes / 1024 / 1024


@dataclass
class PDFOptions:
    """
    Options for PDF generation.

    Attributes:
        default_service: Service used for URLs when none is requested
        timeout: Maximum time in seconds for third-party HTTP calls
        capture_timeout: Maximum time in seconds to load a page in the browser
        viewport_width: Browser viewport width in pixels
        viewport_height: Browser viewport height in pixels
        max_text_length: Maximum accepted text length in characters
    """

    default_service: str = "auto"
    timeout: int = 30
    capture_timeout: int = 10
    viewport_width: int = 1024
    viewport_height: int = 768
    max_text_length: int = 1_000_000
