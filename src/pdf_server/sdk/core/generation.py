"""
Pure functions for local PDF generation.

Result construction and error classification without I/O dependencies.
"""

from typing import Any, Dict, Optional

from ..exceptions import ConversionError, InvalidInputError, TimeoutError
from ..models import PDFMetadata, PDFResult


def create_text_result(
    content: bytes, filename: str, page_count: int, processing_time: float
) -> PDFResult:
    """Wrap locally authored PDF bytes in a result."""
    return PDFResult(
        filename=filename,
        content=content,
        metadata=PDFMetadata(
            source_type="text",
            service="text",
            size_bytes=len(content),
            page_count=page_count,
            processing_time=processing_time,
        ),
    )


def stamp_processing_time(result: PDFResult, processing_time: float) -> PDFResult:
    result.metadata.processing_time = processing_time
    return result


def classify_generation_error(
    exception: Exception, context: Dict[str, Any]
) -> ConversionError:
    """
    Map unexpected errors to SDK exceptions.

    Args:
        exception: Original exception from reportlab, Pillow or a service
        context: Context information for error details

    Returns:
        Appropriate SDK exception
    """
    error_msg = str(exception).lower()

    if "timeout" in error_msg or "timed out" in error_msg:
        return TimeoutError(f"Generation timed out: {str(exception)}", context)

    if isinstance(exception, (ValueError, TypeError)):
        return InvalidInputError(f"Invalid input: {str(exception)}", context)

    return ConversionError(f"PDF generation failed: {str(exception)}", context)


def describe_result(result: PDFResult) -> Optional[str]:
    """One-line summary used in logs and success messages."""
    if result.is_download_link:
        return f"{result.filename} ({result.size_mb:.2f} MB, hosted by {result.metadata.service})"
    if result.content is not None:
        return f"{result.filename} ({len(result.content)} bytes via {result.metadata.service})"
    return None
