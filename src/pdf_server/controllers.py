import logging
from typing import Dict
from urllib.parse import quote

from pydantic import ValidationError

from litestar import Controller, Request, post
from litestar.exceptions import SerializationException
from litestar.response import Response
from litestar.status_codes import (
    HTTP_200_OK,
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from .models import (
    ErrorResponse,
    PDFLinkResponse,
    RelayRequest,
    TextPDFRequest,
    URLPDFRequest,
)
from .core.error_mapper import map_conversion_error
from .sdk.exceptions import ConversionError
from .sdk.local import PDFGenerator
from .sdk.models import PDFResult
from .sdk.services import RELAY_OPTIONS, Api2PdfService
from .sdk.validators import FilenameBuilder

logger = logging.getLogger(__name__)


def content_disposition(filename: str) -> str:
    """Attachment header that survives non-ASCII filenames."""
    try:
        filename.encode("ascii")
        return f'attachment; filename="{filename}"'
    except UnicodeEncodeError:
        fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _header_safe(value: str) -> str:
    return " ".join(value.split()).encode("latin-1", "replace").decode("latin-1")


def pdf_response(result: PDFResult) -> Response:
    """Download response for PDF bytes."""
    headers: Dict[str, str] = {
        "Content-Disposition": content_disposition(result.filename),
        "X-PDF-Service": result.metadata.service,
        "X-PDF-Source": result.metadata.source_type,
        "X-Request-ID": result.request_id,
    }
    if result.metadata.page_count is not None:
        headers["X-PDF-Pages"] = str(result.metadata.page_count)
    if result.metadata.warnings:
        headers["X-PDF-Warnings"] = _header_safe("; ".join(result.metadata.warnings))

    return Response(
        content=result.content,
        media_type="application/pdf",
        headers=headers,
        status_code=HTTP_200_OK,
    )


def error_response(error: Exception) -> Response[ErrorResponse]:
    code, message, status_code, suggestions = map_conversion_error(error)
    details = getattr(error, "details", None) or None
    body = ErrorResponse.create_error(
        code=code, message=message, details=details, suggestions=suggestions
    )
    return Response(body, status_code=status_code)


class ConvertController(Controller):
    path = "/convert"

    @post("/text")
    async def convert_text(
        self, data: TextPDFRequest, generator: PDFGenerator
    ) -> Response:
        """Lay the submitted text out on A4 pages and return the PDF."""
        try:
            result = await generator.generate_text(data.text, filename=data.filename)
        except ConversionError as e:
            return error_response(e)
        except Exception as e:
            logger.error("Text PDF generation failed: %s", e)
            return error_response(e)

        return pdf_response(result)

    @post("/url")
    async def convert_url(
        self, data: URLPDFRequest, generator: PDFGenerator
    ) -> Response:
        """Render a webpage; hosted PDFs are returned as a download link."""
        try:
            result = await generator.generate_url(
                data.url,
                filename=data.filename,
                service=data.service,
                api_key=data.api_key,
            )
        except ConversionError as e:
            return error_response(e)
        except Exception as e:
            logger.error("URL PDF generation failed for %s: %s", data.url, e)
            return error_response(e)

        if result.is_download_link:
            return Response(PDFLinkResponse.from_result(result), status_code=HTTP_200_OK)
        return pdf_response(result)


class RelayController(Controller):
    """Forwards ``{url, filename}`` to API2PDF using the server's own key."""

    path = "/generate-pdf"

    @post("")
    async def generate_pdf(
        self, request: Request, relay_service: Api2PdfService
    ) -> Response:
        try:
            data = RelayRequest.model_validate(await request.json())
        except (SerializationException, ValidationError) as e:
            logger.error("Error reading relay request: %s", e)
            return Response(
                {"error": "Internal server error"},
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if not data.url:
            return Response(
                {"error": "URL is required"}, status_code=HTTP_400_BAD_REQUEST
            )

        if not relay_service.is_configured():
            return Response(
                {"error": "API key not configured"},
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            )

        try:
            reply = await relay_service.convert(data.url, options=RELAY_OPTIONS)
        except Exception as e:
            logger.error("Error generating PDF: %s", e)
            return Response(
                {"error": "Internal server error"},
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if reply.success:
            return Response(
                {
                    "success": True,
                    "pdf": reply.pdf_url,
                    "filename": data.filename or FilenameBuilder.timestamped(),
                    "mbOut": reply.mb_out,
                    "cost": reply.cost,
                },
                status_code=HTTP_200_OK,
            )

        return Response(
            {"error": reply.error or "Failed to generate PDF"},
            status_code=HTTP_400_BAD_REQUEST,
        )
