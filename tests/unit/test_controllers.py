from pdf_server.controllers import content_disposition, pdf_response
from pdf_server.sdk.models import PDFMetadata, PDFResult


class TestContentDisposition:
    def test_ascii_filename(self):
        assert content_disposition("report.pdf") == 'attachment; filename="report.pdf"'

    def test_non_ascii_filename(self):
        header = content_disposition("résumé.pdf")
        assert header.startswith('attachment; filename="r_sum_.pdf"')
        assert "filename*=UTF-8''r%C3%A9sum%C3%A9.pdf" in header


class TestPdfResponse:
    def test_headers(self):
        result = PDFResult(
            filename="webpage.pdf",
            content=b"%PDF-1.4",
            metadata=PDFMetadata(
                source_type="url",
                service="screenshot",
                page_count=3,
                warnings=["capture: Crawl4AI\nnot available"],
            ),
        )
        response = pdf_response(result)

        assert response.media_type == "application/pdf"
        assert response.headers["X-PDF-Service"] == "screenshot"
        assert response.headers["X-PDF-Pages"] == "3"
        assert response.headers["X-PDF-Warnings"] == "capture: Crawl4AI not available"
        assert response.headers["X-Request-ID"] == result.request_id

    def test_no_optional_headers(self):
        result = PDFResult(
            filename="document.pdf",
            content=b"%PDF-1.4",
            metadata=PDFMetadata(source_type="text", service="text"),
        )
        response = pdf_response(result)
        assert "X-PDF-Pages" not in response.headers
        assert "X-PDF-Warnings" not in response.headers
