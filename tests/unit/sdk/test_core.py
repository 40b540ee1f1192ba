import httpx
import pytest

from pdf_server.sdk.core.generation import classify_generation_error, describe_result
from pdf_server.sdk.core.remote import (
    build_auth_headers,
    build_url_payload,
    calculate_retry_delay,
    filename_from_disposition,
    map_status_code_to_exception,
    parse_http_error_response,
    parse_link_response,
    should_retry_request,
)
from pdf_server.sdk.core.sync import detect_event_loop_state, filter_generation_kwargs
from pdf_server.sdk.exceptions import (
    ConversionError,
    FileSizeError,
    InvalidInputError,
    NetworkError,
    ServiceError,
    TimeoutError,
)
from pdf_server.sdk.models import PDFMetadata, PDFResult


class TestGenerationHelpers:
    def test_classify_timeout(self):
        error = classify_generation_error(RuntimeError("operation timed out"), {})
        assert isinstance(error, TimeoutError)

    def test_classify_value_error(self):
        error = classify_generation_error(ValueError("bad"), {"filename": "a.pdf"})
        assert isinstance(error, InvalidInputError)
        assert error.details == {"filename": "a.pdf"}

    def test_classify_other(self):
        error = classify_generation_error(RuntimeError("boom"), {})
        assert type(error) is ConversionError
        assert str(error) == "PDF generation failed: boom"

    def test_describe_link_result(self):
        result = PDFResult(
            filename="a.pdf",
            download_url="https://s.test/a.pdf",
            metadata=PDFMetadata("url", "api2pdf", size_bytes=1048576),
        )
        assert describe_result(result) == "a.pdf (1.00 MB, hosted by api2pdf)"


class TestRemoteHelpers:
    def test_auth_headers(self):
        assert "Authorization" not in build_auth_headers(None)
        assert build_auth_headers("k")["Authorization"] == "Bearer k"

    def test_url_payload_skips_unset(self):
        assert build_url_payload("https://example.com") == {"url": "https://example.com"}

    def test_filename_from_disposition(self):
        assert filename_from_disposition('attachment; filename="a b.pdf"', "x.pdf") == "a b.pdf"
        assert filename_from_disposition(None, "x.pdf") == "x.pdf"

    def test_filename_prefers_encoded_form(self):
        header = "attachment; filename=\"r_sum_.pdf\"; filename*=UTF-8''r%C3%A9sum%C3%A9.pdf"
        assert filename_from_disposition(header, "x.pdf") == "r\u00e9sum\u00e9.pdf"

    @pytest.mark.parametrize(
        "status,error_class",
        [
            (400, InvalidInputError),
            (408, TimeoutError),
            (504, TimeoutError),
            (413, FileSizeError),
            (502, ServiceError),
            (503, NetworkError),
        ],
    )
    def test_status_mapping(self, status, error_class):
        assert isinstance(map_status_code_to_exception(status, "m", {}), error_class)

    def test_unmapped_status(self):
        error = map_status_code_to_exception(401, "Unauthorized", {})
        assert type(error) is ConversionError
        assert str(error) == "Server error (401): Unauthorized"

    def test_parse_structured_error(self):
        error = parse_http_error_response(
            {"success": False, "error": {"code": "TIMEOUT", "message": "slow", "details": {"s": 1}}},
            408,
            "",
        )
        assert isinstance(error, TimeoutError)
        assert error.details == {"s": 1}

    def test_parse_plain_error(self):
        error = parse_http_error_response({"error": "URL is required"}, 400, "")
        assert isinstance(error, InvalidInputError)
        assert str(error) == "URL is required"

    def test_parse_link_failure(self):
        with pytest.raises(ConversionError, match="nope"):
            parse_link_response({"success": False, "error": {"message": "nope"}})

    def test_retry_policy(self):
        request = httpx.Request("GET", "http://test")
        assert should_retry_request(0, 2, httpx.ConnectError("x", request=request))
        assert not should_retry_request(2, 2, httpx.ConnectError("x", request=request))
        assert not should_retry_request(0, 2, ValueError("x"))
        assert calculate_retry_delay(2, 0.5) == 2.0


class TestSyncHelpers:
    def test_no_running_loop(self):
        assert detect_event_loop_state() == "none"

    @pytest.mark.asyncio
    async def test_running_loop(self):
        assert detect_event_loop_state() == "running"

    def test_filter_kwargs(self):
        assert filter_generation_kwargs(filename="a", service=None, other=1) == {
            "filename": "a"
        }
