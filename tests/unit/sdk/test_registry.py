import pytest

from pdf_server.sdk.exceptions import InvalidInputError
from pdf_server.sdk.services import (
    SERVICE_NAMES,
    Api2PdfService,
    BrowserPDFService,
    CaptureService,
    HtmlCssToImageService,
    ScreenshotService,
    ServiceConfig,
    create_service,
    describe_services,
)


class TestCreateService:
    @pytest.mark.parametrize(
        "name,service_class",
        [
            ("api2pdf", Api2PdfService),
            ("htmlcsstoimage", HtmlCssToImageService),
            ("browser", BrowserPDFService),
            ("capture", CaptureService),
            ("screenshot", ScreenshotService),
            (" API2PDF ", Api2PdfService),
        ],
    )
    def test_known_services(self, name, service_class):
        assert isinstance(create_service(name, ServiceConfig()), service_class)

    def test_unknown_service(self):
        with pytest.raises(InvalidInputError, match="Unknown PDF service: pdfcrowd") as exc_info:
            create_service("pdfcrowd", ServiceConfig())
        assert "auto" in exc_info.value.details["available"]

    def test_request_key_overrides_configured_key(self):
        config = ServiceConfig(api2pdf_api_key="server-key")
        assert create_service("api2pdf", config).api_key == "server-key"
        assert create_service("api2pdf", config, api_key="user-key").api_key == "user-key"

    def test_hcti_key_with_user_id(self):
        service = create_service(
            "htmlcsstoimage", ServiceConfig(), api_key="user-7:secret"
        )
        assert service.user_id == "user-7"
        assert service.api_key == "secret"
        assert service.is_configured()

    def test_hcti_key_uses_configured_user_id(self):
        service = create_service(
            "htmlcsstoimage", ServiceConfig(hcti_user_id="user-1"), api_key="secret"
        )
        assert service.user_id == "user-1"
        assert service.api_key == "secret"

    def test_browser_services_use_capture_settings(self):
        config = ServiceConfig(capture_timeout=25, viewport_width=1280, proxy="http://proxy:3128")
        service = create_service("capture", config)
        assert service.capture.timeout == 25
        assert service.capture.viewport_width == 1280
        assert service.capture.proxy == "http://proxy:3128"


class TestDescribeServices:
    def test_lists_every_service(self, no_browser):
        services = describe_services(ServiceConfig())
        assert [info["name"] for info in services] == SERVICE_NAMES

        configured = {info["name"]: info["configured"] for info in services}
        assert configured == {
            "api2pdf": False,
            "htmlcsstoimage": False,
            "browser": False,
            "capture": False,
            "screenshot": True,
        }

    def test_configured_keys_and_browser(self, with_browser):
        config = ServiceConfig(
            api2pdf_api_key="key", hcti_user_id="user", hcti_api_key="key"
        )
        assert all(info["configured"] for info in describe_services(config))

    def test_key_requirement_is_reported(self, no_browser):
        requires = {
            info["name"]: info["requires_api_key"]
            for info in describe_services(ServiceConfig())
        }
        assert requires["api2pdf"] is True
        assert requires["htmlcsstoimage"] is True
        assert requires["screenshot"] is False
