from pdf_server.core.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.host == "127.0.0.1"
        assert settings.port == 8080
        assert settings.api_key is None
        assert settings.default_service == "auto"
        assert settings.max_text_length == 1_000_000

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PDF_SERVER_PORT", "9000")
        monkeypatch.setenv("PDF_SERVER_API2PDF_API_KEY", "from-env")
        monkeypatch.setenv("PDF_SERVER_DEBUG", "true")

        settings = Settings()
        assert settings.port == 9000
        assert settings.api2pdf_api_key == "from-env"
        assert settings.debug is True

    def test_service_config(self):
        settings = Settings(
            api2pdf_api_key="a2p",
            hcti_user_id="user",
            hcti_api_key="hcti",
            timeout_seconds=45,
            capture_timeout_seconds=15,
            http_proxy="http://proxy:3128",
        )
        config = settings.service_config()

        assert config.api2pdf_api_key == "a2p"
        assert config.hcti_user_id == "user"
        assert config.timeout == 45
        assert config.capture_timeout == 15
        assert config.proxy == "http://proxy:3128"
        assert config.user_agent == "pdf-server/1.0"

    def test_https_proxy_preferred(self):
        settings = Settings(http_proxy="http://a:1", https_proxy="http://b:2")
        assert settings.service_config().proxy == "http://b:2"
