from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from ..sdk.services import ServiceConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="PDF_SERVER_")

    host: str = "127.0.0.1"
    port: int = 8080
    api_key: Optional[str] = None
    timeout_seconds: int = 30
    capture_timeout_seconds: int = 10
    debug: bool = False

    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    user_agent: str = "pdf-server/1.0"
    viewport_width: int = 1024
    viewport_height: int = 768

    max_text_length: int = 1_000_000
    default_service: str = "auto"

    api2pdf_api_key: Optional[str] = None
    api2pdf_endpoint: str = "https://v2.api2pdf.com/chrome/pdf/url"
    hcti_user_id: Optional[str] = None
    hcti_api_key: Optional[str] = None
    hcti_endpoint: str = "https://hcti.io/v1/image"
    screenshot_endpoint: str = (
        "https://image.thum.io/get/png/fullpage/width/{width}/{url}"
    )

    def service_config(self) -> ServiceConfig:
        """Credentials and endpoints handed to the SDK."""
        return ServiceConfig(
            api2pdf_api_key=self.api2pdf_api_key,
            api2pdf_endpoint=self.api2pdf_endpoint,
            hcti_user_id=self.hcti_user_id,
            hcti_api_key=self.hcti_api_key,
            hcti_endpoint=self.hcti_endpoint,
            screenshot_endpoint=self.screenshot_endpoint,
            timeout=self.timeout_seconds,
            capture_timeout=self.capture_timeout_seconds,
            viewport_width=self.viewport_width,
            viewport_height=self.viewport_height,
            user_agent=self.user_agent,
            proxy=self.https_proxy or self.http_proxy,
            debug=self.debug,
        )


def get_settings() -> Settings:
    return Settings()
