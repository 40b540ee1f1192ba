import logging
import time
from typing import Optional

import httpx
from litestar import Litestar, get
from litestar.config.cors import CORSConfig
from litestar.datastructures import State
from litestar.di import Provide
from litestar.response import Response
from litestar.status_codes import HTTP_200_OK

from . import __version__
from .core.config import get_settings, Settings
from .controllers import ConvertController, RelayController
from .middleware.auth import create_auth_middleware
from .models import HealthResponse, ServiceInfo, ServicesResponse
from .sdk.capture import BrowserDetector
from .sdk.local import PDFGenerator
from .sdk.services import Api2PdfService

# Track server start time for uptime calculation
_server_start_time = time.time()

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
CORS_EXPOSE_HEADERS = [
    "Content-Disposition",
    "X-PDF-Service",
    "X-PDF-Source",
    "X-PDF-Pages",
    "X-PDF-Warnings",
    "X-Request-ID",
]


@get("/health")
async def health(state: State) -> Response[HealthResponse]:
    """Health check endpoint with detailed information"""
    uptime = int(time.time() - _server_start_time)
    health_data = HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=uptime,
        browser_available=state.get("browser_available", False),
    )
    return Response(health_data, status_code=HTTP_200_OK)


# Legacy health endpoint for backward compatibility
@get("/healthz")
async def healthz() -> Response:
    """Legacy health check endpoint"""
    return Response({"status": "healthy"}, status_code=HTTP_200_OK)


@get("/services")
async def services(
    generator: PDFGenerator, settings: Settings
) -> Response[ServicesResponse]:
    """Return the PDF services and whether each one is ready to use"""
    data = ServicesResponse(
        default=settings.default_service,
        services=[ServiceInfo(**info) for info in generator.list_services()],
    )
    return Response(data, status_code=HTTP_200_OK)


def provide_settings(state: State) -> Settings:
    """Provide application settings as singleton"""
    return state.config


def provide_generator(state: State) -> PDFGenerator:
    return state.generator


def provide_relay_service(state: State) -> Api2PdfService:
    return state.relay_service


async def startup_browser_detection(app: Litestar) -> None:
    """Detect browser availability at startup and configure logging"""
    settings: Settings = app.state.config
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)

    browser_available = BrowserDetector().is_available()
    app.state.browser_available = browser_available
    if browser_available:
        logging.info("Headless browser available: capture and browser services enabled")
    else:
        logging.warning(
            "Crawl4AI not installed: capture and browser services disabled, "
            "webpages fall back to the screenshot service"
        )


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Litestar:
    """Build the application; ``transport`` replaces outbound HTTP in tests."""
    settings = settings or get_settings()
    service_config = settings.service_config()

    generator = PDFGenerator(
        services=service_config,
        default_service=settings.default_service,
        max_text_length=settings.max_text_length,
        debug=settings.debug,
        transport=transport,
    )
    relay_service = Api2PdfService(
        api_key=settings.api2pdf_api_key,
        endpoint=settings.api2pdf_endpoint,
        timeout=settings.timeout_seconds,
        transport=transport,
    )

    middleware = []
    auth_middleware_class = create_auth_middleware(settings)
    if auth_middleware_class:
        middleware.append(auth_middleware_class)

    return Litestar(
        route_handlers=[health, healthz, services, ConvertController, RelayController],
        dependencies={
            "settings": Provide(provide_settings, sync_to_thread=False),
            "generator": Provide(provide_generator, sync_to_thread=False),
            "relay_service": Provide(provide_relay_service, sync_to_thread=False),
        },
        middleware=middleware,
        cors_config=CORSConfig(
            allow_origins=["*"],
            allow_headers=CORS_ALLOW_HEADERS,
            expose_headers=CORS_EXPOSE_HEADERS,
        ),
        debug=settings.debug,
        state=State(
            {
                "config": settings,
                "generator": generator,
                "relay_service": relay_service,
                "browser_available": False,
            }
        ),
        on_startup=[startup_browser_detection],
    )


app = create_app()
