import pytest
from unittest.mock import Mock
from litestar.exceptions import NotAuthorizedException
from litestar.connection import ASGIConnection
from litestar.types import ASGIApp

from pdf_server.middleware.auth import APIKeyMiddleware, create_auth_middleware
from pdf_server.core.config import Settings


class TestCreateAuthMiddleware:
    def test_auth_middleware_disabled_by_default(self):
        """No middleware is built when no API key is configured"""
        settings = Settings()
        assert settings.api_key is None
        assert create_auth_middleware(settings) is None

    def test_auth_middleware_enabled_with_api_key(self):
        middleware_class = create_auth_middleware(Settings(api_key="server-key"))
        assert middleware_class is not None
        assert issubclass(middleware_class, APIKeyMiddleware)

    def test_configured_middleware_excludes_health_paths(self):
        middleware_class = create_auth_middleware(Settings(api_key="server-key"))
        middleware = middleware_class(Mock(spec=ASGIApp))

        assert middleware.exclude.match("/health")
        assert middleware.exclude.match("/healthz")
        assert not middleware.exclude.match("/generate-pdf")


class TestAPIKeyMiddleware:
    def create_mock_connection(self, headers=None, settings=None):
        mock_connection = Mock(spec=ASGIConnection)
        mock_connection.headers = headers or {}

        mock_app = Mock()
        mock_app.state = {"config": settings or Settings()}
        mock_connection.app = mock_app

        return mock_connection

    @pytest.mark.asyncio
    async def test_valid_bearer_token(self):
        middleware = APIKeyMiddleware(Mock(spec=ASGIApp))
        connection = self.create_mock_connection(
            headers={"authorization": "Bearer server-key"},
            settings=Settings(api_key="server-key"),
        )

        result = await middleware.authenticate_request(connection)
        assert result.user == "authenticated"
        assert result.auth == "server-key"

    @pytest.mark.asyncio
    async def test_bypassed_when_no_api_key_configured(self):
        middleware = APIKeyMiddleware(Mock(spec=ASGIApp))
        result = await middleware.authenticate_request(self.create_mock_connection())
        assert result.user is None
        assert result.auth is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "headers,message",
        [
            ({}, "Missing Authorization header"),
            ({"authorization": "Basic abc"}, "Invalid Authorization header format"),
            ({"authorization": "Bearer wrong-key"}, "Invalid API key"),
            ({"authorization": "Bearer "}, "Invalid API key"),
        ],
    )
    async def test_rejections(self, headers, message):
        middleware = APIKeyMiddleware(Mock(spec=ASGIApp))
        connection = self.create_mock_connection(
            headers=headers, settings=Settings(api_key="server-key")
        )

        with pytest.raises(NotAuthorizedException) as exc_info:
            await middleware.authenticate_request(connection)
        assert message in str(exc_info.value)
