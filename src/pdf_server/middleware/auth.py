import hmac
import logging
from typing import Optional, Type

from litestar.connection import ASGIConnection
from litestar.exceptions import NotAuthorizedException
from litestar.middleware import (
    AbstractAuthenticationMiddleware,
    AuthenticationResult,
)
from litestar.types import ASGIApp

from ..core.config import Settings

logger = logging.getLogger(__name__)

EXCLUDED_PATHS = ["^/health$", "^/healthz$"]


class APIKeyMiddleware(AbstractAuthenticationMiddleware):
    """Bearer token authentication against the configured server API key."""

    async def authenticate_request(
        self, connection: ASGIConnection
    ) -> AuthenticationResult:
        settings: Settings = connection.app.state["config"]
        if not settings.api_key:
            return AuthenticationResult(user=None, auth=None)

        auth_header = connection.headers.get("authorization")
        if not auth_header:
            raise NotAuthorizedException("Missing Authorization header")

        if not auth_header.startswith("Bearer "):
            raise NotAuthorizedException("Invalid Authorization header format")

        token = auth_header[len("Bearer ") :].strip()
        if not token or not hmac.compare_digest(token, settings.api_key):
            logger.warning("Rejected request with invalid API key")
            raise NotAuthorizedException("Invalid API key")

        return AuthenticationResult(user="authenticated", auth=token)


def create_auth_middleware(settings: Settings) -> Optional[Type[APIKeyMiddleware]]:
    """Return a configured middleware class, or None when auth is disabled."""
    if not settings.api_key:
        return None

    class ConfiguredAPIKeyMiddleware(APIKeyMiddleware):
        def __init__(self, app: ASGIApp):
            super().__init__(app, exclude=EXCLUDED_PATHS)

    return ConfiguredAPIKeyMiddleware
