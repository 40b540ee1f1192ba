import pytest
from litestar.testing import TestClient

from pdf_server.app import create_app
from pdf_server.core.config import Settings


@pytest.fixture
def make_client():
    """Build a TestClient for an app with the given settings and outbound transport."""
    clients = []

    def _make(transport=None, **settings):
        client = TestClient(app=create_app(Settings(**settings), transport=transport))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()
