import httpx
import pytest

pytestmark = pytest.mark.integration


def api2pdf_reply(**body):
    return lambda request: httpx.Response(200, json=body)


class TestRelay:
    def test_success(self, make_client, transport_factory):
        transport = transport_factory(
            api2pdf_reply(pdf="https://s.test/r.pdf", mbOut=0.2, cost=0.0003, success=True)
        )
        client = make_client(transport=transport, api2pdf_api_key="server-key")
        response = client.post(
            "/generate-pdf", json={"url": "https://example.com", "filename": "mine.pdf"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "pdf": "https://s.test/r.pdf",
            "filename": "mine.pdf",
            "mbOut": 0.2,
            "cost": 0.0003,
        }

        request = transport.requests[0]
        assert request.headers["authorization"] == "server-key"
        body = transport.json_body()
        assert body["url"] == "https://example.com"
        assert body["options"]["margin"]["top"] == "0.5in"
        assert body["options"]["format"] == "A4"

    def test_timestamped_filename(self, make_client, transport_factory):
        transport = transport_factory(
            api2pdf_reply(FileUrl="https://s.test/r.pdf", MbOut=1, Cost=0.001)
        )
        client = make_client(transport=transport, api2pdf_api_key="server-key")
        data = client.post("/generate-pdf", json={"url": "https://example.com"}).json()

        assert data["filename"].startswith("webpage-")
        assert data["pdf"] == "https://s.test/r.pdf"

    def test_url_required(self, make_client):
        client = make_client(api2pdf_api_key="server-key")
        response = client.post("/generate-pdf", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

    def test_key_not_configured(self, client):
        response = client.post("/generate-pdf", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "API key not configured"}

    def test_service_failure(self, make_client, transport_factory):
        transport = transport_factory(
            lambda request: httpx.Response(400, json={"error": "Invalid URL"})
        )
        client = make_client(transport=transport, api2pdf_api_key="server-key")
        response = client.post("/generate-pdf", json={"url": "nonsense"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL"}

    def test_service_failure_without_message(self, make_client, transport_factory):
        transport = transport_factory(lambda request: httpx.Response(200, json={}))
        client = make_client(transport=transport, api2pdf_api_key="server-key")
        response = client.post("/generate-pdf", json={"url": "https://example.com"})

        assert response.status_code == 400
        assert response.json() == {"error": "Failed to generate PDF"}

    def test_unreachable_service(self, make_client):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = make_client(
            transport=httpx.MockTransport(handler), api2pdf_api_key="server-key"
        )
        response = client.post("/generate-pdf", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    @pytest.mark.parametrize("body", [b"not json", b"", b"null"])
    def test_unreadable_request_body(self, make_client, transport_factory, body):
        transport = transport_factory(api2pdf_reply(pdf="https://s.test/r.pdf"))
        client = make_client(transport=transport, api2pdf_api_key="server-key")
        response = client.post(
            "/generate-pdf",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert transport.requests == []

    def test_non_json_upstream_reply(self, make_client, transport_factory):
        transport = transport_factory(
            lambda request: httpx.Response(
                502, text="<html>Bad gateway</html>", headers={"content-type": "text/html"}
            )
        )
        client = make_client(transport=transport, api2pdf_api_key="server-key")
        response = client.post("/generate-pdf", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
