"""
End-to-end tests for the result demo endpoints
"""
import os
from unittest.mock import patch

import pytest
from fastapi import Request
from resultdemo.core.config import BACKEND_DIR, get_settings


def test_home_renders_view(client):
    response = client.get("/resultdemo/home")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Result demo" in response.text
    assert "/resultdemo/user-info" in response.text


def test_get_user_info_returns_json(client):
    response = client.get("/resultdemo/user-info")

    assert response.status_code == 200
    assert response.json() == {"username": "Alice", "age": 25}


def test_show_message_returns_text(client):
    response = client.get("/resultdemo/message")

    assert response.status_code == 200
    assert response.text == "This is a simple content result."
    assert response.headers["content-type"].startswith("text/plain")


def test_download_document_sends_file(client):
    response = client.get("/resultdemo/download")

    assert response.status_code == 200
    assert response.content == (BACKEND_DIR / "files" / "sample.txt").read_bytes()
    assert response.headers["content-disposition"] == 'attachment; filename="sample.txt"'


def test_download_document_custom_name(client):
    with patch.dict(os.environ, {"DOWNLOAD_NAME": "notes.txt"}):
        get_settings.cache_clear()
        response = client.get("/resultdemo/download")

    assert response.headers["content-disposition"] == 'attachment; filename="notes.txt"'


def test_download_document_missing_file(client, tmp_path):
    """A missing file surfaces as a 404 error body"""
    with patch.dict(os.environ, {"FILES_DIR": str(tmp_path)}):
        get_settings.cache_clear()
        response = client.get("/resultdemo/download")

    assert response.status_code == 404
    assert response.json() == {"detail": "File not found", "type": "FileNotFoundError"}


@pytest.fixture(scope="module")
def invalid_status_route(app):
    """Endpoint that asks for a status code outside 100-599"""
    from resultdemo.results import builder
    from resultdemo.results.renderer import to_response

    async def invalid_status(request: Request):
        return to_response(request, builder.status_only(700))

    app.add_api_route("/tests/invalid-status", invalid_status, name="tests.invalid_status")
    return "/tests/invalid-status"


def test_invalid_status_code_returns_error_body(client, invalid_status_route):
    """InvalidStatusCode is answered with 500 and the error body"""
    response = client.get(invalid_status_route)

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "InvalidStatusCode"
    assert body["status_code"] == 700
    assert body["detail"].startswith("Invalid HTTP status code 700")


def test_redirect_to_external_site(client):
    response = client.get("/resultdemo/external")

    assert response.status_code == 302
    assert response.headers["location"] == "https://www.google.com"


def test_go_to_dashboard_redirects_to_user_dashboard(client):
    response = client.get("/resultdemo/dashboard")

    assert response.status_code == 302
    assert response.headers["location"] == "/user/dashboard"

    page = client.get(response.headers["location"])
    assert page.status_code == 200
    assert "User dashboard" in page.text


def test_redirect_to_custom_route(client):
    response = client.get("/resultdemo/custom-route")

    assert response.status_code == 302
    assert response.headers["location"] == "/profile/details/5"

    page = client.get(response.headers["location"])
    assert "Profile id: 5" in page.text


def test_return_not_found(client):
    response = client.get("/resultdemo/not-found")

    assert response.status_code == 404
    assert response.content == b""


def test_execute_silently(client):
    response = client.get("/resultdemo/silent")

    assert response.status_code == 200
    assert response.content == b""


def test_load_partial(client):
    response = client.get("/resultdemo/partial")

    assert response.status_code == 200
    assert "Partial details" in response.text
    assert "<html" not in response.text


def test_fetch_data_returns_object(client):
    response = client.get("/resultdemo/data")

    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Laptop", "price": 999.99}


def test_request_id_header(client):
    """Every response carries a request id"""
    response = client.get("/resultdemo/data")
    assert response.headers["x-request-id"]

    response = client.get("/resultdemo/data", headers={"X-Request-ID": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


def test_root_endpoint(client):
    response = client.get("/api")

    assert response.status_code == 200
    assert response.json()["name"] == "ActionResultDemo"
    assert response.json()["status"] == "running"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_liveness(client):
    assert client.get("/health/liveness").json()["status"] == "alive"


def test_health_detailed(client):
    data = client.get("/health/detailed").json()

    assert data["status"] == "healthy"
    assert data["components"]["templates"]["status"] == "healthy"
    assert data["components"]["download_file"]["status"] == "healthy"


def test_health_detailed_missing_download(client, tmp_path):
    with patch.dict(os.environ, {"FILES_DIR": str(tmp_path)}):
        get_settings.cache_clear()
        data = client.get("/health/detailed").json()

    assert data["status"] == "degraded"
    assert data["components"]["download_file"]["status"] == "degraded"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
