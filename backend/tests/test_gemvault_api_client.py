"""Tests for the admin API client."""

import json
from unittest.mock import patch

import httpx
import pytest

from gemvault.services.gemvault_api_client import GemvaultAPIClient
from gemvault.services.shared.http_client import HTTPClientError

BASE_URL = "http://gemvault.test/api"


def make_client(handler, token=None):
    return GemvaultAPIClient(
        base_url=BASE_URL, token=token, transport=httpx.MockTransport(handler)
    )


def test_login_stores_token_for_later_calls():
    seen = []

    def handler(request):
        seen.append(request)
        if request.url.path == "/api/admin/login":
            return httpx.Response(200, json={"access_token": "tok-123", "token_type": "bearer"})
        return httpx.Response(200, json=[])

    with make_client(handler) as api:
        api.login("admin", "admin123")
        api.get_owners(5)

    assert json.loads(seen[0].content) == {"username": "admin", "password": "admin123"}
    assert "authorization" not in seen[0].headers
    assert seen[1].url.path == "/api/gemstones/5/owners"
    assert seen[1].headers["authorization"] == "Bearer tok-123"


def test_update_owner_sends_put_body():
    captured = {}

    def handler(request):
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": 9, **captured["body"]})

    with make_client(handler, token="t") as api:
        result = api.update_owner(5, 9, {"ownership_start_date": "2024-01-01"})

    assert captured["method"] == "PUT"
    assert captured["path"] == "/api/gemstones/5/owners/9"
    assert result["id"] == 9


def test_delete_and_contacts_endpoints():
    paths = []

    def handler(request):
        paths.append((request.method, request.url.path))
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json=[{"id": 1, "owner_name": "Rina"}])

    with make_client(handler, token="t") as api:
        api.delete_owner(5, 9)
        contacts = api.get_all_owners()

    assert paths == [("DELETE", "/api/gemstones/5/owners/9"), ("GET", "/api/owners/all")]
    assert contacts[0]["owner_name"] == "Rina"


def test_photo_gallery_endpoints():
    seen = []

    def handler(request):
        body = json.loads(request.content) if request.content else None
        seen.append((request.method, request.url.path, body, "authorization" in request.headers))
        if request.method == "DELETE":
            return httpx.Response(204)
        if request.method == "GET":
            return httpx.Response(200, json=[])
        return httpx.Response(200, json={"id": 3, **body})

    with make_client(handler, token="t") as api:
        api.add_photo(5, "https://cdn.example.com/a.jpg", "Rough")
        api.update_photo(5, 3, None)
        api.delete_photo(5, 3)
        api.get_public_photos("GEM-1-ABCDEF")

    assert seen == [
        (
            "POST",
            "/api/gemstones/5/photos",
            {"photo_url": "https://cdn.example.com/a.jpg", "caption": "Rough"},
            True,
        ),
        ("PUT", "/api/gemstones/5/photos/3", {"caption": None}, True),
        ("DELETE", "/api/gemstones/5/photos/3", None, True),
        ("GET", "/api/gemstones/GEM-1-ABCDEF/photos/public", None, False),
    ]


def test_http_error_raises_client_error():
    def handler(request):
        return httpx.Response(422, json={"error": "ValidationError"})

    with make_client(handler, token="t") as api, pytest.raises(HTTPClientError) as exc_info:
        api.add_owner(5, {"owner_name": "X"})

    assert exc_info.value.status_code == 422
    assert "ValidationError" in exc_info.value.response_body


def test_connection_errors_are_retried_then_raised():
    attempts = []

    def handler(request):
        attempts.append(request)
        raise httpx.ConnectError("refused", request=request)

    with patch("tenacity.nap.time.sleep"), make_client(handler, token="t") as api:
        with pytest.raises(HTTPClientError, match="Connection failed"):
            api.get_owners(5)

    assert len(attempts) == 3


def test_timeout_then_success():
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) == 1:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json=[])

    with patch("tenacity.nap.time.sleep"), make_client(handler, token="t") as api:
        assert api.get_owners(5) == []

    assert len(attempts) == 2
