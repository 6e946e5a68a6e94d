"""
Tests for routing, CORS headers and error rendering across endpoints.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from progress_api.app import create_app
from progress_api.stores.counter_store import MemoryCounterStore

CORS_HEADERS = (
    "access-control-allow-origin",
    "access-control-allow-methods",
    "access-control-allow-headers",
)


class BrokenStore(MemoryCounterStore):
    async def get(self, key):
        raise RuntimeError("store offline")


@pytest.mark.parametrize("path", ["/progress", "/visit", "/anything/else"])
def test_options_preflight(client, path):
    response = client.options(path)

    assert response.status_code == 204
    assert response.content == b""
    for header in CORS_HEADERS:
        assert header in response.headers
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_headers_on_every_response(client):
    for response in (
        client.get("/visit", params={"database_id": "abc"}),
        client.get("/progress"),
        client.get("/missing"),
        client.get("/allowance"),
    ):
        for header in CORS_HEADERS:
            assert header in response.headers


def test_unknown_path_is_plain_not_found(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.text == "Not Found"
    assert response.headers["content-type"].startswith("text/plain")


def test_allowance_not_implemented(client):
    response = client.get("/allowance")

    assert response.status_code == 501
    assert response.json()["error"] == "not_implemented"


@pytest.mark.parametrize("path,params", [
    ("/progress", {"api_key": "k", "database_id": "db", "format": "xyz"}),
    ("/progress", {"format": "xyz"}),
    ("/visit", {"database_id": "abc", "format": "xyz"}),
])
def test_invalid_format(client, notion, store, path, params):
    response = client.get(path, params=params)

    assert response.status_code == 400
    assert response.text == "Invalid format"
    assert notion.requests == []
    assert store.snapshot() == {}


def test_html_alias(client):
    response = client.get("/visit", params={"database_id": "abc", "format": "html"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")


def test_bad_request_in_requested_format(client):
    response = client.get("/progress", params={"format": "iframe"})

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/html")
    assert "Missing API Key or Database ID" in response.text


def test_unexpected_error_is_rendered_in_requested_format(settings):
    app = create_app(settings=settings, counter_store=BrokenStore(), notion_transport=httpx.MockTransport(lambda r: None))
    client = TestClient(app)

    response = client.get("/visit", params={"database_id": "abc", "format": "svg"})

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert "Error occurred" in response.text
    assert "access-control-allow-origin" in response.headers

    response = client.get("/visit", params={"database_id": "abc"})
    assert response.json() == {"error": "internal_error", "message": "Error occurred"}


def test_request_id_is_echoed(client):
    response = client.get("/visit", params={"database_id": "abc"}, headers={"X-Request-ID": "req-42"})
    assert response.headers["x-request-id"] == "req-42"


def test_request_id_is_generated(client):
    response = client.get("/visit", params={"database_id": "abc"})
    assert response.headers["x-request-id"]


@pytest.mark.parametrize("path", ["/progress/", "/progress/x", "/progressbar"])
def test_progress_matched_by_prefix(client, notion, path):
    notion.set_pages([])

    response = client.get(path, params={"api_key": "k", "database_id": "db"}, follow_redirects=False)

    assert response.status_code == 200
    assert response.json() == {"total": 0, "completed": 0, "progress": 0}


@pytest.mark.parametrize("path", ["/visit/abc", "/visit/"])
def test_visit_matched_by_prefix(client, store, path):
    response = client.get(path, params={"database_id": "abc"}, follow_redirects=False)

    assert response.status_code == 200
    assert store.snapshot()["total_visits_abc"] == "1"


def test_allowance_sub_path(client):
    assert client.get("/allowance/monthly").status_code == 501


@pytest.mark.parametrize("method", ["post", "put", "patch", "delete"])
def test_non_get_methods_are_dispatched(client, store, method):
    response = client.request(method.upper(), "/visit", params={"database_id": "abc"})

    assert response.status_code == 200
    assert response.json() == {"total": 1, "today": 1}


def test_non_get_progress_still_validates(client, notion):
    response = client.post("/progress")

    assert response.status_code == 400
    assert response.json()["message"] == "Missing API Key or Database ID"
    assert notion.requests == []


def test_non_get_unknown_path_is_not_found(client):
    response = client.post("/elsewhere")

    assert response.status_code == 404
    assert response.text == "Not Found"
