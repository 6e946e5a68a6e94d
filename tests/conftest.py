"""
Shared fixtures: an app wired to an in-memory counter store, a mocked Notion
API and a fixed clock.
"""

import json
from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from progress_api.app import create_app
from progress_api.stores.counter_store import MemoryCounterStore
from progress_api.utils.config import Settings


def status_page(name, property_name="Status", page_id="page"):
    """A Notion page whose status property `property_name` is set to `name`."""
    return {
        "object": "page",
        "id": page_id,
        "properties": {
            property_name: {"id": "abc", "type": "status", "status": {"id": "x", "name": name, "color": "green"}},
            "Name": {"id": "title", "type": "title", "title": []},
        },
    }


class FakeNotion:
    """Records requests and answers them with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.payload = {"object": "list", "results": [], "has_more": False, "next_cursor": None}

    def set_pages(self, pages, has_more=False):
        self.payload = {"object": "list", "results": pages, "has_more": has_more, "next_cursor": None}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, text=self.payload)

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)


def fixed_clock(tz):
    return datetime(2024, 1, 1, 12, 0, tzinfo=tz)


@pytest.fixture
def settings():
    return Settings(counter_backend="memory", log_level="WARNING")


@pytest.fixture
def store():
    return MemoryCounterStore()


@pytest.fixture
def notion():
    return FakeNotion()


@pytest.fixture
def app(settings, store, notion):
    return create_app(
        settings=settings,
        counter_store=store,
        notion_transport=httpx.MockTransport(notion.handler),
        clock=fixed_clock,
    )


@pytest.fixture
def client(app):
    return TestClient(app)
