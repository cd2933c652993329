"""
Pytest fixtures for feedwatch tests.
"""

import asyncio
from urllib.parse import parse_qs, urlparse
from xml.sax.saxutils import escape

import httpx
import pytest
from fastapi.testclient import TestClient

from feedwatch.config import config, state
from feedwatch.errors import NetworkError
from feedwatch.fetcher import Fetcher
from feedwatch.server import app, init_state
from feedwatch.services import FeedService
from feedwatch.store import Store
from feedwatch.view import View


def make_rss(
    items: list[tuple[str, str, str]] = (),
    title: str = "Test Feed",
    description: str = "Feed description",
) -> str:
    """Build an RSS 2.0 document from (title, link, description) tuples."""
    items_xml = "".join(
        f"<item><title>{escape(t)}</title><link>{escape(l)}</link>"
        f"<description>{escape(d)}</description></item>"
        for t, l, d in items
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel>'
        f"<title>{escape(title)}</title>"
        "<link>https://example.com/</link>"
        f"<description>{escape(description)}</description>"
        f"{items_xml}"
        "</channel></rss>"
    )


class FakeFetcher:
    """Stands in for Fetcher: serves canned content (or raises) per feed URL."""

    def __init__(self, responses: dict | None = None, delay: float = 0.0):
        self.responses = responses or {}
        self.delay = delay
        self.calls: list[tuple[str, float | None]] = []
        self.active = 0
        self.max_active = 0

    async def fetch(self, url: str, timeout: float | None = None) -> str:
        self.calls.append((url, timeout))
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            response = self.responses.get(url)
            if response is None:
                raise NetworkError(f"No response for {url}")
            if isinstance(response, Exception):
                raise response
            return response
        finally:
            self.active -= 1

    async def close(self) -> None:
        pass


def proxy_transport(feeds: dict[str, str]) -> httpx.MockTransport:
    """Mock proxy answering /get?url=<feed> with {"contents": feeds[feed]}."""

    def handler(request: httpx.Request) -> httpx.Response:
        query = parse_qs(urlparse(str(request.url)).query)
        feed_url = query.get("url", [""])[0]
        if feed_url not in feeds:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json={"contents": feeds[feed_url]})

    return httpx.MockTransport(handler)


@pytest.fixture
def store():
    """A fresh state store."""
    return Store()


@pytest.fixture
def view(store):
    """A renderer watching the store."""
    v = View(lng="en")
    v.watch(store)
    return v


@pytest.fixture
def fake_fetcher():
    return FakeFetcher()


@pytest.fixture
def feed_service(store, fake_fetcher):
    return FeedService(store=store, fetcher=fake_fetcher, timeout=10.0)


@pytest.fixture
def proxy_feeds():
    """Feed URL -> raw content served by the mock proxy in `client`."""
    return {
        "https://example.com/rss": make_rss(
            [("Hello", "https://example.com/hello", "First post")],
            title="Example",
        ),
        "https://example.com/broken": "<html><body>Not a feed</body></html>",
    }


@pytest.fixture
def client(proxy_feeds, monkeypatch):
    """Test client with fresh state and a mock proxy."""
    original = (state.store, state.view, state.fetcher, state.feed_service, state.poller)
    monkeypatch.setattr(config, "ENABLE_POLLING", False)
    monkeypatch.setattr(config, "LANGUAGE", "en")

    init_state(fetcher=Fetcher(transport=proxy_transport(proxy_feeds)))

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    state.store, state.view, state.fetcher, state.feed_service, state.poller = original
