"""Tests for the metadata fetcher."""

from collections.abc import Callable

import httpx
import pytest

from src.metadata.client import MetadataFetcher


URL = "https://note.com/alice/n/n4f2a"

HTML = (
    '<html><head><meta property="og:title" content="Fetched Title"></head>'
    "<body></body></html>"
)


def fetcher_for(
    handler: Callable[[httpx.Request], httpx.Response],
) -> MetadataFetcher:
    """Build a fetcher backed by a mock transport."""
    return MetadataFetcher(transport=httpx.MockTransport(handler))


class TestMetadataFetcher:
    """Tests for MetadataFetcher.fetch."""

    def test_success(self) -> None:
        """Test a 200 response is parsed."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=HTML)

        metadata = MetadataFetcher(
            user_agent="readq-test", transport=httpx.MockTransport(handler)
        ).fetch(URL)

        assert metadata.title == "Fetched Title"
        assert metadata.creator_urlname == "alice"
        assert seen[0].headers["User-Agent"] == "readq-test"
        assert "text/html" in seen[0].headers["Accept"]

    def test_follows_redirects(self) -> None:
        """Test redirects are followed to the final page."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": URL})
            return httpx.Response(200, text=HTML)

        metadata = fetcher_for(handler).fetch("https://note.com/old")

        assert metadata.title == "Fetched Title"

    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_http_error_falls_back(self, status: int) -> None:
        """Test non-2xx responses yield URL-only metadata."""
        metadata = fetcher_for(lambda request: httpx.Response(status)).fetch(URL)

        assert metadata.title == URL
        assert metadata.creator_urlname == "alice"

    def test_transport_error_falls_back(self) -> None:
        """Test connection failures yield URL-only metadata."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        metadata = fetcher_for(handler).fetch(URL)

        assert metadata.title == URL

    def test_timeout_falls_back(self) -> None:
        """Test timeouts yield URL-only metadata."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        metadata = fetcher_for(handler).fetch(URL)

        assert metadata.creator_nickname == "alice"
