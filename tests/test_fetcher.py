# tests/test_fetcher.py
"""Tests for the HTTP fetcher."""

import asyncio

import httpx
import pytest

from ogcheck.constants import HOST_NOT_FOUND_HINT
from ogcheck.exceptions import (
    FetchError,
    FetchTimeoutError,
    HostNotFoundError,
    TooManyRedirectsError,
)
from ogcheck.fetcher import Fetcher


def redirect_chain_transport(hops: int, final_body: str = "<title>Done</title>"):
    """Transport redirecting /hop0 -> /hop1 -> ... -> /hop{hops}, which returns 200."""

    def handler(request: httpx.Request) -> httpx.Response:
        index = int(request.url.path.replace("/hop", ""))
        if index < hops:
            return httpx.Response(302, headers={"Location": f"/hop{index + 1}"})
        return httpx.Response(200, text=final_body)

    return httpx.MockTransport(handler)


class TestFetcher:
    """Test cases for Fetcher."""

    def test_fetcher_initialization(self):
        """Test default settings and request headers."""
        fetcher = Fetcher()
        assert fetcher.timeout_ms == 10000
        assert fetcher.max_redirects == 5
        assert fetcher.headers["User-Agent"] == "og-check/1.0.0 (Open Graph Validator)"
        assert fetcher.headers["Accept"] == "text/html,application/xhtml+xml"
        assert fetcher.headers["Accept-Language"] == "en-US,en;q=0.9"

    def test_fetcher_custom_user_agent(self):
        """Test a custom user agent replaces the default."""
        fetcher = Fetcher(user_agent="CustomBot/1.0")
        assert fetcher.headers["User-Agent"] == "CustomBot/1.0"

    @pytest.mark.asyncio
    async def test_fetch_sends_headers(self):
        """Test the GET carries the expected headers."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["accept"] = request.headers["accept"]
            seen["accept-language"] = request.headers["accept-language"]
            seen["user-agent"] = request.headers["user-agent"]
            return httpx.Response(200, text="<html></html>")

        fetcher = Fetcher(transport=httpx.MockTransport(handler))
        await fetcher.fetch("https://example.com/")

        assert seen == {
            "method": "GET",
            "accept": "text/html,application/xhtml+xml",
            "accept-language": "en-US,en;q=0.9",
            "user-agent": "og-check/1.0.0 (Open Graph Validator)",
        }

    @pytest.mark.asyncio
    async def test_fetch_returns_body_and_headers(self):
        """Test a direct 200 response."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={"X-Custom": "yes"},
                text="<title>Hello</title>",
            )

        fetcher = Fetcher(transport=httpx.MockTransport(handler))
        response = await fetcher.fetch("https://example.com/")

        assert response.final_url == "https://example.com/"
        assert response.status_code == 200
        assert response.body == "<title>Hello</title>"
        assert response.headers["x-custom"] == "yes"
        assert response.redirect_chain == ["https://example.com/"]
        assert response.redirect_count == 0

    @pytest.mark.asyncio
    async def test_five_redirects_succeed(self):
        """Test five hops followed by a 200 use the final URL."""
        fetcher = Fetcher(transport=redirect_chain_transport(5))
        response = await fetcher.fetch("https://example.com/hop0")

        assert response.final_url == "https://example.com/hop5"
        assert response.status_code == 200
        assert response.redirect_count == 5
        assert response.body == "<title>Done</title>"

    @pytest.mark.asyncio
    async def test_six_redirects_fail(self):
        """Test a sixth hop fails with too many redirects."""
        fetcher = Fetcher(transport=redirect_chain_transport(6))

        with pytest.raises(TooManyRedirectsError, match="Too many redirects"):
            await fetcher.fetch("https://example.com/hop0")

    @pytest.mark.asyncio
    async def test_absolute_location_followed(self):
        """Test redirects to another host."""
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "old.example.com":
                return httpx.Response(301, headers={"Location": "https://new.example.com/landing"})
            return httpx.Response(200, text="ok")

        fetcher = Fetcher(transport=httpx.MockTransport(handler))
        response = await fetcher.fetch("http://old.example.com/")

        assert response.final_url == "https://new.example.com/landing"
        assert response.redirect_chain == [
            "http://old.example.com/",
            "https://new.example.com/landing",
        ]

    @pytest.mark.asyncio
    async def test_redirect_without_location_returned(self):
        """Test a 3xx without Location is returned as the final response."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(304)

        fetcher = Fetcher(transport=httpx.MockTransport(handler))
        response = await fetcher.fetch("https://example.com/")

        assert response.status_code == 304
        assert response.body == ""

    @pytest.mark.asyncio
    async def test_error_status_is_not_raised(self):
        """Test 4xx/5xx pages are returned for validation."""
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="<title>Not Found</title>")

        fetcher = Fetcher(transport=httpx.MockTransport(handler))
        response = await fetcher.fetch("https://example.com/missing")

        assert response.status_code == 404
        assert response.body == "<title>Not Found</title>"

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test a slow response is aborted with a timeout error."""
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, text="late")

        fetcher = Fetcher(timeout_ms=50, transport=httpx.MockTransport(handler))

        with pytest.raises(FetchTimeoutError, match="Request timed out"):
            await fetcher.fetch("https://example.com/")

    @pytest.mark.asyncio
    async def test_httpx_timeout_mapped(self):
        """Test transport-level timeouts map to FetchTimeoutError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        fetcher = Fetcher(transport=httpx.MockTransport(handler))

        with pytest.raises(FetchTimeoutError, match="Request timed out"):
            await fetcher.fetch("https://example.com/")

    @pytest.mark.asyncio
    async def test_dns_failure_has_hint(self):
        """Test DNS resolution errors carry the hostname hint."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno -2] Name or service not known", request=request)

        fetcher = Fetcher(transport=httpx.MockTransport(handler))

        with pytest.raises(HostNotFoundError) as exc_info:
            await fetcher.fetch("https://nope.invalid/")

        assert exc_info.value.hint == HOST_NOT_FOUND_HINT
        assert "Name or service not known" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        """Test other connection errors surface their message without a hint."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        fetcher = Fetcher(transport=httpx.MockTransport(handler))

        with pytest.raises(FetchError) as exc_info:
            await fetcher.fetch("https://example.com/")

        assert not isinstance(exc_info.value, HostNotFoundError)
        assert exc_info.value.hint is None
        assert "Connection refused" in str(exc_info.value)

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_fetch_real_url(self):
        """Test fetching a real page."""
        response = await Fetcher().fetch("https://example.com/")
        assert response.status_code == 200
        assert "<title>" in response.body
