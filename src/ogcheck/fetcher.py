"""HTTP fetcher with bounded manual redirect following."""

import asyncio
import logging
from typing import Dict, List, Optional
from urllib.parse import urljoin

import httpx

from ogcheck.constants import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
    DNS_ERROR_MARKERS,
    HOST_NOT_FOUND_HINT,
    MAX_REDIRECTS,
)
from ogcheck.exceptions import (
    FetchError,
    FetchTimeoutError,
    HostNotFoundError,
    TooManyRedirectsError,
)
from ogcheck.models import FetchResponse

logger = logging.getLogger(__name__)


def _is_dns_failure(error: Exception) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in DNS_ERROR_MARKERS)


class Fetcher:
    """Fetches a single page, following redirects by hand."""

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        user_agent: Optional[str] = None,
        max_redirects: int = MAX_REDIRECTS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the fetcher.

        Args:
            timeout_ms: Timeout for the whole fetch, every redirect hop included
            user_agent: Custom user agent string
            max_redirects: Redirect hops allowed before failing
            transport: Optional httpx transport (tests inject MockTransport)
        """
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.max_redirects = max_redirects
        self.transport = transport
        self.headers = {
            "User-Agent": self.user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": DEFAULT_ACCEPT_LANGUAGE,
        }

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    async def fetch(self, url: str) -> FetchResponse:
        """GET a URL and return the final response after redirects.

        Args:
            url: Absolute http(s) URL

        Returns:
            FetchResponse for the first non-redirect response

        Raises:
            FetchTimeoutError: The whole fetch took longer than the timeout
            TooManyRedirectsError: More than max_redirects hops
            HostNotFoundError: DNS resolution failed
            FetchError: Any other transport failure
        """
        try:
            return await asyncio.wait_for(self._fetch(url), timeout=self.timeout_seconds)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error(f"Timeout fetching {url} (>{self.timeout_ms}ms)")
            raise FetchTimeoutError("Request timed out", url=url)

    async def _fetch(self, url: str) -> FetchResponse:
        chain: List[str] = []

        async with httpx.AsyncClient(
            headers=self.headers,
            follow_redirects=False,
            timeout=self.timeout_seconds,
            transport=self.transport,
        ) as client:
            current_url = url
            while True:
                if len(chain) > self.max_redirects:
                    logger.error(f"Too many redirects starting from {url}")
                    raise TooManyRedirectsError("Too many redirects", url=current_url)

                chain.append(current_url)
                response = await self._get(client, current_url)

                location = response.headers.get("location")
                if 300 <= response.status_code < 400 and location:
                    next_url = urljoin(current_url, location)
                    logger.debug(f"{response.status_code} redirect {current_url} -> {next_url}")
                    current_url = next_url
                    continue

                if response.status_code >= 400:
                    logger.warning(f"{current_url} returned HTTP {response.status_code}")

                return FetchResponse(
                    final_url=current_url,
                    status_code=response.status_code,
                    headers=self._normalize_headers(response.headers),
                    body=response.text,
                    redirect_chain=chain,
                )

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        logger.info(f"GET {url}")
        try:
            return await client.get(url)
        except httpx.TimeoutException:
            raise
        except httpx.ConnectError as e:
            if _is_dns_failure(e):
                logger.error(f"DNS lookup failed for {url}: {e}")
                raise HostNotFoundError(str(e), url=url, hint=HOST_NOT_FOUND_HINT) from e
            logger.error(f"Connection error for {url}: {e}")
            raise FetchError(str(e) or type(e).__name__, url=url) from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {url}: {e}")
            raise FetchError(str(e) or type(e).__name__, url=url) from e

    @staticmethod
    def _normalize_headers(headers: httpx.Headers) -> Dict[str, str]:
        # Repeated headers are joined with ", ".
        merged: Dict[str, str] = {}
        for key, value in headers.multi_items():
            key = key.lower()
            merged[key] = f"{merged[key]}, {value}" if key in merged else value
        return merged
