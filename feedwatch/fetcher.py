"""
Remote Fetch Adapter - Retrieve raw feed content through the proxy.

Feeds are not requested directly: every URL is wrapped in a proxy request of
the form <proxy>/get?url=<feed url>&disableCache=true, and the proxy answers
with JSON whose "contents" field holds the raw feed text.
"""

import logging
from urllib.parse import urlencode

import httpx

from .errors import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_PROXY_URL = "https://hexlet-allorigins.herokuapp.com"


def proxy_url_for(url: str, proxy_url: str = DEFAULT_PROXY_URL) -> str:
    """Build the proxy request URL for a feed URL."""
    query = urlencode({"url": url, "disableCache": "true"})
    return f"{proxy_url.rstrip('/')}/get?{query}"


class Fetcher:
    """Fetches raw feed content via the proxy."""

    def __init__(
        self,
        proxy_url: str = DEFAULT_PROXY_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.proxy_url = proxy_url
        self.timeout = timeout
        self._client = httpx.AsyncClient(transport=transport)

    async def fetch(self, url: str, timeout: float | None = None) -> str:
        """
        Fetch the raw content of a feed.

        Args:
            url: Feed URL as submitted by the user
            timeout: Seconds before giving up (defaults to the fetcher's timeout)

        Returns:
            The raw feed text from the proxy's "contents" field

        Raises:
            NetworkError: On timeout, connection failure, error status or
                a proxy response without contents
        """
        request_url = proxy_url_for(url, self.proxy_url)
        try:
            response = await self._client.get(
                request_url,
                timeout=timeout if timeout is not None else self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise NetworkError(f"Timed out fetching {url}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to fetch {url}: {e}") from e
        except ValueError as e:
            raise NetworkError(f"Proxy returned invalid JSON for {url}") from e

        contents = payload.get("contents") if isinstance(payload, dict) else None
        if not isinstance(contents, str):
            raise NetworkError(f"Proxy response for {url} has no contents")

        logger.debug(f"Fetched {len(contents)} characters from {url}")
        return contents

    async def close(self) -> None:
        await self._client.aclose()
