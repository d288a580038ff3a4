"""Redirect-following HTTP fetcher implementation using httpx."""

import asyncio
from collections.abc import Mapping

import httpx

from ..errors import FetchError, RedirectError
from ..logging import get_logger
from .protocols import Response, is_redirection

DEFAULT_USER_AGENT = "chunkfetch/0.1"
MAX_REDIRECTS = 10

logger = get_logger(__name__)


class RedirectingFetcher:
    """Async HTTP fetcher that follows a bounded number of redirects itself.

    The underlying client never follows redirects and never decodes the
    body, so the returned ``Response.content`` is the exact byte sequence
    the origin sent. Every hop reuses the caller's method and headers.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_tls: bool = True,
        max_redirects: int = MAX_REDIRECTS,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
    ):
        self.timeout = httpx.Timeout(timeout)
        self.user_agent = user_agent
        # Disabling verification skips both certificate and hostname checks.
        self.verify_tls = verify_tls
        self.max_redirects = max_redirects
        self.limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with double-checked locking."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self.timeout,
                        limits=self.limits,
                        headers={
                            "User-Agent": self.user_agent,
                            "Accept-Encoding": "identity",
                        },
                        verify=self.verify_tls,
                        follow_redirects=False,
                    )
        return self._client

    async def fetch(self, method: str, url: str, headers: Mapping[str, str]) -> Response:
        """Fetch ``url``, following up to ``max_redirects`` redirects.

        A 3xx response is followed only while it carries a Location header
        and the redirect budget is not spent; otherwise it is returned as the
        final response, so callers must not assume a non-redirect status.

        Raises:
            RedirectError: a Location header did not parse as a URL.
            FetchError: connection, TLS or protocol failure on any hop.
        """
        client = await self._get_client()
        for hop in range(self.max_redirects + 1):
            resp = await self._send(client, method, url, headers)
            location = resp.headers.get("location")
            if (
                hop == self.max_redirects
                or location is None
                or not is_redirection(resp.status_code)
            ):
                return await self._read(resp, url)

            await resp.aclose()
            if not location.strip():
                raise RedirectError(f"Empty redirect location from {url}", url, location)
            try:
                next_url = str(resp.url.join(location))
            except httpx.InvalidURL as e:
                raise RedirectError(
                    f"Invalid redirect location from {url}: {e}", url, location
                ) from e
            logger.debug(
                "redirect_followed",
                hop=hop + 1,
                status=resp.status_code,
                url=url,
                location=next_url,
            )
            url = next_url

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        headers: Mapping[str, str],
    ) -> httpx.Response:
        try:
            request = client.build_request(method, url, headers=dict(headers))
            return await client.send(request, stream=True)
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL {url}: {e}", url) from e
        except httpx.RequestError as e:
            raise FetchError(f"Request to {url} failed: {e!r}", url) from e

    async def _read(self, resp: httpx.Response, url: str) -> Response:
        """Aggregate the undecoded body of the final response."""
        try:
            content = b"".join([chunk async for chunk in resp.aiter_raw()])
        except httpx.RequestError as e:
            raise FetchError(f"Reading body from {url} failed: {e!r}", url) from e
        finally:
            await resp.aclose()

        logger.info(
            "fetch_completed",
            url=str(resp.url),
            status=resp.status_code,
            size=len(content),
        )
        return Response(
            url=str(resp.url),
            status=resp.status_code,
            content=content,
            headers=dict(resp.headers),
        )

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RedirectingFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
