"""HTTP transport using httpx."""

import asyncio

import httpx

from ..bindings import Binding
from ..config import settings
from ..dispatcher import dispatch
from ..registry import ConverterRegistry
from ..router import RouteResult
from ..selectors import Selector
from .protocols import Response


class HttpFetcher:
    """Async HTTP fetcher using httpx with connection reuse.

    Responses are read fully before being handed back, so dispatching them
    never waits on the network.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str | None = None,
        max_connections: int = 100,
        max_keepalive_connections: int = 20,
        follow_redirects: bool = True,
    ):
        self.timeout = httpx.Timeout(timeout)
        self.user_agent = user_agent or settings.user_agent
        self.limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )
        self.follow_redirects = follow_redirects
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
                        headers={"User-Agent": self.user_agent},
                        follow_redirects=self.follow_redirects,
                    )
        return self._client

    async def fetch(self, url: str, method: str = "GET", **kwargs) -> Response:
        """Send a request and return the fully read response."""
        client = await self._get_client()
        resp = await client.request(method, url, **kwargs)
        return Response.from_httpx(resp)

    async def dispatch(
        self,
        url: str,
        selector: Selector,
        *bindings: Binding,
        converters: ConverterRegistry | None = None,
        method: str = "GET",
    ) -> RouteResult:
        """Fetch ``url`` and dispatch the response."""
        response = await self.fetch(url, method=method)
        return dispatch(response, selector, *bindings, converters=converters)

    async def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
