"""Async client for the bus finder HTTP service."""

from typing import Any

import httpx
from pydantic import ValidationError

from . import __version__
from .config import get_settings
from .errors import TransportError
from .models import HealthResponse, SearchResponse

USER_AGENT = f"bus-finder/{__version__}"


class RouteFinderClient:
    """Client for the route search and suggestion endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.base_url
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.transport = transport
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()

    async def _request(self, path: str, params: dict[str, str] | None = None) -> Any:
        """Make a GET request and return the decoded JSON body."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        try:
            response = await self.client.get(path, params=params or {})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Route service error ({e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Route service unreachable: {e}") from e
        except ValueError as e:
            raise TransportError("Malformed response from route service") from e

    async def suggest(self, prefix: str) -> list[str]:
        """Get place names starting with a prefix.

        Args:
            prefix: What the user typed so far (e.g., "cen")

        Returns:
            Sorted distinct place names. Empty for a blank prefix, without
            contacting the service.
        """
        prefix = (prefix or "").strip()
        if not prefix:
            return []

        data = await self._request("/suggest", params={"q": prefix})
        if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
            raise TransportError("Malformed suggestion list from route service")
        return data

    async def search(
        self,
        origin: str | None = None,
        destination: str | None = None,
    ) -> SearchResponse:
        """Search routes by partial origin and destination.

        Args:
            origin: Part of the departure place
            destination: Part of the destination or via place

        Returns:
            The matching routes with their count.
        """
        params = {}
        if origin and origin.strip():
            params["origin"] = origin.strip()
        if destination and destination.strip():
            params["destination"] = destination.strip()

        data = await self._request("/search", params=params)
        if isinstance(data, dict) and data.get("success") is False:
            raise TransportError(data.get("error") or "Search failed")

        try:
            return SearchResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError("Malformed search response from route service") from e

    async def health(self) -> HealthResponse:
        """Get the service health report."""
        data = await self._request("/health")
        try:
            return HealthResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError("Malformed health response from route service") from e
