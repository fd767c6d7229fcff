"""Content source backed by an HTTP origin."""

import logging
from typing import Any

import httpx

from .base import ContentSource
from errors import ContentFetchError

logger = logging.getLogger(__name__)


class HttpContentSource(ContentSource):
    """Fetches JSON documents relative to a base URL."""

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def fetch_json(self, path: str) -> Any | None:
        url = self.base_url + path.lstrip("/")
        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            raise ContentFetchError(path, f"request failed: {e}") from e

        if response.status_code == 404:
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ContentFetchError(path, f"HTTP {response.status_code}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ContentFetchError(path, f"invalid JSON: {e}") from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
