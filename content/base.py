"""Abstract interface for content sources."""

from abc import ABC, abstractmethod
from typing import Any


class ContentSource(ABC):
    """Abstract interface for fetching persisted JSON content."""

    @abstractmethod
    async def fetch_json(self, path: str) -> Any | None:
        """Fetch and decode one JSON document.

        Args:
            path: Slash-separated path relative to the content root,
                e.g. ``en/problems/dp/dp-1.json``.

        Returns:
            The decoded document, or None if it does not exist.

        Raises:
            ContentFetchError: The document exists but could not be read or
                decoded, or the transport failed.
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the source."""
        pass
