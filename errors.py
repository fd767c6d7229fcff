"""Exceptions raised by the content layer.

Rendering never raises for missing or malformed content: it degrades to a
fallback. These exceptions only cross the boundary between a content source
and the loader that recovers from them.
"""


class ContentError(Exception):
    """Base class for content loading failures."""


class ContentFetchError(ContentError):
    """A document exists but could not be fetched or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to fetch {path}: {reason}")
        self.path = path
        self.reason = reason


class CollectionLoadError(ContentError):
    """No category manifest could be loaded for any locale."""
