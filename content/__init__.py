"""Content layer for the AlgoPath engine.

Provides the content source interface, file-system and HTTP implementations,
and the loader that turns a locale's manifest into a collection.
"""

from .base import ContentSource
from .filesystem import FileContentSource
from .remote import HttpContentSource
from .loader import CollectionLoader, ITEM_PATH, PROBE_PATH

__all__ = [
    "ContentSource",
    "FileContentSource",
    "HttpContentSource",
    "CollectionLoader",
    "ITEM_PATH",
    "PROBE_PATH",
    "create_source",
]


def create_source(data_dir=None, base_url: str | None = None) -> ContentSource:
    """Build an HTTP source when ``base_url`` is given, else a directory source."""
    if base_url:
        return HttpContentSource(base_url)
    from config import DEFAULT_DATA_DIR

    return FileContentSource(data_dir or DEFAULT_DATA_DIR)
