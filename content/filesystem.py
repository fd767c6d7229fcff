"""Content source backed by a local directory."""

import json
import logging
from pathlib import Path
from typing import Any

from .base import ContentSource
from errors import ContentFetchError

logger = logging.getLogger(__name__)


class FileContentSource(ContentSource):
    """Reads JSON documents below a root directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    async def fetch_json(self, path: str) -> Any | None:
        file_path = (self.root / path).resolve()
        if not file_path.is_relative_to(self.root.resolve()):
            logger.warning("Refusing to read %s outside %s", path, self.root)
            return None
        if not file_path.is_file():
            return None

        try:
            with open(file_path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ContentFetchError(path, str(e)) from e
