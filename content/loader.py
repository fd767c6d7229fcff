"""Collection loading with per-item locale fallback.

Items of a category are loaded one after another in manifest order. Each
item is tried in the requested locale first and in the default locale second,
so one missing file never aborts the collection.
"""

import logging
from typing import Any

from pydantic import ValidationError

import locales
from config import AppConfig
from errors import CollectionLoadError, ContentFetchError
from models import Collection, ContentItem, LocaleBundle

from .base import ContentSource

logger = logging.getLogger(__name__)

ITEM_PATH = "{locale}/problems/{category}/{item_id}.json"
# Deprecated layout used before categories listed their problem ids.
PROBE_PATH = "problems/{category}/{category}-{number}.json"


class CollectionLoader:
    """Loads content items for every category of a locale bundle."""

    def __init__(self, source: ContentSource, config: AppConfig | None = None):
        self.source = source
        self.config = config or AppConfig()

    async def load_collection(self, bundle: LocaleBundle) -> Collection:
        """Load all categories listed by ``bundle``.

        Raises:
            CollectionLoadError: The bundle lists no categories at all.
        """
        category_ids = locales.category_ids(bundle)
        if not category_ids:
            raise CollectionLoadError(f"No categories available for locale {bundle.locale!r}")

        collection = Collection(locale=bundle.locale)
        seen: set[str] = set()
        for category_id in category_ids:
            items = []
            for item in await self.load_category(bundle, category_id):
                if item.id in seen:
                    logger.warning("Skipping duplicate problem id %s in %s", item.id, category_id)
                    continue
                seen.add(item.id)
                items.append(item)
            collection.categories[category_id] = items

        logger.info(
            "Loaded %d problems in %d categories (%s)",
            collection.item_count,
            len(collection.categories),
            bundle.locale,
        )
        return collection

    async def load_category(self, bundle: LocaleBundle, category_id: str) -> list[ContentItem]:
        meta = locales.category(bundle, category_id)
        problem_ids = meta.problem_ids if meta else []
        if not problem_ids:
            return await self._probe_category(category_id)

        items = []
        for item_id in problem_ids:
            item = await self.load_item(bundle.locale, category_id, item_id)
            if item is not None:
                items.append(item)
        return items

    async def load_item(self, locale: str, category_id: str, item_id: str) -> ContentItem | None:
        """Load one item, retrying the default locale when it is missing."""
        raw = None
        path = ITEM_PATH.format(locale=locale, category=category_id, item_id=item_id)
        try:
            raw = await self.source.fetch_json(path)
        except ContentFetchError as e:
            logger.debug("%s; trying %s", e, self.config.default_locale)

        default_locale = self.config.default_locale
        if raw is None and locale != default_locale:
            fallback_path = ITEM_PATH.format(
                locale=default_locale, category=category_id, item_id=item_id
            )
            try:
                raw = await self.source.fetch_json(fallback_path)
            except ContentFetchError as e:
                logger.error("Failed to load problem %s: %s", item_id, e)
                return None

        if raw is None:
            logger.error("Problem %s not found in %s", item_id, category_id)
            return None

        return self._normalize(raw, item_id)

    async def _probe_category(self, category_id: str) -> list[ContentItem]:
        limit = self.config.loader.probe_limit
        logger.warning(
            "Category %s has no problem manifest; probing ids 1..%d (deprecated)",
            category_id,
            limit,
        )
        items = []
        for number in range(1, limit + 1):
            path = PROBE_PATH.format(category=category_id, number=number)
            try:
                raw = await self.source.fetch_json(path)
            except ContentFetchError as e:
                logger.debug("%s", e)
                continue
            if raw is None:
                continue
            item = self._normalize(raw, f"{category_id}-{number}")
            if item is not None:
                items.append(item)
        return items

    def _normalize(self, raw: Any, item_id: str) -> ContentItem | None:
        if not isinstance(raw, dict):
            logger.error("Problem %s is not a JSON object", item_id)
            return None
        if not raw.get("id"):
            raw = {**raw, "id": item_id}
        try:
            return ContentItem.from_raw(raw, self.config.loader.code_language)
        except (ValidationError, TypeError, AttributeError, ValueError) as e:
            logger.error("Failed to load problem %s: %s", item_id, e)
            return None
