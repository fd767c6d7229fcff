"""Locale bundles and translated string lookup.

Bundles are loaded from ``<locale>/meta.json``. Every locale except the
default may be partial: a bundle links to the default bundle as its parent,
and lookups walk that chain before settling on a caller-supplied literal.
Lookups never raise and never return an empty string.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from config import AppConfig, LocaleInfo
from errors import ContentFetchError
from models import CategoryMeta, LocaleBundle

if TYPE_CHECKING:
    from content.base import ContentSource

logger = logging.getLogger(__name__)

META_PATH = "{locale}/meta.json"


def _walk(mapping: dict[str, Any], path: str) -> Any:
    node: Any = mapping
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def translate(bundle: LocaleBundle | None, path: str, fallback: str | None = None) -> str:
    """Look up a dotted UI-string path such as ``problem.codeTitle``.

    Falls back to the parent bundle, then to ``fallback``, then to the path.
    """
    if bundle is not None:
        for candidate in bundle.chain():
            text = _as_text(_walk(candidate.ui, path))
            if text is not None:
                return text
    return fallback if fallback else path


def resolve_title(bundle: LocaleBundle | None, item_id: str, original_title: str | None) -> str:
    """Return the translated title override for an item, if any."""
    if bundle is not None:
        for candidate in bundle.chain():
            title = candidate.problem_titles.get(item_id)
            if title:
                return title
    return original_title or item_id


def category(bundle: LocaleBundle | None, category_id: str) -> CategoryMeta | None:
    if bundle is None:
        return None
    for candidate in bundle.chain():
        meta = candidate.categories.get(category_id)
        if meta is not None:
            return meta
    return None


def category_ids(bundle: LocaleBundle | None) -> list[str]:
    """Category ids in manifest order, from the first bundle that lists any."""
    if bundle is None:
        return []
    for candidate in bundle.chain():
        if candidate.categories:
            return list(candidate.categories)
    return []


class LocaleResolver:
    """Loads locale bundles from a content source with default-locale fallback."""

    def __init__(self, source: ContentSource, config: AppConfig | None = None):
        self.source = source
        self.config = config or AppConfig()
        self._bundles: dict[str, LocaleBundle] = {}

    @property
    def default_locale(self) -> str:
        return self.config.default_locale

    @property
    def available_locales(self) -> dict[str, LocaleInfo]:
        return self.config.available_locales

    def is_available(self, locale: str) -> bool:
        return locale in self.config.available_locales

    def next_locale(self, current: str) -> str:
        """The locale a language toggle switches to from ``current``."""
        codes = list(self.config.available_locales)
        if not codes:
            return self.default_locale
        if current not in codes:
            return codes[0]
        return codes[(codes.index(current) + 1) % len(codes)]

    async def resolve(self, locale: str) -> LocaleBundle:
        """Load the bundle for ``locale`` linked to the default bundle.

        Returns the default bundle when ``locale`` cannot be loaded, and an
        empty bundle flagged ``loaded=False`` when neither can.
        """
        default = await self._load(self.default_locale)

        if locale != self.default_locale:
            bundle = await self._load(locale)
            if bundle is not None:
                return bundle.attach_parent(default)
            logger.warning(
                "Failed to load %s, falling back to %s",
                META_PATH.format(locale=locale),
                self.default_locale,
            )

        if default is not None:
            return default

        logger.error("Failed to load fallback %s", META_PATH.format(locale=self.default_locale))
        return LocaleBundle(locale=self.default_locale, loaded=False)

    def translate(self, bundle: LocaleBundle | None, path: str, fallback: str | None = None) -> str:
        return translate(bundle, path, fallback)

    def resolve_title(self, bundle: LocaleBundle | None, item_id: str, original_title: str | None) -> str:
        return resolve_title(bundle, item_id, original_title)

    def category(self, bundle: LocaleBundle | None, category_id: str) -> CategoryMeta | None:
        return category(bundle, category_id)

    async def _load(self, locale: str) -> LocaleBundle | None:
        if locale in self._bundles:
            return self._bundles[locale]

        path = META_PATH.format(locale=locale)
        try:
            raw = await self.source.fetch_json(path)
        except ContentFetchError as e:
            logger.warning("%s", e)
            return None
        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.warning("Ignoring %s: expected an object", path)
            return None

        try:
            bundle = LocaleBundle.model_validate({**raw, "locale": locale})
        except ValidationError as e:
            logger.warning("Ignoring invalid %s: %s", path, e)
            return None

        self._bundles[locale] = bundle
        return bundle
