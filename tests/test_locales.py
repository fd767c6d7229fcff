"""Tests for locale bundles, translation lookup and the resolver."""

import asyncio
import logging

import locales
from config import AppConfig
from content import FileContentSource
from locales import LocaleResolver
from models import LocaleBundle


class TestTranslate:
    """Tests for dotted-path string lookup with fallback."""

    def test_own_string_wins(self, ua_bundle):
        """A string present in the active bundle should be used."""
        assert locales.translate(ua_bundle, "quiz.correct") == "Правильно!"

    def test_falls_back_to_parent_bundle(self, ua_bundle):
        """A string missing from a partial bundle should come from the default."""
        assert locales.translate(ua_bundle, "quiz.tryAgain") == "Try again!"

    def test_falls_back_to_literal_then_path(self, ua_bundle):
        """Missing everywhere should give the literal, then the path itself."""
        assert locales.translate(ua_bundle, "nope.missing", "Literal") == "Literal"
        assert locales.translate(ua_bundle, "nope.missing") == "nope.missing"
        assert locales.translate(None, "a.b", "x") == "x"

    def test_never_returns_empty(self):
        """Empty strings and non-text nodes should be skipped."""
        bundle = LocaleBundle(locale="en", ui={"a": {"b": ""}, "c": {"d": 1}, "e": {"f": {}}})
        assert locales.translate(bundle, "a.b", "fallback") == "fallback"
        assert locales.translate(bundle, "c.d") == "1"
        assert locales.translate(bundle, "e.f") == "e.f"

    def test_resolve_title_override_and_fallback(self, ua_bundle):
        """Title overrides should win; otherwise the item's own title is kept."""
        assert locales.resolve_title(ua_bundle, "two-sum", "Two Sum") == "Дві суми"
        assert locales.resolve_title(ua_bundle, "three-sum", "Three Sum") == "Three Sum"
        assert locales.resolve_title(None, "x", None) == "x"

    def test_category_lookup(self, ua_bundle):
        """Category metadata should come from the active bundle first."""
        assert locales.category(ua_bundle, "arrays").name == "Масиви"
        assert locales.category(ua_bundle, "graphs") is None
        assert locales.category_ids(ua_bundle) == ["arrays"]

    def test_chain_is_cycle_safe(self, en_bundle):
        """A bundle that is its own parent should not loop."""
        en_bundle.attach_parent(en_bundle)
        assert list(en_bundle.chain()) == [en_bundle]


class TestLocaleResolver:
    """Tests for loading bundles from a content source."""

    def test_resolves_partial_locale_with_parent(self, file_source):
        """A non-default bundle should be linked to the default one."""
        resolver = LocaleResolver(file_source, AppConfig())
        bundle = asyncio.run(resolver.resolve("ua"))
        assert bundle.locale == "ua"
        assert bundle.parent is not None
        assert bundle.parent.locale == "en"
        assert locales.translate(bundle, "problem.codeTitle") == "Code Implementation"

    def test_missing_locale_falls_back_to_default(self, write_json, en_meta, caplog):
        """An unloadable locale should fall back to the default bundle."""
        root = write_json("en/meta.json", en_meta)
        resolver = LocaleResolver(FileContentSource(root), AppConfig())
        with caplog.at_level(logging.WARNING):
            bundle = asyncio.run(resolver.resolve("ua"))
        assert bundle.locale == "en"
        assert bundle.loaded
        assert "falling back to en" in caplog.text

    def test_nothing_loadable_gives_empty_bundle(self, tmp_path):
        """With no bundles at all the resolver should return an empty one."""
        resolver = LocaleResolver(FileContentSource(tmp_path), AppConfig())
        bundle = asyncio.run(resolver.resolve("ua"))
        assert not bundle.loaded
        assert bundle.locale == "en"
        assert locales.translate(bundle, "quiz.correct", "Correct!") == "Correct!"

    def test_invalid_json_is_treated_as_missing(self, tmp_path, write_json, en_meta):
        """A corrupt bundle file should be skipped, not raised."""
        write_json("en/meta.json", en_meta)
        (tmp_path / "ua").mkdir()
        (tmp_path / "ua" / "meta.json").write_text("{broken", encoding="utf-8")
        resolver = LocaleResolver(FileContentSource(tmp_path), AppConfig())
        assert asyncio.run(resolver.resolve("ua")).locale == "en"

    def test_next_locale_cycles(self, file_source):
        """The toggle should cycle through the configured locales."""
        resolver = LocaleResolver(file_source, AppConfig())
        assert resolver.next_locale("en") == "ua"
        assert resolver.next_locale("ua") == "en"
        assert resolver.next_locale("fr") == "en"
        assert resolver.is_available("ua")
        assert not resolver.is_available("fr")
