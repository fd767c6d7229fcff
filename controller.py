"""Application controller.

Owns the explicit application state (active locale, theme, loaded bundle and
collection, per-problem gate state) and the operations a reader performs:
switching locale or theme, mounting a category, answering quizzes, following
deep links and searching.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import locales
from config import AppConfig
from content import CollectionLoader, ContentSource
from errors import CollectionLoadError
from locales import LocaleResolver
from models import Collection, LocaleBundle, Preferences, Theme
from rendering import chrome
from rendering.annotations import AnnotationOverlay, AnnotationTooltip
from rendering.gating import AnswerResult
from rendering.renderer import ContentRenderer, DocumentState
from search import SearchIndex
from storage import InMemoryPreferencesRepository, PreferencesRepository

logger = logging.getLogger(__name__)


# ============================================================================
# Post-render collaborators
# ============================================================================


class CodeHighlighter(ABC):
    """Rewrites code elements of mounted markup with syntax highlighting."""

    @abstractmethod
    def highlight(self, markup: str) -> str:
        pass


class DiagramRenderer(ABC):
    """Turns ``<div class="mermaid">`` sources into rendered diagrams."""

    @abstractmethod
    def render(self, markup: str) -> str:
        pass


class PassthroughHighlighter(CodeHighlighter):
    def highlight(self, markup: str) -> str:
        return markup


class PassthroughDiagramRenderer(DiagramRenderer):
    def render(self, markup: str) -> str:
        return markup


# ============================================================================
# State and events
# ============================================================================


@dataclass
class AppState:
    locale: str
    theme: Theme
    bundle: LocaleBundle | None = None
    collection: Collection | None = None
    current_category: str | None = None
    documents: dict[str, DocumentState] = field(default_factory=dict)
    mounted_markup: str = ""
    scroll_target: str | None = None


class EventRegistry:
    """Handlers keyed by the element role they serve.

    Cleared and re-bound on every mount, so a handler never outlives the
    markup it was bound for.
    """

    def __init__(self):
        self._handlers: dict[str, Callable[..., Any]] = {}

    def bind(self, role: str, handler: Callable[..., Any]) -> None:
        self._handlers[role] = handler

    def clear(self) -> None:
        self._handlers.clear()

    def is_bound(self, role: str) -> bool:
        return role in self._handlers

    @property
    def roles(self) -> list[str]:
        return sorted(self._handlers)

    def dispatch(self, role: str, *args, **kwargs) -> Any:
        handler = self._handlers.get(role)
        if handler is None:
            raise LookupError(f"No handler bound for role {role!r}")
        return handler(*args, **kwargs)


# ============================================================================
# Controller
# ============================================================================


class AppController:
    def __init__(
        self,
        source: ContentSource,
        config: AppConfig | None = None,
        preferences: PreferencesRepository | None = None,
        highlighter: CodeHighlighter | None = None,
        diagram_renderer: DiagramRenderer | None = None,
    ):
        self.config = config or AppConfig()
        self.source = source
        self.resolver = LocaleResolver(source, self.config)
        self.loader = CollectionLoader(source, self.config)
        self.preferences = preferences or InMemoryPreferencesRepository()
        self.highlighter = highlighter or PassthroughHighlighter()
        self.diagram_renderer = diagram_renderer or PassthroughDiagramRenderer()

        self.overlay = AnnotationOverlay()
        self.tooltip = AnnotationTooltip()
        self.search_index = SearchIndex(self.config.search.max_results)
        self.events = EventRegistry()

        saved = self.preferences.load()
        locale = self.config.startup_locale
        if saved.locale and self.resolver.is_available(saved.locale):
            locale = saved.locale
        self.state = AppState(
            locale=locale,
            theme=saved.theme or Theme(self.config.default_theme),
        )
        self.renderer = ContentRenderer(code_language=self.config.loader.code_language)
        self._request_token = 0

    async def start(self) -> None:
        """Load the persisted (or startup) locale."""
        await self.set_locale(self.state.locale, persist=False)

    async def close(self) -> None:
        await self.source.aclose()

    # ------------------------------------------------------------------
    # Locale and theme
    # ------------------------------------------------------------------

    async def set_locale(self, locale: str, persist: bool = True) -> bool:
        """Switch locale, reload content and re-render the mounted category.

        Returns False when a later switch superseded this one; its results are
        discarded.
        """
        if not self.resolver.is_available(locale):
            logger.warning("Unknown locale %r, using %s", locale, self.resolver.default_locale)
            locale = self.resolver.default_locale

        self._request_token += 1
        token = self._request_token
        if self.state.current_category is not None:
            self.state.mounted_markup = self.renderer.render_loading()

        bundle = await self.resolver.resolve(locale)
        collection = None
        try:
            collection = await self.loader.load_collection(bundle)
        except CollectionLoadError as e:
            logger.error("Failed to load problems: %s", e)

        if token != self._request_token:
            logger.debug("Discarding superseded switch to %s", locale)
            return False

        self.state.locale = locale
        self.state.bundle = bundle
        self.state.collection = collection
        self.state.documents = {}
        self.renderer = ContentRenderer(
            bundle,
            overlay=self.overlay,
            code_language=self.config.loader.code_language,
        )

        if collection is not None:
            self.search_index.build(collection, bundle)
        else:
            self.search_index.records = []
            self.search_index.clear()

        if persist:
            self.preferences.save(Preferences(locale=locale))
        if self.state.current_category is not None:
            self.render_category(self.state.current_category)
        return True

    async def toggle_locale(self) -> bool:
        return await self.set_locale(self.resolver.next_locale(self.state.locale))

    def set_theme(self, theme: Theme | str) -> Theme:
        self.state.theme = Theme(theme)
        self.preferences.save(Preferences(theme=self.state.theme))
        return self.state.theme

    def toggle_theme(self) -> Theme:
        return self.set_theme(self.state.theme.other)

    # ------------------------------------------------------------------
    # Mounting
    # ------------------------------------------------------------------

    def render_category(self, category_id: str) -> str:
        """Render a category into the mount point and re-bind its events."""
        self.state.current_category = category_id
        collection = self.state.collection
        items = collection.categories.get(category_id) if collection else None

        if not items:
            markup = self.renderer.render_error()
            has_diagrams = False
        else:
            document = self.renderer.render_category(items, self.state.documents)
            markup = document.markup
            has_diagrams = document.has_diagrams

        markup = self._post_render(markup, has_diagrams)
        self.state.mounted_markup = markup
        self._bind_events(markup)
        return markup

    def render_page(self, category_id: str | None = None) -> str:
        """A standalone page: the home page, or one category's page."""
        bundle = self.state.bundle
        header = chrome.render_header(
            bundle,
            self.state.locale,
            self.resolver.available_locales,
            self.resolver.next_locale(self.state.locale),
            theme=self.state.theme.value,
            is_home_page=category_id is None,
        )
        if category_id is None:
            counts = {}
            if self.state.collection is not None:
                counts = {cid: len(items) for cid, items in self.state.collection.categories.items()}
            main = chrome.render_home(bundle, counts)
        else:
            mount = self.render_category(category_id)
            collection = self.state.collection
            count = len(collection.categories.get(category_id, [])) if collection else 0
            hero = chrome.render_category_hero(bundle, category_id, count)
            main = f'{hero}<div id="problems-mount">{mount}</div>'

        body = f"{header}<main>{main}</main>{chrome.render_footer(bundle)}"
        return chrome.render_page(
            chrome.page_title(bundle, category_id),
            body,
            lang=self.state.locale,
            theme=self.state.theme.value,
        )

    def _post_render(self, markup: str, has_diagrams: bool) -> str:
        try:
            markup = self.highlighter.highlight(markup)
        except Exception:
            logger.exception("Code highlighting failed; keeping unstyled code")
        # Highlighting rewrites code content, so the overlay goes on afterwards.
        markup = self.overlay.apply_to_rendered_markup(markup)

        if has_diagrams:
            try:
                markup = self.diagram_renderer.render(markup)
            except Exception:
                logger.exception("Diagram rendering failed; keeping diagram source")
        return markup

    def _bind_events(self, markup: str) -> None:
        self.events.clear()
        self.events.bind("search-input", self.search)
        if 'data-role="quiz-gate"' in markup:
            self.events.bind("quiz-gate", self.submit_answer)
        if 'class="annotated-line"' in markup:
            self.events.bind("annotated-line", self.tooltip.show)
        if 'data-role="card-toggle"' in markup:
            self.events.bind("card-toggle", self.toggle_card)

    # ------------------------------------------------------------------
    # Reader actions
    # ------------------------------------------------------------------

    def document_state(self, item_id: str) -> DocumentState | None:
        """Gate and collapse state of a detailed item, created on first use."""
        if item_id in self.state.documents:
            return self.state.documents[item_id]
        collection = self.state.collection
        found = collection.find(item_id) if collection else None
        if found is None or not found[1].is_detailed:
            return None
        state = self.renderer.create_state(found[1])
        self.state.documents[item_id] = state
        return state

    def submit_answer(self, item_id: str, quiz_index: int, selected: int | None) -> AnswerResult:
        """Check a quiz answer and re-render the mount on success.

        A failed attempt only updates the quiz's feedback line in the mounted
        markup, so code is not highlighted again.

        Raises:
            KeyError: No detailed item with this id is loaded.
            IndexError: The item has no quiz at ``quiz_index``.
        """
        document = self.document_state(item_id)
        if document is None or document.gate is None:
            raise KeyError(item_id)

        result = document.gate.submit(quiz_index, selected)
        document.feedback[quiz_index] = result
        if result.is_correct:
            logger.info("Unlocked section %d of %s", result.revealed_section, item_id)
        if self.state.current_category is None:
            return result
        if result.is_correct:
            self.render_category(self.state.current_category)
        else:
            self.state.mounted_markup = self.renderer.replace_feedback(
                self.state.mounted_markup, item_id, quiz_index, result
            )
        return result

    def toggle_card(self, item_id: str) -> bool:
        """Expand or collapse a detailed card; returns the new collapsed flag."""
        document = self.document_state(item_id)
        if document is None:
            raise KeyError(item_id)
        document.collapsed = not document.collapsed
        if self.state.current_category is not None:
            self.render_category(self.state.current_category)
        return document.collapsed

    def navigate(self, fragment: str) -> str | None:
        """Follow a ``#<id>`` deep link.

        Mounts the item's category if needed, expands its card and records it
        as the scroll target. Locked sections stay locked. Returns the
        category id, or None when no loaded item has this id.
        """
        item_id = fragment.lstrip("#")
        collection = self.state.collection
        found = collection.find(item_id) if collection and item_id else None
        if found is None:
            logger.debug("No problem matches #%s", item_id)
            return None

        category_id, _ = found
        document = self.document_state(item_id)
        if document is not None:
            document.collapsed = False
        self.state.scroll_target = item_id
        self.render_category(category_id)
        return category_id

    def search(self, text: str | None) -> str:
        """Run a query and return the result panel markup."""
        self.search_index.query(text)
        return self.search_index.render_results(self.state.bundle)

    def translate(self, path: str, fallback: str | None = None) -> str:
        return locales.translate(self.state.bundle, path, fallback)
