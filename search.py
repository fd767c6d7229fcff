"""In-page problem search.

The index is a flat list of records, one per loaded problem, rebuilt whenever
the active locale or the collection changes. Queries are case-insensitive
substring matches on the displayed title or the problem id, returned in index
order and capped at a fixed count.
"""

import re

import locales
from models import Collection, LocaleBundle, SearchRecord
from rendering.escaping import escape_html

MAX_RESULTS = 8


def highlight(text: str, query: str | None) -> str:
    """Wrap the first case-insensitive occurrence of ``query`` in ``text``.

    The query is matched literally and both parts are escaped.
    """
    if not query:
        return escape_html(text)
    match = re.search(re.escape(query), text, re.IGNORECASE)
    if match is None:
        return escape_html(text)
    return (
        escape_html(text[: match.start()])
        + f'<span class="search-match">{escape_html(match.group(0))}</span>'
        + escape_html(text[match.end():])
    )


class SearchIndex:
    """Substring search over problem titles and ids."""

    highlight = staticmethod(highlight)

    def __init__(self, max_results: int = MAX_RESULTS):
        self.max_results = max_results
        self.records: list[SearchRecord] = []
        self.results: list[SearchRecord] = []
        self.last_query = ""
        self.visible = False

    def build(self, collection: Collection, bundle: LocaleBundle | None = None) -> list[SearchRecord]:
        self.records = [
            SearchRecord(
                id=item.id,
                title=locales.resolve_title(bundle, item.id, item.title),
                category=category_id,
                difficulty=item.difficulty,
            )
            for category_id, item in collection.iter_items()
        ]
        self.clear()
        return self.records

    def query(self, text: str | None) -> list[SearchRecord]:
        """Match records against ``text``; an empty query hides the panel."""
        if not text or not text.strip():
            self.clear()
            return []

        needle = text.lower()
        matches = [
            record
            for record in self.records
            if needle in record.title.lower() or needle in record.id.lower()
        ]
        self.results = matches[: self.max_results]
        self.last_query = text
        self.visible = True
        return self.results

    def clear(self) -> None:
        self.results = []
        self.last_query = ""
        self.visible = False

    def render_results(self, bundle: LocaleBundle | None = None) -> str:
        """Markup for the result panel of the last query."""
        if not self.visible:
            return '<div class="search-results"></div>'

        if not self.results:
            empty = escape_html(locales.translate(bundle, "search.noResults", "No problems found"))
            body = f'<div class="search-no-results">{empty}</div>'
        else:
            body = "".join(self._render_result(record) for record in self.results)
        return f'<div class="search-results active">{body}</div>'

    def _render_result(self, record: SearchRecord) -> str:
        href = escape_html(f"{record.category}.html#{record.id}")
        return (
            f'<a href="{href}" class="search-result-item" data-role="search-result">'
            f'<div class="search-result-info">'
            f'<span class="search-result-title">{highlight(record.title, self.last_query)}</span>'
            f'<span class="search-result-category">{escape_html(record.category)}</span>'
            f"</div>"
            f'<span class="card-difficulty {record.difficulty.css_class}">'
            f"{record.difficulty.label}</span>"
            f"</a>"
        )
