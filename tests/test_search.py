"""Tests for the problem search index and result rendering."""

import pytest

from models import Collection, ContentItem
from search import MAX_RESULTS, SearchIndex, highlight


def make_collection(count: int = 3) -> Collection:
    items = [
        ContentItem(id=f"p-{n}", title=f"Problem {n}", difficulty="hard" if n % 2 else "easy")
        for n in range(count)
    ]
    items.append(ContentItem(id="two-sum", title="Two Sum"))
    return Collection(locale="en", categories={"arrays": items})


@pytest.fixture
def index() -> SearchIndex:
    search_index = SearchIndex()
    search_index.build(make_collection())
    return search_index


class TestQuery:
    """Tests for SearchIndex.query."""

    def test_empty_query_hides_panel(self, index):
        """Empty or whitespace queries should return nothing and hide the panel."""
        index.query("sum")
        assert index.visible
        assert index.query("") == []
        assert index.query("   ") == []
        assert not index.visible

    def test_case_insensitive_title_match(self, index):
        """Matching should ignore case."""
        assert [r.id for r in index.query("TWO")] == ["two-sum"]

    def test_matches_id(self, index):
        """A query should also match the problem id."""
        assert [r.id for r in index.query("p-1")] == ["p-1"]

    def test_results_in_index_order_and_capped(self):
        """At most eight results should be returned, in index order."""
        search_index = SearchIndex()
        search_index.build(make_collection(20))
        results = search_index.query("problem")
        assert len(results) == MAX_RESULTS == 8
        assert [r.id for r in results] == [f"p-{n}" for n in range(8)]

    def test_uses_translated_titles(self, ua_bundle):
        """Titles should be indexed in the bundle's language."""
        search_index = SearchIndex()
        search_index.build(make_collection(), ua_bundle)
        assert [r.id for r in search_index.query("Дві")] == ["two-sum"]

    def test_rebuild_clears_results(self, index):
        """Building again should drop the previous results."""
        index.query("sum")
        index.build(make_collection())
        assert index.results == []
        assert not index.visible


class TestHighlight:
    """Tests for match highlighting."""

    def test_wraps_first_occurrence_only(self):
        """Only the first case-insensitive match should be wrapped."""
        assert highlight("Sum of sums", "sum") == (
            '<span class="search-match">Sum</span> of sums'
        )

    def test_query_is_matched_literally(self):
        """Regex metacharacters in the query should not be interpreted."""
        assert highlight("a.b and axb", ".") == 'a<span class="search-match">.</span>b and axb'

    def test_text_is_escaped(self):
        """Text around and inside the match should be escaped."""
        assert highlight("<b>", "b") == '&lt;<span class="search-match">b</span>&gt;'

    def test_no_match_or_empty_query(self):
        """Without a match the text should only be escaped."""
        assert highlight("a&b", "zzz") == "a&amp;b"
        assert highlight("a&b", "") == "a&amp;b"


class TestRenderResults:
    """Tests for the result panel markup."""

    def test_hidden_panel(self, index):
        """Before a query the panel should be empty and inactive."""
        assert index.render_results() == '<div class="search-results"></div>'

    def test_results_link_to_category_anchor(self, index):
        """Each result should link to its category page and anchor."""
        index.query("two")
        markup = index.render_results()
        assert 'class="search-results active"' in markup
        assert 'href="arrays.html#two-sum"' in markup
        assert '<span class="search-match">Two</span> Sum' in markup
        assert "difficulty-medium" in markup

    def test_no_results_message_is_translated(self, index, ua_bundle):
        """An empty result set should show the localized message."""
        index.query("zzz")
        assert "No problems found" in index.render_results()
        assert "No problems found" in index.render_results(ua_bundle)
