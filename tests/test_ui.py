"""Tests for terminal input parsing and rich components."""

import io

import pytest
from rich.console import Console
from rich.style import Style

from models import CategoryMeta, SearchRecord, Difficulty
from rendering.gating import AnswerOutcome, AnswerResult
from ui import ReaderUI
from ui.app import parse_choice_input
from ui.components import CategoryTable, FeedbackPanel, highlight_text, priority_style
from ui.styles import ACCENT_GOLD


def render_text(renderable) -> str:
    console = Console(file=io.StringIO(), record=True, width=100)
    console.print(renderable)
    return console.export_text()


class TestParseChoiceInput:
    """Tests for parse_choice_input."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("a", 0), (" C ", 2), ("2", 1), ("D", None), ("0", None), ("x", None), ("", None)],
    )
    def test_letters_and_numbers(self, raw, expected):
        """Letters and 1-based numbers map to indices within range."""
        assert parse_choice_input(raw, max_options=3) == expected


class TestComponents:
    """Tests for rich rendering helpers."""

    def test_highlight_text_styles_first_match(self):
        """Only the first case-insensitive match should be styled."""
        text = highlight_text("Sum of sums", "SUM")
        assert text.plain == "Sum of sums"
        assert [(span.start, span.end) for span in text.spans] == [(0, 3)]

    def test_bad_priority_color_falls_back(self):
        """An unparseable color should fall back to the accent color."""
        assert priority_style("not-a-color") == Style(color=ACCENT_GOLD, bold=True)
        assert priority_style("#e74c3c").color.name == "#e74c3c"

    def test_feedback_panel_shows_message(self):
        """The feedback panel should show the answer message."""
        result = AnswerResult(outcome=AnswerOutcome.INCORRECT, message="❌ Try again!")
        assert "Try again!" in render_text(FeedbackPanel(result))

    def test_category_table(self):
        """The category table should show names, counts and priorities."""
        meta = CategoryMeta(name="Graphs", stats={"priority": "High"})
        output = render_text(CategoryTable([("graphs", meta, 4), ("misc", None, 0)], "Задачі"))
        assert "Graphs" in output
        assert "Задачі" in output
        assert "High" in output
        assert "misc" in output


class TestReaderUI:
    """Tests for ReaderUI output helpers."""

    def test_search_results_and_empty_message(self):
        """Results should list titles; no results should show the message."""
        console = Console(file=io.StringIO(), record=True, width=100)
        ui = ReaderUI(console)
        record = SearchRecord(id="two-sum", title="Two Sum", category="arrays", difficulty=Difficulty.EASY)
        ui.show_search_results([record], "two")
        ui.show_search_results([], "zzz", "Нічого не знайдено")
        output = console.export_text()
        assert "arrays.html#two-sum" in output
        assert "Нічого не знайдено" in output

    def test_show_locked_skips_zero(self):
        """No notice should be printed when nothing is locked."""
        console = Console(file=io.StringIO(), record=True, width=100)
        ReaderUI(console).show_locked(0)
        assert console.export_text() == ""
