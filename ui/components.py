from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich.align import Align
from rich.console import Group
from rich.markdown import Markdown
from rich import box
from rich.color import ColorParseError
from typing import Optional, List

from models import CategoryMeta, ContentItem, Quiz, SearchRecord
from rendering.gating import AnswerResult
from ui.styles import (
    ACCENT_PURPLE,
    ACCENT_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
    TEXT_WHITE,
    create_locked_header,
    create_welcome_banner,
    get_difficulty_style,
)


def highlight_text(text: str, query: str | None) -> Text:
    """Styled copy of ``text`` with the first match of ``query`` emphasised."""
    result = Text(text)
    if query:
        start = text.lower().find(query.lower())
        if start >= 0:
            result.stylize(Style(color=ACCENT_GOLD, bold=True, underline=True), start, start + len(query))
    return result


def priority_style(color: str | None) -> Style:
    """Style for a category priority; unparseable colors fall back to gold."""
    try:
        return Style(color=color or ACCENT_GOLD, bold=True)
    except ColorParseError:
        return Style(color=ACCENT_GOLD, bold=True)


class ProblemPanel:
    """Header panel for one problem: title, difficulty, tags and statement."""

    def __init__(self, item: ContentItem, title: str, problem_label: str = "Problem Statement"):
        self.item = item
        self.title = title
        self.problem_label = problem_label

    def render(self) -> Panel:
        header = Text()
        header.append(self.title, Style(color=ACCENT_PURPLE, bold=True))
        header.append("  ")
        header.append(self.item.difficulty.label, get_difficulty_style(self.item.difficulty.value))
        if self.item.tags:
            header.append("\n")
            header.append(", ".join(self.item.tags), Style(color=MUTED_GRAY))

        statement = self.item.problem_statement or self.item.description
        return Panel(
            Group(header, Text(""), Markdown(statement)),
            title=self.problem_label,
            border_style=ACCENT_PURPLE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SectionPanel:
    """One explanation section, rendered from its markdown-style source."""

    def __init__(self, number: int, title: str, source: str):
        self.number = number
        self.title = title
        self.source = source

    def render(self) -> Panel:
        return Panel(
            Markdown(self.source or ""),
            title=f"{self.number}. {self.title}",
            title_align="left",
            border_style=INFO_BLUE,
            box=box.ROUNDED,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class QuizPanel:
    """A styled panel for a quiz gate."""

    def __init__(self, quiz: Quiz, quiz_number: int = 0, total_quizzes: int = 0):
        self.quiz = quiz
        self.quiz_number = quiz_number
        self.total_quizzes = total_quizzes

    def render(self) -> Panel:
        content = Text()

        if self.total_quizzes > 0:
            content.append(
                f"Quiz {self.quiz_number}/{self.total_quizzes}\n",
                Style(color=MUTED_GRAY),
            )

        content.append(f"🤔 {self.quiz.question}", Style(color=ACCENT_PURPLE, bold=True))
        content.append("\n\n")

        for i, option in enumerate(self.quiz.options):
            content.append(f"{chr(65 + i)}. ", Style(color=ACCENT_GOLD, bold=True))
            content.append(option, Style(color=TEXT_WHITE))
            content.append("\n")

        last = chr(64 + len(self.quiz.options))
        return Panel(
            Align.left(content),
            title="Check your understanding",
            subtitle=f"Type A-{last} (or 'q' to quit)",
            border_style=ACCENT_GOLD,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for the outcome of a submitted answer."""

    def __init__(self, result: AnswerResult):
        self.result = result

    def render(self) -> Panel:
        color = SUCCESS_GREEN if self.result.is_correct else ERROR_RED
        return Panel(
            Text(self.result.message, Style(color=color, bold=True)),
            title="Result",
            border_style=color,
            box=box.HEAVY,
            padding=(0, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SearchResultsTable:
    """Search hits with the matched part of each title emphasised."""

    def __init__(self, records: List[SearchRecord], query: str, empty_message: str = "No problems found"):
        self.records = records
        self.query = query
        self.empty_message = empty_message

    def render(self) -> Panel:
        if not self.records:
            return Panel(
                Text(self.empty_message, style=Style(color=MUTED_GRAY)),
                title=f"Search: {self.query}",
                border_style=MUTED_GRAY,
            )

        table = Table(
            show_header=True,
            header_style=Style(color=ACCENT_PURPLE, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )
        table.add_column("Problem")
        table.add_column("Category", style=Style(color=INFO_BLUE))
        table.add_column("Difficulty", justify="center")
        table.add_column("Link", style=Style(color=MUTED_GRAY))

        for record in self.records:
            table.add_row(
                highlight_text(record.title, self.query),
                record.category,
                Text(record.difficulty.label, style=get_difficulty_style(record.difficulty.value)),
                f"{record.category}.html#{record.id}",
            )

        return Panel(
            Align.center(table),
            title=f"Search: {self.query}",
            border_style=ACCENT_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class CategoryTable:
    """Categories of the active locale with their problem counts."""

    def __init__(self, rows: List[tuple[str, CategoryMeta | None, int]], problems_label: str = "Problems"):
        self.rows = rows
        self.problems_label = problems_label

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=ACCENT_PURPLE, bold=True),
            border_style=MUTED_GRAY,
            box=box.HEAVY,
        )
        table.add_column("Id", style=Style(color=MUTED_GRAY))
        table.add_column("Name", style=Style(color=TEXT_WHITE, bold=True))
        table.add_column(self.problems_label, justify="right")
        table.add_column("Priority", justify="center")

        for category_id, meta, count in self.rows:
            priority = Text("")
            if meta and meta.stats.priority:
                priority = Text(meta.stats.priority, style=priority_style(meta.stats.priority_color))
            table.add_row(
                category_id,
                (meta.name if meta else "") or category_id,
                Text(str(count), style=Style(color=ACCENT_GOLD, bold=True)),
                priority,
            )

        return Panel(
            Align.center(table),
            title="Categories",
            border_style=ACCENT_PURPLE,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WelcomeScreen:
    """Welcome screen with banner and collection info."""

    def __init__(self, problem_count: int, locale_label: str):
        self.problem_count = problem_count
        self.locale_label = locale_label

    def render(self) -> Panel:
        content = Text()
        content.append(create_welcome_banner())
        content.append("\n\n")
        content.append(f"{self.problem_count} problems loaded ", Style(color=TEXT_WHITE))
        content.append(f"({self.locale_label})\n", Style(color=MUTED_GRAY))
        content.append("Type 'q' at any time to quit.", Style(color=MUTED_GRAY))
        return Panel(
            Align.center(content),
            border_style=ACCENT_PURPLE,
            box=box.HEAVY,
            padding=(1, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()


class LockedNotice:
    """Placeholder for sections that are still behind a quiz."""

    def __init__(self, count: int, hint: Optional[str] = None):
        self.count = count
        self.hint = hint

    def render(self) -> Text:
        text = create_locked_header(self.count)
        if self.hint:
            text.append(f"\n{self.hint}", Style(color=MUTED_GRAY))
        return text

    def __rich__(self) -> Text:
        return self.render()
