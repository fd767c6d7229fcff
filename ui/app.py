from rich.console import Console
from rich.text import Text
from rich.panel import Panel
from ui.components import (
    CategoryTable,
    FeedbackPanel,
    LockedNotice,
    ProblemPanel,
    QuizPanel,
    SearchResultsTable,
    SectionPanel,
    WelcomeScreen,
)
from ui.styles import (
    DEFAULT_THEME,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)
from typing import Optional, List, Literal

from models import CategoryMeta, ContentItem, Quiz, SearchRecord
from rendering.gating import AnswerResult


def parse_choice_input(user_input: str, max_options: int = 4) -> int | None:
    """Parse letter (A-F) or number (1-6) input to 0-based index.

    Args:
        user_input: Raw user input string.
        max_options: Maximum number of valid options.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()
    letter_map = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5}

    if user_input in letter_map:
        index = letter_map[user_input]
    elif user_input.isdigit():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index


class ReaderUI:
    """Terminal front end: search results, categories and quiz walkthroughs."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=DEFAULT_THEME)

    def show_welcome(self, problem_count: int, locale_label: str) -> None:
        self.console.print(WelcomeScreen(problem_count, locale_label))
        self.console.print()

    def show_categories(
        self,
        rows: List[tuple[str, CategoryMeta | None, int]],
        problems_label: str = "Problems",
    ) -> None:
        self.console.print(CategoryTable(rows, problems_label))

    def show_search_results(
        self,
        records: List[SearchRecord],
        query: str,
        empty_message: str = "No problems found",
    ) -> None:
        self.console.print(SearchResultsTable(records, query, empty_message))

    def show_problem(self, item: ContentItem, title: str, label: str = "Problem Statement") -> None:
        self.console.print(ProblemPanel(item, title, label))
        self.console.print()

    def show_section(self, number: int, title: str, source: str) -> None:
        self.console.print(SectionPanel(number, title, source))
        self.console.print()

    def show_locked(self, count: int, hint: Optional[str] = None) -> None:
        if count > 0:
            self.console.print(LockedNotice(count, hint))
            self.console.print()

    def ask_quiz(
        self, quiz: Quiz, quiz_number: int = 0, total_quizzes: int = 0
    ) -> int | Literal["quit"] | None:
        """Display a quiz and read an answer.

        Returns:
            "quit" if the user quits, None for an empty answer, otherwise the
            0-based option index.
        """
        self.console.print(QuizPanel(quiz, quiz_number, total_quizzes))

        while True:
            user_input = self.console.input(
                Text("Your answer: ", style=f"bold {MUTED_GRAY}")
            ).strip()

            if user_input.lower() == "q":
                return "quit"
            if not user_input:
                return None

            index = parse_choice_input(user_input, len(quiz.options))
            if index is not None:
                return index

            last = chr(64 + len(quiz.options))
            self.console.print(
                Text(f"Please enter A-{last} (or 'q' to quit)\n", style=ERROR_RED)
            )

    def show_feedback(self, result: AnswerResult) -> None:
        self.console.print(FeedbackPanel(result))
        self.console.print()

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style=INFO_BLUE))

    def show_success(self, message: str) -> None:
        """Display a success message."""
        self.console.print(Text(message, style=SUCCESS_GREEN))

    def show_quit_message(self) -> None:
        self.console.print()
        self.console.print(Text("👋 Goodbye!", style=MUTED_GRAY))

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()

    def wait_for_continue(self) -> None:
        """Wait for user to press Enter to continue."""
        self.console.input(
            Text("Press Enter to continue...", style=f"bold {MUTED_GRAY}")
        )
