"""AlgoPath UI Module - terminal reader for problem walkthroughs."""

from ui.app import ReaderUI, parse_choice_input
from ui.components import (
    CategoryTable,
    FeedbackPanel,
    LockedNotice,
    ProblemPanel,
    QuizPanel,
    SearchResultsTable,
    SectionPanel,
    WelcomeScreen,
    highlight_text,
)
from ui.styles import (
    ACCENT_PURPLE,
    ACCENT_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "ReaderUI",
    "parse_choice_input",
    "CategoryTable",
    "FeedbackPanel",
    "LockedNotice",
    "ProblemPanel",
    "QuizPanel",
    "SearchResultsTable",
    "SectionPanel",
    "WelcomeScreen",
    "highlight_text",
    "ACCENT_PURPLE",
    "ACCENT_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
