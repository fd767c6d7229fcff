from rich.theme import Theme
from rich.style import Style
from rich.text import Text

ACCENT_PURPLE = "#6C5CE7"
ACCENT_GOLD = "#F1C40F"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=ACCENT_PURPLE, bold=True),
        "secondary": Style(color=ACCENT_GOLD, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "option_label": Style(color=ACCENT_GOLD, bold=True),
        "option_text": Style(color=TEXT_WHITE),
        "search_match": Style(color=ACCENT_GOLD, bold=True, underline=True),
        "difficulty_easy": Style(color=SUCCESS_GREEN, bold=True),
        "difficulty_medium": Style(color=ACCENT_GOLD, bold=True),
        "difficulty_hard": Style(color=ERROR_RED, bold=True),
        "locked": Style(color=MUTED_GRAY, italic=True),
        "title": Style(color=ACCENT_PURPLE, bold=True),
        "subtitle": Style(color=MUTED_GRAY),
    }
)



def get_difficulty_style(difficulty: str) -> Style:
    """Get color style for a difficulty level."""
    styles = {
        "easy": Style(color=SUCCESS_GREEN, bold=True),
        "medium": Style(color=ACCENT_GOLD, bold=True),
        "hard": Style(color=ERROR_RED, bold=True),
    }
    return styles.get(difficulty.lower(), Style())


def create_welcome_banner() -> Text:
    """Create the welcome banner text."""
    banner = Text()
    banner.append("╔══════════════════════════════════════╗\n", Style(color=ACCENT_PURPLE))
    banner.append("║          A L G O   P A T H           ║\n", Style(color=ACCENT_GOLD, bold=True))
    banner.append("║   Algorithmic patterns, step by step ║\n", Style(color=ACCENT_PURPLE))
    banner.append("╚══════════════════════════════════════╝", Style(color=ACCENT_PURPLE))
    return banner


def create_locked_header(count: int) -> Text:
    """Header shown above a locked section."""
    header = Text()
    header.append("🔒 ", Style(color=MUTED_GRAY))
    header.append(
        f"{count} section{'s' if count != 1 else ''} locked behind quizzes",
        Style(color=MUTED_GRAY, italic=True),
    )
    return header
