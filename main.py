import argparse
import asyncio
import logging
import re
import signal
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

import locales
from config import AppConfig, DEFAULT_DATA_DIR, DEFAULT_DB_PATH, LoaderConfig, SearchConfig
from content import create_source
from controller import AppController
from models import GateStatus, Theme
from storage import get_preferences_repo
from ui import ReaderUI
from ui.styles import DEFAULT_THEME

logger = logging.getLogger(__name__)

# Leading "1. " of translated section titles
SECTION_NUMBER = re.compile(r"^\d+\.\s*")


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="AlgoPath - algorithm walkthroughs")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DEFAULT_DATA_DIR,
        help=f"Content directory (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Load content over HTTP from this URL instead of --data-dir",
    )
    parser.add_argument(
        "--locale",
        type=str,
        default=None,
        help="Locale to use (default: the saved preference)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"Preferences database (default: {DEFAULT_DB_PATH})",
    )
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help="Do not read or write saved preferences",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser = subparsers.add_parser("build", help="Render the static site")
    build_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("site"),
        help="Output directory (default: site)",
    )
    build_parser.add_argument(
        "--theme",
        choices=["light", "dark"],
        default=None,
        help="Theme to render with (default: the saved preference)",
    )

    search_parser = subparsers.add_parser("search", help="Search problems by title or id")
    search_parser.add_argument("query", type=str, help="Text to search for")
    search_parser.add_argument(
        "--max-results",
        "-n",
        type=positive_int,
        default=8,
        help="Maximum number of results (default: 8)",
    )

    study_parser = subparsers.add_parser("study", help="Walk through problems quiz by quiz")
    study_parser.add_argument(
        "problem",
        type=str,
        nargs="?",
        default=None,
        help="Problem id (default: every problem of --category)",
    )
    study_parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        help="Category to study",
    )

    subparsers.add_parser("categories", help="List categories and problem counts")

    return parser


def configure_logging(console: Console, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )
    # Request lines from httpx are too noisy at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_config(args) -> AppConfig:
    search = SearchConfig(max_results=getattr(args, "max_results", 8))
    return AppConfig(
        data_dir=args.data_dir,
        base_url=args.base_url,
        db_path=args.db,
        search=search,
        loader=LoaderConfig(),
    )


def create_controller(args, config: AppConfig) -> AppController:
    source = create_source(config.data_dir, config.base_url)
    preferences = get_preferences_repo(None if args.no_persist else config.db_path)
    return AppController(source, config, preferences)


async def start_controller(controller: AppController, locale: str | None) -> None:
    await controller.start()
    if locale and locale != controller.state.locale:
        await controller.set_locale(locale)


# ============================================================================
# Commands
# ============================================================================


def run_build(controller: AppController, ui: ReaderUI, output: Path, theme: str | None) -> int:
    """Render the home page and one page per category."""
    if theme:
        controller.state.theme = Theme(theme)

    collection = controller.state.collection
    if collection is None:
        ui.show_error("No content could be loaded.")
        return 1

    output.mkdir(parents=True, exist_ok=True)
    pages = {"index.html": controller.render_page()}
    for category_id in collection.categories:
        pages[f"{category_id}.html"] = controller.render_page(category_id)

    for name, html in pages.items():
        (output / name).write_text(html, encoding="utf-8")
        logger.debug("Wrote %s", output / name)

    ui.show_success(f"Wrote {len(pages)} pages to {output}")
    return 0


def run_search(controller: AppController, ui: ReaderUI, query: str) -> int:
    results = controller.search_index.query(query)
    empty = controller.translate("search.noResults", "No problems found")
    ui.show_search_results(results, query, empty)
    return 0


def run_categories(controller: AppController, ui: ReaderUI) -> int:
    bundle = controller.state.bundle
    collection = controller.state.collection
    rows = []
    for category_id in locales.category_ids(bundle):
        count = len(collection.categories.get(category_id, [])) if collection else 0
        rows.append((category_id, locales.category(bundle, category_id), count))
    ui.show_categories(rows, controller.translate("labels.problems", "Problems"))
    return 0


def study_problem(controller: AppController, ui: ReaderUI, item_id: str) -> bool:
    """Walk one problem section by section.

    Returns:
        False if the user quit before finishing.
    """
    _, item = controller.state.collection.find(item_id)
    renderer = controller.renderer
    ui.show_problem(
        item,
        renderer.title_for(item),
        renderer.t("problem.problemStatement", "Problem Statement"),
    )

    document = controller.document_state(item_id)
    if document is None:
        # Legacy items have no gated sections.
        if item.insight:
            ui.show_section(1, renderer.t("problem.keyInsight", "Key Insight"), item.insight)
        return True

    ui.show_section(
        1,
        SECTION_NUMBER.sub("", renderer.t("problem.understanding", "1. Understanding the Problem")),
        item.explanation.understanding_the_problem,
    )

    gate = document.gate
    sections = renderer.build_sections(item)
    total_quizzes = sum(1 for quiz in gate.quizzes if quiz is not None)
    quiz_number = 0

    for index, section in enumerate(sections):
        quiz_index = gate.quiz_for_section(index + 1)
        if quiz_index is not None:
            quiz_number += 1
        if quiz_index is not None and not gate.is_quiz_answered(quiz_index):
            while True:
                selected = ui.ask_quiz(gate.quizzes[quiz_index], quiz_number, total_quizzes)
                if selected == "quit":
                    locked = sum(1 for status in gate.statuses() if status == GateStatus.LOCKED)
                    ui.show_locked(locked)
                    return False
                result = controller.submit_answer(item_id, quiz_index, selected)
                ui.show_feedback(result)
                if result.is_correct:
                    break
        ui.show_section(index + 2, section.title, section.source)

    return True


def create_sigint_handler(ui: ReaderUI):
    """Create a SIGINT handler that says goodbye before exiting."""

    def sigint_handler(signum, frame):
        ui.show_quit_message()
        sys.exit(0)

    return sigint_handler


def run_study(
    controller: AppController,
    ui: ReaderUI,
    problem: str | None,
    category: str | None,
) -> int:
    collection = controller.state.collection
    if collection is None:
        ui.show_error("No content could be loaded.")
        return 1

    if problem:
        if collection.find(problem) is None:
            ui.show_error(f"Unknown problem: {problem}")
            return 1
        item_ids = [problem]
    else:
        category = category or next(iter(collection.categories), None)
        if category not in collection.categories:
            ui.show_error(f"Unknown category: {category}")
            return 1
        item_ids = [item.id for item in collection.categories[category]]

    ui.clear_screen()
    locale_info = controller.resolver.available_locales.get(controller.state.locale)
    ui.show_welcome(collection.item_count, locale_info.name if locale_info else controller.state.locale)

    signal.signal(signal.SIGINT, create_sigint_handler(ui))

    for number, item_id in enumerate(item_ids, start=1):
        if not study_problem(controller, ui, item_id):
            ui.show_quit_message()
            return 0
        if number < len(item_ids):
            ui.wait_for_continue()
            ui.clear_screen()

    ui.show_success("All sections unlocked. 🎉")
    return 0


async def run(args, ui: ReaderUI) -> int:
    config = build_config(args)
    controller = create_controller(args, config)
    try:
        await start_controller(controller, args.locale)
        if args.command == "build":
            return run_build(controller, ui, args.output, args.theme)
        if args.command == "search":
            return run_search(controller, ui, args.query)
        if args.command == "categories":
            return run_categories(controller, ui)
        return run_study(controller, ui, getattr(args, "problem", None), getattr(args, "category", None))
    finally:
        await controller.close()


def main():
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args()

    console = Console(theme=DEFAULT_THEME)
    configure_logging(console, args.verbose)
    ui = ReaderUI(console)

    sys.exit(asyncio.run(run(args, ui)))


if __name__ == "__main__":
    main()
