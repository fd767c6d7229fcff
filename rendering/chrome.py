"""Page chrome: header, category hero, home page, footer and page wrapper."""

import functools
from datetime import date

import locales
from config import LocaleInfo
from models import LocaleBundle
from rendering.escaping import escape_html

HOME_PAGE = "index.html"

# (translation key, anchor on the home page, icon, fallback label)
NAV_LINKS = [
    ("home", "home", "fa-home", "Home"),
    ("problems", "algorithms", "fa-cubes", "Problems"),
    ("concepts", "concepts", "fa-lightbulb", "Concepts"),
    ("resources", "resources", "fa-book", "Resources"),
]


def page_href(category_id: str) -> str:
    return f"{category_id}.html"


def _text(bundle: LocaleBundle | None, path: str, fallback: str) -> str:
    return escape_html(locales.translate(bundle, path, fallback))


def _optional_text(bundle: LocaleBundle | None, path: str) -> str:
    text = locales.translate(bundle, path)
    return "" if text == path else escape_html(text)


def page_title(bundle: LocaleBundle | None, category_id: str | None = None) -> str:
    """Document title: the category SEO title, else its name, else the site title."""
    site_title = locales.translate(bundle, "site.title", "AlgoPath")
    if category_id is None:
        return site_title
    meta = locales.category(bundle, category_id)
    if meta is None:
        return site_title
    return meta.seo.title or meta.name or site_title


def render_header(
    bundle: LocaleBundle | None,
    current_locale: str,
    available_locales: dict[str, LocaleInfo],
    next_locale: str,
    theme: str = "light",
    is_home_page: bool = False,
) -> str:
    """Navigation bar: section links, search box and the toggles.

    The language toggle shows the flag of the locale it switches to.
    """
    t = functools.partial(_text, bundle)
    prefix = "" if is_home_page else HOME_PAGE

    nav = "".join(
        f'<a href="{prefix}#{anchor}"><i class="fas {icon}"></i>{t(f"nav.{key}", label)}</a>'
        for key, anchor, icon, label in NAV_LINKS
    )

    target = available_locales.get(next_locale)
    flag = escape_html(target.flag) if target else "🌐"
    toggle_title = escape_html(target.name) if target else "Language"

    theme_icon = "fa-sun" if theme == "dark" else "fa-moon"
    print_button = ""
    if not is_home_page:
        print_button = (
            f'<button class="print-btn" data-action="print">'
            f'<i class="fas fa-print"></i>{t("nav.print", "Print")}</button>'
        )

    return (
        f'<nav id="main-nav" data-locale="{escape_html(current_locale)}">'
        f'<div class="container nav-container">'
        f'<div class="nav-brand"><h2><i class="fas fa-code"></i>AlgoPath</h2></div>'
        f'<div class="nav-links">'
        f"{nav}"
        f'<div class="nav-search">'
        f'<input type="text" class="search-input" data-role="search-input" '
        f'placeholder="{t("nav.search", "Search problems...")}" aria-label="Search problems">'
        f'<i class="fas fa-search search-icon"></i>'
        f'<div class="search-results"></div>'
        f"</div>"
        f"{print_button}"
        f'<button id="language-toggle" class="language-toggle" data-action="toggle-locale" '
        f'data-locale="{escape_html(next_locale)}" aria-label="Toggle language" title="{toggle_title}">'
        f'<span class="lang-flag">{flag}</span></button>'
        f'<button id="theme-toggle" class="theme-toggle" data-action="toggle-theme" '
        f'aria-label="Toggle theme"><i class="fas {theme_icon}"></i></button>'
        f"</div>"
        f"</div>"
        f"</nav>"
    )


def render_category_hero(bundle: LocaleBundle | None, category_id: str, problem_count: int) -> str:
    meta = locales.category(bundle, category_id)
    if meta is None:
        return ""

    stats = meta.stats
    problems_label = escape_html(locales.translate(bundle, "labels.problems", "Problems"))
    priority_label = escape_html(
        stats.priority_label or locales.translate(bundle, "labels.interviewPriority", "Interview Priority")
    )
    items = [
        f'<div class="hero-stat"><span class="stat-value">{problem_count}</span>'
        f'<span class="stat-label">{problems_label}</span></div>'
    ]
    if stats.priority:
        style = f' style="color: {escape_html(stats.priority_color)}"' if stats.priority_color else ""
        items.append(
            f'<div class="hero-stat"><span class="stat-value"{style}>{escape_html(stats.priority)}</span>'
            f'<span class="stat-label">{priority_label}</span></div>'
        )
    if stats.metric:
        items.append(
            f'<div class="hero-stat"><span class="stat-value">{escape_html(stats.metric)}</span>'
            f'<span class="stat-label">{escape_html(stats.metric_label)}</span></div>'
        )

    section_title = ""
    if meta.section_title:
        section_title = f'<h2 class="section-title">{escape_html(meta.section_title)}</h2>'

    return (
        f'<section class="hero category-hero" data-category="{escape_html(category_id)}">'
        f"<h1>{escape_html(meta.name or category_id)}</h1>"
        f'<p class="hero-description">{escape_html(meta.description)}</p>'
        f'<div class="hero-stats">{"".join(items)}</div>'
        f"</section>"
        f"{section_title}"
    )


def render_home(bundle: LocaleBundle | None, counts: dict[str, int] | None = None) -> str:
    """Home page body: intro plus one card per category."""
    counts = counts or {}
    t = functools.partial(_text, bundle)

    cards = []
    for category_id in locales.category_ids(bundle):
        meta = locales.category(bundle, category_id)
        count = counts.get(category_id, len(meta.problem_ids))
        priority = ""
        if meta.stats.priority:
            priority = f'<span class="priority-badge">{escape_html(meta.stats.priority)}</span>'
        cards.append(
            f'<a href="{escape_html(page_href(category_id))}" class="category-card">'
            f"<h3>{escape_html(meta.short_name or meta.name or category_id)}</h3>"
            f"<p>{escape_html(meta.description)}</p>"
            f'<div class="category-meta"><span>{count} {t("labels.problems", "Problems")}</span>'
            f"{priority}</div>"
            f'<span class="category-link">{t("homepage.viewProblems", "View Problems")} →</span>'
            f"</a>"
        )

    return (
        f'<section id="home" class="hero home-hero">'
        f'<h1>{t("homepage.hero.title", "Master Algorithmic Patterns")}</h1>'
        f'<p class="hero-description">{_optional_text(bundle, "homepage.hero.description")}</p>'
        f"</section>"
        f'<section id="algorithms" class="categories-section">'
        f'<h2 class="section-title">{t("homepage.algorithmCategories", "Algorithm Categories")}</h2>'
        f'<div class="categories-grid">{"".join(cards)}</div>'
        f"</section>"
    )


def render_footer(bundle: LocaleBundle | None = None, year: int | None = None) -> str:
    year = year or date.today().year
    text = _text(bundle, "footer.text", "L4/L5 FAANG Algorithms Guide")
    return (
        f'<footer><div class="container">'
        f"<p>&copy; {year} {text}</p>"
        f"</div></footer>"
    )


def render_page(title: str, body: str, lang: str = "en", theme: str = "light") -> str:
    """Wrap rendered fragments in a standalone HTML document."""
    return (
        "<!DOCTYPE html>\n"
        f'<html lang="{escape_html(lang)}" data-theme="{escape_html(theme)}">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape_html(title)}</title>\n"
        '<link rel="stylesheet" href="styles.css">\n'
        "</head>\n"
        f"<body>\n{body}\n</body>\n"
        "</html>\n"
    )
