"""Rendering layer - turns content items into safe HTML fragments and pages."""

from rendering.annotations import AnnotationOverlay, AnnotationTooltip, group_line_numbers
from rendering.chrome import (
    page_title,
    render_category_hero,
    render_footer,
    render_header,
    render_home,
    render_page,
)
from rendering.escaping import escape_attribute, escape_html, unescape_html
from rendering.gating import AnswerOutcome, AnswerResult, DisclosureGate
from rendering.markup import MarkupFormatter, format_markup
from rendering.renderer import CategoryDocument, ContentRenderer, DocumentState, Section

__all__ = [
    "AnnotationOverlay",
    "AnnotationTooltip",
    "group_line_numbers",
    "page_title",
    "render_category_hero",
    "render_footer",
    "render_header",
    "render_home",
    "render_page",
    "escape_attribute",
    "escape_html",
    "unescape_html",
    "AnswerOutcome",
    "AnswerResult",
    "DisclosureGate",
    "MarkupFormatter",
    "format_markup",
    "CategoryDocument",
    "ContentRenderer",
    "DocumentState",
    "Section",
]
