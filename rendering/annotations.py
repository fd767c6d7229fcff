"""Per-line annotation overlay for code blocks.

Annotated lines are wrapped in ``<span class="annotated-line">`` elements that
carry the note text and a group key. Every line of one annotation shares the
same key, so hovering any of them highlights the whole group.

Code highlighting runs after the document is mounted and rewrites the content
of ``<code>`` elements, so the overlay can be re-applied to already rendered
markup through :meth:`AnnotationOverlay.apply_to_rendered_markup`.
"""

import json
import logging
import re
from dataclasses import dataclass

from pydantic import ValidationError

from models import Annotation
from rendering.escaping import escape_attribute, escape_html, unescape_html

logger = logging.getLogger(__name__)

LINE_CLASS = "annotated-line"

CODE_ELEMENT_PATTERN = re.compile(
    r'(<code\b[^>]*?\sdata-annotations="([^"]*)"[^>]*>)(.*?)(</code>)',
    re.DOTALL,
)
WRAPPER_PATTERN = re.compile(
    r'^<span class="annotated-line" data-annotation="([^"]*)" '
    r'data-block="([^"]*)">(.*)</span>$',
    re.DOTALL,
)


@dataclass(frozen=True)
class LineAnnotation:
    text: str
    group_key: str


class AnnotationOverlay:
    """Maps line-range annotations onto code text."""

    def build_line_map(self, annotations: list[Annotation]) -> dict[int, LineAnnotation]:
        """Map each 1-based line number to its note.

        When annotations overlap, the later one owns the shared line.
        """
        line_map: dict[int, LineAnnotation] = {}
        for annotation in annotations:
            entry = LineAnnotation(annotation.text, annotation.group_key)
            for line in annotation.lines:
                line_map[line] = entry
        return line_map

    def overlay(self, code: str | None, annotations: list[Annotation] | None) -> str:
        """Escape code and wrap its annotated lines."""
        if not code:
            return ""
        escaped = escape_html(code)
        if not annotations:
            return escaped
        return self._wrap_lines(escaped, self.build_line_map(annotations))

    def apply_to_rendered_markup(self, markup: str) -> str:
        """Re-wrap annotated lines inside every ``<code data-annotations>``.

        Existing wrappers are removed before wrapping, so calling this any
        number of times after each highlight pass yields the same markup.
        """

        def _apply(match: re.Match) -> str:
            open_tag, attribute, inner, close_tag = match.groups()
            if not attribute or attribute == "[]":
                return match.group(0)
            try:
                annotations = self.decode_attribute(attribute)
            except (json.JSONDecodeError, TypeError, ValidationError) as e:
                logger.error("Error applying annotations: %s", e)
                return match.group(0)
            if not annotations:
                return match.group(0)
            inner = self.strip_wrappers(inner)
            return open_tag + self._wrap_lines(inner, self.build_line_map(annotations)) + close_tag

        return CODE_ELEMENT_PATTERN.sub(_apply, markup)

    def encode_attribute(self, annotations: list[Annotation]) -> str:
        """Serialise annotations for a ``data-annotations`` attribute."""
        payload = [annotation.model_dump() for annotation in annotations]
        return escape_html(json.dumps(payload, ensure_ascii=False))

    def decode_attribute(self, value: str) -> list[Annotation]:
        data = json.loads(unescape_html(value))
        if not isinstance(data, list):
            raise TypeError(f"expected a list of annotations, got {type(data).__name__}")
        return [Annotation.model_validate(entry) for entry in data]

    def strip_wrappers(self, markup: str) -> str:
        """Remove annotation wrappers, leaving the wrapped line content."""
        lines = []
        for line in markup.split("\n"):
            match = WRAPPER_PATTERN.match(line)
            lines.append(match.group(3) if match else line)
        return "\n".join(lines)

    def _wrap_lines(self, markup: str, line_map: dict[int, LineAnnotation]) -> str:
        lines = markup.split("\n")
        return "\n".join(
            self._wrap(line, line_map[number]) if number in line_map else line
            for number, line in enumerate(lines, start=1)
        )

    @staticmethod
    def _wrap(line: str, entry: LineAnnotation) -> str:
        return (
            f'<span class="{LINE_CLASS}" data-annotation="{escape_attribute(entry.text)}" '
            f'data-block="{entry.group_key}">{line}</span>'
        )


def group_line_numbers(code_markup: str, group_key: str) -> list[int]:
    """Return the 1-based lines of rendered code that belong to a hover group."""
    numbers = []
    for number, line in enumerate(code_markup.split("\n"), start=1):
        match = WRAPPER_PATTERN.match(line)
        if match and match.group(2) == group_key:
            numbers.append(number)
    return numbers


class AnnotationTooltip:
    """Hover state for annotated lines: one highlighted group and one panel.

    Entering a line highlights its whole group and shows the note next to the
    hovered element; leaving clears both.
    """

    OFFSET_X = 20
    OFFSET_Y = 8

    def __init__(self):
        self.visible = False
        self.text = ""
        self.highlighted_group: str | None = None
        self.position: tuple[int, int] = (0, 0)

    def show(
        self,
        annotation_text: str,
        group_key: str,
        anchor_left: int = 0,
        anchor_bottom: int = 0,
        scroll_y: int = 0,
    ) -> None:
        if not annotation_text:
            return
        self.highlighted_group = group_key
        self.text = annotation_text
        self.visible = True
        self.position = (anchor_left + self.OFFSET_X, anchor_bottom + scroll_y + self.OFFSET_Y)

    def hide(self, group_key: str | None = None) -> None:
        if group_key is not None and group_key != self.highlighted_group:
            return
        self.highlighted_group = None
        self.visible = False

    def is_highlighted(self, group_key: str) -> bool:
        return self.visible and self.highlighted_group == group_key
