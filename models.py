from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Any) -> Difficulty:
        """Coerce a raw difficulty value, defaulting to medium for anything unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def css_class(self) -> str:
        return f"difficulty-{self.value}"


class GateStatus(str, Enum):
    """Presentation state of one section of a gated document."""

    LOCKED = "locked"
    UNLOCKED = "unlocked"
    REVEALED = "revealed"


# ============================================================================
# Content Models
# ============================================================================


class Annotation(BaseModel):
    """An explanatory note attached to a set of 1-indexed code lines."""

    lines: list[int] = Field(default_factory=list)
    text: str = ""

    @property
    def group_key(self) -> str:
        """Stable key shared by every line of this annotation (e.g. '3-4-7')."""
        return "-".join(str(n) for n in sorted(set(self.lines)))


class Quiz(BaseModel):
    question: str
    options: list[str]
    correct: int  # zero-based index into options

    @model_validator(mode="after")
    def _check_correct_index(self) -> Quiz:
        if not 0 <= self.correct < len(self.options):
            raise ValueError(
                f"correct index {self.correct} is out of range "
                f"for {len(self.options)} options"
            )
        return self


class _TextFields(BaseModel):
    """Base for records made of optional prose fields; null becomes empty."""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Explanation(_TextFields):
    understanding_the_problem: str = ""
    brute_force: str = ""
    bottleneck: str = ""
    optimized_approach: str = ""
    algorithm_steps: str = ""
    result_analysis: str = ""


class Complexity(_TextFields):
    time: str = ""
    space: str = ""
    explanation_time: str = ""
    explanation_space: str = ""


class FollowUp(_TextFields):
    scenario: str = ""
    trade_off: str = ""
    strategy: str = ""
    answering_guide: str = ""


class RelatedRef(BaseModel):
    id: str
    category: str = ""
    title: str = ""


class ContentItem(BaseModel):
    """One problem write-up, normalised from either the legacy flat record or
    the nested record that keys code by language."""

    id: str
    title: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    tags: list[str] = Field(default_factory=list)
    problem_statement: str = ""
    explanation: Explanation | None = None
    code: str | None = None
    annotations: list[Annotation] = Field(default_factory=list)
    # Positional: quizzes[i] gates generated section i. A None entry leaves
    # that section ungated.
    quizzes: list[Quiz | None] = Field(default_factory=list)
    complexity: Complexity | None = None
    follow_up: FollowUp | None = None
    related: list[RelatedRef] = Field(default_factory=list)
    diagram: str | None = None
    leetcode_url: str | None = None

    # Legacy simple-card fields
    description: str = ""
    insight: str = ""

    @field_validator("difficulty", mode="before")
    @classmethod
    def _parse_difficulty(cls, value: Any) -> Difficulty:
        return Difficulty.parse(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _dedupe_tags(cls, value: Any) -> list[str]:
        if not value:
            return []
        if not isinstance(value, list):
            return value
        tags: list[str] = []
        for tag in value:
            if tag not in tags:
                tags.append(tag)
        return tags

    @field_validator("title", "problem_statement", "description", "insight", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_detailed(self) -> bool:
        """True for items using the multi-section walkthrough format."""
        return self.explanation is not None

    @classmethod
    def from_raw(cls, raw: dict[str, Any], code_language: str = "javascript") -> ContentItem:
        """Build an item from a persisted JSON record.

        Nested records keep prose under ``content`` and code under
        ``code.<language>``; both are flattened here. Malformed annotations are
        dropped for this item only, and invalid quizzes leave their position
        ungated.
        """
        data = dict(raw)
        item_id = str(data.get("id", "?"))

        content = data.pop("content", None)
        if isinstance(content, dict):
            for key in ("problem_statement", "explanation", "quizzes"):
                if content.get(key) is not None:
                    data[key] = content[key]

        code = data.get("code")
        if isinstance(code, dict):
            code_data = code.get(code_language)
            if not isinstance(code_data, dict):
                code_data = {}
            data["code"] = code_data.get("solution")
            if code_data.get("annotations") is not None:
                data["annotations"] = code_data["annotations"]
        elif code is not None and not isinstance(code, str):
            data["code"] = None

        data["annotations"] = _parse_annotations(data.get("annotations"), item_id)
        data["quizzes"] = _parse_quizzes(data.get("quizzes"), item_id)
        return cls.model_validate(data)


def _parse_annotations(value: Any, item_id: str) -> list[Annotation]:
    if not value:
        return []
    try:
        if isinstance(value, str):
            value = json.loads(value)
        if not isinstance(value, list):
            raise TypeError(f"expected a list, got {type(value).__name__}")
        return [Annotation.model_validate(entry) for entry in value]
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        logger.warning("Ignoring malformed annotations for %s: %s", item_id, e)
        return []


def _parse_quizzes(value: Any, item_id: str) -> list[Quiz | None]:
    if not value or not isinstance(value, list):
        return []
    quizzes: list[Quiz | None] = []
    for index, entry in enumerate(value):
        if entry is None:
            quizzes.append(None)
            continue
        try:
            quizzes.append(Quiz.model_validate(entry))
        except ValidationError as e:
            logger.warning("Ignoring invalid quiz %d for %s: %s", index, item_id, e)
            quizzes.append(None)
    return quizzes


# ============================================================================
# Locale Models
# ============================================================================


class CategoryStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    priority: str = ""
    priority_color: str = Field(default="", alias="priorityColor")
    priority_label: str = Field(default="", alias="priorityLabel")
    metric: str = ""
    metric_label: str = Field(default="", alias="metricLabel")


class CategorySeo(BaseModel):
    title: str = ""


class CategoryMeta(BaseModel):
    """Display metadata and load-order manifest for one category."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    short_name: str = Field(default="", alias="shortName")
    description: str = ""
    section_title: str = Field(default="", alias="sectionTitle")
    problem_ids: list[str] = Field(default_factory=list, alias="problemIds")
    stats: CategoryStats = Field(default_factory=CategoryStats)
    seo: CategorySeo = Field(default_factory=CategorySeo)


class LocaleBundle(BaseModel):
    """Translated UI strings and category metadata for one locale.

    Non-default bundles may be partial. Each bundle can link to a parent
    (the default locale's bundle) that lookups fall back to.
    """

    model_config = ConfigDict(populate_by_name=True)

    locale: str
    ui: dict[str, Any] = Field(default_factory=dict)
    categories: dict[str, CategoryMeta] = Field(default_factory=dict)
    problem_titles: dict[str, str] = Field(default_factory=dict, alias="problemTitles")
    loaded: bool = True

    _parent: LocaleBundle | None = PrivateAttr(default=None)

    @property
    def parent(self) -> LocaleBundle | None:
        return self._parent

    def attach_parent(self, parent: LocaleBundle | None) -> LocaleBundle:
        if parent is not self:
            self._parent = parent
        return self

    def chain(self) -> Iterator[LocaleBundle]:
        """Yield this bundle, then each fallback bundle in order."""
        seen: set[int] = set()
        bundle: LocaleBundle | None = self
        while bundle is not None and id(bundle) not in seen:
            seen.add(id(bundle))
            yield bundle
            bundle = bundle.parent


# ============================================================================
# Collection and Search Models
# ============================================================================


class Collection(BaseModel):
    """All loaded items, grouped by category in manifest order."""

    locale: str
    categories: dict[str, list[ContentItem]] = Field(default_factory=dict)

    def iter_items(self) -> Iterator[tuple[str, ContentItem]]:
        for category_id, items in self.categories.items():
            for item in items:
                yield category_id, item

    def find(self, item_id: str) -> tuple[str, ContentItem] | None:
        for category_id, item in self.iter_items():
            if item.id == item_id:
                return category_id, item
        return None

    @property
    def item_count(self) -> int:
        return sum(len(items) for items in self.categories.values())


class SearchRecord(BaseModel):
    id: str
    title: str
    category: str
    difficulty: Difficulty


# ============================================================================
# Client Preference Models
# ============================================================================


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def other(self) -> Theme:
        return Theme.DARK if self == Theme.LIGHT else Theme.LIGHT


class Preferences(BaseModel):
    """Persisted client state. None means "not chosen yet"."""

    locale: str | None = None
    theme: Theme | None = None

    @field_validator("theme", mode="before")
    @classmethod
    def _ignore_unknown_theme(cls, value: Any) -> Any:
        if value is None or isinstance(value, Theme):
            return value
        try:
            return Theme(value)
        except ValueError:
            logger.warning("Ignoring unknown theme preference %r", value)
            return None
