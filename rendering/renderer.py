"""Document assembly for problems and categories.

Detailed problems render as a collapsible walkthrough whose explanation
sections sit behind quiz gates. Legacy problems, which lack the nested
explanation structure, render as a simple card without gating.
"""

import re
from dataclasses import dataclass, field

import locales
from models import ContentItem, GateStatus, LocaleBundle, Quiz
from rendering.annotations import AnnotationOverlay
from rendering.escaping import escape_html
from rendering.gating import AnswerResult, DisclosureGate
from rendering.markup import MarkupFormatter

BRIDGE_TAG = "bridges"


@dataclass
class Section:
    key: str
    title: str
    content: str
    # Markdown-style text of the section for plain-text readers
    source: str = ""


class DocumentState:
    """Transient presentation state of one rendered problem."""

    def __init__(self, item: ContentItem, gate: DisclosureGate | None, collapsed: bool = True):
        self.item = item
        self.gate = gate
        self.collapsed = collapsed
        self.feedback: dict[int, AnswerResult] = {}


@dataclass
class CategoryDocument:
    markup: str
    container_class: str
    states: dict[str, DocumentState] = field(default_factory=dict)
    has_diagrams: bool = False


class ContentRenderer:
    """Renders problems with the strings of one locale bundle."""

    def __init__(
        self,
        bundle: LocaleBundle | None = None,
        formatter: MarkupFormatter | None = None,
        overlay: AnnotationOverlay | None = None,
        code_language: str = "javascript",
    ):
        self.bundle = bundle
        self.formatter = formatter or MarkupFormatter()
        self.overlay = overlay or AnnotationOverlay()
        self.code_language = code_language

    def t(self, path: str, fallback: str) -> str:
        return locales.translate(self.bundle, path, fallback)

    def title_for(self, item: ContentItem) -> str:
        return locales.resolve_title(self.bundle, item.id, item.title)

    # ------------------------------------------------------------------
    # Category documents
    # ------------------------------------------------------------------

    def render_category(
        self,
        items: list[ContentItem],
        states: dict[str, DocumentState] | None = None,
    ) -> CategoryDocument:
        """Render every item of a category.

        ``states`` carries gate and collapse state between renders; states for
        new detailed items are created and added to it.
        """
        states = {} if states is None else states
        cards = []
        for item in items:
            if item.is_detailed and item.id not in states:
                states[item.id] = self.create_state(item)
            cards.append(self.render_item(item, states.get(item.id)))

        has_detailed = any(item.is_detailed for item in items)
        container_class = "problem-container" if has_detailed else "problems-grid"
        return CategoryDocument(
            markup=f'<div class="{container_class}">{"".join(cards)}</div>',
            container_class=container_class,
            states=states,
            has_diagrams=any(item.diagram for item in items if item.is_detailed),
        )

    def render_error(self) -> str:
        message = self.t("messages.loadFailed", "Failed to load problems.")
        return f'<div class="error">{escape_html(message)}</div>'

    def render_loading(self) -> str:
        message = self.t("messages.loading", "Loading problems...")
        return f'<div class="loading">{escape_html(message)}</div>'

    def render_feedback(self, result: AnswerResult | None) -> str:
        if result is None:
            return '<div class="quiz-feedback"></div>'
        status = "success" if result.is_correct else "error"
        return f'<div class="quiz-feedback {status}">{escape_html(result.message)}</div>'

    def replace_feedback(
        self, markup: str, item_id: str, quiz_index: int, result: AnswerResult | None
    ) -> str:
        """Swap the feedback line of one quiz in already mounted markup."""
        pattern = re.compile(
            rf'(data-role="quiz-gate" data-quiz-index="{quiz_index}" '
            rf'data-problem-id="{re.escape(escape_html(item_id))}".*?)'
            r'<div class="quiz-feedback[^"]*">[^<]*</div>',
            re.DOTALL,
        )
        feedback = self.render_feedback(result)
        return pattern.sub(lambda match: match.group(1) + feedback, markup, count=1)

    # ------------------------------------------------------------------
    # Problem documents
    # ------------------------------------------------------------------

    def create_state(self, item: ContentItem) -> DocumentState:
        gate = None
        if item.is_detailed:
            gate = DisclosureGate(
                item.id,
                item.quizzes,
                len(self.build_sections(item)),
                translate=self.t,
            )
        return DocumentState(item, gate)

    def render_item(self, item: ContentItem, state: DocumentState | None = None) -> str:
        if not item.is_detailed:
            return self.render_simple_card(item)
        return self.render_detailed_card(item, state or self.create_state(item))

    def build_sections(self, item: ContentItem) -> list[Section]:
        """The gated sections of a detailed item, in display order."""
        explanation = item.explanation
        fmt = self.formatter.format
        bottleneck_label = self.t("problem.bottleneckTitle", "The Bottleneck")
        sections = [
            Section(
                key="naive",
                title=self.t("problem.naiveTitle", "The Naive Approach & Its Bottleneck"),
                content=(
                    f"<div>{fmt(explanation.brute_force)}</div>"
                    f"<p><strong>{escape_html(bottleneck_label)}:</strong></p>"
                    f"<div>{fmt(explanation.bottleneck)}</div>"
                ),
                source=f"{explanation.brute_force}\n\n**{bottleneck_label}:**\n\n{explanation.bottleneck}",
            ),
            Section(
                key="insight",
                title=self.t("problem.insightTitle", "The Key Insight"),
                content=f"<div>{fmt(explanation.optimized_approach)}</div>",
                source=explanation.optimized_approach,
            ),
            Section(
                key="algorithm",
                title=self.t("problem.optimizedTitle", "The Optimized Algorithm"),
                content=f"<div>{fmt(explanation.algorithm_steps)}</div>",
                source=explanation.algorithm_steps,
            ),
        ]

        if explanation.result_analysis:
            sections.append(
                Section(
                    key="result_analysis",
                    title=self.t("problem.resultAnalysisTitle", "Result Analysis & Applications"),
                    content=f'<div class="result-analysis">{fmt(explanation.result_analysis)}</div>',
                    source=explanation.result_analysis,
                )
            )

        if item.code:
            sections.append(
                Section(
                    key="code",
                    title=self.t("problem.codeTitle", "Code Implementation"),
                    content=self._code_snippet(item),
                    source=f"```{self.code_language}\n{item.code.strip()}\n```",
                )
            )

        if item.complexity:
            complexity = item.complexity
            time_label = self.t("problem.timeComplexity", "Time Complexity")
            space_label = self.t("problem.spaceComplexity", "Space Complexity")
            sections.append(
                Section(
                    key="complexity",
                    title=self.t("problem.complexityTitle", "Complexity Analysis"),
                    content=(
                        f"<p><strong>{escape_html(time_label)}:</strong> "
                        f'<code class="language-text">{escape_html(complexity.time)}</code></p>'
                        f"<div>{fmt(complexity.explanation_time)}</div>"
                        f"<br>"
                        f"<p><strong>{escape_html(space_label)}:</strong> "
                        f'<code class="language-text">{escape_html(complexity.space)}</code></p>'
                        f"<div>{fmt(complexity.explanation_space)}</div>"
                    ),
                    source=(
                        f"**{time_label}:** `{complexity.time}`\n\n{complexity.explanation_time}\n\n"
                        f"**{space_label}:** `{complexity.space}`\n\n{complexity.explanation_space}"
                    ),
                )
            )

        return sections

    def render_detailed_card(self, item: ContentItem, state: DocumentState) -> str:
        gate = state.gate
        has_quizzes = bool(gate and gate.has_quizzes)
        card_classes = "problem-card detailed-walkthrough"
        if state.collapsed:
            card_classes += " collapsed"

        bridge_icon = ""
        if BRIDGE_TAG in item.tags:
            bridge_icon = '<i class="fas fa-archway bridge-icon" title="Graph Bridge Problem"></i>'

        statement_title = escape_html(self.t("problem.problemStatement", "Problem Statement"))
        understanding_title = escape_html(
            self.t("problem.understanding", "1. Understanding the Problem")
        )

        return (
            f'<div id="{escape_html(item.id)}" class="{card_classes}" '
            f'data-has-quizzes="{str(has_quizzes).lower()}">'
            f'<div class="card-header" data-role="card-toggle" data-problem-id="{escape_html(item.id)}">'
            f"<h3>{bridge_icon}{escape_html(self.title_for(item))}</h3>"
            f'<div class="header-right">{self._difficulty_badge(item)}'
            f'<span class="collapse-chevron">▼</span></div>'
            f"</div>"
            f'<div class="card-body">'
            f"{self._tags(item)}"
            f'<div class="problem-definition">'
            f'<h4><i class="fas fa-file-alt"></i> {statement_title}</h4>'
            f"<div>{self.formatter.format(item.problem_statement)}</div>"
            f"</div>"
            f"{self._diagram(item)}"
            f'<div class="explanation-section" data-problem-id="{escape_html(item.id)}">'
            f"<h4>{understanding_title}</h4>"
            f"<div>{self.formatter.format(item.explanation.understanding_the_problem)}</div>"
            f"</div>"
            f"{self._gated_sections(item, state)}"
            f"{self._follow_up(item)}"
            f"{self._practice_link(item)}"
            f"{self._related(item)}"
            f"</div>"
            f"</div>"
        )

    def render_simple_card(self, item: ContentItem) -> str:
        problem_label = escape_html(self.t("problem.problemLabel", "Problem"))
        parts = [
            f'<div id="{escape_html(item.id)}" class="problem-card">',
            f'<div class="card-header"><h3>{escape_html(self.title_for(item))}</h3>'
            f"{self._difficulty_badge(item)}</div>",
            self._tags(item),
            f"<p><strong>{problem_label}:</strong> "
            f"{self.formatter.format_inline(item.description or item.problem_statement)}</p>",
        ]
        if item.complexity:
            complexity_label = escape_html(self.t("problem.complexityLabel", "Complexity"))
            parts.append(
                f"<p><strong>{complexity_label}:</strong> "
                f'<code class="language-text">Time: {escape_html(item.complexity.time)} | '
                f"Space: {escape_html(item.complexity.space)}</code></p>"
            )
        if item.code:
            parts.append(
                f'<div class="code-snippet"><pre><code class="language-{self.code_language}">'
                f"{escape_html(item.code)}</code></pre></div>"
            )
        if item.insight:
            insight_label = escape_html(self.t("problem.keyInsight", "Key Insight"))
            parts.append(
                f'<div class="insights"><strong>{insight_label}:</strong> '
                f"{self.formatter.format_inline(item.insight)}</div>"
            )
        parts.append("</div>")
        return "".join(parts)

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def _gated_sections(self, item: ContentItem, state: DocumentState) -> str:
        gate = state.gate
        parts = [f'<div class="gated-section-group" data-problem-id="{escape_html(item.id)}">']
        for index, section in enumerate(self.build_sections(item)):
            document_section = index + 1
            quiz_index = gate.quiz_for_section(document_section) if gate else None
            if quiz_index is not None:
                parts.append(self._quiz(item, quiz_index, gate.quizzes[quiz_index], state))

            status = gate.status(document_section) if gate else GateStatus.UNLOCKED
            classes = "explanation-section gated-section"
            if status == GateStatus.LOCKED:
                classes += " locked"
            elif status == GateStatus.REVEALED:
                classes += " revealed"
            gate_key = gate.gate_key(quiz_index) if quiz_index is not None else ""
            parts.append(
                f'<div class="{classes}" data-section-index="{index}" '
                f'data-problem-id="{escape_html(item.id)}" data-section-key="{section.key}" '
                f'data-gate-key="{escape_html(gate_key)}">'
                f"<h4>{index + 2}. {escape_html(section.title)}</h4>"
                f"{section.content}"
                f"</div>"
            )
        parts.append("</div>")
        return "".join(parts)

    def _quiz(self, item: ContentItem, index: int, quiz: Quiz, state: DocumentState) -> str:
        gate = state.gate
        item_id = escape_html(item.id)
        classes = "quiz-gate"
        if gate.is_quiz_active(index):
            classes += " active"
        if gate.is_quiz_answered(index):
            classes += " answered"

        options = "".join(
            f'<label class="quiz-option">'
            f'<input type="radio" name="quiz-{item_id}-{index}" value="{position}">'
            f'<span class="quiz-option-text">{escape_html(option)}</span>'
            f"</label>"
            for position, option in enumerate(quiz.options)
        )

        check_label = escape_html(self.t("problem.checkAnswer", "Check Answer"))
        return (
            f'<div class="{classes}" data-role="quiz-gate" data-quiz-index="{index}" '
            f'data-problem-id="{item_id}" data-gate-key="{escape_html(gate.gate_key(index))}">'
            f'<div class="quiz-question">🤔 {escape_html(quiz.question)}</div>'
            f'<div class="quiz-options">{options}</div>'
            f'<button class="quiz-check-btn" data-role="quiz-check" '
            f'data-problem-id="{item_id}" data-quiz-index="{index}">{check_label}</button>'
            f"{self.render_feedback(state.feedback.get(index))}"
            f"</div>"
        )

    def _code_snippet(self, item: ContentItem) -> str:
        attribute = self.overlay.encode_attribute(item.annotations)
        return (
            f'<div class="code-snippet"><pre>'
            f'<code class="language-{self.code_language}" data-annotations="{attribute}">'
            f"{self.overlay.overlay(item.code, item.annotations)}</code>"
            f"</pre></div>"
        )

    def _diagram(self, item: ContentItem) -> str:
        if not item.diagram:
            return ""
        title = escape_html(self.t("problem.visualization", "Visualization"))
        return (
            f'<div class="diagram-section">'
            f'<h4><i class="fas fa-project-diagram"></i> {title}</h4>'
            f'<div class="mermaid">{escape_html(item.diagram)}</div>'
            f"</div>"
        )

    def _follow_up(self, item: ContentItem) -> str:
        follow_up = item.follow_up
        if not follow_up:
            return ""

        guide = ""
        if follow_up.answering_guide:
            tip = escape_html(self.t("problem.interviewTip", "Interview Tip"))
            guide = (
                f'<div class="tip-badge"><i class="fas fa-lightbulb"></i> {tip}'
                f'<div class="tooltip-content">{self.formatter.format_inline(follow_up.answering_guide)}</div>'
                f"</div>"
            )

        rows = []
        for value, path, fallback in (
            (follow_up.scenario, "problem.scenario", "Scenario"),
            (follow_up.trade_off, "problem.tradeOff", "Trade-off"),
            (follow_up.strategy, "problem.strategy", "Strategy"),
        ):
            if value:
                rows.append(
                    f"<p><strong>{escape_html(self.t(path, fallback))}:</strong> "
                    f"{self.formatter.format_inline(value)}</p>"
                )

        title = escape_html(self.t("problem.seniorCorner", "Senior Engineer's Corner"))
        return (
            f'<div class="senior-section collapsed" data-role="collapse-toggle">'
            f'<div class="senior-header">'
            f'<div class="senior-title"><i class="fas fa-level-up-alt"></i><h4>{title}</h4></div>'
            f'<div class="header-right-group">{guide}<span class="collapse-chevron">▼</span></div>'
            f"</div>"
            f'<div class="senior-content">{"".join(rows)}</div>'
            f"</div>"
        )

    def _practice_link(self, item: ContentItem) -> str:
        url = item.leetcode_url
        if not url or not url.startswith(("https://", "http://")):
            return ""
        label = escape_html(self.t("problem.solveOnLeetcode", "Solve on LeetCode"))
        return (
            f'<div class="practice-actions">'
            f'<a href="{escape_html(url)}" target="_blank" rel="noopener noreferrer" class="btn-leetcode">'
            f'<i class="fas fa-code"></i> {label}</a>'
            f"</div>"
        )

    def _related(self, item: ContentItem) -> str:
        if not item.related:
            return ""
        chips = "".join(
            f'<a href="{escape_html(f"{ref.category}.html#{ref.id}")}" class="related-chip">'
            f'<i class="fas fa-link"></i> {escape_html(locales.resolve_title(self.bundle, ref.id, ref.title))}</a>'
            for ref in item.related
        )
        header = escape_html(self.t("problem.practiceNext", "Practice Next"))
        return (
            f'<div class="related-section">'
            f'<div class="related-header"><i class="fas fa-random"></i> {header}</div>'
            f'<div class="related-chips">{chips}</div>'
            f"</div>"
        )

    @staticmethod
    def _difficulty_badge(item: ContentItem) -> str:
        return (
            f'<div class="card-difficulty {item.difficulty.css_class}">'
            f"{item.difficulty.label}</div>"
        )

    @staticmethod
    def _tags(item: ContentItem) -> str:
        tags = escape_html(", ".join(item.tags))
        return f'<div class="cf-meta"><span class="cf-tags">{tags}</span></div>'
