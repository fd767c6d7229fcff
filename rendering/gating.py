"""Progressive disclosure: quiz gates in front of explanation sections.

A document has section 0 (always revealed) followed by its generated
sections. Quiz ``i`` sits in front of generated section ``i``, which is
document section ``i + 1``; the section stays locked until that quiz has been
answered correctly once. A position without a quiz is never locked.

Gating is a presentation contract only. The markup of a locked section is
still delivered; it is merely rendered with the ``locked`` class.
"""

from collections.abc import Callable, Sequence
from enum import Enum

from pydantic import BaseModel

from models import GateStatus, Quiz

Translate = Callable[[str, str], str]


def _untranslated(path: str, fallback: str) -> str:
    return fallback


class AnswerOutcome(str, Enum):
    NO_SELECTION = "no_selection"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class AnswerResult(BaseModel):
    """Outcome of one submitted quiz answer."""

    outcome: AnswerOutcome
    message: str
    revealed_section: int | None = None
    activated_quiz: int | None = None

    @property
    def is_correct(self) -> bool:
        return self.outcome == AnswerOutcome.CORRECT


class DisclosureGate:
    """Quiz-gate state machine for one rendered document."""

    def __init__(
        self,
        item_id: str,
        quizzes: Sequence[Quiz | None],
        generated_sections: int,
        translate: Translate | None = None,
    ):
        self.item_id = item_id
        self.generated_sections = generated_sections
        # Quizzes past the last generated section have nothing to gate.
        self.quizzes: list[Quiz | None] = list(quizzes[:generated_sections])
        self._translate = translate or _untranslated
        self._answered: set[int] = set()
        self._active: set[int] = set()

        first = self._next_quiz_after(-1)
        if first is not None:
            self._active.add(first)

    @property
    def section_count(self) -> int:
        return self.generated_sections + 1

    @property
    def has_quizzes(self) -> bool:
        return any(quiz is not None for quiz in self.quizzes)

    def gate_key(self, quiz_index: int) -> str:
        """Explicit key tying a quiz to the section it gates."""
        return f"{self.item_id}:{quiz_index}"

    def quiz_for_section(self, section_index: int) -> int | None:
        quiz_index = section_index - 1
        if 0 <= quiz_index < len(self.quizzes) and self.quizzes[quiz_index] is not None:
            return quiz_index
        return None

    def status(self, section_index: int) -> GateStatus:
        if not 0 <= section_index < self.section_count:
            raise IndexError(f"{self.item_id} has no section {section_index}")
        if section_index == 0:
            return GateStatus.REVEALED
        quiz_index = self.quiz_for_section(section_index)
        if quiz_index is None:
            return GateStatus.UNLOCKED
        if quiz_index in self._answered:
            return GateStatus.REVEALED
        return GateStatus.LOCKED

    def statuses(self) -> list[GateStatus]:
        return [self.status(index) for index in range(self.section_count)]

    def is_locked(self, section_index: int) -> bool:
        return self.status(section_index) == GateStatus.LOCKED

    def is_quiz_active(self, quiz_index: int) -> bool:
        return quiz_index in self._active

    def is_quiz_answered(self, quiz_index: int) -> bool:
        return quiz_index in self._answered

    @property
    def is_complete(self) -> bool:
        return GateStatus.LOCKED not in self.statuses()

    def submit(self, quiz_index: int, selected: int | None) -> AnswerResult:
        """Check an answer for a quiz.

        Args:
            quiz_index: Position of the quiz in the item's quiz list.
            selected: Zero-based option index, or None when nothing was chosen.

        Returns:
            The outcome. Only a correct answer changes any state.
        """
        quiz = self._get_quiz(quiz_index)

        if selected is None:
            return AnswerResult(
                outcome=AnswerOutcome.NO_SELECTION,
                message=self._translate("quiz.selectAnswer", "Please select an answer!"),
            )

        if selected != quiz.correct:
            return AnswerResult(
                outcome=AnswerOutcome.INCORRECT,
                message=f"❌ {self._translate('quiz.tryAgain', 'Try again!')}",
            )

        self._answered.add(quiz_index)
        next_quiz = self._next_quiz_after(quiz_index)
        if next_quiz is not None:
            self._active.add(next_quiz)

        return AnswerResult(
            outcome=AnswerOutcome.CORRECT,
            message=f"✅ {self._translate('quiz.correct', 'Correct!')}",
            revealed_section=quiz_index + 1,
            activated_quiz=next_quiz,
        )

    def _get_quiz(self, quiz_index: int) -> Quiz:
        if not 0 <= quiz_index < len(self.quizzes) or self.quizzes[quiz_index] is None:
            raise IndexError(f"{self.item_id} has no quiz {quiz_index}")
        return self.quizzes[quiz_index]

    def _next_quiz_after(self, quiz_index: int) -> int | None:
        for index in range(quiz_index + 1, len(self.quizzes)):
            if self.quizzes[index] is not None:
                return index
        return None
