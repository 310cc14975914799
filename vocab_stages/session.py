"""One learner's run through one stage in one practice mode."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from vocab_stages.grader import MEANING, WORD

if TYPE_CHECKING:
    from vocab_stages.grader import FillInGrader
    from vocab_stages.models import Question

FEEDBACK_CORRECT = "Correct!"
FEEDBACK_INCORRECT = "Incorrect."

_FILL_IN_DIRECTIONS = {"fill-in-word": WORD, "fill-in-meaning": MEANING}


@dataclass
class SubmissionOutcome:
    is_correct: bool
    feedback: str
    finished: bool
    tier: str = "choice"


def is_choice_correct(question: Question, selected: list[int]) -> bool:
    """Compare selected option indexes against the answer key."""
    if question.question_type == "multi-select":
        return set(selected) == set(question.correct_answers or [])
    if len(selected) != 1:
        return False
    return selected[0] == question.correct_answer


@dataclass
class QuizSession:
    stage_id: int
    mode: str
    questions: list[Question]
    index: int = 0
    score: int = 0
    correct_count: int = 0
    answered: int = 0
    wrong_word_ids: list[str] = field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.index >= len(self.questions)

    @property
    def current(self) -> Question | None:
        return None if self.finished else self.questions[self.index]

    @property
    def accuracy(self) -> int:
        if not self.answered:
            return 0
        return round(100 * self.correct_count / self.answered)

    def _record(self, question: Question, correct: bool) -> None:
        self.answered += 1
        if correct:
            self.score += 1
            self.correct_count += 1
        elif question.word_id and question.word_id not in self.wrong_word_ids:
            self.wrong_word_ids.append(question.word_id)
        self.index += 1

    def submit_choice(self, selected: list[int]) -> SubmissionOutcome:
        question = self.current
        if question is None:
            raise RuntimeError("session is already finished")
        if question.question_type in _FILL_IN_DIRECTIONS:
            raise ValueError(f"{question.question_type} questions take a text answer")
        correct = is_choice_correct(question, selected)
        self._record(question, correct)
        feedback = FEEDBACK_CORRECT if correct else f"{FEEDBACK_INCORRECT} {question.explanation}"
        return SubmissionOutcome(correct, feedback, self.finished)

    async def submit_text(self, answer: str, grader: FillInGrader) -> SubmissionOutcome:
        question = self.current
        if question is None:
            raise RuntimeError("session is already finished")
        direction = _FILL_IN_DIRECTIONS.get(question.question_type)
        if direction is None:
            raise ValueError(f"{question.question_type} questions take option indexes")
        result = await grader.grade(question.term, str(question.correct_answer), answer, direction)
        self._record(question, result.is_correct)
        return SubmissionOutcome(result.is_correct, result.feedback, self.finished, result.tier)
