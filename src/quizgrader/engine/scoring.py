"""Quiz scoring: compare submitted answers against the answer key."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from quizgrader.engine.errors import PreconditionFailed
from quizgrader.engine.normalizer import DONT_KNOW, answers_match, display_answer

logger = logging.getLogger(__name__)

QuestionId = Union[int, str]


@dataclass(frozen=True)
class Question:
    id: QuestionId
    prompt: str
    correct_answer: Optional[str]
    choices: tuple[str, ...] = ()
    explanation: str = ""

    @property
    def is_multiple_choice(self) -> bool:
        return bool(self.choices)

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "Question":
        """Build from the generator's ``{id, question, options, answer, explanation}`` shape."""
        return cls(
            id=item["id"],
            prompt=item.get("question", ""),
            correct_answer=item.get("answer"),
            choices=tuple(item.get("options") or ()),
            explanation=item.get("explanation") or "",
        )

    def to_item(self) -> dict:
        return {
            "id": self.id,
            "question": self.prompt,
            "options": list(self.choices),
            "answer": self.correct_answer,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class Verdict:
    question_id: QuestionId
    question_text: str
    submitted_answer: str
    correct_answer: Optional[str]
    is_correct: bool
    explanation: str = ""

    def to_dict(self) -> dict:
        return {
            "questionId": self.question_id,
            "question": self.question_text,
            "user_answer": self.submitted_answer,
            "correct_answer": self.correct_answer,
            "is_correct": self.is_correct,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class ScoreSummary:
    score_percent: int
    correct_count: int
    total_count: int
    verdicts: tuple[Verdict, ...] = field(default_factory=tuple)
    missed_questions: tuple[Question, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "score": self.score_percent,
            "correct_count": self.correct_count,
            "total_count": self.total_count,
            "results": [v.to_dict() for v in self.verdicts],
            "wrong_questions": [q.to_item() for q in self.missed_questions],
        }


def percent(correct: int, total: int) -> int:
    """Integer percentage, rounding halves up (1/8 -> 13, 1/3 -> 33)."""
    if total <= 0:
        raise PreconditionFailed("Cannot compute a score over zero questions")
    return (200 * correct + total) // (2 * total)


def _index_answers(submitted: Optional[Mapping[Any, Any]]) -> dict[str, Any]:
    # Ids arrive as ints from the generator and as strings from JSON keys.
    # Later keys overwrite earlier ones that stringify the same.
    index: dict[str, Any] = {}
    for key, value in (submitted or {}).items():
        index[str(key)] = value
    return index


def score(
    questions: Sequence[Question],
    submitted: Optional[Mapping[Any, Any]],
    sentinel: str = DONT_KNOW,
) -> ScoreSummary:
    """Grade a submission.

    Every question yields exactly one verdict, in input order. A question with
    a missing or empty answer key can never be matched and is graded
    incorrect rather than rejected.

    Raises:
        PreconditionFailed: if ``questions`` is empty.
    """
    if not questions:
        raise PreconditionFailed("Cannot score an empty question set")

    answers = _index_answers(submitted)
    verdicts: list[Verdict] = []
    missed: list[Question] = []

    for question in questions:
        raw = answers.get(str(question.id))
        is_correct = answers_match(raw, question.correct_answer, sentinel)
        verdicts.append(Verdict(
            question_id=question.id,
            question_text=question.prompt,
            submitted_answer=display_answer(raw, sentinel),
            correct_answer=question.correct_answer,
            is_correct=is_correct,
            explanation=question.explanation,
        ))
        if not is_correct:
            missed.append(question)

    correct_count = len(verdicts) - len(missed)
    summary = ScoreSummary(
        score_percent=percent(correct_count, len(questions)),
        correct_count=correct_count,
        total_count=len(questions),
        verdicts=tuple(verdicts),
        missed_questions=tuple(missed),
    )
    logger.debug(
        "Scored %d/%d (%d%%)",
        summary.correct_count, summary.total_count, summary.score_percent,
    )
    return summary
