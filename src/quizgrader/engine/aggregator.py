"""Attach identity and submission metadata to a score summary."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from quizgrader.engine.errors import InvalidInput
from quizgrader.engine.scoring import Question, ScoreSummary, Verdict


@dataclass(frozen=True)
class QuizResult:
    quiz_id: str
    summary: ScoreSummary
    timestamp: datetime
    submission_id: Optional[str] = None

    @property
    def score_percent(self) -> int:
        return self.summary.score_percent

    @property
    def correct_count(self) -> int:
        return self.summary.correct_count

    @property
    def total_count(self) -> int:
        return self.summary.total_count

    @property
    def verdicts(self) -> tuple[Verdict, ...]:
        return self.summary.verdicts

    @property
    def missed_questions(self) -> tuple[Question, ...]:
        return self.summary.missed_questions

    def to_dict(self) -> dict:
        data = self.summary.to_dict()
        data["quiz_id"] = self.quiz_id
        data["submission_id"] = self.submission_id
        data["created_at"] = self.timestamp.isoformat()
        return data


def build_result(
    summary: ScoreSummary,
    quiz_id: str,
    submission_id: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> QuizResult:
    """Wrap a summary into a persistable result.

    ``submission_id`` is only ever passed through; ids come from the store.
    """
    if not quiz_id:
        raise InvalidInput("A quiz id is required")
    return QuizResult(
        quiz_id=quiz_id,
        summary=summary,
        timestamp=timestamp or datetime.now(timezone.utc),
        submission_id=submission_id,
    )
