"""Submission flows: grade, persist, and grade shared quizzes."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Any

from quizgrader.engine.aggregator import QuizResult, build_result
from quizgrader.engine.content import parse_answers, parse_content
from quizgrader.engine.errors import InvalidInput, PersistenceError, QuizNotFound
from quizgrader.engine.normalizer import DONT_KNOW
from quizgrader.engine.scoring import score
from quizgrader.state.store import QuizStore

logger = logging.getLogger(__name__)


def grade(quiz_id: str, answers: Any, content: Any, sentinel: str = DONT_KNOW) -> QuizResult:
    """Grade locally without touching any store."""
    content = parse_content(content)
    summary = score(content.questions(), parse_answers(answers), sentinel)
    return build_result(summary, quiz_id=quiz_id)


def submit_quiz(
    store: QuizStore,
    quiz_id: str,
    user_id: str,
    answers: Any,
    content: Any,
    sentinel: str = DONT_KNOW,
    require_answers: bool = True,
) -> QuizResult:
    """Grade a submission and persist it.

    Raises:
        InvalidInput: missing ids, no answers, or empty quiz content.
        PersistenceError: the store rejected the insert. ``.result`` carries
            the locally graded result so it can still be displayed.
    """
    if not quiz_id:
        raise InvalidInput("A quiz id is required")
    if not user_id:
        raise InvalidInput("A user id is required")
    answer_set = parse_answers(answers)
    if require_answers and not answer_set:
        raise InvalidInput("No answers were submitted")
    content = parse_content(content)
    if not content.quizzes:
        raise InvalidInput("Quiz content is empty")

    result = build_result(
        score(content.questions(), answer_set, sentinel), quiz_id=quiz_id,
    )

    try:
        submission_id, created_at = store.insert_submission(
            quiz_id, user_id, answer_set, result.summary,
        )
    except QuizNotFound as e:
        logger.error("Submission for unknown quiz %s", quiz_id)
        raise PersistenceError(f"Invalid quiz id: {quiz_id}", result=result) from e
    except sqlite3.Error as e:
        logger.error("Failed to save submission for quiz %s: %s", quiz_id, e)
        raise PersistenceError(f"Failed to save submission: {e}", result=result) from e

    logger.info(
        "Saved submission %s for quiz %s (%d%%)",
        submission_id, quiz_id, result.score_percent,
    )
    return build_result(
        result.summary,
        quiz_id=quiz_id,
        submission_id=submission_id,
        timestamp=datetime.fromisoformat(created_at),
    )


def grade_shared_quiz(
    store: QuizStore, token: str, answers: Any, sentinel: str = DONT_KNOW,
) -> QuizResult:
    """Grade an anonymous attempt at a shared quiz. Nothing is persisted."""
    quiz = store.get_shared_quiz(token)
    if not quiz.content.quizzes:
        raise InvalidInput("Shared quiz has no questions")
    return grade(quiz.id, answers, quiz.content, sentinel)
