"""Quiz content and answer-set parsing."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from quizgrader.engine.errors import InvalidInput
from quizgrader.engine.scoring import Question


class QuizItem(BaseModel):
    """One generated question as the generator returns it."""
    # YAML reads `answer: 2009` as an int; keep it gradable as text.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: Union[int, str]
    question: str = ""
    options: Optional[list[str]] = None  # empty or missing for short answer
    answer: Optional[str] = None
    explanation: str = ""

    def to_question(self) -> Question:
        return Question(
            id=self.id,
            prompt=self.question,
            correct_answer=self.answer,
            choices=tuple(self.options or ()),
            explanation=self.explanation,
        )


class QuizContent(BaseModel):
    """The generator's ``{summary, quizzes}`` document."""
    summary: str = ""
    quizzes: list[QuizItem] = Field(default_factory=list)

    def questions(self) -> list[Question]:
        return [item.to_question() for item in self.quizzes]


def parse_content(data: Any) -> QuizContent:
    if isinstance(data, QuizContent):
        return data
    if not isinstance(data, dict):
        raise InvalidInput("Quiz content must be an object with a 'quizzes' list")
    try:
        return QuizContent.model_validate(data)
    except ValidationError as e:
        raise InvalidInput(f"Malformed quiz content: {e}") from e


def parse_answers(raw: Any) -> dict[str, Any]:
    """Normalize a submitted answer set into ``{question_id: raw_answer}``.

    Accepts an id-keyed mapping of strings or ``{"answer", "dontKnow"}``
    records, or a list of ``{"questionId", "answer", "dontKnow"}`` records.
    Values are left raw; the normalizer decides what counts as answered.
    """
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return {str(k): v for k, v in raw.items()}
    if isinstance(raw, list):
        answers: dict[str, Any] = {}
        for entry in raw:
            if not isinstance(entry, dict) or "questionId" not in entry:
                raise InvalidInput(f"Answer record missing questionId: {entry!r}")
            answer = entry.get("answer", entry.get("userSelectedAnswer"))
            answers[str(entry["questionId"])] = {
                "answer": answer,
                "dontKnow": bool(entry.get("dontKnow", False)),
            }
        return answers
    raise InvalidInput(f"Unsupported answer set: {type(raw).__name__}")


def _read_document(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidInput(f"Cannot read {path.name}: {e}") from e


def load_quiz_file(path: Path) -> QuizContent:
    """Load quiz content from a YAML or JSON file."""
    return parse_content(_read_document(Path(path)))


def load_answers_file(path: Path) -> dict[str, Any]:
    return parse_answers(_read_document(Path(path)))
