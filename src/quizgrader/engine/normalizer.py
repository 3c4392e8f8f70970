"""Answer normalization for comparison."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

# Reserved text the solving UI submits for "I don't know".
DONT_KNOW = "잘모르겠음"


@dataclass(frozen=True)
class Unanswered:
    """The learner skipped the question or left it blank."""

    is_answered = False


@dataclass(frozen=True)
class Attempted:
    """A real answer. ``text`` keeps the learner's casing, trimmed."""

    text: str
    is_answered = True

    @property
    def key(self) -> str:
        return comparison_key(self.text)


Answer = Union[Unanswered, Attempted]

UNANSWERED = Unanswered()


def comparison_key(text: str) -> str:
    """Fold text for equality checks: strip, lowercase."""
    return text.strip().lower()


def _unwrap(raw: Any) -> tuple[Any, bool]:
    """Split a raw answer record into (value, skipped)."""
    if isinstance(raw, Mapping):
        if "dontKnow" in raw or "answer" in raw:
            return raw.get("answer"), bool(raw.get("dontKnow"))
        return raw.get("value"), bool(raw.get("skipped"))
    return raw, False


def classify_answer(raw: Any, sentinel: str = DONT_KNOW) -> Answer:
    """Turn any raw answer value into ``Unanswered`` or ``Attempted``.

    Accepts ``None``, plain strings or numbers, ``{"value", "skipped"}`` and
    the solving UI's ``{"answer", "dontKnow"}`` records. Never raises.
    """
    value, skipped = _unwrap(raw)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if skipped or not isinstance(value, str):
        return UNANSWERED
    text = value.strip()
    if not text or text == sentinel:
        return UNANSWERED
    return Attempted(text)


def normalize_answer(raw: Any, sentinel: str = DONT_KNOW) -> tuple[str, bool]:
    """Return ``(normalized_text, is_answered)`` for a raw answer value."""
    answer = classify_answer(raw, sentinel)
    if isinstance(answer, Attempted):
        return answer.key, True
    return "", False


def display_answer(raw: Any, sentinel: str = DONT_KNOW) -> str:
    """Text to show for a submitted answer; the sentinel when unanswered."""
    answer = classify_answer(raw, sentinel)
    if isinstance(answer, Attempted):
        return answer.text
    return sentinel


def answers_match(submitted: Any, correct: Any, sentinel: str = DONT_KNOW) -> bool:
    """Check a submitted answer against the answer key.

    An unanswered submission never matches, even an empty key.
    """
    guess = classify_answer(submitted, sentinel)
    if not isinstance(guess, Attempted):
        return False
    if not isinstance(correct, str):
        return False
    return guess.key == comparison_key(correct)
