"""SQLite-backed quiz and submission storage for QuizGrader."""

from __future__ import annotations

import json
import logging
import secrets
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from quizgrader.engine.content import QuizContent, parse_content
from quizgrader.engine.errors import QuizNotFound
from quizgrader.engine.scoring import ScoreSummary

logger = logging.getLogger(__name__)


@dataclass
class StoredQuiz:
    id: str
    user_id: str
    title: Optional[str]
    type: str
    difficulty: str
    count: int
    content: QuizContent
    is_shared: bool
    shared_token: Optional[str]
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "difficulty": self.difficulty,
            "count": self.count,
            "quiz_content": self.content.model_dump(),
            "is_shared": self.is_shared,
            "shared_token": self.shared_token,
        }


@dataclass
class HistoryItem:
    id: str
    quiz_id: str
    score: int
    correct_count: int
    total_count: int
    created_at: str
    title: Optional[str]
    is_shared: bool
    shared_token: Optional[str]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "quiz_id": self.quiz_id,
            "score": self.score,
            "correct_count": self.correct_count,
            "total_count": self.total_count,
            "created_at": self.created_at,
            "quizzes": {
                "title": self.title,
                "is_shared": self.is_shared,
                "shared_token": self.shared_token,
            },
        }


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class QuizStore:
    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = db_path or (Path.home() / ".quizgrader" / "quizgrader.db")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS quizzes (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT,
                    type TEXT DEFAULT '',
                    difficulty TEXT DEFAULT 'medium',
                    count INTEGER DEFAULT 0,
                    quiz_content TEXT NOT NULL,
                    is_shared INTEGER DEFAULT 0,
                    shared_token TEXT UNIQUE,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS quiz_submissions (
                    id TEXT PRIMARY KEY,
                    quiz_id TEXT NOT NULL REFERENCES quizzes(id),
                    user_id TEXT NOT NULL,
                    user_answers TEXT NOT NULL,
                    score INTEGER NOT NULL,
                    correct_count INTEGER NOT NULL,
                    total_count INTEGER NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

    def _conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    # --- Quizzes ---

    def save_quiz(
        self,
        user_id: str,
        content: Any,
        title: Optional[str] = None,
        type: str = "",
        difficulty: str = "medium",
    ) -> StoredQuiz:
        content = parse_content(content)
        quiz_id = str(uuid.uuid4())
        now = _now()
        with self._conn() as conn:
            conn.execute(
                """INSERT INTO quizzes
                   (id, user_id, title, type, difficulty, count, quiz_content, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (quiz_id, user_id, title, type, difficulty, len(content.quizzes),
                 content.model_dump_json(), now, now),
            )
        logger.info("Saved quiz %s (%d questions)", quiz_id, len(content.quizzes))
        return self.get_quiz(quiz_id)

    def get_quiz(self, quiz_id: str) -> StoredQuiz:
        with self._conn() as conn:
            row = conn.execute(
                "SELECT * FROM quizzes WHERE id = ?", (quiz_id,),
            ).fetchone()
        if not row:
            raise QuizNotFound(f"Unknown quiz: {quiz_id}")
        return self._row_to_quiz(row)

    @staticmethod
    def _row_to_quiz(row) -> StoredQuiz:
        return StoredQuiz(
            id=row[0],
            user_id=row[1],
            title=row[2],
            type=row[3],
            difficulty=row[4],
            count=row[5],
            content=QuizContent.model_validate_json(row[6]),
            is_shared=bool(row[7]),
            shared_token=row[8],
            created_at=row[9],
            updated_at=row[10],
        )

    def update_sharing(self, quiz_id: str, is_shared: bool) -> Optional[str]:
        """Turn sharing on or off. Returns the active token, or None when off.

        An existing token is reused so previously shared links keep working.
        """
        quiz = self.get_quiz(quiz_id)
        token = None
        if is_shared:
            token = quiz.shared_token or secrets.token_urlsafe(16)
        with self._conn() as conn:
            conn.execute(
                "UPDATE quizzes SET is_shared = ?, shared_token = ?, updated_at = ? WHERE id = ?",
                (int(is_shared), token, _now(), quiz_id),
            )
        return token

    def get_shared_quiz(self, token: str) -> StoredQuiz:
        if not token:
            raise QuizNotFound("A share token is required")
        with self._conn() as conn:
            row = conn.execute(
                "SELECT * FROM quizzes WHERE shared_token = ? AND is_shared = 1",
                (token,),
            ).fetchone()
        if not row:
            raise QuizNotFound("Shared quiz not found or not accessible")
        return self._row_to_quiz(row)

    # --- Submissions ---

    def insert_submission(
        self,
        quiz_id: str,
        user_id: str,
        user_answers: dict,
        summary: ScoreSummary,
    ) -> tuple[str, str]:
        """Insert one graded submission. Not idempotent: every call adds a row.

        Returns (submission_id, created_at).
        """
        submission_id = str(uuid.uuid4())
        now = _now()
        with self._conn() as conn:
            exists = conn.execute(
                "SELECT 1 FROM quizzes WHERE id = ?", (quiz_id,),
            ).fetchone()
            if not exists:
                raise QuizNotFound(f"Unknown quiz: {quiz_id}")
            conn.execute(
                """INSERT INTO quiz_submissions
                   (id, quiz_id, user_id, user_answers, score, correct_count, total_count, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (submission_id, quiz_id, user_id,
                 json.dumps(user_answers, ensure_ascii=False),
                 summary.score_percent, summary.correct_count, summary.total_count, now),
            )
        return submission_id, now

    def get_history(self, user_id: str) -> list[HistoryItem]:
        """Return a user's submissions, newest first."""
        with self._conn() as conn:
            rows = conn.execute(
                """SELECT s.id, s.quiz_id, s.score, s.correct_count, s.total_count,
                          s.created_at, q.title, q.is_shared, q.shared_token
                   FROM quiz_submissions s
                   LEFT JOIN quizzes q ON q.id = s.quiz_id
                   WHERE s.user_id = ?
                   ORDER BY s.created_at DESC, s.rowid DESC""",
                (user_id,),
            ).fetchall()
        return [
            HistoryItem(
                id=r[0], quiz_id=r[1], score=r[2], correct_count=r[3],
                total_count=r[4], created_at=r[5], title=r[6],
                is_shared=bool(r[7]), shared_token=r[8],
            )
            for r in rows
        ]
