"""Shared fixtures for QuizGrader tests."""

from __future__ import annotations

import pytest
import yaml

from quizgrader.engine.scoring import Question
from quizgrader.state.store import QuizStore


@pytest.fixture
def sample_content():
    """Generator output for a two-question Node.js quiz."""
    return {
        "summary": "Node.js는 V8 엔진 기반의 자바스크립트 런타임이다.",
        "quizzes": [
            {
                "id": 1,
                "question": "Node.js는 무엇을 위한 런타임인가요?",
                "options": [
                    "브라우저 환경",
                    "데이터베이스",
                    "서버 및 CLI 환경",
                    "프론트엔드",
                    "API 서버",
                ],
                "answer": "서버 및 CLI 환경",
                "explanation": "Node.js는 서버나 CLI 환경에서 자바스크립트를 실행한다.",
            },
            {
                "id": 2,
                "question": "Chrome은 (    ) 엔진을 사용합니다.",
                "options": [],
                "answer": "V8",
                "explanation": "Chrome은 V8 엔진을 사용한다.",
            },
        ],
    }


@pytest.fixture
def capitals():
    return [
        Question(id=1, prompt="Capital of Korea?", correct_answer="Seoul"),
        Question(id=2, prompt="Capital of Japan?", correct_answer="Tokyo",
                 choices=("Osaka", "Tokyo", "Kyoto", "Nagoya")),
        Question(id=3, prompt="Capital of France?", correct_answer="Paris"),
    ]


@pytest.fixture
def store(tmp_path):
    return QuizStore(db_path=tmp_path / "data" / "test.db")


@pytest.fixture
def quiz_files(tmp_path, sample_content):
    """Write a quiz YAML file and an answers YAML file."""
    quiz_file = tmp_path / "nodejs.yaml"
    answers_file = tmp_path / "answers.yaml"
    with open(quiz_file, "w", encoding="utf-8") as f:
        yaml.dump(sample_content, f, allow_unicode=True)
    with open(answers_file, "w", encoding="utf-8") as f:
        yaml.dump({1: "API 서버", 2: "v8"}, f, allow_unicode=True)
    return quiz_file, answers_file
