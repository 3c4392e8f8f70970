"""Configuration model for QuizGrader."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel

from quizgrader.engine.normalizer import DONT_KNOW


class Settings(BaseModel):
    data_dir: Path = Path.home() / ".quizgrader"
    dont_know_sentinel: str = DONT_KNOW
    log_level: str = "INFO"
    require_answers: bool = True

    @property
    def db_path(self) -> Path:
        return self.data_dir / "quizgrader.db"

    def get_log_level(self) -> str:
        return os.environ.get("QUIZGRADER_LOG_LEVEL") or self.log_level

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        config_path = config_path or Path.home() / ".quizgrader" / "config.yaml"
        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()

    def save(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.data_dir / "config.yaml"
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(mode="json"), f,
                default_flow_style=False, allow_unicode=True,
            )
