"""Server handler: dispatches JSON-lines requests to the grading core."""

from __future__ import annotations

from typing import Optional, Union

from quizgrader.config.settings import Settings
from quizgrader.engine.errors import PersistenceError
from quizgrader.engine.submission import grade, grade_shared_quiz, submit_quiz
from quizgrader.state.store import QuizStore

from .protocol import Request


class ServerHandler:
    """Routes incoming requests to engine calls and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[QuizStore] = None,
    ):
        self.settings = settings or Settings.load()
        self.store = store or QuizStore(db_path=self.settings.db_path)

    async def dispatch(self, msg: Union[Request, dict]) -> dict:
        """Route a request to the appropriate handler method."""
        if not isinstance(msg, Request):
            msg = Request.from_dict(msg)
        method = msg.method
        params = msg.params

        handler_map = {
            "scoreQuiz": self._score_quiz,
            "saveQuiz": self._save_quiz,
            "submitQuiz": self._submit_quiz,
            "updateSharing": self._update_sharing,
            "getSharedQuiz": self._get_shared_quiz,
            "gradeSharedQuiz": self._grade_shared_quiz,
            "getHistory": self._get_history,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        return await handler(params)

    @property
    def _sentinel(self) -> str:
        return self.settings.dont_know_sentinel

    async def _score_quiz(self, params: dict) -> dict:
        result = grade(
            params.get("quizId") or "local",
            params.get("answers"),
            params["quizContent"],
            self._sentinel,
        )
        return result.to_dict()

    async def _save_quiz(self, params: dict) -> dict:
        quiz = self.store.save_quiz(
            user_id=params["userId"],
            content=params["quizContent"],
            title=params.get("title"),
            type=params.get("type", ""),
            difficulty=params.get("difficulty", "medium"),
        )
        return quiz.to_dict()

    async def _submit_quiz(self, params: dict) -> dict:
        quiz_id = params["quizId"]
        content = params.get("quizContent")
        if content is None:
            content = self.store.get_quiz(quiz_id).content
        try:
            result = submit_quiz(
                self.store,
                quiz_id=quiz_id,
                user_id=params.get("userId", ""),
                answers=params.get("answers"),
                content=content,
                sentinel=self._sentinel,
                require_answers=self.settings.require_answers,
            )
        except PersistenceError as e:
            # Grading succeeded; let the client still show the result.
            return {"saved": False, "error": str(e), **e.result.to_dict()}
        return {"saved": True, **result.to_dict()}

    async def _update_sharing(self, params: dict) -> dict:
        token = self.store.update_sharing(params["quizId"], bool(params["isShared"]))
        return {"sharedToken": token}

    async def _get_shared_quiz(self, params: dict) -> dict:
        quiz = self.store.get_shared_quiz(params.get("sharedToken", ""))
        return quiz.to_dict()

    async def _grade_shared_quiz(self, params: dict) -> dict:
        result = grade_shared_quiz(
            self.store,
            params.get("sharedToken", ""),
            params.get("answers"),
            self._sentinel,
        )
        return result.to_dict()

    async def _get_history(self, params: dict) -> dict:
        items = self.store.get_history(params["userId"])
        return {"history": [item.to_dict() for item in items]}
