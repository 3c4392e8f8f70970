"""Tests for the JSON-lines protocol message types."""

from __future__ import annotations

import json

from quizgrader.server.protocol import Request, Response


class TestRequest:
    def test_from_dict_full(self):
        data = {"id": 1, "method": "scoreQuiz", "params": {"quizId": "abc"}}
        req = Request.from_dict(data)
        assert req.id == 1
        assert req.method == "scoreQuiz"
        assert req.params == {"quizId": "abc"}

    def test_from_dict_no_params(self):
        req = Request.from_dict({"id": 2, "method": "getHistory", "params": None})
        assert req.params == {}


class TestResponse:
    def test_success_json_line(self):
        line = Response(id=1, result={"score": 50}).to_json_line()
        assert line.endswith("\n")
        assert json.loads(line) == {"id": 1, "result": {"score": 50}}

    def test_error_json_line(self):
        resp = Response(id=2, error="Unknown method: foo", error_type="ValueError")
        parsed = json.loads(resp.to_json_line())
        assert parsed == {"id": 2, "error": "Unknown method: foo", "errorType": "ValueError"}
        assert "result" not in parsed

    def test_keeps_unicode(self):
        line = Response(id=3, result={"user_answer": "잘모르겠음"}).to_json_line()
        assert "잘모르겠음" in line
