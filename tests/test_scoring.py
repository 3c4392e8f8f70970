"""Tests for the scoring engine."""

import pytest

from quizgrader.engine.errors import InvalidInput, PreconditionFailed
from quizgrader.engine.normalizer import DONT_KNOW
from quizgrader.engine.scoring import Question, percent, score


class TestPercent:
    @pytest.mark.parametrize("correct,total,expected", [
        (0, 3, 0),
        (1, 3, 33),
        (2, 3, 67),
        (1, 2, 50),
        (1, 8, 13),  # 12.5 rounds up
        (3, 8, 38),  # 37.5 rounds up
        (5, 8, 63),  # 62.5 rounds up
        (3, 3, 100),
    ])
    def test_round_half_up(self, correct, total, expected):
        assert percent(correct, total) == expected

    def test_zero_total(self):
        with pytest.raises(PreconditionFailed):
            percent(0, 0)


class TestScore:
    def test_one_character_mismatch(self, sample_content):
        questions = [
            Question(id=1, prompt="런타임?", correct_answer="서울 및 CLI 환경"),
            Question.from_item(sample_content["quizzes"][1]),
        ]
        summary = score(questions, {1: "서버 및 CLI 환경", 2: "v8"})

        assert [v.is_correct for v in summary.verdicts] == [False, True]
        assert summary.correct_count == 1
        assert summary.total_count == 2
        assert summary.score_percent == 50
        assert summary.missed_questions == (questions[0],)

    def test_dont_know_single_question(self):
        q = Question(id=1, prompt="?", correct_answer="V8")
        summary = score([q], {1: DONT_KNOW})
        assert summary.score_percent == 0
        assert not summary.verdicts[0].is_correct
        assert summary.verdicts[0].submitted_answer == DONT_KNOW

    def test_all_correct(self, capitals):
        summary = score(capitals, {1: "Seoul", 2: "Tokyo", 3: "Paris"})
        assert summary.score_percent == 100
        assert summary.missed_questions == ()

    def test_empty_questions(self):
        with pytest.raises(PreconditionFailed):
            score([], {1: "x"})

    def test_empty_questions_is_invalid_input(self):
        with pytest.raises(InvalidInput):
            score([], {})

    def test_empty_key_with_empty_answer(self):
        q = Question(id=1, prompt="?", correct_answer="")
        summary = score([q], {1: ""})
        assert not summary.verdicts[0].is_correct
        assert summary.score_percent == 0

    def test_missing_key_graded_incorrect(self):
        q = Question(id=1, prompt="?", correct_answer=None)
        summary = score([q], {1: "anything"})
        assert not summary.verdicts[0].is_correct

    def test_choice_key_not_in_choices_still_graded(self):
        q = Question(id=1, prompt="?", correct_answer="E",
                     choices=("A", "B", "C", "D"))
        summary = score([q], {1: "A"})
        assert summary.missed_questions == (q,)

    @pytest.mark.parametrize("guess", ["Seoul", " seoul ", "SEOUL"])
    def test_case_insensitive(self, guess):
        q = Question(id=1, prompt="?", correct_answer="Seoul")
        assert score([q], {1: guess}).correct_count == 1

    def test_absent_answers(self, capitals):
        summary = score(capitals, None)
        assert summary.correct_count == 0
        assert all(v.submitted_answer == DONT_KNOW for v in summary.verdicts)

    def test_string_and_int_ids_match(self, capitals):
        summary = score(capitals, {"1": "Seoul", "2": "Tokyo", 3: "Paris"})
        assert summary.correct_count == 3

    def test_duplicate_keys_last_wins(self):
        q = Question(id=1, prompt="?", correct_answer="Seoul")
        assert score([q], {1: "Busan", "1": "Seoul"}).correct_count == 1
        assert score([q], {"1": "Seoul", 1: "Busan"}).correct_count == 0

    def test_numeric_answer(self):
        q = Question(id=1, prompt="Year?", correct_answer="2009")
        summary = score([q], {1: 2009})
        assert summary.verdicts[0].is_correct
        assert summary.verdicts[0].submitted_answer == "2009"

    def test_structured_answers(self, capitals):
        answers = {
            1: {"answer": "seoul", "dontKnow": False},
            2: {"answer": "Tokyo", "dontKnow": True},
            3: {"value": "PARIS", "skipped": False},
        }
        summary = score(capitals, answers)
        assert [v.is_correct for v in summary.verdicts] == [True, False, True]
        assert summary.verdicts[1].submitted_answer == DONT_KNOW
        assert summary.score_percent == 67

    def test_verdicts_follow_input_order(self, capitals):
        reordered = [capitals[2], capitals[0], capitals[1]]
        summary = score(reordered, {2: "Tokyo"})
        assert [v.question_id for v in summary.verdicts] == [3, 1, 2]
        assert summary.missed_questions == (capitals[2], capitals[0])

    def test_missed_matches_incorrect_verdicts(self, capitals):
        summary = score(capitals, {1: "Seoul", 3: "Lyon"})
        wrong_ids = [v.question_id for v in summary.verdicts if not v.is_correct]
        assert [q.id for q in summary.missed_questions] == wrong_ids

    def test_deterministic(self, capitals):
        answers = {1: "Seoul", 2: DONT_KNOW, 3: "paris"}
        assert score(capitals, answers) == score(capitals, answers)

    def test_verdict_display_keeps_casing(self, capitals):
        summary = score(capitals, {1: "  SEOUL "})
        assert summary.verdicts[0].submitted_answer == "SEOUL"
        assert summary.verdicts[0].correct_answer == "Seoul"

    def test_to_dict_wire_shape(self, sample_content):
        questions = [Question.from_item(q) for q in sample_content["quizzes"]]
        data = score(questions, {1: "API 서버", 2: "V8"}).to_dict()
        assert data["score"] == 50
        assert data["correct_count"] == 1
        assert data["total_count"] == 2
        assert data["results"][0]["user_answer"] == "API 서버"
        assert data["results"][0]["is_correct"] is False
        assert [q["id"] for q in data["wrong_questions"]] == [1]
        assert data["wrong_questions"][0]["options"][2] == "서버 및 CLI 환경"
