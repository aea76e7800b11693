"""
Tests for the public Q&A board.
"""

import pytest
from fastapi import HTTPException

from neurahub.modules.qa.schemas import AnswerCreate, QuestionCreate
from neurahub.modules.qa.service import QAService, like_escape
from neurahub.modules.users.service import AppUserService


@pytest.fixture
def author(supabase, captain):
    AppUserService(supabase).ensure_user(captain["id"], captain["email"], "captain")
    return captain


class TestQAService:
    """Test QAService."""

    def test_question_with_answers(self, supabase, author):
        service = QAService(supabase)
        question = service.create_question(
            QuestionCreate(title="Best odometry pods?", body="Two or three wheels?"), author["id"]
        )
        assert question.author_username == "captain"
        assert question.answer_count == 0

        service.create_answer(question.id, AnswerCreate(body="Three wheels"), author["id"])
        service.create_answer(question.id, AnswerCreate(body="Two plus IMU"), author["id"])

        assert service.get_question(question.id).answer_count == 2
        answers = service.list_answers(question.id)
        assert [a.body for a in answers] == ["Three wheels", "Two plus IMU"]
        assert answers[0].author_username == "captain"

    def test_search_matches_title(self, supabase, author):
        service = QAService(supabase)
        service.create_question(QuestionCreate(title="Servo jitter", body="Help"), author["id"])
        service.create_question(QuestionCreate(title="Motor encoder wiring", body="Help"), author["id"])

        assert [q.title for q in service.list_questions(search="SERVO")] == ["Servo jitter"]
        assert [q.title for q in service.list_questions()] == ["Motor encoder wiring", "Servo jitter"]

    def test_search_wildcards_match_literally(self, supabase, author):
        service = QAService(supabase)
        service.create_question(QuestionCreate(title="Is 100% duty cycle safe?", body="Help"), author["id"])
        service.create_question(QuestionCreate(title="100 rpm gearbox", body="Help"), author["id"])
        service.create_question(QuestionCreate(title="arm_pivot tuning", body="Help"), author["id"])
        service.create_question(QuestionCreate(title="armXpivot tuning", body="Help"), author["id"])

        assert [q.title for q in service.list_questions(search="100%")] == ["Is 100% duty cycle safe?"]
        assert [q.title for q in service.list_questions(search="arm_pivot")] == ["arm_pivot tuning"]

    def test_like_escape(self):
        assert like_escape("50%_off\\") == "50\\%\\_off\\\\"

    def test_answer_to_missing_question(self, supabase, author):
        with pytest.raises(HTTPException) as exc:
            QAService(supabase).create_answer("missing", AnswerCreate(body="?"), author["id"])
        assert exc.value.status_code == 404


class TestQARoutes:
    """Test the Q&A endpoints."""

    def test_ask_then_read_publicly(self, api):
        response = api.post("/api/v1/qa/questions", json={"title": "Field setup", "body": "Tiles?"})
        assert response.status_code == 201
        assert response.json()["author_username"] == "captain"

        listed = api.get("/api/v1/qa/questions", params={"q": "field"}).json()
        assert [q["title"] for q in listed] == ["Field setup"]

    def test_empty_question_rejected(self, api):
        response = api.post("/api/v1/qa/questions", json={"title": "   ", "body": "x"})
        assert response.status_code == 422
