from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.qa.schemas import QuestionCreate, QuestionResponse, AnswerCreate, AnswerResponse
from neurahub.modules.qa.service import QAService
from neurahub.modules.users.service import AppUserService
from neurahub.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/qa", tags=["qa"])


def get_qa_service(supabase: Client = Depends(get_supabase)) -> QAService:
    return QAService(supabase)


def _ensure_author(user_data: Dict, supabase: Client) -> None:
    AppUserService(supabase).ensure_user(
        user_data["id"],
        user_data.get("email") or "",
        (user_data.get("user_metadata") or {}).get("username"),
    )


@router.get("/questions", response_model=List[QuestionResponse])
async def list_questions(
    q: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
    service: QAService = Depends(get_qa_service)
):
    """Public question list, newest first"""
    return service.list_questions(search=q, limit=limit, offset=offset)


@router.get("/questions/{question_id}", response_model=QuestionResponse)
async def get_question(
    question_id: str,
    service: QAService = Depends(get_qa_service)
):
    return service.get_question(question_id)


@router.post("/questions", response_model=QuestionResponse, status_code=201)
async def create_question(
    question_data: QuestionCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: QAService = Depends(get_qa_service),
    supabase: Client = Depends(get_supabase)
):
    """Ask a question (signed-in users)"""
    _ensure_author(user_data, supabase)
    return service.create_question(question_data, user_data["id"])


@router.get("/questions/{question_id}/answers", response_model=List[AnswerResponse])
async def list_answers(
    question_id: str,
    service: QAService = Depends(get_qa_service)
):
    return service.list_answers(question_id)


@router.post("/questions/{question_id}/answers", response_model=AnswerResponse, status_code=201)
async def create_answer(
    question_id: str,
    answer_data: AnswerCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: QAService = Depends(get_qa_service),
    supabase: Client = Depends(get_supabase)
):
    """Answer a question (signed-in users)"""
    _ensure_author(user_data, supabase)
    return service.create_answer(question_id, answer_data, user_data["id"])
