from supabase import Client
from neurahub.modules.qa.schemas import QuestionCreate, QuestionResponse, AnswerCreate, AnswerResponse
from neurahub.modules.users.service import AppUserService
from typing import Dict, List, Optional
from fastapi import HTTPException


def like_escape(text: str) -> str:
    """Escape LIKE wildcards so user text matches literally"""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class QAService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.users = AppUserService(supabase)

    def _usernames(self, rows: List[dict]) -> Dict[str, str]:
        users = self.users.get_users_by_ids([r.get("author_id") for r in rows])
        return {uid: user.username for uid, user in users.items()}

    def _answer_counts(self, question_ids: List[str]) -> Dict[str, int]:
        if not question_ids:
            return {}
        result = self.supabase.table("answers")\
            .select("question_id")\
            .in_("question_id", question_ids)\
            .execute()
        counts: Dict[str, int] = {}
        for row in result.data or []:
            counts[row["question_id"]] = counts.get(row["question_id"], 0) + 1
        return counts

    def _to_questions(self, rows: List[dict]) -> List[QuestionResponse]:
        names = self._usernames(rows)
        counts = self._answer_counts([r["id"] for r in rows])
        return [
            QuestionResponse(
                **row,
                author_username=names.get(row.get("author_id")),
                answer_count=counts.get(row["id"], 0),
            )
            for row in rows
        ]

    def list_questions(self, search: Optional[str] = None, limit: int = 50, offset: int = 0) -> List[QuestionResponse]:
        """Questions newest first; search matches the title case-insensitively"""
        try:
            query = self.supabase.table("questions").select("*")
            if search and search.strip():
                query = query.ilike("title", f"%{like_escape(search.strip())}%")
            result = query.order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return self._to_questions(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_question(self, question_id: str) -> QuestionResponse:
        try:
            result = self.supabase.table("questions")\
                .select("*")\
                .eq("id", question_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Question not found")
            return self._to_questions(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_question(self, question_data: QuestionCreate, author_id: str) -> QuestionResponse:
        try:
            result = self.supabase.table("questions").insert({
                "title": question_data.title,
                "body": question_data.body,
                "author_id": author_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create question")

            return self._to_questions(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_answers(self, question_id: str) -> List[AnswerResponse]:
        """Answers to a question, oldest first"""
        try:
            result = self.supabase.table("answers")\
                .select("*")\
                .eq("question_id", question_id)\
                .order("created_at", desc=False)\
                .execute()
            rows = result.data or []
            names = self._usernames(rows)
            return [AnswerResponse(**row, author_username=names.get(row.get("author_id"))) for row in rows]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_answer(self, question_id: str, answer_data: AnswerCreate, author_id: str) -> AnswerResponse:
        try:
            self.get_question(question_id)
            result = self.supabase.table("answers").insert({
                "question_id": question_id,
                "body": answer_data.body,
                "author_id": author_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to post answer")

            row = result.data[0]
            return AnswerResponse(**row, author_username=self._usernames([row]).get(author_id))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
