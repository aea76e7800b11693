from supabase import Client
from neurahub.modules.ideas.schemas import IdeaCreate, IdeaUpdate, IdeaResponse, DEFAULT_IDEA_TAGS
from typing import List
from fastapi import HTTPException


def _to_idea(row: dict) -> IdeaResponse:
    data = dict(row)
    data["voted_by"] = data.get("voted_by") or []
    data["tags"] = data.get("tags") or []
    data["author"] = data.get("author") or ""
    return IdeaResponse(**data)


class IdeaService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_ideas(self, team_id: str) -> List[IdeaResponse]:
        """Team ideas, most voted first; ties keep newest first"""
        try:
            result = self.supabase.table("ideas")\
                .select("*")\
                .eq("team_id", team_id)\
                .order("created_at", desc=True)\
                .execute()
            ideas = [_to_idea(row) for row in (result.data or [])]
            return sorted(ideas, key=lambda idea: idea.votes, reverse=True)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_idea(self, team_id: str, idea_id: str) -> IdeaResponse:
        try:
            result = self.supabase.table("ideas")\
                .select("*")\
                .eq("id", idea_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")
            return _to_idea(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_idea(self, team_id: str, idea_data: IdeaCreate, author: str, author_id: str) -> IdeaResponse:
        try:
            result = self.supabase.table("ideas").insert({
                "team_id": team_id,
                "author": author or "Team",
                "author_id": author_id,
                "title": idea_data.title,
                "content": idea_data.content,
                "voted_by": [],
                "tags": idea_data.tags or list(DEFAULT_IDEA_TAGS),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create idea")

            return _to_idea(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_idea(self, team_id: str, idea_id: str, idea_data: IdeaUpdate) -> IdeaResponse:
        try:
            update_data = idea_data.model_dump(exclude_none=True)
            if not update_data:
                return self.get_idea(team_id, idea_id)

            result = self.supabase.table("ideas")\
                .update(update_data)\
                .eq("id", idea_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            return _to_idea(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def toggle_vote(self, team_id: str, idea_id: str, user_id: str) -> IdeaResponse:
        """Add the user's vote, or take it back if already given"""
        try:
            idea = self.get_idea(team_id, idea_id)
            if user_id in idea.voted_by:
                voted_by = [uid for uid in idea.voted_by if uid != user_id]
            else:
                voted_by = idea.voted_by + [user_id]

            result = self.supabase.table("ideas")\
                .update({"voted_by": voted_by})\
                .eq("id", idea_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            return _to_idea(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_idea(self, team_id: str, idea_id: str) -> bool:
        try:
            result = self.supabase.table("ideas")\
                .delete()\
                .eq("id", idea_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Idea not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
