from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.ideas.schemas import IdeaCreate, IdeaUpdate, IdeaResponse
from neurahub.modules.ideas.service import IdeaService
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import (
    get_current_user_id, check_team_member, get_access_cache, display_name
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/teams/{team_id}/ideas", tags=["ideas"])


def get_idea_service(supabase: Client = Depends(get_supabase)) -> IdeaService:
    return IdeaService(supabase)


@router.get("", response_model=List[IdeaResponse])
async def list_ideas(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Innovation hub ideas, most voted first"""
    check_team_member(team_id, user_data, supabase, cache)
    return service.list_ideas(team_id)


@router.post("", response_model=IdeaResponse, status_code=201)
async def create_idea(
    team_id: str,
    idea_data: IdeaCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    author = display_name(user_data)
    idea = service.create_idea(team_id, idea_data, author, user_data["id"])
    ActivityService(supabase).record_activity(
        team_id, author, "proposed idea", idea.title, ActivityType.IDEA, user_data["id"]
    )
    return idea


@router.put("/{idea_id}", response_model=IdeaResponse)
async def update_idea(
    team_id: str,
    idea_id: str,
    idea_data: IdeaUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    return service.update_idea(team_id, idea_id, idea_data)


@router.post("/{idea_id}/vote", response_model=IdeaResponse)
async def toggle_vote(
    team_id: str,
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Vote for an idea, or withdraw the vote"""
    check_team_member(team_id, user_data, supabase, cache)
    idea = service.toggle_vote(team_id, idea_id, user_data["id"])
    if user_data["id"] in idea.voted_by:
        ActivityService(supabase).record_activity(
            team_id, display_name(user_data), "voted for", idea.title, ActivityType.IDEA, user_data["id"]
        )
    return idea


@router.delete("/{idea_id}", status_code=204)
async def delete_idea(
    team_id: str,
    idea_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: IdeaService = Depends(get_idea_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    service.delete_idea(team_id, idea_id)
    return None
