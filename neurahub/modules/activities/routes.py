from fastapi import APIRouter, Depends, HTTPException
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.activities.schemas import ActivityCreate, ActivityResponse
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import get_current_user_id, check_team_member, get_access_cache, display_name
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/teams/{team_id}/activities", tags=["activities"])


def get_activity_service(supabase: Client = Depends(get_supabase)) -> ActivityService:
    return ActivityService(supabase)


@router.get("", response_model=List[ActivityResponse])
async def list_activities(
    team_id: str,
    limit: Optional[int] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Newest-first team activity feed (members only)"""
    check_team_member(team_id, user_data, supabase, cache)
    return service.list_activities(team_id, limit)


@router.post("", response_model=ActivityResponse, status_code=201)
async def create_activity(
    team_id: str,
    body: ActivityCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Record a client-side action in the team feed (members only)"""
    check_team_member(team_id, user_data, supabase, cache)
    activity = service.record_activity(
        team_id, display_name(user_data), body.action, body.target, body.activity_type, user_data["id"]
    )
    if activity is None:
        raise HTTPException(status_code=500, detail="Failed to record activity")
    return activity
