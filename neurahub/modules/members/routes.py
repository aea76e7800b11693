from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.members.schemas import MemberUpdate, MemberResponse
from neurahub.modules.members.service import MemberService
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import (
    get_current_user_id, check_team_member, check_team_captain, get_access_cache, display_name
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/teams/{team_id}/members", tags=["members"])


def get_member_service(supabase: Client = Depends(get_supabase)) -> MemberService:
    return MemberService(supabase)


@router.get("", response_model=List[MemberResponse])
async def list_members(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """List all members of a team (only if user is a member)"""
    check_team_member(team_id, user_data, supabase, cache)
    return service.list_members(team_id)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    team_id: str,
    member_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Get a member of the team (only if user is a member)"""
    check_team_member(team_id, user_data, supabase, cache)
    return service.get_member(team_id, member_id)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    team_id: str,
    member_id: str,
    body: MemberUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Change a member's role or display details (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    member = service.update_member(team_id, member_id, body)
    if body.role:
        ActivityService(supabase).record_activity(
            team_id, display_name(user_data), f"changed role to {member.role} for", member.name,
            ActivityType.MEMBER, user_data["id"]
        )
    return member


@router.delete("/{member_id}", status_code=204)
async def remove_member(
    team_id: str,
    member_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Remove a member from the team (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    member = service.get_member(team_id, member_id)
    service.remove_member(team_id, member_id)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "removed member", member.name, ActivityType.MEMBER, user_data["id"]
    )
    return None
