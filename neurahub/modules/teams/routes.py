from fastapi import APIRouter, Depends, HTTPException
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.teams.schemas import (
    TeamCreate, TeamUpdate, TeamResponse, JoinTeamRequest, RoleCreate, RoleRename
)
from neurahub.modules.teams.service import TeamService
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import (
    get_current_user_id, check_team_member, check_team_captain, get_access_cache, display_name
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/teams", tags=["teams"])


def get_team_service(supabase: Client = Depends(get_supabase)) -> TeamService:
    return TeamService(supabase)


@router.get("", response_model=List[TeamResponse])
async def list_teams(
    limit: int = 100,
    offset: int = 0,
    service: TeamService = Depends(get_team_service)
):
    """Public team directory"""
    return service.list_teams(limit=limit, offset=offset)


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    team_data: TeamCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase)
):
    """Create a team; the caller becomes its captain"""
    team = service.create_team(team_data, user_data)
    ActivityService(supabase).record_activity(
        team.id, display_name(user_data), "created team", team.name, ActivityType.MEMBER, user_data["id"]
    )
    return team


@router.get("/me", response_model=TeamResponse)
async def get_my_team(
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service)
):
    """Team of the current user"""
    team = service.get_current_team(user_data["id"])
    if not team:
        raise HTTPException(status_code=404, detail="You are not a member of any team")
    return team


@router.post("/join", response_model=TeamResponse)
async def join_team(
    body: JoinTeamRequest,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase)
):
    """Join a team by its invite code"""
    team = service.join_by_invite_code(body.invite_code, user_data)
    ActivityService(supabase).record_activity(
        team.id, display_name(user_data), "joined team", team.name, ActivityType.MEMBER, user_data["id"]
    )
    return team


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Get team by ID (only if user is a member)"""
    check_team_member(team_id, user_data, supabase, cache)
    return service.get_team(team_id)


@router.put("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: str,
    team_data: TeamUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Update team details (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    return service.update_team(team_id, team_data)


@router.get("/{team_id}/roles", response_model=List[str])
async def list_roles(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Role names configured for the team"""
    check_team_member(team_id, user_data, supabase, cache)
    return service.members.get_team_roles(team_id)


@router.post("/{team_id}/roles", response_model=List[str], status_code=201)
async def add_role(
    team_id: str,
    body: RoleCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Add a role (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    roles = service.add_role(team_id, body.name)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "added new role", body.name, ActivityType.MEMBER, user_data["id"]
    )
    return roles


@router.put("/{team_id}/roles/{role}", response_model=List[str])
async def rename_role(
    team_id: str,
    role: str,
    body: RoleRename,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Rename a role (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    roles = service.rename_role(team_id, role, body.new_name)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), f"renamed role {role} to", body.new_name, ActivityType.MEMBER, user_data["id"]
    )
    return roles


@router.delete("/{team_id}/roles/{role}", response_model=List[str])
async def remove_role(
    team_id: str,
    role: str,
    user_data: Dict = Depends(get_current_user_id),
    service: TeamService = Depends(get_team_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Remove an unused role (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    roles = service.remove_role(team_id, role)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "removed role", role, ActivityType.MEMBER, user_data["id"]
    )
    return roles
