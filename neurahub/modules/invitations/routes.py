from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.invitations.schemas import InvitationCreate, InvitationResponse
from neurahub.modules.invitations.service import InvitationService
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import (
    get_current_user_id, check_team_captain, get_access_cache, display_name
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/invitations", tags=["invitations"])
team_router = APIRouter(prefix="/teams/{team_id}/invitations", tags=["invitations"])


def get_invitation_service(supabase: Client = Depends(get_supabase)) -> InvitationService:
    return InvitationService(supabase)


@router.get("", response_model=List[InvitationResponse])
async def list_my_invitations(
    user_data: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service)
):
    """Pending invitations addressed to the current user's email"""
    return service.list_pending_for_email(user_data.get("email") or "")


@router.post("/{invitation_id}/accept", response_model=InvitationResponse)
async def accept_invitation(
    invitation_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase)
):
    """Accept an invitation and join the team with the invited role"""
    invitation = service.accept_invitation(invitation_id, user_data)
    ActivityService(supabase).record_activity(
        invitation.team_id, display_name(user_data), "accepted invitation to", invitation.team_name,
        ActivityType.MEMBER, user_data["id"]
    )
    return invitation


@router.post("/{invitation_id}/decline", response_model=InvitationResponse)
async def decline_invitation(
    invitation_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service)
):
    return service.decline_invitation(invitation_id, user_data)


@team_router.get("", response_model=List[InvitationResponse])
async def list_team_invitations(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Pending invitations sent by the team (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    return service.list_team_invitations(team_id)


@team_router.post("", response_model=InvitationResponse, status_code=201)
async def create_invitation(
    team_id: str,
    invitation_data: InvitationCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Invite someone by email (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    inviter = display_name(user_data)
    invitation = service.create_invitation(team_id, invitation_data, user_data["id"], inviter)
    ActivityService(supabase).record_activity(
        team_id, inviter, "sent invitation to", invitation.user_name or invitation.user_email,
        ActivityType.MEMBER, user_data["id"]
    )
    return invitation


@team_router.delete("/{invitation_id}", status_code=204)
async def cancel_invitation(
    team_id: str,
    invitation_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Withdraw an invitation (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    service.cancel_invitation(team_id, invitation_id)
    return None
