from supabase import Client
from neurahub.modules.invitations.schemas import (
    InvitationCreate, InvitationResponse, InvitationStatus
)
from neurahub.modules.members.service import MemberService
from neurahub.modules.users.service import AppUserService
from typing import Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class InvitationService:
    """
    Team invitations addressed to an email.

    An invitation moves from pending to accepted or declined exactly once.
    Accepting it creates the membership (or changes the existing role) with
    the invited role.
    """

    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.members = MemberService(supabase)
        self.users = AppUserService(supabase)

    def _teams_by_id(self, team_ids: List[str]) -> Dict[str, dict]:
        ids = [tid for tid in set(team_ids) if tid]
        if not ids:
            return {}
        result = self.supabase.table("teams")\
            .select("id, name, number")\
            .in_("id", ids)\
            .execute()
        return {row["id"]: row for row in (result.data or [])}

    def _with_teams(self, rows: List[dict]) -> List[InvitationResponse]:
        teams = self._teams_by_id([r.get("team_id") for r in rows])
        invitations = []
        for row in rows:
            team = teams.get(row.get("team_id")) or {}
            invitations.append(InvitationResponse(
                **row,
                team_name=team.get("name") or "",
                team_number=str(team.get("number") or ""),
            ))
        return invitations

    def _get_row(self, invitation_id: str) -> dict:
        result = self.supabase.table("invitations")\
            .select("*")\
            .eq("id", invitation_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Invitation not found")
        return result.data[0]

    def create_invitation(
        self,
        team_id: str,
        invitation_data: InvitationCreate,
        inviter_id: str,
        inviter_name: str
    ) -> InvitationResponse:
        """Invite an email to the team with one of the team's roles"""
        email = str(invitation_data.user_email).lower()
        try:
            roles = self.members.get_team_roles(team_id)
            if invitation_data.role not in roles:
                raise HTTPException(
                    status_code=400,
                    detail=f"Role '{invitation_data.role}' is not one of the team's roles"
                )

            pending = self.supabase.table("invitations")\
                .select("id")\
                .eq("team_id", team_id)\
                .eq("user_email", email)\
                .eq("status", InvitationStatus.PENDING.value)\
                .limit(1)\
                .execute()
            if pending.data:
                raise HTTPException(
                    status_code=400,
                    detail="A pending invitation for this email already exists"
                )

            if any(m.email.lower() == email for m in self.members.list_members(team_id)):
                raise HTTPException(status_code=400, detail="This user is already a team member")

            result = self.supabase.table("invitations").insert({
                "team_id": team_id,
                "inviter_id": inviter_id,
                "inviter_name": inviter_name,
                "user_email": email,
                "user_name": invitation_data.user_name,
                "role": invitation_data.role,
                "status": InvitationStatus.PENDING.value,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create invitation")

            logger.info(f"Invitation for {email} created in team {team_id}")
            return self._with_teams(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_pending_for_email(self, email: str) -> List[InvitationResponse]:
        """Pending invitations addressed to an email, newest first"""
        if not email:
            return []
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("user_email", email.lower())\
                .eq("status", InvitationStatus.PENDING.value)\
                .order("created_at", desc=True)\
                .execute()
            return self._with_teams(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_team_invitations(self, team_id: str) -> List[InvitationResponse]:
        """Pending invitations sent by a team"""
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("team_id", team_id)\
                .eq("status", InvitationStatus.PENDING.value)\
                .order("created_at", desc=True)\
                .execute()
            return self._with_teams(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _check_addressee(self, row: dict, user_data: dict) -> None:
        if row.get("status") != InvitationStatus.PENDING.value:
            raise HTTPException(status_code=400, detail="Invitation is no longer pending")
        if (row.get("user_email") or "").lower() != (user_data.get("email") or "").lower():
            raise HTTPException(status_code=403, detail="This invitation is addressed to another user")

    def accept_invitation(self, invitation_id: str, user_data: dict) -> InvitationResponse:
        """Accept a pending invitation and join its team with the invited role"""
        try:
            row = self._get_row(invitation_id)
            self._check_addressee(row, user_data)

            self.users.ensure_user(
                user_data["id"],
                user_data.get("email") or "",
                row.get("user_name") or (user_data.get("user_metadata") or {}).get("username"),
            )

            # Membership first so a failed join leaves the invitation pending
            self.members.add_or_update_member(row["team_id"], user_data["id"], row["role"])

            result = self.supabase.table("invitations")\
                .update({"status": InvitationStatus.ACCEPTED.value})\
                .eq("id", invitation_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Invitation not found")

            logger.info(f"User {user_data['id']} accepted invitation {invitation_id}")
            return self._with_teams(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def decline_invitation(self, invitation_id: str, user_data: dict) -> InvitationResponse:
        """Decline a pending invitation; membership is left untouched"""
        try:
            row = self._get_row(invitation_id)
            self._check_addressee(row, user_data)

            result = self.supabase.table("invitations")\
                .update({"status": InvitationStatus.DECLINED.value})\
                .eq("id", invitation_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Invitation not found")

            return self._with_teams(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def cancel_invitation(self, team_id: str, invitation_id: str) -> bool:
        """Withdraw a team's invitation"""
        try:
            result = self.supabase.table("invitations")\
                .delete()\
                .eq("id", invitation_id)\
                .eq("team_id", team_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Invitation not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

