from supabase import Client
from neurahub.modules.teams.schemas import TeamCreate, TeamUpdate, TeamResponse
from neurahub.modules.members.service import MemberService
from neurahub.modules.users.service import AppUserService
from neurahub.core.dependencies import CAPTAIN_ROLE
from neurahub.config import settings
from typing import List, Optional
from fastapi import HTTPException
import logging
import secrets
import string

logger = logging.getLogger(__name__)

INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_LENGTH = 6
GUEST_ROLE = "Guest"


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def _to_team(row: dict, include_code: bool = True) -> TeamResponse:
    data = dict(row)
    data["roles"] = data.get("roles") or list(settings.default_team_roles)
    data["number"] = str(data.get("number", ""))
    if not include_code:
        data["invite_code"] = None
    return TeamResponse(**data)


class TeamService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.members = MemberService(supabase)
        self.users = AppUserService(supabase)

    def create_team(self, team_data: TeamCreate, user_data: dict) -> TeamResponse:
        """
        Create a team with the current user as its captain.

        Team numbers and captain emails are unique across teams. If the captain
        membership cannot be stored the team row is removed again.
        """
        email = user_data.get("email") or ""
        try:
            existing = self.supabase.table("teams")\
                .select("id")\
                .eq("number", team_data.number)\
                .limit(1)\
                .execute()
            if existing.data:
                raise HTTPException(
                    status_code=400,
                    detail=f"Team with number {team_data.number} already exists"
                )

            if email:
                existing = self.supabase.table("teams")\
                    .select("id")\
                    .eq("captain_email", email)\
                    .limit(1)\
                    .execute()
                if existing.data:
                    raise HTTPException(
                        status_code=400,
                        detail="This email is already used as captain of another team"
                    )

            result = self.supabase.table("teams").insert({
                "name": team_data.name,
                "number": team_data.number,
                "city": team_data.city,
                "motto": team_data.motto or "",
                "invite_code": generate_invite_code(),
                "captain_email": email,
                "status": "active",
                "progress": 0,
                "roles": list(settings.default_team_roles),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create team")

            team = result.data[0]
            self.users.ensure_user(
                user_data["id"], email, (user_data.get("user_metadata") or {}).get("username")
            )

            try:
                self.members.add_or_update_member(team["id"], user_data["id"], CAPTAIN_ROLE)
            except Exception:
                logger.error(f"Captain membership failed for team {team['id']}, removing team")
                self.supabase.table("teams").delete().eq("id", team["id"]).execute()
                raise

            logger.info(f"Team {team_data.number} created by {email}")
            return _to_team(team)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_team(self, team_id: str) -> TeamResponse:
        """Get team by ID"""
        try:
            result = self.supabase.table("teams")\
                .select("*")\
                .eq("id", team_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Team not found")

            return _to_team(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_current_team(self, user_id: str) -> Optional[TeamResponse]:
        """Team the user currently belongs to, or None"""
        try:
            result = self.supabase.table("members")\
                .select("team_id")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return self.get_team(result.data[0]["team_id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_teams(self, limit: int = 100, offset: int = 0) -> List[TeamResponse]:
        """Public team directory, newest first. Invite codes are not exposed."""
        try:
            result = self.supabase.table("teams")\
                .select("*")\
                .order("created_at", desc=True)\
                .limit(limit)\
                .offset(offset)\
                .execute()
            return [_to_team(row, include_code=False) for row in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_team(self, team_id: str, team_data: TeamUpdate) -> TeamResponse:
        """Update team details"""
        try:
            update_data = team_data.model_dump(exclude_none=True)
            if not update_data:
                return self.get_team(team_id)

            result = self.supabase.table("teams")\
                .update(update_data)\
                .eq("id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Team not found")

            return _to_team(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def join_by_invite_code(self, invite_code: str, user_data: dict) -> TeamResponse:
        """Join a team as Guest. Codes match case-insensitively; joining twice keeps the current role."""
        code = invite_code.strip().upper()
        try:
            result = self.supabase.table("teams")\
                .select("*")\
                .eq("invite_code", code)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Invalid invite code")

            team = result.data[0]
            self.users.ensure_user(
                user_data["id"],
                user_data.get("email") or "",
                (user_data.get("user_metadata") or {}).get("username"),
            )
            if not self.members.get_member_for_user(team["id"], user_data["id"]):
                self.members.add_or_update_member(team["id"], user_data["id"], GUEST_ROLE)
                logger.info(f"User {user_data['id']} joined team {team['id']}")

            return _to_team(team)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _save_roles(self, team_id: str, roles: List[str]) -> List[str]:
        result = self.supabase.table("teams")\
            .update({"roles": roles})\
            .eq("id", team_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Team not found")
        return result.data[0].get("roles") or roles

    def add_role(self, team_id: str, role: str) -> List[str]:
        try:
            roles = self.members.get_team_roles(team_id)
            if role in roles:
                raise HTTPException(status_code=400, detail=f"Role '{role}' already exists")
            return self._save_roles(team_id, roles + [role])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def rename_role(self, team_id: str, role: str, new_name: str) -> List[str]:
        """Rename a role and move every member holding it to the new name"""
        try:
            if role == CAPTAIN_ROLE:
                raise HTTPException(status_code=400, detail="The Captain role cannot be renamed")
            roles = self.members.get_team_roles(team_id)
            if role not in roles:
                raise HTTPException(status_code=404, detail=f"Role '{role}' not found")
            if new_name in roles:
                raise HTTPException(status_code=400, detail=f"Role '{new_name}' already exists")

            saved = self._save_roles(team_id, [new_name if r == role else r for r in roles])
            self.supabase.table("members")\
                .update({"role": new_name})\
                .eq("team_id", team_id)\
                .eq("role", role)\
                .execute()
            return saved
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove_role(self, team_id: str, role: str) -> List[str]:
        """Remove a role that nobody holds. Captain is permanent."""
        try:
            if role == CAPTAIN_ROLE:
                raise HTTPException(status_code=400, detail="The Captain role cannot be removed")
            roles = self.members.get_team_roles(team_id)
            if role not in roles:
                raise HTTPException(status_code=404, detail=f"Role '{role}' not found")
            if self.members.count_by_role(team_id).get(role):
                raise HTTPException(
                    status_code=400,
                    detail=f"Role '{role}' is still assigned to team members"
                )
            return self._save_roles(team_id, [r for r in roles if r != role])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

