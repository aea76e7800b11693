from supabase import Client
from neurahub.modules.members.schemas import MemberUpdate, MemberResponse
from neurahub.modules.users.schemas import AppUserResponse, avatar_for
from neurahub.modules.users.service import AppUserService
from neurahub.config import settings
from typing import Dict, List, Optional
from fastapi import HTTPException
from datetime import datetime


def to_member_response(row: dict, user: Optional[AppUserResponse]) -> MemberResponse:
    """Merge a members row with its shadow user into the API shape"""
    username = user.username if user else row.get("name")
    email = user.email if user else row.get("email")
    return MemberResponse(
        id=row["id"],
        team_id=row["team_id"],
        user_id=row.get("user_id"),
        name=username or "User",
        email=email or "",
        role=row.get("role") or "Guest",
        avatar=(user.avatar if user and user.avatar else avatar_for(username or email)),
        created_at=row.get("created_at"),
    )


class MemberService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.users = AppUserService(supabase)

    def _with_users(self, rows: List[dict]) -> List[MemberResponse]:
        users = self.users.get_users_by_ids([r.get("user_id") for r in rows])
        return [to_member_response(r, users.get(r.get("user_id"))) for r in rows]

    def get_team_roles(self, team_id: str) -> List[str]:
        """Role names configured for a team"""
        result = self.supabase.table("teams")\
            .select("roles")\
            .eq("id", team_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Team not found")
        return result.data[0].get("roles") or list(settings.default_team_roles)

    def list_members(self, team_id: str) -> List[MemberResponse]:
        """List all members of a team, oldest first"""
        try:
            result = self.supabase.table("members")\
                .select("*")\
                .eq("team_id", team_id)\
                .order("created_at", desc=False)\
                .execute()
            return self._with_users(result.data or [])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_member(self, team_id: str, member_id: str) -> MemberResponse:
        """Get one member of a team"""
        try:
            result = self.supabase.table("members")\
                .select("*")\
                .eq("id", member_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Member not found")
            return self._with_users(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_member_for_user(self, team_id: str, user_id: str) -> Optional[MemberResponse]:
        """Membership of a user in a team, or None"""
        try:
            result = self.supabase.table("members")\
                .select("*")\
                .eq("team_id", team_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return self._with_users(result.data)[0]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def add_or_update_member(self, team_id: str, user_id: str, role: str) -> MemberResponse:
        """Create the membership, or change its role when the user is already in the team"""
        try:
            existing = self.supabase.table("members")\
                .select("id")\
                .eq("team_id", team_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()

            if existing.data:
                result = self.supabase.table("members")\
                    .update({"role": role, "updated_at": datetime.utcnow().isoformat()})\
                    .eq("id", existing.data[0]["id"])\
                    .execute()
            else:
                result = self.supabase.table("members").insert({
                    "team_id": team_id,
                    "user_id": user_id,
                    "role": role,
                }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save member")

            return self._with_users(result.data)[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_member(self, team_id: str, member_id: str, member_data: MemberUpdate) -> MemberResponse:
        """Update member role (must be one of the team's roles); name/email go to the users row"""
        try:
            current = self.get_member(team_id, member_id)

            if member_data.role and member_data.role != current.role:
                roles = self.get_team_roles(team_id)
                if member_data.role not in roles:
                    raise HTTPException(
                        status_code=400,
                        detail=f"Role '{member_data.role}' is not one of the team's roles"
                    )
                result = self.supabase.table("members")\
                    .update({"role": member_data.role, "updated_at": datetime.utcnow().isoformat()})\
                    .eq("id", member_id)\
                    .execute()
                if not result.data:
                    raise HTTPException(status_code=404, detail="Member not found")

            if (member_data.name or member_data.email) and current.user_id:
                user_update = {}
                if member_data.name:
                    user_update["username"] = member_data.name
                if member_data.email:
                    user_update["email"] = member_data.email
                result = self.supabase.table("users")\
                    .update(user_update)\
                    .eq("id", current.user_id)\
                    .execute()
                if not result.data:
                    # No shadow row yet: create it carrying the new details
                    self.users.ensure_user(
                        current.user_id,
                        member_data.email or current.email,
                        member_data.name,
                    )

            return self.get_member(team_id, member_id)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove_member(self, team_id: str, member_id: str) -> bool:
        """Remove a member from the team. Captains cannot be removed."""
        try:
            member = self.get_member(team_id, member_id)
            if member.role == "Captain":
                raise HTTPException(status_code=400, detail="The team captain cannot be removed")

            result = self.supabase.table("members")\
                .delete()\
                .eq("id", member_id)\
                .eq("team_id", team_id)\
                .execute()

            return len(result.data) > 0
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def count_by_role(self, team_id: str) -> Dict[str, int]:
        """Number of members holding each role"""
        counts: Dict[str, int] = {}
        result = self.supabase.table("members")\
            .select("role")\
            .eq("team_id", team_id)\
            .execute()
        for row in result.data or []:
            counts[row.get("role")] = counts.get(row.get("role"), 0) + 1
        return counts
