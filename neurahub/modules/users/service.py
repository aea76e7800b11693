from supabase import Client
from neurahub.modules.users.schemas import AppUserUpdate, AppUserResponse, ProfileResponse, avatar_for
from typing import Dict, List, Optional
from fastapi import HTTPException
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class AppUserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user(self, user_id: str) -> Optional[AppUserResponse]:
        """Get the shadow user row, or None when it does not exist yet"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
            if not result.data:
                return None
            return AppUserResponse(**result.data[0])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_users_by_ids(self, user_ids: List[str]) -> Dict[str, AppUserResponse]:
        """Map user_id -> shadow user for a batch of ids"""
        ids = [uid for uid in set(user_ids) if uid]
        if not ids:
            return {}
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .in_("id", ids)\
                .execute()
            return {row["id"]: AppUserResponse(**row) for row in (result.data or [])}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def ensure_user(self, user_id: str, email: str, username: Optional[str] = None) -> AppUserResponse:
        """Get or create the shadow user for an authenticated identity"""
        existing = self.get_user(user_id)
        if existing:
            return existing
        username = username or (email.split("@")[0] if email else "User")
        try:
            result = self.supabase.table("users").insert({
                "id": user_id,
                "username": username,
                "email": email,
                "avatar": avatar_for(username or email),
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create user record")

            logger.info(f"Created shadow user for {email}")
            return AppUserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_user(self, user_id: str, user_data: AppUserUpdate) -> AppUserResponse:
        """Update shadow user profile"""
        try:
            update_data = {"updated_at": datetime.utcnow().isoformat()}
            if user_data.username:
                update_data["username"] = user_data.username
            if user_data.email:
                update_data["email"] = user_data.email
            if user_data.avatar is not None:
                update_data["avatar"] = user_data.avatar

            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return AppUserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_profile(self, user_data: dict) -> ProfileResponse:
        """Shadow user joined with current team membership (role Guest without a team)"""
        user = self.ensure_user(
            user_data["id"],
            user_data.get("email") or "",
            (user_data.get("user_metadata") or {}).get("username"),
        )
        profile = ProfileResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            avatar=user.avatar or avatar_for(user.username),
        )
        try:
            member_result = self.supabase.table("members")\
                .select("team_id, role")\
                .eq("user_id", user.id)\
                .limit(1)\
                .execute()
            if not member_result.data:
                return profile

            membership = member_result.data[0]
            profile.team_id = membership["team_id"]
            profile.role = membership.get("role") or "Guest"

            team_result = self.supabase.table("teams")\
                .select("name")\
                .eq("id", membership["team_id"])\
                .limit(1)\
                .execute()
            if team_result.data:
                profile.team_name = team_result.data[0].get("name")
            return profile
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
