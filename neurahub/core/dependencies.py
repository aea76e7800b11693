"""
Core dependencies for route protection and team membership checks
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()

CAPTAIN_ROLE = "Captain"


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for membership lookups keyed by team_id."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_access_cache(request: Request) -> Dict[str, Any]:
    """Dependency that returns the request-scoped access cache."""
    return _get_request_cache(request)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_membership(
    team_id: str,
    user_id: str,
    supabase: Client,
    cache: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """Return the members row for (team, user) or None. Uses request-scoped cache when provided."""
    cache_key = f"membership:{team_id}"
    if cache is not None and cache_key in cache:
        return cache[cache_key]
    try:
        result = supabase.table("members")\
            .select("id, team_id, user_id, role")\
            .eq("team_id", team_id)\
            .eq("user_id", user_id)\
            .limit(1)\
            .execute()
        membership = result.data[0] if result.data else None
    except Exception as e:
        logger.error(f"Error getting membership for team {team_id}: {e}")
        membership = None
    if cache is not None:
        cache[cache_key] = membership
    return membership


def check_team_member(
    team_id: str,
    user_data: dict,
    supabase: Client,
    cache: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Check that the user belongs to the team; returns the membership row"""
    membership = get_membership(team_id, user_data["id"], supabase, cache)
    if not membership:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You must be a member of this team"
        )
    return membership


def check_team_captain(
    team_id: str,
    user_data: dict,
    supabase: Client,
    cache: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Check that the user is the team's captain; returns the membership row"""
    membership = check_team_member(team_id, user_data, supabase, cache)
    if membership.get("role") != CAPTAIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the team captain can perform this action"
        )
    return membership


def display_name(user_data: dict) -> str:
    """Name shown in the activity feed for an authenticated user"""
    metadata = user_data.get("user_metadata") or {}
    email = user_data.get("email") or ""
    return metadata.get("username") or (email.split("@")[0] if email else "System")
