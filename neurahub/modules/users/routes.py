from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.users.schemas import AppUserUpdate, AppUserResponse, ProfileResponse
from neurahub.modules.users.service import AppUserService
from neurahub.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> AppUserService:
    return AppUserService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: AppUserService = Depends(get_user_service)
):
    """Profile of the current user with team membership"""
    return service.get_profile(user_data)


@router.put("/me", response_model=AppUserResponse)
async def update_my_profile(
    body: AppUserUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: AppUserService = Depends(get_user_service)
):
    """Update display name, email or avatar of the current user"""
    service.ensure_user(user_data["id"], user_data.get("email") or "")
    return service.update_user(user_data["id"], body)
