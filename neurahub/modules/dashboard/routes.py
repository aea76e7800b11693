from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.dashboard.schemas import DashboardSummary
from neurahub.modules.dashboard.service import DashboardService
from neurahub.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    user_data: Dict = Depends(get_current_user_id),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Tasks, invitations and recent activity for the current user"""
    return service.get_summary(user_data)
