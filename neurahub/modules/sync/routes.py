from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.sync.schemas import SyncBatch, SyncResponse
from neurahub.modules.sync.service import SyncService
from neurahub.core.dependencies import get_current_user_id, check_team_member, get_access_cache
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/teams/{team_id}/sync", tags=["sync"])


def get_sync_service(supabase: Client = Depends(get_supabase)) -> SyncService:
    return SyncService(supabase)


@router.post("", response_model=SyncResponse)
async def push_changes(
    team_id: str,
    batch: SyncBatch,
    user_data: Dict = Depends(get_current_user_id),
    service: SyncService = Depends(get_sync_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Apply a batch of offline changes; each operation reports applied or failed"""
    membership = check_team_member(team_id, user_data, supabase, cache)
    return service.apply_batch(team_id, batch.operations, user_data["id"], membership.get("role") or "")
