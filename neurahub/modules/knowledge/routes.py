from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.knowledge.schemas import FolderCreate, FolderResponse, FileCreate, FileResponse
from neurahub.modules.knowledge.service import KnowledgeService
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import (
    get_current_user_id, check_team_member, get_access_cache, display_name
)
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/teams/{team_id}/knowledge", tags=["knowledge"])


def get_knowledge_service(supabase: Client = Depends(get_supabase)) -> KnowledgeService:
    return KnowledgeService(supabase)


@router.get("/folders", response_model=List[FolderResponse])
async def list_folders(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: KnowledgeService = Depends(get_knowledge_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    return service.list_folders(team_id)


@router.post("/folders", response_model=FolderResponse, status_code=201)
async def create_folder(
    team_id: str,
    folder_data: FolderCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: KnowledgeService = Depends(get_knowledge_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    folder = service.create_folder(team_id, folder_data)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "created folder", folder.name, ActivityType.FILE, user_data["id"]
    )
    return folder


@router.get("/folders/{folder_id}/files", response_model=List[FileResponse])
async def list_files(
    team_id: str,
    folder_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: KnowledgeService = Depends(get_knowledge_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    return service.list_files(team_id, folder_id)


@router.post("/folders/{folder_id}/files", response_model=FileResponse, status_code=201)
async def add_file(
    team_id: str,
    folder_id: str,
    file_data: FileCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: KnowledgeService = Depends(get_knowledge_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Register a file (by URL) in a folder"""
    check_team_member(team_id, user_data, supabase, cache)
    folder = service.get_folder(team_id, folder_id)
    kb_file = service.add_file(team_id, folder_id, file_data, user_data["id"])
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), f"uploaded to {folder.name}", kb_file.name,
        ActivityType.FILE, user_data["id"]
    )
    return kb_file


@router.delete("/files/{file_id}", status_code=204)
async def remove_file(
    team_id: str,
    file_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: KnowledgeService = Depends(get_knowledge_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    kb_file = service.remove_file(team_id, file_id)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "removed asset", kb_file.name, ActivityType.FILE, user_data["id"]
    )
    return None
