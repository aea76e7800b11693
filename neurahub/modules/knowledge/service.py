from supabase import Client
from neurahub.modules.knowledge.schemas import (
    FolderCreate, FolderResponse, FileCreate, FileResponse, DEFAULT_FILE_TYPE
)
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

DEFAULT_FOLDERS = [
    {"name": "Software", "color": "text-blue-400"},
    {"name": "Engineering", "color": "text-pink-500"},
    {"name": "Inspire", "color": "text-amber-400"},
]


def format_size(size_bytes: Optional[int]) -> Optional[str]:
    if size_bytes is None:
        return None
    return f"{size_bytes / 1024 / 1024:.2f} MB"


class KnowledgeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_folders(self, team_id: str) -> List[FolderResponse]:
        """Team folders. A team without folders gets the default software/engineering/inspire set."""
        try:
            result = self.supabase.table("kb_folders")\
                .select("*")\
                .eq("team_id", team_id)\
                .order("created_at", desc=False)\
                .execute()
            rows = result.data or []
            if not rows:
                result = self.supabase.table("kb_folders")\
                    .insert([{"team_id": team_id, **folder} for folder in DEFAULT_FOLDERS])\
                    .execute()
                rows = result.data or []
                logger.info(f"Created default knowledge base folders for team {team_id}")
            return [FolderResponse(**row) for row in rows]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_folder(self, team_id: str, folder_id: str) -> FolderResponse:
        try:
            result = self.supabase.table("kb_folders")\
                .select("*")\
                .eq("id", folder_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Folder not found")
            return FolderResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_folder(self, team_id: str, folder_data: FolderCreate) -> FolderResponse:
        try:
            result = self.supabase.table("kb_folders").insert({
                "team_id": team_id,
                "name": folder_data.name,
                "color": folder_data.color,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create folder")

            return FolderResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_files(self, team_id: str, folder_id: str) -> List[FileResponse]:
        """Files in a folder, newest first"""
        try:
            result = self.supabase.table("kb_files")\
                .select("*")\
                .eq("team_id", team_id)\
                .eq("folder_id", folder_id)\
                .order("created_at", desc=True)\
                .execute()
            return [FileResponse(**row) for row in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def add_file(self, team_id: str, folder_id: str, file_data: FileCreate, user_id: str) -> FileResponse:
        try:
            self.get_folder(team_id, folder_id)
            result = self.supabase.table("kb_files").insert({
                "team_id": team_id,
                "folder_id": folder_id,
                "name": file_data.name,
                "type": file_data.type or DEFAULT_FILE_TYPE,
                "url": file_data.url,
                "size": format_size(file_data.size_bytes),
                "uploaded_by": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add file")

            return FileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove_file(self, team_id: str, file_id: str) -> FileResponse:
        """Delete a file record and return what was removed"""
        try:
            result = self.supabase.table("kb_files")\
                .delete()\
                .eq("id", file_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="File not found")

            return FileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
