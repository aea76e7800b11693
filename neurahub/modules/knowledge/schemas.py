from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

DEFAULT_FOLDER_COLOR = "text-pink-400"
DEFAULT_FILE_TYPE = "application/octet-stream"


class FolderCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    color: str = DEFAULT_FOLDER_COLOR


class FolderResponse(BaseModel):
    id: str
    team_id: str
    name: str
    color: Optional[str] = DEFAULT_FOLDER_COLOR
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FileCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    type: str = DEFAULT_FILE_TYPE
    size_bytes: Optional[int] = Field(default=None, ge=0)


class FileResponse(BaseModel):
    id: str
    team_id: str
    folder_id: str
    name: str
    type: Optional[str] = DEFAULT_FILE_TYPE
    url: str
    size: Optional[str] = None
    uploaded_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
