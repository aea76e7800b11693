from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

DEFAULT_IDEA_TAGS = ["Innovation"]


class IdeaCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    content: str = ""
    tags: Optional[List[str]] = None


class IdeaUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None


class IdeaResponse(BaseModel):
    id: str
    team_id: str
    author: str = ""
    author_id: Optional[str] = None
    title: str
    content: Optional[str] = ""
    voted_by: List[str] = []
    tags: List[str] = []
    created_at: Optional[datetime] = None

    @property
    def votes(self) -> int:
        return len(self.voted_by)

    class Config:
        from_attributes = True
