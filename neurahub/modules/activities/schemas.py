from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class ActivityType(str, Enum):
    TASK = "task"
    IDEA = "idea"
    MEMBER = "member"
    FILE = "file"
    EVENT = "event"


class ActivityCreate(BaseModel):
    action: str = Field(min_length=1)
    target: str = ""
    activity_type: ActivityType


class ActivityResponse(BaseModel):
    id: str
    team_id: Optional[str] = None
    user_id: Optional[str] = None
    user_name: str
    action: str
    target: str
    activity_type: ActivityType
    timestamp: int

    class Config:
        from_attributes = True
