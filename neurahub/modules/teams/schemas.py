from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class TeamCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    number: str = Field(min_length=1)
    city: str = ""
    motto: Optional[str] = None


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None
    motto: Optional[str] = None
    status: Optional[str] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)


class TeamResponse(BaseModel):
    id: str
    name: str
    number: str
    city: Optional[str] = ""
    motto: Optional[str] = ""
    invite_code: Optional[str] = None
    status: str = "active"
    progress: int = 0
    roles: List[str]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class JoinTeamRequest(BaseModel):
    invite_code: str = Field(min_length=1)


class RoleCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)


class RoleRename(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    new_name: str = Field(min_length=1)
