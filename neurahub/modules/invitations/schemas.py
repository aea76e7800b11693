from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class InvitationCreate(BaseModel):
    user_email: EmailStr
    user_name: str = Field(min_length=1)
    role: str = Field(min_length=1)


class InvitationResponse(BaseModel):
    id: str
    team_id: str
    team_name: str = ""
    team_number: str = ""
    inviter_id: Optional[str] = None
    inviter_name: Optional[str] = ""
    user_email: str
    user_name: Optional[str] = ""
    role: str
    status: InvitationStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
