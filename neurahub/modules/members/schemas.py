from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class MemberUpdate(BaseModel):
    role: Optional[str] = None
    name: Optional[str] = None
    email: Optional[EmailStr] = None


class MemberResponse(BaseModel):
    id: str
    team_id: str
    user_id: Optional[str] = None
    name: str
    email: str
    role: str
    avatar: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
