from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


AVATAR_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"


def avatar_for(seed: Optional[str]) -> str:
    return AVATAR_URL.format(seed=seed or "user")


class AppUserUpdate(BaseModel):
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None


class AppUserResponse(BaseModel):
    id: str
    username: str
    email: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileResponse(BaseModel):
    id: str
    username: str
    email: str
    avatar: Optional[str] = None
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    role: str = "Guest"
