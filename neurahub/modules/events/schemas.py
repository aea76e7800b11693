from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import date as Date, datetime

DEFAULT_EVENT_PRIORITY = "medium"


class EventCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    date: Date
    location: str = ""
    priority: str = DEFAULT_EVENT_PRIORITY


class EventUpdate(BaseModel):
    title: Optional[str] = None
    date: Optional[Date] = None
    location: Optional[str] = None
    priority: Optional[str] = None


class EventResponse(BaseModel):
    id: str
    team_id: str
    title: str
    date: str
    location: Optional[str] = ""
    priority: Optional[str] = DEFAULT_EVENT_PRIORITY
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CalendarDay(BaseModel):
    date: str
    day: int
    current_month: bool
    events: List[EventResponse] = []


class MonthGrid(BaseModel):
    year: int
    month: int
    days: List[CalendarDay]
