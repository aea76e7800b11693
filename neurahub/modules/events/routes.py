from fastapi import APIRouter, Depends
from neurahub.database.supabase_client import get_supabase
from neurahub.modules.events.schemas import EventCreate, EventUpdate, EventResponse, MonthGrid
from neurahub.modules.events.service import EventService
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.core.dependencies import (
    get_current_user_id, check_team_member, check_team_captain, get_access_cache, display_name
)
from supabase import Client
from typing import List, Dict, Optional
from datetime import date

router = APIRouter(prefix="/teams/{team_id}/events", tags=["events"])


def get_event_service(supabase: Client = Depends(get_supabase)) -> EventService:
    return EventService(supabase)


@router.get("", response_model=List[EventResponse])
async def list_events(
    team_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    check_team_member(team_id, user_data, supabase, cache)
    return service.list_events(team_id)


@router.get("/calendar", response_model=MonthGrid)
async def get_month_grid(
    team_id: str,
    year: Optional[int] = None,
    month: Optional[int] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Six-week calendar page for a month (defaults to the current month)"""
    check_team_member(team_id, user_data, supabase, cache)
    today = date.today()
    return service.month_grid(
        team_id,
        today.year if year is None else year,
        today.month if month is None else month,
    )


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    team_id: str,
    event_data: EventCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Schedule an event (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    event = service.create_event(team_id, event_data, user_data["id"])
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "scheduled event", event.title, ActivityType.EVENT, user_data["id"]
    )
    return event


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    team_id: str,
    event_id: str,
    event_data: EventUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Update an event (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    event = service.update_event(team_id, event_id, event_data)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "updated event", event.title, ActivityType.EVENT, user_data["id"]
    )
    return event


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    team_id: str,
    event_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
    supabase: Client = Depends(get_supabase),
    cache: Dict = Depends(get_access_cache)
):
    """Cancel an event (captain only)"""
    check_team_captain(team_id, user_data, supabase, cache)
    event = service.get_event(team_id, event_id)
    service.delete_event(team_id, event_id)
    ActivityService(supabase).record_activity(
        team_id, display_name(user_data), "cancelled event", event.title, ActivityType.EVENT, user_data["id"]
    )
    return None
