from supabase import Client
from neurahub.modules.events.schemas import (
    EventCreate, EventUpdate, EventResponse, CalendarDay, MonthGrid
)
from typing import List
from fastapi import HTTPException
from datetime import date, timedelta

GRID_CELLS = 42
# Six-week pages for December 9999 run past date.max
MIN_YEAR, MAX_YEAR = 1, 9998


def month_grid_dates(year: int, month: int) -> List[date]:
    """42 consecutive days covering the month, starting on the Monday on or before the 1st"""
    first = date(year, month, 1)
    start = first - timedelta(days=first.weekday())
    return [start + timedelta(days=i) for i in range(GRID_CELLS)]


class EventService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_events(self, team_id: str) -> List[EventResponse]:
        """Team calendar events, soonest first"""
        try:
            result = self.supabase.table("calendar_events")\
                .select("*")\
                .eq("team_id", team_id)\
                .order("date", desc=False)\
                .execute()
            return [EventResponse(**row) for row in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_event(self, team_id: str, event_id: str) -> EventResponse:
        try:
            result = self.supabase.table("calendar_events")\
                .select("*")\
                .eq("id", event_id)\
                .eq("team_id", team_id)\
                .limit(1)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Event not found")
            return EventResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_event(self, team_id: str, event_data: EventCreate, user_id: str) -> EventResponse:
        try:
            result = self.supabase.table("calendar_events").insert({
                "team_id": team_id,
                "title": event_data.title,
                "date": event_data.date.isoformat(),
                "location": event_data.location,
                "priority": event_data.priority,
                "created_by": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create event")

            return EventResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_event(self, team_id: str, event_id: str, event_data: EventUpdate) -> EventResponse:
        try:
            update_data = event_data.model_dump(exclude_none=True, mode="json")
            if not update_data:
                return self.get_event(team_id, event_id)

            result = self.supabase.table("calendar_events")\
                .update(update_data)\
                .eq("id", event_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Event not found")

            return EventResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_event(self, team_id: str, event_id: str) -> bool:
        try:
            result = self.supabase.table("calendar_events")\
                .delete()\
                .eq("id", event_id)\
                .eq("team_id", team_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Event not found")

            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def month_grid(self, team_id: str, year: int, month: int) -> MonthGrid:
        """Calendar page for a month, each day carrying that day's events"""
        if not 1 <= month <= 12:
            raise HTTPException(status_code=400, detail="Month must be between 1 and 12")
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise HTTPException(status_code=400, detail=f"Year must be between {MIN_YEAR} and {MAX_YEAR}")

        by_date = {}
        for event in self.list_events(team_id):
            by_date.setdefault(event.date[:10], []).append(event)

        days = []
        for day in month_grid_dates(year, month):
            key = day.isoformat()
            days.append(CalendarDay(
                date=key,
                day=day.day,
                current_month=day.month == month,
                events=by_date.get(key, []),
            ))
        return MonthGrid(year=year, month=month, days=days)
