from supabase import Client
from neurahub.config import settings
from neurahub.modules.activities.schemas import ActivityResponse, ActivityType
from typing import List, Optional
from fastapi import HTTPException
import logging
import time

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class ActivityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_activities(self, team_id: str, limit: Optional[int] = None) -> List[ActivityResponse]:
        """Newest-first activity feed, capped at the configured feed limit"""
        cap = settings.activity_feed_limit
        limit = min(limit or cap, cap)
        try:
            result = self.supabase.table("team_activities")\
                .select("*")\
                .eq("team_id", team_id)\
                .order("timestamp", desc=True)\
                .limit(limit)\
                .execute()
            return [ActivityResponse(**row) for row in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def record_activity(
        self,
        team_id: str,
        user_name: str,
        action: str,
        target: str,
        activity_type: ActivityType,
        user_id: Optional[str] = None,
    ) -> Optional[ActivityResponse]:
        """Append to the feed. Failures are logged and never raised to the caller."""
        try:
            result = self.supabase.table("team_activities").insert({
                "team_id": team_id,
                "user_id": user_id,
                "user_name": user_name or "System",
                "action": action,
                "target": target,
                "activity_type": ActivityType(activity_type).value,
                "timestamp": now_ms(),
            }).execute()
            if not result.data:
                logger.warning(f"Activity insert returned no row for team {team_id}")
                return None
            return ActivityResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error recording activity '{action}' for team {team_id}: {e}")
            return None
