"""Remote side of the offline bridge, backed by the hub services."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from supabase import Client

from neurahub.core.dependencies import get_membership
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.modules.events.service import EventService
from neurahub.modules.ideas.service import IdeaService
from neurahub.modules.invitations.service import InvitationService
from neurahub.modules.members.service import MemberService
from neurahub.modules.sync.schemas import SyncOperation, SyncResponse
from neurahub.modules.sync.service import SyncService
from neurahub.modules.tasks.service import TaskService
from neurahub.modules.teams.service import TeamService

from .outbox import OutboxOperation

logger = logging.getLogger(__name__)


def _dump(items) -> List[Dict[str, Any]]:
    return [item.model_dump(mode="json") for item in items]


class SupabaseGateway:
    """
    Fetches hub collections and pushes queued changes for one signed-in user.

    The Supabase client is blocking, so every call runs in a worker thread and
    independent fetches can be awaited together.
    """

    def __init__(self, supabase: Client, user_data: dict):
        self.supabase = supabase
        self.user_data = user_data

    async def _run(self, func, *args):
        return await asyncio.to_thread(func, *args)

    async def get_current_team(self) -> Optional[Dict[str, Any]]:
        team = await self._run(TeamService(self.supabase).get_current_team, self.user_data["id"])
        return team.model_dump(mode="json") if team else None

    async def get_team(self, team_id: str) -> Dict[str, Any]:
        team = await self._run(TeamService(self.supabase).get_team, team_id)
        return team.model_dump(mode="json")

    async def list_teams(self) -> List[Dict[str, Any]]:
        return _dump(await self._run(TeamService(self.supabase).list_teams))

    async def list_members(self, team_id: str) -> List[Dict[str, Any]]:
        return _dump(await self._run(MemberService(self.supabase).list_members, team_id))

    async def list_tasks(self, team_id: str) -> List[Dict[str, Any]]:
        return _dump(await self._run(TaskService(self.supabase).list_tasks, team_id))

    async def list_ideas(self, team_id: str) -> List[Dict[str, Any]]:
        return _dump(await self._run(IdeaService(self.supabase).list_ideas, team_id))

    async def list_events(self, team_id: str) -> List[Dict[str, Any]]:
        return _dump(await self._run(EventService(self.supabase).list_events, team_id))

    async def list_activities(self, team_id: str) -> List[Dict[str, Any]]:
        return _dump(await self._run(ActivityService(self.supabase).list_activities, team_id))

    async def list_invitations(self) -> List[Dict[str, Any]]:
        email = self.user_data.get("email") or ""
        return _dump(await self._run(InvitationService(self.supabase).list_pending_for_email, email))

    async def push(self, team_id: str, operations: List[OutboxOperation]) -> SyncResponse:
        """Send queued operations as one sync batch"""
        membership = await self._run(get_membership, team_id, self.user_data["id"], self.supabase)
        if not membership:
            raise PermissionError(f"Not a member of team {team_id}")
        batch = [
            SyncOperation(op=op.op, collection=op.collection, id=op.record_id, payload=op.payload)
            for op in operations
        ]
        return await self._run(
            SyncService(self.supabase).apply_batch,
            team_id, batch, self.user_data["id"], membership.get("role") or ""
        )

    async def record_activity(
        self,
        team_id: str,
        user_name: str,
        action: str,
        target: str,
        activity_type: ActivityType
    ) -> Optional[Dict[str, Any]]:
        activity = await self._run(
            ActivityService(self.supabase).record_activity,
            team_id, user_name, action, target, activity_type, self.user_data["id"]
        )
        return activity.model_dump(mode="json") if activity else None

    async def accept_invitation(self, invitation_id: str) -> Dict[str, Any]:
        invitation = await self._run(
            InvitationService(self.supabase).accept_invitation, invitation_id, self.user_data
        )
        return invitation.model_dump(mode="json")

    async def decline_invitation(self, invitation_id: str) -> Dict[str, Any]:
        invitation = await self._run(
            InvitationService(self.supabase).decline_invitation, invitation_id, self.user_data
        )
        return invitation.model_dump(mode="json")
