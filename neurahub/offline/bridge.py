"""
Offline-first client state for one team hub.

Every local change is applied in memory, mirrored to a local snapshot and
queued in the outbox. ``flush`` later pushes the queue to the server in
batches. Remote failures are logged and never undo local state.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from neurahub.config import settings
from neurahub.core.dependencies import display_name
from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.users.schemas import avatar_for

from .gateway import SupabaseGateway
from .outbox import Outbox, OutboxOperation
from .snapshot import (
    LocalSnapshotStore, USER_KEY, TEAM_KEY, TEAMS_KEY, MEMBERS_KEY, TASKS_KEY,
    IDEAS_KEY, EVENTS_KEY, ACTIVITIES_KEY, INVITATIONS_KEY,
)

logger = logging.getLogger(__name__)

COLLECTION_KEYS = {
    "tasks": TASKS_KEY,
    "ideas": IDEAS_KEY,
    "events": EVENTS_KEY,
    "members": MEMBERS_KEY,
}

PUSH_ATTEMPTS = 3


class FlushResult(BaseModel):
    applied: int = 0
    failed: int = 0
    pending: int = 0


class TeamHubBridge:
    def __init__(
        self,
        store: LocalSnapshotStore,
        gateway: Optional[SupabaseGateway] = None,
        outbox: Optional[Outbox] = None,
        batch_size: Optional[int] = None,
        retry_wait=None,
    ):
        self.store = store
        self.gateway = gateway
        self.outbox = outbox or Outbox(store)
        self.batch_size = batch_size or settings.sync_batch_size
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=10)
        self._flush_lock = asyncio.Lock()

        self.user: Optional[Dict[str, Any]] = None
        self.team: Optional[Dict[str, Any]] = None
        self.teams: List[Dict[str, Any]] = []
        self.members: List[Dict[str, Any]] = []
        self.tasks: List[Dict[str, Any]] = []
        self.ideas: List[Dict[str, Any]] = []
        self.events: List[Dict[str, Any]] = []
        self.invitations: List[Dict[str, Any]] = []
        self.activities: List[Dict[str, Any]] = []

    @property
    def team_id(self) -> Optional[str]:
        return self.team.get("id") if self.team else None

    def _user_name(self) -> str:
        """Local profiles carry a name; auth-shaped session users only an email and metadata"""
        if not self.user:
            return "System"
        return self.user.get("name") or display_name(self.user)

    # Loading

    async def load(self, session_user: Optional[Dict[str, Any]] = None) -> str:
        """
        Populate state for a session. Returns "remote" when the server answered,
        "local" when state came from snapshots.
        """
        if session_user:
            self.user = dict(session_user)
        if session_user and self.gateway is not None:
            try:
                await self._load_remote()
                self._mirror_all()
                return "remote"
            except Exception as e:
                logger.warning(f"Remote load failed, using local snapshots: {e}")
        self._load_local()
        return "local"

    async def _load_remote(self) -> None:
        team, teams, invitations = await asyncio.gather(
            self.gateway.get_current_team(),
            self.gateway.list_teams(),
            self.gateway.list_invitations(),
        )
        self.team = team
        self.teams = teams
        self.invitations = invitations
        if not team:
            self.members, self.tasks, self.ideas, self.events, self.activities = [], [], [], [], []
            return

        members, tasks, ideas, events, activities = await asyncio.gather(
            self.gateway.list_members(team["id"]),
            self.gateway.list_tasks(team["id"]),
            self.gateway.list_ideas(team["id"]),
            self.gateway.list_events(team["id"]),
            self.gateway.list_activities(team["id"]),
        )
        self.members, self.tasks, self.ideas, self.events = members, tasks, ideas, events
        self.activities = activities[:settings.activity_feed_limit]

        if self.user is not None:
            me = next((m for m in members if m.get("user_id") == self.user.get("id")), None)
            self.user.update({"team_id": team["id"], "role": me.get("role") if me else "Guest"})

    def _load_local(self) -> None:
        stored_user = self.store.read(USER_KEY)
        if self.user is None:
            self.user = stored_user
        self.team = self.store.read(TEAM_KEY)
        self.teams = self.store.read(TEAMS_KEY, []) or []
        all_members = self.store.read(MEMBERS_KEY, []) or []
        self.members = [m for m in all_members if self.team and m.get("team_id") == self.team.get("id")]
        self.tasks = self.store.read(TASKS_KEY, []) or []
        self.ideas = self.store.read(IDEAS_KEY, []) or []
        self.events = self.store.read(EVENTS_KEY, []) or []
        self.invitations = self.store.read(INVITATIONS_KEY, []) or []
        self.activities = (self.store.read(ACTIVITIES_KEY, []) or [])[:settings.activity_feed_limit]

    # Snapshots

    def _mirror_members(self) -> None:
        """Members snapshot spans teams; replace only the current team's slice"""
        others = [
            m for m in (self.store.read(MEMBERS_KEY, []) or [])
            if m.get("team_id") != self.team_id
        ]
        self.store.write(MEMBERS_KEY, others + self.members)

    def _mirror(self, collection: str) -> None:
        if collection == "members":
            self._mirror_members()
        else:
            self.store.write(COLLECTION_KEYS[collection], getattr(self, collection))

    def _mirror_all(self) -> None:
        self.store.write(USER_KEY, self.user)
        self.store.write(TEAM_KEY, self.team)
        self.store.write(TEAMS_KEY, self.teams)
        self.store.write(INVITATIONS_KEY, self.invitations)
        self.store.write(ACTIVITIES_KEY, self.activities)
        for collection in COLLECTION_KEYS:
            self._mirror(collection)

    # Local changes

    def _collection(self, collection: str) -> List[Dict[str, Any]]:
        if collection not in COLLECTION_KEYS:
            raise ValueError(f"Unknown collection: {collection}")
        return getattr(self, collection)

    def save(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert or replace a record by id, mirror it locally and queue it for the server"""
        if not record.get("id"):
            raise ValueError("Records need an id")
        items = self._collection(collection)
        if collection == "members" and self.team_id:
            record = {**record, "team_id": self.team_id}
        for i, item in enumerate(items):
            if item.get("id") == record["id"]:
                items[i] = {**item, **record}
                record = items[i]
                break
        else:
            items.append(record)
        self._mirror(collection)
        self.outbox.enqueue_upsert(collection, record)
        return record

    def remove(self, collection: str, record_id: str) -> bool:
        items = self._collection(collection)
        remaining = [item for item in items if item.get("id") != record_id]
        if len(remaining) == len(items):
            return False
        setattr(self, collection, remaining)
        self._mirror(collection)
        self.outbox.enqueue_delete(collection, record_id)
        return True

    async def log_activity(self, action: str, target: str, activity_type: ActivityType) -> Dict[str, Any]:
        """Prepend to the feed (capped) and record it remotely when possible"""
        user_name = self._user_name()
        activity = {
            "id": f"local-{int(time.time() * 1000)}",
            "team_id": self.team_id,
            "user_id": (self.user or {}).get("id"),
            "user_name": user_name,
            "action": action,
            "target": target,
            "activity_type": ActivityType(activity_type).value,
            "timestamp": int(time.time() * 1000),
        }
        if self.gateway is not None and self.team_id:
            try:
                remote = await self.gateway.record_activity(
                    self.team_id, user_name, action, target, ActivityType(activity_type)
                )
                if remote:
                    activity = remote
            except Exception as e:
                logger.warning(f"Activity kept locally only: {e}")
        self.activities = ([activity] + self.activities)[:settings.activity_feed_limit]
        self.store.write(ACTIVITIES_KEY, self.activities)
        return activity

    # Flushing

    async def _push(self, operations: List[OutboxOperation]):
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(PUSH_ATTEMPTS), wait=self.retry_wait, reraise=True
        ):
            with attempt:
                return await self.gateway.push(self.team_id, operations)

    async def flush(self) -> FlushResult:
        """Push queued operations in batches. Concurrent calls run one after another."""
        async with self._flush_lock:
            result = FlushResult(pending=len(self.outbox))
            if self.gateway is None or not self.team_id or len(self.outbox) == 0:
                return result

            pending = self.outbox.pending()
            for start in range(0, len(pending), self.batch_size):
                batch = pending[start:start + self.batch_size]
                try:
                    response = await self._push(batch)
                except Exception as e:
                    logger.error(f"Sync push failed, {len(batch)} operations stay queued: {e}")
                    self.outbox.mark_failed(batch, str(e))
                    result.failed += len(batch)
                    continue

                by_key = {(r.collection, r.id): r for r in response.results}
                applied, failed = [], []
                for op in batch:
                    outcome = by_key.get(op.key)
                    if outcome is not None and outcome.status == "applied":
                        applied.append(op)
                    else:
                        failed.append((op, outcome.error if outcome else "No result returned"))
                self.outbox.mark_applied(applied)
                for op, error in failed:
                    logger.warning(f"Server rejected {op.op} {op.collection}/{op.record_id}: {error}")
                    self.outbox.mark_failed([op], error or "Rejected")
                result.applied += len(applied)
                result.failed += len(failed)

            result.pending = len(self.outbox)
            return result

    # Invitations

    async def accept_invitation(self, invitation: Dict[str, Any]) -> bool:
        """Join the invitation's team. Falls back to a local-only join when the server is unreachable."""
        if self.user is None:
            return False
        joined_team = next((t for t in self.teams if t.get("id") == invitation.get("team_id")), None)

        if self.gateway is not None:
            try:
                accepted = await self.gateway.accept_invitation(invitation["id"])
                team = await self.gateway.get_team(accepted.get("team_id") or invitation["team_id"])
                if team:
                    self.team = team
                    self.members = await self.gateway.list_members(team["id"])
                    self._finish_join(team, invitation)
                    await self.log_activity("accepted invitation to", team.get("name") or "", ActivityType.MEMBER)
                    return True
            except Exception as e:
                logger.warning(f"Accepting invitation remotely failed, applying locally: {e}")

        if joined_team is None:
            logger.error(f"Team {invitation.get('team_id')} unknown locally, cannot join offline")
            return False

        self.team = joined_team
        self.members = [m for m in self.members if m.get("team_id") == joined_team["id"]]
        self.members = [m for m in self.members if m.get("id") != self.user.get("id")] + [{
            "id": self.user.get("id"),
            "team_id": joined_team["id"],
            "user_id": self.user.get("id"),
            "name": self._user_name(),
            "email": self.user.get("email") or "",
            "role": invitation.get("role"),
            "avatar": self.user.get("avatar") or avatar_for(self._user_name()),
        }]
        self._finish_join(joined_team, invitation)
        await self.log_activity("accepted invitation to", joined_team.get("name") or "", ActivityType.MEMBER)
        return True

    def _finish_join(self, team: Dict[str, Any], invitation: Dict[str, Any]) -> None:
        self.user = {**self.user, "team_id": team["id"], "role": invitation.get("role")}
        self.invitations = [i for i in self.invitations if i.get("id") != invitation.get("id")]
        self.store.write(USER_KEY, self.user)
        self.store.write(TEAM_KEY, self.team)
        self.store.write(INVITATIONS_KEY, self.invitations)
        self._mirror_members()

    async def decline_invitation(self, invitation_id: str) -> None:
        """Decline remotely when possible; the invitation always leaves the local list"""
        if self.gateway is not None:
            try:
                await self.gateway.decline_invitation(invitation_id)
            except Exception as e:
                logger.warning(f"Declining invitation remotely failed: {e}")
        self.invitations = [i for i in self.invitations if i.get("id") != invitation_id]
        self.store.write(INVITATIONS_KEY, self.invitations)
