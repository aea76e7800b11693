"""
Applies batches of offline changes pushed by client bridges.

Every operation is keyed by record id, so replaying a batch (after a timeout
or a retried flush) leaves the tables in the same state.
"""

from supabase import Client
from neurahub.modules.sync.schemas import SyncOperation, SyncResult, SyncResponse
from neurahub.modules.tasks.schemas import TaskUpdate, TaskStatus, TEAM_ASSIGNEE, DEFAULT_TASK_DESCRIPTION
from neurahub.modules.tasks.service import default_deadline
from neurahub.modules.ideas.schemas import IdeaUpdate, DEFAULT_IDEA_TAGS
from neurahub.modules.events.schemas import EventUpdate, DEFAULT_EVENT_PRIORITY
from neurahub.modules.members.service import MemberService
from neurahub.core.dependencies import CAPTAIN_ROLE
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

TABLES = {
    "tasks": "tasks",
    "ideas": "ideas",
    "events": "calendar_events",
    "members": "members",
}

CAPTAIN_COLLECTIONS = {"events", "members"}


class SyncError(Exception):
    """An operation that cannot be applied as sent."""


class SyncService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.members = MemberService(supabase)

    def _existing(self, table: str, record_id: str) -> Optional[dict]:
        result = self.supabase.table(table)\
            .select("*")\
            .eq("id", record_id)\
            .limit(1)\
            .execute()
        return result.data[0] if result.data else None

    def _task_fields(self, payload: dict, is_new: bool) -> dict:
        fields = TaskUpdate(**payload).model_dump(exclude_none=True, mode="json")
        if is_new:
            if not fields.get("title"):
                raise SyncError("New tasks need a title")
            fields.setdefault("description", DEFAULT_TASK_DESCRIPTION)
            fields.setdefault("assigned_to", TEAM_ASSIGNEE)
            fields.setdefault("status", TaskStatus.TODO.value)
            fields.setdefault("deadline", default_deadline())
            fields.setdefault("attachments", [])
        return fields

    def _idea_fields(self, payload: dict, is_new: bool) -> dict:
        fields = IdeaUpdate(**payload).model_dump(exclude_none=True)
        if "voted_by" in payload:
            fields["voted_by"] = [str(uid) for uid in payload.get("voted_by") or []]
        if is_new:
            if not fields.get("title"):
                raise SyncError("New ideas need a title")
            fields["author"] = str(payload.get("author") or "Team")
            fields.setdefault("content", "")
            fields.setdefault("voted_by", [])
            fields.setdefault("tags", list(DEFAULT_IDEA_TAGS))
        return fields

    def _event_fields(self, payload: dict, is_new: bool) -> dict:
        fields = EventUpdate(**payload).model_dump(exclude_none=True, mode="json")
        if is_new:
            if not fields.get("title") or not fields.get("date"):
                raise SyncError("New events need a title and a date")
            fields.setdefault("location", "")
            fields.setdefault("priority", DEFAULT_EVENT_PRIORITY)
        return fields

    def _apply_member(self, team_id: str, op: SyncOperation) -> None:
        if op.op == "delete":
            raise SyncError("Members cannot be removed through sync")
        existing = self._existing("members", op.id)
        if not existing or existing.get("team_id") != team_id:
            raise SyncError("Member not found")
        role = op.payload.get("role")
        if not role:
            raise SyncError("Only the member role can be synced")
        if role not in self.members.get_team_roles(team_id):
            raise SyncError(f"Role '{role}' is not one of the team's roles")
        self.supabase.table("members")\
            .update({"role": role})\
            .eq("id", op.id)\
            .eq("team_id", team_id)\
            .execute()

    def apply_operation(self, team_id: str, op: SyncOperation, actor_id: str) -> None:
        """Apply one operation; raises on anything that must be reported as failed"""
        if op.id.startswith("temp-"):
            raise SyncError("Temporary ids are never synced")
        if op.collection == "members":
            self._apply_member(team_id, op)
            return

        table = TABLES[op.collection]
        existing = self._existing(table, op.id)
        if existing and existing.get("team_id") != team_id:
            raise SyncError("Record belongs to another team")

        if op.op == "delete":
            if existing:
                self.supabase.table(table)\
                    .delete()\
                    .eq("id", op.id)\
                    .eq("team_id", team_id)\
                    .execute()
            return

        is_new = existing is None
        if op.collection == "tasks":
            fields = self._task_fields(op.payload, is_new)
        elif op.collection == "ideas":
            fields = self._idea_fields(op.payload, is_new)
        else:
            fields = self._event_fields(op.payload, is_new)
        if is_new and op.collection in ("tasks", "events"):
            fields["created_by"] = actor_id
        if is_new and op.collection == "ideas":
            fields["author_id"] = actor_id

        self.supabase.table(table)\
            .upsert({**fields, "id": op.id, "team_id": team_id}, on_conflict="id")\
            .execute()

    def apply_batch(
        self,
        team_id: str,
        operations: List[SyncOperation],
        actor_id: str,
        actor_role: str
    ) -> SyncResponse:
        """Apply operations in order. A failing operation is reported and does not stop the batch."""
        results = []
        for op in operations:
            try:
                if op.collection in CAPTAIN_COLLECTIONS and actor_role != CAPTAIN_ROLE:
                    raise SyncError("Only the team captain can perform this action")
                self.apply_operation(team_id, op, actor_id)
                results.append(SyncResult(id=op.id, collection=op.collection, op=op.op, status="applied"))
            except Exception as e:
                logger.warning(f"Sync {op.op} {op.collection}/{op.id} failed for team {team_id}: {e}")
                results.append(SyncResult(
                    id=op.id, collection=op.collection, op=op.op, status="failed", error=str(e)
                ))

        applied = sum(1 for r in results if r.status == "applied")
        logger.info(f"Sync batch for team {team_id}: {applied} applied, {len(results) - applied} failed")
        return SyncResponse(applied=applied, failed=len(results) - applied, results=results)
