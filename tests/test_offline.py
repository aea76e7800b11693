"""
Tests for the offline bridge: local snapshots, the outbox and flushing.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from tenacity import wait_none

from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.invitations.schemas import InvitationCreate
from neurahub.modules.invitations.service import InvitationService
from neurahub.modules.sync.schemas import SyncResponse, SyncResult
from neurahub.modules.teams.schemas import TeamCreate
from neurahub.modules.teams.service import TeamService
from neurahub.offline import LocalSnapshotStore, Outbox, SupabaseGateway, TeamHubBridge
from neurahub.offline.snapshot import MEMBERS_KEY, OUTBOX_KEY, TASKS_KEY, TEAM_KEY, USER_KEY

from tests.conftest import make_user


@pytest.fixture
def store(tmp_path):
    return LocalSnapshotStore(tmp_path / "snapshots")


@pytest.fixture
def offline_gateway():
    """Gateway whose every call fails as if the network were down."""
    gateway = AsyncMock(spec=SupabaseGateway)
    for name in (
        "get_current_team", "get_team", "list_teams", "list_members", "list_tasks", "list_ideas", "list_events",
        "list_activities", "list_invitations", "push", "record_activity", "accept_invitation",
        "decline_invitation",
    ):
        getattr(gateway, name).side_effect = ConnectionError("offline")
    return gateway


SESSION_USER = {"id": "user-captain", "name": "captain", "email": "captain@example.com"}


class TestLocalSnapshotStore:
    """Test LocalSnapshotStore."""

    def test_write_then_read(self, store):
        store.write(TASKS_KEY, [{"id": "t1", "title": "Arm"}])
        assert store.read(TASKS_KEY) == [{"id": "t1", "title": "Arm"}]

    def test_missing_snapshot_reads_default(self, store):
        assert store.read(TASKS_KEY, []) == []

    def test_corrupt_snapshot_reads_default(self, store):
        (store.directory / f"{TASKS_KEY}.json").write_text("{not json", encoding="utf-8")
        assert store.read(TASKS_KEY, []) == []

    def test_no_temp_files_left(self, store):
        store.write(TEAM_KEY, {"id": "team-1"})
        assert [p.name for p in store.directory.iterdir()] == [f"{TEAM_KEY}.json"]

    def test_invalid_key(self, store):
        with pytest.raises(ValueError):
            store.read("../etc/passwd")

    def test_clear_keeps_outbox(self, store):
        store.write(TEAM_KEY, {"id": "team-1"})
        store.write(OUTBOX_KEY, [])
        store.clear()
        assert store.read(TEAM_KEY) is None
        assert store.read(OUTBOX_KEY) == []


class TestOutbox:
    """Test Outbox coalescing and acknowledgement."""

    def test_latest_change_wins(self, store):
        outbox = Outbox(store)
        outbox.enqueue_upsert("tasks", {"id": "t1", "title": "Draft"})
        outbox.enqueue_upsert("tasks", {"id": "t1", "title": "Final"})
        pending = outbox.pending()
        assert len(pending) == 1
        assert pending[0].payload["title"] == "Final"
        assert pending[0].seq == 2

    def test_delete_supersedes_upsert(self, store):
        outbox = Outbox(store)
        outbox.enqueue_upsert("ideas", {"id": "i1", "title": "Idea"})
        outbox.enqueue_delete("ideas", "i1")
        assert [(op.op, op.record_id) for op in outbox.pending()] == [("delete", "i1")]

    def test_temporary_ids_never_queued(self, store):
        outbox = Outbox(store)
        assert outbox.enqueue_upsert("tasks", {"id": "temp-1", "title": "Local"}) is False
        assert len(outbox) == 0

    def test_survives_restart(self, store):
        Outbox(store).enqueue_upsert("events", {"id": "e1", "title": "Meet"})
        reloaded = Outbox(store)
        assert [op.key for op in reloaded.pending()] == [("events", "e1")]
        reloaded.enqueue_upsert("events", {"id": "e2", "title": "Scrimmage"})
        assert reloaded.pending()[1].seq == 2

    def test_change_during_flush_is_kept(self, store):
        """An acknowledgement only clears the version that was sent."""
        outbox = Outbox(store)
        outbox.enqueue_upsert("tasks", {"id": "t1", "title": "v1"})
        sent = outbox.pending()
        outbox.enqueue_upsert("tasks", {"id": "t1", "title": "v2"})
        outbox.mark_applied(sent)
        assert [op.payload["title"] for op in outbox.pending()] == ["v2"]

    def test_mark_failed_counts_attempts(self, store):
        outbox = Outbox(store)
        outbox.enqueue_upsert("tasks", {"id": "t1", "title": "v1"})
        outbox.mark_failed(outbox.pending(), "timeout")
        op = outbox.pending()[0]
        assert op.attempts == 1
        assert op.last_error == "timeout"


class TestBridgeOffline:
    """Test TeamHubBridge without a reachable server."""

    @pytest.mark.asyncio
    async def test_load_falls_back_to_snapshots(self, store, offline_gateway):
        store.write(TEAM_KEY, {"id": "team-1", "name": "SANA Team"})
        store.write(MEMBERS_KEY, [
            {"id": "m1", "team_id": "team-1", "name": "captain"},
            {"id": "m2", "team_id": "team-2", "name": "elsewhere"},
        ])
        store.write(TASKS_KEY, [{"id": "t1", "title": "Arm"}])

        bridge = TeamHubBridge(store, offline_gateway)
        assert await bridge.load(SESSION_USER) == "local"
        assert bridge.team["name"] == "SANA Team"
        assert [m["id"] for m in bridge.members] == ["m1"]
        assert bridge.tasks == [{"id": "t1", "title": "Arm"}]
        assert bridge.user == SESSION_USER

    @pytest.mark.asyncio
    async def test_load_without_session_uses_stored_user(self, store):
        store.write(USER_KEY, SESSION_USER)
        bridge = TeamHubBridge(store)
        assert await bridge.load() == "local"
        assert bridge.user == SESSION_USER

    @pytest.mark.asyncio
    async def test_save_mirrors_and_queues(self, store):
        bridge = TeamHubBridge(store)
        bridge.team = {"id": "team-1"}
        bridge.save("tasks", {"id": "t1", "title": "Arm", "status": "To Do"})
        bridge.save("tasks", {"id": "t1", "status": "Done"})

        assert bridge.tasks == [{"id": "t1", "title": "Arm", "status": "Done"}]
        assert store.read(TASKS_KEY) == bridge.tasks
        assert bridge.outbox.pending()[0].payload["status"] == "Done"

    @pytest.mark.asyncio
    async def test_members_snapshot_keeps_other_teams(self, store):
        store.write(MEMBERS_KEY, [{"id": "m9", "team_id": "team-2", "role": "Coder"}])
        bridge = TeamHubBridge(store)
        bridge.team = {"id": "team-1"}
        bridge.save("members", {"id": "m1", "role": "Scout"})
        assert {m["id"] for m in store.read(MEMBERS_KEY)} == {"m1", "m9"}
        assert bridge.members[0]["team_id"] == "team-1"

    def test_save_rejects_bad_input(self, store):
        bridge = TeamHubBridge(store)
        with pytest.raises(ValueError):
            bridge.save("tasks", {"title": "No id"})
        with pytest.raises(ValueError):
            bridge.save("robots", {"id": "r1"})

    @pytest.mark.asyncio
    async def test_remove(self, store):
        bridge = TeamHubBridge(store)
        bridge.team = {"id": "team-1"}
        bridge.save("ideas", {"id": "i1", "title": "Idea"})
        assert bridge.remove("ideas", "i1") is True
        assert bridge.remove("ideas", "i1") is False
        assert [op.op for op in bridge.outbox.pending()] == ["delete"]

    @pytest.mark.asyncio
    async def test_activity_feed_is_capped(self, store, offline_gateway):
        bridge = TeamHubBridge(store, offline_gateway)
        bridge.user = SESSION_USER
        bridge.team = {"id": "team-1"}
        for i in range(55):
            await bridge.log_activity("created task", f"Task {i}", ActivityType.TASK)
        assert len(bridge.activities) == 50
        assert bridge.activities[0]["target"] == "Task 54"
        assert bridge.activities[0]["user_name"] == "captain"

    @pytest.mark.asyncio
    async def test_flush_failure_keeps_queue(self, store, offline_gateway):
        bridge = TeamHubBridge(store, offline_gateway, retry_wait=wait_none())
        bridge.team = {"id": "team-1"}
        bridge.save("tasks", {"id": "t1", "title": "Arm"})

        result = await bridge.flush()
        assert result.failed == 1
        assert result.pending == 1
        assert offline_gateway.push.await_count == 3
        assert bridge.outbox.pending()[0].attempts == 1

    @pytest.mark.asyncio
    async def test_flush_marks_rejected_operations(self, store):
        gateway = AsyncMock(spec=SupabaseGateway)
        gateway.push.return_value = SyncResponse(applied=1, failed=1, results=[
            SyncResult(id="t1", collection="tasks", op="upsert", status="applied"),
            SyncResult(id="e1", collection="events", op="upsert", status="failed", error="Captain only"),
        ])
        bridge = TeamHubBridge(store, gateway, retry_wait=wait_none())
        bridge.team = {"id": "team-1"}
        bridge.save("tasks", {"id": "t1", "title": "Arm"})
        bridge.save("events", {"id": "e1", "title": "Meet", "date": "2026-11-01"})

        result = await bridge.flush()
        assert (result.applied, result.failed, result.pending) == (1, 1, 1)
        assert bridge.outbox.pending()[0].last_error == "Captain only"

    @pytest.mark.asyncio
    async def test_flush_in_batches(self, store):
        gateway = AsyncMock(spec=SupabaseGateway)

        async def push(team_id, operations):
            return SyncResponse(applied=len(operations), failed=0, results=[
                SyncResult(id=op.record_id, collection=op.collection, op=op.op, status="applied")
                for op in operations
            ])

        gateway.push.side_effect = push
        bridge = TeamHubBridge(store, gateway, batch_size=2, retry_wait=wait_none())
        bridge.team = {"id": "team-1"}
        for i in range(5):
            bridge.save("tasks", {"id": f"t{i}", "title": f"Task {i}"})

        result = await bridge.flush()
        assert gateway.push.await_count == 3
        assert (result.applied, result.pending) == (5, 0)

    @pytest.mark.asyncio
    async def test_concurrent_flushes_run_one_after_another(self, store):
        gateway = AsyncMock(spec=SupabaseGateway)
        active = []
        overlaps = []

        async def push(team_id, operations):
            overlaps.append(len(active))
            active.append(operations)
            await asyncio.sleep(0.01)
            active.pop()
            return SyncResponse(applied=len(operations), failed=0, results=[
                SyncResult(id=op.record_id, collection=op.collection, op=op.op, status="applied")
                for op in operations
            ])

        gateway.push.side_effect = push
        bridge = TeamHubBridge(store, gateway, retry_wait=wait_none())
        bridge.team = {"id": "team-1"}
        bridge.save("tasks", {"id": "t1", "title": "Arm"})

        first, second = await asyncio.gather(bridge.flush(), bridge.flush())
        assert overlaps == [0]
        assert gateway.push.await_count == 1
        assert (first.applied, second.applied) == (1, 0)
        assert second.pending == 0

    @pytest.mark.asyncio
    async def test_activity_named_from_auth_user(self, store, offline_gateway):
        bridge = TeamHubBridge(store, offline_gateway)
        bridge.user = make_user("user-guest", "guest@example.com")
        bridge.team = {"id": "team-1"}
        activity = await bridge.log_activity("created idea", "Turret", ActivityType.IDEA)
        assert activity["user_name"] == "guest"

    @pytest.mark.asyncio
    async def test_accept_invitation_offline(self, store, offline_gateway):
        bridge = TeamHubBridge(store, offline_gateway)
        bridge.user = dict(SESSION_USER)
        bridge.teams = [{"id": "team-2", "name": "Naizagay"}]
        bridge.invitations = [{"id": "inv-1", "team_id": "team-2", "role": "Coder"}]

        assert await bridge.accept_invitation(bridge.invitations[0]) is True
        assert bridge.team["id"] == "team-2"
        assert bridge.user["role"] == "Coder"
        assert bridge.invitations == []
        assert bridge.members[0]["role"] == "Coder"
        assert bridge.activities[0]["action"] == "accepted invitation to"
        assert store.read(USER_KEY)["team_id"] == "team-2"

    @pytest.mark.asyncio
    async def test_accept_unknown_team_offline(self, store, offline_gateway):
        bridge = TeamHubBridge(store, offline_gateway)
        bridge.user = dict(SESSION_USER)
        assert await bridge.accept_invitation({"id": "inv-1", "team_id": "nowhere", "role": "Coder"}) is False

    @pytest.mark.asyncio
    async def test_decline_always_removes_locally(self, store, offline_gateway):
        bridge = TeamHubBridge(store, offline_gateway)
        bridge.invitations = [{"id": "inv-1"}, {"id": "inv-2"}]
        await bridge.decline_invitation("inv-1")
        assert bridge.invitations == [{"id": "inv-2"}]


class TestBridgeOnline:
    """Test TeamHubBridge against the services on in-memory tables."""

    @pytest.mark.asyncio
    async def test_remote_load_then_flush(self, store, supabase, team, captain):
        bridge = TeamHubBridge(store, SupabaseGateway(supabase, captain), retry_wait=wait_none())
        assert await bridge.load(SESSION_USER) == "remote"
        assert bridge.team["id"] == team.id
        assert bridge.user["role"] == "Captain"
        assert store.read(TEAM_KEY)["id"] == team.id

        bridge.save("tasks", {"id": "task-offline", "title": "Made on the bus"})
        result = await bridge.flush()
        assert result.applied == 1
        assert len(bridge.outbox) == 0
        assert supabase.rows("tasks")[0]["title"] == "Made on the bus"

    @pytest.mark.asyncio
    async def test_remote_activity(self, store, supabase, team, captain):
        bridge = TeamHubBridge(store, SupabaseGateway(supabase, captain))
        await bridge.load(SESSION_USER)
        activity = await bridge.log_activity("created task", "Arm", ActivityType.TASK)
        assert activity["id"] == supabase.rows("team_activities")[0]["id"]

    @pytest.mark.asyncio
    async def test_flush_rejected_for_outsider(self, store, supabase, team, guest):
        bridge = TeamHubBridge(store, SupabaseGateway(supabase, guest), retry_wait=wait_none())
        bridge.team = {"id": team.id}
        bridge.save("tasks", {"id": "task-1", "title": "Not mine"})
        result = await bridge.flush()
        assert result.failed == 1
        assert supabase.rows("tasks") == []

    @pytest.mark.asyncio
    async def test_accept_invitation_moves_to_invited_team(self, store, supabase, team, guest):
        """A user already in one team ends up in the team that invited them."""
        TeamService(supabase).join_by_invite_code(team.invite_code, guest)
        other_captain = make_user("user-other", "other@example.com", "other")
        other = TeamService(supabase).create_team(TeamCreate(name="Naizagay", number="25109"), other_captain)
        InvitationService(supabase).create_invitation(
            other.id,
            InvitationCreate(user_email="guest@example.com", user_name="Guest", role="Engineer"),
            other_captain["id"],
            "other",
        )

        bridge = TeamHubBridge(store, SupabaseGateway(supabase, guest), retry_wait=wait_none())
        assert await bridge.load(guest) == "remote"
        assert bridge.team["id"] == team.id

        assert await bridge.accept_invitation(bridge.invitations[0]) is True
        assert bridge.team["id"] == other.id
        assert bridge.user["team_id"] == other.id
        assert bridge.user["role"] == "Engineer"
        me = next(m for m in bridge.members if m["user_id"] == guest["id"])
        assert me["role"] == "Engineer"
        assert bridge.invitations == []
        assert store.read(TEAM_KEY)["id"] == other.id

        activity = supabase.rows("team_activities")[-1]
        assert activity["team_id"] == other.id
        assert activity["user_name"] == "guest"
