"""
Tests for team members and the activity feed.
"""

import pytest
from fastapi import HTTPException

from neurahub.modules.activities.schemas import ActivityType
from neurahub.modules.activities.service import ActivityService
from neurahub.modules.members.schemas import MemberUpdate
from neurahub.modules.members.service import MemberService
from neurahub.modules.teams.service import TeamService


class TestMemberService:
    """Test MemberService."""

    def test_members_carry_user_details(self, supabase, team, guest):
        TeamService(supabase).join_by_invite_code(team.invite_code, guest)
        members = MemberService(supabase).list_members(team.id)
        assert [(m.name, m.role) for m in members] == [("captain", "Captain"), ("guest", "Guest")]
        assert members[1].email == "guest@example.com"
        assert members[1].avatar.endswith("seed=guest")

    def test_role_must_belong_to_team(self, supabase, team, guest):
        member = MemberService(supabase).add_or_update_member(team.id, guest["id"], "Guest")
        with pytest.raises(HTTPException) as exc:
            MemberService(supabase).update_member(team.id, member.id, MemberUpdate(role="Pilot"))
        assert exc.value.status_code == 400

    def test_update_role(self, supabase, team, guest):
        service = MemberService(supabase)
        member = service.add_or_update_member(team.id, guest["id"], "Guest")
        updated = service.update_member(team.id, member.id, MemberUpdate(role="Coder", name="Alex"))
        assert updated.role == "Coder"
        assert updated.name == "Alex"

    def test_details_update_creates_missing_user_row(self, supabase, team, guest):
        """A member added without a users row still gets its new name and email."""
        service = MemberService(supabase)
        member = service.add_or_update_member(team.id, guest["id"], "Guest")
        assert member.name == "User"

        updated = service.update_member(team.id, member.id, MemberUpdate(name="Alex", email="alex@example.com"))
        assert (updated.name, updated.email) == ("Alex", "alex@example.com")
        shadow = [row for row in supabase.rows("users") if row["id"] == guest["id"]]
        assert shadow[0]["username"] == "Alex"

    def test_details_update_keeps_existing_user_row(self, supabase, team, guest):
        TeamService(supabase).join_by_invite_code(team.invite_code, guest)
        service = MemberService(supabase)
        member = service.get_member_for_user(team.id, guest["id"])
        updated = service.update_member(team.id, member.id, MemberUpdate(name="Alex"))
        assert updated.name == "Alex"
        assert updated.email == "guest@example.com"
        assert len(supabase.rows("users")) == 2

    def test_captain_cannot_be_removed(self, supabase, team, captain):
        service = MemberService(supabase)
        me = service.get_member_for_user(team.id, captain["id"])
        with pytest.raises(HTTPException) as exc:
            service.remove_member(team.id, me.id)
        assert exc.value.status_code == 400

    def test_count_by_role(self, supabase, team, guest):
        MemberService(supabase).add_or_update_member(team.id, guest["id"], "Coder")
        assert MemberService(supabase).count_by_role(team.id) == {"Captain": 1, "Coder": 1}


class TestActivityService:
    """Test the team activity feed."""

    def test_feed_is_newest_first_and_capped(self, supabase, team):
        supabase.tables["team_activities"] = [
            {"id": f"a-{i}", "team_id": team.id, "user_name": "bot", "action": "did", "target": str(i),
             "activity_type": "task", "timestamp": i}
            for i in range(60)
        ]
        feed = ActivityService(supabase).list_activities(team.id)
        assert len(feed) == 50
        assert feed[0].target == "59"

    def test_record_failure_is_swallowed(self, supabase, team):
        supabase.fail_tables.add("team_activities")
        assert ActivityService(supabase).record_activity(
            team.id, "captain", "created task", "Arm", ActivityType.TASK
        ) is None

    def test_empty_user_name_becomes_system(self, supabase, team):
        activity = ActivityService(supabase).record_activity(team.id, "", "joined team", "SANA", ActivityType.MEMBER)
        assert activity.user_name == "System"


class TestMemberRoutes:
    """Test the member endpoints."""

    def test_role_change_records_activity(self, api, supabase, team, guest):
        TeamService(supabase).join_by_invite_code(team.invite_code, guest)
        member = MemberService(supabase).get_member_for_user(team.id, guest["id"])
        response = api.put(f"/api/v1/teams/{team.id}/members/{member.id}", json={"role": "Scout"})
        assert response.status_code == 200
        latest = supabase.rows("team_activities")[-1]
        assert latest["action"] == "changed role to Scout for"
        assert latest["target"] == "guest"

    def test_guest_cannot_remove_members(self, api, supabase, team, current_user, guest, captain):
        TeamService(supabase).join_by_invite_code(team.invite_code, guest)
        captain_member = MemberService(supabase).get_member_for_user(team.id, captain["id"])
        current_user["user"] = guest
        response = api.delete(f"/api/v1/teams/{team.id}/members/{captain_member.id}")
        assert response.status_code == 403
