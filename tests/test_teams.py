"""
Tests for team creation, joining and role management.
"""

import pytest
from fastapi import HTTPException

from neurahub.config.settings import DEFAULT_TEAM_ROLES
from neurahub.modules.members.service import MemberService
from neurahub.modules.teams.schemas import TeamCreate
from neurahub.modules.teams.service import TeamService, generate_invite_code, INVITE_CODE_ALPHABET

from tests.conftest import make_user


class TestTeamService:
    """Test TeamService against in-memory tables."""

    def test_create_team_makes_caller_captain(self, supabase, captain, team):
        """The creator is stored as Captain and gets a shadow user row."""
        members = supabase.rows("members")
        assert len(members) == 1
        assert members[0]["user_id"] == captain["id"]
        assert members[0]["role"] == "Captain"
        assert supabase.rows("users")[0]["username"] == "captain"
        assert team.roles == DEFAULT_TEAM_ROLES
        assert team.status == "active"
        assert team.progress == 0

    def test_invite_code_shape(self):
        code = generate_invite_code()
        assert len(code) == 6
        assert all(ch in INVITE_CODE_ALPHABET for ch in code)

    def test_duplicate_team_number_rejected(self, supabase, team):
        other = make_user("user-2", "other@example.com")
        with pytest.raises(HTTPException) as exc:
            TeamService(supabase).create_team(TeamCreate(name="Copy", number="24697"), other)
        assert exc.value.status_code == 400
        assert exc.value.detail == "Team with number 24697 already exists"

    def test_captain_email_used_once(self, supabase, captain, team):
        with pytest.raises(HTTPException) as exc:
            TeamService(supabase).create_team(TeamCreate(name="Second", number="11111"), captain)
        assert exc.value.status_code == 400
        assert len(supabase.rows("teams")) == 1

    def test_team_removed_when_captain_membership_fails(self, supabase, captain):
        supabase.fail_tables.add("members")
        with pytest.raises(HTTPException):
            TeamService(supabase).create_team(TeamCreate(name="Broken", number="99999"), captain)
        assert supabase.rows("teams") == []

    def test_join_by_invite_code_is_case_insensitive(self, supabase, team, guest):
        """Joining adds a Guest membership."""
        joined = TeamService(supabase).join_by_invite_code(team.invite_code.lower(), guest)
        assert joined.id == team.id
        membership = MemberService(supabase).get_member_for_user(team.id, guest["id"])
        assert membership.role == "Guest"

    def test_join_twice_keeps_role(self, supabase, team, guest):
        service = TeamService(supabase)
        service.join_by_invite_code(team.invite_code, guest)
        MemberService(supabase).add_or_update_member(team.id, guest["id"], "Coder")
        service.join_by_invite_code(team.invite_code, guest)
        membership = MemberService(supabase).get_member_for_user(team.id, guest["id"])
        assert membership.role == "Coder"
        assert len(supabase.rows("members")) == 2

    def test_join_with_unknown_code(self, supabase, team, guest):
        with pytest.raises(HTTPException) as exc:
            TeamService(supabase).join_by_invite_code("NOPE00", guest)
        assert exc.value.status_code == 404
        assert exc.value.detail == "Invalid invite code"

    def test_list_teams_hides_invite_codes(self, supabase, team):
        teams = TeamService(supabase).list_teams()
        assert [t.id for t in teams] == [team.id]
        assert teams[0].invite_code is None

    def test_get_current_team(self, supabase, captain, guest, team):
        service = TeamService(supabase)
        assert service.get_current_team(captain["id"]).id == team.id
        assert service.get_current_team(guest["id"]) is None


class TestTeamRoles:
    """Test adding, renaming and removing team roles."""

    def test_add_role(self, supabase, team):
        roles = TeamService(supabase).add_role(team.id, "Outreach")
        assert roles[-1] == "Outreach"

    def test_add_existing_role(self, supabase, team):
        with pytest.raises(HTTPException) as exc:
            TeamService(supabase).add_role(team.id, "Coder")
        assert exc.value.status_code == 400

    def test_rename_role_moves_members(self, supabase, team, guest):
        MemberService(supabase).add_or_update_member(team.id, guest["id"], "Engineer")
        roles = TeamService(supabase).rename_role(team.id, "Engineer", "Builder")
        assert "Builder" in roles and "Engineer" not in roles
        assert MemberService(supabase).get_member_for_user(team.id, guest["id"]).role == "Builder"

    def test_captain_role_is_permanent(self, supabase, team):
        service = TeamService(supabase)
        with pytest.raises(HTTPException):
            service.rename_role(team.id, "Captain", "Leader")
        with pytest.raises(HTTPException):
            service.remove_role(team.id, "Captain")

    def test_remove_role_in_use(self, supabase, team, guest):
        MemberService(supabase).add_or_update_member(team.id, guest["id"], "Scout")
        with pytest.raises(HTTPException) as exc:
            TeamService(supabase).remove_role(team.id, "Scout")
        assert exc.value.status_code == 400

    def test_remove_unused_role(self, supabase, team):
        roles = TeamService(supabase).remove_role(team.id, "Scout")
        assert "Scout" not in roles


class TestTeamRoutes:
    """Test the /teams endpoints."""

    def test_create_team_records_activity(self, api, supabase):
        response = api.post("/api/v1/teams", json={"name": "Naizagay", "number": "25109", "city": "Astana"})
        assert response.status_code == 201
        activity = supabase.rows("team_activities")[0]
        assert activity["action"] == "created team"
        assert activity["target"] == "Naizagay"
        assert activity["user_name"] == "captain"

    def test_directory_is_public(self, api, team):
        response = api.get("/api/v1/teams")
        assert response.status_code == 200
        assert response.json()[0]["number"] == "24697"

    def test_non_member_cannot_read_team(self, api, team, current_user, guest):
        current_user["user"] = guest
        response = api.get(f"/api/v1/teams/{team.id}")
        assert response.status_code == 403

    def test_only_captain_manages_roles(self, api, supabase, team, current_user, guest):
        TeamService(supabase).join_by_invite_code(team.invite_code, guest)
        current_user["user"] = guest
        response = api.post(f"/api/v1/teams/{team.id}/roles", json={"name": "Outreach"})
        assert response.status_code == 403

    def test_join_route(self, api, team, current_user, guest):
        current_user["user"] = guest
        response = api.post("/api/v1/teams/join", json={"invite_code": team.invite_code})
        assert response.status_code == 200
        assert response.json()["id"] == team.id
