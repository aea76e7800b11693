"""
Tests for team ideas and voting.
"""

import pytest
from fastapi import HTTPException

from neurahub.modules.ideas.schemas import IdeaCreate, IdeaUpdate
from neurahub.modules.ideas.service import IdeaService


class TestIdeaService:
    """Test IdeaService."""

    def test_create_idea_defaults(self, supabase, team, captain):
        idea = IdeaService(supabase).create_idea(
            team.id, IdeaCreate(title="Swerve drive"), "captain", captain["id"]
        )
        assert idea.tags == ["Innovation"]
        assert idea.voted_by == []
        assert idea.votes == 0
        assert idea.author == "captain"

    def test_toggle_vote(self, supabase, team, captain):
        """The first toggle adds the vote, the second takes it back."""
        service = IdeaService(supabase)
        idea = service.create_idea(team.id, IdeaCreate(title="Outreach camp"), "captain", captain["id"])

        voted = service.toggle_vote(team.id, idea.id, "user-a")
        assert voted.voted_by == ["user-a"]
        again = service.toggle_vote(team.id, idea.id, "user-a")
        assert again.voted_by == []

    def test_list_sorted_by_votes(self, supabase, team, captain):
        service = IdeaService(supabase)
        quiet = service.create_idea(team.id, IdeaCreate(title="Quiet"), "captain", captain["id"])
        loud = service.create_idea(team.id, IdeaCreate(title="Loud"), "captain", captain["id"])
        service.toggle_vote(team.id, quiet.id, "user-a")
        service.toggle_vote(team.id, quiet.id, "user-b")
        service.toggle_vote(team.id, loud.id, "user-a")

        assert [i.title for i in service.list_ideas(team.id)] == ["Quiet", "Loud"]

    def test_update_idea(self, supabase, team, captain):
        service = IdeaService(supabase)
        idea = service.create_idea(team.id, IdeaCreate(title="Draft"), "captain", captain["id"])
        updated = service.update_idea(team.id, idea.id, IdeaUpdate(content="Details", tags=["Inspire"]))
        assert updated.content == "Details"
        assert updated.tags == ["Inspire"]

    def test_vote_on_missing_idea(self, supabase, team):
        with pytest.raises(HTTPException) as exc:
            IdeaService(supabase).toggle_vote(team.id, "missing", "user-a")
        assert exc.value.status_code == 404


class TestIdeaRoutes:
    """Test the idea endpoints."""

    def test_vote_activity_only_when_added(self, api, supabase, team):
        idea = api.post(f"/api/v1/teams/{team.id}/ideas", json={"title": "Sensor fusion"}).json()
        activities_before = len(supabase.rows("team_activities"))

        api.post(f"/api/v1/teams/{team.id}/ideas/{idea['id']}/vote")
        api.post(f"/api/v1/teams/{team.id}/ideas/{idea['id']}/vote")

        votes = [a for a in supabase.rows("team_activities")[activities_before:] if a["action"] == "voted for"]
        assert len(votes) == 1
        assert votes[0]["target"] == "Sensor fusion"
