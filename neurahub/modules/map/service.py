from neurahub.config.map_teams_config import get_map_teams
from neurahub.modules.map.schemas import MapTeam
from neurahub.modules.assistant.client import AssistantClient
from typing import List, Optional
from fastapi import HTTPException


class MapService:
    """Public FTC team map: the bundled seed list plus AI-backed search."""

    def __init__(self, assistant: Optional[AssistantClient] = None):
        self.assistant = assistant

    def list_teams(self, q: Optional[str] = None) -> List[MapTeam]:
        """Seed teams, optionally filtered by name, number or location (case-insensitive)"""
        teams = [MapTeam(**team) for team in get_map_teams()]
        if not q or not q.strip():
            return teams
        needle = q.strip().lower()
        return [
            team for team in teams
            if needle in team.name.lower()
            or needle in team.number.lower()
            or needle in team.location.lower()
        ]

    def get_team(self, team_id: str) -> MapTeam:
        for team in get_map_teams():
            if team["id"] == team_id:
                return MapTeam(**team)
        raise HTTPException(status_code=404, detail="Team not found")

    async def search(self, query: str) -> List[MapTeam]:
        """Teams suggested by the assistant; an empty list when nothing usable comes back"""
        if self.assistant is None:
            return []
        return await self.assistant.find_teams(query)
