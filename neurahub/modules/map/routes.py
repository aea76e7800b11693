from fastapi import APIRouter, Depends
from neurahub.modules.map.schemas import MapTeam, TeamSearchRequest
from neurahub.modules.map.service import MapService
from neurahub.modules.assistant.client import AssistantClient, get_assistant_client
from typing import List, Optional

router = APIRouter(prefix="/map", tags=["map"])


def get_map_service(assistant: AssistantClient = Depends(get_assistant_client)) -> MapService:
    return MapService(assistant)


@router.get("/teams", response_model=List[MapTeam])
async def list_map_teams(
    q: Optional[str] = None,
    service: MapService = Depends(get_map_service)
):
    """Teams shown on the public map"""
    return service.list_teams(q)


@router.get("/teams/{team_id}", response_model=MapTeam)
async def get_map_team(
    team_id: str,
    service: MapService = Depends(get_map_service)
):
    return service.get_team(team_id)


@router.post("/search", response_model=List[MapTeam])
async def search_teams(
    body: TeamSearchRequest,
    service: MapService = Depends(get_map_service)
):
    """Find teams by name or location with the AI assistant"""
    return await service.search(body.query)
