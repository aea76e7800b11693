from fastapi import APIRouter, Depends
from neurahub.modules.assistant.schemas import (
    ChatRequest, ChatResponse, InnovationRequest, InnovationResponse
)
from neurahub.modules.assistant.client import AssistantClient, get_assistant_client
from neurahub.core.dependencies import get_current_user_id
from typing import Dict

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    user_data: Dict = Depends(get_current_user_id),
    client: AssistantClient = Depends(get_assistant_client)
):
    """Ask the team assistant a question"""
    history = [turn.model_dump() for turn in body.history]
    return ChatResponse(reply=await client.chat(body.message, history, body.lang))


@router.post("/innovation", response_model=InnovationResponse)
async def suggest_innovation(
    body: InnovationRequest,
    user_data: Dict = Depends(get_current_user_id),
    client: AssistantClient = Depends(get_assistant_client)
):
    """Innovation suggestion for an idea title"""
    return InnovationResponse(suggestion=await client.suggest_innovation(body.topic))
