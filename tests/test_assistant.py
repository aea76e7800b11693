"""
Tests for the AI assistant client and model-output parsing.
"""

from unittest.mock import AsyncMock

import pytest

from neurahub.modules.assistant.client import AssistantClient
from neurahub.modules.assistant.parsing import clean_model_text, extract_json_array, parse_team_array
from neurahub.modules.assistant.prompts import PromptTemplates


TEAM_JSON = (
    '[{"number": 16236, "name": "Gear Masters", "location": "Austin, TX", '
    '"coordinates": {"lat": 30.27, "lng": -97.74}, "awards": ["Inspire"]}]'
)


class TestParsing:
    """Test extraction of team lists from model text."""

    def test_plain_json(self):
        teams = parse_team_array(TEAM_JSON, timestamp_ms=1000)
        assert len(teams) == 1
        assert teams[0].id == "gen-1000-0"
        assert teams[0].number == "16236"
        assert teams[0].coordinates.lat == 30.27

    def test_fenced_json_with_citations(self):
        text = f"```json\n{TEAM_JSON} [1]\n```"
        assert [t.name for t in parse_team_array(text)] == ["Gear Masters"]

    def test_array_inside_prose(self):
        text = f"Here are the teams you asked for:\n{TEAM_JSON}\nGood luck!"
        assert len(extract_json_array(text)) == 1

    def test_not_json(self):
        assert parse_team_array("Sorry, I could not find any teams.") == []
        assert parse_team_array("") == []
        assert parse_team_array(None) == []

    def test_json_object_is_not_a_list(self):
        assert parse_team_array('{"name": "Solo"}') == []

    def test_deeply_nested_output(self):
        assert parse_team_array("[" * 100000 + "]" * 100000) == []

    def test_missing_fields_get_defaults(self):
        teams = parse_team_array('[{"name": "No Coords", "number": null}, "junk"]', timestamp_ms=5)
        assert len(teams) == 1
        assert teams[0].number == ""
        assert teams[0].coordinates.lat == 0
        assert teams[0].coordinates.lng == 0

    def test_clean_model_text_strips_bracket_citations(self):
        assert clean_model_text("[1,2]【3†source】") == "[1,2]"


class TestPrompts:
    """Test prompt building."""

    def test_chat_prompt_without_history(self):
        prompt = PromptTemplates.chat_prompt("How to tune PID?", [], "en")
        assert prompt.startswith(PromptTemplates.SYSTEM_PROMPTS["en"])
        assert prompt.endswith("User question: How to tune PID?")

    def test_chat_prompt_with_history(self):
        history = [{"role": "user", "text": "Hi"}, {"role": "model", "text": "Hello!"}]
        prompt = PromptTemplates.chat_prompt("Next?", history, "en")
        assert "Conversation history:\nUser: Hi\nAssistant: Hello!" in prompt
        assert prompt.endswith("Current user question: Next?")


class TestAssistantClient:
    """Test AssistantClient fallbacks."""

    def test_disabled_without_key(self):
        assert AssistantClient(api_key="").enabled is False
        assert AssistantClient(api_key="undefined").enabled is False
        assert AssistantClient(api_key="test-key").enabled is True

    @pytest.mark.asyncio
    async def test_disabled_fallbacks(self):
        client = AssistantClient(api_key="")
        assert await client.chat("hi", lang="en") == PromptTemplates.CHAT_FALLBACKS["unavailable"]["en"]
        assert await client.chat("hi") == PromptTemplates.CHAT_FALLBACKS["unavailable"]["ru"]
        assert await client.suggest_innovation("intake") == PromptTemplates.INNOVATION_UNAVAILABLE
        assert await client.find_teams("Almaty") == []

    @pytest.mark.asyncio
    async def test_chat_error_fallback(self):
        client = AssistantClient(api_key="test-key")
        client._call_api = AsyncMock(side_effect=RuntimeError("quota"))
        assert await client.chat("hi", lang="en") == PromptTemplates.CHAT_FALLBACKS["error"]["en"]

    @pytest.mark.asyncio
    async def test_chat_empty_reply(self):
        client = AssistantClient(api_key="test-key")
        client._call_api = AsyncMock(return_value="   ")
        assert await client.chat("hi", lang="ru") == PromptTemplates.CHAT_FALLBACKS["empty"]["ru"]

    @pytest.mark.asyncio
    async def test_innovation(self):
        client = AssistantClient(api_key="test-key")
        client._call_api = AsyncMock(return_value=" Use a turret. ")
        assert await client.suggest_innovation("scoring") == "Use a turret."
        client._call_api.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_find_teams_parses_reply(self):
        client = AssistantClient(api_key="test-key")
        client._call_api = AsyncMock(return_value=TEAM_JSON)
        teams = await client.find_teams("Texas")
        assert [t.name for t in teams] == ["Gear Masters"]
        assert teams[0].id.startswith("gen-")

    @pytest.mark.asyncio
    async def test_find_teams_api_failure(self):
        client = AssistantClient(api_key="test-key")
        client._call_api = AsyncMock(side_effect=RuntimeError("down"))
        assert await client.find_teams("Texas") == []

    @pytest.mark.asyncio
    async def test_find_teams_nested_reply(self):
        client = AssistantClient(api_key="test-key")
        client._call_api = AsyncMock(return_value="[" * 100000 + "]" * 100000)
        assert await client.find_teams("Texas") == []


class TestAssistantRoutes:
    """Test the assistant endpoints."""

    def test_chat_route(self, api):
        response = api.post("/api/v1/assistant/chat", json={"message": "hello", "lang": "en"})
        assert response.status_code == 200
        assert response.json()["reply"] == PromptTemplates.CHAT_FALLBACKS["unavailable"]["en"]

    def test_unsupported_language(self, api):
        response = api.post("/api/v1/assistant/chat", json={"message": "hola", "lang": "es"})
        assert response.status_code == 422
