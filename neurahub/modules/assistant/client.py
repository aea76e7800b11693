"""Gemini text-generation client for the team assistant."""

import logging
from typing import Dict, List, Optional

from openai import AsyncOpenAI
from tenacity import retry, stop_after_attempt, wait_exponential

from neurahub.config import settings
from neurahub.modules.map.schemas import MapTeam
from .parsing import parse_team_array
from .prompts import PromptTemplates

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("ru", "en")


class AssistantClient:
    """
    Client for the Gemini OpenAI-compatible chat endpoint.

    Every public method degrades instead of raising: chat and suggestions
    return fallback text, team search returns an empty list.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        key = (api_key if api_key is not None else settings.gemini_api_key or "").strip()
        self.enabled = bool(key) and key != "undefined"
        self.model = model or settings.ai_model
        self.prompts = PromptTemplates()
        self.client = AsyncOpenAI(api_key=key, base_url=settings.ai_base_url) if self.enabled else None
        if not self.enabled:
            logger.warning("GEMINI_API_KEY is not set. AI assistant features are disabled.")

    @retry(stop=stop_after_attempt(settings.ai_max_retries), wait=wait_exponential(multiplier=1, min=2, max=10))
    async def _call_api(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 2000
    ) -> str:
        """Make an API call to Gemini."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
            return response.choices[0].message.content or ""
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise

    async def chat(self, message: str, history: Optional[List[Dict[str, str]]] = None, lang: str = "ru") -> str:
        """Answer a team question in the given language, using earlier turns as context."""
        lang = lang if lang in SUPPORTED_LANGUAGES else "ru"
        if not self.enabled:
            return self.prompts.CHAT_FALLBACKS["unavailable"][lang]

        prompt = self.prompts.chat_prompt(message, history or [], lang)
        try:
            text = (await self._call_api([{"role": "user", "content": prompt}])).strip()
        except Exception as e:
            logger.error(f"Error chatting with assistant: {e}")
            return self.prompts.CHAT_FALLBACKS["error"][lang]
        return text or self.prompts.CHAT_FALLBACKS["empty"][lang]

    async def suggest_innovation(self, topic: str) -> str:
        """Short innovation idea for a topic."""
        if not self.enabled:
            return self.prompts.INNOVATION_UNAVAILABLE
        try:
            text = (await self._call_api(
                [{"role": "user", "content": self.prompts.innovation_prompt(topic)}],
                temperature=0.9,
                max_tokens=300
            )).strip()
        except Exception as e:
            logger.error(f"Error suggesting innovation: {e}")
            return self.prompts.INNOVATION_ERROR
        return text or self.prompts.INNOVATION_EMPTY

    async def find_teams(self, query: str) -> List[MapTeam]:
        """Ask the model for teams matching a query. Anything unparseable gives []."""
        if not self.enabled:
            logger.warning("AI team search requested without GEMINI_API_KEY")
            return []
        try:
            text = await self._call_api(
                [{"role": "user", "content": self.prompts.find_teams_prompt(query)}],
                temperature=0.2
            )
        except Exception as e:
            logger.error(f"Error finding teams: {e}")
            return []
        return parse_team_array(text)


_assistant_client: Optional[AssistantClient] = None


def get_assistant_client() -> AssistantClient:
    """Get the shared assistant client instance."""
    global _assistant_client
    if _assistant_client is None:
        _assistant_client = AssistantClient()
    return _assistant_client
