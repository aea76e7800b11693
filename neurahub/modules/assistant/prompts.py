"""Prompt templates for the team assistant."""

from typing import Dict, List


class PromptTemplates:
    """Prompts for chat, innovation suggestions and team search."""

    SYSTEM_PROMPTS = {
        "ru": (
            "Ты - AI ассистент для команды FIRST Tech Challenge (FTC). Помогай с вопросами по "
            "робототехнике, программированию, механике, стратегии и всему, что связано с FTC. "
            "Отвечай кратко, но информативно."
        ),
        "en": (
            "You are an AI assistant for a FIRST Tech Challenge (FTC) team. Help with questions about "
            "robotics, programming, mechanics, strategy, and everything related to FTC. "
            "Answer concisely but informatively."
        ),
    }

    HISTORY_LABELS = {
        "ru": ("История разговора:", "Текущий вопрос пользователя:", "Вопрос пользователя:"),
        "en": ("Conversation history:", "Current user question:", "User question:"),
    }

    CHAT_FALLBACKS = {
        "unavailable": {
            "ru": "AI сервис недоступен. Пожалуйста, настройте GEMINI_API_KEY.",
            "en": "AI service is not available. Please configure GEMINI_API_KEY.",
        },
        "empty": {
            "ru": "Не удалось получить ответ. Попробуйте еще раз.",
            "en": "Unable to get response. Please try again.",
        },
        "error": {
            "ru": "Произошла ошибка при общении с ассистентом. Попробуйте еще раз.",
            "en": "An error occurred while chatting with the assistant. Please try again.",
        },
    }

    INNOVATION_UNAVAILABLE = "AI service is not available. Please configure GEMINI_API_KEY."
    INNOVATION_EMPTY = "Unable to generate suggestion at this time."
    INNOVATION_ERROR = "Error generating suggestion. Please try again."

    @classmethod
    def chat_prompt(cls, message: str, history: List[Dict[str, str]], lang: str = "ru") -> str:
        """Flatten the conversation into one prompt: system text, history, then the question."""
        history_label, current_label, question_label = cls.HISTORY_LABELS[lang]
        lines = []
        for entry in history or []:
            role = "User" if entry.get("role") == "user" else "Assistant"
            lines.append(f"{role}: {entry.get('text') or ''}")

        if lines:
            context = "\n".join(lines)
            return f"{cls.SYSTEM_PROMPTS[lang]}\n\n{history_label}\n{context}\n\n{current_label} {message}"
        return f"{cls.SYSTEM_PROMPTS[lang]}\n\n{question_label} {message}"

    @staticmethod
    def innovation_prompt(topic: str) -> str:
        return f"""You are an innovation advisor for FIRST Tech Challenge (FTC) robotics teams.

Given the topic: "{topic}"

Provide a creative and practical innovation suggestion for an FTC team. The suggestion should be:
- Relevant to FTC robotics
- Actionable and implementable
- Creative and innovative
- Brief (2-3 sentences)

Return ONLY the suggestion text, without any markdown formatting, quotes, or additional commentary."""

    @staticmethod
    def find_teams_prompt(query: str) -> str:
        return f"""Find First Tech Challenge (FTC) robotics teams matching the query: "{query}".
If the query is a location, find teams in that area.
Return a list of at least 3-5 teams if possible.

CRITICAL INSTRUCTION:
Return ONLY a valid JSON array of objects.
Do NOT include markdown formatting (like ```json).
Do NOT include citations (like [1], [2]).
Do NOT include any conversational text.

JSON Schema:
[
  {{
    "number": "string",
    "name": "string",
    "location": "string",
    "description": "string",
    "website": "string (or null)",
    "coordinates": {{ "lat": number, "lng": number }},
    "awards": ["string"],
    "logo": "string (or null)"
  }}
]"""
