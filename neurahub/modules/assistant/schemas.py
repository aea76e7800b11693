from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal


class ChatTurn(BaseModel):
    role: Literal["user", "model", "assistant"]
    text: str = ""


class ChatRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    message: str = Field(min_length=1)
    history: List[ChatTurn] = []
    lang: Literal["ru", "en"] = "ru"


class ChatResponse(BaseModel):
    reply: str


class InnovationRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    topic: str = Field(min_length=1)


class InnovationResponse(BaseModel):
    suggestion: str
