from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class QuestionCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1)
    body: str = Field(min_length=1)


class QuestionResponse(BaseModel):
    id: str
    title: str
    body: str
    author_id: Optional[str] = None
    author_username: Optional[str] = None
    answer_count: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AnswerCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    body: str = Field(min_length=1)


class AnswerResponse(BaseModel):
    id: str
    question_id: str
    body: str
    author_id: Optional[str] = None
    author_username: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
