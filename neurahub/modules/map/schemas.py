from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List


class Coordinates(BaseModel):
    lat: float = 0.0
    lng: float = 0.0


class MapTeam(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    number: str = ""
    name: str = ""
    location: str = ""
    description: str = ""
    coordinates: Coordinates = Field(default_factory=Coordinates)
    website: Optional[str] = None
    awards: List[str] = []
    logo: Optional[str] = None

    @field_validator("number", mode="before")
    @classmethod
    def number_as_text(cls, value):
        return "" if value is None else str(value)

    @field_validator("name", "location", "description", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return value or ""

    @field_validator("coordinates", mode="before")
    @classmethod
    def missing_coordinates(cls, value):
        return value or {"lat": 0, "lng": 0}

    @field_validator("awards", mode="before")
    @classmethod
    def awards_as_list(cls, value):
        return value or []


class TeamSearchRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    query: str = Field(min_length=1)
