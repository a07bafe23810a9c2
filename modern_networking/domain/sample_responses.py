"""Sample endpoint and response model for the public cat-facts API."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DummyEndpoint(str, Enum):
    CAT_FACTS = "https://cat-fact.herokuapp.com/facts"


class CatFactStatus(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    verified: bool | None = None
    sent_count: int = Field(validation_alias="sentCount", serialization_alias="sentCount")


class CatFact(BaseModel):
    """One fact. Two facts are equal when their `_id` matches."""

    model_config = ConfigDict(populate_by_name=True)

    status: CatFactStatus
    id: str = Field(validation_alias="_id", serialization_alias="_id")
    user: str
    text: str
    version: int = Field(validation_alias="__v", serialization_alias="__v")
    source: str
    updated_at: str = Field(validation_alias="updatedAt", serialization_alias="updatedAt")
    type: str
    created_at: str = Field(validation_alias="createdAt", serialization_alias="createdAt")
    deleted: bool
    used: bool

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatFact):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
