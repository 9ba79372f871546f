"""Pydantic schemas for flash card endpoints."""
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints


class CardSummary(BaseModel):
    """Short representation used in card listings."""

    id: int
    finnish_word: str
    definition: str

    model_config = ConfigDict(from_attributes=True)


class CardRead(BaseModel):
    """Full representation of a flash card."""

    id: int
    finnish_word: str
    definition: str
    turkish_meaning: str
    english_meaning: str

    model_config = ConfigDict(from_attributes=True)


class CardCreate(BaseModel):
    """Payload for creating a flash card."""

    finnish_word: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
    ]
    definition: str = ""
    turkish_meaning: str = ""
    english_meaning: str = ""


class CardCreateResponse(BaseModel):
    """Response after a card has been stored."""

    success: bool = True
    message: str = "Card created successfully"
    card_id: int
