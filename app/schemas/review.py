"""Pydantic models for review and statistics endpoints."""
from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from app.schemas.card import CardRead


class ProgressRead(BaseModel):
    """Scheduling state attached to a card in review listings."""

    interval: int
    repetitions: int
    ease_factor: float
    next_review_date: date | None = None


class DueCard(CardRead):
    """A card due for review together with its progress."""

    progress: ProgressRead


class ReviewAnswerRequest(BaseModel):
    """Payload for submitting an answer.

    ``quality`` is not range-checked here: the scheduler clamps it to 0-5.
    """

    card_id: int = Field(..., ge=1)
    quality: int = Field(0, description="Answer grade from 0 (blackout) to 5 (perfect)")
    user_answer: str = ""


class ReviewAnswerResponse(BaseModel):
    """Response after scheduling the next review."""

    success: bool = True
    message: str = "Answer saved"
    card_id: int
    next_review_date: date | None
    new_interval: int
    new_ease_factor: float
    repetitions: int


class StatisticsRead(BaseModel):
    """Aggregate review statistics."""

    total_cards: int
    due_cards: int
    new_cards: int
    total_repetitions: int
    average_ease_factor: float
    average_interval: float
    completion_rate: float
