"""Pydantic schemas package."""

from app.schemas.card import CardCreate, CardCreateResponse, CardRead, CardSummary
from app.schemas.review import (
    DueCard,
    ProgressRead,
    ReviewAnswerRequest,
    ReviewAnswerResponse,
    StatisticsRead,
)

__all__ = [
    "CardCreate",
    "CardCreateResponse",
    "CardRead",
    "CardSummary",
    "DueCard",
    "ProgressRead",
    "ReviewAnswerRequest",
    "ReviewAnswerResponse",
    "StatisticsRead",
]
