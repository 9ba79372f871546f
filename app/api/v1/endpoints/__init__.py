"""API endpoint modules for v1."""

from app.api.v1.endpoints import cards, review, statistics

__all__ = [
    "cards",
    "review",
    "statistics",
]
