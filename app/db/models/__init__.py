"""Database models package."""
from app.db.models.card import FlashCard
from app.db.models.progress import LearningProgress

__all__ = [
    "FlashCard",
    "LearningProgress",
]
