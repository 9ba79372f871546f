"""Utility helpers package."""

from app.utils.exceptions import (
    CardNotFoundError,
    FlashCardError,
    InvalidRecordError,
    ProgressNotFoundError,
)
from app.utils.locks import KeyedLock, card_locks

__all__ = [
    "CardNotFoundError",
    "FlashCardError",
    "InvalidRecordError",
    "KeyedLock",
    "ProgressNotFoundError",
    "card_locks",
]
