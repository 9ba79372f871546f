"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional
from fastapi import HTTPException, status
from loguru import logger


class FlashCardError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class CardNotFoundError(FlashCardError):
    """Raised when a flash card cannot be located."""

    def __init__(self, card_id: Any, message: str = "Card not found"):
        super().__init__(message, {"card_id": card_id})


class ProgressNotFoundError(FlashCardError):
    """Raised when a card has no learning progress record."""

    def __init__(self, card_id: Any, message: str = "Progress not found"):
        super().__init__(message, {"card_id": card_id})


class InvalidRecordError(FlashCardError):
    """A persisted record could not be parsed."""
    pass


def handle_not_found_error(error: FlashCardError) -> HTTPException:
    """Handle missing card or progress errors."""
    logger.warning(f"Not found: {error.message} {error.details}")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error.message
    )


def handle_invalid_record_error(error: InvalidRecordError) -> HTTPException:
    """Handle malformed persisted records."""
    logger.error(f"Invalid record: {error.message}")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "message": error.message,
            "details": error.details
        }
    )
