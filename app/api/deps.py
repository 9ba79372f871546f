"""Shared API dependencies."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.cards import CardService
from app.services.progress import ProgressService
from app.services.srs import SM2Scheduler

_scheduler = SM2Scheduler()

__all__ = ["get_card_service", "get_db", "get_progress_service"]


def get_card_service(db: Session = Depends(get_db)) -> CardService:
    return CardService(db)


def get_progress_service(db: Session = Depends(get_db)) -> ProgressService:
    """Assemble the progress service with the shared scheduler."""

    return ProgressService(db, scheduler=_scheduler)
