"""Service helpers for flash card endpoints."""
from __future__ import annotations

from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.srs.state import ProgressState
from app.db.models.card import FlashCard
from app.db.models.progress import LearningProgress
from app.utils.exceptions import CardNotFoundError


class CardService:
    """Create and query flash cards."""

    def __init__(self, db: Session):
        self.db = db

    def list_cards(self) -> list[FlashCard]:
        """Return all cards in creation order."""

        stmt = select(FlashCard).order_by(FlashCard.id)
        return list(self.db.scalars(stmt))

    def count_cards(self) -> int:
        return int(self.db.scalar(select(func.count()).select_from(FlashCard)) or 0)

    def get_card(self, card_id: int) -> FlashCard:
        """Retrieve a single card by identifier."""

        card = self.db.get(FlashCard, card_id)
        if not card:
            raise CardNotFoundError(card_id)
        return card

    def create_card(
        self,
        *,
        finnish_word: str,
        definition: str = "",
        turkish_meaning: str = "",
        english_meaning: str = "",
        now: datetime | None = None,
    ) -> FlashCard:
        """Store a new card together with its initial learning progress."""

        now = now or datetime.now(timezone.utc)
        card = FlashCard(
            finnish_word=finnish_word.strip(),
            definition=definition,
            turkish_meaning=turkish_meaning,
            english_meaning=english_meaning,
            created_at=now,
            updated_at=now,
        )
        self.db.add(card)
        self.db.flush()

        card.progress = LearningProgress.from_state(ProgressState.new(card.id, now))
        self.db.commit()
        logger.info(f"Created card {card.id} ({card.finnish_word!r})")
        return card
