"""Business logic for flash card review progress."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.srs.state import ProgressState
from app.db.models.card import FlashCard
from app.services.repository import SqlProgressRepository
from app.services.srs import ReviewStatistics, SM2Scheduler
from app.utils.exceptions import ProgressNotFoundError
from app.utils.locks import KeyedLock, card_locks


@dataclass(slots=True)
class CardProgress:
    """A card paired with its scheduling state."""

    card: FlashCard
    state: ProgressState


class ProgressService:
    """High level helper for review workflows."""

    def __init__(
        self,
        db: Session,
        *,
        scheduler: SM2Scheduler | None = None,
        locks: KeyedLock | None = None,
    ) -> None:
        self.db = db
        self.scheduler = scheduler or SM2Scheduler()
        self.repository = SqlProgressRepository(db)
        self.locks = locks or card_locks

    @staticmethod
    def _now(now: datetime | None) -> datetime:
        return now or datetime.now(timezone.utc)

    def _cards_by_id(self, card_ids: set[int]) -> dict[int, FlashCard]:
        if not card_ids:
            return {}
        stmt = select(FlashCard).where(FlashCard.id.in_(card_ids))
        return {card.id: card for card in self.db.scalars(stmt)}

    def _attach_cards(self, states: list[ProgressState]) -> list[CardProgress]:
        cards = self._cards_by_id({state.card_id for state in states})
        items: list[CardProgress] = []
        for state in states:
            card = cards.get(state.card_id)
            if card is None:
                logger.warning(f"Skipping progress for missing card {state.card_id}")
                continue
            items.append(CardProgress(card=card, state=state))
        return items

    def get_progress(self, card_id: int) -> ProgressState:
        state = self.repository.get(card_id)
        if state is None:
            raise ProgressNotFoundError(card_id)
        return state

    def due_cards(self, now: datetime | None = None) -> list[CardProgress]:
        """Return every card whose review is due at ``now``."""

        now = self._now(now)
        due = [
            state
            for state in self.repository.load_all()
            if self.scheduler.is_due(state, now=now)
        ]
        return self._attach_cards(due)

    def submit_review(
        self, card_id: int, quality: int, now: datetime | None = None
    ) -> ProgressState:
        """Grade a review, persist the new schedule and return it."""

        now = self._now(now)
        with self.locks.hold(card_id):
            state = self.get_progress(card_id)
            updated = self.scheduler.review(state, quality, now=now)
            self.repository.save(updated)
            self.db.commit()

        logger.info(
            f"Reviewed card {card_id}: quality={updated.quality} "
            f"interval={state.interval}->{updated.interval} "
            f"ease={state.ease_factor:.2f}->{updated.ease_factor:.2f}"
        )
        return updated

    def statistics(self, now: datetime | None = None) -> ReviewStatistics:
        return self.scheduler.statistics(self.repository.load_all(), now=self._now(now))

    def difficult_cards(self, limit: int) -> list[CardProgress]:
        """Return up to ``limit`` cards, hardest first."""

        ordered = self.scheduler.sort_by_difficulty(self.repository.load_all())
        return self._attach_cards(ordered)[:limit]
