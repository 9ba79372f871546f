"""Learning progress models."""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer
from sqlalchemy.orm import relationship, validates

from app.core.srs.sm2 import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    MIN_INTERVAL_DAYS,
    MIN_REPETITIONS,
    clamp_quality,
)
from app.core.srs.state import ProgressState, ensure_utc
from app.db.base import Base


class LearningProgress(Base):
    """SM-2 scheduling state for one flash card."""

    __tablename__ = "learning_progress"

    id = Column(Integer, primary_key=True)
    card_id = Column(
        Integer,
        ForeignKey("flash_cards.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    interval = Column(Integer, nullable=False, default=MIN_INTERVAL_DAYS)  # days
    repetitions = Column(Integer, nullable=False, default=MIN_REPETITIONS)
    ease_factor = Column(Float, nullable=False, default=DEFAULT_EASE_FACTOR)
    quality = Column(Integer, nullable=False, default=0)  # last answer grade, 0-5

    next_review_date = Column(DateTime(timezone=True), nullable=True, index=True)
    last_review_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    card = relationship("FlashCard", back_populates="progress")

    @validates("interval")
    def _clamp_interval(self, key: str, value: int) -> int:
        return max(MIN_INTERVAL_DAYS, int(value))

    @validates("repetitions")
    def _clamp_repetitions(self, key: str, value: int) -> int:
        return max(MIN_REPETITIONS, int(value))

    @validates("ease_factor")
    def _clamp_ease_factor(self, key: str, value: float) -> float:
        return max(MIN_EASE_FACTOR, float(value))

    @validates("quality")
    def _clamp_quality(self, key: str, value: int) -> int:
        return clamp_quality(value)

    @classmethod
    def from_state(cls, state: ProgressState) -> "LearningProgress":
        progress = cls(card_id=state.card_id, created_at=state.created_at)
        progress.apply_state(state)
        return progress

    def to_state(self) -> ProgressState:
        """Return the immutable scheduling state held by this row."""

        # SQLite drops tzinfo, ProgressState restores UTC
        return ProgressState(
            card_id=self.card_id,
            interval=self.interval if self.interval is not None else MIN_INTERVAL_DAYS,
            repetitions=self.repetitions or 0,
            ease_factor=self.ease_factor if self.ease_factor is not None else DEFAULT_EASE_FACTOR,
            quality=self.quality or 0,
            last_review_date=ensure_utc(self.last_review_date),
            next_review_date=ensure_utc(self.next_review_date),
            created_at=ensure_utc(self.created_at),
        )

    def apply_state(self, state: ProgressState) -> None:
        """Copy the mutable scheduling fields of ``state`` onto this row."""

        if self.card_id is not None and self.card_id != state.card_id:
            raise ValueError("Cannot apply progress of another card")
        self.interval = state.interval
        self.repetitions = state.repetitions
        self.ease_factor = state.ease_factor
        self.quality = state.quality
        self.last_review_date = state.last_review_date
        self.next_review_date = state.next_review_date
