"""Per-card scheduling state."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from app.core.srs.sm2 import (
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    MIN_INTERVAL_DAYS,
    MIN_REPETITIONS,
    clamp_quality,
)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes, leave aware ones untouched."""

    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class ProgressState:
    """Scheduling progress for a single flash card.

    Instances are immutable. Out-of-range values are clamped on construction
    (and therefore on every :meth:`evolve`), so a state can never violate
    ``interval >= 1``, ``repetitions >= 0``, ``ease_factor >= 1.3`` or
    ``0 <= quality <= 5``.
    """

    card_id: int
    interval: int = MIN_INTERVAL_DAYS
    repetitions: int = MIN_REPETITIONS
    ease_factor: float = DEFAULT_EASE_FACTOR
    quality: int = 0
    last_review_date: datetime = field(default_factory=utcnow)
    next_review_date: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "interval", max(MIN_INTERVAL_DAYS, int(self.interval)))
        object.__setattr__(self, "repetitions", max(MIN_REPETITIONS, int(self.repetitions)))
        object.__setattr__(self, "ease_factor", max(MIN_EASE_FACTOR, float(self.ease_factor)))
        object.__setattr__(self, "quality", clamp_quality(self.quality))
        object.__setattr__(self, "last_review_date", ensure_utc(self.last_review_date))
        object.__setattr__(self, "next_review_date", ensure_utc(self.next_review_date))
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))

    @classmethod
    def new(cls, card_id: int, now: datetime) -> "ProgressState":
        """Return the state of a card that has just entered the system."""

        now = ensure_utc(now)
        return cls(
            card_id=card_id,
            last_review_date=now,
            next_review_date=now,
            created_at=now,
        )

    def evolve(self, **changes: Any) -> "ProgressState":
        """Return a copy with ``changes`` applied (and clamped)."""

        if "card_id" in changes or "created_at" in changes:
            raise TypeError("card_id and created_at are immutable")
        return replace(self, **changes)

    def with_interval(self, interval: int) -> "ProgressState":
        return self.evolve(interval=interval)

    def with_repetitions(self, repetitions: int) -> "ProgressState":
        return self.evolve(repetitions=repetitions)

    def with_ease_factor(self, ease_factor: float) -> "ProgressState":
        return self.evolve(ease_factor=ease_factor)

    def with_quality(self, quality: int) -> "ProgressState":
        return self.evolve(quality=quality)
