"""SM-2 scheduling engine.

This module applies the SuperMemo-2 update rule to :class:`ProgressState`
values and summarises populations of them. The scheduler is deterministic:
every time-sensitive call receives ``now`` explicitly, and no method mutates
its input. A review graded 3 or better grows the interval (1 day, then 3 days,
then geometrically by the ease factor) while a lower grade resets the card to
a one-day interval.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable

from app.core.srs.sm2 import (
    clamp_quality,
    completion_rate,
    next_interval,
    round_half_up,
    update_ease_factor,
)
from app.core.srs.state import ProgressState, ensure_utc


@dataclass(slots=True)
class ReviewStatistics:
    """Summary metrics over a collection of progress states."""

    total_cards: int = 0
    due_cards: int = 0
    new_cards: int = 0
    total_repetitions: int = 0
    average_ease_factor: float = 0.0
    average_interval: float = 0.0
    completion_rate: float = 0.0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class SM2Scheduler:
    """The SuperMemo-2 scheduler used for flash card reviews."""

    def review(self, state: ProgressState, quality: int, *, now: datetime) -> ProgressState:
        """Return the state following a review graded ``quality``.

        ``quality`` is clamped to 0-5 rather than rejected. The ease factor is
        derived from the pre-review values first; the interval of a mature
        card then grows by that updated ease factor.
        """

        now = ensure_utc(now)
        quality = clamp_quality(quality)

        ease_factor = update_ease_factor(state.ease_factor, quality)
        interval, repetitions = next_interval(
            state.interval, state.repetitions, ease_factor, quality
        )

        return state.evolve(
            interval=interval,
            repetitions=repetitions,
            ease_factor=ease_factor,
            quality=quality,
            last_review_date=now,
            next_review_date=now + timedelta(days=interval),
        )

    @staticmethod
    def is_due(state: ProgressState, *, now: datetime) -> bool:
        """A card is due once its next review date has arrived or if it has none."""

        if state.next_review_date is None:
            return True
        return ensure_utc(now) >= state.next_review_date

    def count_due(self, states: Iterable[ProgressState], *, now: datetime) -> int:
        return sum(1 for state in states if self.is_due(state, now=now))

    @staticmethod
    def count_new(states: Iterable[ProgressState]) -> int:
        """Count cards without a successful review since creation or the last lapse."""

        return sum(1 for state in states if state.repetitions == 0)

    def statistics(self, states: Iterable[ProgressState], *, now: datetime) -> ReviewStatistics:
        """Fold ``states`` into summary metrics; empty input yields zeros."""

        states = list(states)
        total_cards = len(states)
        if total_cards == 0:
            return ReviewStatistics()

        total_repetitions = sum(state.repetitions for state in states)
        ease_sum = sum(state.ease_factor for state in states)
        interval_sum = sum(state.interval for state in states)

        return ReviewStatistics(
            total_cards=total_cards,
            due_cards=self.count_due(states, now=now),
            new_cards=self.count_new(states),
            total_repetitions=total_repetitions,
            average_ease_factor=round_half_up(ease_sum / total_cards),
            average_interval=round_half_up(interval_sum / total_cards),
            completion_rate=completion_rate(total_repetitions, total_cards),
        )

    @staticmethod
    def sort_by_difficulty(states: Iterable[ProgressState]) -> list[ProgressState]:
        """Hardest first: lowest ease factor, then the longest-neglected card."""

        return sorted(states, key=lambda state: (state.ease_factor, state.last_review_date))
