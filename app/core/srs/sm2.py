"""SuperMemo-2 scheduling formula.

The helpers here are the arithmetic half of the scheduler: they know nothing
about timestamps or persistence and operate on plain numbers so they can be
reused by :class:`app.services.srs.SM2Scheduler` and by import tooling.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

# SM-2 defaults
MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5

MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 36500  # ~100 years
MIN_REPETITIONS = 0

# Answer quality scale
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

# Fixed intervals for the first two successful reviews
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 3

# Repetitions per card treated as "complete" by the completion rate
MASTERY_REPETITIONS = 10


def clamp_quality(quality: int) -> int:
    """Limit an answer grade to the 0-5 range.

    5 = perfect answer, remembered immediately
    4 = correct answer with hesitation
    3 = correct answer recalled with difficulty
    2 = incorrect, but the correct one was remembered
    1 = incorrect, but familiar
    0 = did not know at all
    """
    return max(MIN_QUALITY, min(MAX_QUALITY, int(quality)))


def update_ease_factor(ease_factor: float, quality: int) -> float:
    """Return the ease factor after a review graded ``quality``.

    SM-2 formula: EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    """
    q = clamp_quality(quality)
    new_ef = ease_factor + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02))
    return max(MIN_EASE_FACTOR, new_ef)


def next_interval(
    interval: int, repetitions: int, ease_factor: float, quality: int
) -> Tuple[int, int]:
    """Return ``(interval_days, repetitions)`` after a review.

    ``ease_factor`` must already be the updated value from
    :func:`update_ease_factor`; mature cards grow by it until the interval
    reaches ``MAX_INTERVAL_DAYS``.
    """
    q = clamp_quality(quality)

    if q < PASSING_QUALITY:
        # Lapse: start over regardless of history
        return FIRST_INTERVAL_DAYS, 0

    if repetitions == 0:
        new_interval = FIRST_INTERVAL_DAYS
    elif repetitions == 1:
        new_interval = SECOND_INTERVAL_DAYS
    else:
        new_interval = math.floor(interval * ease_factor)

    return max(MIN_INTERVAL_DAYS, min(MAX_INTERVAL_DAYS, new_interval)), repetitions + 1


def completion_rate(total_repetitions: int, total_cards: int) -> float:
    """Percentage of the assumed mastery budget spent; not capped at 100."""

    if total_cards <= 0:
        return 0.0
    return round_half_up(total_repetitions * 100 / (total_cards * MASTERY_REPETITIONS))


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` with ties going away from zero, e.g. 0.625 -> 0.63."""

    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))
