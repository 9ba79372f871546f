"""Spaced repetition domain helpers."""

from app.core.srs.sm2 import (
    DEFAULT_EASE_FACTOR,
    MASTERY_REPETITIONS,
    MAX_INTERVAL_DAYS,
    MIN_EASE_FACTOR,
    clamp_quality,
    completion_rate,
    next_interval,
    round_half_up,
    update_ease_factor,
)
from app.core.srs.state import ProgressState, ensure_utc

__all__ = [
    "DEFAULT_EASE_FACTOR",
    "MASTERY_REPETITIONS",
    "MAX_INTERVAL_DAYS",
    "MIN_EASE_FACTOR",
    "ProgressState",
    "clamp_quality",
    "completion_rate",
    "ensure_utc",
    "next_interval",
    "round_half_up",
    "update_ease_factor",
]
