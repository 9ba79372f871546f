"""Tests for the SM-2 update rule."""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from app.core.srs.sm2 import (
    MAX_INTERVAL_DAYS,
    clamp_quality,
    completion_rate,
    next_interval,
    round_half_up,
    update_ease_factor,
)
from app.core.srs.state import ProgressState
from app.services.srs import SM2Scheduler

NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def scheduler() -> SM2Scheduler:
    return SM2Scheduler()


@pytest.mark.parametrize(
    ("quality", "expected"),
    [(-3, 0), (0, 0), (3, 3), (5, 5), (42, 5)],
)
def test_clamp_quality(quality, expected):
    assert clamp_quality(quality) == expected


@pytest.mark.parametrize(
    ("quality", "delta"),
    [(5, 0.1), (4, 0.0), (3, -0.14), (2, -0.32), (1, -0.54), (0, -0.8)],
)
def test_update_ease_factor_matches_sm2_formula(quality, delta):
    assert update_ease_factor(2.5, quality) == pytest.approx(2.5 + delta)


def test_update_ease_factor_never_drops_below_floor():
    assert update_ease_factor(1.35, 0) == 1.3
    assert update_ease_factor(1.3, 3) == 1.3


def test_next_interval_uses_supplied_ease_factor():
    assert next_interval(10, 2, 2.0, 4) == (20, 3)
    assert next_interval(10, 2, 2.55, 4) == (25, 3)


def test_progression_ladder(scheduler):
    state = ProgressState.new(1, NOW)

    first = scheduler.review(state, 5, now=NOW)
    assert first.interval == 1
    assert first.repetitions == 1
    assert first.ease_factor == pytest.approx(2.6)

    second = scheduler.review(first, 5, now=NOW)
    assert second.interval == 3
    assert second.repetitions == 2
    assert second.ease_factor == pytest.approx(2.7)

    third = scheduler.review(second, 5, now=NOW)
    assert third.repetitions == 3
    assert third.interval == math.floor(3 * third.ease_factor)
    assert third.interval == 8


def test_growth_uses_updated_ease_factor(scheduler):
    state = ProgressState(card_id=1, interval=10, repetitions=3, ease_factor=2.5)

    result = scheduler.review(state, 3, now=NOW)

    # 2.5 - 0.14 = 2.36, so 23 rather than the 25 the old factor would give
    assert result.ease_factor == pytest.approx(2.36)
    assert result.interval == 23


def test_lapse_resets_interval_and_repetitions(scheduler):
    state = ProgressState(card_id=7, interval=10, repetitions=4, ease_factor=2.2)

    result = scheduler.review(state, 1, now=NOW)

    assert result.interval == 1
    assert result.repetitions == 0
    assert result.quality == 1
    assert 1.3 <= result.ease_factor < 2.2
    assert result.ease_factor == pytest.approx(1.66)


@pytest.mark.parametrize("quality", [0, 1, 2])
def test_every_failing_grade_is_a_lapse(scheduler, quality):
    state = ProgressState(card_id=1, interval=40, repetitions=6, ease_factor=2.8)

    result = scheduler.review(state, quality, now=NOW)

    assert (result.interval, result.repetitions) == (1, 0)


@pytest.mark.parametrize("quality", [-10, -1, 6, 99])
def test_out_of_range_quality_behaves_like_clamped_quality(scheduler, quality):
    state = ProgressState(card_id=1, interval=6, repetitions=2, ease_factor=2.1)

    assert scheduler.review(state, quality, now=NOW) == scheduler.review(
        state, clamp_quality(quality), now=NOW
    )


def test_repeated_failures_keep_ease_factor_at_floor(scheduler):
    state = ProgressState.new(1, NOW)
    for _ in range(10):
        state = scheduler.review(state, 0, now=NOW)
        assert state.ease_factor >= 1.3
        assert state.interval >= 1

    assert state.ease_factor == 1.3


def test_review_sets_dates_from_now(scheduler):
    state = ProgressState(card_id=1, interval=3, repetitions=2, ease_factor=2.0)

    result = scheduler.review(state, 4, now=NOW)

    assert result.last_review_date == NOW
    assert result.next_review_date == NOW + timedelta(days=result.interval)
    assert result.interval == 6


def test_review_does_not_mutate_input(scheduler):
    state = ProgressState.new(3, NOW)

    result = scheduler.review(state, 5, now=NOW + timedelta(hours=1))

    assert state.repetitions == 0
    assert state.ease_factor == 2.5
    assert result is not state
    assert result.card_id == state.card_id
    assert result.created_at == state.created_at


def test_naive_now_is_treated_as_utc(scheduler):
    state = ProgressState.new(1, NOW)

    result = scheduler.review(state, 5, now=datetime(2024, 3, 2, 12, 0))

    assert result.last_review_date == datetime(2024, 3, 2, 12, 0, tzinfo=timezone.utc)


def test_long_streak_of_perfect_answers_saturates_interval(scheduler):
    state = ProgressState.new(1, NOW)

    intervals = []
    for _ in range(30):
        state = scheduler.review(state, 5, now=NOW)
        intervals.append(state.interval)

    assert intervals[:3] == [1, 3, 8]
    assert intervals == sorted(intervals)
    assert max(intervals) == MAX_INTERVAL_DAYS
    assert state.repetitions == 30
    assert state.next_review_date == NOW + timedelta(days=MAX_INTERVAL_DAYS)


def test_oversized_interval_is_capped_on_review(scheduler):
    state = ProgressState(card_id=1, interval=10_000_000, repetitions=4, ease_factor=2.5)

    reviewed = scheduler.review(state, 4, now=NOW)

    assert reviewed.interval == MAX_INTERVAL_DAYS
    assert next_interval(10_000_000, 4, 2.5, 1) == (1, 0)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.625, 0.63), (2.125, 2.13), (2.675, 2.68), (16.665, 16.67), (2.16, 2.16), (-0.125, -0.13)],
)
def test_round_half_up_breaks_ties_upward(value, expected):
    assert round_half_up(value) == expected


def test_completion_rate_rounds_ties_up():
    assert completion_rate(1, 16) == 0.63
    assert completion_rate(0, 5) == 0.0
    assert completion_rate(3, 0) == 0.0
