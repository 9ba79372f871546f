"""Tests for ProgressState invariants."""
from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

import pytest

from app.core.srs.state import ProgressState

NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_new_state_defaults():
    state = ProgressState.new(12, NOW)

    assert state.card_id == 12
    assert state.interval == 1
    assert state.repetitions == 0
    assert state.ease_factor == 2.5
    assert state.quality == 0
    assert state.last_review_date == NOW
    assert state.next_review_date == NOW
    assert state.created_at == NOW


def test_constructor_clamps_out_of_range_values():
    state = ProgressState(card_id=1, interval=-4, repetitions=-2, ease_factor=0.2, quality=9)

    assert state.interval == 1
    assert state.repetitions == 0
    assert state.ease_factor == 1.3
    assert state.quality == 5


@pytest.mark.parametrize("interval", [0, -1, -365])
def test_interval_setter_clamps_to_one(interval):
    assert ProgressState.new(1, NOW).with_interval(interval).interval == 1


def test_ease_factor_setter_clamps_to_floor():
    state = ProgressState.new(1, NOW).with_ease_factor(1.0)

    assert state.ease_factor == 1.3
    assert state.with_ease_factor(2.9).ease_factor == 2.9


def test_repetitions_and_quality_setters_clamp():
    state = ProgressState.new(1, NOW)

    assert state.with_repetitions(-1).repetitions == 0
    assert state.with_repetitions(4).repetitions == 4
    assert state.with_quality(-2).quality == 0
    assert state.with_quality(8).quality == 5


def test_evolve_keeps_identity_fields():
    state = ProgressState.new(1, NOW)

    with pytest.raises(TypeError):
        state.evolve(card_id=2)
    with pytest.raises(TypeError):
        state.evolve(created_at=datetime(2020, 1, 1, tzinfo=timezone.utc))


def test_state_is_immutable():
    state = ProgressState.new(1, NOW)

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.interval = 10  # type: ignore[misc]


def test_naive_datetimes_become_utc():
    state = ProgressState(
        card_id=1,
        last_review_date=datetime(2024, 1, 1, 8, 0),
        next_review_date=datetime(2024, 1, 2, 8, 0),
        created_at=datetime(2023, 12, 31),
    )

    assert state.last_review_date.tzinfo is timezone.utc
    assert state.next_review_date == datetime(2024, 1, 2, 8, 0, tzinfo=timezone.utc)
    assert state.created_at.tzinfo is timezone.utc


def test_missing_next_review_date_is_allowed():
    state = ProgressState(card_id=1, next_review_date=None)

    assert state.next_review_date is None
