from __future__ import annotations

from datetime import date

import pytest

from dream_symbols.streak import (
    StreakState,
    milestone_progress,
    motivational_message,
    next_milestone,
    reached_milestone,
)

DAY = date(2026, 3, 10)


def test_first_log_starts_streak():
    state = StreakState().log(DAY)

    assert state == StreakState(current=1, best=1, last_log_day=DAY)


def test_consecutive_days_extend_streak():
    state = StreakState()
    for offset in range(5):
        state = state.log(date(2026, 3, 10 + offset))

    assert state.current == 5
    assert state.best == 5


def test_second_entry_same_day_counts_once():
    state = StreakState().log(DAY)

    assert state.log(DAY) is state


def test_gap_resets_but_keeps_best():
    state = StreakState(current=7, best=7, last_log_day=date(2026, 3, 1)).log(DAY)

    assert state.current == 1
    assert state.best == 7


def test_older_day_never_rewinds_streak():
    state = StreakState(current=3, best=3, last_log_day=DAY)

    assert state.log(date(2026, 3, 8)) is state


def test_streak_is_active_through_the_next_day():
    state = StreakState(current=4, best=4, last_log_day=date(2026, 3, 9))

    assert state.active(DAY) == 4
    assert state.at_risk(DAY) is True
    assert state.active(date(2026, 3, 11)) == 0
    assert StreakState(current=4, best=4, last_log_day=DAY).at_risk(DAY) is False


def test_document_roundtrip_and_defaults():
    state = StreakState(current=2, best=5, last_log_day=DAY)

    assert state.to_document() == {"streak": 2, "best_streak": 5, "last_log_date": "2026-03-10"}
    assert StreakState.from_document(state.to_document()) == state
    assert StreakState.from_document({}) == StreakState()


@pytest.mark.parametrize(
    "streak,expected",
    [(0, 10), (9, 10), (10, 21), (59, 60), (60, 90), (90, None), (120, None)],
)
def test_next_milestone(streak, expected):
    assert next_milestone(streak) == expected


def test_milestone_progress_is_relative_to_previous_milestone():
    assert milestone_progress(0) == 0.0
    assert milestone_progress(5) == pytest.approx(0.5)
    assert milestone_progress(15) == pytest.approx(5 / 11)
    assert milestone_progress(90) == 1.0


def test_reached_milestone_only_on_the_day_it_is_hit():
    before = StreakState(current=9, best=9, last_log_day=date(2026, 3, 9))
    after = before.log(DAY)

    assert reached_milestone(before, after) == 10
    assert reached_milestone(after, after.log(DAY)) is None


@pytest.mark.parametrize(
    "streak,fragment",
    [
        (0, "Start your dream journey"),
        (2, "Great start"),
        (5, "solid streak"),
        (8, "Just 2 more days"),
        (15, "healthy habit"),
        (40, "dream logging master"),
        (75, "extraordinary"),
    ],
)
def test_motivational_message_tiers(streak, fragment):
    assert fragment in motivational_message(streak)
