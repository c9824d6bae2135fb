"""Unit tests for the spending streak state machine"""

import pytest
from datetime import timedelta
from penny_engine.domain.models import SpendingStreak
from penny_engine.domain.streak import (
    advance_streak,
    daily_budget_allowance,
    is_within_daily_budget,
    prune_history,
)
from penny_engine.utils.date_utils import day_key


def test_compliant_yesterday_extends_streak(today, make_snapshot):
    yesterday = today - timedelta(days=1)
    streak = SpendingStreak(
        current_streak=0,
        longest_streak=0,
        last_check_date=yesterday,
        daily_budget_history={day_key(yesterday): True},
    )

    advanced = advance_streak(streak, today, make_snapshot())

    assert advanced.current_streak == 1
    assert advanced.longest_streak >= 1
    assert advanced.last_check_date == today


def test_missing_yesterday_resets_streak(today, make_snapshot):
    """No record for yesterday counts as over budget"""
    two_days_ago = today - timedelta(days=2)
    streak = SpendingStreak(
        current_streak=5,
        longest_streak=8,
        last_check_date=two_days_ago,
        daily_budget_history={day_key(two_days_ago): True},
    )

    advanced = advance_streak(streak, today, make_snapshot())

    assert advanced.current_streak == 0
    assert advanced.longest_streak == 8


def test_over_budget_yesterday_resets_streak(today, make_snapshot):
    yesterday = today - timedelta(days=1)
    streak = SpendingStreak(
        current_streak=3,
        longest_streak=3,
        last_check_date=yesterday,
        daily_budget_history={day_key(yesterday): False},
    )

    assert advance_streak(streak, today, make_snapshot()).current_streak == 0


def test_longest_streak_follows_new_record(today, make_snapshot):
    yesterday = today - timedelta(days=1)
    streak = SpendingStreak(
        current_streak=4,
        longest_streak=4,
        last_check_date=yesterday,
        daily_budget_history={day_key(yesterday): True},
    )

    advanced = advance_streak(streak, today, make_snapshot())

    assert advanced.current_streak == 5
    assert advanced.longest_streak == 5


def test_second_advance_same_day_is_a_no_op(today, make_snapshot):
    yesterday = today - timedelta(days=1)
    streak = SpendingStreak(last_check_date=yesterday, daily_budget_history={day_key(yesterday): True})

    first = advance_streak(streak, today, make_snapshot(today_spending=0.0))
    # Spending more later in the day does not rewrite today's record
    second = advance_streak(first, today, make_snapshot(today_spending=10_000.0))

    assert second is first
    assert second.current_streak == 1
    assert second.daily_budget_history[day_key(today)] is True


def test_first_ever_advance_starts_from_zero(today, make_snapshot):
    advanced = advance_streak(SpendingStreak(), today, make_snapshot())

    assert advanced.current_streak == 0
    assert advanced.longest_streak == 0
    assert advanced.daily_budget_history == {day_key(today): True}


def test_today_is_recorded_from_daily_allowance(today, make_snapshot):
    """500 left over 16 days allows 31.25 today"""
    within = advance_streak(SpendingStreak(), today, make_snapshot(today_spending=31.25))
    over = advance_streak(SpendingStreak(), today, make_snapshot(today_spending=31.26))

    assert within.daily_budget_history[day_key(today)] is True
    assert over.daily_budget_history[day_key(today)] is False


def test_advance_prunes_entries_older_than_ninety_days(today, make_snapshot):
    stale = day_key(today - timedelta(days=91))
    oldest_kept = day_key(today - timedelta(days=90))
    streak = SpendingStreak(
        last_check_date=today - timedelta(days=1),
        daily_budget_history={stale: True, oldest_kept: True},
    )

    advanced = advance_streak(streak, today, make_snapshot())

    assert stale not in advanced.daily_budget_history
    assert oldest_kept in advanced.daily_budget_history
    # The input value is left untouched
    assert stale in streak.daily_budget_history


def test_prune_history_is_idempotent(today):
    history = {day_key(today - timedelta(days=d)): d % 2 == 0 for d in range(0, 120, 3)}

    once = prune_history(history, today, retention_days=90)
    twice = prune_history(once, today, retention_days=90)

    assert set(once) == set(twice)
    assert all(key >= day_key(today - timedelta(days=90)) for key in once)


def test_longest_never_trails_current_over_many_days(today, make_snapshot):
    streak = SpendingStreak()
    spending_by_day = [0, 0, 0, 500, 0, 0, 0, 0, 900, 0, 0]
    start = today - timedelta(days=len(spending_by_day))

    for offset, spent in enumerate(spending_by_day):
        day = start + timedelta(days=offset)
        streak = advance_streak(streak, day, make_snapshot(today_spending=spent))
        assert streak.longest_streak >= streak.current_streak

    assert streak.longest_streak == 4
    assert streak.current_streak == 1


@pytest.mark.parametrize(
    "spending,days_remaining,today_spending,expected",
    [
        (400.0, 10, 60.0, True),
        (400.0, 10, 60.01, False),
        (1000.0, 5, 0.0, True),  # nothing left but nothing spent
        (1100.0, 5, 0.0, False),  # already over the month
        (400.0, 0, 600.0, True),  # zero days clamps to one
    ],
)
def test_is_within_daily_budget(make_snapshot, spending, days_remaining, today_spending, expected):
    ledger = make_snapshot(
        total_monthly_spending=spending,
        days_remaining=days_remaining,
        today_spending=today_spending,
    )
    assert is_within_daily_budget(ledger) is expected


def test_daily_allowance(make_snapshot):
    assert daily_budget_allowance(make_snapshot(total_monthly_spending=400.0, days_remaining=10)) == pytest.approx(60.0)


def test_zero_retention_keeps_only_today(today):
    history = {day_key(today): True, day_key(today - timedelta(days=1)): True}

    assert prune_history(history, today, retention_days=0) == {day_key(today): True}
