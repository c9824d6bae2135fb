"""Spending streak tracking - once-per-day advance over a compliance history"""

from dataclasses import replace
from datetime import date, timedelta
from typing import Dict, Optional

from penny_engine.config import settings
from penny_engine.domain.models import LedgerSnapshot, SpendingStreak
from penny_engine.utils.date_utils import day_key, history_cutoff_key


def daily_budget_allowance(ledger: LedgerSnapshot) -> float:
    """Remaining monthly budget spread evenly over the days left, today included"""
    return ledger.monthly_budget_remaining / max(ledger.days_remaining_in_month, 1)


def is_within_daily_budget(ledger: LedgerSnapshot) -> bool:
    """True when today's spending fits the pro-rated daily allowance"""
    return ledger.today_spending <= daily_budget_allowance(ledger)


def prune_history(
    history: Dict[str, bool], today: date, retention_days: Optional[int] = None
) -> Dict[str, bool]:
    """Drop entries older than `retention_days` before `today`."""
    cutoff = history_cutoff_key(
        today, settings.streak_history_days if retention_days is None else retention_days
    )
    return {key: within for key, within in history.items() if key >= cutoff}


def advance_streak(
    streak: SpendingStreak,
    today: date,
    ledger: LedgerSnapshot,
    retention_days: Optional[int] = None,
) -> SpendingStreak:
    """
    Advance the streak to `today`; a no-op when already checked today.

    Yesterday's recorded compliance extends the streak, anything else
    (including no record at all) resets it. Today's record is a snapshot of
    the daily allowance check at the time of the call.
    """
    if streak.last_check_date == today:
        return streak

    history = prune_history(streak.daily_budget_history, today, retention_days)
    yesterday = today - timedelta(days=1)

    if streak.was_within_budget(yesterday):
        current = streak.current_streak + 1
        longest = max(streak.longest_streak, current)
    else:
        current = 0
        longest = streak.longest_streak

    history[day_key(today)] = is_within_daily_budget(ledger)

    return replace(
        streak,
        current_streak=current,
        longest_streak=longest,
        last_check_date=today,
        daily_budget_history=history,
    )
