"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta

DAY_KEY_FORMAT = "%Y-%m-%d"


def day_key(day: date) -> str:
    """Format a date as the "YYYY-MM-DD" key used by the streak history"""
    return day.strftime(DAY_KEY_FORMAT)


def history_cutoff_key(today: date, retention_days: int) -> str:
    """Oldest day key still retained when keeping `retention_days` of history"""
    return day_key(today - timedelta(days=retention_days))


def days_in_month(day: date) -> int:
    """Number of calendar days in the month containing `day`"""
    return calendar.monthrange(day.year, day.month)[1]


def days_remaining_in_month(day: date) -> int:
    """Days left in the month, counting `day` itself (never less than 1)"""
    return max(days_in_month(day) - day.day + 1, 1)


def is_same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month
