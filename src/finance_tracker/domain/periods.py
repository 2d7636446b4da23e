"""Reporting period boundaries. Every helper takes ``now`` explicitly."""

import calendar
from datetime import date, datetime, timedelta

from finance_tracker.models import ReportPeriod


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def week_start(now: datetime) -> datetime:
    return start_of_day(now) - timedelta(days=7)


def month_start(now: datetime) -> datetime:
    return start_of_day(now).replace(day=1)


def year_start(now: datetime) -> datetime:
    return start_of_day(now).replace(month=1, day=1)


def one_year_ago(now: datetime) -> datetime:
    today = start_of_day(now)
    day = min(today.day, calendar.monthrange(today.year - 1, today.month)[1])
    return today.replace(year=today.year - 1, day=day)


def period_start(period: ReportPeriod, now: datetime) -> datetime:
    if period == "weekly":
        return week_start(now)
    if period == "monthly":
        return month_start(now)
    if period == "ytd":
        return year_start(now)
    if period == "yearly":
        return one_year_ago(now)
    raise ValueError(f"Unknown report period: {period}")


def days_in_month(now: datetime) -> int:
    return calendar.monthrange(now.year, now.month)[1]


def month_key(value: datetime) -> str:
    return f"{value.year}-{value.month:02d}"


def days_until(target: date, now: datetime) -> int:
    """Whole days from ``now`` to ``target``; negative once the date has passed."""
    return (target - now.date()).days
