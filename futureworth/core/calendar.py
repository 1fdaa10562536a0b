"""Month-boundary date helpers."""

from __future__ import annotations

from datetime import date, datetime

from dateutil.relativedelta import relativedelta


def month_start(value: date) -> date:
    if isinstance(value, datetime):
        value = value.date()
    return value.replace(day=1)


def current_month_start() -> date:
    return month_start(date.today())


def add_months(start: date, months: int) -> date:
    return month_start(start) + relativedelta(months=months)


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)
