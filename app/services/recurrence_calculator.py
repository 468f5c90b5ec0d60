"""
Recurrence Calculator

Computes the next due date of a recurring task from its recurrence rule.
Everything here is pure: no I/O, no clock reads, same input -> same output.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

from app.models.recurrence_rule import RecurrenceRule, RecurrenceUnit, WEEKDAY_NAMES

DateLike = Union[date, datetime]

# Upper bound of the day-by-day weekly scan (one year)
MAX_WEEKLY_SCAN_DAYS = 366

SATURDAY = 5


def to_date(value: DateLike) -> date:
    """Normalize a date or datetime to its calendar day (midnight)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def add_months(start: date, months: int) -> date:
    """
    Add calendar months, clamping to the last day of the target month.

    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    max_day = calendar.monthrange(year, month)[1]
    return start.replace(year=year, month=month, day=min(start.day, max_day))


def _next_by_days(anchor: date, reference: date, interval: int) -> date:
    if anchor > reference:
        return anchor
    steps = (reference - anchor).days // interval + 1
    return anchor + timedelta(days=steps * interval)


def _next_by_months(anchor: date, reference: date, months: int) -> date:
    # Each candidate is computed from the anchor so month-end clamping never drifts
    step = 0
    candidate = anchor
    while candidate <= reference:
        step += 1
        candidate = add_months(anchor, step * months)
    return candidate


def _next_by_weekdays(anchor: date, reference: date, interval: int, weekdays) -> Optional[date]:
    if not weekdays:
        return None

    candidate = anchor
    for _ in range(MAX_WEEKLY_SCAN_DAYS):
        if WEEKDAY_NAMES[candidate.weekday()] in weekdays and candidate > reference:
            return candidate
        passed_saturday = candidate.weekday() == SATURDAY
        candidate += timedelta(days=1)
        if passed_saturday:
            candidate += timedelta(days=(interval - 1) * 7)
    return None


def next_occurrence(rule: RecurrenceRule, reference_date: DateLike) -> Optional[date]:
    """
    Calculate the next due date strictly after `reference_date`.

    Args:
        rule: Validated recurrence rule
        reference_date: Day to schedule after; time of day is ignored

    Returns:
        The next due date, or None when the series is exhausted or the
        weekly schedule can never match.
    """
    if rule.is_exhausted:
        return None

    reference = to_date(reference_date)
    anchor = to_date(rule.anchor_date) if rule.anchor_date is not None else reference
    interval = rule.interval

    if rule.unit == RecurrenceUnit.DAY:
        return _next_by_days(anchor, reference, interval)
    if rule.unit == RecurrenceUnit.WEEK:
        return _next_by_weekdays(anchor, reference, interval, rule.weekdays)
    if rule.unit == RecurrenceUnit.MONTH:
        return _next_by_months(anchor, reference, interval)
    if rule.unit == RecurrenceUnit.YEAR:
        return _next_by_months(anchor, reference, interval * 12)
    return None
