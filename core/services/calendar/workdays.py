from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

from core.exceptions import BusinessRuleError

WorkdayPredicate = Callable[[date], bool]

# a predicate that never matches would otherwise loop forever
MAX_CALENDAR_SCAN_DAYS = 366 * 10


def is_weekday(d: date) -> bool:
    return d.weekday() < 5


def _step(current: date, direction: int, scanned: int) -> tuple[date, int]:
    scanned += 1
    if scanned > MAX_CALENDAR_SCAN_DAYS:
        raise BusinessRuleError(
            "Working calendar has no working days in range.",
            code="CALENDAR_NO_WORKDAYS",
        )
    return current + timedelta(days=direction), scanned


def add_workdays(start: date, workdays: int, is_workday: WorkdayPredicate = is_weekday) -> date:
    """
    Move `workdays` working days away from `start`.

    The start day itself is never counted: adding 1 to a Friday gives the
    following Monday. Zero returns `start` unchanged even when it is not a
    working day; for any other value the result is always a working day.
    """
    if workdays == 0:
        return start

    direction = 1 if workdays > 0 else -1
    remaining = abs(int(workdays))
    current = start
    scanned = 0
    while remaining > 0:
        current, scanned = _step(current, direction, scanned)
        if is_workday(current):
            remaining -= 1
    return current


def workdays_between(start: date, end: date, is_workday: WorkdayPredicate = is_weekday) -> int:
    """
    Signed number of working days in the half-open interval (start, end].

    Positive when `end` is after `start`, negative when before, 0 when equal.
    """
    if start == end:
        return 0
    sign = 1 if end > start else -1
    lo, hi = (start, end) if sign > 0 else (end, start)

    count = 0
    current = lo + timedelta(days=1)
    while current <= hi:
        if is_workday(current):
            count += 1
        current += timedelta(days=1)
    return sign * count


def next_workday(d: date, is_workday: WorkdayPredicate = is_weekday, include_today: bool = True) -> date:
    current = d if include_today else d + timedelta(days=1)
    scanned = 0
    while not is_workday(current):
        current, scanned = _step(current, 1, scanned)
    return current


__all__ = [
    "WorkdayPredicate",
    "MAX_CALENDAR_SCAN_DAYS",
    "is_weekday",
    "add_workdays",
    "workdays_between",
    "next_workday",
]
