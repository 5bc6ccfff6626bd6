from .workdays import (
    MAX_CALENDAR_SCAN_DAYS,
    WorkdayPredicate,
    add_workdays,
    is_weekday,
    next_workday,
    workdays_between,
)

__all__ = [
    "MAX_CALENDAR_SCAN_DAYS",
    "WorkdayPredicate",
    "add_workdays",
    "is_weekday",
    "next_workday",
    "workdays_between",
]
