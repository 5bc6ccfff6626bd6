# core/services/work_calendar/engine.py
from datetime import date
from typing import FrozenSet, Set

from core.interfaces import WorkingCalendarRepository
from core.models import WorkingCalendar
from core.services.calendar.workdays import (
    WorkdayPredicate,
    add_workdays,
    next_workday,
    workdays_between,
)


class WorkCalendarEngine:
    """Read-only view of a stored working calendar (working weekdays + holidays)."""

    def __init__(self, calendar_repo: WorkingCalendarRepository, calendar_id: str = "default"):
        self._repo: WorkingCalendarRepository = calendar_repo
        self._calendar_id: str = calendar_id

    @property
    def calendar_id(self) -> str:
        return self._calendar_id

    def for_calendar(self, calendar_id: str) -> "WorkCalendarEngine":
        if calendar_id == self._calendar_id:
            return self
        return WorkCalendarEngine(self._repo, calendar_id=calendar_id)

    def _get_calendar(self) -> WorkingCalendar:
        cal = self._repo.get(self._calendar_id)
        if cal is None:
            # ephemeral default, not persisted
            return WorkingCalendar.create_default()
        return cal

    def _get_working_days(self) -> Set[int]:
        return self._get_calendar().working_days

    def _holiday_dates(self, calendar_id: str) -> FrozenSet[date]:
        return frozenset(h.date for h in self._repo.list_holidays(calendar_id))

    def predicate(self) -> WorkdayPredicate:
        """Snapshot of the calendar as a plain `date -> bool` function."""
        cal = self._get_calendar()
        working_days = frozenset(cal.working_days)
        holidays = self._holiday_dates(cal.id) if cal.id else frozenset()

        def is_working_day(d: date) -> bool:
            return d.weekday() in working_days and d not in holidays

        return is_working_day

    def is_working_day(self, d: date) -> bool:
        return self.predicate()(d)

    def next_working_day(self, d: date, include_today: bool = True) -> date:
        return next_workday(d, self.predicate(), include_today=include_today)

    def add_working_days(self, start: date, working_days: int) -> date:
        return add_workdays(start, working_days, self.predicate())

    def working_days_between(self, start: date, end: date) -> int:
        return workdays_between(start, end, self.predicate())
