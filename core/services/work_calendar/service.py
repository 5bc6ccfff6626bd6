# core/services/work_calendar/service.py
from __future__ import annotations

import logging
from datetime import date
from typing import List, Set

from sqlalchemy.orm import Session

from core.exceptions import ValidationError
from core.interfaces import WorkingCalendarRepository
from core.models import Holiday, WorkingCalendar
from core.services.work_calendar.engine import WorkCalendarEngine

logger = logging.getLogger(__name__)


class WorkCalendarService:
    """
    High-level API for configuring the working calendar.
    The engine is read-only; all writes go through this service.
    """

    def __init__(
        self,
        session: Session,
        calendar_repo: WorkingCalendarRepository,
        engine: WorkCalendarEngine,
    ):
        self._session: Session = session
        self._repo: WorkingCalendarRepository = calendar_repo
        self._engine: WorkCalendarEngine = engine

    def _ensure_calendar(self) -> WorkingCalendar:
        cal = self._repo.get(self._engine.calendar_id)
        if cal is None:
            cal = WorkingCalendar(id=self._engine.calendar_id, name="Default")
            self._repo.upsert(cal)
            self._session.commit()
        return cal

    def get_calendar(self) -> WorkingCalendar:
        return self._ensure_calendar()

    def set_working_days(self, working_days: Set[int], hours_per_day: float | None = None) -> WorkingCalendar:
        days = set(working_days or ())
        if not days:
            raise ValidationError("At least one working day is required.", code="CALENDAR_NO_WORKDAYS")
        if any(d < 0 or d > 6 for d in days):
            raise ValidationError("Working days must be weekday numbers 0-6.", code="CALENDAR_INVALID_DAY")

        cal = self._ensure_calendar()
        cal.working_days = days
        if hours_per_day is not None:
            if hours_per_day <= 0:
                raise ValidationError("hours_per_day must be positive.")
            cal.hours_per_day = hours_per_day
        try:
            self._repo.upsert(cal)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Working days of calendar %s set to %s", cal.id, sorted(days))
        return cal

    def list_holidays(self) -> List[Holiday]:
        cal = self._ensure_calendar()
        return sorted(self._repo.list_holidays(cal.id), key=lambda h: h.date)

    def add_holiday(self, date_: date, name: str = "") -> Holiday:
        cal = self._ensure_calendar()
        if any(h.date == date_ for h in self._repo.list_holidays(cal.id)):
            raise ValidationError(f"{date_.isoformat()} is already a non-working day.", code="HOLIDAY_DUPLICATE")
        holiday = Holiday.create(calendar_id=cal.id, date=date_, name=name.strip())
        try:
            self._repo.add_holiday(holiday)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Added non-working day %s (%s)", date_.isoformat(), holiday.name or "-")
        return holiday

    def delete_holiday(self, holiday_id: str) -> None:
        try:
            self._repo.delete_holiday(holiday_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
