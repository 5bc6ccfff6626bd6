from __future__ import annotations

from typing import Set

from core.models import Holiday, WorkingCalendar
from infra.db.models import HolidayORM, WorkingCalendarORM


def working_days_to_str(days: Set[int]) -> str:
    return ",".join(str(day) for day in sorted(days))


def calendar_from_orm(obj: WorkingCalendarORM) -> WorkingCalendar:
    days: Set[int] = set()
    if obj.working_days:
        for part in obj.working_days.split(","):
            part = part.strip()
            if part:
                days.add(int(part))
    return WorkingCalendar(
        id=obj.id,
        name=obj.name,
        working_days=days,
        hours_per_day=obj.hours_per_day,
    )


def calendar_to_orm(calendar: WorkingCalendar) -> WorkingCalendarORM:
    return WorkingCalendarORM(
        id=calendar.id,
        name=calendar.name,
        working_days=working_days_to_str(calendar.working_days),
        hours_per_day=calendar.hours_per_day,
    )


def holiday_from_orm(obj: HolidayORM) -> Holiday:
    return Holiday(
        id=obj.id,
        calendar_id=obj.calendar_id,
        date=obj.date,
        name=obj.name,
    )


def holiday_to_orm(holiday: Holiday) -> HolidayORM:
    return HolidayORM(
        id=holiday.id,
        calendar_id=holiday.calendar_id,
        date=holiday.date,
        name=holiday.name,
    )


__all__ = [
    "working_days_to_str",
    "calendar_from_orm",
    "calendar_to_orm",
    "holiday_from_orm",
    "holiday_to_orm",
]
