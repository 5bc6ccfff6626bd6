from __future__ import annotations

import math
from datetime import date
from typing import Iterable, List, Optional, Sequence

from core.models import DEFAULT_ALLOCATION_FTE, GroupMode
from core.services.calendar.workdays import WorkdayPredicate, add_workdays, is_weekday, workdays_between
from core.services.projection.models import DeliveryProjection, RoleDuration, RoleGroup, RoleLoad

# float noise such as 3 / 0.3 == 10.000000000000002 must not cost a whole day
_CEIL_PRECISION = 9


def ceil_workdays(days: float) -> int:
    if days <= 0:
        return 0
    return int(math.ceil(round(days, _CEIL_PRECISION)))


class DeliveryProjector:
    """
    Projects a completion date from remaining effort and capacity.

    Role groups run one after another. Inside a PARALLEL group every role
    starts together and the group lasts as long as its slowest role; inside a
    SEQUENTIAL group roles chain in the given order. Only the grand total is
    rounded up to whole workdays.

    The projector never performs I/O and keeps no state between calls.
    """

    def __init__(
        self,
        default_fte: float = DEFAULT_ALLOCATION_FTE,
        is_workday: WorkdayPredicate = is_weekday,
    ):
        if default_fte <= 0:
            raise ValueError("default_fte must be positive.")
        self._default_fte = float(default_fte)
        self._is_workday = is_workday

    @property
    def default_fte(self) -> float:
        return self._default_fte

    def _effective_fte(self, load: RoleLoad) -> tuple[float, bool]:
        fte = float(load.available_fte or 0.0)
        if fte <= 0:
            return self._default_fte, True
        return fte, False

    def role_duration(self, load: RoleLoad) -> float:
        remaining = max(0.0, float(load.remaining_mandays or 0.0))
        if remaining == 0:
            return 0.0
        fte, _ = self._effective_fte(load)
        return remaining / fte

    @staticmethod
    def group_duration(mode: GroupMode, durations: Iterable[float]) -> float:
        values = list(durations)
        if not values:
            return 0.0
        if mode == GroupMode.SEQUENTIAL:
            return sum(values)
        return max(values)

    def project(
        self,
        groups: Sequence[RoleGroup],
        start_date: date,
        target_delivery_date: Optional[date] = None,
    ) -> DeliveryProjection:
        breakdown: List[RoleDuration] = []
        offset = 0.0

        for group_index, group in enumerate(groups):
            durations = [self.role_duration(load) for load in group.roles]
            role_offset = offset
            for load, duration in zip(group.roles, durations):
                fte, used_default = self._effective_fte(load)
                begin = role_offset if group.mode == GroupMode.SEQUENTIAL else offset
                finish = begin + duration
                breakdown.append(
                    RoleDuration(
                        role=load.role,
                        group_index=group_index,
                        remaining_mandays=max(0.0, float(load.remaining_mandays or 0.0)),
                        effective_fte=fte,
                        used_default_fte=used_default,
                        duration_days=duration,
                        start_offset_days=begin,
                        finish_offset_days=finish,
                        start_date=add_workdays(start_date, ceil_workdays(begin), self._is_workday),
                        finish_date=add_workdays(start_date, ceil_workdays(finish), self._is_workday),
                    )
                )
                if group.mode == GroupMode.SEQUENTIAL:
                    role_offset = finish
            offset += self.group_duration(group.mode, durations)

        total_workdays = ceil_workdays(offset)
        calculated = add_workdays(start_date, total_workdays, self._is_workday)

        diff: Optional[int] = None
        if target_delivery_date is not None:
            diff = workdays_between(calculated, target_delivery_date, self._is_workday)

        return DeliveryProjection(
            start_date=start_date,
            calculated_delivery_date=calculated,
            total_workdays=total_workdays,
            total_duration_days=offset,
            target_delivery_date=target_delivery_date,
            diff_workdays=diff,
            role_breakdown=tuple(breakdown),
        )


def project_delivery(
    groups: Sequence[RoleGroup],
    start_date: date,
    target_delivery_date: Optional[date] = None,
    *,
    default_fte: float = DEFAULT_ALLOCATION_FTE,
    is_workday: WorkdayPredicate = is_weekday,
) -> DeliveryProjection:
    return DeliveryProjector(default_fte=default_fte, is_workday=is_workday).project(
        groups, start_date, target_delivery_date
    )


__all__ = ["DeliveryProjector", "project_delivery", "ceil_workdays"]
