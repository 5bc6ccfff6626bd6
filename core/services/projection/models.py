from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from core.models import GroupMode


@dataclass(frozen=True)
class RoleLoad:
    role: str
    remaining_mandays: float
    available_fte: float


@dataclass(frozen=True)
class RoleGroup:
    mode: GroupMode
    roles: Tuple[RoleLoad, ...]

    @staticmethod
    def parallel(*roles: RoleLoad) -> "RoleGroup":
        return RoleGroup(mode=GroupMode.PARALLEL, roles=tuple(roles))

    @staticmethod
    def sequential(*roles: RoleLoad) -> "RoleGroup":
        return RoleGroup(mode=GroupMode.SEQUENTIAL, roles=tuple(roles))


@dataclass(frozen=True)
class RoleDuration:
    role: str
    group_index: int
    remaining_mandays: float
    effective_fte: float
    used_default_fte: bool
    duration_days: float
    start_offset_days: float
    finish_offset_days: float
    start_date: date
    finish_date: date


@dataclass(frozen=True)
class DeliveryProjection:
    start_date: date
    calculated_delivery_date: date
    total_workdays: int
    total_duration_days: float
    target_delivery_date: Optional[date] = None
    diff_workdays: Optional[int] = None
    role_breakdown: Tuple[RoleDuration, ...] = field(default_factory=tuple)

    @property
    def is_behind_schedule(self) -> bool:
        return self.diff_workdays is not None and self.diff_workdays < 0

    @property
    def slip_workdays(self) -> Optional[int]:
        """Workdays late against the target (positive = late); None without a target."""
        if self.diff_workdays is None:
            return None
        return -self.diff_workdays

    def roles_without_capacity(self) -> List[str]:
        return [row.role for row in self.role_breakdown if row.used_default_fte and row.remaining_mandays > 0]


__all__ = ["RoleLoad", "RoleGroup", "RoleDuration", "DeliveryProjection"]
