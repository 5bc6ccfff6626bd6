from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Tuple


class CapacitySource(str, Enum):
    STATIC = "STATIC"
    ALLOCATION = "ALLOCATION"
    DEFAULT = "DEFAULT"


@dataclass(frozen=True)
class DailyCapacity:
    day: date
    fte: float


@dataclass(frozen=True)
class RoleCapacity:
    role: str
    available_fte: float
    source: CapacitySource
    member_ids: Tuple[str, ...] = ()
    daily: Tuple[DailyCapacity, ...] = ()


@dataclass
class MemberCapacityRow:
    member_id: str
    member_name: str
    role: str
    base_fte: float
    allocated_fte: float
    allocation_days: int = 0


@dataclass
class TeamCapacity:
    date_from: date
    date_to: date
    total_fte: float
    members: List[MemberCapacityRow] = field(default_factory=list)


__all__ = ["CapacitySource", "DailyCapacity", "RoleCapacity", "MemberCapacityRow", "TeamCapacity"]
