from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from core.models import ProjectStatus
from core.services.capacity.models import RoleCapacity
from core.services.projection.models import DeliveryProjection, RoleGroup


@dataclass
class ProjectDelivery:
    project_id: str
    scope_id: str
    project_name: str
    priority: int
    status: ProjectStatus
    projection: DeliveryProjection
    groups: List[RoleGroup] = field(default_factory=list)
    capacities: Dict[str, RoleCapacity] = field(default_factory=dict)


@dataclass
class PriorityWindow:
    project_id: str
    project_name: str
    priority: int
    status: ProjectStatus
    start_date: date
    end_date: date
    total_workdays: int
    diff_workdays: Optional[int] = None
    blocking_project_name: Optional[str] = None


@dataclass
class AverageSlipResult:
    average_slip: int
    total_projects: int
    delayed_projects: int
    on_time_projects: int
    ahead_projects: int


__all__ = ["ProjectDelivery", "PriorityWindow", "AverageSlipResult"]
