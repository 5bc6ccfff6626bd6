from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List

from core.services.delivery.models import ProjectDelivery


@dataclass
class BurndownPoint:
    day: date
    role_percent: Dict[str, float] = field(default_factory=dict)
    percent_done: float = 0.0
    remaining_mandays: float = 0.0
    ideal_percent: float = 0.0


@dataclass
class DashboardData:
    delivery: ProjectDelivery
    burndown: List[BurndownPoint]
    alerts: List[str]

    @property
    def projection(self):
        return self.delivery.projection
