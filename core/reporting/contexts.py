from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.services.dashboard import BurndownPoint
from core.services.delivery import AverageSlipResult, PriorityWindow, ProjectDelivery


@dataclass
class BurndownChartContext:
    project_name: str
    points: List[BurndownPoint]
    calculated_delivery_date: date
    target_delivery_date: Optional[date]
    today: date
    role_colors: dict = field(default_factory=dict)


@dataclass
class ScopeReportContext:
    scope_name: str
    as_of: date
    deliveries: List[ProjectDelivery]
    queue: List[PriorityWindow]
    slip: AverageSlipResult
