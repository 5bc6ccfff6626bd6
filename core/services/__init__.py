from .calendar import add_workdays, is_weekday, next_workday, workdays_between
from .projection import DeliveryProjection, DeliveryProjector, RoleGroup, RoleLoad, project_delivery
from .capacity import CapacityService, RoleCapacity
from .work_calendar import WorkCalendarEngine, WorkCalendarService
from .delivery import AverageSlipResult, DeliveryService, PriorityWindow, ProjectDelivery, build_role_groups
from .scope import ScopeService
from .project import ProjectService
from .team import TeamService
from .dashboard import BurndownPoint, DashboardData, DashboardService, build_progress_series

__all__ = [
    "add_workdays",
    "is_weekday",
    "next_workday",
    "workdays_between",
    "DeliveryProjector",
    "DeliveryProjection",
    "RoleGroup",
    "RoleLoad",
    "project_delivery",
    "CapacityService",
    "RoleCapacity",
    "WorkCalendarEngine",
    "WorkCalendarService",
    "DeliveryService",
    "ProjectDelivery",
    "PriorityWindow",
    "AverageSlipResult",
    "build_role_groups",
    "ScopeService",
    "ProjectService",
    "TeamService",
    "DashboardService",
    "DashboardData",
    "BurndownPoint",
    "build_progress_series",
]
