from .burndown import build_progress_series
from .models import BurndownPoint, DashboardData
from .service import DashboardService

__all__ = [
    "DashboardService",
    "DashboardData",
    "BurndownPoint",
    "build_progress_series",
]
