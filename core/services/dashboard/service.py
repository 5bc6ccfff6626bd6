from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from core.models import StartDatePolicy
from core.services.dashboard.alerts import build_alerts
from core.services.dashboard.burndown import build_progress_series
from core.services.dashboard.models import DashboardData
from core.services.delivery.service import DeliveryService
from core.services.project.service import ProjectService

logger = logging.getLogger(__name__)


class DashboardService:
    """Aggregates what the burndown dashboard shows for one project."""

    def __init__(self, project_service: ProjectService, delivery_service: DeliveryService):
        self._projects = project_service
        self._delivery = delivery_service

    def get_project_dashboard(
        self,
        project_id: str,
        *,
        today: Optional[date] = None,
        start_policy: StartDatePolicy = StartDatePolicy.PROJECT_START,
    ) -> DashboardData:
        today = today or date.today()
        delivery = self._delivery.project_delivery(project_id, today=today, start_policy=start_policy)
        project = self._projects.get_project(project_id)
        efforts = self._projects.list_role_efforts(project_id)
        history = self._projects.list_progress_history(project_id)

        projection = delivery.projection
        chart_end = projection.calculated_delivery_date
        if projection.target_delivery_date and projection.target_delivery_date > chart_end:
            chart_end = projection.target_delivery_date

        burndown = build_progress_series(efforts, history, project.created_at.date(), chart_end)
        alerts = build_alerts(project, efforts, delivery, today)
        logger.debug("Dashboard for %s: %d point(s), %d alert(s)", project.name, len(burndown), len(alerts))
        return DashboardData(delivery=delivery, burndown=burndown, alerts=alerts)
