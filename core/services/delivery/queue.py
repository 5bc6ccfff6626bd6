from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional

from core.models import QUEUED_PROJECT_STATUSES, Project, ProjectStatus, StartDatePolicy
from core.services.calendar.workdays import next_workday
from core.services.delivery.models import AverageSlipResult, PriorityWindow

logger = logging.getLogger(__name__)

_STATUS_RANK = {status: rank for rank, status in enumerate(QUEUED_PROJECT_STATUSES)}


class DeliveryQueueMixin:
    def priority_schedule(self, scope_id: str, *, today: Optional[date] = None) -> List[PriorityWindow]:
        """
        Lay the scope's open projects end to end in priority order.

        Projects in progress start when they actually started (or today);
        the first queued project starts today and every other one starts on
        the workday after its predecessor's projected end.
        """
        today = today or date.today()
        settings = self._settings_for(scope_id)
        predicate = self.workday_predicate(settings)

        queued: List[Project] = [
            p for p in self._project_repo.list_by_scope(scope_id) if p.status in _STATUS_RANK
        ]
        queued.sort(key=lambda p: (p.priority, _STATUS_RANK[p.status], p.created_at))

        windows: List[PriorityWindow] = []
        for index, project in enumerate(queued):
            blocking: Optional[str] = None
            if project.status == ProjectStatus.IN_PROGRESS:
                start = project.started_at or today
            elif index == 0:
                start = today
            else:
                previous = windows[-1]
                start = next_workday(previous.end_date, predicate, include_today=False)
                blocking = previous.project_name

            delivery = self._deliver(project, start, settings, predicate)
            windows.append(
                PriorityWindow(
                    project_id=project.id,
                    project_name=project.name,
                    priority=project.priority,
                    status=project.status,
                    start_date=start,
                    end_date=delivery.projection.calculated_delivery_date,
                    total_workdays=delivery.projection.total_workdays,
                    diff_workdays=delivery.projection.diff_workdays,
                    blocking_project_name=blocking,
                )
            )
        return windows

    def average_slip(
        self,
        scope_id: str,
        *,
        today: Optional[date] = None,
        start_policy: StartDatePolicy = StartDatePolicy.TODAY,
    ) -> AverageSlipResult:
        deliveries = self.scope_overview(scope_id, today=today, start_policy=start_policy)
        diffs = [
            d.projection.diff_workdays for d in deliveries if d.projection.diff_workdays is not None
        ]
        if not diffs:
            return AverageSlipResult(
                average_slip=0,
                total_projects=len(deliveries),
                delayed_projects=0,
                on_time_projects=0,
                ahead_projects=0,
            )

        # half-up rounding, so -2.5 -> -2 and 2.5 -> 3
        average = int(math.floor(sum(diffs) / len(diffs) + 0.5))
        result = AverageSlipResult(
            average_slip=average,
            total_projects=len(deliveries),
            delayed_projects=sum(1 for d in diffs if d < 0),
            on_time_projects=sum(1 for d in diffs if d == 0),
            ahead_projects=sum(1 for d in diffs if d > 0),
        )
        logger.info(
            "Average slip for scope %s: %s workdays over %d project(s)",
            scope_id,
            result.average_slip,
            len(diffs),
        )
        return result


__all__ = ["DeliveryQueueMixin"]
