from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional

from core.exceptions import NotFoundError
from core.interfaces import (
    ProjectRepository,
    RoleDependencyRepository,
    RoleEffortRepository,
    ScopeRepository,
    ScopeRoleRepository,
)
from core.models import (
    CLOSED_PROJECT_STATUSES,
    Project,
    RoleEffort,
    ScopeSettings,
    StartDatePolicy,
)
from core.services.calendar.workdays import WorkdayPredicate, is_weekday
from core.services.capacity.service import CapacityService
from core.services.delivery.graph import build_role_groups
from core.services.delivery.models import ProjectDelivery
from core.services.projection.models import RoleLoad
from core.services.projection.projector import DeliveryProjector
from core.services.work_calendar.engine import WorkCalendarEngine

logger = logging.getLogger(__name__)

CAPACITY_WINDOW_DAYS = 365


class ProjectDeliveryMixin:
    _scope_repo: ScopeRepository
    _role_repo: ScopeRoleRepository
    _project_repo: ProjectRepository
    _effort_repo: RoleEffortRepository
    _dependency_repo: RoleDependencyRepository
    _capacity: CapacityService
    _calendar: WorkCalendarEngine

    def _require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def _settings_for(self, scope_id: str) -> ScopeSettings:
        return self._scope_repo.get_settings(scope_id) or ScopeSettings.create_default(scope_id)

    def workday_predicate(self, settings: ScopeSettings) -> WorkdayPredicate:
        if settings.include_holidays:
            return self._calendar.for_calendar(settings.calendar_id).predicate()
        return is_weekday

    @staticmethod
    def resolve_start_date(
        project: Project,
        policy: StartDatePolicy,
        today: date,
        explicit: Optional[date] = None,
    ) -> date:
        if explicit is not None:
            return explicit
        if policy == StartDatePolicy.CREATED:
            return project.created_at.date()
        if policy == StartDatePolicy.PROJECT_START and project.start_date:
            return project.start_date
        return today

    def _ordered_efforts(self, project: Project) -> List[RoleEffort]:
        order = {role.key: role.order_index for role in self._role_repo.list_by_scope(project.scope_id)}
        efforts = self._effort_repo.list_by_project(project.id)
        return sorted(efforts, key=lambda e: (order.get(e.role_key, len(order)), e.role_key))

    def _deliver(
        self,
        project: Project,
        start: date,
        settings: ScopeSettings,
        predicate: WorkdayPredicate,
    ) -> ProjectDelivery:
        efforts = self._ordered_efforts(project)
        role_keys = [e.role_key for e in efforts]
        capacities = self._capacity.resolve(
            project,
            role_keys,
            settings,
            date_from=start,
            date_to=start + timedelta(days=CAPACITY_WINDOW_DAYS),
        )
        loads = [
            RoleLoad(
                role=e.role_key,
                remaining_mandays=e.remaining_mandays,
                available_fte=capacities[e.role_key].available_fte,
            )
            for e in efforts
        ]
        groups = build_role_groups(
            loads,
            self._dependency_repo.list_by_project(project.id),
            project.workflow_mode,
        )
        projector = DeliveryProjector(default_fte=settings.default_allocation_fte, is_workday=predicate)
        projection = projector.project(groups, start, project.delivery_date)
        logger.debug(
            "Projected %s: %s workdays from %s -> %s (diff=%s)",
            project.name,
            projection.total_workdays,
            start.isoformat(),
            projection.calculated_delivery_date.isoformat(),
            projection.diff_workdays,
        )
        return ProjectDelivery(
            project_id=project.id,
            scope_id=project.scope_id,
            project_name=project.name,
            priority=project.priority,
            status=project.status,
            projection=projection,
            groups=groups,
            capacities=capacities,
        )

    def project_delivery(
        self,
        project_id: str,
        *,
        today: Optional[date] = None,
        start_policy: StartDatePolicy = StartDatePolicy.PROJECT_START,
        start_date: Optional[date] = None,
    ) -> ProjectDelivery:
        project = self._require_project(project_id)
        settings = self._settings_for(project.scope_id)
        start = self.resolve_start_date(project, start_policy, today or date.today(), start_date)
        return self._deliver(project, start, settings, self.workday_predicate(settings))

    def scope_overview(
        self,
        scope_id: str,
        *,
        today: Optional[date] = None,
        start_policy: StartDatePolicy = StartDatePolicy.PROJECT_START,
    ) -> List[ProjectDelivery]:
        today = today or date.today()
        settings = self._settings_for(scope_id)
        predicate = self.workday_predicate(settings)
        projects = [
            p for p in self._project_repo.list_by_scope(scope_id)
            if p.status not in CLOSED_PROJECT_STATUSES
        ]
        projects.sort(key=lambda p: (p.priority, p.created_at))
        return [
            self._deliver(p, self.resolve_start_date(p, start_policy, today), settings, predicate)
            for p in projects
        ]


__all__ = ["ProjectDeliveryMixin", "CAPACITY_WINDOW_DAYS"]
