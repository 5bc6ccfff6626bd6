from __future__ import annotations

from core.interfaces import (
    ProjectRepository,
    RoleDependencyRepository,
    RoleEffortRepository,
    ScopeRepository,
    ScopeRoleRepository,
)
from core.services.capacity.service import CapacityService
from core.services.delivery.project_delivery import ProjectDeliveryMixin
from core.services.delivery.queue import DeliveryQueueMixin
from core.services.work_calendar.engine import WorkCalendarEngine


class DeliveryService(ProjectDeliveryMixin, DeliveryQueueMixin):
    """Delivery service orchestrator: reads stored state, resolves capacity, runs the projector."""

    def __init__(
        self,
        scope_repo: ScopeRepository,
        role_repo: ScopeRoleRepository,
        project_repo: ProjectRepository,
        effort_repo: RoleEffortRepository,
        dependency_repo: RoleDependencyRepository,
        capacity_service: CapacityService,
        calendar: WorkCalendarEngine,
    ):
        self._scope_repo: ScopeRepository = scope_repo
        self._role_repo: ScopeRoleRepository = role_repo
        self._project_repo: ProjectRepository = project_repo
        self._effort_repo: RoleEffortRepository = effort_repo
        self._dependency_repo: RoleDependencyRepository = dependency_repo
        self._capacity: CapacityService = capacity_service
        self._calendar: WorkCalendarEngine = calendar


__all__ = ["DeliveryService"]
