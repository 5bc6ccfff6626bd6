from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from core.services.capacity import CapacityService
from core.services.dashboard import DashboardService
from core.services.delivery import DeliveryService
from core.services.project import ProjectService
from core.services.scope import ScopeService
from core.services.team import TeamService
from core.services.work_calendar import WorkCalendarEngine, WorkCalendarService
from infra.db.calendar import SqlAlchemyWorkingCalendarRepository
from infra.db.project import (
    SqlAlchemyProgressRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyRoleDependencyRepository,
    SqlAlchemyRoleEffortRepository,
)
from infra.db.scope import SqlAlchemyScopeRepository, SqlAlchemyScopeRoleRepository
from infra.db.team import (
    SqlAlchemyPlannedAllocationRepository,
    SqlAlchemyProjectAssignmentRepository,
    SqlAlchemyTeamMemberRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    scope_service: ScopeService
    project_service: ProjectService
    team_service: TeamService
    capacity_service: CapacityService
    work_calendar_engine: WorkCalendarEngine
    work_calendar_service: WorkCalendarService
    delivery_service: DeliveryService
    dashboard_service: DashboardService

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "scope_service": self.scope_service,
            "project_service": self.project_service,
            "team_service": self.team_service,
            "capacity_service": self.capacity_service,
            "work_calendar_engine": self.work_calendar_engine,
            "work_calendar_service": self.work_calendar_service,
            "delivery_service": self.delivery_service,
            "dashboard_service": self.dashboard_service,
        }


def build_service_graph(session: Session) -> ServiceGraph:
    scope_repo = SqlAlchemyScopeRepository(session)
    role_repo = SqlAlchemyScopeRoleRepository(session)
    project_repo = SqlAlchemyProjectRepository(session)
    effort_repo = SqlAlchemyRoleEffortRepository(session)
    dependency_repo = SqlAlchemyRoleDependencyRepository(session)
    progress_repo = SqlAlchemyProgressRepository(session)
    member_repo = SqlAlchemyTeamMemberRepository(session)
    assignment_repo = SqlAlchemyProjectAssignmentRepository(session)
    allocation_repo = SqlAlchemyPlannedAllocationRepository(session)
    work_calendar_repo = SqlAlchemyWorkingCalendarRepository(session)

    work_calendar_engine = WorkCalendarEngine(work_calendar_repo, calendar_id="default")
    work_calendar_service = WorkCalendarService(session, work_calendar_repo, work_calendar_engine)

    scope_service = ScopeService(session, scope_repo, role_repo)
    project_service = ProjectService(
        session,
        scope_repo,
        role_repo,
        project_repo,
        effort_repo,
        dependency_repo,
        progress_repo,
        assignment_repo,
        allocation_repo,
    )
    team_service = TeamService(
        session,
        member_repo,
        role_repo,
        project_repo,
        assignment_repo,
        allocation_repo,
    )
    capacity_service = CapacityService(member_repo, assignment_repo, allocation_repo)
    delivery_service = DeliveryService(
        scope_repo=scope_repo,
        role_repo=role_repo,
        project_repo=project_repo,
        effort_repo=effort_repo,
        dependency_repo=dependency_repo,
        capacity_service=capacity_service,
        calendar=work_calendar_engine,
    )
    dashboard_service = DashboardService(
        project_service=project_service,
        delivery_service=delivery_service,
    )

    return ServiceGraph(
        session=session,
        scope_service=scope_service,
        project_service=project_service,
        team_service=team_service,
        capacity_service=capacity_service,
        work_calendar_engine=work_calendar_engine,
        work_calendar_service=work_calendar_service,
        delivery_service=delivery_service,
        dashboard_service=dashboard_service,
    )
