from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import (
    PlannedAllocationRepository,
    ProgressRepository,
    ProjectAssignmentRepository,
    ProjectRepository,
    RoleDependencyRepository,
    RoleEffortRepository,
)
from core.models import (
    ProgressSnapshot,
    Project,
    ProjectStatus,
    RoleDependency,
    RoleEffort,
    WorkflowMode,
    normalize_role_key,
)
from core.services.project.validation import ProjectValidationMixin

logger = logging.getLogger(__name__)


class ProjectLifecycleMixin(ProjectValidationMixin):
    _session: Session
    _project_repo: ProjectRepository
    _effort_repo: RoleEffortRepository
    _dependency_repo: RoleDependencyRepository
    _progress_repo: ProgressRepository
    _assignment_repo: ProjectAssignmentRepository
    _allocation_repo: PlannedAllocationRepository

    def _get_project_or_raise(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def create_project(
        self,
        scope_id: str,
        name: str,
        priority: int | None = None,
        start_date: date | None = None,
        delivery_date: date | None = None,
        workflow_mode: WorkflowMode = WorkflowMode.PARALLEL,
        role_mandays: Dict[str, float] | None = None,
    ) -> Project:
        self._validate_scope_exists(scope_id)
        self._validate_project_name(scope_id, name)
        self._validate_dates(start_date, delivery_date)
        efforts = []
        for role_key, mandays in (role_mandays or {}).items():
            self._require_role(scope_id, role_key)
            efforts.append((normalize_role_key(role_key), self._validate_mandays(mandays)))

        if priority is None:
            existing = self._project_repo.list_by_scope(scope_id)
            priority = max((p.priority for p in existing), default=0) + 1

        project = Project.create(
            scope_id=scope_id,
            name=name.strip(),
            priority=int(priority),
            start_date=start_date,
            delivery_date=delivery_date,
            workflow_mode=WorkflowMode(workflow_mode),
        )
        try:
            self._project_repo.add(project)
            for role_key, mandays in efforts:
                self._effort_repo.upsert(RoleEffort.create(project.id, role_key, total_mandays=mandays))
                self._progress_repo.add(
                    ProgressSnapshot.create(project.id, role_key, percent_done=0.0, total_mandays=mandays)
                )
            self._session.commit()
            logger.info("Created project %s - %s", project.id, project.name)
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise
        domain_events.project_changed.emit(project.id)
        return project

    def update_project(
        self,
        project_id: str,
        name: str | None = None,
        priority: int | None = None,
        start_date: date | None = None,
        delivery_date: date | None = None,
        workflow_mode: WorkflowMode | None = None,
        clear_delivery_date: bool = False,
        expected_version: int | None = None,
    ) -> Project:
        project = self._get_project_or_raise(project_id)
        if expected_version is not None:
            project.version = expected_version

        if name is not None:
            self._validate_project_name(project.scope_id, name, exclude_id=project.id)
            project.name = name.strip()
        if priority is not None:
            project.priority = int(priority)
        if start_date is not None:
            project.start_date = start_date
        if clear_delivery_date:
            project.delivery_date = None
        elif delivery_date is not None:
            project.delivery_date = delivery_date
        if workflow_mode is not None:
            project.workflow_mode = WorkflowMode(workflow_mode)
        self._validate_dates(project.start_date, project.delivery_date)

        try:
            self._project_repo.update(project)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.project_changed.emit(project.id)
        return project

    def set_status(self, project_id: str, status: ProjectStatus, today: date | None = None) -> Project:
        project = self._get_project_or_raise(project_id)
        project.status = ProjectStatus(status)
        if project.status == ProjectStatus.IN_PROGRESS and project.started_at is None:
            project.started_at = today or date.today()
        try:
            self._project_repo.update(project)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Project %s moved to %s", project.id, project.status.value)
        domain_events.project_changed.emit(project.id)
        return project

    def delete_project(self, project_id: str) -> None:
        self._get_project_or_raise(project_id)
        try:
            self._dependency_repo.replace_for_project(project_id, [])
            self._effort_repo.delete_by_project(project_id)
            self._progress_repo.delete_by_project(project_id)
            self._assignment_repo.delete_by_project(project_id)
            self._allocation_repo.clear_project(project_id)
            self._project_repo.delete(project_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Deleted project %s", project_id)
        domain_events.project_changed.emit(project_id)

    # ------------------------------------------------------------- effort/progress

    def _write_effort(self, project: Project, effort: RoleEffort, recorded_at: datetime | None) -> RoleEffort:
        snapshot = ProgressSnapshot.create(
            project.id,
            effort.role_key,
            percent_done=effort.percent_done,
            total_mandays=effort.total_mandays,
            recorded_at=recorded_at,
        )
        try:
            self._effort_repo.upsert(effort)
            self._progress_repo.add(snapshot)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.progress_changed.emit(project.id)
        return effort

    def set_role_effort(
        self,
        project_id: str,
        role_key: str,
        total_mandays: float,
        percent_done: float | None = None,
        recorded_at: datetime | None = None,
    ) -> RoleEffort:
        project = self._get_project_or_raise(project_id)
        role = self._require_role(project.scope_id, role_key)
        mandays = self._validate_mandays(total_mandays)

        effort = self._effort_repo.get(project.id, role.key) or RoleEffort.create(project.id, role.key)
        effort.total_mandays = mandays
        if percent_done is not None:
            effort.percent_done = self._validate_percent(percent_done)
        return self._write_effort(project, effort, recorded_at)

    def update_role_progress(
        self,
        project_id: str,
        role_key: str,
        percent_done: float,
        recorded_at: datetime | None = None,
    ) -> RoleEffort:
        project = self._get_project_or_raise(project_id)
        role = self._require_role(project.scope_id, role_key)
        effort = self._effort_repo.get(project.id, role.key)
        if effort is None:
            raise ValidationError(
                f"Project has no effort estimate for role '{role.key}'.",
                code="EFFORT_MISSING",
            )
        effort.percent_done = self._validate_percent(percent_done)
        logger.info("Progress %s/%s -> %.1f%%", project.name, role.key, effort.percent_done)
        return self._write_effort(project, effort, recorded_at)

    def set_role_dependencies(
        self,
        project_id: str,
        edges: Iterable[Tuple[str, str]],
    ) -> list[RoleDependency]:
        project = self._get_project_or_raise(project_id)
        dependencies: list[RoleDependency] = []
        seen = set()
        for from_role, to_role in edges:
            src = self._require_role(project.scope_id, from_role).key
            dst = self._require_role(project.scope_id, to_role).key
            if src == dst:
                raise ValidationError("A role cannot depend on itself.", code="DEPENDENCY_SELF")
            if (src, dst) in seen:
                continue
            seen.add((src, dst))
            dependencies.append(RoleDependency.create(project.id, src, dst))
        try:
            self._dependency_repo.replace_for_project(project.id, dependencies)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.project_changed.emit(project.id)
        return dependencies


__all__ = ["ProjectLifecycleMixin"]
