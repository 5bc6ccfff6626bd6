from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import (
    PlannedAllocationRepository,
    ProgressRepository,
    ProjectAssignmentRepository,
    ProjectRepository,
    RoleDependencyRepository,
    RoleEffortRepository,
    ScopeRepository,
    ScopeRoleRepository,
)
from core.services.project.lifecycle import ProjectLifecycleMixin
from core.services.project.query import ProjectQueryMixin


class ProjectService(ProjectLifecycleMixin, ProjectQueryMixin):
    """Project service orchestrator: wiring repositories + composing mixins."""

    def __init__(
        self,
        session: Session,
        scope_repo: ScopeRepository,
        role_repo: ScopeRoleRepository,
        project_repo: ProjectRepository,
        effort_repo: RoleEffortRepository,
        dependency_repo: RoleDependencyRepository,
        progress_repo: ProgressRepository,
        assignment_repo: ProjectAssignmentRepository,
        allocation_repo: PlannedAllocationRepository,
    ):
        self._session: Session = session
        self._scope_repo: ScopeRepository = scope_repo
        self._role_repo: ScopeRoleRepository = role_repo
        self._project_repo: ProjectRepository = project_repo
        self._effort_repo: RoleEffortRepository = effort_repo
        self._dependency_repo: RoleDependencyRepository = dependency_repo
        self._progress_repo: ProgressRepository = progress_repo
        self._assignment_repo: ProjectAssignmentRepository = assignment_repo
        self._allocation_repo: PlannedAllocationRepository = allocation_repo


__all__ = ["ProjectService"]
