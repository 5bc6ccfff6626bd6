from __future__ import annotations

from typing import List, Optional

from core.models import ProgressSnapshot, Project, ProjectStatus, RoleDependency, RoleEffort


class ProjectQueryMixin:
    def list_projects(self, scope_id: str) -> List[Project]:
        return sorted(self._project_repo.list_by_scope(scope_id), key=lambda p: (p.priority, p.created_at))

    def get_project(self, project_id: str) -> Optional[Project]:
        return self._project_repo.get(project_id)

    def list_projects_by_status(self, scope_id: str, status: ProjectStatus) -> List[Project]:
        return [project for project in self.list_projects(scope_id) if project.status == status]

    def list_role_efforts(self, project_id: str) -> List[RoleEffort]:
        return self._effort_repo.list_by_project(project_id)

    def list_role_dependencies(self, project_id: str) -> List[RoleDependency]:
        return self._dependency_repo.list_by_project(project_id)

    def list_progress_history(self, project_id: str) -> List[ProgressSnapshot]:
        return sorted(self._progress_repo.list_by_project(project_id), key=lambda s: s.recorded_at)


__all__ = ["ProjectQueryMixin"]
