from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import (
    ProgressRepository,
    ProjectRepository,
    RoleDependencyRepository,
    RoleEffortRepository,
)
from core.models import ProgressSnapshot, Project, RoleDependency, RoleEffort
from infra.db.models import ProgressSnapshotORM, ProjectORM, RoleDependencyORM, RoleEffortORM
from infra.db.optimistic import update_with_version_check
from infra.db.project.mapper import (
    dependency_from_orm,
    dependency_to_orm,
    effort_from_orm,
    effort_to_orm,
    project_from_orm,
    project_to_orm,
    snapshot_from_orm,
    snapshot_to_orm,
)


class SqlAlchemyProjectRepository(ProjectRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def update(self, project: Project) -> None:
        project.version = update_with_version_check(
            self.session,
            ProjectORM,
            project.id,
            getattr(project, "version", 1),
            {
                "name": project.name,
                "priority": project.priority,
                "status": project.status,
                "workflow_mode": project.workflow_mode,
                "start_date": project.start_date,
                "started_at": project.started_at,
                "delivery_date": project.delivery_date,
            },
            not_found_message="Project not found.",
            stale_message="Project was updated by another user.",
        )

    def delete(self, project_id: str) -> None:
        self.session.query(ProjectORM).filter_by(id=project_id).delete()

    def get(self, project_id: str) -> Optional[Project]:
        obj = self.session.get(ProjectORM, project_id)
        return project_from_orm(obj) if obj else None

    def list_by_scope(self, scope_id: str) -> List[Project]:
        stmt = select(ProjectORM).where(ProjectORM.scope_id == scope_id)
        rows = self.session.execute(stmt).scalars().all()
        return [project_from_orm(row) for row in rows]


class SqlAlchemyRoleEffortRepository(RoleEffortRepository):
    def __init__(self, session: Session):
        self.session = session

    def _find(self, project_id: str, role_key: str) -> Optional[RoleEffortORM]:
        stmt = select(RoleEffortORM).where(
            RoleEffortORM.project_id == project_id,
            RoleEffortORM.role_key == role_key,
        )
        return self.session.execute(stmt).scalars().first()

    def upsert(self, effort: RoleEffort) -> None:
        existing = self._find(effort.project_id, effort.role_key)
        if existing:
            existing.total_mandays = effort.total_mandays
            existing.percent_done = effort.percent_done
            effort.id = existing.id
        else:
            self.session.add(effort_to_orm(effort))

    def get(self, project_id: str, role_key: str) -> Optional[RoleEffort]:
        obj = self._find(project_id, role_key)
        return effort_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[RoleEffort]:
        stmt = select(RoleEffortORM).where(RoleEffortORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [effort_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.query(RoleEffortORM).filter_by(project_id=project_id).delete()


class SqlAlchemyRoleDependencyRepository(RoleDependencyRepository):
    def __init__(self, session: Session):
        self.session = session

    def replace_for_project(self, project_id: str, dependencies: List[RoleDependency]) -> None:
        self.session.query(RoleDependencyORM).filter_by(project_id=project_id).delete()
        for dep in dependencies:
            self.session.add(dependency_to_orm(dep))

    def list_by_project(self, project_id: str) -> List[RoleDependency]:
        stmt = select(RoleDependencyORM).where(RoleDependencyORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]


class SqlAlchemyProgressRepository(ProgressRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, snapshot: ProgressSnapshot) -> None:
        self.session.add(snapshot_to_orm(snapshot))

    def list_by_project(self, project_id: str) -> List[ProgressSnapshot]:
        stmt = (
            select(ProgressSnapshotORM)
            .where(ProgressSnapshotORM.project_id == project_id)
            .order_by(ProgressSnapshotORM.recorded_at)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [snapshot_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.query(ProgressSnapshotORM).filter_by(project_id=project_id).delete()


__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyRoleEffortRepository",
    "SqlAlchemyRoleDependencyRepository",
    "SqlAlchemyProgressRepository",
]
