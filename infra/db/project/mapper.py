from __future__ import annotations

from core.models import (
    ProgressSnapshot,
    Project,
    ProjectStatus,
    RoleDependency,
    RoleEffort,
    WorkflowMode,
)
from infra.db.models import ProgressSnapshotORM, ProjectORM, RoleDependencyORM, RoleEffortORM


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        scope_id=project.scope_id,
        name=project.name,
        priority=project.priority,
        status=project.status,
        workflow_mode=project.workflow_mode,
        start_date=project.start_date,
        started_at=project.started_at,
        delivery_date=project.delivery_date,
        created_at=project.created_at,
        version=getattr(project, "version", 1),
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        scope_id=obj.scope_id,
        name=obj.name,
        priority=obj.priority or 0,
        status=ProjectStatus(obj.status) if obj.status else ProjectStatus.NOT_STARTED,
        workflow_mode=WorkflowMode(obj.workflow_mode) if obj.workflow_mode else WorkflowMode.PARALLEL,
        start_date=obj.start_date,
        started_at=obj.started_at,
        delivery_date=obj.delivery_date,
        created_at=obj.created_at,
        version=getattr(obj, "version", 1),
    )


def effort_to_orm(effort: RoleEffort) -> RoleEffortORM:
    return RoleEffortORM(
        id=effort.id,
        project_id=effort.project_id,
        role_key=effort.role_key,
        total_mandays=effort.total_mandays,
        percent_done=effort.percent_done,
    )


def effort_from_orm(obj: RoleEffortORM) -> RoleEffort:
    return RoleEffort(
        id=obj.id,
        project_id=obj.project_id,
        role_key=obj.role_key,
        total_mandays=float(obj.total_mandays or 0.0),
        percent_done=float(obj.percent_done or 0.0),
    )


def dependency_to_orm(dep: RoleDependency) -> RoleDependencyORM:
    return RoleDependencyORM(
        id=dep.id,
        project_id=dep.project_id,
        from_role=dep.from_role,
        to_role=dep.to_role,
    )


def dependency_from_orm(obj: RoleDependencyORM) -> RoleDependency:
    return RoleDependency(
        id=obj.id,
        project_id=obj.project_id,
        from_role=obj.from_role,
        to_role=obj.to_role,
    )


def snapshot_to_orm(snapshot: ProgressSnapshot) -> ProgressSnapshotORM:
    return ProgressSnapshotORM(
        id=snapshot.id,
        project_id=snapshot.project_id,
        role_key=snapshot.role_key,
        recorded_at=snapshot.recorded_at,
        percent_done=snapshot.percent_done,
        total_mandays=snapshot.total_mandays,
    )


def snapshot_from_orm(obj: ProgressSnapshotORM) -> ProgressSnapshot:
    return ProgressSnapshot(
        id=obj.id,
        project_id=obj.project_id,
        role_key=obj.role_key,
        recorded_at=obj.recorded_at,
        percent_done=float(obj.percent_done or 0.0),
        total_mandays=obj.total_mandays,
    )


__all__ = [
    "project_to_orm",
    "project_from_orm",
    "effort_to_orm",
    "effort_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
    "snapshot_to_orm",
    "snapshot_from_orm",
]
