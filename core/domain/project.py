from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from core.domain.enums import ProjectStatus, WorkflowMode
from core.domain.identifiers import generate_id
from core.domain.scope import normalize_role_key


@dataclass
class Project:
    id: str
    scope_id: str
    name: str
    priority: int = 0
    status: ProjectStatus = ProjectStatus.NOT_STARTED
    workflow_mode: WorkflowMode = WorkflowMode.PARALLEL
    start_date: Optional[date] = None
    started_at: Optional[date] = None
    delivery_date: Optional[date] = None
    created_at: datetime = field(default_factory=datetime.now)
    version: int = 1

    @staticmethod
    def create(scope_id: str, name: str, **extra) -> "Project":
        extra.setdefault("created_at", datetime.now())
        return Project(id=generate_id(), scope_id=scope_id, name=name, **extra)


@dataclass
class RoleEffort:
    id: str
    project_id: str
    role_key: str
    total_mandays: float = 0.0
    percent_done: float = 0.0

    @staticmethod
    def create(project_id: str, role_key: str, total_mandays: float = 0.0, percent_done: float = 0.0) -> "RoleEffort":
        return RoleEffort(
            id=generate_id(),
            project_id=project_id,
            role_key=normalize_role_key(role_key),
            total_mandays=total_mandays,
            percent_done=percent_done,
        )

    @property
    def remaining_mandays(self) -> float:
        total = max(0.0, float(self.total_mandays or 0.0))
        done = min(100.0, max(0.0, float(self.percent_done or 0.0)))
        return max(0.0, total * (1.0 - done / 100.0))


@dataclass
class RoleDependency:
    """`to_role` may only start once `from_role` has finished."""

    id: str
    project_id: str
    from_role: str
    to_role: str

    @staticmethod
    def create(project_id: str, from_role: str, to_role: str) -> "RoleDependency":
        return RoleDependency(
            id=generate_id(),
            project_id=project_id,
            from_role=normalize_role_key(from_role),
            to_role=normalize_role_key(to_role),
        )


@dataclass
class ProgressSnapshot:
    id: str
    project_id: str
    role_key: str
    recorded_at: datetime
    percent_done: float
    total_mandays: Optional[float] = None

    @staticmethod
    def create(
        project_id: str,
        role_key: str,
        percent_done: float,
        total_mandays: Optional[float] = None,
        recorded_at: Optional[datetime] = None,
    ) -> "ProgressSnapshot":
        return ProgressSnapshot(
            id=generate_id(),
            project_id=project_id,
            role_key=normalize_role_key(role_key),
            recorded_at=recorded_at or datetime.now(),
            percent_done=percent_done,
            total_mandays=total_mandays,
        )


__all__ = ["Project", "RoleEffort", "RoleDependency", "ProgressSnapshot"]
