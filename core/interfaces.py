from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from core.models import (
    AllocationFilter,
    Holiday,
    PlannedAllocation,
    ProgressSnapshot,
    Project,
    ProjectTeamAssignment,
    RoleDependency,
    RoleEffort,
    Scope,
    ScopeRole,
    ScopeSettings,
    TeamMember,
    WorkingCalendar,
)


class ScopeRepository(ABC):
    @abstractmethod
    def add(self, scope: Scope) -> None: ...
    @abstractmethod
    def update(self, scope: Scope) -> None: ...
    @abstractmethod
    def get(self, scope_id: str) -> Optional[Scope]: ...
    @abstractmethod
    def list_all(self) -> List[Scope]: ...
    @abstractmethod
    def get_settings(self, scope_id: str) -> Optional[ScopeSettings]: ...
    @abstractmethod
    def upsert_settings(self, settings: ScopeSettings) -> None: ...


class ScopeRoleRepository(ABC):
    @abstractmethod
    def add(self, role: ScopeRole) -> None: ...
    @abstractmethod
    def update(self, role: ScopeRole) -> None: ...
    @abstractmethod
    def get(self, role_id: str) -> Optional[ScopeRole]: ...
    @abstractmethod
    def get_by_key(self, scope_id: str, key: str) -> Optional[ScopeRole]: ...
    @abstractmethod
    def list_by_scope(self, scope_id: str, active_only: bool = False) -> List[ScopeRole]: ...


class ProjectRepository(ABC):
    @abstractmethod
    def add(self, project: Project) -> None: ...
    @abstractmethod
    def update(self, project: Project) -> None: ...
    @abstractmethod
    def delete(self, project_id: str) -> None: ...
    @abstractmethod
    def get(self, project_id: str) -> Optional[Project]: ...
    @abstractmethod
    def list_by_scope(self, scope_id: str) -> List[Project]: ...


class RoleEffortRepository(ABC):
    @abstractmethod
    def upsert(self, effort: RoleEffort) -> None: ...
    @abstractmethod
    def get(self, project_id: str, role_key: str) -> Optional[RoleEffort]: ...
    @abstractmethod
    def list_by_project(self, project_id: str) -> List[RoleEffort]: ...
    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...


class RoleDependencyRepository(ABC):
    @abstractmethod
    def replace_for_project(self, project_id: str, dependencies: List[RoleDependency]) -> None: ...
    @abstractmethod
    def list_by_project(self, project_id: str) -> List[RoleDependency]: ...


class ProgressRepository(ABC):
    @abstractmethod
    def add(self, snapshot: ProgressSnapshot) -> None: ...
    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ProgressSnapshot]: ...
    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...


class TeamMemberRepository(ABC):
    @abstractmethod
    def add(self, member: TeamMember) -> None: ...
    @abstractmethod
    def update(self, member: TeamMember) -> None: ...
    @abstractmethod
    def delete(self, member_id: str) -> None: ...
    @abstractmethod
    def get(self, member_id: str) -> Optional[TeamMember]: ...
    @abstractmethod
    def list_by_scope(self, scope_id: str) -> List[TeamMember]: ...


class ProjectAssignmentRepository(ABC):
    @abstractmethod
    def add(self, assignment: ProjectTeamAssignment) -> None: ...
    @abstractmethod
    def delete(self, assignment_id: str) -> None: ...
    @abstractmethod
    def get(self, assignment_id: str) -> Optional[ProjectTeamAssignment]: ...
    @abstractmethod
    def list_by_project(self, project_id: str) -> List[ProjectTeamAssignment]: ...
    @abstractmethod
    def delete_by_project(self, project_id: str) -> None: ...
    @abstractmethod
    def delete_by_member(self, team_member_id: str) -> None: ...


class PlannedAllocationRepository(ABC):
    @abstractmethod
    def add(self, allocation: PlannedAllocation) -> None: ...
    @abstractmethod
    def find(self, flt: AllocationFilter) -> List[PlannedAllocation]: ...
    @abstractmethod
    def delete_for_member_dates(self, team_member_id: str, date_from: date, date_to: date) -> int: ...
    @abstractmethod
    def delete_by_member(self, team_member_id: str) -> None: ...
    @abstractmethod
    def clear_project(self, project_id: str) -> None: ...


class WorkingCalendarRepository(ABC):
    @abstractmethod
    def get(self, calendar_id: str) -> Optional[WorkingCalendar]: ...
    @abstractmethod
    def get_default(self) -> Optional[WorkingCalendar]: ...
    @abstractmethod
    def upsert(self, calendar: WorkingCalendar) -> None: ...
    @abstractmethod
    def list_holidays(self, calendar_id: str) -> List[Holiday]: ...
    @abstractmethod
    def add_holiday(self, holiday: Holiday) -> None: ...
    @abstractmethod
    def delete_holiday(self, holiday_id: str) -> None: ...


__all__ = [
    "ScopeRepository",
    "ScopeRoleRepository",
    "ProjectRepository",
    "RoleEffortRepository",
    "RoleDependencyRepository",
    "ProgressRepository",
    "TeamMemberRepository",
    "ProjectAssignmentRepository",
    "PlannedAllocationRepository",
    "WorkingCalendarRepository",
]
