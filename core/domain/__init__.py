from core.domain.calendar import Holiday, WorkingCalendar
from core.domain.enums import (
    CLOSED_PROJECT_STATUSES,
    QUEUED_PROJECT_STATUSES,
    CalculationMode,
    GroupMode,
    ProjectStatus,
    StartDatePolicy,
    WorkflowMode,
)
from core.domain.identifiers import generate_id
from core.domain.project import ProgressSnapshot, Project, RoleDependency, RoleEffort
from core.domain.scope import DEFAULT_ALLOCATION_FTE, Scope, ScopeRole, ScopeSettings, normalize_role_key
from core.domain.team import (
    MAX_MEMBER_FTE,
    AllocationFilter,
    PlannedAllocation,
    ProjectTeamAssignment,
    TeamMember,
)

__all__ = [
    "generate_id",
    "normalize_role_key",
    "ProjectStatus",
    "WorkflowMode",
    "GroupMode",
    "CalculationMode",
    "StartDatePolicy",
    "CLOSED_PROJECT_STATUSES",
    "QUEUED_PROJECT_STATUSES",
    "Scope",
    "ScopeRole",
    "ScopeSettings",
    "DEFAULT_ALLOCATION_FTE",
    "Project",
    "RoleEffort",
    "RoleDependency",
    "ProgressSnapshot",
    "TeamMember",
    "ProjectTeamAssignment",
    "PlannedAllocation",
    "AllocationFilter",
    "MAX_MEMBER_FTE",
    "WorkingCalendar",
    "Holiday",
]
