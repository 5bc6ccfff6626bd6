from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from core.domain.identifiers import generate_id
from core.domain.scope import normalize_role_key

MAX_MEMBER_FTE = 2.0


@dataclass
class TeamMember:
    id: str
    scope_id: str
    name: str
    role: str
    fte: float = 1.0
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    version: int = 1

    @staticmethod
    def create(scope_id: str, name: str, role: str, fte: float = 1.0, is_active: bool = True) -> "TeamMember":
        return TeamMember(
            id=generate_id(),
            scope_id=scope_id,
            name=name,
            role=normalize_role_key(role),
            fte=fte,
            is_active=is_active,
            created_at=datetime.now(),
        )


@dataclass
class ProjectTeamAssignment:
    id: str
    project_id: str
    team_member_id: str
    role: str
    allocation_fte: Optional[float] = None  # overrides TeamMember.fte if set

    @staticmethod
    def create(
        project_id: str,
        team_member_id: str,
        role: str,
        allocation_fte: Optional[float] = None,
    ) -> "ProjectTeamAssignment":
        return ProjectTeamAssignment(
            id=generate_id(),
            project_id=project_id,
            team_member_id=team_member_id,
            role=normalize_role_key(role),
            allocation_fte=allocation_fte,
        )


@dataclass
class PlannedAllocation:
    id: str
    scope_id: str
    team_member_id: str
    project_id: Optional[str]  # None = work outside the scope's projects
    date: date
    allocation_fte: float
    role: str
    external_project_name: Optional[str] = None
    description: Optional[str] = None

    @staticmethod
    def create(
        scope_id: str,
        team_member_id: str,
        project_id: Optional[str],
        date: date,
        allocation_fte: float,
        role: str,
        external_project_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> "PlannedAllocation":
        return PlannedAllocation(
            id=generate_id(),
            scope_id=scope_id,
            team_member_id=team_member_id,
            project_id=project_id,
            date=date,
            allocation_fte=allocation_fte,
            role=normalize_role_key(role),
            external_project_name=external_project_name,
            description=description,
        )


@dataclass
class AllocationFilter:
    scope_id: Optional[str] = None
    team_member_ids: Optional[list[str]] = None
    project_id: Optional[str] = None
    role: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


__all__ = [
    "TeamMember",
    "ProjectTeamAssignment",
    "PlannedAllocation",
    "AllocationFilter",
    "MAX_MEMBER_FTE",
]
