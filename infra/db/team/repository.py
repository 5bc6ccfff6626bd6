from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from core.interfaces import (
    PlannedAllocationRepository,
    ProjectAssignmentRepository,
    TeamMemberRepository,
)
from core.models import AllocationFilter, PlannedAllocation, ProjectTeamAssignment, TeamMember
from infra.db.models import PlannedAllocationORM, ProjectTeamAssignmentORM, TeamMemberORM
from infra.db.optimistic import update_with_version_check
from infra.db.team.mapper import (
    allocation_from_orm,
    allocation_to_orm,
    assignment_from_orm,
    assignment_to_orm,
    member_from_orm,
    member_to_orm,
)


class SqlAlchemyTeamMemberRepository(TeamMemberRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, member: TeamMember) -> None:
        self.session.add(member_to_orm(member))

    def update(self, member: TeamMember) -> None:
        member.version = update_with_version_check(
            self.session,
            TeamMemberORM,
            member.id,
            getattr(member, "version", 1),
            {
                "name": member.name,
                "role": member.role,
                "fte": member.fte,
                "is_active": member.is_active,
            },
            not_found_message="Team member not found.",
            stale_message="Team member was updated by another user.",
        )

    def delete(self, member_id: str) -> None:
        self.session.query(TeamMemberORM).filter_by(id=member_id).delete()

    def get(self, member_id: str) -> Optional[TeamMember]:
        obj = self.session.get(TeamMemberORM, member_id)
        return member_from_orm(obj) if obj else None

    def list_by_scope(self, scope_id: str) -> List[TeamMember]:
        stmt = select(TeamMemberORM).where(TeamMemberORM.scope_id == scope_id)
        rows = self.session.execute(stmt).scalars().all()
        return [member_from_orm(row) for row in rows]


class SqlAlchemyProjectAssignmentRepository(ProjectAssignmentRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, assignment: ProjectTeamAssignment) -> None:
        self.session.add(assignment_to_orm(assignment))

    def delete(self, assignment_id: str) -> None:
        self.session.query(ProjectTeamAssignmentORM).filter_by(id=assignment_id).delete()

    def get(self, assignment_id: str) -> Optional[ProjectTeamAssignment]:
        obj = self.session.get(ProjectTeamAssignmentORM, assignment_id)
        return assignment_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[ProjectTeamAssignment]:
        stmt = select(ProjectTeamAssignmentORM).where(ProjectTeamAssignmentORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [assignment_from_orm(row) for row in rows]

    def delete_by_project(self, project_id: str) -> None:
        self.session.query(ProjectTeamAssignmentORM).filter_by(project_id=project_id).delete()

    def delete_by_member(self, team_member_id: str) -> None:
        self.session.query(ProjectTeamAssignmentORM).filter_by(team_member_id=team_member_id).delete()


class SqlAlchemyPlannedAllocationRepository(PlannedAllocationRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, allocation: PlannedAllocation) -> None:
        self.session.add(allocation_to_orm(allocation))

    def find(self, flt: AllocationFilter) -> List[PlannedAllocation]:
        stmt = select(PlannedAllocationORM)
        if flt.scope_id is not None:
            stmt = stmt.where(PlannedAllocationORM.scope_id == flt.scope_id)
        if flt.team_member_ids is not None:
            stmt = stmt.where(PlannedAllocationORM.team_member_id.in_(flt.team_member_ids))
        if flt.project_id is not None:
            stmt = stmt.where(PlannedAllocationORM.project_id == flt.project_id)
        if flt.role is not None:
            stmt = stmt.where(PlannedAllocationORM.role == flt.role)
        if flt.date_from is not None:
            stmt = stmt.where(PlannedAllocationORM.date >= flt.date_from)
        if flt.date_to is not None:
            stmt = stmt.where(PlannedAllocationORM.date <= flt.date_to)
        rows = self.session.execute(stmt.order_by(PlannedAllocationORM.date)).scalars().all()
        return [allocation_from_orm(row) for row in rows]

    def delete_for_member_dates(self, team_member_id: str, date_from: date, date_to: date) -> int:
        stmt = delete(PlannedAllocationORM).where(
            PlannedAllocationORM.team_member_id == team_member_id,
            PlannedAllocationORM.date >= date_from,
            PlannedAllocationORM.date <= date_to,
        )
        return int(self.session.execute(stmt).rowcount or 0)

    def delete_by_member(self, team_member_id: str) -> None:
        self.session.query(PlannedAllocationORM).filter_by(team_member_id=team_member_id).delete()

    def clear_project(self, project_id: str) -> None:
        self.session.query(PlannedAllocationORM).filter_by(project_id=project_id).delete()


__all__ = [
    "SqlAlchemyTeamMemberRepository",
    "SqlAlchemyProjectAssignmentRepository",
    "SqlAlchemyPlannedAllocationRepository",
]
