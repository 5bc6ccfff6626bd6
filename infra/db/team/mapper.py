from __future__ import annotations

from core.models import PlannedAllocation, ProjectTeamAssignment, TeamMember
from infra.db.models import PlannedAllocationORM, ProjectTeamAssignmentORM, TeamMemberORM


def member_to_orm(member: TeamMember) -> TeamMemberORM:
    return TeamMemberORM(
        id=member.id,
        scope_id=member.scope_id,
        name=member.name,
        role=member.role,
        fte=member.fte,
        is_active=member.is_active,
        created_at=member.created_at,
        version=getattr(member, "version", 1),
    )


def member_from_orm(obj: TeamMemberORM) -> TeamMember:
    return TeamMember(
        id=obj.id,
        scope_id=obj.scope_id,
        name=obj.name,
        role=obj.role,
        fte=float(obj.fte or 0.0),
        is_active=bool(obj.is_active),
        created_at=obj.created_at,
        version=getattr(obj, "version", 1),
    )


def assignment_to_orm(assignment: ProjectTeamAssignment) -> ProjectTeamAssignmentORM:
    return ProjectTeamAssignmentORM(
        id=assignment.id,
        project_id=assignment.project_id,
        team_member_id=assignment.team_member_id,
        role=assignment.role,
        allocation_fte=assignment.allocation_fte,
    )


def assignment_from_orm(obj: ProjectTeamAssignmentORM) -> ProjectTeamAssignment:
    return ProjectTeamAssignment(
        id=obj.id,
        project_id=obj.project_id,
        team_member_id=obj.team_member_id,
        role=obj.role,
        allocation_fte=obj.allocation_fte,
    )


def allocation_to_orm(allocation: PlannedAllocation) -> PlannedAllocationORM:
    return PlannedAllocationORM(
        id=allocation.id,
        scope_id=allocation.scope_id,
        team_member_id=allocation.team_member_id,
        project_id=allocation.project_id,
        date=allocation.date,
        allocation_fte=allocation.allocation_fte,
        role=allocation.role,
        external_project_name=allocation.external_project_name,
        description=allocation.description,
    )


def allocation_from_orm(obj: PlannedAllocationORM) -> PlannedAllocation:
    return PlannedAllocation(
        id=obj.id,
        scope_id=obj.scope_id,
        team_member_id=obj.team_member_id,
        project_id=obj.project_id,
        date=obj.date,
        allocation_fte=float(obj.allocation_fte or 0.0),
        role=obj.role,
        external_project_name=obj.external_project_name,
        description=obj.description,
    )


__all__ = [
    "member_to_orm",
    "member_from_orm",
    "assignment_to_orm",
    "assignment_from_orm",
    "allocation_to_orm",
    "allocation_from_orm",
]
