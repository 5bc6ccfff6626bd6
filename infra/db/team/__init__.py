from infra.db.team.mapper import (
    allocation_from_orm,
    allocation_to_orm,
    assignment_from_orm,
    assignment_to_orm,
    member_from_orm,
    member_to_orm,
)
from infra.db.team.repository import (
    SqlAlchemyPlannedAllocationRepository,
    SqlAlchemyProjectAssignmentRepository,
    SqlAlchemyTeamMemberRepository,
)

__all__ = [
    "member_to_orm",
    "member_from_orm",
    "assignment_to_orm",
    "assignment_from_orm",
    "allocation_to_orm",
    "allocation_from_orm",
    "SqlAlchemyTeamMemberRepository",
    "SqlAlchemyProjectAssignmentRepository",
    "SqlAlchemyPlannedAllocationRepository",
]
