from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import (
    PlannedAllocationRepository,
    ProjectAssignmentRepository,
    ProjectRepository,
    ScopeRoleRepository,
    TeamMemberRepository,
)
from core.models import (
    MAX_MEMBER_FTE,
    AllocationFilter,
    PlannedAllocation,
    ProjectTeamAssignment,
    TeamMember,
    normalize_role_key,
)
from core.services.calendar.workdays import WorkdayPredicate, is_weekday

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(
        self,
        session: Session,
        member_repo: TeamMemberRepository,
        role_repo: ScopeRoleRepository,
        project_repo: ProjectRepository,
        assignment_repo: ProjectAssignmentRepository,
        allocation_repo: PlannedAllocationRepository,
    ):
        self._session = session
        self._member_repo = member_repo
        self._role_repo = role_repo
        self._project_repo = project_repo
        self._assignment_repo = assignment_repo
        self._allocation_repo = allocation_repo

    # ---------------------------------------------------------------- validation

    @staticmethod
    def _validate_fte(value: float, allow_zero: bool = False) -> float:
        value = float(value)
        too_low = value < 0 if allow_zero else value <= 0
        if too_low or value > MAX_MEMBER_FTE:
            raise ValidationError(
                f"FTE must be in the range {'[' if allow_zero else '('}0, {MAX_MEMBER_FTE:g}].",
                code="FTE_OUT_OF_RANGE",
            )
        return value

    def _require_role(self, scope_id: str, role: str) -> str:
        key = normalize_role_key(role)
        found = self._role_repo.get_by_key(scope_id, key)
        if found is None or not found.is_active:
            raise ValidationError(f"Unknown role '{role}'.", code="ROLE_UNKNOWN")
        return key

    def get_member(self, member_id: str) -> TeamMember:
        member = self._member_repo.get(member_id)
        if not member:
            raise NotFoundError("Team member not found.", code="MEMBER_NOT_FOUND")
        return member

    def _allocation_role(self, member: TeamMember, project_id: Optional[str], role: Optional[str]) -> str:
        if role is not None:
            return self._require_role(member.scope_id, role)
        if project_id is not None:
            assigned = {
                a.role
                for a in self._assignment_repo.list_by_project(project_id)
                if a.team_member_id == member.id
            }
            if len(assigned) == 1:
                return assigned.pop()
        return member.role

    # ------------------------------------------------------------------- members

    def add_member(self, scope_id: str, name: str, role: str, fte: float = 1.0) -> TeamMember:
        if not name or not name.strip():
            raise ValidationError("Team member name cannot be empty.", code="MEMBER_NAME_EMPTY")
        member = TeamMember.create(
            scope_id=scope_id,
            name=name.strip(),
            role=self._require_role(scope_id, role),
            fte=self._validate_fte(fte),
        )
        try:
            self._member_repo.add(member)
            self._session.commit()
            logger.info("Added team member %s - %s (%s)", member.id, member.name, member.role)
        except Exception as e:
            self._session.rollback()
            logger.error("Error adding team member: %s", e)
            raise
        domain_events.team_changed.emit(scope_id)
        return member

    def update_member(
        self,
        member_id: str,
        name: str | None = None,
        role: str | None = None,
        fte: float | None = None,
        is_active: bool | None = None,
        expected_version: int | None = None,
    ) -> TeamMember:
        member = self.get_member(member_id)
        if expected_version is not None:
            member.version = expected_version

        if name is not None:
            if not name.strip():
                raise ValidationError("Team member name cannot be empty.", code="MEMBER_NAME_EMPTY")
            member.name = name.strip()
        if role is not None:
            member.role = self._require_role(member.scope_id, role)
        if fte is not None:
            member.fte = self._validate_fte(fte)
        if is_active is not None:
            member.is_active = bool(is_active)

        try:
            self._member_repo.update(member)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.team_changed.emit(member.scope_id)
        return member

    def deactivate_member(self, member_id: str) -> TeamMember:
        return self.update_member(member_id, is_active=False)

    def delete_member(self, member_id: str) -> None:
        member = self.get_member(member_id)
        try:
            self._assignment_repo.delete_by_member(member_id)
            self._allocation_repo.delete_by_member(member_id)
            self._member_repo.delete(member_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Deleted team member %s", member_id)
        domain_events.team_changed.emit(member.scope_id)

    def list_members(self, scope_id: str, active_only: bool = False) -> List[TeamMember]:
        members = self._member_repo.list_by_scope(scope_id)
        if active_only:
            members = [m for m in members if m.is_active]
        return sorted(members, key=lambda m: (m.role, m.name.lower()))

    # --------------------------------------------------------------- assignments

    def assign_to_project(
        self,
        project_id: str,
        member_id: str,
        role: str | None = None,
        allocation_fte: float | None = None,
    ) -> ProjectTeamAssignment:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        member = self.get_member(member_id)
        if member.scope_id != project.scope_id:
            raise ValidationError("Team member belongs to another scope.", code="MEMBER_SCOPE_MISMATCH")

        role_key = self._require_role(project.scope_id, role or member.role)
        for existing in self._assignment_repo.list_by_project(project_id):
            if existing.team_member_id == member_id and existing.role == role_key:
                raise ValidationError(
                    "Team member is already assigned to this project in that role.",
                    code="ASSIGNMENT_DUPLICATE",
                )
        if allocation_fte is not None:
            allocation_fte = self._validate_fte(allocation_fte)

        assignment = ProjectTeamAssignment.create(project_id, member_id, role_key, allocation_fte)
        try:
            self._assignment_repo.add(assignment)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.team_changed.emit(project.scope_id)
        return assignment

    def unassign(self, assignment_id: str) -> None:
        assignment = self._assignment_repo.get(assignment_id)
        if not assignment:
            raise NotFoundError("Assignment not found.", code="ASSIGNMENT_NOT_FOUND")
        project = self._project_repo.get(assignment.project_id)
        try:
            self._assignment_repo.delete(assignment_id)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        if project is not None:
            domain_events.team_changed.emit(project.scope_id)

    def list_assignments(self, project_id: str) -> List[ProjectTeamAssignment]:
        return self._assignment_repo.list_by_project(project_id)

    # --------------------------------------------------------------- allocations

    def set_allocation(
        self,
        member_id: str,
        date_from: date,
        date_to: date,
        allocation_fte: float,
        project_id: Optional[str] = None,
        external_project_name: Optional[str] = None,
        description: Optional[str] = None,
        replace: bool = False,
        is_workday: WorkdayPredicate = is_weekday,
        role: Optional[str] = None,
    ) -> List[PlannedAllocation]:
        """
        Plan `allocation_fte` for the member on every working day of
        [date_from, date_to]. `project_id=None` books work outside the
        scope's projects. With `replace`, earlier plans of the member in the
        range are dropped first.

        The role booked defaults to the member's assignment role on the
        project when they hold exactly one, else their home role.
        """
        member = self.get_member(member_id)
        if date_to < date_from:
            raise ValidationError("Allocation range end is before its start.", code="ALLOCATION_RANGE_INVALID")
        fte = self._validate_fte(allocation_fte)
        if project_id is not None:
            project = self._project_repo.get(project_id)
            if not project or project.scope_id != member.scope_id:
                raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        role_key = self._allocation_role(member, project_id, role)

        days: List[date] = []
        current = date_from
        while current <= date_to:
            if is_workday(current):
                days.append(current)
            current += timedelta(days=1)

        booked: Dict[date, float] = defaultdict(float)
        if not replace:
            existing = self._allocation_repo.find(
                AllocationFilter(team_member_ids=[member_id], date_from=date_from, date_to=date_to)
            )
            for row in existing:
                booked[row.date] += float(row.allocation_fte or 0.0)
        for day in days:
            if booked[day] + fte > MAX_MEMBER_FTE + 1e-9:
                raise ValidationError(
                    f"{member.name} would be booked {booked[day] + fte:g} FTE on {day.isoformat()}.",
                    code="ALLOCATION_OVER_CAPACITY",
                )

        created = [
            PlannedAllocation.create(
                scope_id=member.scope_id,
                team_member_id=member.id,
                project_id=project_id,
                date=day,
                allocation_fte=fte,
                role=role_key,
                external_project_name=external_project_name,
                description=description,
            )
            for day in days
        ]
        try:
            if replace:
                self._allocation_repo.delete_for_member_dates(member_id, date_from, date_to)
            for allocation in created:
                self._allocation_repo.add(allocation)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(
            "Planned %s FTE for %s on %d day(s) %s..%s",
            fte, member.name, len(created), date_from.isoformat(), date_to.isoformat(),
        )
        domain_events.allocations_changed.emit(member.scope_id)
        return created

    def list_allocations(self, flt: AllocationFilter) -> List[PlannedAllocation]:
        return sorted(self._allocation_repo.find(flt), key=lambda a: (a.date, a.team_member_id))

    def clear_allocations(self, member_id: str, date_from: date, date_to: date) -> int:
        member = self.get_member(member_id)
        try:
            removed = self._allocation_repo.delete_for_member_dates(member_id, date_from, date_to)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        domain_events.allocations_changed.emit(member.scope_id)
        return removed


__all__ = ["TeamService"]
