from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Sequence

from core.interfaces import (
    PlannedAllocationRepository,
    ProjectAssignmentRepository,
    TeamMemberRepository,
)
from core.models import (
    AllocationFilter,
    CalculationMode,
    PlannedAllocation,
    Project,
    ProjectTeamAssignment,
    ScopeSettings,
    TeamMember,
    normalize_role_key,
)
from core.services.capacity.models import (
    CapacitySource,
    DailyCapacity,
    MemberCapacityRow,
    RoleCapacity,
    TeamCapacity,
)

logger = logging.getLogger(__name__)


class CapacityService:
    """
    Resolves the FTE available to each role of a project.

    Static capacity sums team FTE: the project's assignments when it has
    any, otherwise every active scope member holding the role. With the
    allocation table enabled, capacity is the average daily FTE planned for
    the project inside the window. Hybrid mode falls back to static
    capacity for roles without planned allocations. Zero capacity is
    returned as-is; the projector owns the default-FTE fallback.
    """

    def __init__(
        self,
        member_repo: TeamMemberRepository,
        assignment_repo: ProjectAssignmentRepository,
        allocation_repo: PlannedAllocationRepository,
    ):
        self._member_repo = member_repo
        self._assignment_repo = assignment_repo
        self._allocation_repo = allocation_repo

    # ------------------------------------------------------------------ helpers

    @staticmethod
    def _role_matches(value: str, role_key: str) -> bool:
        return normalize_role_key(value) == normalize_role_key(role_key)

    def _static_contributors(
        self,
        role_key: str,
        members: Dict[str, TeamMember],
        assignments: Sequence[ProjectTeamAssignment],
    ) -> List[tuple[str, float]]:
        if assignments:
            rows = []
            for a in assignments:
                member = members.get(a.team_member_id)
                if member is None or not member.is_active or not self._role_matches(a.role, role_key):
                    continue
                fte = a.allocation_fte if a.allocation_fte is not None else member.fte
                rows.append((member.id, float(fte or 0.0)))
            return rows
        return [
            (m.id, float(m.fte or 0.0))
            for m in members.values()
            if m.is_active and self._role_matches(m.role, role_key)
        ]

    @staticmethod
    def _relevant_allocations(
        allocations: Iterable[PlannedAllocation],
        project_id: str,
        include_external: bool,
    ) -> List[PlannedAllocation]:
        out = []
        for allocation in allocations:
            if allocation.project_id == project_id:
                out.append(allocation)
            elif include_external and allocation.project_id is None:
                out.append(allocation)
        return out

    @staticmethod
    def _daily_totals(allocations: Iterable[PlannedAllocation]) -> List[DailyCapacity]:
        per_day: Dict[date, float] = defaultdict(float)
        for allocation in allocations:
            per_day[allocation.date] += float(allocation.allocation_fte or 0.0)
        return [DailyCapacity(day=d, fte=per_day[d]) for d in sorted(per_day)]

    # --------------------------------------------------------------------- API

    def resolve(
        self,
        project: Project,
        role_keys: Sequence[str],
        settings: ScopeSettings,
        date_from: date,
        date_to: date,
    ) -> Dict[str, RoleCapacity]:
        members = {m.id: m for m in self._member_repo.list_by_scope(project.scope_id)}
        assignments = self._assignment_repo.list_by_project(project.id)
        use_table = settings.uses_allocation_table

        result: Dict[str, RoleCapacity] = {}
        for role_key in role_keys:
            contributors = self._static_contributors(role_key, members, assignments)
            member_ids = tuple(member_id for member_id, _fte in contributors)
            static_fte = sum(fte for _member_id, fte in contributors)

            if not use_table:
                source = CapacitySource.STATIC if static_fte > 0 else CapacitySource.DEFAULT
                result[role_key] = RoleCapacity(role_key, static_fte, source, member_ids)
                continue

            daily: List[DailyCapacity] = []
            if member_ids:
                allocations = self._allocation_repo.find(
                    AllocationFilter(
                        scope_id=project.scope_id,
                        team_member_ids=list(member_ids),
                        role=role_key,
                        date_from=date_from,
                        date_to=date_to,
                    )
                )
                relevant = self._relevant_allocations(
                    allocations, project.id, settings.include_external_projects
                )
                daily = self._daily_totals(relevant)

            if daily:
                average = sum(row.fte for row in daily) / len(daily)
                result[role_key] = RoleCapacity(
                    role_key, average, CapacitySource.ALLOCATION, member_ids, tuple(daily)
                )
            elif settings.calculation_mode == CalculationMode.HYBRID and static_fte > 0:
                result[role_key] = RoleCapacity(role_key, static_fte, CapacitySource.STATIC, member_ids)
            else:
                result[role_key] = RoleCapacity(
                    role_key, settings.default_allocation_fte, CapacitySource.DEFAULT, member_ids
                )

        logger.debug(
            "Resolved capacity for project %s: %s",
            project.id,
            {key: round(cap.available_fte, 3) for key, cap in result.items()},
        )
        return result

    def team_capacity(
        self,
        scope_id: str,
        settings: ScopeSettings,
        date_from: date,
        date_to: date,
    ) -> TeamCapacity:
        rows: List[MemberCapacityRow] = []
        for member in self._member_repo.list_by_scope(scope_id):
            if not member.is_active:
                continue
            base = float(member.fte or 0.0)
            allocated = base
            days = 0
            if settings.allocation_enabled:
                allocations = self._allocation_repo.find(
                    AllocationFilter(
                        scope_id=scope_id,
                        team_member_ids=[member.id],
                        date_from=date_from,
                        date_to=date_to,
                    )
                )
                daily = self._daily_totals(allocations)
                if daily:
                    days = len(daily)
                    allocated = sum(row.fte for row in daily) / days
            rows.append(
                MemberCapacityRow(
                    member_id=member.id,
                    member_name=member.name,
                    role=member.role,
                    base_fte=base,
                    allocated_fte=allocated,
                    allocation_days=days,
                )
            )
        return TeamCapacity(
            date_from=date_from,
            date_to=date_to,
            total_fte=sum(row.allocated_fte for row in rows),
            members=rows,
        )


__all__ = ["CapacityService"]
