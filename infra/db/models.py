# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import CalculationMode, ProjectStatus, WorkflowMode


class ScopeORM(Base):
    __tablename__ = "scopes"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class ScopeSettingsORM(Base):
    __tablename__ = "scope_settings"

    scope_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("scopes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    allocation_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    calculation_mode: Mapped[CalculationMode] = mapped_column(
        SAEnum(CalculationMode), default=CalculationMode.FTE, nullable=False
    )
    include_external_projects: Mapped[bool] = mapped_column(Boolean, default=False)
    default_allocation_fte: Mapped[float] = mapped_column(Float, default=1.0)
    include_holidays: Mapped[bool] = mapped_column(Boolean, default=False)
    calendar_id: Mapped[str] = mapped_column(String, default="default")


class ScopeRoleORM(Base):
    __tablename__ = "scope_roles"
    __table_args__ = (UniqueConstraint("scope_id", "key", name="ux_scope_roles_scope_key"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    scope_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("scopes.id", ondelete="CASCADE"),
        nullable=False,
    )
    key: Mapped[str] = mapped_column(String(32), nullable=False)
    label: Mapped[str] = mapped_column(String, nullable=False)
    color: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    order_index: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    scope_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("scopes.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(ProjectStatus), default=ProjectStatus.NOT_STARTED, nullable=False
    )
    workflow_mode: Mapped[WorkflowMode] = mapped_column(
        SAEnum(WorkflowMode), default=WorkflowMode.PARALLEL, nullable=False
    )
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    started_at: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    delivery_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_projects_scope_id", ProjectORM.scope_id)


class RoleEffortORM(Base):
    __tablename__ = "role_efforts"
    __table_args__ = (UniqueConstraint("project_id", "role_key", name="ux_role_efforts_project_role"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    role_key: Mapped[str] = mapped_column(String(32), nullable=False)
    total_mandays: Mapped[float] = mapped_column(Float, default=0.0)
    percent_done: Mapped[float] = mapped_column(Float, default=0.0)


class RoleDependencyORM(Base):
    __tablename__ = "role_dependencies"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    from_role: Mapped[str] = mapped_column(String(32), nullable=False)
    to_role: Mapped[str] = mapped_column(String(32), nullable=False)

Index("idx_role_dependencies_project_id", RoleDependencyORM.project_id)


class ProgressSnapshotORM(Base):
    __tablename__ = "progress_snapshots"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    role_key: Mapped[str] = mapped_column(String(32), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    percent_done: Mapped[float] = mapped_column(Float, default=0.0)
    total_mandays: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

Index("idx_progress_project_recorded", ProgressSnapshotORM.project_id, ProgressSnapshotORM.recorded_at)


class TeamMemberORM(Base):
    __tablename__ = "team_members"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    scope_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("scopes.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    fte: Mapped[float] = mapped_column(Float, default=1.0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

Index("idx_team_members_scope_id", TeamMemberORM.scope_id)


class ProjectTeamAssignmentORM(Base):
    __tablename__ = "project_team_assignments"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    team_member_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("team_members.id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    allocation_fte: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

Index("idx_assignments_project_id", ProjectTeamAssignmentORM.project_id)


class PlannedAllocationORM(Base):
    __tablename__ = "planned_allocations"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    scope_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("scopes.id", ondelete="CASCADE"),
        nullable=False,
    )
    team_member_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("team_members.id", ondelete="CASCADE"),
        nullable=False,
    )
    # NULL = work outside the scope's projects
    project_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    allocation_fte: Mapped[float] = mapped_column(Float, default=0.0)
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    external_project_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String, nullable=True)

Index("idx_allocations_member_date", PlannedAllocationORM.team_member_id, PlannedAllocationORM.date)
Index("idx_allocations_scope_date", PlannedAllocationORM.scope_id, PlannedAllocationORM.date)


class WorkingCalendarORM(Base):
    __tablename__ = "working_calendars"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    # store working days as a comma-separated string, e.g. "0,1,2,3,4"
    working_days: Mapped[str] = mapped_column(String, nullable=False, default="0,1,2,3,4")
    hours_per_day: Mapped[float] = mapped_column(Float, default=8.0)


class HolidayORM(Base):
    __tablename__ = "holidays"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    calendar_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("working_calendars.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    name: Mapped[str] = mapped_column(String, default="")

Index("idx_holiday_calendar_date", HolidayORM.calendar_id, HolidayORM.date)
