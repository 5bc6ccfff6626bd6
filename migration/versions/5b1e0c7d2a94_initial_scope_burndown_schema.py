"""initial scope burndown schema

Revision ID: 5b1e0c7d2a94
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5b1e0c7d2a94"
down_revision = None
branch_labels = None
depends_on = None

_PROJECT_STATUS = sa.Enum(
    "NOT_STARTED", "IN_PROGRESS", "PAUSED", "COMPLETED", "CANCELLED", "ARCHIVED",
    name="projectstatus",
)
_WORKFLOW_MODE = sa.Enum("PARALLEL", "SEQUENTIAL", name="workflowmode")
_CALCULATION_MODE = sa.Enum("FTE", "ALLOCATION", "HYBRID", name="calculationmode")


def _id_column() -> sa.Column:
    return sa.Column("id", sa.String(), nullable=False)


def _fk(name: str, target: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.String(), sa.ForeignKey(target, ondelete="CASCADE"), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "scopes",
        _id_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "scope_settings",
        _fk("scope_id", "scopes.id"),
        sa.Column("allocation_enabled", sa.Boolean(), nullable=True),
        sa.Column("calculation_mode", _CALCULATION_MODE, nullable=False),
        sa.Column("include_external_projects", sa.Boolean(), nullable=True),
        sa.Column("default_allocation_fte", sa.Float(), nullable=True),
        sa.Column("include_holidays", sa.Boolean(), nullable=True),
        sa.Column("calendar_id", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("scope_id"),
    )
    op.create_table(
        "scope_roles",
        _id_column(),
        _fk("scope_id", "scopes.id"),
        sa.Column("key", sa.String(length=32), nullable=False),
        sa.Column("label", sa.String(), nullable=False),
        sa.Column("color", sa.String(length=16), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("scope_id", "key", name="ux_scope_roles_scope_key"),
    )
    op.create_table(
        "projects",
        _id_column(),
        _fk("scope_id", "scopes.id"),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=True),
        sa.Column("status", _PROJECT_STATUS, nullable=False),
        sa.Column("workflow_mode", _WORKFLOW_MODE, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("started_at", sa.Date(), nullable=True),
        sa.Column("delivery_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_scope_id", "projects", ["scope_id"])

    op.create_table(
        "role_efforts",
        _id_column(),
        _fk("project_id", "projects.id"),
        sa.Column("role_key", sa.String(length=32), nullable=False),
        sa.Column("total_mandays", sa.Float(), nullable=True),
        sa.Column("percent_done", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("project_id", "role_key", name="ux_role_efforts_project_role"),
    )
    op.create_table(
        "role_dependencies",
        _id_column(),
        _fk("project_id", "projects.id"),
        sa.Column("from_role", sa.String(length=32), nullable=False),
        sa.Column("to_role", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_role_dependencies_project_id", "role_dependencies", ["project_id"])

    op.create_table(
        "progress_snapshots",
        _id_column(),
        _fk("project_id", "projects.id"),
        sa.Column("role_key", sa.String(length=32), nullable=False),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
        sa.Column("percent_done", sa.Float(), nullable=True),
        sa.Column("total_mandays", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_progress_project_recorded", "progress_snapshots", ["project_id", "recorded_at"])

    op.create_table(
        "team_members",
        _id_column(),
        _fk("scope_id", "scopes.id"),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("fte", sa.Float(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_team_members_scope_id", "team_members", ["scope_id"])

    op.create_table(
        "project_team_assignments",
        _id_column(),
        _fk("project_id", "projects.id"),
        _fk("team_member_id", "team_members.id"),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("allocation_fte", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_assignments_project_id", "project_team_assignments", ["project_id"])

    op.create_table(
        "planned_allocations",
        _id_column(),
        _fk("scope_id", "scopes.id"),
        _fk("team_member_id", "team_members.id"),
        _fk("project_id", "projects.id", nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("allocation_fte", sa.Float(), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("external_project_name", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_allocations_member_date", "planned_allocations", ["team_member_id", "date"])
    op.create_index("idx_allocations_scope_date", "planned_allocations", ["scope_id", "date"])

    op.create_table(
        "working_calendars",
        _id_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("working_days", sa.String(), nullable=False),
        sa.Column("hours_per_day", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "holidays",
        _id_column(),
        _fk("calendar_id", "working_calendars.id"),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_holiday_calendar_date", "holidays", ["calendar_id", "date"])


def downgrade() -> None:
    op.drop_index("idx_holiday_calendar_date", table_name="holidays")
    op.drop_table("holidays")
    op.drop_table("working_calendars")
    op.drop_index("idx_allocations_scope_date", table_name="planned_allocations")
    op.drop_index("idx_allocations_member_date", table_name="planned_allocations")
    op.drop_table("planned_allocations")
    op.drop_index("idx_assignments_project_id", table_name="project_team_assignments")
    op.drop_table("project_team_assignments")
    op.drop_index("idx_team_members_scope_id", table_name="team_members")
    op.drop_table("team_members")
    op.drop_index("idx_progress_project_recorded", table_name="progress_snapshots")
    op.drop_table("progress_snapshots")
    op.drop_index("idx_role_dependencies_project_id", table_name="role_dependencies")
    op.drop_table("role_dependencies")
    op.drop_table("role_efforts")
    op.drop_index("idx_projects_scope_id", table_name="projects")
    op.drop_table("projects")
    op.drop_table("scope_roles")
    op.drop_table("scope_settings")
    op.drop_table("scopes")
