from datetime import date

import pytest

from core.exceptions import ValidationError
from core.services.capacity import CapacitySource

WEEK_START = date(2024, 1, 8)
WEEK_END = date(2024, 1, 12)


def _setup(services, scope):
    project = services["project_service"].create_project(
        scope.id, "Checkout", role_mandays={"fe": 10, "be": 6, "qa": 4}
    )
    return project


def _resolve(services, scope, project, roles=("fe", "be", "qa")):
    settings = services["scope_service"].get_settings(scope.id)
    return services["capacity_service"].resolve(project, list(roles), settings, WEEK_START, WEEK_END)


def test_static_capacity_sums_active_members_of_role(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.add_member(scope.id, "Ben", "fe", fte=0.5)
    inactive = ts.add_member(scope.id, "Cid", "fe", fte=1.0)
    ts.deactivate_member(inactive.id)
    ts.add_member(scope.id, "Dee", "be", fte=1.0)

    caps = _resolve(services, scope, project)

    assert caps["fe"].available_fte == pytest.approx(1.5)
    assert caps["fe"].source == CapacitySource.STATIC
    assert len(caps["fe"].member_ids) == 2
    assert caps["be"].available_fte == pytest.approx(1.0)
    assert caps["qa"].available_fte == 0
    assert caps["qa"].source == CapacitySource.DEFAULT


def test_assignments_restrict_members_and_override_fte(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.add_member(scope.id, "Ben", "fe", fte=1.0)
    ts.assign_to_project(project.id, ann.id, allocation_fte=0.8)

    caps = _resolve(services, scope, project, roles=("fe",))

    assert caps["fe"].available_fte == pytest.approx(0.8)
    assert caps["fe"].member_ids == (ann.id,)


def test_allocation_mode_averages_planned_days(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.set_allocation(ann.id, date(2024, 1, 8), date(2024, 1, 9), 1.0, project_id=project.id)
    ts.set_allocation(ann.id, date(2024, 1, 10), date(2024, 1, 12), 0.5, project_id=project.id)
    ts.set_allocation(
        ann.id, date(2024, 1, 8), date(2024, 1, 8), 0.5, external_project_name="Support rota"
    )
    services["scope_service"].update_settings(
        scope.id, allocation_enabled=True, calculation_mode="allocation"
    )

    caps = _resolve(services, scope, project, roles=("fe",))

    assert caps["fe"].source == CapacitySource.ALLOCATION
    assert caps["fe"].available_fte == pytest.approx(0.7)
    assert [row.day for row in caps["fe"].daily] == [
        date(2024, 1, 8),
        date(2024, 1, 9),
        date(2024, 1, 10),
        date(2024, 1, 11),
        date(2024, 1, 12),
    ]


def test_external_allocations_count_when_enabled(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.5, project_id=project.id)
    ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.5, external_project_name="Support rota")
    services["scope_service"].update_settings(
        scope.id,
        allocation_enabled=True,
        calculation_mode="allocation",
        include_external_projects=True,
    )

    caps = _resolve(services, scope, project, roles=("fe",))

    assert caps["fe"].available_fte == pytest.approx(1.0)


def test_allocation_mode_without_records_uses_default(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    services["scope_service"].update_settings(
        scope.id,
        allocation_enabled=True,
        calculation_mode="allocation",
        default_allocation_fte=0.25,
    )

    caps = _resolve(services, scope, project, roles=("fe",))

    assert caps["fe"].source == CapacitySource.DEFAULT
    assert caps["fe"].available_fte == pytest.approx(0.25)


def test_hybrid_mode_falls_back_to_static_capacity(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.add_member(scope.id, "Bo", "be", fte=1.5)
    ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.4, project_id=project.id)
    services["scope_service"].update_settings(
        scope.id, allocation_enabled=True, calculation_mode="hybrid"
    )

    caps = _resolve(services, scope, project, roles=("fe", "be"))

    assert caps["fe"].source == CapacitySource.ALLOCATION
    assert caps["fe"].available_fte == pytest.approx(0.4)
    assert caps["be"].source == CapacitySource.STATIC
    assert caps["be"].available_fte == pytest.approx(1.5)


def test_allocations_follow_assignment_role_of_cross_role_member(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.assign_to_project(project.id, ann.id, role="qa")
    created = ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.5, project_id=project.id)
    services["scope_service"].update_settings(
        scope.id, allocation_enabled=True, calculation_mode="allocation"
    )

    caps = _resolve(services, scope, project, roles=("qa",))

    assert {row.role for row in created} == {"qa"}
    assert caps["qa"].source == CapacitySource.ALLOCATION
    assert caps["qa"].available_fte == pytest.approx(0.5)
    assert caps["qa"].member_ids == (ann.id,)


def test_explicit_allocation_role_splits_member_between_roles(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.assign_to_project(project.id, ann.id, role="fe")
    ts.assign_to_project(project.id, ann.id, role="qa")
    ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.75, project_id=project.id, role="fe")
    ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.25, project_id=project.id, role="QA")
    services["scope_service"].update_settings(
        scope.id, allocation_enabled=True, calculation_mode="allocation"
    )

    caps = _resolve(services, scope, project, roles=("fe", "qa"))

    assert caps["fe"].available_fte == pytest.approx(0.75)
    assert caps["qa"].available_fte == pytest.approx(0.25)
    with pytest.raises(ValidationError) as exc:
        ts.set_allocation(ann.id, WEEK_START, WEEK_START, 0.1, project_id=project.id, role="ops")
    assert exc.value.code == "ROLE_UNKNOWN"


def test_allocation_table_ignored_unless_enabled(services, scope):
    ts = services["team_service"]
    project = _setup(services, scope)
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.4, project_id=project.id)
    services["scope_service"].update_settings(scope.id, calculation_mode="allocation")

    caps = _resolve(services, scope, project, roles=("fe",))

    assert caps["fe"].source == CapacitySource.STATIC
    assert caps["fe"].available_fte == pytest.approx(1.0)


def test_team_capacity_reports_allocated_average(services, scope):
    ts = services["team_service"]
    ann = ts.add_member(scope.id, "Ann", "fe", fte=1.0)
    ts.add_member(scope.id, "Ben", "be", fte=0.5)
    ts.set_allocation(ann.id, WEEK_START, WEEK_END, 0.6)
    settings = services["scope_service"].update_settings(scope.id, allocation_enabled=True)

    team = services["capacity_service"].team_capacity(scope.id, settings, WEEK_START, WEEK_END)
    rows = {row.member_name: row for row in team.members}

    assert rows["Ann"].allocated_fte == pytest.approx(0.6)
    assert rows["Ann"].allocation_days == 5
    assert rows["Ben"].allocated_fte == pytest.approx(0.5)
    assert team.total_fte == pytest.approx(1.1)
