from datetime import date

import pytest

from core.exceptions import NotFoundError
from core.models import GroupMode, ProjectStatus, StartDatePolicy, WorkflowMode

MON = date(2024, 1, 8)


def _make_project(services, scope, **extra):
    ps = services["project_service"]
    project = ps.create_project(
        scope.id,
        extra.pop("name", "Checkout"),
        start_date=MON,
        role_mandays={"fe": 10, "be": 6, "qa": 4},
        **extra,
    )
    ps.set_role_dependencies(project.id, [("fe", "qa"), ("be", "qa")])
    return project


def test_project_delivery_runs_dependency_layers(services, scope):
    project = _make_project(services, scope, delivery_date=date(2024, 1, 31))

    delivery = services["delivery_service"].project_delivery(project.id, today=MON)

    assert [g.mode for g in delivery.groups] == [GroupMode.PARALLEL, GroupMode.PARALLEL]
    assert delivery.projection.start_date == MON
    assert delivery.projection.total_workdays == 14
    assert delivery.projection.calculated_delivery_date == date(2024, 1, 26)
    assert delivery.projection.diff_workdays == 3
    assert delivery.scope_id == scope.id


def test_team_capacity_shortens_the_projection(services, scope):
    project = _make_project(services, scope)
    services["team_service"].add_member(scope.id, "Ann", "fe", fte=2.0)

    delivery = services["delivery_service"].project_delivery(project.id, today=MON)

    # fe 10 / 2.0 = 5, so be (6 days) now drives the first layer
    assert delivery.projection.total_workdays == 10
    assert delivery.projection.calculated_delivery_date == date(2024, 1, 22)
    assert delivery.projection.roles_without_capacity() == ["be", "qa"]


def test_progress_reduces_remaining_work(services, scope):
    project = _make_project(services, scope)
    ps = services["project_service"]
    ps.update_role_progress(project.id, "fe", 50)
    ps.update_role_progress(project.id, "be", 50)

    delivery = services["delivery_service"].project_delivery(project.id, today=MON)

    assert delivery.projection.total_workdays == 9


def test_holidays_apply_only_when_enabled(services, scope):
    project = _make_project(services, scope)
    services["work_calendar_service"].add_holiday(date(2024, 1, 10), "Team offsite")
    ds = services["delivery_service"]

    assert ds.project_delivery(project.id, today=MON).projection.calculated_delivery_date == date(2024, 1, 26)

    services["scope_service"].update_settings(scope.id, include_holidays=True)
    assert ds.project_delivery(project.id, today=MON).projection.calculated_delivery_date == date(2024, 1, 29)


def test_sequential_workflow_chains_every_role(services, scope):
    project = _make_project(services, scope, workflow_mode=WorkflowMode.SEQUENTIAL)

    delivery = services["delivery_service"].project_delivery(project.id, today=MON)

    assert len(delivery.groups) == 1
    assert delivery.groups[0].mode == GroupMode.SEQUENTIAL
    assert delivery.projection.total_workdays == 20
    assert delivery.projection.calculated_delivery_date == date(2024, 2, 5)


def test_start_policies(services, scope):
    project = _make_project(services, scope)
    ds = services["delivery_service"]
    today = date(2024, 2, 1)

    assert ds.project_delivery(project.id, today=today).projection.start_date == MON
    assert (
        ds.project_delivery(project.id, today=today, start_policy=StartDatePolicy.TODAY).projection.start_date
        == today
    )
    explicit = date(2024, 3, 4)
    assert (
        ds.project_delivery(
            project.id, today=today, start_policy=StartDatePolicy.TODAY, start_date=explicit
        ).projection.start_date
        == explicit
    )
    assert (
        ds.project_delivery(project.id, today=today, start_policy=StartDatePolicy.CREATED).projection.start_date
        == project.created_at.date()
    )


def test_project_start_policy_without_start_date_uses_today(services, scope):
    project = services["project_service"].create_project(scope.id, "Loose", role_mandays={"fe": 2})

    delivery = services["delivery_service"].project_delivery(project.id, today=MON)

    assert delivery.projection.start_date == MON
    assert delivery.projection.calculated_delivery_date == date(2024, 1, 10)


def test_project_without_effort_is_delivered_on_start(services, scope):
    project = services["project_service"].create_project(scope.id, "Empty", start_date=MON)

    delivery = services["delivery_service"].project_delivery(project.id, today=MON)

    assert delivery.groups == []
    assert delivery.projection.total_workdays == 0
    assert delivery.projection.calculated_delivery_date == MON


def test_scope_overview_skips_closed_projects(services, scope):
    ps = services["project_service"]
    first = _make_project(services, scope, name="First", priority=2)
    second = _make_project(services, scope, name="Second", priority=1)
    done = _make_project(services, scope, name="Done", priority=3)
    ps.set_status(done.id, ProjectStatus.COMPLETED)

    overview = services["delivery_service"].scope_overview(scope.id, today=MON)

    assert [d.project_id for d in overview] == [second.id, first.id]


def test_unknown_project_raises(services):
    with pytest.raises(NotFoundError) as exc:
        services["delivery_service"].project_delivery("missing")
    assert exc.value.code == "PROJECT_NOT_FOUND"
