from datetime import date

from core.models import StartDatePolicy

TODAY = date(2024, 1, 8)


def _project(services, scope, name, target):
    # fe 5 from Monday 2024-01-08 lands on Monday 2024-01-15
    return services["project_service"].create_project(
        scope.id, name, delivery_date=target, role_mandays={"fe": 5}
    )


def test_average_slip_mixes_late_and_early(services, scope):
    _project(services, scope, "Late", date(2024, 1, 12))
    _project(services, scope, "Early", date(2024, 1, 18))

    result = services["delivery_service"].average_slip(scope.id, today=TODAY)

    assert result.average_slip == 1
    assert result.total_projects == 2
    assert result.delayed_projects == 1
    assert result.ahead_projects == 1
    assert result.on_time_projects == 0


def test_average_slip_rounds_half_up(services, scope):
    _project(services, scope, "Late one", date(2024, 1, 12))
    _project(services, scope, "Late two", date(2024, 1, 11))

    result = services["delivery_service"].average_slip(scope.id, today=TODAY)

    # (-1 + -2) / 2 = -1.5 -> -1
    assert result.average_slip == -1
    assert result.delayed_projects == 2


def test_projects_without_target_are_not_averaged(services, scope):
    _project(services, scope, "On time", date(2024, 1, 15))
    _project(services, scope, "Open ended", None)

    result = services["delivery_service"].average_slip(scope.id, today=TODAY)

    assert result.average_slip == 0
    assert result.total_projects == 2
    assert result.on_time_projects == 1


def test_no_targets_means_zero_slip(services, scope):
    _project(services, scope, "Open ended", None)

    result = services["delivery_service"].average_slip(
        scope.id, today=TODAY, start_policy=StartDatePolicy.PROJECT_START
    )

    assert result.average_slip == 0
    assert result.total_projects == 1
    assert result.delayed_projects == 0
