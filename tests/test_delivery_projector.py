from datetime import date

import pytest

from core.models import GroupMode
from core.services.calendar import is_weekday
from core.services.projection import (
    DeliveryProjector,
    RoleGroup,
    RoleLoad,
    ceil_workdays,
    project_delivery,
)

MON = date(2024, 1, 1)


def _spec_groups():
    return [
        RoleGroup.parallel(RoleLoad("fe", 10, 1.0), RoleLoad("be", 6, 1.0)),
        RoleGroup.sequential(RoleLoad("qa", 4, 1.0)),
    ]


def test_parallel_then_sequential_example():
    projection = DeliveryProjector().project(_spec_groups(), MON)

    assert projection.total_workdays == 14
    assert projection.calculated_delivery_date == date(2024, 1, 19)
    assert projection.diff_workdays is None


def test_parallel_group_takes_slowest_role():
    groups = [RoleGroup.parallel(RoleLoad("fe", 4, 2.0), RoleLoad("be", 3, 1.0))]
    assert DeliveryProjector().project(groups, MON).total_workdays == 3


def test_sequential_group_sums_roles():
    groups = [RoleGroup.sequential(RoleLoad("fe", 4, 2.0), RoleLoad("be", 3, 1.0))]
    assert DeliveryProjector().project(groups, MON).total_workdays == 5


def test_only_grand_total_is_rounded_up():
    groups = [RoleGroup.sequential(RoleLoad("fe", 1.5, 1.0), RoleLoad("be", 1.5, 1.0))]
    projection = DeliveryProjector().project(groups, MON)

    assert projection.total_duration_days == pytest.approx(3.0)
    assert projection.total_workdays == 3


def test_float_noise_does_not_add_a_day():
    groups = [RoleGroup.parallel(RoleLoad("fe", 3, 0.3))]
    assert DeliveryProjector().project(groups, MON).total_workdays == 10
    assert ceil_workdays(10.2) == 11
    assert ceil_workdays(0) == 0


def test_missing_capacity_falls_back_to_default_fte():
    groups = [RoleGroup.parallel(RoleLoad("fe", 5, 0.0), RoleLoad("be", 2, 1.0))]
    projection = DeliveryProjector(default_fte=0.5).project(groups, MON)

    assert projection.total_workdays == 10
    assert projection.roles_without_capacity() == ["fe"]
    fe = projection.role_breakdown[0]
    assert fe.used_default_fte is True
    assert fe.effective_fte == 0.5


def test_negative_remaining_is_treated_as_done():
    groups = [RoleGroup.parallel(RoleLoad("fe", -3, 1.0))]
    projection = DeliveryProjector().project(groups, MON)

    assert projection.total_workdays == 0
    assert projection.calculated_delivery_date == MON


def test_no_groups_returns_start_unchanged():
    saturday = date(2024, 1, 6)
    projection = DeliveryProjector().project([], saturday)

    assert projection.total_workdays == 0
    assert projection.calculated_delivery_date == saturday


def test_diff_is_positive_when_target_is_later():
    groups = [RoleGroup.parallel(RoleLoad("fe", 5, 1.0))]
    projector = DeliveryProjector()

    ahead = projector.project(groups, MON, target_delivery_date=date(2024, 1, 10))
    assert ahead.calculated_delivery_date == date(2024, 1, 8)
    assert ahead.diff_workdays == 2
    assert ahead.is_behind_schedule is False

    late = projector.project(groups, MON, target_delivery_date=date(2024, 1, 5))
    assert late.diff_workdays == -1
    assert late.is_behind_schedule is True
    assert late.slip_workdays == 1

    on_time = projector.project(groups, MON, target_delivery_date=date(2024, 1, 8))
    assert on_time.diff_workdays == 0


def test_injected_calendar_shifts_delivery():
    holiday = date(2024, 1, 3)

    def is_workday(d: date) -> bool:
        return is_weekday(d) and d != holiday

    groups = [RoleGroup.parallel(RoleLoad("fe", 5, 1.0))]
    projection = DeliveryProjector(is_workday=is_workday).project(groups, MON)

    assert projection.calculated_delivery_date == date(2024, 1, 9)


def test_role_breakdown_offsets_and_dates():
    projection = DeliveryProjector().project(_spec_groups(), MON)
    rows = {row.role: row for row in projection.role_breakdown}

    assert rows["fe"].group_index == 0
    assert rows["be"].start_offset_days == 0
    assert rows["be"].finish_offset_days == 6
    assert rows["qa"].group_index == 1
    assert rows["qa"].start_offset_days == 10
    assert rows["qa"].start_date == date(2024, 1, 15)
    assert rows["qa"].finish_date == date(2024, 1, 19)


def test_group_duration_modes():
    assert DeliveryProjector.group_duration(GroupMode.PARALLEL, [1, 4, 2]) == 4
    assert DeliveryProjector.group_duration(GroupMode.SEQUENTIAL, [1, 4, 2]) == 7
    assert DeliveryProjector.group_duration(GroupMode.SEQUENTIAL, []) == 0


def test_default_fte_must_be_positive():
    with pytest.raises(ValueError):
        DeliveryProjector(default_fte=0)


def test_module_level_helper_matches_projector():
    target = date(2024, 1, 31)
    direct = DeliveryProjector().project(_spec_groups(), MON, target)
    helper = project_delivery(_spec_groups(), MON, target)

    assert helper == direct


def test_all_zero_remaining_lands_on_start():
    groups = [RoleGroup.parallel(RoleLoad("fe", 0, 1.0)), RoleGroup.sequential(RoleLoad("qa", 0, 0.0))]
    projection = DeliveryProjector().project(groups, MON)

    assert projection.total_workdays == 0
    assert projection.calculated_delivery_date == MON
    assert projection.roles_without_capacity() == []


@pytest.mark.parametrize("extra", [0.5, 1, 3, 7.25])
def test_more_remaining_work_never_moves_delivery_earlier(extra):
    projector = DeliveryProjector()
    base = projector.project(_spec_groups(), MON)
    groups = [
        RoleGroup.parallel(RoleLoad("fe", 10, 1.0), RoleLoad("be", 6 + extra, 1.0)),
        RoleGroup.sequential(RoleLoad("qa", 4, 1.0)),
    ]

    assert projector.project(groups, MON).calculated_delivery_date >= base.calculated_delivery_date


@pytest.mark.parametrize("fte", [1.1, 1.5, 2.0])
def test_more_positive_capacity_never_moves_delivery_later(fte):
    """Holds for fte > 0; zero FTE is replaced by the default FTE."""
    projector = DeliveryProjector()
    base = projector.project(_spec_groups(), MON)
    groups = [
        RoleGroup.parallel(RoleLoad("fe", 10, fte), RoleLoad("be", 6, 1.0)),
        RoleGroup.sequential(RoleLoad("qa", 4, 1.0)),
    ]

    assert projector.project(groups, MON).calculated_delivery_date <= base.calculated_delivery_date


def test_zero_fte_is_projected_at_default_not_as_lowest_capacity():
    projector = DeliveryProjector()

    zero = projector.project([RoleGroup.parallel(RoleLoad("fe", 10, 0.0))], MON)
    half = projector.project([RoleGroup.parallel(RoleLoad("fe", 10, 0.5))], MON)

    assert zero.calculated_delivery_date == date(2024, 1, 15)
    assert zero.role_breakdown[0].used_default_fte
    assert half.calculated_delivery_date == date(2024, 1, 29)
    assert not half.role_breakdown[0].used_default_fte


def test_projection_is_repeatable():
    projector = DeliveryProjector()
    target = date(2024, 1, 31)

    assert projector.project(_spec_groups(), MON, target) == projector.project(_spec_groups(), MON, target)
