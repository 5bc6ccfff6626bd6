from datetime import date, datetime

import pytest
from openpyxl import load_workbook

from core.reporting.api import generate_burndown_png, generate_scope_excel_report
from core.reporting.contexts import BurndownChartContext
from core.reporting.renderers.burndown import BurndownPngRenderer

TODAY = date(2024, 1, 8)


def _seed(services, scope):
    ps = services["project_service"]
    late = ps.create_project(
        scope.id, "Checkout", delivery_date=date(2024, 1, 10), role_mandays={"fe": 10, "qa": 4}
    )
    ps.set_role_dependencies(late.id, [("fe", "qa")])
    ps.update_role_progress(late.id, "fe", 40, recorded_at=datetime(2024, 1, 8, 12, 0))
    ps.create_project(scope.id, "Search", role_mandays={"be": 3})
    return late


def test_scope_excel_report_has_overview_roles_and_queue(services, scope, tmp_path):
    _seed(services, scope)
    out = tmp_path / "exports" / "scope.xlsx"

    result = generate_scope_excel_report(
        services["delivery_service"], services["scope_service"], scope.id, out, today=TODAY
    )

    assert result == out
    wb = load_workbook(out)
    assert wb.sheetnames == ["Overview", "Roles", "Queue"]

    overview = wb["Overview"]
    assert overview["A1"].value == "Delivery overview - Delivery Team"
    assert overview["A8"].value == "Checkout"
    assert overview["A9"].value == "Search"
    # Checkout: fe 6 then qa 4 from 2024-01-08 -> 2024-01-22, target 2024-01-10
    assert overview["F8"].value == "2024-01-22"
    assert overview["H8"].value == -8

    roles = wb["Roles"]
    assert [roles.cell(r, 2).value for r in range(2, 5)] == ["FE", "QA", "BE"]

    queue = wb["Queue"]
    assert queue["B2"].value == "Checkout"
    assert queue["H3"].value == "Checkout"


def test_burndown_png_is_written(services, scope, tmp_path):
    late = _seed(services, scope)
    out = tmp_path / "charts" / "checkout.png"

    result = generate_burndown_png(
        services["dashboard_service"], services["scope_service"], late.id, out, today=TODAY
    )

    assert result == out
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_burndown_renderer_requires_points(tmp_path):
    ctx = BurndownChartContext(
        project_name="Empty",
        points=[],
        calculated_delivery_date=TODAY,
        target_delivery_date=None,
        today=TODAY,
        role_colors={},
    )
    with pytest.raises(ValueError):
        BurndownPngRenderer().render(ctx, tmp_path / "empty.png")
