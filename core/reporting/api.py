"""Reporting API wrappers around renderer classes."""

from datetime import date
from pathlib import Path

from core.reporting.contexts import BurndownChartContext, ScopeReportContext
from core.reporting.renderers.burndown import BurndownPngRenderer
from core.reporting.renderers.excel import ScopeExcelRenderer
from core.services.dashboard import DashboardService
from core.services.delivery import DeliveryService
from core.services.scope import ScopeService


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def generate_burndown_png(
    dashboard_service: DashboardService,
    scope_service: ScopeService,
    project_id: str,
    output_path: str | Path,
    today: date | None = None,
) -> Path:
    today = today or date.today()
    data = dashboard_service.get_project_dashboard(project_id, today=today)
    roles = scope_service.list_roles(data.delivery.scope_id, active_only=False)
    ctx = BurndownChartContext(
        project_name=data.delivery.project_name,
        points=data.burndown,
        calculated_delivery_date=data.projection.calculated_delivery_date,
        target_delivery_date=data.projection.target_delivery_date,
        today=today,
        role_colors={role.key: role.color for role in roles if role.color},
    )
    return BurndownPngRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_scope_excel_report(
    delivery_service: DeliveryService,
    scope_service: ScopeService,
    scope_id: str,
    output_path: str | Path,
    today: date | None = None,
) -> Path:
    today = today or date.today()
    scope = scope_service.get_scope(scope_id)
    ctx = ScopeReportContext(
        scope_name=scope.name,
        as_of=today,
        deliveries=delivery_service.scope_overview(scope_id, today=today),
        queue=delivery_service.priority_schedule(scope_id, today=today),
        slip=delivery_service.average_slip(scope_id, today=today),
    )
    return ScopeExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))
