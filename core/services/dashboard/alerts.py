from __future__ import annotations

from datetime import date
from typing import List, Sequence

from core.models import Project, RoleEffort
from core.services.delivery.models import ProjectDelivery


def build_alerts(
    project: Project,
    efforts: Sequence[RoleEffort],
    delivery: ProjectDelivery,
    today: date,
) -> List[str]:
    alerts: List[str] = []
    projection = delivery.projection
    remaining = sum(e.remaining_mandays for e in efforts)

    if not any((e.total_mandays or 0) > 0 for e in efforts):
        alerts.append("This project has no effort estimate yet.")

    if projection.target_delivery_date is None:
        alerts.append("No target delivery date is set.")
    elif projection.is_behind_schedule:
        alerts.append(
            f"Projected delivery {projection.calculated_delivery_date.isoformat()} is "
            f"{projection.slip_workdays} workday(s) after the target "
            f"{projection.target_delivery_date.isoformat()}."
        )

    if projection.target_delivery_date and projection.target_delivery_date < today and remaining > 0:
        alerts.append(
            f"Target date {projection.target_delivery_date.isoformat()} has passed "
            f"with {remaining:.1f} manday(s) remaining."
        )

    for role in projection.roles_without_capacity():
        alerts.append(f"Role '{role}' has no capacity; the default FTE was used.")

    return alerts


__all__ = ["build_alerts"]
