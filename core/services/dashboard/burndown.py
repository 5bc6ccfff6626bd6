from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Sequence

from core.models import ProgressSnapshot, RoleEffort
from core.services.dashboard.models import BurndownPoint


def _latest_by_role(
    history: Sequence[ProgressSnapshot],
) -> Dict[str, List[ProgressSnapshot]]:
    by_role: Dict[str, List[ProgressSnapshot]] = {}
    for snapshot in sorted(history, key=lambda s: s.recorded_at):
        by_role.setdefault(snapshot.role_key, []).append(snapshot)
    return by_role


def _snapshot_at(snapshots: List[ProgressSnapshot], cutoff: datetime) -> Optional[ProgressSnapshot]:
    last = None
    for snapshot in snapshots:
        if snapshot.recorded_at > cutoff:
            break
        last = snapshot
    return last


def build_progress_series(
    efforts: Sequence[RoleEffort],
    history: Sequence[ProgressSnapshot],
    start: date,
    end: date,
) -> List[BurndownPoint]:
    """
    Rebuild the day-by-day progress of a project from its snapshot history.

    Only roles with estimated mandays take part. For every calendar day the
    latest snapshot recorded up to the end of that day counts; a role with no
    snapshot yet sits at 0%. A single-day range is stretched to two days so
    the chart still has a line to draw.
    """
    if end < start:
        start, end = end, start

    days: List[date] = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    if len(days) == 1:
        days.append(days[0] + timedelta(days=1))

    efforts = [e for e in efforts if (e.total_mandays or 0) > 0]
    by_role = _latest_by_role(history)
    span = len(days) - 1

    points: List[BurndownPoint] = []
    for index, day in enumerate(days):
        cutoff = datetime.combine(day, time.max)
        role_percent: Dict[str, float] = {}
        remaining = 0.0
        for effort in efforts:
            snapshot = _snapshot_at(by_role.get(effort.role_key, []), cutoff)
            percent = float(snapshot.percent_done) if snapshot else 0.0
            total = effort.total_mandays
            if snapshot is not None and snapshot.total_mandays is not None:
                total = snapshot.total_mandays
            role_percent[effort.role_key] = percent
            remaining += max(0.0, float(total) * (1.0 - percent / 100.0))

        mean = sum(role_percent.values()) / len(role_percent) if role_percent else 0.0
        points.append(
            BurndownPoint(
                day=day,
                role_percent=role_percent,
                percent_done=mean,
                remaining_mandays=remaining,
                ideal_percent=min(index / span * 100.0, 100.0),
            )
        )
    return points


__all__ = ["build_progress_series"]
