from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ARCHIVED = "archived"


class WorkflowMode(str, Enum):
    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"


class GroupMode(str, Enum):
    PARALLEL = "PARALLEL"
    SEQUENTIAL = "SEQUENTIAL"


class CalculationMode(str, Enum):
    FTE = "fte"
    ALLOCATION = "allocation"
    HYBRID = "hybrid"


class StartDatePolicy(str, Enum):
    TODAY = "TODAY"
    PROJECT_START = "PROJECT_START"
    CREATED = "CREATED"


CLOSED_PROJECT_STATUSES = frozenset(
    {ProjectStatus.COMPLETED, ProjectStatus.CANCELLED, ProjectStatus.ARCHIVED}
)
QUEUED_PROJECT_STATUSES = (
    ProjectStatus.IN_PROGRESS,
    ProjectStatus.NOT_STARTED,
    ProjectStatus.PAUSED,
)


__all__ = [
    "ProjectStatus",
    "WorkflowMode",
    "GroupMode",
    "CalculationMode",
    "StartDatePolicy",
    "CLOSED_PROJECT_STATUSES",
    "QUEUED_PROJECT_STATUSES",
]
