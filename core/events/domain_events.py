"""Change notifications for anything that feeds a delivery projection."""
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.project_changed: Signal[str] = Signal("project_changed")          # project_id
        self.progress_changed: Signal[str] = Signal("progress_changed")        # project_id
        self.team_changed: Signal[str] = Signal("team_changed")                # scope_id
        self.allocations_changed: Signal[str] = Signal("allocations_changed")  # scope_id


# SINGLE global instance
domain_events = DomainEvents()
