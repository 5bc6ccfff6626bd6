from .engine import WorkCalendarEngine
from .service import WorkCalendarService

__all__ = ["WorkCalendarEngine", "WorkCalendarService"]
