from .models import CapacitySource, DailyCapacity, MemberCapacityRow, RoleCapacity, TeamCapacity
from .service import CapacityService

__all__ = [
    "CapacityService",
    "CapacitySource",
    "DailyCapacity",
    "MemberCapacityRow",
    "RoleCapacity",
    "TeamCapacity",
]
