from .graph import build_role_groups
from .models import AverageSlipResult, PriorityWindow, ProjectDelivery
from .service import DeliveryService

__all__ = [
    "DeliveryService",
    "ProjectDelivery",
    "PriorityWindow",
    "AverageSlipResult",
    "build_role_groups",
]
