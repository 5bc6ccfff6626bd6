from .models import DeliveryProjection, RoleDuration, RoleGroup, RoleLoad
from .projector import DeliveryProjector, ceil_workdays, project_delivery

__all__ = [
    "DeliveryProjector",
    "DeliveryProjection",
    "RoleDuration",
    "RoleGroup",
    "RoleLoad",
    "ceil_workdays",
    "project_delivery",
]
