from .service import DEFAULT_ROLES, ScopeService

__all__ = ["ScopeService", "DEFAULT_ROLES"]
