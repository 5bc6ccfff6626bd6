from infra.db.scope.mapper import (
    role_from_orm,
    role_to_orm,
    scope_from_orm,
    scope_to_orm,
    settings_from_orm,
)
from infra.db.scope.repository import SqlAlchemyScopeRepository, SqlAlchemyScopeRoleRepository

__all__ = [
    "scope_to_orm",
    "scope_from_orm",
    "role_to_orm",
    "role_from_orm",
    "settings_from_orm",
    "SqlAlchemyScopeRepository",
    "SqlAlchemyScopeRoleRepository",
]
