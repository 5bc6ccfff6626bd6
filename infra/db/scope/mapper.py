from __future__ import annotations

from core.models import CalculationMode, Scope, ScopeRole, ScopeSettings
from infra.db.models import ScopeORM, ScopeRoleORM, ScopeSettingsORM


def scope_to_orm(scope: Scope) -> ScopeORM:
    return ScopeORM(
        id=scope.id,
        name=scope.name,
        description=scope.description,
        created_at=scope.created_at,
    )


def scope_from_orm(obj: ScopeORM) -> Scope:
    return Scope(
        id=obj.id,
        name=obj.name,
        description=obj.description or "",
        created_at=obj.created_at,
    )


def role_to_orm(role: ScopeRole) -> ScopeRoleORM:
    return ScopeRoleORM(
        id=role.id,
        scope_id=role.scope_id,
        key=role.key,
        label=role.label,
        color=role.color,
        order_index=role.order_index,
        is_active=role.is_active,
    )


def role_from_orm(obj: ScopeRoleORM) -> ScopeRole:
    return ScopeRole(
        id=obj.id,
        scope_id=obj.scope_id,
        key=obj.key,
        label=obj.label,
        color=obj.color,
        order_index=obj.order_index or 0,
        is_active=bool(obj.is_active),
    )


def settings_from_orm(obj: ScopeSettingsORM) -> ScopeSettings:
    return ScopeSettings(
        scope_id=obj.scope_id,
        allocation_enabled=bool(obj.allocation_enabled),
        calculation_mode=CalculationMode(obj.calculation_mode) if obj.calculation_mode else CalculationMode.FTE,
        include_external_projects=bool(obj.include_external_projects),
        default_allocation_fte=float(obj.default_allocation_fte or 1.0),
        include_holidays=bool(obj.include_holidays),
        calendar_id=obj.calendar_id or "default",
    )


__all__ = [
    "scope_to_orm",
    "scope_from_orm",
    "role_to_orm",
    "role_from_orm",
    "settings_from_orm",
]
