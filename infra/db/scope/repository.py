from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import ScopeRepository, ScopeRoleRepository
from core.models import Scope, ScopeRole, ScopeSettings
from infra.db.models import ScopeORM, ScopeRoleORM, ScopeSettingsORM
from infra.db.scope.mapper import (
    role_from_orm,
    role_to_orm,
    scope_from_orm,
    scope_to_orm,
    settings_from_orm,
)


class SqlAlchemyScopeRepository(ScopeRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, scope: Scope) -> None:
        self.session.add(scope_to_orm(scope))

    def update(self, scope: Scope) -> None:
        self.session.merge(scope_to_orm(scope))

    def get(self, scope_id: str) -> Optional[Scope]:
        obj = self.session.get(ScopeORM, scope_id)
        return scope_from_orm(obj) if obj else None

    def list_all(self) -> List[Scope]:
        stmt = select(ScopeORM).order_by(ScopeORM.created_at)
        rows = self.session.execute(stmt).scalars().all()
        return [scope_from_orm(row) for row in rows]

    def get_settings(self, scope_id: str) -> Optional[ScopeSettings]:
        obj = self.session.get(ScopeSettingsORM, scope_id)
        return settings_from_orm(obj) if obj else None

    def upsert_settings(self, settings: ScopeSettings) -> None:
        existing = self.session.get(ScopeSettingsORM, settings.scope_id)
        values = {
            "allocation_enabled": settings.allocation_enabled,
            "calculation_mode": settings.calculation_mode,
            "include_external_projects": settings.include_external_projects,
            "default_allocation_fte": settings.default_allocation_fte,
            "include_holidays": settings.include_holidays,
            "calendar_id": settings.calendar_id,
        }
        if existing:
            for key, value in values.items():
                setattr(existing, key, value)
        else:
            self.session.add(ScopeSettingsORM(scope_id=settings.scope_id, **values))


class SqlAlchemyScopeRoleRepository(ScopeRoleRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, role: ScopeRole) -> None:
        self.session.add(role_to_orm(role))

    def update(self, role: ScopeRole) -> None:
        self.session.merge(role_to_orm(role))

    def get(self, role_id: str) -> Optional[ScopeRole]:
        obj = self.session.get(ScopeRoleORM, role_id)
        return role_from_orm(obj) if obj else None

    def get_by_key(self, scope_id: str, key: str) -> Optional[ScopeRole]:
        stmt = select(ScopeRoleORM).where(ScopeRoleORM.scope_id == scope_id, ScopeRoleORM.key == key)
        obj = self.session.execute(stmt).scalars().first()
        return role_from_orm(obj) if obj else None

    def list_by_scope(self, scope_id: str, active_only: bool = False) -> List[ScopeRole]:
        stmt = select(ScopeRoleORM).where(ScopeRoleORM.scope_id == scope_id)
        if active_only:
            stmt = stmt.where(ScopeRoleORM.is_active.is_(True))
        stmt = stmt.order_by(ScopeRoleORM.order_index, ScopeRoleORM.key)
        rows = self.session.execute(stmt).scalars().all()
        return [role_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyScopeRepository", "SqlAlchemyScopeRoleRepository"]
