from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ScopeRepository, ScopeRoleRepository
from core.models import (
    CalculationMode,
    Scope,
    ScopeRole,
    ScopeSettings,
    normalize_role_key,
)

logger = logging.getLogger(__name__)

DEFAULT_ROLES = (
    ("fe", "FE", "#2563eb"),
    ("be", "BE", "#059669"),
    ("qa", "QA", "#f59e42"),
    ("pm", "PM", "#a21caf"),
    ("dpl", "DPL", "#e11d48"),
)

_SETTINGS_FIELDS = {
    "allocation_enabled",
    "calculation_mode",
    "include_external_projects",
    "default_allocation_fte",
    "include_holidays",
    "calendar_id",
}


class ScopeService:
    def __init__(self, session: Session, scope_repo: ScopeRepository, role_repo: ScopeRoleRepository):
        self._session = session
        self._scope_repo = scope_repo
        self._role_repo = role_repo

    # ---------------------------------------------------------------- scopes

    def create_scope(self, name: str, description: str = "", with_default_roles: bool = True) -> Scope:
        if not name or not name.strip():
            raise ValidationError("Scope name cannot be empty.", code="SCOPE_NAME_EMPTY")
        scope = Scope.create(name=name.strip(), description=description.strip())
        try:
            self._scope_repo.add(scope)
            self._scope_repo.upsert_settings(ScopeSettings.create_default(scope.id))
            if with_default_roles:
                for index, (key, label, color) in enumerate(DEFAULT_ROLES):
                    self._role_repo.add(
                        ScopeRole.create(scope.id, key, label=label, color=color, order_index=index)
                    )
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating scope: %s", e)
            raise
        logger.info("Created scope %s - %s", scope.id, scope.name)
        return scope

    def get_scope(self, scope_id: str) -> Scope:
        scope = self._scope_repo.get(scope_id)
        if not scope:
            raise NotFoundError("Scope not found.", code="SCOPE_NOT_FOUND")
        return scope

    def list_scopes(self) -> List[Scope]:
        return self._scope_repo.list_all()

    # ----------------------------------------------------------------- roles

    def list_roles(self, scope_id: str, active_only: bool = True) -> List[ScopeRole]:
        return self._role_repo.list_by_scope(scope_id, active_only=active_only)

    def add_role(self, scope_id: str, key: str, label: str = "", color: str | None = None) -> ScopeRole:
        self.get_scope(scope_id)
        normalized = normalize_role_key(key)
        if not normalized or not normalized.replace("_", "").isalnum():
            raise ValidationError("Role key must be alphanumeric.", code="ROLE_KEY_INVALID")
        existing = self._role_repo.get_by_key(scope_id, normalized)
        if existing is not None:
            if existing.is_active:
                raise ValidationError(f"Role '{normalized}' already exists.", code="ROLE_DUPLICATE")
            existing.is_active = True
            existing.label = label.strip() or existing.label
            existing.color = color or existing.color
            role = existing
            write = self._role_repo.update
        else:
            order_index = len(self._role_repo.list_by_scope(scope_id))
            role = ScopeRole.create(scope_id, normalized, label=label, color=color, order_index=order_index)
            write = self._role_repo.add
        try:
            write(role)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return role

    def update_role(
        self,
        role_id: str,
        label: str | None = None,
        color: str | None = None,
        order_index: int | None = None,
    ) -> ScopeRole:
        role = self._role_repo.get(role_id)
        if not role:
            raise NotFoundError("Role not found.", code="ROLE_NOT_FOUND")
        if label is not None:
            if not label.strip():
                raise ValidationError("Role label cannot be empty.", code="ROLE_LABEL_EMPTY")
            role.label = label.strip()
        if color is not None:
            role.color = color
        if order_index is not None:
            role.order_index = int(order_index)
        try:
            self._role_repo.update(role)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        return role

    def deactivate_role(self, role_id: str) -> None:
        role = self._role_repo.get(role_id)
        if not role:
            raise NotFoundError("Role not found.", code="ROLE_NOT_FOUND")
        role.is_active = False
        try:
            self._role_repo.update(role)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    # -------------------------------------------------------------- settings

    def get_settings(self, scope_id: str) -> ScopeSettings:
        self.get_scope(scope_id)
        return self._scope_repo.get_settings(scope_id) or ScopeSettings.create_default(scope_id)

    def update_settings(self, scope_id: str, **changes) -> ScopeSettings:
        unknown = set(changes) - _SETTINGS_FIELDS
        if unknown:
            raise ValidationError(f"Unknown settings: {', '.join(sorted(unknown))}", code="SETTINGS_UNKNOWN")

        settings = self.get_settings(scope_id)
        if "calculation_mode" in changes:
            try:
                changes["calculation_mode"] = CalculationMode(changes["calculation_mode"])
            except ValueError as exc:
                raise ValidationError(str(exc), code="SETTINGS_MODE_INVALID") from exc
        if "default_allocation_fte" in changes:
            value = float(changes["default_allocation_fte"])
            if value <= 0:
                raise ValidationError("Default allocation FTE must be positive.", code="FTE_OUT_OF_RANGE")
            changes["default_allocation_fte"] = value

        for key, value in changes.items():
            setattr(settings, key, value)
        try:
            self._scope_repo.upsert_settings(settings)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info("Updated settings of scope %s: %s", scope_id, sorted(changes))
        return settings


__all__ = ["ScopeService", "DEFAULT_ROLES"]
