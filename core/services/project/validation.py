from __future__ import annotations

from datetime import date
from typing import Optional

from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ProjectRepository, ScopeRepository, ScopeRoleRepository
from core.models import ScopeRole, normalize_role_key


class ProjectValidationMixin:
    _project_repo: ProjectRepository
    _scope_repo: ScopeRepository
    _role_repo: ScopeRoleRepository

    def _validate_project_name(self, scope_id: str, name: str, exclude_id: Optional[str] = None) -> None:
        if not name or not name.strip():
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_EMPTY")
        if len(name.strip()) < 3:
            raise ValidationError("Project name must be at least 3 characters.", code="PROJECT_NAME_TOO_SHORT")

        for project in self._project_repo.list_by_scope(scope_id):
            if project.id == exclude_id:
                continue
            if project.name.strip().lower() == name.strip().lower():
                raise ValidationError("A project with this name already exists.", code="PROJECT_NAME_DUPLICATE")

    def _validate_scope_exists(self, scope_id: str) -> None:
        if self._scope_repo.get(scope_id) is None:
            raise NotFoundError("Scope not found.", code="SCOPE_NOT_FOUND")

    @staticmethod
    def _validate_dates(start_date: Optional[date], delivery_date: Optional[date]) -> None:
        if start_date and delivery_date and delivery_date < start_date:
            raise ValidationError(
                f"Delivery date ({delivery_date}) can not be before project start ({start_date})",
                code="PROJECT_INVALID_DATES",
            )

    @staticmethod
    def _validate_mandays(value: float) -> float:
        value = float(value)
        if value < 0:
            raise ValidationError("Mandays cannot be negative.", code="MANDAYS_NEGATIVE")
        return value

    @staticmethod
    def _validate_percent(value: float) -> float:
        value = float(value)
        if value < 0 or value > 100:
            raise ValidationError("Percent done must be between 0 and 100.", code="PERCENT_OUT_OF_RANGE")
        return value

    def _require_role(self, scope_id: str, role_key: str) -> ScopeRole:
        role = self._role_repo.get_by_key(scope_id, normalize_role_key(role_key))
        if role is None or not role.is_active:
            raise ValidationError(f"Unknown role '{role_key}'.", code="ROLE_UNKNOWN")
        return role


__all__ = ["ProjectValidationMixin"]
