from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.domain.enums import CalculationMode
from core.domain.identifiers import generate_id

DEFAULT_ALLOCATION_FTE = 1.0


def normalize_role_key(value: str) -> str:
    return (value or "").strip().lower()


@dataclass
class Scope:
    id: str
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now)

    @staticmethod
    def create(name: str, description: str = "") -> "Scope":
        return Scope(id=generate_id(), name=name, description=description, created_at=datetime.now())


@dataclass
class ScopeRole:
    id: str
    scope_id: str
    key: str
    label: str
    color: Optional[str] = None
    order_index: int = 0
    is_active: bool = True

    @staticmethod
    def create(
        scope_id: str,
        key: str,
        label: str = "",
        color: Optional[str] = None,
        order_index: int = 0,
    ) -> "ScopeRole":
        normalized = normalize_role_key(key)
        return ScopeRole(
            id=generate_id(),
            scope_id=scope_id,
            key=normalized,
            label=label.strip() or normalized.upper(),
            color=color,
            order_index=order_index,
        )


@dataclass
class ScopeSettings:
    scope_id: str
    allocation_enabled: bool = False
    calculation_mode: CalculationMode = CalculationMode.FTE
    include_external_projects: bool = False
    default_allocation_fte: float = DEFAULT_ALLOCATION_FTE
    include_holidays: bool = False
    calendar_id: str = "default"

    @staticmethod
    def create_default(scope_id: str) -> "ScopeSettings":
        return ScopeSettings(scope_id=scope_id)

    @property
    def uses_allocation_table(self) -> bool:
        return self.allocation_enabled and self.calculation_mode != CalculationMode.FTE


__all__ = ["Scope", "ScopeRole", "ScopeSettings", "DEFAULT_ALLOCATION_FTE", "normalize_role_key"]
