from infra.db.project.mapper import (
    dependency_from_orm,
    dependency_to_orm,
    effort_from_orm,
    effort_to_orm,
    project_from_orm,
    project_to_orm,
    snapshot_from_orm,
    snapshot_to_orm,
)
from infra.db.project.repository import (
    SqlAlchemyProgressRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyRoleDependencyRepository,
    SqlAlchemyRoleEffortRepository,
)

__all__ = [
    "project_to_orm",
    "project_from_orm",
    "effort_to_orm",
    "effort_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
    "snapshot_to_orm",
    "snapshot_from_orm",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyRoleEffortRepository",
    "SqlAlchemyRoleDependencyRepository",
    "SqlAlchemyProgressRepository",
]
