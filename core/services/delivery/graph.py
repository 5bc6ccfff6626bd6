from __future__ import annotations

import heapq
import logging
from typing import Dict, List, Sequence

from core.models import RoleDependency, WorkflowMode
from core.services.projection.models import RoleGroup, RoleLoad

logger = logging.getLogger(__name__)


class RoleCycleError(Exception):
    """Internal signal: the role dependency edges contain a cycle."""


def _layered_order(
    role_keys: Sequence[str],
    dependencies: Sequence[RoleDependency],
) -> List[List[str]]:
    """Kahn layering; roles inside a layer keep their input order."""
    rank = {key: index for index, key in enumerate(role_keys)}
    succ: Dict[str, List[str]] = {}
    indegree: Dict[str, int] = {key: 0 for key in role_keys}

    seen = set()
    for dep in dependencies:
        edge = (dep.from_role, dep.to_role)
        if dep.from_role not in rank or dep.to_role not in rank or edge in seen:
            continue
        if dep.from_role == dep.to_role:
            continue
        seen.add(edge)
        succ.setdefault(dep.from_role, []).append(dep.to_role)
        indegree[dep.to_role] += 1

    layer = [key for key in role_keys if indegree[key] == 0]
    layers: List[List[str]] = []
    visited = 0
    while layer:
        layers.append(layer)
        visited += len(layer)
        heap: list[tuple[int, str]] = []
        for key in layer:
            for nxt in succ.get(key, []):
                indegree[nxt] -= 1
                if indegree[nxt] == 0:
                    heapq.heappush(heap, (rank[nxt], nxt))
        layer = [heapq.heappop(heap)[1] for _ in range(len(heap))]

    if visited != len(role_keys):
        raise RoleCycleError()
    return layers


def build_role_groups(
    loads: Sequence[RoleLoad],
    dependencies: Sequence[RoleDependency],
    workflow_mode: WorkflowMode = WorkflowMode.PARALLEL,
) -> List[RoleGroup]:
    """
    Turn role dependency edges into the ordered groups the projector consumes.

    PARALLEL mode: every dependency layer becomes a parallel group, so
    FE/BE -> QA yields [PARALLEL(fe, be), PARALLEL(qa)].
    SEQUENTIAL mode: a single chain in dependency order.
    A cycle falls back to one parallel group holding every role.
    """
    if not loads:
        return []

    by_key: Dict[str, RoleLoad] = {}
    for load in loads:
        by_key.setdefault(load.role, load)
    role_keys = list(by_key)

    try:
        layers = _layered_order(role_keys, dependencies)
    except RoleCycleError:
        logger.warning(
            "Cyclic role dependencies (%s), projecting all roles in parallel.",
            ", ".join(f"{d.from_role}->{d.to_role}" for d in dependencies),
        )
        return [RoleGroup.parallel(*(by_key[key] for key in role_keys))]

    if workflow_mode == WorkflowMode.SEQUENTIAL:
        ordered = [by_key[key] for layer in layers for key in layer]
        return [RoleGroup.sequential(*ordered)]

    return [RoleGroup.parallel(*(by_key[key] for key in layer)) for layer in layers]


__all__ = ["build_role_groups"]
