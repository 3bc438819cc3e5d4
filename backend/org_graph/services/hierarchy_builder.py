"""Derive the node/edge model from a flat, self-referencing employee list."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from org_graph.models.employee_models import Employee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Edge:
    """Report -> manager, as positions into the node list."""

    source: int
    target: int


@dataclass
class HierarchyModel:
    employees: list[Employee]
    edges: list[Edge] = field(default_factory=list)
    missing_managers: list[int | str] = field(default_factory=list)  # employee ids


def index_by_id(employees: list[Employee]) -> dict[int | str, int]:
    """Map employee id -> first position in the list."""
    positions: dict[int | str, int] = {}
    for i, employee in enumerate(employees):
        positions.setdefault(employee.id, i)
    return positions


def build_hierarchy(employees: list[Employee]) -> HierarchyModel:
    """Build one edge per employee whose manager resolves in the same list.

    Unresolved manager references are logged and produce no edge.
    """
    positions = index_by_id(employees)
    model = HierarchyModel(employees=employees)

    for i, employee in enumerate(employees):
        if employee.manager is None:
            continue
        manager_index = positions.get(employee.manager.id)
        if manager_index is None:
            logger.warning(
                "Missing manager for %s (%s) in data.",
                employee.display_name,
                employee.id,
            )
            model.missing_managers.append(employee.id)
            continue
        model.edges.append(Edge(source=i, target=manager_index))

    logger.debug(
        "Built hierarchy: %d nodes, %d edges, %d dangling manager references",
        len(employees),
        len(model.edges),
        len(model.missing_managers),
    )
    return model
