"""Radius classes from hierarchy position."""

from __future__ import annotations

from org_graph.models.employee_models import Employee
from org_graph.services.hierarchy_builder import index_by_id

ROOT_MULTIPLIER = 1.6
SENIOR_MANAGER_MULTIPLIER = 1.5  # direct report of a root, with reports of their own
MANAGER_MULTIPLIER = 1.2
BASE_MULTIPLIER = 1.0


def _ids_with_direct_reports(employees: list[Employee]) -> set[int | str]:
    return {
        e.manager.id
        for e in employees
        if e.manager is not None and e.manager.id is not None and e.manager.id != e.id
    }


def classify(
    employee: Employee,
    employees: list[Employee],
    positions: dict[int | str, int] | None = None,
    managers: set[int | str] | None = None,
) -> float:
    """Return the radius multiplier for one employee within ``employees``.

    Rules, first match wins:
      1. no manager -> 1.6
      2. has reports, manager is a root -> 1.5
      3. has reports -> 1.2
      4. leaf -> 1.0
    A manager reference that does not resolve is treated as a non-root manager.
    """
    if employee.manager is None:
        return ROOT_MULTIPLIER

    if positions is None:
        positions = index_by_id(employees)
    if managers is None:
        managers = _ids_with_direct_reports(employees)

    if employee.id not in managers:
        return BASE_MULTIPLIER

    manager_index = positions.get(employee.manager.id)
    if manager_index is not None and employees[manager_index].manager is None:
        return SENIOR_MANAGER_MULTIPLIER
    return MANAGER_MULTIPLIER


def assign_radius_multipliers(employees: list[Employee]) -> list[float]:
    """Classify every employee; recomputed on each call, never cached."""
    positions = index_by_id(employees)
    managers = _ids_with_direct_reports(employees)
    return [classify(e, employees, positions, managers) for e in employees]
