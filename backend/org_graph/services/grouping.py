"""Group nodes by department or location and color them with a categorical palette."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from org_graph.models.employee_models import Employee
from org_graph.models.graph_models import LegendEntry

# d3 categorical palettes
CATEGORY10: list[str] = [
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
]

CATEGORY20: list[str] = [
    "#1f77b4", "#aec7e8", "#ff7f0e", "#ffbb78", "#2ca02c",
    "#98df8a", "#d62728", "#ff9896", "#9467bd", "#c5b0d5",
    "#8c564b", "#c49c94", "#e377c2", "#f7b6d2", "#7f7f7f",
    "#c7c7c7", "#bcbd22", "#dbdb8d", "#17becf", "#9edae5",
]

SMALL_PALETTE_MAX_GROUPS = 10


class GroupMode(str, Enum):
    NONE = "none"
    DEPARTMENT = "department"
    LOCATION = "location"


def mode_from_controls(group_by_department: bool, group_by_location: bool) -> GroupMode:
    """Department wins when both boxes are checked; neither checked -> none."""
    if group_by_department:
        return GroupMode.DEPARTMENT
    if group_by_location:
        return GroupMode.LOCATION
    return GroupMode.NONE


def format_location(city: str | None, state: str | None) -> str:
    """Return "City, ST". Without a city there is no comma: ("", "WA") -> " WA"."""
    city = city or ""
    state = state or ""
    comma = "," if city else ""
    return f"{city}{comma} {state}"


def group_label(employee: Employee, mode: GroupMode) -> str:
    if mode == GroupMode.DEPARTMENT:
        return employee.department or ""
    if mode == GroupMode.LOCATION:
        return format_location(employee.city, employee.state)
    return ""


def palette_for(group_count: int) -> list[str]:
    return CATEGORY20 if group_count > SMALL_PALETTE_MAX_GROUPS else CATEGORY10


class OrdinalColorScale:
    """Ordinal scale with an implicit domain.

    Each new label takes the next palette color in order of first lookup,
    wrapping around when the palette is exhausted.
    """

    def __init__(self, palette: list[str]):
        self.palette = palette
        self._index: dict[str, int] = {}

    def __call__(self, label: str) -> str:
        if label not in self._index:
            self._index[label] = len(self._index)
        return self.palette[self._index[label] % len(self.palette)]

    @property
    def domain(self) -> list[str]:
        return list(self._index)


@dataclass
class Grouping:
    mode: GroupMode
    labels: list[str]
    colors: list[str]
    legend: list[LegendEntry]


def build_legend(labels: list[str], colors: list[str]) -> list[LegendEntry]:
    """One entry per distinct label, sorted by label."""
    seen: dict[str, str] = {}
    for label, color in zip(labels, colors):
        seen.setdefault(label, color)
    entries = [LegendEntry(group=g, color=c) for g, c in seen.items()]
    entries.sort(key=lambda e: (e.group.casefold(), e.group))
    return entries


def regroup(employees: list[Employee], mode: GroupMode) -> Grouping:
    """Label and color every node for ``mode``.

    Pure: the same node list and mode always yield the same assignment.
    """
    labels = [group_label(e, mode) for e in employees]
    scale = OrdinalColorScale(palette_for(len(set(labels))))
    colors = [scale(label) for label in labels]
    return Grouping(
        mode=mode,
        labels=labels,
        colors=colors,
        legend=build_legend(labels, colors),
    )
