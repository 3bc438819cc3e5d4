"""Pydantic models for the org graph API."""

from __future__ import annotations

from pydantic import BaseModel

from org_graph.models.employee_models import Employee


class GraphNode(BaseModel):
    """A rendered employee with its derived visual state."""

    index: int
    id: int | str
    display_name: str | None = None
    abbreviation: str | None = None
    radius_multiplier: float = 1.0
    radius: float
    group: str = ""
    color: str
    selected: bool = False
    non_match: bool = False
    x: float | None = None
    y: float | None = None


class GraphEdge(BaseModel):
    """Report -> manager link, by node index."""

    source: int
    target: int


class LegendEntry(BaseModel):
    group: str
    color: str


class DetailPanel(BaseModel):
    """Field values published to the detail panel slots."""

    name: str = ""
    job_title: str = ""
    department: str = ""
    location: str = ""
    telephone_number: str = ""
    mobile_number: str = ""
    email: str = ""
    email_href: str = ""
    picture_url: str | None = None
    picture_visible: bool = False


class GraphViewResponse(BaseModel):
    """Complete view state after render + regroup + search + select."""

    width: int
    height: int
    group_mode: str = "none"
    query: str = ""
    match_count_text: str = ""
    selected_id: int | str | None = None
    nodes: list[GraphNode]
    edges: list[GraphEdge]
    legend: list[LegendEntry] = []
    detail: DetailPanel | None = None
    missing_managers: list[int | str] = []


class GraphRenderRequest(BaseModel):
    """Render an inline employee list instead of fetching the directory."""

    employees: list[Employee]
    group_by: str = "none"  # "none" | "department" | "location"
    query: str = ""
    selected_id: int | str | None = None
    variant: str = "embedded"  # "embedded" | "standalone"
    ticks: int = 50
