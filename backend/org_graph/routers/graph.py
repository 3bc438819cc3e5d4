import asyncio

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from org_graph.models.employee_models import Employee
from org_graph.models.graph_models import GraphRenderRequest, GraphViewResponse
from org_graph.rate_limit import limiter
from org_graph.routers.directory import fetch_employees
from org_graph.services.export_graph_html import generate_graph_html
from org_graph.services.graph_service import UnknownEmployeeError, build_graph_view
from org_graph.services.graph_view import GraphView
from org_graph.services.grouping import GroupMode

router = APIRouter(prefix="/api/graph", tags=["graph"])

_VARIANTS = ("embedded", "standalone")


def _parse_group_mode(group_by: str) -> GroupMode:
    try:
        return GroupMode(group_by)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unsupported group_by: {group_by}") from None


async def _render(
    employees: list[Employee],
    group_by: str,
    query: str,
    selected: int | str | None,
    variant: str,
    ticks: int,
) -> GraphView:
    """Validate the request, then run the layout in a worker thread."""
    if variant not in _VARIANTS:
        raise HTTPException(status_code=422, detail=f"Unsupported variant: {variant}")
    mode = _parse_group_mode(group_by)
    loop = asyncio.get_event_loop()
    try:
        return await loop.run_in_executor(
            None, build_graph_view, employees, mode, query, selected, variant, ticks,
        )
    except UnknownEmployeeError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
@router.get("", response_model=GraphViewResponse)
@limiter.limit("30/minute")
async def get_graph(
    request: Request,
    group_by: str = "none",
    q: str = "",
    selected: str | None = None,
    variant: str = "embedded",
    ticks: int = 50,
    department: str | None = None,
) -> GraphViewResponse:
    """Render the configured directory as an org graph."""
    employees = await fetch_employees(department=department)
    view = await _render(employees, group_by, q, selected, variant, ticks)
    return view.to_response()


@router.post("", response_model=GraphViewResponse)
@limiter.limit("30/minute")
async def render_graph(request: Request, body: GraphRenderRequest) -> GraphViewResponse:
    """Render an inline employee list as an org graph."""
    view = await _render(
        body.employees, body.group_by, body.query, body.selected_id, body.variant, body.ticks
    )
    return view.to_response()


@router.get("/html", response_class=HTMLResponse)
@limiter.limit("30/minute")
async def get_graph_html(
    request: Request,
    group_by: str = "none",
    q: str = "",
    selected: str | None = None,
    variant: str = "embedded",
    ticks: int = 50,
    department: str | None = None,
) -> HTMLResponse:
    """Interactive standalone page for the configured directory."""
    employees = await fetch_employees(department=department)
    view = await _render(employees, group_by, q, selected, variant, ticks)
    return HTMLResponse(content=generate_graph_html(view))


@router.post("/html", response_class=HTMLResponse)
@limiter.limit("30/minute")
async def render_graph_html(request: Request, body: GraphRenderRequest) -> HTMLResponse:
    view = await _render(
        body.employees, body.group_by, body.query, body.selected_id, body.variant, body.ticks
    )
    return HTMLResponse(content=generate_graph_html(view))
