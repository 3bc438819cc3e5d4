from fastapi import APIRouter, HTTPException, Request

from org_graph.models.employee_models import Employee
from org_graph.rate_limit import limiter
from org_graph.services.directory import (
    Directory,
    DirectoryError,
    build_filter,
    get_directory_url,
)

router = APIRouter(prefix="/api/directory", tags=["directory"])


async def fetch_employees(
    department: str | None = None,
    city: str | None = None,
    state: str | None = None,
) -> list[Employee]:
    """Fetch the configured directory, translating failures to HTTP errors."""
    directory_url = get_directory_url()
    if not directory_url:
        raise HTTPException(status_code=503, detail="ORG_GRAPH_DIRECTORY_URL is not configured")
    try:
        return await Directory().get_users(
            directory_url, build_filter(department=department, city=city, state=state)
        )
    except DirectoryError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e


@router.get("", response_model=list[Employee])
@limiter.limit("60/minute")
async def list_employees(
    request: Request,
    department: str | None = None,
    city: str | None = None,
    state: str | None = None,
) -> list[Employee]:
    """Return the employee directory, optionally filtered."""
    return await fetch_employees(department=department, city=city, state=state)
