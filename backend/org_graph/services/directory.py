"""Employee directory fetch with optional client-side filtering."""

from __future__ import annotations

import logging
import os
from typing import Callable

import httpx
from pydantic import ValidationError

from org_graph.models.employee_models import Employee

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0

EmployeeFilter = Callable[[Employee], bool]


class DirectoryError(Exception):
    """The directory could not be fetched or parsed."""


def get_directory_url() -> str | None:
    """Return the configured directory endpoint, or None when unset."""
    return os.environ.get("ORG_GRAPH_DIRECTORY_URL") or None


def _get_timeout() -> float:
    raw = os.environ.get("ORG_GRAPH_DIRECTORY_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid ORG_GRAPH_DIRECTORY_TIMEOUT=%r", raw)
        return DEFAULT_TIMEOUT_SECONDS


def build_filter(
    department: str | None = None,
    city: str | None = None,
    state: str | None = None,
) -> EmployeeFilter | None:
    """Build a case-insensitive equality predicate from optional criteria.

    Returns None when no criterion is given, so callers can skip filtering.
    """
    criteria = {
        "department": department,
        "city": city,
        "state": state,
    }
    wanted = {k: v.strip().lower() for k, v in criteria.items() if v and v.strip()}
    if not wanted:
        return None

    def _matches(employee: Employee) -> bool:
        for field, value in wanted.items():
            actual = getattr(employee, field) or ""
            if actual.strip().lower() != value:
                return False
        return True

    return _matches


class Directory:
    def __init__(self, timeout: float | None = None):
        self.timeout = timeout if timeout is not None else _get_timeout()

    async def get_users(
        self,
        directory_url: str,
        filter_function: EmployeeFilter | None = None,
    ) -> list[Employee]:
        """GET the directory and return the (optionally filtered) employees.

        Raises DirectoryError on any network, status, or parse failure.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(directory_url)
                resp.raise_for_status()
                raw = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Failed to fetch directory from %s: %s", directory_url, e)
            raise DirectoryError(f"Failed to fetch directory: {e}") from e

        if not isinstance(raw, list):
            logger.warning("Directory at %s did not return a JSON array", directory_url)
            raise DirectoryError("Directory response is not a JSON array")

        try:
            users = [Employee.model_validate(item) for item in raw]
        except ValidationError as e:
            logger.warning("Invalid employee record from %s: %s", directory_url, e)
            raise DirectoryError(f"Invalid employee record: {e}") from e

        logger.info("Fetched %d employees from directory", len(users))

        if filter_function:
            return [u for u in users if filter_function(u)]
        return users
