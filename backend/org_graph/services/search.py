"""Substring/regex search across employee text fields."""

from __future__ import annotations

import logging
import re

from org_graph.models.employee_models import Employee

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("display_name", "job_title", "department", "telephone_number", "email")
SEARCH_FIELDS_WITH_MOBILE = (
    "display_name",
    "job_title",
    "department",
    "telephone_number",
    "mobile_number",
    "email",
)


def compile_query(query: str) -> re.Pattern[str]:
    """Compile ``query`` case-insensitively.

    The query is treated as a regular expression; when it is not a valid
    pattern (e.g. "C++") it is matched literally instead.
    """
    try:
        return re.compile(query, re.IGNORECASE)
    except re.error:
        logger.debug("Query %r is not a valid pattern, matching literally", query)
        return re.compile(re.escape(query), re.IGNORECASE)


def is_match(
    employee: Employee,
    pattern: re.Pattern[str],
    include_mobile_number: bool = False,
) -> bool:
    fields = SEARCH_FIELDS_WITH_MOBILE if include_mobile_number else SEARCH_FIELDS
    for field in fields:
        value = getattr(employee, field)
        if value and pattern.search(value):
            return True
    return False


def compute_non_match(
    employees: list[Employee],
    query: str,
    include_mobile_number: bool = False,
) -> list[bool]:
    """Non-match flag per employee; all False for an empty query."""
    if not query:
        return [False] * len(employees)
    pattern = compile_query(query)
    return [not is_match(e, pattern, include_mobile_number) for e in employees]


def format_match_count(query: str, match_count: int) -> str:
    return f"({match_count} matches)" if query else ""
