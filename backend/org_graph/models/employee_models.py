"""Pydantic models for directory records (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ManagerRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | str | None = None  # None = dangling reference


class Employee(BaseModel):
    """One directory entry. Immutable for the duration of a render."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int | str
    display_name: str | None = None
    job_title: str | None = None
    department: str | None = None
    city: str | None = None
    state: str | None = None
    telephone_number: str | None = None
    mobile_number: str | None = None
    email: str | None = None
    manager: ManagerRef | None = None  # None = root
