"""Host-side hooks: grouping controls in, detail/search display slots out."""

from __future__ import annotations

from typing import Any, Protocol

from org_graph.services.grouping import GroupMode, mode_from_controls

# Display slot names
SLOT_NAME = "name"
SLOT_JOB_TITLE = "job-title"
SLOT_DEPARTMENT = "department"
SLOT_LOCATION = "location"
SLOT_TELEPHONE = "telephone-number"
SLOT_MOBILE = "mobile-number"
SLOT_EMAIL_LINK = "email-link"
SLOT_SEARCH_COUNT = "search-record-count"
SLOT_PICTURE = "picture"


class DisplaySink(Protocol):
    def set_text(self, slot: str, text: str) -> None: ...

    def set_link(self, slot: str, text: str, href: str) -> None: ...

    def set_picture(self, url: str | None) -> None: ...

    def set_panel_visible(self, visible: bool) -> None: ...


class ControlReader(Protocol):
    def read_group_mode(self) -> GroupMode: ...


class DisplaySlots:
    """In-memory display sink; slot -> last written value."""

    def __init__(self) -> None:
        self.slots: dict[str, Any] = {}
        self.panel_visible = False

    def set_text(self, slot: str, text: str) -> None:
        self.slots[slot] = text

    def set_link(self, slot: str, text: str, href: str) -> None:
        self.slots[slot] = {"text": text, "href": href}

    def set_picture(self, url: str | None) -> None:
        self.slots[SLOT_PICTURE] = {"src": url, "visible": bool(url)}

    def set_panel_visible(self, visible: bool) -> None:
        self.panel_visible = visible

    def get(self, slot: str, default: Any = None) -> Any:
        return self.slots.get(slot, default)


class StaticControls:
    """Grouping checkboxes with a fixed state."""

    def __init__(self, group_by_department: bool = False, group_by_location: bool = False):
        self.group_by_department = group_by_department
        self.group_by_location = group_by_location

    @classmethod
    def for_mode(cls, mode: GroupMode) -> StaticControls:
        return cls(
            group_by_department=mode == GroupMode.DEPARTMENT,
            group_by_location=mode == GroupMode.LOCATION,
        )

    def read_group_mode(self) -> GroupMode:
        return mode_from_controls(self.group_by_department, self.group_by_location)
