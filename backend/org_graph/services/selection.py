"""Selected-node detail panel field mapping."""

from __future__ import annotations

from urllib.parse import quote

from org_graph.models.employee_models import Employee
from org_graph.models.graph_models import DetailPanel
from org_graph.services.grouping import format_location
from org_graph.services.image_retriever import ImageRetriever
from org_graph.services.view_hooks import (
    SLOT_DEPARTMENT,
    SLOT_EMAIL_LINK,
    SLOT_JOB_TITLE,
    SLOT_LOCATION,
    SLOT_MOBILE,
    SLOT_NAME,
    SLOT_TELEPHONE,
    DisplaySink,
)

# Characters left unescaped by JavaScript's encodeURI
_ENCODE_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


def mailto_href(email: str | None) -> str:
    return f"mailto:{quote(email or '', safe=_ENCODE_URI_SAFE)}"


def build_detail_panel(
    employee: Employee,
    image_retriever: ImageRetriever | None = None,
    include_mobile_number: bool = False,
) -> DetailPanel:
    """Map an employee onto the detail panel fields.

    With ``include_mobile_number`` the phone lines are labelled
    ("Phone: ...", "Mobile: ..."); otherwise the telephone number is shown
    raw and the mobile slot stays empty. Missing fields become "".
    """
    if include_mobile_number:
        telephone = f"Phone: {employee.telephone_number}" if employee.telephone_number else ""
        mobile = f"Mobile: {employee.mobile_number}" if employee.mobile_number else ""
    else:
        telephone = employee.telephone_number or ""
        mobile = ""

    picture_url = image_retriever.get_image_url(employee.email) if image_retriever else None

    return DetailPanel(
        name=employee.display_name or "",
        job_title=employee.job_title or "",
        department=employee.department or "",
        location=format_location(employee.city, employee.state),
        telephone_number=telephone,
        mobile_number=mobile,
        email=employee.email or "",
        email_href=mailto_href(employee.email),
        picture_url=picture_url or None,
        picture_visible=bool(picture_url),
    )


def publish_detail_panel(
    panel: DetailPanel,
    display: DisplaySink,
    show_photo: bool = True,
) -> None:
    display.set_panel_visible(True)
    if show_photo:
        display.set_picture(panel.picture_url if panel.picture_visible else None)
    display.set_text(SLOT_NAME, panel.name)
    display.set_text(SLOT_JOB_TITLE, panel.job_title)
    display.set_text(SLOT_DEPARTMENT, panel.department)
    display.set_text(SLOT_LOCATION, panel.location)
    display.set_text(SLOT_TELEPHONE, panel.telephone_number)
    display.set_text(SLOT_MOBILE, panel.mobile_number)
    display.set_link(SLOT_EMAIL_LINK, panel.email, panel.email_href)
