"""Build a fully derived graph view for the API."""

from __future__ import annotations

from org_graph.models.employee_models import Employee
from org_graph.services.graph_view import GraphView, GraphViewOptions
from org_graph.services.grouping import GroupMode
from org_graph.services.image_retriever import ImageRetriever
from org_graph.services.scene import Container
from org_graph.services.view_hooks import DisplaySlots, StaticControls

MAX_TICKS = 300


class UnknownEmployeeError(LookupError):
    """The requested selection id is not in the rendered employee list."""


def options_for_variant(variant: str) -> GraphViewOptions:
    if variant == "standalone":
        return GraphViewOptions.standalone()
    return GraphViewOptions.embedded()


def build_graph_view(
    employees: list[Employee],
    group_by: GroupMode = GroupMode.NONE,
    query: str = "",
    selected_id: int | str | None = None,
    variant: str = "embedded",
    ticks: int = 50,
    image_retriever: ImageRetriever | None = None,
) -> GraphView:
    """Render, lay out, regroup, search and select in that order."""
    view = GraphView(
        Container(),
        image_retriever=image_retriever or ImageRetriever.from_env(),
        controls=StaticControls.for_mode(group_by),
        display=DisplaySlots(),
        options=options_for_variant(variant),
    )
    view.render(employees)
    view.run(min(max(ticks, 0), MAX_TICKS))

    if query:
        view.search(query)

    if selected_id is not None:
        index = view.index_of(selected_id)
        if index is None:
            # ids arrive as strings from query parameters
            index = next(
                (i for i, e in enumerate(employees) if str(e.id) == str(selected_id)),
                None,
            )
        if index is None:
            raise UnknownEmployeeError(f"Employee {selected_id!r} not found")
        view.select(index)

    return view
