"""Graph view orchestrator.

Owns the scene subtree for one org chart and keeps its subsystems consistent:
the hierarchy model, radius classes, group colors and legend, search flags,
selection and detail panel, and per-tick positions from the force engine.
Derived per-node state is computed by the pure service functions and then
painted onto the scene in one reconciliation pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from org_graph.models.employee_models import Employee
from org_graph.models.graph_models import (
    DetailPanel,
    GraphEdge,
    GraphNode,
    GraphViewResponse,
    LegendEntry,
)
from org_graph.services.force_engine import (
    ForceAtlasEngine,
    ForceEngine,
    ForceParameters,
    Position,
)
from org_graph.services.grouping import GroupMode, Grouping, regroup
from org_graph.services.hierarchy_builder import HierarchyModel, build_hierarchy
from org_graph.services.image_retriever import ImageRetriever
from org_graph.services.name_abbreviation import get_name_abbreviation
from org_graph.services.scene import Container, SceneElement
from org_graph.services.search import compute_non_match, format_match_count
from org_graph.services.selection import build_detail_panel, publish_detail_panel
from org_graph.services.view_hooks import SLOT_SEARCH_COUNT, ControlReader, DisplaySink
from org_graph.services.visual_classifier import assign_radius_multipliers

logger = logging.getLogger(__name__)

HIGHLIGHT_CLASS = "highlight"
SEARCH_NON_MATCH_CLASS = "search-non-match"
LEGEND_CLASS = "legend-ordinal"

CIRCLE_IMAGE_BORDER_PX = 4
LABEL_OFFSET_Y = 5
LEGEND_CELL_HEIGHT = 17


class GraphNotRenderedError(RuntimeError):
    """Raised when an operation needs a rendered graph."""


@dataclass
class GraphViewOptions:
    width: int = 1000
    height: int = 700
    radius: float = 15.0
    link_distance: float = 30.0
    charge: float = -400.0
    gravity: float = 0.3
    selection_trigger: str = "click"  # "click" | "hover"
    show_legend: bool = True
    show_photos: bool = True
    include_mobile_number: bool = False

    @classmethod
    def embedded(cls, show_legend: bool = True) -> GraphViewOptions:
        """Click to select, profile photos, raw phone number."""
        return cls(selection_trigger="click", show_legend=show_legend, show_photos=True)

    @classmethod
    def standalone(cls) -> GraphViewOptions:
        """Hover to select, no photos, labelled phone and mobile numbers."""
        return cls(
            selection_trigger="hover",
            show_legend=True,
            show_photos=False,
            include_mobile_number=True,
        )

    @property
    def force_parameters(self) -> ForceParameters:
        return ForceParameters(
            link_distance=self.link_distance,
            charge=self.charge,
            gravity=self.gravity,
        )


@dataclass
class SearchResult:
    query: str
    matches: list[int]
    match_count_text: str


@dataclass
class _NodeElements:
    group: SceneElement
    circle: SceneElement
    label: SceneElement
    image: SceneElement | None = None


@dataclass
class _RenderState:
    model: HierarchyModel
    svg: SceneElement
    radius_multipliers: list[float]
    abbreviations: list[str | None]
    nodes: list[_NodeElements]
    lines: list[SceneElement]
    grouping: Grouping | None = None
    non_match: list[bool] = field(default_factory=list)
    selected: int | None = None
    detail: DetailPanel | None = None
    query: str = ""
    positions: list[Position | None] = field(default_factory=list)


class GraphView:
    def __init__(
        self,
        container: Container,
        image_retriever: ImageRetriever | None = None,
        controls: ControlReader | None = None,
        display: DisplaySink | None = None,
        options: GraphViewOptions | None = None,
        engine_factory: Callable[[], ForceEngine] = ForceAtlasEngine,
    ):
        self.container = container
        self.image_retriever = image_retriever
        self.controls = controls
        self.display = display
        self.options = options or GraphViewOptions()
        self.engine_factory = engine_factory
        self.engine: ForceEngine | None = None
        self._state: _RenderState | None = None

    # --- state ---

    @property
    def is_rendered(self) -> bool:
        return self._state is not None

    def _require_state(self) -> _RenderState:
        if self._state is None:
            raise GraphNotRenderedError("render(users) must be called first")
        return self._state

    @property
    def employees(self) -> list[Employee]:
        return self._require_state().model.employees

    def index_of(self, employee_id: int | str) -> int | None:
        for i, employee in enumerate(self.employees):
            if employee.id == employee_id:
                return i
        return None

    def node_radius(self, index: int) -> float:
        return self.options.radius * self._require_state().radius_multipliers[index]

    # --- render ---

    def render(self, users: list[Employee]) -> SceneElement:
        """Build the model and attach a new svg subtree to the container.

        A second call appends another subtree; tearing down the previous one
        (``container.clear()``) is up to the caller.
        """
        opts = self.options
        model = build_hierarchy(users)
        multipliers = assign_radius_multipliers(users)
        abbreviations = [get_name_abbreviation(u.display_name) for u in users]

        svg = self.container.append(
            "svg",
            viewBox=f"0 0 {opts.width} {opts.height}",
            preserveAspectRatio="xMinYMin meet",
            width=opts.width,
            height=opts.height,
        )

        lines = [svg.append("line", datum=i) for i, _ in enumerate(model.edges)]

        trigger = "mouseover" if opts.selection_trigger == "hover" else "click"
        nodes: list[_NodeElements] = []
        for i, user in enumerate(users):
            r = opts.radius * multipliers[i]
            g = svg.append("g", datum=i).classed("node").on(trigger, self.select)
            circle = g.append("circle", datum=i, r=r)
            label = g.append("text", datum=i, **{"text-anchor": "middle"}).classed("circle-text")
            label.text = abbreviations[i]
            image = None
            if opts.show_photos and self.image_retriever:
                url = self.image_retriever.get_image_url(user.email)
                if url:
                    side = r * 2 - CIRCLE_IMAGE_BORDER_PX * 2
                    image = g.append(
                        "image",
                        datum=i,
                        href=url,
                        x=r / 2 + CIRCLE_IMAGE_BORDER_PX,
                        y=r / 2 + CIRCLE_IMAGE_BORDER_PX,
                        width=side,
                        height=side,
                    ).classed("circle-image")
            nodes.append(_NodeElements(group=g, circle=circle, label=label, image=image))

        self._state = _RenderState(
            model=model,
            svg=svg,
            radius_multipliers=multipliers,
            abbreviations=abbreviations,
            nodes=nodes,
            lines=lines,
            non_match=[False] * len(users),
            positions=[None] * len(users),
        )
        self.regroup()

        self.engine = self.engine_factory()
        self.engine.start(
            len(users),
            model.edges,
            (opts.width, opts.height),
            opts.force_parameters,
            self.on_tick,
        )
        logger.info(
            "Rendered org graph: %d nodes, %d edges", len(users), len(model.edges)
        )
        return svg

    def run(self, ticks: int) -> None:
        """Advance the force engine; each tick repaints positions."""
        self._require_state()
        if self.engine is not None:
            self.engine.run(ticks)

    # --- grouping ---

    def regroup(self, mode: GroupMode | None = None) -> Grouping:
        """Recolor every node by ``mode`` (or the host's grouping controls)."""
        state = self._require_state()
        if mode is None:
            mode = self.controls.read_group_mode() if self.controls else GroupMode.NONE
        state.grouping = regroup(state.model.employees, mode)
        self._reconcile()
        self._render_legend(state.grouping.legend)
        logger.debug("Regrouped by %s: %d groups", mode.value, len(state.grouping.legend))
        return state.grouping

    def _render_legend(self, entries: list[LegendEntry]) -> None:
        svg = self._require_state().svg
        svg.remove_where(lambda el: LEGEND_CLASS in el.classes)
        if not self.options.show_legend:
            return
        legend = svg.append("g", transform="translate(20, 20)").classed(LEGEND_CLASS)
        for i, entry in enumerate(entries):
            cell = legend.append("g", transform=f"translate(0, {i * LEGEND_CELL_HEIGHT})")
            cell.classed("cell")
            swatch = cell.append("rect", width=15, height=15).classed("swatch")
            swatch.style["fill"] = entry.color
            text = cell.append("text", transform="translate(25, 12.5)").classed("label")
            text.text = entry.group

    # --- search ---

    def search(self, query: str) -> SearchResult:
        """Flag non-matching nodes; a unique match becomes the selection."""
        state = self._require_state()
        query = query or ""
        state.query = query
        state.non_match = compute_non_match(
            state.model.employees,
            query,
            include_mobile_number=self.options.include_mobile_number,
        )
        self._reconcile()

        matches = [i for i, flagged in enumerate(state.non_match) if not flagged]
        if len(matches) == 1:
            self.select(matches[0])

        text = format_match_count(query, len(matches))
        if self.display:
            self.display.set_text(SLOT_SEARCH_COUNT, text)
        return SearchResult(query=query, matches=matches, match_count_text=text)

    # --- selection ---

    def select(self, index: int) -> DetailPanel:
        """Make ``index`` the only selected node and publish its details."""
        state = self._require_state()
        employee = state.model.employees[index]
        state.selected = index
        state.detail = build_detail_panel(
            employee,
            self.image_retriever if self.options.show_photos else None,
            include_mobile_number=self.options.include_mobile_number,
        )
        self._reconcile()
        if self.display:
            publish_detail_panel(state.detail, self.display, show_photo=self.options.show_photos)
        return state.detail

    def trigger(self, index: int) -> bool:
        """Simulate the configured pointer event on a node."""
        state = self._require_state()
        event = "mouseover" if self.options.selection_trigger == "hover" else "click"
        return state.nodes[index].group.dispatch(event)

    # --- painting ---

    def _reconcile(self) -> None:
        state = self._require_state()
        colors = state.grouping.colors if state.grouping else None
        for i, elements in enumerate(state.nodes):
            circle = elements.circle
            if colors is not None:
                circle.style["fill"] = colors[i]
            circle.classed(HIGHLIGHT_CLASS, state.selected == i)
            circle.classed(SEARCH_NON_MATCH_CLASS, state.non_match[i])

    def _clamp(self, index: int, position: Position) -> Position:
        r = self.node_radius(index)
        x, y = position
        x = max(r, min(self.options.width - r, x))
        y = max(r, min(self.options.height - r, y))
        return x, y

    def on_tick(self, positions: list[Position]) -> None:
        """Repaint every element from the engine's latest positions."""
        state = self._require_state()
        clamped = [self._clamp(i, p) for i, p in enumerate(positions[: len(state.nodes)])]
        for i, (x, y) in enumerate(clamped):
            state.positions[i] = (x, y)
            elements = state.nodes[i]
            elements.circle.attrs.update(cx=x, cy=y)
            elements.label.attrs.update(x=x, y=y + LABEL_OFFSET_Y)
            if elements.image is not None:
                offset = self.node_radius(i) - CIRCLE_IMAGE_BORDER_PX
                elements.image.attrs.update(x=x - offset, y=y - offset)

        for line, edge in zip(state.lines, state.model.edges):
            source = state.positions[edge.source]
            target = state.positions[edge.target]
            if source is None or target is None:
                continue
            line.attrs.update(x1=source[0], y1=source[1], x2=target[0], y2=target[1])

    # --- export ---

    def to_response(self) -> GraphViewResponse:
        state = self._require_state()
        grouping = state.grouping
        nodes: list[GraphNode] = []
        for i, employee in enumerate(state.model.employees):
            position = state.positions[i]
            nodes.append(
                GraphNode(
                    index=i,
                    id=employee.id,
                    display_name=employee.display_name,
                    abbreviation=state.abbreviations[i],
                    radius_multiplier=state.radius_multipliers[i],
                    radius=self.node_radius(i),
                    group=grouping.labels[i] if grouping else "",
                    color=grouping.colors[i] if grouping else "",
                    selected=state.selected == i,
                    non_match=state.non_match[i],
                    x=position[0] if position else None,
                    y=position[1] if position else None,
                )
            )
        selected_id = (
            state.model.employees[state.selected].id if state.selected is not None else None
        )
        return GraphViewResponse(
            width=self.options.width,
            height=self.options.height,
            group_mode=grouping.mode.value if grouping else GroupMode.NONE.value,
            query=state.query,
            match_count_text=format_match_count(
                state.query, sum(1 for flagged in state.non_match if not flagged)
            ),
            selected_id=selected_id,
            nodes=nodes,
            edges=[GraphEdge(source=e.source, target=e.target) for e in state.model.edges],
            legend=grouping.legend if grouping and self.options.show_legend else [],
            detail=state.detail,
            missing_managers=list(state.model.missing_managers),
        )

    def to_svg(self) -> str:
        return self._require_state().svg.to_markup()
