"""Force-simulation boundary.

The graph view hands an engine the node count, the edges, the canvas size and
three tuning parameters, then receives a position update per tick. Physics is
delegated to networkx's ForceAtlas2 implementation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

import networkx as nx
import numpy as np

from org_graph.services.hierarchy_builder import Edge

logger = logging.getLogger(__name__)

Position = tuple[float, float]
TickHandler = Callable[[list[Position]], None]


@dataclass(frozen=True)
class ForceParameters:
    link_distance: float = 30.0
    charge: float = -400.0
    gravity: float = 0.3


class ForceEngine(Protocol):
    def start(
        self,
        node_count: int,
        edges: list[Edge],
        size: tuple[int, int],
        parameters: ForceParameters,
        on_tick: TickHandler,
    ) -> None: ...

    def run(self, ticks: int) -> None: ...


class ForceAtlasEngine:
    """Runs ForceAtlas2 one iteration per tick and maps layout units to pixels.

    Positions are scaled so the whole layout stays ``margin`` pixels inside the
    canvas; the margin should exceed the largest node radius.
    """

    def __init__(self, seed: int = 42, margin: float = 30.0):
        self.seed = seed
        self.margin = margin
        self._graph: nx.Graph | None = None
        self._pos: dict[int, np.ndarray] = {}
        self._size: tuple[int, int] = (0, 0)
        self._parameters = ForceParameters()
        self._on_tick: TickHandler | None = None

    def start(
        self,
        node_count: int,
        edges: list[Edge],
        size: tuple[int, int],
        parameters: ForceParameters,
        on_tick: TickHandler,
    ) -> None:
        graph = nx.Graph()
        graph.add_nodes_from(range(node_count))
        graph.add_edges_from((e.source, e.target) for e in edges)
        self._graph = graph
        self._size = size
        self._parameters = parameters
        self._on_tick = on_tick
        self._pos = {}
        if node_count >= 2:
            self._pos = nx.random_layout(graph, seed=self.seed)
        logger.debug("Force engine started: %d nodes, %d edges", node_count, len(edges))

    def run(self, ticks: int) -> None:
        if self._graph is None or self._on_tick is None:
            raise RuntimeError("Force engine has not been started")
        for _ in range(max(ticks, 0)):
            self._step()
            self._on_tick(self._to_canvas())

    def _step(self) -> None:
        if self._graph.number_of_nodes() < 2:
            return
        self._pos = nx.forceatlas2_layout(
            self._graph,
            pos=self._pos,
            max_iter=1,
            scaling_ratio=abs(self._parameters.charge) / 100.0,
            gravity=self._parameters.gravity,
            seed=self.seed,
        )

    def _to_canvas(self) -> list[Position]:
        width, height = self._size
        n = self._graph.number_of_nodes()
        if n == 0:
            return []
        if n < 2:
            return [(width / 2, height / 2)]
        coords = np.array([self._pos[i] for i in range(n)], dtype=float)
        coords = coords - coords.mean(axis=0)
        coords = coords * self._fit_scale(coords, width, height)
        coords = coords + np.array([width / 2, height / 2])
        return [(float(x), float(y)) for x, y in coords]

    def _fit_scale(self, coords: np.ndarray, width: int, height: int) -> float:
        """link_distance pixels per layout unit, shrunk until the layout fits inside the margin."""
        scale = self._parameters.link_distance
        extent = np.abs(coords).max(axis=0)
        half = np.array([width / 2 - self.margin, height / 2 - self.margin])
        spread = extent > 0
        if spread.any():
            scale = min(scale, float((np.maximum(half[spread], 0.0) / extent[spread]).min()))
        return scale
