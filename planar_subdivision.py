"""
Planar Subdivision Module

Builds a half-edge graph from arranged segments and extracts its faces.

Algorithm:
1. Snap every segment endpoint onto the integer grid; equal keys are one node
2. Insert each segment as two mutually reversed half-edges
3. Sort the half-edges leaving each node by angle
4. Trace faces: arriving at a node, leave along the edge just clockwise of
   the reversed incoming edge (index - 1 in CCW order). Every half-edge is
   consumed by exactly one walk, and every walk that closes bounds one
   minimal face (bounded faces come out CCW, the outer face CW).

The graph is an arena: nodes and half-edges live in lists and refer to each
other by index. A graph is built for one cutting attempt and thrown away;
visited flags are never reset.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import math
from typing import Iterable

from arrangement import Segment
from config import CutterConfig, DEFAULT_CONFIG
from geometry import Point, Ring, snap_key

logger = logging.getLogger(__name__)


# =============================================================================
# Graph Elements
# =============================================================================

@dataclass
class GraphNode:
    """A vertex; id is the snapped integer key of its coordinates."""
    id: tuple[int, int]
    x: float
    y: float
    edges: list[int] = field(default_factory=list)  # outgoing half-edge indices


@dataclass
class GraphEdge:
    """A directed half-edge between two node indices."""
    origin: int
    target: int
    reverse: int = -1
    is_curve: bool = False
    visited: bool = False


# =============================================================================
# Planar Graph
# =============================================================================

class PlanarGraph:
    """
    Half-edge graph of an arrangement.

    Example:
        >>> graph = PlanarGraph()
        >>> graph.add_edge(0, 0, 10, 0)
        >>> graph.add_edge(10, 0, 10, 10)
        >>> graph.add_edge(10, 10, 0, 0)
        >>> faces = graph.extract_faces()
    """

    def __init__(self, config: CutterConfig = DEFAULT_CONFIG):
        self.config = config
        self.nodes: list[GraphNode] = []
        self.node_index: dict[tuple[int, int], int] = {}
        self.edges: list[GraphEdge] = []

    @classmethod
    def from_segments(
        cls,
        segments: Iterable[Segment],
        config: CutterConfig = DEFAULT_CONFIG
    ) -> "PlanarGraph":
        """Build a graph with one edge pair per segment."""
        graph = cls(config)
        for seg in segments:
            graph.add_edge(seg.p1.x, seg.p1.y, seg.p2.x, seg.p2.y, seg.is_curve)
        return graph

    def add_node(self, x: float, y: float) -> int:
        """Return the index of the node at (x, y), creating it if needed."""
        key = snap_key(x, y, self.config.snap_precision)
        idx = self.node_index.get(key)
        if idx is None:
            idx = len(self.nodes)
            precision = self.config.snap_precision
            self.nodes.append(GraphNode(key, key[0] / precision, key[1] / precision))
            self.node_index[key] = idx
        return idx

    def add_edge(self, x1: float, y1: float, x2: float, y2: float, is_curve: bool = False) -> None:
        """Add a pair of half-edges between two points."""
        if math.hypot(x2 - x1, y2 - y1) < self.config.min_edge_length:
            return

        u = self.add_node(x1, y1)
        v = self.add_node(x2, y2)
        if u == v:
            return

        e1 = len(self.edges)
        e2 = e1 + 1
        self.edges.append(GraphEdge(u, v, e2, is_curve))
        self.edges.append(GraphEdge(v, u, e1, is_curve))

        self.nodes[u].edges.append(e1)
        self.nodes[v].edges.append(e2)

    def _edge_angle(self, edge_idx: int) -> float:
        edge = self.edges[edge_idx]
        a = self.nodes[edge.origin]
        b = self.nodes[edge.target]
        return math.atan2(b.y - a.y, b.x - a.x)

    def sort_edges(self) -> dict[int, int]:
        """
        Sort each node's outgoing half-edges by angle, ascending.

        Returns:
            Mapping of half-edge index to its position in its node's list.
        """
        position: dict[int, int] = {}
        for node in self.nodes:
            node.edges.sort(key=self._edge_angle)
            for i, edge_idx in enumerate(node.edges):
                position[edge_idx] = i
        return position

    def extract_faces(self) -> list[Ring]:
        """
        Trace every face of the graph.

        Walks that fail to return to their start edge within 2 * |edges|
        steps are dropped.

        Returns:
            List of faces as point rings (including the outer face).
        """
        position = self.sort_edges()
        faces: list[Ring] = []
        max_steps = len(self.edges) * 2
        aborted = 0

        for start in range(len(self.edges)):
            if self.edges[start].visited:
                continue

            cycle: Ring = []
            current = start
            closed = False
            steps = 0

            while not self.edges[current].visited and steps < max_steps:
                edge = self.edges[current]
                edge.visited = True
                origin = self.nodes[edge.origin]
                cycle.append(Point(origin.x, origin.y))

                node = self.nodes[edge.target]
                idx = position[edge.reverse]
                current = node.edges[(idx - 1) % len(node.edges)]
                steps += 1

                if current == start:
                    closed = True
                    break

            if closed and len(cycle) > 2:
                faces.append(cycle)
            elif not closed:
                aborted += 1

        if aborted:
            logger.debug("Discarded %d face walks that did not close", aborted)

        return faces
