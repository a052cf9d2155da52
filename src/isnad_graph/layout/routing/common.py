"""Shared types for edge routing."""

from __future__ import annotations

import math
from dataclasses import dataclass

from isnad_graph.parser.model import GraphEdge, NodeId


@dataclass
class RoutedPath:
    """A routed path for an edge, consisting of (x, y) waypoints."""

    edge: GraphEdge
    points: list[tuple[float, float]]
    track: int = 0
    # Edge does not span exactly one layer (same-layer or layer-skipping link)
    is_peer: bool = False

    @property
    def key(self) -> tuple[NodeId, NodeId]:
        return self.edge.key


def column_of(x: float, column_spacing: float) -> int:
    """Approximate column index of an x coordinate.

    Halves round up, so layer columns that sit half a spacing off the
    grid map to distinct indices.
    """
    return math.floor(x / column_spacing + 0.5)
