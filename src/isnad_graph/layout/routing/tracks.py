"""Lateral track assignment and orthogonal elbow paths.

Edges that run between the same pair of columns would otherwise share a
vertical segment. Each such group is spread over centered integer tracks
(``-n//2 .. n - 1 - n//2``) in the order of the edges' mean y, and each
track shifts the elbow's vertical segment by a fixed step.
"""

from __future__ import annotations

__all__ = ["assign_edge_tracks", "elbow_path"]

from collections import defaultdict
from collections.abc import Iterable

from isnad_graph.layout.constants import (
    COORD_TOLERANCE,
    MIN_ELBOW_RUN,
    NODE_PADDING,
    TRACK_SPACING,
)
from isnad_graph.layout.engine import Layout
from isnad_graph.layout.routing.common import column_of
from isnad_graph.parser.model import GraphEdge, NodeId


def assign_edge_tracks(
    layout: Layout,
    edges: Iterable[GraphEdge],
) -> dict[tuple[NodeId, NodeId], int]:
    """Assign each positioned edge a signed track within its column pair.

    Edges whose endpoints have no position are skipped. Within a group,
    edges are sorted by the mean y of their endpoints (stable, so ties keep
    edge order) and numbered ``i - n // 2``.

    Returns a dict mapping (source, target) -> track.
    """
    groups: dict[tuple[int, int], list[tuple[float, GraphEdge]]] = defaultdict(list)
    for edge in edges:
        s = layout.positions.get(edge.source)
        t = layout.positions.get(edge.target)
        if s is None or t is None:
            continue
        key = (column_of(s[0], layout.column_spacing), column_of(t[0], layout.column_spacing))
        groups[key].append(((s[1] + t[1]) / 2, edge))

    tracks: dict[tuple[NodeId, NodeId], int] = {}
    for group in groups.values():
        group.sort(key=lambda item: item[0])
        n = len(group)
        for i, (_y, edge) in enumerate(group):
            tracks[edge.key] = i - n // 2
    return tracks


def elbow_path(
    source: tuple[float, float],
    target: tuple[float, float],
    source_radius: float,
    target_radius: float,
    track: int = 0,
    padding: float = NODE_PADDING,
    track_spacing: float = TRACK_SPACING,
    side: int = 1,
) -> list[tuple[float, float]]:
    """Three-segment orthogonal path (horizontal, vertical, horizontal).

    Endpoints are pulled back from the node centers by radius + padding
    along the direction of travel. The vertical segment sits midway and is
    shifted by ``track * track_spacing`` in the direction of travel.

    When both nodes share a column the path leaves and re-enters on
    *side* (+1 right, -1 left) and runs out at least MIN_ELBOW_RUN so the
    vertical segment never collapses onto the nodes.
    """
    sx, sy = source
    tx, ty = target

    if abs(tx - sx) < COORD_TOLERANCE:
        direction = 1 if side >= 0 else -1
        start = (sx + direction * (source_radius + padding), sy)
        end = (tx + direction * (target_radius + padding), ty)
        outer = max(start[0], end[0]) if direction > 0 else min(start[0], end[0])
        run = max(padding, MIN_ELBOW_RUN + track * track_spacing)
        mid_x = outer + direction * run
    else:
        direction = 1 if tx > sx else -1
        start = (sx + direction * (source_radius + padding), sy)
        end = (tx - direction * (target_radius + padding), ty)
        mid_x = (start[0] + end[0]) / 2 + direction * track * track_spacing

    return [start, (mid_x, start[1]), (mid_x, end[1]), end]
