"""Edge routing dispatcher."""

from __future__ import annotations

import logging

from isnad_graph.layout.constants import (
    MIN_RADIUS,
    NODE_PADDING,
    ORPHAN_LAYER,
    TRACK_SPACING,
)
from isnad_graph.layout.engine import Layout
from isnad_graph.layout.routing.common import RoutedPath
from isnad_graph.layout.routing.tracks import assign_edge_tracks, elbow_path
from isnad_graph.parser.model import TransmissionGraph

logger = logging.getLogger(__name__)


def route_edges(
    graph: TransmissionGraph,
    layout: Layout,
    padding: float = NODE_PADDING,
    track_spacing: float = TRACK_SPACING,
    tracks: dict | None = None,
) -> list[RoutedPath]:
    """Route every positioned edge as an orthogonal elbow.

    Edges between adjacent layers are hierarchical; all others (same
    layer, skipping a layer, or touching an orphan) are flagged as peer
    edges so renderers can style or hide them.
    """
    if tracks is None:
        tracks = assign_edge_tracks(layout, graph.edges.values())

    routes: list[RoutedPath] = []
    for edge in graph.edges.values():
        s = layout.positions.get(edge.source)
        t = layout.positions.get(edge.target)
        if s is None or t is None:
            logger.debug("Skipping unpositioned edge %s -> %s", edge.source, edge.target)
            continue
        ls = layout.layers.get(edge.source, ORPHAN_LAYER)
        lt = layout.layers.get(edge.target, ORPHAN_LAYER)
        is_peer = ORPHAN_LAYER in (ls, lt) or abs(ls - lt) != 1
        track = tracks.get(edge.key, 0)
        points = elbow_path(
            s, t,
            layout.radii.get(edge.source, MIN_RADIUS),
            layout.radii.get(edge.target, MIN_RADIUS),
            track=track,
            padding=padding,
            track_spacing=track_spacing,
            side=1 if ls >= 0 else -1,
        )
        routes.append(RoutedPath(edge=edge, points=points, track=track, is_peer=is_peer))
    return routes
