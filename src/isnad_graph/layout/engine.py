"""Layout coordinator: combines layer assignment, ordering, and coordinate mapping.

The focal node sits at the canvas center. Each signed layer becomes a
column to its left or right, nodes inside a column are stacked in their
barycenter order, and a single relaxation pass pulls nodes toward their
inner neighbours before the column is re-packed to a minimum spacing.
"""

from __future__ import annotations

__all__ = [
    "Layout",
    "apply_position_overrides",
    "compute_layout",
    "count_crossings",
    "node_radii",
    "row_spacing",
]

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from statistics import median

import networkx as nx

from isnad_graph.layout.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CENTER_MIN_RADIUS,
    COLUMN_PADDING,
    COLUMN_SPACING,
    MAX_RADIUS,
    MAX_ROW_SPACING,
    MIN_RADIUS,
    MIN_ROW_SPACING,
    NODE_PADDING,
    ORPHAN_LANE_GAP,
    ORPHAN_LAYER,
    RELAX_WEIGHT,
    SPREAD_FRACTION,
    SWEEP_PASSES,
)
from isnad_graph.layout.layers import assign_layers, build_digraph
from isnad_graph.layout.ordering import inner_layer, node_neighbors, order_layers
from isnad_graph.parser.model import NodeId, TransmissionGraph

logger = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass
class Layout:
    """Computed positions for one transmission graph.

    ``positions`` is handed to renderers read-only; interactive moves go
    through apply_position_overrides() instead of mutating it.
    """

    positions: dict[NodeId, Point] = field(default_factory=dict)
    layers: dict[NodeId, int] = field(default_factory=dict)
    order: dict[int, list[NodeId]] = field(default_factory=dict)
    radii: dict[NodeId, float] = field(default_factory=dict)
    orphans: list[NodeId] = field(default_factory=list)
    center_x: float = CANVAS_WIDTH / 2
    center_y: float = CANVAS_HEIGHT / 2
    column_spacing: float = COLUMN_SPACING

    def layer_sizes(self) -> dict[int, int]:
        return {layer: len(ids) for layer, ids in sorted(self.order.items())}


def row_spacing(count: int, height: float) -> float:
    """Vertical spacing for a layer of *count* nodes, clamped to the allowed range."""
    spread = SPREAD_FRACTION * height / max(1, count)
    return max(MIN_ROW_SPACING, min(MAX_ROW_SPACING, spread))


def node_radii(graph: TransmissionGraph) -> dict[NodeId, float]:
    """Square-root scaled radius per node from its weighted degree.

    The domain runs from 0 to max(1, degrees) and maps onto
    [MIN_RADIUS, MAX_RADIUS]. The center is never smaller than
    CENTER_MIN_RADIUS.
    """
    degree = graph.weighted_degree()
    if not degree:
        return {}
    span = math.sqrt(max(max(degree.values()), 1))

    radii: dict[NodeId, float] = {}
    for nid, node in graph.nodes.items():
        t = math.sqrt(max(0, degree.get(nid, 0))) / span
        r = MIN_RADIUS + (MAX_RADIUS - MIN_RADIUS) * t
        r = max(MIN_RADIUS, min(MAX_RADIUS, r))
        if nid == graph.center_id or node.is_center:
            r = max(CENTER_MIN_RADIUS, r)
        radii[nid] = r
    return radii


def _stack(ids: list[NodeId], center_y: float, spacing: float) -> dict[NodeId, float]:
    """Evenly spaced y values for *ids*, centred on *center_y*."""
    start = center_y - (len(ids) - 1) * spacing / 2
    return {nid: start + i * spacing for i, nid in enumerate(ids)}


def _lane_offsets(ids: list[NodeId], radii: dict[NodeId, float]) -> list[float]:
    """Horizontal offsets for *ids* on one row, centred on 0, circles kept apart."""
    offsets = [0.0]
    for prev, nid in zip(ids, ids[1:]):
        step = radii.get(prev, MIN_RADIUS) + radii.get(nid, MIN_RADIUS) + NODE_PADDING
        offsets.append(offsets[-1] + max(MIN_ROW_SPACING, step))
    mid = offsets[-1] / 2
    return [x - mid for x in offsets]


def _repack(ids: list[NodeId], ys: dict[NodeId, float], spacing: float) -> None:
    """Push nodes apart to at least *spacing*, keeping order and mean y."""
    if len(ids) < 2:
        return
    target_mean = sum(ys[n] for n in ids) / len(ids)
    packed = [ys[ids[0]]]
    for nid in ids[1:]:
        packed.append(max(ys[nid], packed[-1] + spacing))
    shift = target_mean - sum(packed) / len(packed)
    for nid, y in zip(ids, packed):
        ys[nid] = y + shift


def _relax(
    order: dict[int, list[NodeId]],
    ys: dict[NodeId, float],
    G: nx.DiGraph,
    height: float,
) -> None:
    """One pass pulling each node toward the median y of its inner neighbours."""
    outward = sorted((L for L in order if L != 0), key=lambda L: (abs(L), L))
    for layer in outward:
        ids = order[layer]
        inner = set(order.get(inner_layer(layer), ()))
        for nid in ids:
            nbr_ys = [ys[nb] for nb in node_neighbors(G, nid) if nb in inner]
            if nbr_ys:
                ys[nid] = RELAX_WEIGHT * median(nbr_ys) + (1 - RELAX_WEIGHT) * ys[nid]
        _repack(ids, ys, row_spacing(len(ids), height))


def compute_layout(
    graph: TransmissionGraph,
    width: float = CANVAS_WIDTH,
    height: float = CANVAS_HEIGHT,
    column_spacing: float = COLUMN_SPACING,
    column_padding: float = COLUMN_PADDING,
    passes: int = SWEEP_PASSES,
    should_cancel: Callable[[], bool] | None = None,
) -> Layout:
    """Compute layout positions for all nodes in the graph."""
    center_x, center_y = width / 2, height / 2
    layout = Layout(center_x=center_x, center_y=center_y, column_spacing=column_spacing)
    if not graph.nodes:
        return layout

    G = build_digraph(graph)
    layers = assign_layers(graph)
    names = {nid: node.name for nid, node in graph.nodes.items()}
    order = order_layers(
        G, layers, graph.center_id, names=names, passes=passes,
        should_cancel=should_cancel,
    )

    # Vertical placement. The center is pinned to the canvas middle and any
    # other layer-0 node stacks below it.
    ys: dict[NodeId, float] = {}
    for layer, ids in order.items():
        spacing = row_spacing(len(ids), height)
        if layer == 0:
            for i, nid in enumerate(ids):
                ys[nid] = center_y + i * spacing
        else:
            ys.update(_stack(ids, center_y, spacing))

    _relax(order, ys, G, height)

    positions: dict[NodeId, Point] = {}
    for layer, ids in order.items():
        if layer == 0:
            x = center_x
        else:
            offset = abs(layer) * column_spacing + column_padding
            x = center_x + offset if layer > 0 else center_x - offset
        for nid in ids:
            positions[nid] = (x, ys[nid])

    radii = node_radii(graph)

    # Nodes unreachable from the center go on a lane below everything else.
    orphans = [nid for nid, layer in layers.items() if layer == ORPHAN_LAYER]
    if orphans:
        lane_y = max((y for _, y in positions.values()), default=center_y) + ORPHAN_LANE_GAP
        for nid, dx in zip(orphans, _lane_offsets(orphans, radii)):
            positions[nid] = (center_x + dx, lane_y)

    layout.positions = positions
    layout.layers = layers
    layout.order = order
    layout.radii = radii
    layout.orphans = orphans
    logger.debug(
        "Layout: %d nodes in %d layers, %d orphans",
        len(positions), len(order), len(orphans),
    )
    return layout


def apply_position_overrides(
    positions: Mapping[NodeId, Point],
    overrides: Mapping[NodeId, Point],
) -> dict[NodeId, Point]:
    """Return a new position map with *overrides* layered on top.

    Overrides for ids absent from *positions* are ignored.
    """
    merged = dict(positions)
    for nid, point in overrides.items():
        if nid in merged:
            merged[nid] = (float(point[0]), float(point[1]))
    return merged


def count_crossings(layout: Layout, graph: TransmissionGraph) -> int:
    """Count edge crossings between adjacent layers (inversion count)."""
    rank: dict[NodeId, int] = {}
    for ids in layout.order.values():
        for i, nid in enumerate(ids):
            rank[nid] = i

    # Bucket edges by the (inner, outer) layer pair they span.
    spans: dict[tuple[int, int], list[tuple[int, int]]] = {}
    for edge in graph.edges.values():
        ls = layout.layers.get(edge.source)
        lt = layout.layers.get(edge.target)
        if ls is None or lt is None or ORPHAN_LAYER in (ls, lt):
            continue
        if lt != 0 and inner_layer(lt) == ls:
            a, b = edge.source, edge.target
        elif ls != 0 and inner_layer(ls) == lt:
            a, b = edge.target, edge.source
        else:
            continue
        key = (layout.layers[a], layout.layers[b])
        spans.setdefault(key, []).append((rank[a], rank[b]))

    total = 0
    for pairs in spans.values():
        for i in range(len(pairs)):
            for j in range(i + 1, len(pairs)):
                (a1, b1), (a2, b2) = pairs[i], pairs[j]
                if (a1 - a2) * (b1 - b2) < 0:
                    total += 1
    return total
