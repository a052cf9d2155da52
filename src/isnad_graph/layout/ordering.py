"""Within-layer vertical ordering.

The center layer is ordered by degree. Every other layer is ordered by
iterated barycenter sweeps: a forward sweep moves outward from the center
and orders each layer by the median rank of its neighbours in the inner
adjacent layer; a backward sweep moves inward and uses the outer adjacent
layer. The number of rounds is fixed, so the result is deterministic and
needs no convergence test.
"""

from __future__ import annotations

__all__ = [
    "LayoutCancelled",
    "group_layers",
    "inner_layer",
    "node_neighbors",
    "order_center_layer",
    "order_layers",
    "outer_layer",
]

from collections.abc import Callable
from statistics import median

import networkx as nx

from isnad_graph.layout.constants import ORPHAN_LAYER, SWEEP_PASSES
from isnad_graph.parser.model import NodeId


class LayoutCancelled(RuntimeError):
    """Raised when a caller aborts the layout between sweeps."""


def inner_layer(layer: int) -> int:
    """Adjacent layer one step closer to the center."""
    return layer - 1 if layer > 0 else layer + 1


def outer_layer(layer: int) -> int:
    """Adjacent layer one step further from the center."""
    return layer + 1 if layer > 0 else layer - 1


def group_layers(layers: dict[NodeId, int]) -> dict[int, list[NodeId]]:
    """Group node ids by layer, keeping insertion order; orphans are left out."""
    grouped: dict[int, list[NodeId]] = {}
    for nid, layer in layers.items():
        if layer == ORPHAN_LAYER:
            continue
        grouped.setdefault(layer, []).append(nid)
    return grouped


def node_neighbors(G: nx.DiGraph, node: NodeId) -> list[NodeId]:
    """Predecessors then successors, each neighbour once."""
    return list(dict.fromkeys([*G.predecessors(node), *G.successors(node)]))


def order_center_layer(
    ids: list[NodeId],
    center: NodeId,
    G: nx.DiGraph,
    names: dict[NodeId, str],
) -> list[NodeId]:
    """Center first, then remaining nodes by descending degree, ties by name."""
    rest = [nid for nid in ids if nid != center]
    rest.sort(key=lambda n: (-(G.in_degree(n) + G.out_degree(n)), names.get(n, "")))
    return ([center] if center in ids else []) + rest


def _sort_by_median(
    ids: list[NodeId],
    reference: list[NodeId],
    G: nx.DiGraph,
) -> list[NodeId]:
    """Stable sort of *ids* by median rank of their neighbours in *reference*.

    Nodes without neighbours in the reference layer sink to the end in
    their current relative order.
    """
    rank = {nid: i for i, nid in enumerate(reference)}

    def key(node: NodeId) -> float:
        positions = [rank[nb] for nb in node_neighbors(G, node) if nb in rank]
        if not positions:
            return float("inf")
        return float(median(positions))

    return sorted(ids, key=key)


def order_layers(
    G: nx.DiGraph,
    layers: dict[NodeId, int],
    center: NodeId,
    names: dict[NodeId, str] | None = None,
    passes: int = SWEEP_PASSES,
    should_cancel: Callable[[], bool] | None = None,
) -> dict[int, list[NodeId]]:
    """Order every layer's nodes top to bottom.

    Args:
        G: Directed graph of the transmission network.
        layers: Layer assignment from assign_layers().
        center: Focal node id.
        names: Display names for the center-layer tie-break.
        passes: Number of forward+backward sweep rounds.
        should_cancel: Polled before each sweep; returning True raises
            LayoutCancelled.

    Returns a dict mapping layer -> ordered node ids. Orphans are excluded.
    """
    order = group_layers(layers)
    if 0 in order:
        order[0] = order_center_layer(order[0], center, G, names or {})

    outward = sorted((L for L in order if L != 0), key=lambda L: (abs(L), L))
    inward = list(reversed(outward))

    for _pass in range(passes):
        if should_cancel is not None and should_cancel():
            raise LayoutCancelled("layout cancelled before forward sweep")
        for layer in outward:
            reference = order.get(inner_layer(layer))
            if reference:
                order[layer] = _sort_by_median(order[layer], reference, G)

        if should_cancel is not None and should_cancel():
            raise LayoutCancelled("layout cancelled before backward sweep")
        for layer in inward:
            reference = order.get(outer_layer(layer))
            if reference:
                order[layer] = _sort_by_median(order[layer], reference, G)

    return order
