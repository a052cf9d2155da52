"""Signed layer assignment (X-coordinate columns).

Layers are distances from the focal node: nodes reached by following
edges forward sit to the right (positive layers), nodes reached by
following edges backward sit to the left (negative layers).
"""

from __future__ import annotations

__all__ = ["assign_layers", "build_digraph", "center_distances"]

import networkx as nx

from isnad_graph.layout.constants import ORPHAN_LAYER
from isnad_graph.parser.model import NodeId, TransmissionGraph


def build_digraph(graph: TransmissionGraph) -> nx.DiGraph:
    """Directed networkx view of a transmission graph, in insertion order."""
    G = nx.DiGraph()
    for nid in graph.nodes:
        G.add_node(nid)
    for edge in graph.edges.values():
        if edge.source in graph.nodes and edge.target in graph.nodes:
            G.add_edge(edge.source, edge.target, weight=edge.weight)
    return G


def center_distances(
    G: nx.DiGraph, center: NodeId
) -> tuple[dict[NodeId, int], dict[NodeId, int]]:
    """Unweighted BFS distances from *center* along and against edge direction.

    Unreachable nodes are absent from the returned maps.
    """
    if center not in G:
        return {}, {}
    forward = nx.single_source_shortest_path_length(G, center)
    backward = nx.single_source_shortest_path_length(G.reverse(copy=False), center)
    return dict(forward), dict(backward)


def assign_layers(graph: TransmissionGraph) -> dict[NodeId, int]:
    """Assign each node a signed layer relative to the center.

    - center: 0
    - reachable forward only: +forward distance
    - reachable backward only: -backward distance
    - reachable both ways: +forward distance
    - unreachable: ``ORPHAN_LAYER``

    Returns a dict mapping node_id -> layer, in node insertion order.
    """
    G = build_digraph(graph)
    forward, backward = center_distances(G, graph.center_id)

    layers: dict[NodeId, int] = {}
    for nid in graph.nodes:
        if nid == graph.center_id:
            layers[nid] = 0
        elif nid in forward:
            layers[nid] = forward[nid]
        elif nid in backward:
            layers[nid] = -backward[nid]
        else:
            layers[nid] = ORPHAN_LAYER
    return layers
