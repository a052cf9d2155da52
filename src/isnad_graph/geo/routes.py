"""Route graph over toponym URIs and shortest-path matching.

Route graphs are small (tens to low hundreds of toponyms), so the
shortest-path search scans for the closest unvisited vertex linearly
instead of keeping a heap. Ties go to the vertex inserted first, which
keeps paths deterministic for a given segment order.
"""

from __future__ import annotations

__all__ = [
    "build_route_graph",
    "connecting_segments",
    "path_length",
    "shortest_path",
]

import logging
import math
from collections.abc import Hashable, Iterable, Sequence
from itertools import combinations

import networkx as nx

from isnad_graph.parser.records import RouteSegment

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT: float = 1.0


def build_route_graph(segments: Iterable[RouteSegment]) -> nx.Graph:
    """Build an undirected weighted graph from route segments.

    Each edge's ``weight`` is the segment length in metres, or
    ``DEFAULT_WEIGHT`` when the length is unknown. When two segments join
    the same pair of toponyms, the shorter one is kept.
    """
    G = nx.Graph()
    for seg in segments:
        weight = seg.meters if seg.meters is not None else DEFAULT_WEIGHT
        if G.has_edge(seg.start, seg.end) and G[seg.start][seg.end]["weight"] <= weight:
            continue
        G.add_edge(seg.start, seg.end, weight=weight, coordinates=seg.coordinates)
    logger.debug(
        "Route graph: %d toponyms, %d segments",
        G.number_of_nodes(), G.number_of_edges(),
    )
    return G


def shortest_path(
    graph: nx.Graph,
    start: Hashable,
    end: Hashable,
) -> list | None:
    """Return the cheapest vertex sequence from *start* to *end*.

    Returns None when either endpoint is absent from the graph or when
    the endpoints are not connected.
    """
    if start not in graph or end not in graph:
        return None

    dist = {v: math.inf for v in graph.nodes}
    prev: dict = {}
    dist[start] = 0.0
    unvisited = dict.fromkeys(graph.nodes)

    while unvisited:
        u = None
        best = math.inf
        for v in unvisited:
            if dist[v] < best:
                best = dist[v]
                u = v
        if u is None:
            break
        del unvisited[u]
        if u == end:
            break
        for v, attrs in graph.adj[u].items():
            if v not in unvisited:
                continue
            alt = best + attrs.get("weight", DEFAULT_WEIGHT)
            if alt < dist[v]:
                dist[v] = alt
                prev[v] = u

    if dist[end] == math.inf:
        return None

    path = [end]
    node = end
    while node != start:
        node = prev.get(node)
        if node is None or len(path) > len(dist):
            return None
        path.append(node)
    path.reverse()
    return path


def path_length(graph: nx.Graph, path: Sequence) -> float:
    """Total weight of consecutive edges along *path*."""
    return sum(
        graph[u][v].get("weight", DEFAULT_WEIGHT) for u, v in zip(path, path[1:])
    )


def connecting_segments(
    graph: nx.Graph,
    uris: Iterable[Hashable],
) -> list[tuple]:
    """Union of the edges used by pairwise shortest paths among *uris*.

    This is not a Steiner tree or a spanning tree: every pair is routed
    independently and the resulting edges are merged. Edges are returned
    as ``(u, v)`` tuples in first-use order, each undirected edge once.
    """
    points = list(dict.fromkeys(u for u in uris if u in graph))
    seen: set[frozenset] = set()
    result: list[tuple] = []
    for a, b in combinations(points, 2):
        path = shortest_path(graph, a, b)
        if path is None:
            logger.debug("No route between %s and %s", a, b)
            continue
        for u, v in zip(path, path[1:]):
            key = frozenset((u, v))
            if key not in seen:
                seen.add(key)
                result.append((u, v))
    return result
