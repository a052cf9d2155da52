"""Tests for route graphs and shortest-path matching."""

from isnad_graph.geo.routes import (
    build_route_graph,
    connecting_segments,
    path_length,
    shortest_path,
)
from isnad_graph.parser.records import RouteSegment


def _triangle():
    return build_route_graph([
        RouteSegment("A", "B", 1.0),
        RouteSegment("B", "C", 2.0),
        RouteSegment("A", "C", 5.0),
        RouteSegment("D", "E", None),
    ])


def test_shortest_path_prefers_cheaper_detour():
    graph = _triangle()
    path = shortest_path(graph, "A", "C")
    assert path == ["A", "B", "C"]
    assert path_length(graph, path) == 3.0


def test_shortest_path_is_undirected():
    assert shortest_path(_triangle(), "C", "A") == ["C", "B", "A"]


def test_same_start_and_end():
    assert shortest_path(_triangle(), "B", "B") == ["B"]


def test_disconnected_returns_none():
    assert shortest_path(_triangle(), "A", "E") is None


def test_missing_endpoint_returns_none():
    assert shortest_path(_triangle(), "A", "Z") is None
    assert shortest_path(_triangle(), "Z", "A") is None


def test_unknown_length_uses_default_weight():
    graph = _triangle()
    assert graph["D"]["E"]["weight"] == 1.0


def test_duplicate_segment_keeps_shorter():
    graph = build_route_graph([RouteSegment("A", "B", 9.0), RouteSegment("B", "A", 4.0)])
    assert graph.number_of_edges() == 1
    assert graph["A"]["B"]["weight"] == 4.0


def test_connecting_segments_union():
    segments = connecting_segments(_triangle(), ["A", "C", "B", "Z"])
    assert segments == [("A", "B"), ("B", "C")]


def test_connecting_segments_skips_unroutable_pairs():
    assert connecting_segments(_triangle(), ["A", "D"]) == []
