"""Tests for edge track assignment and elbow routing."""

from isnad_graph.graph.builder import build_person_graph
from isnad_graph.layout import compute_layout
from isnad_graph.layout.engine import Layout
from isnad_graph.layout.routing import assign_edge_tracks, elbow_path, route_edges
from isnad_graph.layout.routing.common import column_of
from isnad_graph.parser.model import (
    GraphEdge,
    GraphNode,
    Isnad,
    NodeType,
    TransmissionGraph,
)


def _make_fan_layout():
    return Layout(
        positions={"c": (600.0, 400.0), "a": (360.0, 300.0),
                   "b": (360.0, 400.0), "d": (360.0, 500.0)},
        layers={"c": 0, "a": -1, "b": -1, "d": -1},
        radii={"c": 20.0, "a": 6.0, "b": 6.0, "d": 6.0},
    )


def test_tracks_centered_in_y_order():
    edges = [GraphEdge("d", "c"), GraphEdge("a", "c"), GraphEdge("b", "c")]
    tracks = assign_edge_tracks(_make_fan_layout(), edges)
    assert tracks == {("a", "c"): -1, ("b", "c"): 0, ("d", "c"): 1}


def test_tracks_even_group():
    edges = [GraphEdge("a", "c"), GraphEdge("d", "c")]
    tracks = assign_edge_tracks(_make_fan_layout(), edges)
    assert tracks == {("a", "c"): -1, ("d", "c"): 0}


def test_tracks_grouped_by_column_pair():
    layout = _make_fan_layout()
    layout.positions["e"] = (840.0, 400.0)
    edges = [GraphEdge("a", "c"), GraphEdge("c", "e")]
    tracks = assign_edge_tracks(layout, edges)
    assert tracks == {("a", "c"): 0, ("c", "e"): 0}


def test_unpositioned_edges_skipped():
    tracks = assign_edge_tracks(_make_fan_layout(), [GraphEdge("a", "zz")])
    assert tracks == {}


def test_elbow_path_left_to_right():
    points = elbow_path((0.0, 0.0), (100.0, 50.0), 5.0, 5.0)
    assert points == [(13.0, 0.0), (50.0, 0.0), (50.0, 50.0), (87.0, 50.0)]


def test_elbow_path_track_offset():
    points = elbow_path((0.0, 0.0), (100.0, 50.0), 5.0, 5.0, track=1)
    assert points[1][0] == 64.0
    points = elbow_path((100.0, 0.0), (0.0, 50.0), 5.0, 5.0, track=1)
    assert points[0] == (87.0, 0.0)
    assert points[1][0] == 36.0
    assert points[-1] == (13.0, 50.0)


def test_elbow_path_same_column():
    points = elbow_path((0.0, 0.0), (0.0, 100.0), 5.0, 5.0)
    assert points == [(13.0, 0.0), (53.0, 0.0), (53.0, 100.0), (13.0, 100.0)]
    left = elbow_path((0.0, 0.0), (0.0, 100.0), 5.0, 5.0, side=-1)
    assert left[1] == (-53.0, 0.0)


def test_elbow_path_same_column_negative_track_stays_outside():
    points = elbow_path((0.0, 0.0), (0.0, 100.0), 5.0, 5.0, track=-10)
    assert points[1][0] > points[0][0]


def test_route_edges_flags_peer_edges():
    graph = build_person_graph(
        2, [Isnad(sequence=(1, 2, 3)), Isnad(sequence=(1, 3)), Isnad(sequence=(5, 6))], {},
    )
    layout = compute_layout(graph)
    routes = {r.key: r for r in route_edges(graph, layout)}
    assert set(routes) == {(1, 2), (2, 3), (1, 3), (5, 6)}
    assert not routes[(1, 2)].is_peer
    assert not routes[(2, 3)].is_peer
    assert routes[(1, 3)].is_peer
    assert routes[(5, 6)].is_peer
    for route in routes.values():
        assert len(route.points) == 4
        assert route.points[1][1] == route.points[0][1]
        assert route.points[1][0] == route.points[2][0]
        assert route.points[2][1] == route.points[3][1]


def _make_graph(center, edges):
    graph = TransmissionGraph(center_id=center)
    graph.add_node(GraphNode(id=center, name=center, type=NodeType.CENTER))
    for s, t in edges:
        graph.add_node(GraphNode(id=s, name=s))
        graph.add_node(GraphNode(id=t, name=t))
        graph.add_edge(s, t)
    return graph


def test_column_of_rounds_halves_up():
    assert column_of(880.0, 160.0) == 6
    assert column_of(1040.0, 160.0) == 7
    assert column_of(400.0, 160.0) == 3
    assert column_of(240.0, 160.0) == 2


def test_adjacent_layers_get_distinct_columns_at_grid_aligned_width():
    graph = _make_graph("c", [("c", "a"), ("a", "b"), ("x", "c"), ("y", "x")])
    layout = compute_layout(graph, width=1280)
    columns = [
        column_of(layout.positions[n][0], layout.column_spacing)
        for n in ("y", "x", "c", "a", "b")
    ]
    assert len(set(columns)) == 5
    assert columns == sorted(columns)


def test_tracks_not_shared_across_layer_pairs_at_grid_aligned_width():
    graph = _make_graph("c", [("c", "a1"), ("c", "a2"), ("a1", "b"), ("a2", "a1")])
    layout = compute_layout(graph, width=1280)
    tracks = assign_edge_tracks(layout, graph.edges.values())
    assert tracks[("a1", "b")] == 0
    assert tracks[("a2", "a1")] == 0
    assert sorted([tracks[("c", "a1")], tracks[("c", "a2")]]) == [-1, 0]
