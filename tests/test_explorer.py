"""Tests for view orchestration and caching."""

from isnad_graph.explorer import Dataset, NetworkExplorer, ViewCache
from isnad_graph.parser.model import Isnad, Person
from isnad_graph.parser.records import PlaceMention, RouteSegment


def _make_dataset():
    return Dataset(
        profiles={2: Person(person_id=2, name="Nafi")},
        chains=[
            Isnad(sequence=(1, 2, 3), sources=frozenset({"muwatta"}),
                  unique_bio_ids=frozenset({7})),
            Isnad(sequence=(2, 3), sources=frozenset({"bukhari"})),
        ],
        route_segments=[
            RouteSegment("A", "B", 1.0),
            RouteSegment("B", "C", 2.0),
            RouteSegment("A", "C", 5.0),
        ],
        place_mentions=[
            PlaceMention(bio_id=7, canonical_name="Medina", coords="24.4,39.6", uri="A"),
            PlaceMention(bio_id=7, canonical_name="Kufa", coords="32.0,44.4", uri="C"),
            PlaceMention(bio_id=8, canonical_name="Basra", coords="30.5,47.8", uri="B"),
        ],
    )


def test_view_cache_counts():
    cache = ViewCache()
    assert cache.get_or_compute("k", lambda: 1) == 1
    assert cache.get_or_compute("k", lambda: 2) == 1
    assert (cache.hits, cache.misses) == (1, 1)
    assert "k" in cache
    cache.invalidate()
    assert len(cache) == 0


def test_person_view_is_cached():
    explorer = NetworkExplorer(_make_dataset())
    first = explorer.person_view(2)
    second = explorer.person_view("2")
    assert first is second
    assert explorer.cache.hits == 1
    assert first.graph.center_id == 2
    assert set(first.positions) == {1, 2, 3}
    assert first.edge_tracks.keys() == first.graph.edges.keys()


def test_source_order_does_not_matter():
    explorer = NetworkExplorer(_make_dataset())
    a = explorer.person_view(2, sources=["muwatta", "bukhari"])
    b = explorer.person_view(2, sources=("bukhari", "muwatta"))
    assert a is b


def test_source_filter_applies():
    explorer = NetworkExplorer(_make_dataset())
    view = explorer.person_view(2, sources=["bukhari"])
    assert set(view.graph.nodes) == {2, 3}


def test_replacing_a_table_invalidates_cache():
    dataset = _make_dataset()
    explorer = NetworkExplorer(dataset)
    before = explorer.person_view(2)
    dataset.replace_chains([Isnad(sequence=(4, 2))])
    after = explorer.person_view(2)
    assert after is not before
    assert set(after.graph.nodes) == {2, 4}
    assert len(explorer.cache) == 1


def test_biography_view():
    explorer = NetworkExplorer(_make_dataset())
    view = explorer.biography_view(7, name="Nafi")
    assert view.graph.center_id == "bio_7"
    assert view.graph.nodes["bio_7"].name == "Nafi"
    assert set(view.graph.nodes) == {"bio_7", 1, 2, 3}


def test_biography_routes():
    explorer = NetworkExplorer(_make_dataset())
    locations = explorer.biography_locations(7)
    assert [loc.canonical_name for loc in locations] == ["Medina", "Kufa"]
    assert explorer.biography_routes(7) == [("A", "B"), ("B", "C")]


def test_route_graph_rebuilt_after_replace():
    dataset = _make_dataset()
    explorer = NetworkExplorer(dataset)
    assert explorer.route_graph().number_of_edges() == 3
    dataset.replace_route_segments([RouteSegment("A", "B", 1.0)])
    assert explorer.route_graph().number_of_edges() == 1
