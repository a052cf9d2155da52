"""Tests for place aggregation."""

from isnad_graph.geo.places import (
    aggregate_locations,
    normalize_place_name,
    parse_coords,
    relevant_uris,
)
from isnad_graph.parser.records import PlaceMention


def test_normalize_place_name():
    assert normalize_place_name("al-Kufa") == "kufa"
    assert normalize_place_name("  Al  Basra ") == "basra"
    assert normalize_place_name("Kufa") == "kufa"
    assert normalize_place_name("الكوفة") == "كوفة"


def test_parse_coords():
    assert parse_coords("32.0, 44.4") == (32.0, 44.4)
    assert parse_coords("") is None
    assert parse_coords(None) is None
    assert parse_coords("nan,nan") is None
    assert parse_coords("north") is None


def _mentions():
    return [
        PlaceMention(bio_id=7, canonical_name="al-Kufa", context="birth", source="tabaqat"),
        PlaceMention(bio_id=7, canonical_name="Kufa", coords="32.0,44.4",
                     uri="KUFA", context="death", source="tarikh"),
        PlaceMention(bio_id=8, canonical_name="Kufa", context="birth", source="tarikh"),
        PlaceMention(bio_id=7, canonical_name="Iraq", certain="r", uri="IRAQ"),
    ]


def test_mentions_of_same_place_merge():
    locations = aggregate_locations(_mentions())
    assert [loc.canonical_name for loc in locations] == ["al-Kufa", "Iraq"]
    kufa = locations[0]
    assert kufa.coords == (32.0, 44.4)
    assert kufa.uri == "KUFA"
    assert kufa.bio_ids == [7, 8]
    assert kufa.context_groups(7) == [("birth", ["tabaqat"]), ("death", ["tarikh"])]
    assert kufa.all_sources == ["tabaqat", "tarikh"]


def test_region_flag():
    locations = aggregate_locations(_mentions())
    assert locations[1].is_region
    assert not locations[1].mappable


def test_filter_by_biography():
    locations = aggregate_locations(_mentions(), bio_id=8)
    assert len(locations) == 1
    assert locations[0].canonical_name == "Kufa"
    assert locations[0].coords is None


def test_relevant_uris_only_mappable():
    assert relevant_uris(aggregate_locations(_mentions())) == ["KUFA"]
