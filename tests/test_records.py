"""Tests for lenient JSON record parsing."""

import pytest

from isnad_graph.parser import (
    load_json,
    parse_isnads,
    parse_place_mentions,
    parse_profiles,
    parse_route_segments,
)
from isnad_graph.parser.model import normalize_id


def test_normalize_id():
    assert normalize_id("12") == 12
    assert normalize_id(12) == 12
    assert normalize_id(12.0) == 12
    assert normalize_id(" abc ") == "abc"


def test_parse_profiles_mapping():
    profiles = parse_profiles({"1": {"name": "Malik", "has_id": "nan"}, "2": {"has_id": "5"}})
    assert set(profiles) == {1, 2}
    assert profiles[1].name == "Malik"
    assert profiles[1].has_id is None
    assert profiles[2].name == ""
    assert profiles[2].has_id == 5


def test_parse_profiles_list():
    profiles = parse_profiles([{"person_id": "3", "name": "Nafi"}, {"name": "no id"}])
    assert list(profiles) == [3]
    assert profiles[3].name == "Nafi"


def test_parse_isnads_parallel_arrays():
    chains = parse_isnads({"isnads": [{
        "sequence": ["1", 2, None, 3],
        "names": ["Malik", float("nan"), "x", "Ibn Umar"],
        "sources": ["muwatta", "nan"],
        "unique_bio_ids": ["7"],
    }]})
    assert len(chains) == 1
    chain = chains[0]
    assert chain.sequence == (1, 2, 3)
    assert chain.names == ("Malik", None, "Ibn Umar")
    assert chain.sources == frozenset({"muwatta"})
    assert chain.unique_bio_ids == frozenset({7})
    assert chain.isnad_id == "isnad_0"


def test_parse_isnads_chain_objects():
    chains = parse_isnads([
        {"isnad_id": "x1", "source": "bukhari", "chain": [
            {"person_id": 1, "canonical_name": "Malik", "has_id": 10},
            {"person_id": "2", "name": "Nafi"},
            {"name": "missing id"},
        ]},
    ])
    chain = chains[0]
    assert chain.isnad_id == "x1"
    assert chain.sequence == (1, 2)
    assert chain.names == ("Malik", "Nafi")
    assert chain.has_ids == (10, None)
    assert chain.sources == frozenset({"bukhari"})


def test_parse_isnads_record_without_sequence_is_empty():
    chains = parse_isnads([{"isnad_id": "empty"}, "garbage"])
    assert len(chains) == 1
    assert chains[0].sequence == ()


def test_parse_rejects_scalar_table():
    with pytest.raises(ValueError, match="isnads"):
        parse_isnads("not a table")


def test_load_json_invalid(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(ValueError, match="not valid JSON"):
        load_json(path)


def test_load_json_accepts_nan(tmp_path):
    path = tmp_path / "nan.json"
    path.write_text('[{"Meter": NaN}]')
    assert len(load_json(path)) == 1


def test_parse_route_segments():
    segments = parse_route_segments({"features": [
        {"properties": {"sToponym": "A", "eToponym": "B", "Meter": "1500"},
         "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}},
        {"properties": {"sToponym": "B", "eToponym": "C", "Meter": "nan"},
         "geometry": {"type": "MultiLineString",
                      "coordinates": [[[1, 1], [2, 2]], [[2, 2], [3, 3]]]}},
        {"properties": {"sToponym": "C"}},
    ]})
    assert len(segments) == 2
    assert segments[0].meters == 1500.0
    assert segments[0].coordinates == ((0.0, 0.0), (1.0, 1.0))
    assert segments[1].meters is None
    assert len(segments[1].coordinates) == 4


def test_parse_place_mentions():
    mentions = parse_place_mentions({"mentions": [
        {"bio_id": "7", "canonical_name": " Kufa ", "coords": "32.0,44.4",
         "URI": "KUFA_443E320N_S", "context": "birth", "source": "tabaqat"},
        {"bio_id": 7, "canonical_name": "nan"},
        {"canonical_name": "Basra"},
    ]})
    assert len(mentions) == 1
    mention = mentions[0]
    assert mention.bio_id == 7
    assert mention.canonical_name == "Kufa"
    assert mention.english_transliteration == "Kufa"
    assert mention.uri == "KUFA_443E320N_S"
    assert mention.context == "birth"
