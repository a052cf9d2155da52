"""Shared fixtures: small JSON tables written to a temp directory."""

import json

import pytest

PROFILES = {
    "1": {"name": "Malik", "has_id": "nan"},
    "2": {"name": "Nafi", "has_id": 42},
    "3": {"name": "Ibn Umar"},
}

ISNADS = {
    "isnads": [
        {
            "isnad_id": "a",
            "sequence": [1, 2, 3],
            "names": ["Malik", "Nafi", "Ibn Umar"],
            "sources": ["muwatta"],
            "unique_bio_ids": [7],
        },
        {
            "isnad_id": "b",
            "sequence": [2, 3],
            "sources": ["bukhari"],
            "unique_bio_ids": [7],
        },
    ]
}

ROUTES = {
    "type": "FeatureCollection",
    "features": [
        {"properties": {"sToponym": "A", "eToponym": "B", "Meter": 1},
         "geometry": {"type": "LineString", "coordinates": [[0, 0], [1, 0]]}},
        {"properties": {"sToponym": "B", "eToponym": "C", "Meter": 2},
         "geometry": {"type": "LineString", "coordinates": [[1, 0], [2, 0]]}},
        {"properties": {"sToponym": "A", "eToponym": "C", "Meter": 5},
         "geometry": {"type": "LineString", "coordinates": [[0, 0], [2, 0]]}},
        {"properties": {"sToponym": "D", "eToponym": "E", "Meter": 1},
         "geometry": None},
    ],
}


def _write(path, data):
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def profiles_file(tmp_path):
    return _write(tmp_path / "profiles.json", PROFILES)


@pytest.fixture
def isnads_file(tmp_path):
    return _write(tmp_path / "isnads.json", ISNADS)


@pytest.fixture
def routes_file(tmp_path):
    return _write(tmp_path / "routes.json", ROUTES)
