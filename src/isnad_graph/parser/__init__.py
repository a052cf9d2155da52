"""Record parsing and the transmission-network data model."""

from isnad_graph.parser.records import (
    load_json,
    parse_isnads,
    parse_place_mentions,
    parse_profiles,
    parse_route_segments,
)

__all__ = [
    "load_json",
    "parse_isnads",
    "parse_place_mentions",
    "parse_profiles",
    "parse_route_segments",
]
