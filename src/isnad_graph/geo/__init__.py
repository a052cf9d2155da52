"""Geographic helpers: place aggregation and route matching."""

from isnad_graph.geo.places import Location, aggregate_locations, relevant_uris
from isnad_graph.geo.routes import (
    build_route_graph,
    connecting_segments,
    path_length,
    shortest_path,
)

__all__ = [
    "Location",
    "aggregate_locations",
    "build_route_graph",
    "connecting_segments",
    "path_length",
    "relevant_uris",
    "shortest_path",
]
