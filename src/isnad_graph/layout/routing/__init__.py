"""Edge routing subpackage for transmission-network layout.

Public API:
- route_edges: Route every positioned edge as an elbow
- RoutedPath: Routed path dataclass
- assign_edge_tracks: Per-edge lateral track assignment
- elbow_path: Orthogonal three-segment path between two nodes
"""

from isnad_graph.layout.routing.common import RoutedPath
from isnad_graph.layout.routing.core import route_edges
from isnad_graph.layout.routing.tracks import assign_edge_tracks, elbow_path

__all__ = [
    "RoutedPath",
    "assign_edge_tracks",
    "elbow_path",
    "route_edges",
]
