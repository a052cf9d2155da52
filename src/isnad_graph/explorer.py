"""Orchestration: build, lay out, and route a view with an explicit cache.

Graph builders and the layout engine are pure functions. The explorer
owns the only memoisation: views are cached under a key made of the
dataset revision and the view parameters, and any change to the
underlying tables bumps the revision and empties the cache.
"""

from __future__ import annotations

__all__ = ["Dataset", "NetworkExplorer", "NetworkView", "ViewCache"]

import logging
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field

import networkx as nx

from isnad_graph.geo.places import Location, aggregate_locations, relevant_uris
from isnad_graph.geo.routes import build_route_graph, connecting_segments
from isnad_graph.graph.builder import (
    build_biography_graph,
    build_person_graph,
    filter_chains,
)
from isnad_graph.layout.constants import CANVAS_HEIGHT, CANVAS_WIDTH
from isnad_graph.layout.engine import Layout, compute_layout
from isnad_graph.layout.routing import RoutedPath, assign_edge_tracks, route_edges
from isnad_graph.parser.model import Isnad, NodeId, Person, TransmissionGraph, normalize_id
from isnad_graph.parser.records import PlaceMention, RouteSegment

logger = logging.getLogger(__name__)


@dataclass
class NetworkView:
    """Everything a renderer needs for one transmission-network view."""

    graph: TransmissionGraph
    layout: Layout
    routes: list[RoutedPath]
    edge_tracks: dict[tuple[NodeId, NodeId], int]

    @property
    def positions(self):
        return self.layout.positions


@dataclass
class Dataset:
    """The static tables a session works from.

    Use the ``replace_*`` methods to swap a table; each one bumps
    ``revision`` so caches keyed on it go stale.
    """

    profiles: dict[NodeId, Person] = field(default_factory=dict)
    chains: list[Isnad] = field(default_factory=list)
    route_segments: list[RouteSegment] = field(default_factory=list)
    place_mentions: list[PlaceMention] = field(default_factory=list)
    revision: int = 0

    def replace_profiles(self, profiles: dict[NodeId, Person]) -> None:
        self.profiles = profiles
        self.revision += 1

    def replace_chains(self, chains: list[Isnad]) -> None:
        self.chains = chains
        self.revision += 1

    def replace_route_segments(self, segments: list[RouteSegment]) -> None:
        self.route_segments = segments
        self.revision += 1

    def replace_place_mentions(self, mentions: list[PlaceMention]) -> None:
        self.place_mentions = mentions
        self.revision += 1


class ViewCache:
    """Explicit memo table keyed on hashable view parameters."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, object] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get_or_compute(self, key: Hashable, compute: Callable[[], object]):
        if key in self._entries:
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        value = compute()
        self._entries[key] = value
        return value

    def invalidate(self) -> None:
        self._entries.clear()


class NetworkExplorer:
    """Builds views over a Dataset, recomputing only when inputs change."""

    def __init__(
        self,
        dataset: Dataset,
        width: float = CANVAS_WIDTH,
        height: float = CANVAS_HEIGHT,
    ) -> None:
        self.dataset = dataset
        self.width = width
        self.height = height
        self.cache = ViewCache()
        self._revision = dataset.revision

    def _check_revision(self) -> None:
        if self.dataset.revision != self._revision:
            logger.debug(
                "Dataset revision %d -> %d, dropping %d cached views",
                self._revision, self.dataset.revision, len(self.cache),
            )
            self.cache.invalidate()
            self._revision = self.dataset.revision

    def _sources_key(self, sources: Iterable[str] | None) -> tuple[str, ...] | None:
        return tuple(sorted(set(sources))) if sources else None

    def person_view(
        self,
        person_id: NodeId,
        sources: Iterable[str] | None = None,
    ) -> NetworkView:
        """Transmission network of every chain the person appears in."""
        self._check_revision()
        pid = normalize_id(person_id)
        src = self._sources_key(sources)
        key = ("person", self._revision, pid, src, self.width, self.height)

        def compute() -> NetworkView:
            chains = filter_chains(self.dataset.chains, person_id=pid, sources=src)
            graph = build_person_graph(pid, chains, self.dataset.profiles)
            return self._lay_out(graph)

        return self.cache.get_or_compute(key, compute)

    def biography_view(
        self,
        bio_id: NodeId,
        sources: Iterable[str] | None = None,
        name: str | None = None,
    ) -> NetworkView:
        """Chains quoted in a biography, leading into the subject."""
        self._check_revision()
        bid = normalize_id(bio_id)
        src = self._sources_key(sources)
        key = ("bio", self._revision, bid, src, name, self.width, self.height)

        def compute() -> NetworkView:
            chains = filter_chains(self.dataset.chains, sources=src, bio_id=bid)
            graph = build_biography_graph(bid, chains, self.dataset.profiles, name=name)
            return self._lay_out(graph)

        return self.cache.get_or_compute(key, compute)

    def _lay_out(self, graph: TransmissionGraph) -> NetworkView:
        layout = compute_layout(graph, width=self.width, height=self.height)
        tracks = assign_edge_tracks(layout, graph.edges.values())
        routes = route_edges(graph, layout, tracks=tracks)
        return NetworkView(graph=graph, layout=layout, routes=routes, edge_tracks=tracks)

    def route_graph(self) -> nx.Graph:
        """Route graph over toponym URIs, built once per dataset revision."""
        self._check_revision()
        return self.cache.get_or_compute(
            ("routes", self._revision),
            lambda: build_route_graph(self.dataset.route_segments),
        )

    def biography_locations(self, bio_id: NodeId) -> list[Location]:
        self._check_revision()
        bid = normalize_id(bio_id)
        return self.cache.get_or_compute(
            ("places", self._revision, bid),
            lambda: aggregate_locations(self.dataset.place_mentions, bio_id=bid),
        )

    def biography_routes(self, bio_id: NodeId) -> list[tuple]:
        """Route segments to draw between the biography's mappable places."""
        uris = relevant_uris(self.biography_locations(bio_id))
        return connecting_segments(self.route_graph(), uris)
