"""Data model for transmission networks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

NodeId = Union[int, str]

BIO_PREFIX = "bio_"


class NodeType(Enum):
    """Role of a node relative to the focal person of a graph build."""

    CENTER = "center"
    OTHER = "other"


def normalize_id(value) -> NodeId:
    """Coerce a raw person id to its canonical form.

    Integers and digit strings become ``int``; anything else is kept as a
    stripped string. JSON object keys arrive as strings while chain
    sequences carry numbers, so both sides go through here.
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    return text


def bio_node_id(bio_id) -> str:
    """Synthetic node id for a biography-subject sentinel."""
    return f"{BIO_PREFIX}{bio_id}"


@dataclass
class Person:
    """A person profile from the names registry."""

    person_id: NodeId
    name: str = ""
    has_id: NodeId | None = None
    transmission_activity: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Isnad:
    """An ordered chain of transmitters, immutable once loaded."""

    sequence: tuple[NodeId, ...] = ()
    names: tuple[str | None, ...] = ()
    has_ids: tuple[NodeId | None, ...] = ()
    isnad_id: str | None = None
    sources: frozenset[str] = frozenset()
    unique_bio_ids: frozenset[NodeId] = frozenset()

    def name_at(self, index: int) -> str | None:
        if index < len(self.names):
            return self.names[index] or None
        return None

    def has_id_at(self, index: int) -> NodeId | None:
        if index < len(self.has_ids):
            return self.has_ids[index]
        return None


@dataclass
class GraphNode:
    """A person (or biography sentinel) in a transmission graph."""

    id: NodeId
    name: str
    type: NodeType = NodeType.OTHER
    has_id: NodeId | None = None
    is_upstream: bool = False
    is_downstream: bool = False

    @property
    def is_center(self) -> bool:
        return self.type is NodeType.CENTER


@dataclass
class GraphEdge:
    """An aggregated transmission link between two nodes."""

    source: NodeId
    target: NodeId
    weight: int = 1

    @property
    def key(self) -> tuple[NodeId, NodeId]:
        return (self.source, self.target)


@dataclass
class TransmissionGraph:
    """Deduplicated node/edge set built around a focal node.

    Both mappings keep insertion order; the layout engine uses that order
    as its tie-break seed.
    """

    center_id: NodeId | None = None
    nodes: dict[NodeId, GraphNode] = field(default_factory=dict)
    edges: dict[tuple[NodeId, NodeId], GraphEdge] = field(default_factory=dict)

    def add_node(self, node: GraphNode) -> GraphNode:
        """Insert a node unless one with the same id exists (first writer wins)."""
        existing = self.nodes.get(node.id)
        if existing is not None:
            return existing
        self.nodes[node.id] = node
        return node

    def add_edge(self, source: NodeId, target: NodeId, weight: int = 1) -> GraphEdge:
        """Insert an edge or increment the weight of the existing one."""
        key = (source, target)
        edge = self.edges.get(key)
        if edge is None:
            edge = GraphEdge(source=source, target=target, weight=weight)
            self.edges[key] = edge
        else:
            edge.weight += weight
        return edge

    @property
    def node_list(self) -> list[GraphNode]:
        return list(self.nodes.values())

    @property
    def edge_list(self) -> list[GraphEdge]:
        return list(self.edges.values())

    def weighted_degree(self) -> dict[NodeId, int]:
        """Sum of incoming and outgoing edge weights per node."""
        degree = {nid: 0 for nid in self.nodes}
        for edge in self.edges.values():
            degree[edge.source] = degree.get(edge.source, 0) + edge.weight
            degree[edge.target] = degree.get(edge.target, 0) + edge.weight
        return degree

    def neighbors(self, node_id: NodeId) -> list[NodeId]:
        """Nodes linked to *node_id* in either direction, in edge order."""
        result = []
        seen = set()
        for edge in self.edges.values():
            other = None
            if edge.source == node_id:
                other = edge.target
            elif edge.target == node_id:
                other = edge.source
            if other is not None and other not in seen:
                seen.add(other)
                result.append(other)
        return result
