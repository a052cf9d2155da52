"""Build deduplicated transmission graphs from isnad chains.

Two kinds of focal identity are supported:

- a **person**: every chain the person appears in is folded into one graph
  with the person as center;
- a **biography subject**: the chains quoted in a biography lead into a
  synthetic ``bio_<id>`` sentinel that stands for the subject.

Nodes are keyed by id and the first insertion wins. Consecutive chain
positions become edges whose weight counts how often the pair occurs.
"""

from __future__ import annotations

__all__ = ["build_biography_graph", "build_person_graph", "filter_chains"]

import logging
from collections.abc import Iterable, Mapping

from isnad_graph.parser.model import (
    GraphNode,
    Isnad,
    NodeId,
    NodeType,
    Person,
    TransmissionGraph,
    bio_node_id,
    normalize_id,
)

logger = logging.getLogger(__name__)


def filter_chains(
    chains: Iterable[Isnad],
    person_id: NodeId | None = None,
    sources: Iterable[str] | None = None,
    bio_id: NodeId | None = None,
) -> list[Isnad]:
    """Select the chains relevant to a view, preserving input order.

    Each given criterion must hold: the chain contains *person_id*, cites
    at least one of *sources*, and occurs in biography *bio_id*.
    """
    wanted_sources = set(sources) if sources else None
    if person_id is not None:
        person_id = normalize_id(person_id)
    if bio_id is not None:
        bio_id = normalize_id(bio_id)

    selected = []
    for chain in chains:
        if person_id is not None and person_id not in chain.sequence:
            continue
        if wanted_sources is not None and not (chain.sources & wanted_sources):
            continue
        if bio_id is not None and bio_id not in chain.unique_bio_ids:
            continue
        selected.append(chain)
    return selected


def _display_name(
    pid: NodeId,
    chain: Isnad,
    index: int,
    profiles: Mapping[NodeId, Person],
) -> str:
    """Chain-local name, then profile name, then a placeholder."""
    local = chain.name_at(index)
    if local:
        return local
    profile = profiles.get(pid)
    if profile is not None and profile.name:
        return profile.name
    return f"Person {pid}"


def _has_id(
    pid: NodeId,
    chain: Isnad,
    index: int,
    profiles: Mapping[NodeId, Person],
) -> NodeId | None:
    local = chain.has_id_at(index)
    if local is not None:
        return local
    profile = profiles.get(pid)
    return profile.has_id if profile is not None else None


def _add_chain(
    graph: TransmissionGraph,
    chain: Isnad,
    profiles: Mapping[NodeId, Person],
    focal_index: int | None,
    all_upstream: bool = False,
) -> None:
    """Insert a chain's people and consecutive links into *graph*."""
    seq = chain.sequence
    for idx, pid in enumerate(seq):
        if pid in graph.nodes:
            continue
        if all_upstream:
            upstream, downstream = True, False
        elif focal_index is None:
            upstream = downstream = False
        else:
            upstream, downstream = idx < focal_index, idx > focal_index
        graph.add_node(GraphNode(
            id=pid,
            name=_display_name(pid, chain, idx, profiles),
            type=NodeType.OTHER,
            has_id=_has_id(pid, chain, idx, profiles),
            is_upstream=upstream,
            is_downstream=downstream,
        ))

    for source, target in zip(seq, seq[1:]):
        graph.add_edge(source, target)


def build_person_graph(
    person_id: NodeId,
    chains: Iterable[Isnad],
    profiles: Mapping[NodeId, Person],
) -> TransmissionGraph:
    """Aggregate *chains* into a graph centered on a person."""
    center = normalize_id(person_id)
    graph = TransmissionGraph(center_id=center)

    profile = profiles.get(center)
    graph.add_node(GraphNode(
        id=center,
        name=(profile.name if profile and profile.name else f"Person {center}"),
        type=NodeType.CENTER,
        has_id=profile.has_id if profile else None,
    ))

    count = 0
    for chain in chains:
        count += 1
        focal_index = chain.sequence.index(center) if center in chain.sequence else None
        _add_chain(graph, chain, profiles, focal_index)

    logger.debug(
        "Person graph for %s: %d chains -> %d nodes, %d edges",
        center, count, len(graph.nodes), len(graph.edges),
    )
    return graph


def build_biography_graph(
    bio_id: NodeId,
    chains: Iterable[Isnad],
    profiles: Mapping[NodeId, Person],
    name: str | None = None,
) -> TransmissionGraph:
    """Aggregate *chains* into a graph centered on a biography subject.

    The subject is a ``bio_<id>`` sentinel that is never looked up in the
    profile table. The last transmitter of every non-empty chain links to
    the sentinel.
    """
    bio_id = normalize_id(bio_id)
    center = bio_node_id(bio_id)
    graph = TransmissionGraph(center_id=center)
    graph.add_node(GraphNode(
        id=center,
        name=name or f"Biography {bio_id}",
        type=NodeType.CENTER,
        has_id=bio_id,
    ))

    count = 0
    for chain in chains:
        count += 1
        _add_chain(graph, chain, profiles, focal_index=None, all_upstream=True)
        if chain.sequence:
            graph.add_edge(chain.sequence[-1], center)

    logger.debug(
        "Biography graph for %s: %d chains -> %d nodes, %d edges",
        bio_id, count, len(graph.nodes), len(graph.edges),
    )
    return graph
