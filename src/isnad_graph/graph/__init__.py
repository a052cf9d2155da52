"""Transmission-graph construction."""

from isnad_graph.graph.builder import (
    build_biography_graph,
    build_person_graph,
    filter_chains,
)

__all__ = ["build_biography_graph", "build_person_graph", "filter_chains"]
