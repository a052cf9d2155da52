"""Layered layout engine for transmission networks."""

from isnad_graph.layout.engine import (
    Layout,
    apply_position_overrides,
    compute_layout,
    count_crossings,
)
from isnad_graph.layout.ordering import LayoutCancelled

__all__ = [
    "Layout",
    "LayoutCancelled",
    "apply_position_overrides",
    "compute_layout",
    "count_crossings",
]
