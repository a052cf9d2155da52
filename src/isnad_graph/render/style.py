"""Theme and style constants for transmission-network rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a transmission-network preview."""

    name: str
    background_color: str
    center_fill: str
    biography_fill: str
    upstream_fill: str
    downstream_fill: str
    node_fill: str
    node_stroke: str
    node_stroke_width: float
    edge_color: str
    edge_width: float
    edge_opacity: float
    peer_edge_color: str
    peer_edge_dash: str
    label_color: str
    label_font_family: str
    label_font_size: float
    title_color: str
    title_font_size: float
    center_label_font_size: float = 14.0
    label_max_chars: int = 25
