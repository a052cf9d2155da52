"""SVG preview rendering."""

from isnad_graph.render.svg import render_svg

__all__ = ["render_svg"]
