"""SVG preview of a laid-out transmission network using drawsvg."""

from __future__ import annotations

import drawsvg as draw

from isnad_graph.layout.routing import RoutedPath
from isnad_graph.parser.model import GraphNode, NodeId
from isnad_graph.render.constants import (
    CANVAS_PADDING,
    CURVE_RADIUS,
    LABEL_GAP,
    LABEL_QUANTILE,
    TITLE_HEIGHT,
)
from isnad_graph.render.style import Theme


def render_svg(
    view,
    theme: Theme,
    title: str = "",
    show_peer_edges: bool = True,
    padding: float = CANVAS_PADDING,
) -> str:
    """Render a NetworkView to an SVG string."""
    graph, layout = view.graph, view.layout
    if not layout.positions:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>\n'

    max_r = max(layout.radii.values(), default=0.0)
    xs = [p[0] for p in layout.positions.values()]
    ys = [p[1] for p in layout.positions.values()]
    min_x = min(xs) - max_r - padding
    min_y = min(ys) - max_r - padding - (TITLE_HEIGHT if title else 0.0)
    width = max(xs) + max_r + padding - min_x
    height = max(ys) + max_r + padding - min_y

    d = draw.Drawing(width, height, origin=(min_x, min_y))
    d.append(draw.Rectangle(min_x, min_y, width, height, fill=theme.background_color))

    if title:
        d.append(draw.Text(
            title,
            theme.title_font_size,
            min_x + padding, min_y + TITLE_HEIGHT / 2 + padding / 2,
            fill=theme.title_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    arrow = draw.Marker(-0.1, -0.5, 0.9, 0.5, scale=6, orient="auto")
    arrow.append(draw.Lines(-0.1, -0.5, -0.1, 0.5, 0.9, 0, fill=theme.edge_color, close=True))

    routes = [r for r in view.routes if show_peer_edges or not r.is_peer]
    _render_edges(d, routes, theme, arrow)
    _render_nodes(d, graph.nodes.values(), layout.positions, layout.radii, theme)
    _render_labels(d, view, theme)

    return d.as_svg() + "\n"


def _render_edges(
    d: draw.Drawing,
    routes: list[RoutedPath],
    theme: Theme,
    arrow: draw.Marker,
    curve_radius: float = CURVE_RADIUS,
) -> None:
    """Render elbow paths with rounded corners at each bend."""
    for route in routes:
        pts = route.points
        extra = {"stroke_dasharray": theme.peer_edge_dash} if route.is_peer else {}
        path = draw.Path(
            stroke=theme.peer_edge_color if route.is_peer else theme.edge_color,
            stroke_width=theme.edge_width,
            stroke_opacity=theme.edge_opacity,
            fill="none",
            marker_end=arrow,
            **extra,
        )
        path.M(*pts[0])
        for i in range(1, len(pts) - 1):
            prev, curr, nxt = pts[i - 1], pts[i], pts[i + 1]
            dx1, dy1 = curr[0] - prev[0], curr[1] - prev[1]
            dx2, dy2 = nxt[0] - curr[0], nxt[1] - curr[1]
            len1 = (dx1**2 + dy1**2) ** 0.5
            len2 = (dx2**2 + dy2**2) ** 0.5
            r = min(curve_radius, len1 / 2, len2 / 2)
            if len1 > 0 and len2 > 0:
                path.L(curr[0] - dx1 / len1 * r, curr[1] - dy1 / len1 * r)
                path.Q(curr[0], curr[1], curr[0] + dx2 / len2 * r, curr[1] + dy2 / len2 * r)
            else:
                path.L(*curr)
        path.L(*pts[-1])
        d.append(path)


def _node_fill(node: GraphNode, theme: Theme) -> str:
    if node.is_center:
        return theme.center_fill
    if node.has_id is not None:
        return theme.biography_fill
    if node.is_upstream:
        return theme.upstream_fill
    if node.is_downstream:
        return theme.downstream_fill
    return theme.node_fill


def _render_nodes(d, nodes, positions, radii, theme: Theme) -> None:
    for node in nodes:
        pos = positions.get(node.id)
        if pos is None:
            continue
        d.append(draw.Circle(
            pos[0], pos[1], radii.get(node.id, 6.0),
            fill=_node_fill(node, theme),
            stroke=theme.node_stroke,
            stroke_width=theme.node_stroke_width,
        ))


def _quantile(values: list[float], p: float) -> float:
    """Linear-interpolated quantile of *values* (which need not be sorted)."""
    if not values:
        return 0.0
    ordered = sorted(values)
    i = (len(ordered) - 1) * p
    lo = int(i)
    hi = min(lo + 1, len(ordered) - 1)
    return ordered[lo] + (ordered[hi] - ordered[lo]) * (i - lo)


def _labelled_ids(view) -> list[NodeId]:
    """Center plus the nodes in the top decile of incoming or outgoing weight."""
    graph = view.graph
    in_w = {nid: 0 for nid in graph.nodes}
    out_w = {nid: 0 for nid in graph.nodes}
    for edge in graph.edges.values():
        out_w[edge.source] = out_w.get(edge.source, 0) + edge.weight
        in_w[edge.target] = in_w.get(edge.target, 0) + edge.weight
    in_cut = _quantile(list(in_w.values()), LABEL_QUANTILE)
    out_cut = _quantile(list(out_w.values()), LABEL_QUANTILE)
    return [
        nid for nid in graph.nodes
        if nid == graph.center_id or in_w[nid] >= in_cut or out_w[nid] >= out_cut
    ]


def _render_labels(d: draw.Drawing, view, theme: Theme) -> None:
    positions, radii = view.layout.positions, view.layout.radii
    for nid in _labelled_ids(view):
        node = view.graph.nodes[nid]
        pos = positions.get(nid)
        if pos is None:
            continue
        text = node.name
        size = theme.label_font_size
        if node.is_center:
            size = theme.center_label_font_size
        elif len(text) > theme.label_max_chars:
            text = text[: theme.label_max_chars] + "…"
        d.append(draw.Text(
            text,
            size,
            pos[0], pos[1] - radii.get(nid, 6.0) - LABEL_GAP,
            fill=theme.label_color,
            font_family=theme.label_font_family,
            font_weight="bold",
            text_anchor="middle",
        ))
