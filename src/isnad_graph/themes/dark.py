"""Dark grey theme."""

from isnad_graph.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    center_fill="#FF7043",
    biography_fill="#66BB6A",
    upstream_fill="#A5D6A7",
    downstream_fill="#90CAF9",
    node_fill="#bdbdbd",
    node_stroke="#333333",
    node_stroke_width=1.5,
    edge_color="#cccccc",
    edge_width=1.4,
    edge_opacity=0.5,
    peer_edge_color="#FFB74D",
    peer_edge_dash="4,2",
    label_color="#e0e0e0",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=11.0,
    title_color="#ffffff",
    title_font_size=22.0,
)
