"""Light theme."""

from isnad_graph.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="#ffffff",
    center_fill="#FF5722",
    biography_fill="#4CAF50",
    upstream_fill="#81C784",
    downstream_fill="#64B5F6",
    node_fill="#999999",
    node_stroke="#ffffff",
    node_stroke_width=2.0,
    edge_color="#999999",
    edge_width=1.6,
    edge_opacity=0.55,
    peer_edge_color="#FF9800",
    peer_edge_dash="4,2",
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=11.0,
    title_color="#111111",
    title_font_size=22.0,
)
