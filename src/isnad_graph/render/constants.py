"""Render constants used across render modules.

Theme-dependent values remain in style.py.
"""

CANVAS_PADDING: float = 60.0
"""Padding around the laid-out content."""

TITLE_HEIGHT: float = 40.0
"""Vertical space reserved above the content for the title."""

CURVE_RADIUS: float = 8.0
"""Corner radius applied at elbow bends."""

LABEL_GAP: float = 7.0
"""Gap between a node's circle and its label."""

LABEL_QUANTILE: float = 0.9
"""Nodes at or above this quantile of in- or out-weight get a label."""
