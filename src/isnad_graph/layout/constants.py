"""Layout constants used across layout modules.

Centralizes the magic numbers of layers.py, ordering.py, engine.py and
the routing package.
"""

# ---------------------------------------------------------------------------
# Canvas / columns
# ---------------------------------------------------------------------------
CANVAS_WIDTH: float = 1200.0
"""Default canvas width in pixels."""

CANVAS_HEIGHT: float = 800.0
"""Default canvas height in pixels."""

COLUMN_SPACING: float = 160.0
"""Horizontal distance between adjacent layer columns."""

COLUMN_PADDING: float = 80.0
"""Extra horizontal gap between the center column and layer +/-1."""

# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------
ORPHAN_LAYER: int = 9999
"""Sentinel layer for nodes unreachable from the center in either direction."""

# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------
SWEEP_PASSES: int = 3
"""Number of forward+backward barycenter sweep rounds."""

# ---------------------------------------------------------------------------
# Vertical placement
# ---------------------------------------------------------------------------
MIN_ROW_SPACING: float = 46.0
"""Lower clamp on the vertical spacing between nodes of a layer."""

MAX_ROW_SPACING: float = 110.0
"""Upper clamp on the vertical spacing between nodes of a layer."""

SPREAD_FRACTION: float = 0.9
"""Fraction of the canvas height a layer may spread over before clamping."""

RELAX_WEIGHT: float = 0.55
"""Weight of the neighbour median when relaxing a node's y position."""

ORPHAN_LANE_GAP: float = 80.0
"""Vertical gap between the lowest laid-out node and the orphan lane."""

# ---------------------------------------------------------------------------
# Node radius
# ---------------------------------------------------------------------------
MIN_RADIUS: float = 6.0
"""Radius of the lowest weighted-degree node."""

MAX_RADIUS: float = 26.0
"""Radius of the highest weighted-degree node."""

CENTER_MIN_RADIUS: float = 20.0
"""Minimum radius of the focal node."""

# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------
NODE_PADDING: float = 8.0
"""Gap between a node's circle and the start/end of its edges."""

TRACK_SPACING: float = 14.0
"""Lateral distance between adjacent edge tracks."""

MIN_ELBOW_RUN: float = 40.0
"""Minimum horizontal run of an elbow between nodes in the same column."""

COORD_TOLERANCE: float = 1.0
"""Tolerance for treating two x coordinates as the same column."""
