"""
Vertex buffers for frame descriptors.

Pixel-space quads and polylines ready for a vertex/color buffer upload.
Origin is top-left, y grows downward, bars stand on the bottom edge.
"""

from dataclasses import dataclass

import numpy as np

from spectrascope.errors import InvalidConfiguration
from spectrascope.layout.frames import BarFrame, CircularFrame

USABLE_WIDTH_RATIO = 0.9
MAX_HEIGHT_RATIO = 0.8
BAR_GAP_PX = 1.0
PEAK_MARKER_PX = 2.0

# Two triangles per quad, vertices ordered TL, BL, TR, BR
_QUAD_INDICES = np.array([0, 1, 2, 2, 1, 3], dtype=np.uint32)


@dataclass(frozen=True)
class Geometry:
    """Vertex positions, per-vertex colors and triangle indices."""

    vertices: np.ndarray  # (k, 2) float32
    colors: np.ndarray    # (k, 3) float32
    indices: np.ndarray   # (m,) uint32, empty for polylines

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


def _quad(left: float, top: float, right: float, bottom: float):
    return [(left, top), (left, bottom), (right, top), (right, bottom)]


def bar_geometry(frame: BarFrame, width: float, height: float) -> Geometry:
    """
    Quads for every bar plus a thin marker for every non-zero peak.

    Args:
        frame: Bars to lay out.
        width: Canvas width in pixels.
        height: Canvas height in pixels.

    Returns:
        Geometry with 4 vertices and 6 indices per quad.
    """
    if not (width > 0 and height > 0):
        raise InvalidConfiguration(
            f"Canvas dimensions must be positive, got {width}x{height}"
        )

    count = max(len(frame), 1)
    bar_width = width * USABLE_WIDTH_RATIO / count
    max_height = height * MAX_HEIGHT_RATIO
    start_x = (width - width * USABLE_WIDTH_RATIO) / 2.0
    base_y = float(height)

    vertices = []
    colors = []
    for i, bar in enumerate(frame):
        left = start_x + i * bar_width
        right = left + bar_width - BAR_GAP_PX
        top = base_y - bar.height * max_height
        vertices.extend(_quad(left, top, right, base_y))
        colors.extend([bar.color] * 4)

        if bar.peak > 0.0:
            peak_y = base_y - bar.peak * max_height
            vertices.extend(_quad(left, peak_y - PEAK_MARKER_PX, right, peak_y))
            colors.extend([bar.color] * 4)

    n_quads = len(vertices) // 4
    indices = (np.arange(n_quads, dtype=np.uint32)[:, None] * 4 + _QUAD_INDICES).ravel()

    return Geometry(
        vertices=np.array(vertices, dtype=np.float32).reshape(-1, 2),
        colors=np.array(colors, dtype=np.float32).reshape(-1, 3),
        indices=indices.astype(np.uint32),
    )


def ring_geometry(frame: CircularFrame) -> Geometry:
    """Closed polyline through the ring points (first point repeated last)."""
    positions = frame.positions
    colors = frame.colors
    if len(positions):
        positions = np.vstack([positions, positions[:1]])
        colors = np.vstack([colors, colors[:1]])

    return Geometry(
        vertices=positions.astype(np.float32),
        colors=colors.astype(np.float32),
        indices=np.zeros(0, dtype=np.uint32),
    )
