"""Per-frame analysis-to-visual mapping primitives."""

from spectrascope.core.bands import BandMapper, log_indices, map_bands
from spectrascope.core.colors import Color, color_for, glow_color, hsv_to_rgb
from spectrascope.core.peaks import PeakState, PeakTracker
from spectrascope.core.smoother import TemporalSmoother

__all__ = [
    "BandMapper",
    "log_indices",
    "map_bands",
    "Color",
    "color_for",
    "glow_color",
    "hsv_to_rgb",
    "PeakState",
    "PeakTracker",
    "TemporalSmoother",
]
