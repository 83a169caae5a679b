"""Frame-by-frame audio visualization state: bars, peaks, colors and rings."""

from spectrascope.config import VisualizationConfig, from_preset
from spectrascope.core.bands import BandMapper
from spectrascope.core.colors import Color, color_for
from spectrascope.core.peaks import PeakTracker
from spectrascope.core.smoother import TemporalSmoother
from spectrascope.errors import IndexOutOfBounds, InvalidConfiguration
from spectrascope.layout.bars import BarsLayoutGenerator
from spectrascope.layout.circular import CircularLayoutGenerator
from spectrascope.layout.frames import BarFrame, CircularFrame
from spectrascope.pipeline import VisualizationPipeline

__version__ = "0.1.0"
__all__ = [
    "VisualizationConfig",
    "from_preset",
    "BandMapper",
    "Color",
    "color_for",
    "PeakTracker",
    "TemporalSmoother",
    "IndexOutOfBounds",
    "InvalidConfiguration",
    "BarsLayoutGenerator",
    "CircularLayoutGenerator",
    "BarFrame",
    "CircularFrame",
    "VisualizationPipeline",
]
