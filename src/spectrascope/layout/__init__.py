"""Frame layout generators and descriptors."""

from spectrascope.layout.bars import BarsLayoutGenerator
from spectrascope.layout.circular import CircularLayoutGenerator
from spectrascope.layout.frames import Bar, BarFrame, CenterGlow, CircularFrame, RingPoint
from spectrascope.layout.geometry import Geometry, bar_geometry, ring_geometry

__all__ = [
    "BarsLayoutGenerator",
    "CircularLayoutGenerator",
    "Bar",
    "BarFrame",
    "CenterGlow",
    "CircularFrame",
    "RingPoint",
    "Geometry",
    "bar_geometry",
    "ring_geometry",
]
