"""
Frame descriptors handed to the renderer.

Rebuilt every frame, never mutated, no reference back to generator state.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from spectrascope.core.colors import Color


@dataclass(frozen=True)
class Bar:
    height: float
    peak: float
    color: Color


@dataclass(frozen=True)
class BarFrame:
    """One bar per band, low frequencies first."""

    bars: Tuple[Bar, ...]
    silent: bool = False

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self.bars)

    def __getitem__(self, index: int) -> Bar:
        return self.bars[index]

    @property
    def heights(self) -> np.ndarray:
        return np.array([bar.height for bar in self.bars], dtype=np.float64)

    @property
    def peaks(self) -> np.ndarray:
        return np.array([bar.peak for bar in self.bars], dtype=np.float64)

    @property
    def colors(self) -> np.ndarray:
        """(n, 3) float array."""
        return np.array([bar.color for bar in self.bars], dtype=np.float64).reshape(-1, 3)


@dataclass(frozen=True)
class RingPoint:
    x: float
    y: float
    amplitude: float
    color: Color


@dataclass(frozen=True)
class CenterGlow:
    intensity: float
    color: Color


@dataclass(frozen=True)
class CircularFrame:
    """
    Ring of points around the canvas center plus a center glow.

    ``rotation`` is an unbounded accumulator in radians; only use it
    through sin/cos.
    """

    points: Tuple[RingPoint, ...]
    rotation: float
    center_glow: CenterGlow
    silent: bool = False

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[RingPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> RingPoint:
        return self.points[index]

    @property
    def positions(self) -> np.ndarray:
        """(n, 2) pixel coordinates."""
        return np.array([(p.x, p.y) for p in self.points], dtype=np.float64).reshape(-1, 2)

    @property
    def amplitudes(self) -> np.ndarray:
        return np.array([p.amplitude for p in self.points], dtype=np.float64)

    @property
    def colors(self) -> np.ndarray:
        return np.array([p.color for p in self.points], dtype=np.float64).reshape(-1, 3)
