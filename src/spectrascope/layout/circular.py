"""
Circular waveform layout.

Places a ring of points around the canvas center whose radius follows the
smoothed absolute waveform, rotating faster when the signal is loud.
"""

import math
from typing import Optional

import numpy as np

from spectrascope.config import VisualizationConfig
from spectrascope.core.colors import BLACK, RING_GRAY, color_for, glow_color
from spectrascope.core.smoother import TemporalSmoother
from spectrascope.core.snapshot import normalize_waveform
from spectrascope.errors import InvalidConfiguration
from spectrascope.layout.frames import CenterGlow, CircularFrame, RingPoint

BASE_RADIUS_RATIO = 0.3
BASE_ROTATION_STEP = 0.01
LOUDNESS_ROTATION_STEP = 0.05


def _check_dims(width: float, height: float):
    if not (width > 0 and height > 0):
        raise InvalidConfiguration(
            f"Canvas dimensions must be positive, got {width}x{height}"
        )


class CircularLayoutGenerator:
    """
    Builds a CircularFrame per frame from a waveform snapshot.

    The per-point smoother has ``bar_count`` slots and points are keyed
    ``index % bar_count``; ``point_count`` only sets ring resolution.
    """

    def __init__(self, config: Optional[VisualizationConfig] = None):
        self.cfg = config or VisualizationConfig()
        self.smoother = TemporalSmoother(self.cfg.bar_count)
        self.rotation = 0.0

    def configure(self, config: VisualizationConfig):
        if self.cfg.changes_counts(config):
            self.smoother.resize(config.bar_count)
        self.cfg = config

    def reset(self):
        self.smoother.reset()
        self.rotation = 0.0

    @staticmethod
    def _geometry(width: float, height: float):
        center_x = width / 2.0
        center_y = height / 2.0
        base_radius = min(center_x, center_y) * BASE_RADIUS_RATIO
        return center_x, center_y, base_radius

    def silence(self, width: float, height: float) -> CircularFrame:
        """Static gray ring at base radius, no rotation, no glow."""
        _check_dims(width, height)
        cx, cy, base_radius = self._geometry(width, height)
        step = 2.0 * math.pi / self.cfg.point_count

        points = tuple(
            RingPoint(
                x=cx + math.cos(i * step) * base_radius,
                y=cy + math.sin(i * step) * base_radius,
                amplitude=0.0,
                color=RING_GRAY,
            )
            for i in range(self.cfg.point_count)
        )
        return CircularFrame(
            points=points,
            rotation=0.0,
            center_glow=CenterGlow(intensity=0.0, color=BLACK),
            silent=True,
        )

    def generate(
        self,
        waveform,
        width: float,
        height: float,
        config: Optional[VisualizationConfig] = None,
    ) -> CircularFrame:
        """
        Produce the ring frame for one rendered frame.

        Args:
            waveform: Byte-range time-domain snapshot centered at 128, or None.
            width: Canvas width in pixels.
            height: Canvas height in pixels.
            config: Optional replacement config for this and later frames.

        Returns:
            CircularFrame with ``point_count`` points.
        """
        if config is not None and config != self.cfg:
            self.configure(config)
        cfg = self.cfg

        if waveform is None:
            return self.silence(width, height)
        _check_dims(width, height)

        samples = normalize_waveform(waveform)
        avg_amplitude = float(np.mean(np.abs(samples)))
        self.rotation += BASE_ROTATION_STEP + avg_amplitude * LOUDNESS_ROTATION_STEP

        cx, cy, base_radius = self._geometry(width, height)
        count = cfg.point_count
        sample_idx = np.arange(count) * samples.size // count
        amplitudes = np.abs(samples[sample_idx])
        smoothed = self.smoother.smooth_keyed(amplitudes, cfg.smoothing)

        radii = base_radius * (1.0 + smoothed * cfg.amplification)
        angles = np.arange(count) * (2.0 * math.pi / count) + self.rotation
        xs = cx + np.cos(angles) * radii
        ys = cy + np.sin(angles) * radii

        points = tuple(
            RingPoint(
                x=float(x),
                y=float(y),
                amplitude=float(a),
                color=color_for(a, cfg.color_scheme),
            )
            for x, y, a in zip(xs, ys, smoothed)
        )
        glow = CenterGlow(
            intensity=min(avg_amplitude * 2.0, 1.0),
            color=glow_color(avg_amplitude),
        )
        return CircularFrame(points=points, rotation=self.rotation, center_glow=glow)
