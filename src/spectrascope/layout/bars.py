"""
Bars layout.

Snapshot -> bands -> smoothing -> amplification -> peak tracking -> colors.
"""

from typing import Optional

import numpy as np

from spectrascope.config import VisualizationConfig
from spectrascope.core.bands import BandMapper
from spectrascope.core.colors import DARK_GRAY, color_for
from spectrascope.core.peaks import PeakTracker
from spectrascope.core.smoother import TemporalSmoother
from spectrascope.layout.frames import Bar, BarFrame


class BarsLayoutGenerator:
    """
    Builds a BarFrame per frame from a magnitude snapshot.

    Owns its own smoother and peak tracker, sized to ``bar_count``.
    """

    def __init__(
        self,
        config: Optional[VisualizationConfig] = None,
        band_mapper: Optional[BandMapper] = None,
    ):
        self.cfg = config or VisualizationConfig()
        self.band_mapper = band_mapper or BandMapper()
        self.smoother = TemporalSmoother(self.cfg.bar_count)
        self.peaks = PeakTracker(self.cfg.bar_count, hold_frames=self.cfg.peak_hold_frames)

    def configure(self, config: VisualizationConfig):
        """Switch config, rebuilding state only if the bar count changed."""
        if self.cfg.changes_counts(config):
            self.smoother.resize(config.bar_count)
            self.peaks.resize(config.bar_count)
        self.peaks.hold_frames = config.peak_hold_frames
        self.cfg = config

    def reset(self):
        self.smoother.reset()
        self.peaks.reset()

    def silence(self) -> BarFrame:
        """Flat dark-gray frame; leaves smoother and peak state alone."""
        bar = Bar(height=0.0, peak=0.0, color=DARK_GRAY)
        return BarFrame(bars=(bar,) * self.cfg.bar_count, silent=True)

    def generate(
        self,
        snapshot,
        config: Optional[VisualizationConfig] = None,
    ) -> BarFrame:
        """
        Produce the bar frame for one rendered frame.

        Args:
            snapshot: Byte-range magnitude snapshot, or None for silence.
            config: Optional replacement config for this and later frames.

        Returns:
            BarFrame with exactly ``bar_count`` bars.
        """
        if config is not None and config != self.cfg:
            self.configure(config)
        cfg = self.cfg

        if snapshot is None:
            return self.silence()

        raw = self.band_mapper.map(snapshot, cfg.bar_count)
        smoothed = self.smoother.smooth_all(raw, cfg.smoothing)
        heights = np.clip(smoothed * cfg.amplification, 0.0, 1.0)

        # Tracked even when hidden so re-enabling peak_hold shows live peaks
        tracked = self.peaks.update_all(heights, cfg.peak_decay)
        peaks = tracked if cfg.peak_hold else np.zeros_like(tracked)

        bars = tuple(
            Bar(
                height=float(h),
                peak=float(p),
                color=color_for(max(h, p), cfg.color_scheme),
            )
            for h, p in zip(heights, peaks)
        )
        return BarFrame(bars=bars)
