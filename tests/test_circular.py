"""Tests for the circular waveform layout generator."""

import math

import numpy as np
import pytest

from spectrascope.config import VisualizationConfig
from spectrascope.core.colors import BLACK, RING_GRAY, color_for, glow_color
from spectrascope.errors import InvalidConfiguration
from spectrascope.layout.circular import CircularLayoutGenerator
from spectrascope.layout.frames import CircularFrame

WIDTH, HEIGHT = 800, 600
CENTER = np.array([400.0, 300.0])
BASE_RADIUS = 0.3 * min(WIDTH, HEIGHT) / 2  # 90 px


def radii(frame: CircularFrame) -> np.ndarray:
    return np.linalg.norm(frame.positions - CENTER, axis=1)


class TestSilenceFrame:
    def test_static_ring(self):
        frame = CircularLayoutGenerator().generate(None, WIDTH, HEIGHT)

        assert frame.silent
        assert len(frame) == 256
        assert frame.rotation == 0.0
        np.testing.assert_allclose(radii(frame), BASE_RADIUS)
        assert np.all(frame.amplitudes == 0.0)
        assert all(p.color == RING_GRAY for p in frame)
        assert frame.center_glow.intensity == 0.0
        assert frame.center_glow.color == BLACK

    def test_points_evenly_spaced(self):
        frame = CircularLayoutGenerator().generate(None, WIDTH, HEIGHT)
        first, second = frame[0], frame[1]
        assert (first.x, first.y) == pytest.approx((400 + BASE_RADIUS, 300))
        angle = math.atan2(second.y - 300, second.x - 400)
        assert angle == pytest.approx(2 * math.pi / 256)

    def test_rotation_reported_as_zero_after_motion(self, sine_waveform):
        gen = CircularLayoutGenerator()
        for _ in range(10):
            gen.generate(sine_waveform, WIDTH, HEIGHT)
        accumulated = gen.rotation

        frame = gen.generate(None, WIDTH, HEIGHT)
        assert frame.rotation == 0.0
        assert gen.rotation == accumulated

    @pytest.mark.parametrize("width, height", [(0, 600), (800, 0), (-1, 600), (800, -5)])
    def test_invalid_dimensions(self, width, height):
        with pytest.raises(InvalidConfiguration):
            CircularLayoutGenerator().generate(None, width, height)


class TestCircularLayoutGenerator:
    def test_flat_waveform(self, flat_waveform):
        gen = CircularLayoutGenerator()
        frame = gen.generate(flat_waveform, WIDTH, HEIGHT)

        assert not frame.silent
        assert frame.rotation == pytest.approx(0.01)
        np.testing.assert_allclose(radii(frame), BASE_RADIUS)
        assert frame.center_glow.intensity == 0.0
        assert frame.center_glow.color == pytest.approx((0.0, 1.0, 0.0))

    def test_rotation_accumulates_faster_when_loud(self, flat_waveform, loud_waveform):
        quiet = CircularLayoutGenerator()
        loud = CircularLayoutGenerator()
        for _ in range(5):
            quiet_frame = quiet.generate(flat_waveform, WIDTH, HEIGHT)
            loud_frame = loud.generate(loud_waveform, WIDTH, HEIGHT)

        assert quiet_frame.rotation == pytest.approx(0.05)
        assert loud_frame.rotation > quiet_frame.rotation

    def test_rotation_monotonic(self, sine_waveform):
        gen = CircularLayoutGenerator()
        rotations = [gen.generate(sine_waveform, WIDTH, HEIGHT).rotation for _ in range(20)]
        assert np.all(np.diff(rotations) > 0)

    def test_loud_waveform_glow(self, loud_waveform):
        frame = CircularLayoutGenerator().generate(loud_waveform, WIDTH, HEIGHT)
        # 255 -> 127/128, 0 -> -1
        avg = (127 / 128 + 1.0) / 2
        assert frame.rotation == pytest.approx(0.01 + avg * 0.05)
        assert frame.center_glow.intensity == 1.0
        assert frame.center_glow.color == pytest.approx(glow_color(avg))

    def test_glow_intensity_is_twice_average(self):
        waveform = np.full(2048, 160)  # |(160 - 128) / 128| = 0.25
        frame = CircularLayoutGenerator().generate(waveform, WIDTH, HEIGHT)
        assert frame.center_glow.intensity == pytest.approx(0.5)

    def test_radius_follows_amplitude(self, sine_waveform):
        cfg = VisualizationConfig(amplification=2.0)
        frame = CircularLayoutGenerator(cfg).generate(sine_waveform, WIDTH, HEIGHT)
        expected = BASE_RADIUS * (1.0 + frame.amplitudes * 2.0)
        np.testing.assert_allclose(radii(frame), expected)

    def test_first_point_at_rotation_angle(self, sine_waveform):
        frame = CircularLayoutGenerator().generate(sine_waveform, WIDTH, HEIGHT)
        p = frame[0]
        r = BASE_RADIUS * (1.0 + p.amplitude)
        assert p.x == pytest.approx(400 + math.cos(frame.rotation) * r)
        assert p.y == pytest.approx(300 + math.sin(frame.rotation) * r)

    def test_points_keyed_modulo_bar_count(self):
        cfg = VisualizationConfig(bar_count=64, point_count=256, smoothing=0.5)
        waveform = np.full(2048, 192)  # amplitude 0.5 everywhere
        frame = CircularLayoutGenerator(cfg).generate(waveform, WIDTH, HEIGHT)

        amps = frame.amplitudes
        assert amps[0] == pytest.approx(0.25)
        assert amps[64] == pytest.approx(0.375)
        assert amps[128] == pytest.approx(0.4375)
        assert amps[192] == pytest.approx(0.46875)

    def test_amplitudes_in_unit_range(self, loud_waveform):
        gen = CircularLayoutGenerator(VisualizationConfig(smoothing=1.0))
        frame = gen.generate(loud_waveform, WIDTH, HEIGHT)
        assert np.all((frame.amplitudes >= 0.0) & (frame.amplitudes <= 1.0))

    def test_point_colors_follow_scheme(self, sine_waveform):
        cfg = VisualizationConfig(color_scheme="modern")
        frame = CircularLayoutGenerator(cfg).generate(sine_waveform, WIDTH, HEIGHT)
        for p in frame:
            assert p.color == pytest.approx(color_for(p.amplitude, "modern"))

    def test_point_count(self, sine_waveform):
        cfg = VisualizationConfig(point_count=100)
        frame = CircularLayoutGenerator(cfg).generate(sine_waveform, WIDTH, HEIGHT)
        assert len(frame) == 100

    def test_short_waveform_sampled(self):
        frame = CircularLayoutGenerator().generate([128, 255, 0], WIDTH, HEIGHT)
        assert len(frame) == 256

    def test_malformed_samples_clamped(self):
        waveform = np.array([1e9, -1e9, np.nan, 128] * 64)
        frame = CircularLayoutGenerator().generate(waveform, WIDTH, HEIGHT)
        assert np.all(np.isfinite(frame.positions))
        assert frame.center_glow.intensity <= 1.0

    def test_empty_waveform_rejected(self):
        with pytest.raises(InvalidConfiguration):
            CircularLayoutGenerator().generate([], WIDTH, HEIGHT)

    def test_invalid_dimensions_with_signal(self, sine_waveform):
        with pytest.raises(InvalidConfiguration):
            CircularLayoutGenerator().generate(sine_waveform, 0, HEIGHT)

    def test_reset(self, sine_waveform):
        gen = CircularLayoutGenerator()
        gen.generate(sine_waveform, WIDTH, HEIGHT)
        gen.reset()
        assert gen.rotation == 0.0
        assert np.all(gen.smoother.state == 0.0)

    def test_bar_count_change_resizes_smoother(self, sine_waveform):
        gen = CircularLayoutGenerator()
        gen.generate(sine_waveform, WIDTH, HEIGHT, VisualizationConfig(bar_count=32))
        assert gen.smoother.size == 32
