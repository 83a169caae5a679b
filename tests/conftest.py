"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from spectrascope.config import VisualizationConfig

# Default analyser sizes: 2048-point FFT -> 1024 bins, 2048 time samples
TEST_BINS = 1024
TEST_SAMPLES = 2048


@pytest.fixture
def config() -> VisualizationConfig:
    """Default configuration."""
    return VisualizationConfig()


@pytest.fixture
def silent_snapshot() -> np.ndarray:
    """All-zero magnitude snapshot."""
    return np.zeros(TEST_BINS, dtype=np.uint8)


@pytest.fixture
def full_snapshot() -> np.ndarray:
    """Every bin at full scale."""
    return np.full(TEST_BINS, 255, dtype=np.uint8)


@pytest.fixture
def tone_snapshot() -> np.ndarray:
    """A single loud bin in the middle of the spectrum."""
    snapshot = np.zeros(TEST_BINS, dtype=np.uint8)
    snapshot[512] = 255
    return snapshot


@pytest.fixture
def pink_snapshot() -> np.ndarray:
    """Magnitudes falling off toward high frequencies, like typical music."""
    bins = np.arange(TEST_BINS)
    return (255 * np.exp(-bins / 300.0)).astype(np.uint8)


@pytest.fixture
def flat_waveform() -> np.ndarray:
    """Digital silence: every sample at the 128 midpoint."""
    return np.full(TEST_SAMPLES, 128, dtype=np.uint8)


@pytest.fixture
def sine_waveform() -> np.ndarray:
    """A few cycles of a half-scale sine centered at 128."""
    t = np.arange(TEST_SAMPLES)
    y = 128 + 64 * np.sin(2 * np.pi * 4 * t / TEST_SAMPLES)
    return np.round(y).astype(np.uint8)


@pytest.fixture
def loud_waveform() -> np.ndarray:
    """Full-scale square wave."""
    y = np.where(np.arange(TEST_SAMPLES) % 64 < 32, 255, 0)
    return y.astype(np.uint8)
