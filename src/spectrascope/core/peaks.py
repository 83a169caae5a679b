"""
Peak hold and decay.

Each band keeps a peak value and a hold counter. Per frame, in order:
a higher input replaces the peak and restarts the hold; otherwise a
running hold counts down; otherwise the peak decays geometrically.
"""

from dataclasses import dataclass

import numpy as np

from spectrascope.errors import IndexOutOfBounds, InvalidConfiguration

DEFAULT_HOLD_FRAMES = 30
DEFAULT_DECAY_RATE = 0.95


@dataclass(frozen=True)
class PeakState:
    """Snapshot of one band's peak record."""

    value: float
    hold_frames_remaining: int

    @property
    def holding(self) -> bool:
        return self.hold_frames_remaining > 0


class PeakTracker:
    """Parallel arrays of peak values and hold counters."""

    def __init__(self, size: int, hold_frames: int = DEFAULT_HOLD_FRAMES):
        if hold_frames < 0:
            raise InvalidConfiguration(f"hold_frames must be >= 0, got {hold_frames}")
        self.hold_frames = hold_frames
        self._values = np.zeros(0, dtype=np.float64)
        self._hold = np.zeros(0, dtype=np.int64)
        self.resize(size)

    @property
    def size(self) -> int:
        return self._values.size

    @property
    def values(self) -> np.ndarray:
        return self._values.copy()

    @property
    def hold_remaining(self) -> np.ndarray:
        return self._hold.copy()

    def resize(self, size: int):
        """Reallocate to ``size`` zeroed bands."""
        if size < 1:
            raise InvalidConfiguration(f"Peak tracker size must be >= 1, got {size}")
        self._values = np.zeros(size, dtype=np.float64)
        self._hold = np.zeros(size, dtype=np.int64)

    def reset(self):
        self._values.fill(0.0)
        self._hold.fill(0)

    def _check_index(self, index: int):
        if not 0 <= index < self._values.size:
            raise IndexOutOfBounds(
                f"Peak index {index} out of range for size {self._values.size}"
            )

    def state(self, index: int) -> PeakState:
        self._check_index(index)
        return PeakState(float(self._values[index]), int(self._hold[index]))

    def update(self, index: int, current: float, decay_rate: float = DEFAULT_DECAY_RATE) -> float:
        """
        Advance one band by one frame.

        Returns:
            The band's peak value after the update.
        """
        self._check_index(index)
        if current > self._values[index]:
            self._values[index] = current
            self._hold[index] = self.hold_frames
        elif self._hold[index] > 0:
            self._hold[index] -= 1
        else:
            self._values[index] *= decay_rate
        return float(self._values[index])

    def update_all(self, currents, decay_rate: float = DEFAULT_DECAY_RATE) -> np.ndarray:
        """Advance every band by one frame. Returns a copy of the peak values."""
        current = np.asarray(currents, dtype=np.float64)
        if current.shape != self._values.shape:
            raise IndexOutOfBounds(
                f"Expected {self._values.size} values, got {current.size}"
            )

        rising = current > self._values
        holding = ~rising & (self._hold > 0)
        decaying = ~rising & ~holding

        self._values[rising] = current[rising]
        self._hold[rising] = self.hold_frames
        self._hold[holding] -= 1
        self._values[decaying] *= decay_rate

        return self._values.copy()
