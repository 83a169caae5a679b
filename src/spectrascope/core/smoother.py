"""
Per-band exponential smoothing.

``state += (raw - state) * factor``. The factor is a step size: 1.0
follows the input exactly, small values respond slowly.
"""

import numpy as np

from spectrascope.errors import IndexOutOfBounds, InvalidConfiguration


def _check_factor(factor: float):
    if not 0.0 < factor <= 1.0:
        raise InvalidConfiguration(f"smoothing factor must be in (0, 1], got {factor}")


class TemporalSmoother:
    """Fixed-size array of smoothed values, zero at start and after reset()."""

    def __init__(self, size: int):
        self._state = np.zeros(0, dtype=np.float64)
        self.resize(size)

    @property
    def size(self) -> int:
        return self._state.size

    @property
    def state(self) -> np.ndarray:
        """Copy of the current smoothed values."""
        return self._state.copy()

    def resize(self, size: int):
        """Reallocate to ``size`` zeroed slots."""
        if size < 1:
            raise InvalidConfiguration(f"Smoother size must be >= 1, got {size}")
        self._state = np.zeros(size, dtype=np.float64)

    def reset(self):
        self._state.fill(0.0)

    def smooth(self, index: int, raw_value: float, factor: float) -> float:
        """
        Step slot ``index`` toward ``raw_value``.

        Returns:
            The new smoothed value.
        """
        if not 0 <= index < self._state.size:
            raise IndexOutOfBounds(
                f"Smoother index {index} out of range for size {self._state.size}"
            )
        _check_factor(factor)
        self._state[index] += (raw_value - self._state[index]) * factor
        return float(self._state[index])

    def smooth_all(self, raw_values, factor: float) -> np.ndarray:
        """Step every slot at once. ``raw_values`` must match the size."""
        raw = np.asarray(raw_values, dtype=np.float64)
        if raw.shape != self._state.shape:
            raise IndexOutOfBounds(
                f"Expected {self._state.size} values, got {raw.size}"
            )
        _check_factor(factor)
        self._state += (raw - self._state) * factor
        return self._state.copy()

    def smooth_keyed(self, raw_values, factor: float) -> np.ndarray:
        """
        Smooth any number of values, value ``i`` using slot ``i % size``.

        Values sharing a slot are applied in order, each seeing the state
        left by the previous one.

        Returns:
            The smoothed value produced for each input, same length.
        """
        raw = np.asarray(raw_values, dtype=np.float64).ravel()
        _check_factor(factor)
        out = np.empty_like(raw)
        size = self._state.size

        # Each chunk touches distinct slots, chunks run in input order
        for start in range(0, raw.size, size):
            chunk = raw[start:start + size]
            slots = self._state[:chunk.size]
            slots += (chunk - slots) * factor
            out[start:start + chunk.size] = slots

        return out
