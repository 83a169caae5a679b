"""Defensive conversion of externally produced analysis snapshots."""

import numpy as np

from spectrascope.errors import InvalidConfiguration

BYTE_MAX = 255.0
WAVEFORM_CENTER = 128.0


def as_byte_snapshot(snapshot) -> np.ndarray:
    """
    Convert a snapshot to a flat float64 array clamped to [0, 255].

    Snapshots come from an uncontrolled source, so NaN becomes 0,
    infinities saturate and extra dimensions are flattened.

    Raises:
        InvalidConfiguration: If the snapshot is empty.
    """
    if isinstance(snapshot, (bytes, bytearray, memoryview)):
        values = np.frombuffer(snapshot, dtype=np.uint8).astype(np.float64)
    else:
        values = np.asarray(snapshot, dtype=np.float64).ravel()

    if values.size == 0:
        raise InvalidConfiguration("Snapshot is empty")

    values = np.nan_to_num(values, nan=0.0, posinf=BYTE_MAX, neginf=0.0)
    return np.clip(values, 0.0, BYTE_MAX)


def normalize_waveform(waveform) -> np.ndarray:
    """Map byte-range time-domain samples to [-1, 1], silence at 0."""
    samples = as_byte_snapshot(waveform)
    return np.clip((samples - WAVEFORM_CENTER) / WAVEFORM_CENTER, -1.0, 1.0)
