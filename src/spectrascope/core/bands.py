"""
Logarithmic band mapping.

Collapses a linear frequency-magnitude snapshot into a fixed number of
bands whose start bins are spaced exponentially, so the low end of the
spectrum gets many narrow bands and the high end a few wide ones.
"""

import numpy as np

from spectrascope.core.snapshot import BYTE_MAX, as_byte_snapshot
from spectrascope.errors import InvalidConfiguration

REDUCERS = ("max", "sample")


def log_indices(bin_count: int, band_count: int) -> np.ndarray:
    """
    Start bin for every band.

    ``floor((N ** (i / B) - 1) / (N - 1) * N)`` clamped to ``[0, N - 1]``,
    where N is the bin count and B the band count. Non-decreasing in i.

    Args:
        bin_count: Snapshot length N (>= 2).
        band_count: Number of bands B (>= 1).

    Returns:
        int64 array of length band_count.
    """
    if band_count < 1:
        raise InvalidConfiguration(f"band_count must be >= 1, got {band_count}")
    if bin_count < 2:
        raise InvalidConfiguration(f"Snapshot needs at least 2 bins, got {bin_count}")

    n = float(bin_count)
    exponents = np.arange(band_count, dtype=np.float64) / band_count
    warped = (np.power(n, exponents) - 1.0) / (n - 1.0) * n
    return np.clip(np.floor(warped).astype(np.int64), 0, bin_count - 1)


class BandMapper:
    """
    Maps a magnitude snapshot to band values in [0, 1].

    With the default "max" reducer every bin belongs to the band whose
    start bin is nearest to it (ties go to the lower band), and a band
    reports the loudest bin it owns. A tone between two start bins lights
    exactly one band. Bands sharing a start bin all report that shared
    region. "sample" reads the start bin only.
    """

    def __init__(self, reducer: str = "max"):
        if reducer not in REDUCERS:
            raise InvalidConfiguration(
                f"reducer must be one of {REDUCERS}, got {reducer!r}"
            )
        self.reducer = reducer
        self._index_cache: dict[tuple[int, int], np.ndarray] = {}
        self._region_cache: dict[tuple[int, int], tuple[np.ndarray, np.ndarray]] = {}

    def indices(self, bin_count: int, band_count: int) -> np.ndarray:
        """Cached log_indices()."""
        key = (bin_count, band_count)
        if key not in self._index_cache:
            self._index_cache[key] = log_indices(bin_count, band_count)
        return self._index_cache[key]

    def regions(self, bin_count: int, band_count: int) -> tuple[np.ndarray, np.ndarray]:
        """
        Nearest-start regions for the "max" reducer.

        Returns:
            (region_starts, band_region): the first bin of each region over
            the distinct start bins, and the region index of every band.
        """
        key = (bin_count, band_count)
        if key not in self._region_cache:
            starts = self.indices(bin_count, band_count)
            distinct = np.unique(starts)
            # last bin still nearer (or equally near) to the lower start
            midpoints = (distinct[:-1] + distinct[1:]) // 2
            region_starts = np.concatenate(([0], midpoints + 1))
            band_region = np.searchsorted(distinct, starts)
            self._region_cache[key] = (region_starts, band_region)
        return self._region_cache[key]

    def map(self, snapshot, band_count: int) -> np.ndarray:
        """
        Convert a snapshot to ``band_count`` values in [0, 1].

        Args:
            snapshot: Byte-range magnitudes, one per frequency bin.
            band_count: Number of output bands.

        Returns:
            float64 array of length band_count, low frequencies first.
        """
        values = as_byte_snapshot(snapshot)
        starts = self.indices(values.size, band_count)

        if self.reducer == "sample":
            raw = values[starts]
        else:
            region_starts, band_region = self.regions(values.size, band_count)
            raw = np.maximum.reduceat(values, region_starts)[band_region]

        return raw / BYTE_MAX


_default_mapper = BandMapper()


def map_bands(snapshot, band_count: int) -> np.ndarray:
    """Map a snapshot with the default band mapper."""
    return _default_mapper.map(snapshot, band_count)
