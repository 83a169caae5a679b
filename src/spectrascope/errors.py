"""Exception types raised by the visualization core."""


class SpectrascopeError(Exception):
    """Base class for all spectrascope errors."""


class InvalidConfiguration(SpectrascopeError, ValueError):
    """Non-positive counts or dimensions, empty snapshots, bad config fields."""


class IndexOutOfBounds(SpectrascopeError, IndexError):
    """A per-band state index outside the configured count."""
