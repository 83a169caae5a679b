"""
Visualization configuration.

A single immutable bundle drives both the bars and the circular layout.
Partial updates produce a new bundle; the generators decide whether their
per-band state has to be rebuilt.
"""

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict

from spectrascope.core.colors import COLOR_SCHEMES
from spectrascope.errors import InvalidConfiguration

# Fields whose change resizes the per-index state arrays
COUNT_FIELDS = ("bar_count",)


@dataclass(frozen=True)
class VisualizationConfig:
    """Immutable configuration shared by every layout generator."""

    bar_count: int = 64
    point_count: int = 256
    color_scheme: str = "wmp"  # "wmp", "modern"

    # Peak markers
    peak_hold: bool = True
    peak_decay: float = 0.95
    peak_hold_frames: int = 30

    # Step size of the temporal smoother (1.0 = no smoothing)
    smoothing: float = 0.8
    amplification: float = 1.0

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise InvalidConfiguration if any field is out of range."""
        for name in ("bar_count", "point_count", "peak_hold_frames"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")

        if self.bar_count < 1:
            raise InvalidConfiguration(f"bar_count must be >= 1, got {self.bar_count}")
        if self.point_count < 1:
            raise InvalidConfiguration(f"point_count must be >= 1, got {self.point_count}")
        if self.peak_hold_frames < 0:
            raise InvalidConfiguration(
                f"peak_hold_frames must be >= 0, got {self.peak_hold_frames}"
            )
        if self.color_scheme not in COLOR_SCHEMES:
            raise InvalidConfiguration(
                f"color_scheme must be one of {COLOR_SCHEMES}, got {self.color_scheme!r}"
            )
        if not 0.0 < self.peak_decay < 1.0:
            raise InvalidConfiguration(f"peak_decay must be in (0, 1), got {self.peak_decay}")
        if not 0.0 < self.smoothing <= 1.0:
            raise InvalidConfiguration(f"smoothing must be in (0, 1], got {self.smoothing}")
        if not (math.isfinite(self.amplification) and self.amplification >= 0.0):
            raise InvalidConfiguration(
                f"amplification must be finite and >= 0, got {self.amplification}"
            )

    def merged(self, **changes: Any) -> "VisualizationConfig":
        """
        Return a copy with the supplied fields replaced.

        Args:
            **changes: Field values to override. Unknown names are rejected.

        Returns:
            New validated VisualizationConfig.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidConfiguration(f"Unknown config fields: {', '.join(unknown)}")
        return replace(self, **changes)

    def changes_counts(self, other: "VisualizationConfig") -> bool:
        """True if switching to ``other`` requires resizing state arrays."""
        return any(getattr(self, name) != getattr(other, name) for name in COUNT_FIELDS)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Named bundles, selectable from the CLI
PRESETS: Dict[str, Dict[str, Any]] = {
    "wmp": {"bar_count": 64, "color_scheme": "wmp", "peak_hold": True, "smoothing": 0.8},
    "modern": {"bar_count": 64, "color_scheme": "modern", "peak_hold": False, "smoothing": 0.6},
}


def from_preset(name: str, **overrides: Any) -> VisualizationConfig:
    """Build a config from a named preset, then apply overrides."""
    if name not in PRESETS:
        raise InvalidConfiguration(
            f"Unknown preset {name!r} (choose from {', '.join(sorted(PRESETS))})"
        )
    values = dict(PRESETS[name])
    values.update(overrides)
    return VisualizationConfig(**values)
