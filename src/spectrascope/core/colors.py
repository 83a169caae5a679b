"""
Intensity to color mapping.

The "wmp" scheme sweeps hue from green (120 degrees) down to red with a
brightness floor so quiet bands never go fully dark. The "modern" scheme
is a blue -> cyan -> white ramp.
"""

import math
from typing import NamedTuple

WMP = "wmp"
MODERN = "modern"
COLOR_SCHEMES = (WMP, MODERN)


class Color(NamedTuple):
    """RGB triple, each channel in [0, 1]."""

    r: float
    g: float
    b: float


DARK_GRAY = Color(0.2, 0.2, 0.2)
RING_GRAY = Color(0.3, 0.3, 0.3)
BLACK = Color(0.0, 0.0, 0.0)

# Brightness floor for the wmp scheme
MIN_VALUE = 0.3


def _unit(value: float) -> float:
    """Clamp to [0, 1], mapping NaN to 0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def hsv_to_rgb(hue: float, saturation: float, value: float) -> Color:
    """
    Convert HSV to RGB using the six-sector hexagon decomposition.

    Args:
        hue: Hue angle in degrees. Wrapped into [0, 360).
        saturation: Saturation in [0, 1].
        value: Brightness in [0, 1].

    Returns:
        Color with channels in [0, 1].
    """
    h = (hue % 360.0) / 60.0
    c = value * saturation
    x = c * (1.0 - abs(h % 2.0 - 1.0))
    m = value - c

    if h < 1.0:
        r, g, b = c, x, 0.0
    elif h < 2.0:
        r, g, b = x, c, 0.0
    elif h < 3.0:
        r, g, b = 0.0, c, x
    elif h < 4.0:
        r, g, b = 0.0, x, c
    elif h < 5.0:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return Color(r + m, g + m, b + m)


def wmp_color(intensity: float) -> Color:
    """Green -> yellow -> red, never darker than MIN_VALUE."""
    intensity = _unit(intensity)
    hue = 120.0 - intensity * 120.0
    return hsv_to_rgb(hue, 1.0, max(MIN_VALUE, intensity))


def modern_color(intensity: float) -> Color:
    """Blue -> cyan below 0.5, cyan -> white above."""
    intensity = _unit(intensity)
    if intensity < 0.5:
        return Color(0.0, intensity * 2.0, 1.0)
    return Color((intensity - 0.5) * 2.0, 1.0, 1.0)


def color_for(intensity: float, scheme: str = WMP) -> Color:
    """
    Map an intensity to a color in the given scheme.

    Args:
        intensity: Value in [0, 1]. Out-of-range input is clamped.
        scheme: "wmp" or "modern".

    Returns:
        Color for the intensity.
    """
    if scheme == MODERN:
        return modern_color(intensity)
    return wmp_color(intensity)


def glow_color(level: float) -> Color:
    """
    Center-glow color: twice the hue sweep of the bars at full brightness.

    Levels past 0.5 continue around the hue circle into magenta.
    """
    level = _unit(level)
    return hsv_to_rgb(120.0 - level * 240.0, 1.0, 1.0)
