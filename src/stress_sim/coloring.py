# MIT License (see LICENSE)
"""
Von Mises-style stress color ramp.

A deterministic map from (stress ratio, failed) to RGB, modeled after but not
equal to a von Mises contour plot:

  ratio        color
  -----------  -----------------------------------------
  [0.0, 0.3)   green        -> yellow-green
  [0.3, 0.6)   yellow-green -> yellow
  [0.6, 1.0)   yellow       -> orange
  >= 1.0       red (also whenever failed is True)

Channels are floats in [0, 1].
"""
from __future__ import annotations
import math
from typing import NamedTuple

import numpy as np

from .util import lerp


class Color(NamedTuple):
    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: int) -> "Color":
        return cls(((value >> 16) & 0xFF) / 255.0, ((value >> 8) & 0xFF) / 255.0, (value & 0xFF) / 255.0)


GREEN = Color.from_hex(0x00FF00)
YELLOW_GREEN = Color.from_hex(0x88FF00)
YELLOW = Color.from_hex(0xFFFF00)
ORANGE = Color.from_hex(0xFF8800)
RED = Color.from_hex(0xFF0000)


def lerp_color(a: Color, b: Color, t: float) -> Color:
    return Color(lerp(a.r, b.r, t), lerp(a.g, b.g, t), lerp(a.b, b.b, t))


def stress_color(ratio: float, failed: bool = False) -> Color:
    """
    Color for a stress ratio.

    Negative and NaN ratios are treated as 0. Defined for every ratio,
    including +inf, and failed always gives RED.
    """
    if failed:
        return RED
    if math.isnan(ratio) or ratio < 0.0:
        ratio = 0.0
    if ratio >= 1.0:
        return RED
    if ratio < 0.3:
        return lerp_color(GREEN, YELLOW_GREEN, ratio / 0.3)
    if ratio < 0.6:
        return lerp_color(YELLOW_GREEN, YELLOW, (ratio - 0.3) / 0.3)
    return lerp_color(YELLOW, ORANGE, (ratio - 0.6) / 0.4)


def stress_colors(ratios, failed: bool = False) -> np.ndarray:
    """Colors for many ratios (e.g. a per-point field), shape (N, 3)."""
    flat = np.asarray(ratios, dtype=np.float64).ravel()
    return np.array([stress_color(float(r), failed) for r in flat], dtype=np.float64).reshape(-1, 3)


def to_hex(color: Color) -> str:
    """'#rrggbb' for a color, channels rounded to the nearest byte."""
    r, g, b = (int(round(max(0.0, min(1.0, c)) * 255)) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"
