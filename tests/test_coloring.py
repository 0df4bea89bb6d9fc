import math

import numpy as np
import pytest
from stress_sim.coloring import (
    GREEN,
    ORANGE,
    RED,
    YELLOW,
    YELLOW_GREEN,
    Color,
    stress_color,
    stress_colors,
    to_hex,
)


def test_ramp_anchor_colors():
    assert stress_color(0.0) == GREEN
    assert stress_color(0.3) == YELLOW_GREEN
    assert stress_color(0.6) == YELLOW
    assert stress_color(1.0) == RED
    assert to_hex(stress_color(0.0)) == "#00ff00"
    assert to_hex(ORANGE) == "#ff8800"


def test_ramp_interpolates_within_bands():
    mid = stress_color(0.15)
    assert mid.r == pytest.approx(0.5 * 0x88 / 255)
    assert mid.g == pytest.approx(1.0)
    assert mid.b == 0.0

    near_failure = stress_color(0.999)
    assert near_failure.r == pytest.approx(1.0)
    assert near_failure.g == pytest.approx(ORANGE.g, abs=1e-2)


def test_red_channel_never_decreases():
    reds = [stress_color(float(r)).r for r in np.linspace(0.0, 1.2, 121)]
    assert all(b >= a for a, b in zip(reds, reds[1:]))


def test_failed_is_always_red():
    assert stress_color(0.0, failed=True) == RED
    assert stress_color(0.5, failed=True) == RED


def test_degenerate_ratios():
    """Defined everywhere: NaN and negatives read as 0, infinity as failure."""
    assert stress_color(math.nan) == GREEN
    assert stress_color(-3.0) == GREEN
    assert stress_color(math.inf) == RED


def test_stress_colors_batch():
    colors = stress_colors([0.0, 0.6, 1.5])
    assert colors.shape == (3, 3)
    assert np.allclose(colors, np.array([GREEN, YELLOW, RED]))
    assert np.allclose(stress_colors([0.0, 0.1], failed=True), np.array([RED, RED]))
    assert stress_colors([]).shape == (0, 3)


def test_color_from_hex():
    assert Color.from_hex(0xFF8800) == ORANGE
    assert to_hex(Color(1.2, -0.1, 0.5)) == "#ff0080"
