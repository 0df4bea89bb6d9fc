# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Small helpers shared by the validator and the stress kernels. Vectors are
3D numpy arrays of shape (3,) with y pointing up.
"""
from __future__ import annotations
import math
import os

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets positions, sizes and directions be given as tuples or lists.
    """
    return np.array(x, dtype=np.float64)


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a vector."""
    return float(np.sqrt(np.dot(v, v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps (or |v| is not finite) to avoid
    division by zero.
    """
    n = norm(v)
    if not math.isfinite(n) or n < eps:
        return np.zeros_like(v, dtype=np.float64)
    return v / n


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation a + (b - a) * t."""
    return a + (b - a) * t


def env_float(name: str, default: float) -> float:
    """
    Read a float override from the environment.

    Unset or empty variables give the default. A value that does not parse
    as a float raises ValueError naming the variable.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
