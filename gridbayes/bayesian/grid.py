"""Candidate grids of success probabilities."""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def build_grid(n: int, lower: float, upper: float) -> np.ndarray:
    """Evenly spaced grid of ``n`` points spanning ``[lower, upper]``.

    Both bounds must lie strictly inside (0, 1) so that every likelihood
    term ``log(theta)`` and ``log(1 - theta)`` is finite.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidArgumentError(f"Grid size must be an integer, got {n!r}")
    if n < 1:
        raise InvalidArgumentError(f"Grid size must be >= 1, got {n}")
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise InvalidArgumentError(f"Grid bounds must be finite: [{lower}, {upper}]")
    if lower >= upper:
        raise InvalidArgumentError(
            f"Lower bound must be below upper bound: [{lower}, {upper}]"
        )
    if lower <= 0.0 or upper >= 1.0:
        raise InvalidArgumentError(
            f"Grid bounds must lie strictly inside (0, 1): [{lower}, {upper}]"
        )

    grid = np.linspace(lower, upper, int(n))
    logger.debug("Built grid of %d points on [%.4f, %.4f]", n, lower, upper)
    return grid


def validate_grid(grid: Sequence[float]) -> np.ndarray:
    """Return ``grid`` as a float array, or raise if it is not a valid grid."""
    arr = np.asarray(grid, dtype=float)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"Grid must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidArgumentError("Grid must contain at least one point")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError("Grid contains non-finite values")

    outside = np.flatnonzero((arr <= 0.0) | (arr >= 1.0))
    if outside.size:
        i = int(outside[0])
        raise InvalidArgumentError(
            f"Grid point {i} = {arr[i]} is not strictly inside (0, 1)"
        )
    if arr.size > 1 and not np.all(np.diff(arr) > 0):
        raise InvalidArgumentError("Grid must be strictly increasing")
    return arr
