"""Posterior predictive simulation of future success counts.

Each draw picks one grid point with probability equal to its posterior
weight, then draws a binomial count with that success probability. The
draws therefore marginalize over the discrete grid only; they are not
samples from a continuous posterior.
"""

from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np

from .errors import InvalidArgumentError
from .grid import validate_grid
from .weights import check_same_length, normalize

logger = logging.getLogger(__name__)

SeedLike = Union[int, np.integer, np.random.Generator]


def make_rng(seed: SeedLike) -> np.random.Generator:
    """Explicitly seeded generator; ``None`` is refused so runs stay reproducible."""
    if isinstance(seed, np.random.Generator):
        return seed
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidArgumentError(f"seed must be an int or numpy Generator, got {seed!r}")
    if seed < 0:
        raise InvalidArgumentError(f"seed must be >= 0, got {seed}")
    return np.random.default_rng(int(seed))


def posterior_predictive_sample(
    grid: Sequence[float],
    posterior_w: Sequence[float],
    trials: int,
    draw_count: int,
    seed: SeedLike,
) -> np.ndarray:
    """``draw_count`` replicated success counts out of ``trials`` each."""
    theta = validate_grid(grid)
    w = normalize(posterior_w, "posterior weights")
    check_same_length(theta, w, ("grid", "posterior weights"))
    _check_count("trials", trials)
    _check_count("draw_count", draw_count)

    rng = make_rng(seed)
    if draw_count == 0:
        return np.empty(0, dtype=np.int64)

    # Categorical draw by inverse CDF over precomputed cumulative weights
    cdf = np.cumsum(w)
    cdf /= cdf[-1]
    idx = np.searchsorted(cdf, rng.random(draw_count), side="right")

    draws = rng.binomial(int(trials), theta[idx]).astype(np.int64)
    logger.debug("Drew %d predictive samples with %d trials each", draw_count, trials)
    return draws


def predictive_summary(draws: Sequence[int], trials: int) -> dict:
    """Mean, standard deviation and outcome frequencies of predictive draws."""
    arr = np.asarray(draws, dtype=np.int64)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"draws must be one-dimensional, got shape {arr.shape}")
    _check_count("trials", trials)
    if arr.size and (arr.min() < 0 or arr.max() > trials):
        raise InvalidArgumentError(f"draws must lie in [0, {trials}]")

    counts = np.bincount(arr, minlength=trials + 1)
    freq = counts / arr.size if arr.size else counts.astype(float)
    return {
        "n_draws": int(arr.size),
        "mean": float(arr.mean()) if arr.size else float("nan"),
        "std": float(arr.std()) if arr.size else float("nan"),
        "frequencies": freq,
    }


def _check_count(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
