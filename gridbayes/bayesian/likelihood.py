"""Binomial likelihood of observed successes over a candidate grid.

All computation happens in log space:

  log L(theta) = log C(N, k) + k log(theta) + (N - k) log(1 - theta)

The naive product theta^k (1 - theta)^(N - k) underflows to zero for N in
the hundreds once theta nears 0 or 1, so it is never formed directly.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import numpy as np
from scipy.special import gammaln

from .errors import InvalidArgumentError
from .grid import validate_grid
from .weights import normalize_log

logger = logging.getLogger(__name__)


def counts_from_outcomes(outcomes: Iterable) -> tuple[int, int]:
    """Convert a sequence of binary outcomes to ``(successes, trials)``.

    Each outcome must be 0/1 or a bool (1/True = success).
    """
    successes = 0
    trials = 0
    for i, o in enumerate(outcomes):
        if o is True or o is False:
            o = int(o)
        if o not in (0, 1):
            raise InvalidArgumentError(f"Outcome {i} is not binary: {o!r}")
        successes += int(o)
        trials += 1
    return successes, trials


def log_binomial_coefficient(trials: int, successes: int) -> float:
    """``log C(trials, successes)``."""
    _check_counts(successes, trials)
    return float(
        gammaln(trials + 1) - gammaln(successes + 1) - gammaln(trials - successes + 1)
    )


def log_likelihood(
    grid: Sequence[float],
    successes: int,
    trials: int,
    include_coefficient: bool = True,
) -> np.ndarray:
    """Per-grid-point binomial log probability of the observed counts."""
    theta = validate_grid(grid)
    _check_counts(successes, trials)

    failures = trials - successes
    # Grid points are strictly interior, so both logs are finite
    ll = successes * np.log(theta) + failures * np.log1p(-theta)
    if include_coefficient:
        ll = ll + log_binomial_coefficient(trials, successes)
    return ll


def likelihood_weights(
    grid: Sequence[float],
    successes: int,
    trials: int,
    normalize: bool = True,
) -> np.ndarray:
    """Binomial likelihood of ``successes`` in ``trials`` at each grid point.

    With ``normalize=True`` (the default) the weights are rescaled to sum to
    1 across the grid. That rescaling only makes the curve comparable to a
    prior and posterior on one plot: it depends on grid density and is not
    the normalizing constant of Bayes' rule (see
    ``posterior.marginal_likelihood``).

    With ``normalize=False`` the true binomial pmf values are returned,
    coefficient included. These can underflow for very large ``trials``.
    """
    ll = log_likelihood(grid, successes, trials, include_coefficient=not normalize)
    if normalize:
        w = normalize_log(ll)
    else:
        w = np.exp(ll)
    logger.debug(
        "Likelihood for %d/%d over %d grid points (normalized=%s)",
        successes, trials, ll.size, normalize,
    )
    return w


def _check_counts(successes: int, trials: int) -> None:
    for name, value in (("successes", successes), ("trials", trials)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
        if value < 0:
            raise InvalidArgumentError(f"{name} must be >= 0, got {value}")
    if successes > trials:
        raise InvalidArgumentError(
            f"successes ({successes}) cannot exceed trials ({trials})"
        )
