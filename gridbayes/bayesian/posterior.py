"""Posterior weights over a candidate grid and summaries of them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.special import logsumexp

from ..config import CREDIBLE_LEVEL
from .errors import DegenerateMarginalError, InvalidArgumentError
from .grid import validate_grid
from .likelihood import log_likelihood
from .weights import as_weights, check_same_length, normalize, normalize_log

logger = logging.getLogger(__name__)


def marginal_likelihood(
    prior_w: Sequence[float], likelihood_w: Sequence[float]
) -> float:
    """Sum over the grid of prior x likelihood.

    With the unnormalized binomial likelihood this is p(data), the
    normalizing constant of Bayes' rule. With a presentation-normalized
    likelihood it is only proportional to it.
    """
    prior = as_weights(prior_w, "prior weights")
    like = as_weights(likelihood_w, "likelihood weights")
    check_same_length(prior, like, ("prior weights", "likelihood weights"))
    return float(np.dot(prior, like))


def posterior(prior_w: Sequence[float], likelihood_w: Sequence[float]) -> np.ndarray:
    """Elementwise prior x likelihood, renormalized to sum to 1.

    Raises ``DegenerateMarginalError`` when no grid point has support under
    both inputs. Indices with zero prior weight always get zero posterior.
    """
    prior = as_weights(prior_w, "prior weights")
    like = as_weights(likelihood_w, "likelihood weights")
    check_same_length(prior, like, ("prior weights", "likelihood weights"))

    if not np.any((prior > 0.0) & (like > 0.0)):
        raise DegenerateMarginalError(
            "Prior and likelihood share no support; posterior is undefined"
        )

    # Product formed in log space so tiny but nonzero weights never underflow
    with np.errstate(divide="ignore"):
        log_joint = np.log(prior) + np.log(like)
    logger.debug(
        "Posterior over %d points, %d supported", prior.size, np.isfinite(log_joint).sum()
    )
    return normalize_log(log_joint)


def posterior_mean(grid: Sequence[float], posterior_w: Sequence[float]) -> float:
    theta, w = _grid_and_weights(grid, posterior_w)
    return float(np.dot(theta, w))


def posterior_variance(grid: Sequence[float], posterior_w: Sequence[float]) -> float:
    theta, w = _grid_and_weights(grid, posterior_w)
    mean = np.dot(theta, w)
    return float(np.dot((theta - mean) ** 2, w))


def posterior_mode(grid: Sequence[float], posterior_w: Sequence[float]) -> float:
    """Grid point with the largest posterior weight (lowest index on ties)."""
    theta, w = _grid_and_weights(grid, posterior_w)
    return float(theta[int(np.argmax(w))])


def credible_interval(
    grid: Sequence[float],
    posterior_w: Sequence[float],
    level: float = CREDIBLE_LEVEL,
) -> tuple[float, float]:
    """Equal-tailed credible interval on the grid.

    Returns the first grid points at which the cumulative posterior mass
    reaches ``(1 - level) / 2`` and ``1 - (1 - level) / 2``. On a coarse
    grid the interval covers at least ``level`` of the mass.
    """
    if not 0.0 < level < 1.0:
        raise InvalidArgumentError(f"Credible level must be in (0, 1), got {level}")
    theta, w = _grid_and_weights(grid, posterior_w)
    cdf = np.cumsum(normalize(w, "posterior weights"))
    tail = (1.0 - level) / 2.0
    lo = int(np.searchsorted(cdf, tail, side="left"))
    hi = int(np.searchsorted(cdf, 1.0 - tail, side="left"))
    last = theta.size - 1
    return (float(theta[min(lo, last)]), float(theta[min(hi, last)]))


@dataclass
class GridPosterior:
    """Outcome of one grid update: every sequence a report would need."""

    grid: np.ndarray
    prior: np.ndarray
    likelihood: np.ndarray           # presentation-normalized
    posterior: np.ndarray
    log_marginal_likelihood: float   # log p(data), coefficient included
    successes: int
    trials: int

    @property
    def mean(self) -> float:
        return posterior_mean(self.grid, self.posterior)

    @property
    def variance(self) -> float:
        return posterior_variance(self.grid, self.posterior)

    @property
    def sd(self) -> float:
        return float(np.sqrt(self.variance))

    @property
    def mode(self) -> float:
        return posterior_mode(self.grid, self.posterior)

    @property
    def observed_proportion(self) -> float:
        return self.successes / self.trials if self.trials else float("nan")

    def credible_interval(self, level: float = CREDIBLE_LEVEL) -> tuple[float, float]:
        return credible_interval(self.grid, self.posterior, level)


def update(
    grid: Sequence[float],
    prior_w: Sequence[float],
    successes: int,
    trials: int,
) -> GridPosterior:
    """Full Bayesian update of ``prior_w`` on binomial data, in log space.

    Unlike ``posterior`` applied to precomputed weights, the product is
    formed as a sum of logs, so no step underflows however large ``trials``
    gets.
    """
    theta = validate_grid(grid)
    prior = normalize(prior_w, "prior weights")
    check_same_length(theta, prior, ("grid", "prior weights"))

    ll = log_likelihood(theta, successes, trials, include_coefficient=True)
    with np.errstate(divide="ignore"):
        log_prior = np.log(prior)
    log_joint = log_prior + ll
    if not np.any(np.isfinite(log_joint)):
        raise DegenerateMarginalError(
            "Prior and likelihood share no support; posterior is undefined"
        )

    log_evidence = float(logsumexp(log_joint))
    result = GridPosterior(
        grid=theta,
        prior=prior,
        likelihood=normalize_log(ll),
        posterior=normalize_log(log_joint),
        log_marginal_likelihood=log_evidence,
        successes=successes,
        trials=trials,
    )
    logger.debug(
        "Updated on %d/%d: mean=%.4f log_evidence=%.4f",
        successes, trials, result.mean, log_evidence,
    )
    return result


def _grid_and_weights(
    grid: Sequence[float], posterior_w: Sequence[float]
) -> tuple[np.ndarray, np.ndarray]:
    theta = validate_grid(grid)
    w = as_weights(posterior_w, "posterior weights")
    check_same_length(theta, w, ("grid", "posterior weights"))
    return theta, w
