"""Discretized Bayesian updater for a binomial success probability.

Pipeline: candidate grid -> prior weights -> likelihood weights ->
posterior weights -> posterior mean / posterior predictive draws.
Every function is pure; the predictive sampler takes an explicit seed.
"""

from .errors import DegenerateMarginalError, GridBayesError, InvalidArgumentError
from .grid import build_grid, validate_grid
from .likelihood import (
    counts_from_outcomes,
    likelihood_weights,
    log_binomial_coefficient,
    log_likelihood,
)
from .posterior import (
    GridPosterior,
    credible_interval,
    marginal_likelihood,
    posterior,
    posterior_mean,
    posterior_mode,
    posterior_variance,
    update,
)
from .predictive import make_rng, posterior_predictive_sample, predictive_summary
from .priors import PriorFamily, PriorSpec, prior_weights
from .scenario import ScenarioConfig, ScenarioResult, compare_priors, run_scenario
from .weights import normalize

__all__ = [
    "GridBayesError",
    "InvalidArgumentError",
    "DegenerateMarginalError",
    "build_grid",
    "validate_grid",
    "PriorFamily",
    "PriorSpec",
    "prior_weights",
    "counts_from_outcomes",
    "log_binomial_coefficient",
    "log_likelihood",
    "likelihood_weights",
    "marginal_likelihood",
    "posterior",
    "posterior_mean",
    "posterior_variance",
    "posterior_mode",
    "credible_interval",
    "GridPosterior",
    "update",
    "make_rng",
    "posterior_predictive_sample",
    "predictive_summary",
    "ScenarioConfig",
    "ScenarioResult",
    "run_scenario",
    "compare_priors",
    "normalize",
]
