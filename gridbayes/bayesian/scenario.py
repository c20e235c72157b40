"""End-to-end analyses with every input passed explicitly.

A scenario is one self-contained update: grid, prior, data, posterior and
posterior predictive draws. Nothing carries over from one call to the next,
so prior-sensitivity comparisons are just several independent scenarios
sharing the same data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

import numpy as np

from .. import config
from .grid import build_grid
from .posterior import GridPosterior, update
from .predictive import posterior_predictive_sample
from .priors import PriorFamily, PriorSpec, prior_weights

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioConfig:
    """Inputs of one grid analysis."""

    # --- Data ---
    successes: int = 6
    trials: int = 10

    # --- Candidate grid ---
    grid_size: int = config.GRID_SIZE
    grid_lower: float = config.GRID_LOWER
    grid_upper: float = config.GRID_UPPER

    # --- Prior ---
    prior: PriorSpec = field(default_factory=lambda: PriorSpec(PriorFamily.TRIANGULAR))

    # --- Posterior predictive ---
    predictive_trials: Optional[int] = None   # defaults to `trials`
    predictive_draws: int = config.PREDICTIVE_DRAWS
    seed: int = config.RANDOM_SEED

    @property
    def replicate_trials(self) -> int:
        return self.trials if self.predictive_trials is None else self.predictive_trials


@dataclass
class ScenarioResult:
    """Everything one scenario produces."""

    config: ScenarioConfig
    posterior: GridPosterior
    predictive_draws: np.ndarray

    @property
    def grid(self) -> np.ndarray:
        return self.posterior.grid

    def table(self) -> list[dict]:
        """Rows of (theta, prior, likelihood, posterior) for display."""
        p = self.posterior
        return [
            {
                "theta": float(t),
                "prior": float(pr),
                "likelihood": float(lk),
                "posterior": float(po),
            }
            for t, pr, lk, po in zip(p.grid, p.prior, p.likelihood, p.posterior)
        ]


def run_scenario(cfg: ScenarioConfig) -> ScenarioResult:
    grid = build_grid(cfg.grid_size, cfg.grid_lower, cfg.grid_upper)
    prior = prior_weights(grid, cfg.prior)
    post = update(grid, prior, cfg.successes, cfg.trials)

    draws = posterior_predictive_sample(
        grid, post.posterior, cfg.replicate_trials, cfg.predictive_draws, cfg.seed
    )
    logger.debug(
        "Scenario %s %d/%d: posterior mean %.4f",
        cfg.prior.label, cfg.successes, cfg.trials, post.mean,
    )
    return ScenarioResult(config=cfg, posterior=post, predictive_draws=draws)


def compare_priors(
    cfg: ScenarioConfig, priors: Iterable[PriorSpec]
) -> dict[str, GridPosterior]:
    """Update each prior on the same data; results keyed by prior label."""
    results: dict[str, GridPosterior] = {}
    for spec in priors:
        results[spec.label] = run_scenario(replace(cfg, prior=spec)).posterior
    return results
