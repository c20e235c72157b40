"""Command-line entry point: run one grid analysis and print the result."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Optional, Sequence

from gridbayes import config
from gridbayes.bayesian import (
    GridBayesError,
    PriorFamily,
    PriorSpec,
    ScenarioConfig,
    ScenarioResult,
    predictive_summary,
    run_scenario,
)
from gridbayes.config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridbayes",
        description="Grid posterior for a binomial success probability",
    )
    parser.add_argument("--successes", type=int, required=True,
                        help="Observed successes (e.g. goals scored)")
    parser.add_argument("--trials", type=int, required=True,
                        help="Observed trials (e.g. penalty kicks taken)")
    parser.add_argument("--prior", choices=[f.value for f in PriorFamily],
                        default=PriorFamily.TRIANGULAR.value,
                        help="Prior family")
    parser.add_argument("--a", type=float, default=None,
                        help="Beta prior shape a")
    parser.add_argument("--b", type=float, default=None,
                        help="Beta prior shape b")
    parser.add_argument("--grid-size", type=int, default=config.GRID_SIZE,
                        help="Number of candidate values")
    parser.add_argument("--lower", type=float, default=config.GRID_LOWER,
                        help="Smallest candidate value (exclusive of 0)")
    parser.add_argument("--upper", type=float, default=config.GRID_UPPER,
                        help="Largest candidate value (exclusive of 1)")
    parser.add_argument("--draws", type=int, default=config.PREDICTIVE_DRAWS,
                        help="Posterior predictive draws")
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED,
                        help="Seed for predictive sampling")
    parser.add_argument("--level", type=float, default=config.CREDIBLE_LEVEL,
                        help="Credible interval level")
    parser.add_argument("--json", action="store_true",
                        help="Emit a JSON object instead of a table")
    return parser


def summarize(result: ScenarioResult, level: float) -> dict:
    post = result.posterior
    lo, hi = post.credible_interval(level)
    pred = predictive_summary(result.predictive_draws, result.config.replicate_trials)
    return {
        "prior": result.config.prior.label,
        "successes": post.successes,
        "trials": post.trials,
        "posterior_mean": post.mean,
        "posterior_sd": post.sd,
        "posterior_mode": post.mode,
        "credible_level": level,
        "credible_lo": lo,
        "credible_hi": hi,
        "log_marginal_likelihood": post.log_marginal_likelihood,
        "predictive_mean": _finite_or_none(pred["mean"]),
        "predictive_std": _finite_or_none(pred["std"]),
        "table": result.table(),
    }


def _finite_or_none(value: float) -> Optional[float]:
    # JSON has no NaN; empty draws report null
    return value if math.isfinite(value) else None


def render_table(summary: dict) -> str:
    lines = [
        f"{'theta':>8} {'prior':>10} {'likelihood':>12} {'posterior':>10}",
        "=" * 43,
    ]
    for row in summary["table"]:
        lines.append(
            f"{row['theta']:>8.4f} {row['prior']:>10.4f} "
            f"{row['likelihood']:>12.4f} {row['posterior']:>10.4f}"
        )
    lines.append("")
    lines.append(f"prior            {summary['prior']}")
    lines.append(f"data             {summary['successes']}/{summary['trials']}")
    lines.append(f"posterior mean   {summary['posterior_mean']:.4f}")
    lines.append(f"posterior sd     {summary['posterior_sd']:.4f}")
    lines.append(f"posterior mode   {summary['posterior_mode']:.4f}")
    lines.append(
        f"{summary['credible_level']:.0%} interval     "
        f"[{summary['credible_lo']:.4f}, {summary['credible_hi']:.4f}]"
    )
    pred_mean = summary["predictive_mean"]
    lines.append(
        f"predictive mean  {pred_mean:.3f}" if pred_mean is not None
        else "predictive mean  n/a (no draws)"
    )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        family = PriorFamily(args.prior)
        if family is PriorFamily.BETA:
            prior = PriorSpec(family, args.a, args.b)
        else:
            prior = PriorSpec(family)
        cfg = ScenarioConfig(
            successes=args.successes,
            trials=args.trials,
            grid_size=args.grid_size,
            grid_lower=args.lower,
            grid_upper=args.upper,
            prior=prior,
            predictive_draws=args.draws,
            seed=args.seed,
        )
        result = run_scenario(cfg)
        summary = summarize(result, args.level)
    except GridBayesError as e:
        logger.error("analysis_failed: %s", e)
        return 2

    logger.info("analysis_complete", extra={"prior": prior.label,
                                            "posterior_mean": summary["posterior_mean"]})
    if args.json:
        print(json.dumps(summary, indent=2, allow_nan=False))
    else:
        print(render_table(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
