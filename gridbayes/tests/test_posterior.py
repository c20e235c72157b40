"""Tests for posterior weights, summaries and the full grid update.

Tests cover:
  - Normalization of the posterior
  - Uniform prior reproduces the normalized likelihood
  - Zero prior support stays zero
  - Degenerate marginal is reported, not hidden
  - Prior sensitivity and data dominance on the penalty-kick example
  - Marginal likelihood vs presentation normalization
"""

import math

import numpy as np
import pytest

from gridbayes.bayesian import (
    DegenerateMarginalError,
    GridPosterior,
    InvalidArgumentError,
    PriorFamily,
    PriorSpec,
    build_grid,
    credible_interval,
    likelihood_weights,
    marginal_likelihood,
    normalize,
    posterior,
    posterior_mean,
    posterior_mode,
    posterior_variance,
    prior_weights,
    update,
)


@pytest.fixture
def grid():
    return build_grid(10, 1 / 11, 10 / 11)


def _posterior_mean(grid, prior, successes, trials):
    like = likelihood_weights(grid, successes, trials)
    return posterior_mean(grid, posterior(prior, like))


# ============================================================
# posterior()
# ============================================================

class TestPosterior:

    @pytest.mark.parametrize("prior", [
        PriorSpec(PriorFamily.TRIANGULAR),
        PriorSpec(PriorFamily.UNIFORM),
        PriorSpec.beta(10, 10),
        PriorSpec.beta(2, 2),
    ])
    @pytest.mark.parametrize("successes,trials", [(6, 10), (0, 5), (30, 50), (0, 0)])
    def test_sums_to_one(self, grid, prior, successes, trials):
        post = posterior(prior_weights(grid, prior), likelihood_weights(grid, successes, trials))
        assert abs(post.sum() - 1.0) < 1e-9

    def test_uniform_prior_equals_normalized_likelihood(self, grid):
        uniform = prior_weights(grid, PriorFamily.UNIFORM)
        raw = likelihood_weights(grid, 6, 10, normalize=False)
        np.testing.assert_allclose(posterior(uniform, raw), normalize(raw), atol=1e-12)

    def test_uniform_prior_arbitrary_likelihood(self):
        rng = np.random.default_rng(3)
        like = rng.random(25)
        uniform = np.full(25, 1 / 25)
        np.testing.assert_allclose(posterior(uniform, like), like / like.sum(), atol=1e-12)

    def test_normalized_and_raw_likelihood_agree(self, grid):
        prior = prior_weights(grid, PriorFamily.TRIANGULAR)
        a = posterior(prior, likelihood_weights(grid, 6, 10))
        b = posterior(prior, likelihood_weights(grid, 6, 10, normalize=False))
        np.testing.assert_allclose(a, b, atol=1e-12)

    def test_zero_prior_stays_zero(self, grid):
        prior = prior_weights(grid, PriorFamily.UNIFORM)
        prior[[0, 3, 9]] = 0.0
        post = posterior(prior, likelihood_weights(grid, 9, 10))
        assert np.all(post[[0, 3, 9]] == 0.0)
        assert abs(post.sum() - 1.0) < 1e-9

    def test_accepts_unnormalized_inputs(self):
        post = posterior([2.0, 2.0], [1.0, 3.0])
        np.testing.assert_allclose(post, [0.25, 0.75])

    def test_does_not_mutate_inputs(self, grid):
        prior = prior_weights(grid, PriorFamily.TRIANGULAR)
        like = likelihood_weights(grid, 6, 10)
        prior_copy, like_copy = prior.copy(), like.copy()
        posterior(prior, like)
        np.testing.assert_array_equal(prior, prior_copy)
        np.testing.assert_array_equal(like, like_copy)

    def test_repeatable(self, grid):
        prior = prior_weights(grid, PriorFamily.TRIANGULAR)
        like = likelihood_weights(grid, 6, 10)
        np.testing.assert_array_equal(posterior(prior, like), posterior(prior, like))


class TestPosteriorErrors:

    def test_degenerate_marginal(self):
        with pytest.raises(DegenerateMarginalError):
            posterior([1.0, 0.0, 0.0], [0.0, 0.5, 0.5])

    def test_degenerate_is_not_invalid_argument(self):
        with pytest.raises(DegenerateMarginalError) as exc:
            posterior([0.0, 1.0], [1.0, 0.0])
        assert not isinstance(exc.value, InvalidArgumentError)

    def test_tiny_but_valid_marginal_is_not_degenerate(self):
        post = posterior([0.5, 0.5], [1e-300, 3e-300])
        np.testing.assert_allclose(post, [0.25, 0.75])

    def test_tiny_prior_and_likelihood_together_are_not_degenerate(self):
        post = posterior([1e-200, 1e-200], [1e-200, 3e-200])
        np.testing.assert_allclose(post, [0.25, 0.75])

    def test_tiny_weights_keep_zero_prior_zero(self):
        post = posterior([0.0, 1e-250, 1e-250], [1.0, 1e-150, 2e-150])
        assert post[0] == 0.0
        np.testing.assert_allclose(post[1:], [1 / 3, 2 / 3])

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgumentError):
            posterior([0.5, 0.5], [1.0, 0.0, 0.0])

    @pytest.mark.parametrize("prior,like", [
        ([0.5, -0.5], [1.0, 1.0]),
        ([0.5, 0.5], [float("nan"), 1.0]),
        ([0.5, 0.5], [float("inf"), 1.0]),
        ([], []),
    ])
    def test_invalid_weights(self, prior, like):
        with pytest.raises(InvalidArgumentError):
            posterior(prior, like)


# ============================================================
# Summaries
# ============================================================

class TestSummaries:

    def test_mean_is_weighted_sum(self):
        assert posterior_mean([0.2, 0.4, 0.8], [0.5, 0.25, 0.25]) == pytest.approx(0.4)

    def test_variance(self):
        assert posterior_variance([0.2, 0.8], [0.5, 0.5]) == pytest.approx(0.09)

    def test_point_mass_variance_is_zero(self):
        assert posterior_variance([0.2, 0.5, 0.8], [0.0, 1.0, 0.0]) == pytest.approx(0.0)

    def test_mode(self):
        assert posterior_mode([0.2, 0.5, 0.8], [0.1, 0.7, 0.2]) == 0.5

    def test_mode_ties_take_lowest(self):
        assert posterior_mode([0.2, 0.5, 0.8], [0.4, 0.2, 0.4]) == 0.2

    def test_mean_length_mismatch(self):
        with pytest.raises(InvalidArgumentError):
            posterior_mean([0.2, 0.5], [1.0])

    def test_credible_interval_contains_mean(self):
        grid = build_grid(99, 0.01, 0.99)
        post = update(grid, prior_weights(grid, PriorFamily.UNIFORM), 30, 50)
        lo, hi = credible_interval(grid, post.posterior, 0.95)
        assert lo < post.mean < hi
        assert lo < 0.6 < hi

    def test_wider_level_gives_wider_interval(self):
        grid = build_grid(99, 0.01, 0.99)
        post = update(grid, prior_weights(grid, PriorFamily.UNIFORM), 6, 10)
        lo50, hi50 = post.credible_interval(0.5)
        lo95, hi95 = post.credible_interval(0.95)
        assert lo95 <= lo50 and hi50 <= hi95
        assert hi95 - lo95 > hi50 - lo50

    def test_point_mass_interval(self):
        assert credible_interval([0.2, 0.5, 0.8], [0.0, 1.0, 0.0]) == (0.5, 0.5)

    @pytest.mark.parametrize("level", [0.0, 1.0, -0.5, 1.5])
    def test_credible_level_bounds(self, level):
        with pytest.raises(InvalidArgumentError):
            credible_interval([0.2, 0.8], [0.5, 0.5], level)


# ============================================================
# Penalty-kick scenarios
# ============================================================

class TestPenaltyKick:

    def test_triangular_prior_mean_between_prior_and_data(self, grid):
        prior = prior_weights(grid, PriorFamily.TRIANGULAR)
        mean = _posterior_mean(grid, prior, 6, 10)
        assert 0.5 < mean < 0.6

    def test_weaker_prior_sits_closer_to_data(self, grid):
        strong = _posterior_mean(grid, prior_weights(grid, PriorSpec.beta(10, 10)), 6, 10)
        weak = _posterior_mean(grid, prior_weights(grid, PriorSpec.beta(2, 2)), 6, 10)
        assert abs(weak - 0.6) < abs(strong - 0.6)

    def test_more_data_dominates_prior(self, grid):
        prior = prior_weights(grid, PriorSpec.beta(10, 10))
        small = _posterior_mean(grid, prior, 6, 10)
        large = _posterior_mean(grid, prior, 30, 50)
        assert abs(large - 0.6) < abs(small - 0.6)


# ============================================================
# update()
# ============================================================

class TestUpdate:

    def test_matches_posterior_of_weights(self, grid):
        prior = prior_weights(grid, PriorFamily.TRIANGULAR)
        result = update(grid, prior, 6, 10)
        assert isinstance(result, GridPosterior)
        np.testing.assert_allclose(
            result.posterior, posterior(prior, likelihood_weights(grid, 6, 10)), atol=1e-12
        )
        np.testing.assert_allclose(result.likelihood, likelihood_weights(grid, 6, 10))
        np.testing.assert_allclose(result.prior, prior)

    def test_log_marginal_likelihood_is_true_evidence(self, grid):
        prior = prior_weights(grid, PriorSpec.beta(2, 2))
        raw = likelihood_weights(grid, 6, 10, normalize=False)
        result = update(grid, prior, 6, 10)
        assert result.log_marginal_likelihood == pytest.approx(
            math.log(marginal_likelihood(prior, raw))
        )

    def test_evidence_under_uniform_prior_approaches_one_over_n_plus_one(self):
        # Integral of the binomial pmf over theta is 1 / (N + 1)
        fine = build_grid(999, 0.001, 0.999)
        result = update(fine, prior_weights(fine, PriorFamily.UNIFORM), 6, 10)
        assert math.exp(result.log_marginal_likelihood) == pytest.approx(1 / 11, rel=1e-2)

    def test_presentation_normalization_is_not_evidence(self):
        coarse = build_grid(4, 0.2, 0.5)
        prior = prior_weights(coarse, PriorFamily.UNIFORM)
        shown = marginal_likelihood(prior, likelihood_weights(coarse, 6, 10))
        true = marginal_likelihood(prior, likelihood_weights(coarse, 6, 10, normalize=False))
        assert shown == pytest.approx(0.25)
        assert shown != pytest.approx(true)

    def test_large_trials_does_not_underflow(self):
        fine = build_grid(999, 0.001, 0.999)
        result = update(fine, prior_weights(fine, PriorSpec.beta(10, 10)), 6000, 10_000)
        assert abs(result.posterior.sum() - 1.0) < 1e-9
        assert result.mean == pytest.approx(0.6, abs=2e-3)
        assert np.isfinite(result.log_marginal_likelihood)

    def test_zero_prior_stays_zero(self, grid):
        prior = prior_weights(grid, PriorFamily.UNIFORM)
        prior[:5] = 0.0
        result = update(grid, prior, 0, 20)
        assert np.all(result.posterior[:5] == 0.0)
        assert abs(result.posterior.sum() - 1.0) < 1e-9

    def test_unnormalized_prior_is_normalized(self, grid):
        result = update(grid, np.ones(10), 6, 10)
        np.testing.assert_allclose(result.prior, np.full(10, 0.1))

    def test_properties(self, grid):
        result = update(grid, prior_weights(grid, PriorFamily.TRIANGULAR), 6, 10)
        assert result.sd == pytest.approx(math.sqrt(result.variance))
        assert result.mode in grid
        assert result.observed_proportion == pytest.approx(0.6)

    def test_all_zero_prior_rejected(self, grid):
        with pytest.raises(InvalidArgumentError):
            update(grid, np.zeros(10), 6, 10)

    def test_prior_length_mismatch(self, grid):
        with pytest.raises(InvalidArgumentError):
            update(grid, np.ones(5), 6, 10)
