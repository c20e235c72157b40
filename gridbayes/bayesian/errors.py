"""Exceptions raised by the grid updater."""

from __future__ import annotations


class GridBayesError(Exception):
    """Base class for all gridbayes errors."""


class InvalidArgumentError(GridBayesError, ValueError):
    """Malformed input: bad grid bounds, shape parameters or counts."""


class DegenerateMarginalError(GridBayesError, ArithmeticError):
    """The posterior normalizing constant is zero.

    No grid point has nonzero support under both the prior and the
    likelihood, so the update is impossible rather than merely extreme.
    """
