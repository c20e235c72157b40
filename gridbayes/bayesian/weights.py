"""Validation and normalization of per-grid-point weight vectors."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import InvalidArgumentError


def as_weights(weights: Sequence[float], name: str = "weights") -> np.ndarray:
    """Return ``weights`` as a 1-D float array of finite, non-negative values."""
    arr = np.asarray(weights, dtype=float)
    if arr.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidArgumentError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise InvalidArgumentError(f"{name} contain non-finite values")
    if np.any(arr < 0.0):
        raise InvalidArgumentError(f"{name} contain negative values")
    return arr


def normalize(weights: Sequence[float], name: str = "weights") -> np.ndarray:
    """Scale non-negative weights so they sum to 1."""
    arr = as_weights(weights, name)
    total = arr.sum()
    if total <= 0.0:
        raise InvalidArgumentError(f"{name} are all zero")
    return arr / total


def normalize_log(log_weights: np.ndarray) -> np.ndarray:
    """Exponentiate log-weights after subtracting the max, then normalize.

    Entries equal to ``-inf`` map to exactly zero.
    """
    peak = np.max(log_weights)
    if not np.isfinite(peak):
        raise InvalidArgumentError("All log-weights are -inf")
    w = np.exp(log_weights - peak)
    return w / w.sum()


def check_same_length(a: np.ndarray, b: np.ndarray, names: tuple[str, str]) -> None:
    if a.shape != b.shape:
        raise InvalidArgumentError(
            f"{names[0]} and {names[1]} differ in length: {a.size} vs {b.size}"
        )
