"""Prior weights over a candidate grid.

Three families are supported, selected explicitly by the caller:

  triangular   w(x) = min(x, 1 - x)        peaks at 0.5
  uniform      w(x) = 1                     flat
  beta(a, b)   w(x) = Beta(a, b) pdf at x   a, b > 0

Weights are always returned normalized to sum to 1 over the grid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Sequence, Union

import numpy as np
from scipy.stats import beta as beta_dist

from .errors import InvalidArgumentError
from .grid import validate_grid
from .weights import normalize, normalize_log

logger = logging.getLogger(__name__)


class PriorFamily(str, Enum):
    """Shape of the prior over the success probability."""
    TRIANGULAR = "triangular"
    UNIFORM = "uniform"
    BETA = "beta"


@dataclass(frozen=True)
class PriorSpec:
    """A prior family together with its shape parameters."""

    family: PriorFamily
    a: Optional[float] = None        # beta only
    b: Optional[float] = None        # beta only

    def __post_init__(self) -> None:
        object.__setattr__(self, "family", _coerce_family(self.family))
        if self.family is PriorFamily.BETA:
            a, b = _check_beta_params(self.a, self.b)
            object.__setattr__(self, "a", a)
            object.__setattr__(self, "b", b)

    @property
    def label(self) -> str:
        if self.family is PriorFamily.BETA:
            return f"beta({self.a:g},{self.b:g})"
        return self.family.value

    @classmethod
    def beta(cls, a: float, b: float) -> "PriorSpec":
        return cls(PriorFamily.BETA, a, b)


ParamsLike = Union[Mapping[str, float], Sequence[float], None]


def prior_weights(
    grid: Sequence[float],
    family: Union[PriorFamily, PriorSpec, str],
    params: ParamsLike = None,
) -> np.ndarray:
    """Normalized prior weight for each grid point.

    ``family`` may be a ``PriorFamily``, its string value, or a full
    ``PriorSpec``. For the beta family ``params`` is ``{"a": .., "b": ..}``
    or an ``(a, b)`` pair, unless a ``PriorSpec`` already carries them.
    """
    theta = validate_grid(grid)
    spec = _resolve_spec(family, params)

    if spec.family is PriorFamily.TRIANGULAR:
        w = normalize(np.minimum(theta, 1.0 - theta), "prior weights")
    elif spec.family is PriorFamily.UNIFORM:
        w = np.full(theta.size, 1.0 / theta.size)
    else:
        # Log space keeps large a, b from overflowing the density
        w = normalize_log(beta_dist.logpdf(theta, spec.a, spec.b))

    logger.debug("Prior %s over %d grid points", spec.label, theta.size)
    return w


def _resolve_spec(
    family: Union[PriorFamily, PriorSpec, str], params: ParamsLike
) -> PriorSpec:
    if isinstance(family, PriorSpec):
        if params is not None:
            raise InvalidArgumentError(
                f"Pass shape parameters on the PriorSpec or in params, not both: {family.label}"
            )
        return family

    fam = _coerce_family(family)
    if fam is not PriorFamily.BETA:
        return PriorSpec(fam)

    if params is None:
        raise InvalidArgumentError("Beta prior requires shape parameters a and b")
    if isinstance(params, Mapping):
        try:
            a, b = params["a"], params["b"]
        except KeyError as e:
            raise InvalidArgumentError(f"Beta prior missing parameter {e}") from None
    else:
        if len(params) != 2:
            raise InvalidArgumentError(
                f"Beta prior takes exactly two parameters, got {len(params)}"
            )
        a, b = params
    return PriorSpec(fam, a, b)


def _coerce_family(family) -> PriorFamily:
    if isinstance(family, PriorFamily):
        return family
    try:
        return PriorFamily(str(family).lower())
    except ValueError:
        options = [f.value for f in PriorFamily]
        raise InvalidArgumentError(
            f"Unknown prior family: {family!r}. Options: {options}"
        ) from None


def _check_beta_params(a, b) -> tuple[float, float]:
    if a is None or b is None:
        raise InvalidArgumentError("Beta prior requires shape parameters a and b")
    try:
        a, b = float(a), float(b)
    except (TypeError, ValueError):
        raise InvalidArgumentError(
            f"Beta shape parameters must be numbers: a={a!r}, b={b!r}"
        ) from None
    if not (np.isfinite(a) and np.isfinite(b)):
        raise InvalidArgumentError(f"Beta shape parameters must be finite: a={a}, b={b}")
    if a <= 0 or b <= 0:
        raise InvalidArgumentError(f"Beta shape parameters must be > 0: a={a}, b={b}")
    return a, b
