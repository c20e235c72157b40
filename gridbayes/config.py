"""Settings loaded from environment variables."""

import logging
import os
import sys

from pythonjsonlogger import jsonlogger

# ---------------------------------------------------------------------------
# Candidate grid
# ---------------------------------------------------------------------------
GRID_SIZE = int(os.environ.get("GRIDBAYES_GRID_SIZE", "10"))
GRID_LOWER = float(os.environ.get("GRIDBAYES_GRID_LOWER", str(1 / 11)))
GRID_UPPER = float(os.environ.get("GRIDBAYES_GRID_UPPER", str(10 / 11)))

# ---------------------------------------------------------------------------
# Posterior predictive sampling
# ---------------------------------------------------------------------------
PREDICTIVE_DRAWS = int(os.environ.get("GRIDBAYES_PREDICTIVE_DRAWS", "1000"))
RANDOM_SEED = int(os.environ.get("GRIDBAYES_SEED", "42"))

# ---------------------------------------------------------------------------
# Numerics
# ---------------------------------------------------------------------------
WEIGHT_SUM_TOL = 1e-9            # Max |sum(weights) - 1| accepted as normalized
CREDIBLE_LEVEL = 0.95

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def setup_logging() -> None:
    """Configure structured JSON logging."""
    handler = logging.StreamHandler(sys.stderr)
    formatter = jsonlogger.JsonFormatter(
        fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(LOG_LEVEL)
