"""Configuration constants for the gametree package."""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    """Read an integer setting from the environment.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset or empty.

    Returns:
        The parsed integer, or the default.

    Raises:
        ValueError: If the variable is set to something that isn't an integer.
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


# Execution limits - configurable via environment variables
# Maximum number of nodes the interpreter visits before giving up on a game
MAX_DEPTH = _env_int("GAMETREE_MAX_DEPTH", 100_000)
# Seed used for chance nodes and mixed strategies when callers pass none
DEFAULT_SEED = _env_int("GAMETREE_SEED", None)

# Repetition limits
DEFAULT_REPETITIONS = 10
MAX_REPETITIONS = _env_int("GAMETREE_MAX_REPETITIONS", 1_000_000)

logger.debug(
    "gametree config: max_depth=%s seed=%s max_repetitions=%s",
    MAX_DEPTH, DEFAULT_SEED, MAX_REPETITIONS,
)
