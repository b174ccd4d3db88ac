"""Core module for the gametree package."""

from .config import (
    MAX_DEPTH,
    DEFAULT_SEED,
    DEFAULT_REPETITIONS,
    MAX_REPETITIONS,
)
from .errors import (
    ExecutionError,
    InvalidPlayer,
    IllegalMove,
    UnmappedProfile,
    NonterminatingGame,
    NoMoveAvailable,
    InvalidPayoff,
)
from .types import (
    Move,
    Utility,
    PlayerIndex,
    Payoff,
    MoveProfile,
    Ply,
    Transcript,
    Outcome,
    History,
    check_player,
)

__all__ = [
    # Configuration constants
    "MAX_DEPTH",
    "DEFAULT_SEED",
    "DEFAULT_REPETITIONS",
    "MAX_REPETITIONS",
    # Errors
    "ExecutionError",
    "InvalidPlayer",
    "IllegalMove",
    "UnmappedProfile",
    "NonterminatingGame",
    "NoMoveAvailable",
    "InvalidPayoff",
    # Types
    "Move",
    "Utility",
    "PlayerIndex",
    "Payoff",
    "MoveProfile",
    "Ply",
    "Transcript",
    "Outcome",
    "History",
    # Utilities
    "check_player",
]
