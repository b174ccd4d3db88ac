"""gametree: define abstract games and execute them to observe outcomes.

Games describe themselves as execution trees; a single interpreter plays
every kind of game, and transformers such as RepeatedGame build new games by
rewriting those trees.
"""

from .core import (
    ExecutionError,
    History,
    IllegalMove,
    InvalidPayoff,
    InvalidPlayer,
    MoveProfile,
    NoMoveAvailable,
    NonterminatingGame,
    Outcome,
    Payoff,
    Ply,
    Transcript,
    UnmappedProfile,
)
from .engine import (
    Chance,
    DecisionContext,
    Distribution,
    RepeatedResult,
    Sequential,
    Simultaneous,
    Terminal,
    execute,
    make_rng,
    play,
    play_repeated,
    same_structure,
)
from .games import (
    Game,
    NormalFormGame,
    RepeatedGame,
    RepeatedState,
    StateBasedGame,
    TreeGame,
    create_matrix_game,
)
from .strategies import FunctionStrategy, Strategy, as_strategy

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ExecutionError",
    "InvalidPlayer",
    "IllegalMove",
    "UnmappedProfile",
    "NonterminatingGame",
    "NoMoveAvailable",
    "InvalidPayoff",
    # Types
    "Payoff",
    "MoveProfile",
    "Ply",
    "Transcript",
    "Outcome",
    "History",
    # Engine
    "Simultaneous",
    "Sequential",
    "Chance",
    "Terminal",
    "Distribution",
    "DecisionContext",
    "make_rng",
    "execute",
    "same_structure",
    "play",
    "play_repeated",
    "RepeatedResult",
    # Games
    "Game",
    "NormalFormGame",
    "TreeGame",
    "StateBasedGame",
    "RepeatedGame",
    "RepeatedState",
    "create_matrix_game",
    # Strategies
    "Strategy",
    "FunctionStrategy",
    "as_strategy",
]
