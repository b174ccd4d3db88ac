"""Game definitions.

Every game type is a Game subclass that describes itself as an execution
tree; the engine plays all of them the same way.
"""

from .base import Game
from .normal_form import NormalFormGame
from .matrix_factory import create_matrix_game
from .tree_game import TreeGame
from .state_based import StateBasedGame
from .repeated import RepeatedGame, RepeatedState

__all__ = [
    "Game",
    "NormalFormGame",
    "create_matrix_game",
    "TreeGame",
    "StateBasedGame",
    "RepeatedGame",
    "RepeatedState",
]
