"""Abstract game definition.

A Game is stateless data describing rules. It never runs itself: it produces
an execution tree that the interpreter walks. ``execution()`` must describe
the same tree every time it's called, because transformers like RepeatedGame
call it once per round.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Tuple

from ..core.types import History, Move, PlayerIndex, check_player
from ..engine.tree import ExecutionNode


class Game(ABC):
    """Base class for every game type."""

    name: str = ""

    @property
    @abstractmethod
    def num_players(self) -> int:
        """Number of players, fixed for the lifetime of the game."""
        ...

    @abstractmethod
    def available_moves(self, player: PlayerIndex, state: Any = None) -> Tuple[Move, ...]:
        """Moves ``player`` may choose from at a decision point.

        Args:
            player: Zero-based player index.
            state: Game state at the decision point, if the game has one.

        Raises:
            InvalidPlayer: If ``player`` is out of range.
        """
        ...

    @abstractmethod
    def execution(self) -> ExecutionNode:
        """Root of the execution tree for a fresh play of this game."""
        ...

    def players(self) -> range:
        return range(self.num_players)

    def check_player(self, player: PlayerIndex) -> PlayerIndex:
        return check_player(player, self.num_players)

    def is_valid_move(self, player: PlayerIndex, move: Move, state: Any = None) -> bool:
        return move in self.available_moves(player, state)

    def play(self, strategies, **kwargs):
        """Play this game once. See ``gametree.engine.play``."""
        from ..engine.runner import play

        return play(self, strategies, **kwargs)

    def repeated(
        self,
        repetitions: Optional[int] = None,
        stop: Optional[Callable[[History], bool]] = None,
    ) -> "Game":
        """Wrap this game in a RepeatedGame."""
        from .repeated import RepeatedGame

        return RepeatedGame(self, repetitions=repetitions, stop=stop)

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<{type(self).__name__}{label} players={self.num_players}>"
