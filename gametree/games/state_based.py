"""Turn-based games defined by a state machine.

A StateBasedGame describes its rules as functions of a game state: whose
turn it is, which moves are legal, how a move changes the state and when the
game is over. The execution tree is generated lazily from those functions,
one Sequential node per turn, each carrying the state it was built from.
"""

import logging
from abc import abstractmethod
from typing import Any, Optional, Sequence, Tuple

from ..core.types import Move, PlayerIndex, Utility
from ..engine.tree import ExecutionNode, Sequential, Terminal
from .base import Game

logger = logging.getLogger(__name__)


class StateBasedGame(Game):
    """Base class for sequential games played over an explicit state.

    Subclasses implement ``initial_state``, ``next_turn``, ``legal_moves``,
    ``next_state`` and ``check_final_state``. States should be immutable:
    ``next_state`` returns a new state instead of changing the old one.
    """

    @abstractmethod
    def initial_state(self) -> Any:
        """State before the first move."""
        ...

    @abstractmethod
    def next_turn(self, state: Any) -> PlayerIndex:
        """Player whose turn it is in ``state``."""
        ...

    @abstractmethod
    def legal_moves(self, state: Any, player: PlayerIndex) -> Sequence[Move]:
        """Moves ``player`` may make in ``state``."""
        ...

    @abstractmethod
    def next_state(self, state: Any, player: PlayerIndex, move: Move) -> Any:
        """State after ``player`` makes ``move`` in ``state``.

        Only called with moves from ``legal_moves``. May raise an
        ExecutionError to abort the game.
        """
        ...

    @abstractmethod
    def check_final_state(self, state: Any, player: PlayerIndex) -> Optional[Sequence[Utility]]:
        """Payoff if the game is over in ``state``, else None.

        Args:
            state: The state to check.
            player: Whose turn it would be in ``state``.
        """
        ...

    def is_final_state(self, state: Any, player: PlayerIndex) -> bool:
        return self.check_final_state(state, player) is not None

    def available_moves(self, player: PlayerIndex, state: Any = None) -> Tuple[Move, ...]:
        """Moves for ``player`` in ``state`` (the initial state if None)."""
        self.check_player(player)
        if state is None:
            state = self.initial_state()
        return tuple(self.legal_moves(state, player))

    def execution(self) -> ExecutionNode:
        return self._node(self.initial_state())

    def _node(self, state: Any) -> ExecutionNode:
        player = self.next_turn(state)
        payoff = self.check_final_state(state, player)
        if payoff is not None:
            logger.debug("%s reached a final state: payoff=%s", self.name or type(self).__name__, payoff)
            return Terminal(payoff=payoff, state=state)

        def advance(move: Move) -> ExecutionNode:
            return self._node(self.next_state(state, player, move))

        return Sequential(
            player=player,
            moves=tuple(self.legal_moves(state, player)),
            next=advance,
            state=state,
        )
