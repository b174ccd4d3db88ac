"""Games described directly by a hand-built execution tree."""

from typing import Any, Callable, Sequence, Tuple, Union

from ..core.types import Move, PlayerIndex
from ..engine.tree import ExecutionNode, is_node
from .base import Game


class TreeGame(Game):
    """A general game whose rules are an explicit execution tree.

    Args:
        num_players: Number of players.
        move_sets: Declared moves for each player. Individual nodes may offer
            a subset of these.
        root: The root node, or a zero-argument callable producing it. A
            callable is invoked on every ``execution()`` call and must build
            the same tree each time.
        name: Optional display name.
    """

    def __init__(
        self,
        num_players: int,
        move_sets: Sequence[Sequence[Move]],
        root: Union[ExecutionNode, Callable[[], ExecutionNode]],
        name: str = "",
    ):
        if num_players < 1:
            raise ValueError(f"A game needs at least one player, got {num_players}")
        if len(move_sets) != num_players:
            raise ValueError(f"Got {len(move_sets)} move sets for {num_players} players")
        if not is_node(root) and not callable(root):
            raise TypeError(f"root must be an execution node or a callable, got {root!r}")
        self._num_players = num_players
        self.move_sets: Tuple[Tuple[Move, ...], ...] = tuple(tuple(m) for m in move_sets)
        self._root = root
        self.name = name

    @property
    def num_players(self) -> int:
        return self._num_players

    def available_moves(self, player: PlayerIndex, state: Any = None) -> Tuple[Move, ...]:
        return self.move_sets[self.check_player(player)]

    def execution(self) -> ExecutionNode:
        if is_node(self._root):
            return self._root
        return self._root()
