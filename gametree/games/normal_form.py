"""Normal-form games.

A normal-form game is represented as a function from move profiles to
payoffs rather than as a matrix. That supports any number of players and any
move or utility types, at the cost of computing each payoff on demand.
"""

import logging
from itertools import product
from typing import Any, Callable, Dict, Iterator, List, Mapping, Sequence, Tuple

from ..core.errors import IllegalMove, UnmappedProfile
from ..core.types import Move, MoveProfile, Payoff, PlayerIndex, Utility
from ..engine.tree import ExecutionNode, Simultaneous, Terminal
from .base import Game

logger = logging.getLogger(__name__)

PayoffFn = Callable[[MoveProfile], Any]


class NormalFormGame(Game):
    """One-shot game where all players move simultaneously.

    Args:
        move_sets: Declared moves for each player, ordered by player index.
        payoff_fn: Total function from a complete MoveProfile to one utility
            per player (a Payoff or any sequence). Returning None marks the
            profile as unmapped.
        name: Optional display name.
    """

    def __init__(self, move_sets: Sequence[Sequence[Move]], payoff_fn: PayoffFn, name: str = ""):
        if not move_sets:
            raise ValueError("A normal-form game needs at least one player")
        self.move_sets: Tuple[Tuple[Move, ...], ...] = tuple(tuple(moves) for moves in move_sets)
        for player, moves in enumerate(self.move_sets):
            if not moves:
                raise ValueError(f"Player {player} has no moves")
        self.payoff_fn = payoff_fn
        self.name = name

    @property
    def num_players(self) -> int:
        return len(self.move_sets)

    def available_moves(self, player: PlayerIndex, state: Any = None) -> Tuple[Move, ...]:
        return self.move_sets[self.check_player(player)]

    def execution(self) -> Simultaneous:
        return Simultaneous(players=tuple(self.players()), moves=self.move_sets, next=self._resolve)

    def _resolve(self, moves: Tuple[Move, ...]) -> ExecutionNode:
        profile = MoveProfile(moves)
        payoff = self.payoff(profile)
        logger.debug("%s: %s -> %s", self.name or "normal-form game", profile.moves, payoff.values)
        return Terminal(payoff=payoff, profile=profile)

    def is_valid_profile(self, profile: MoveProfile) -> bool:
        if len(profile) != self.num_players:
            return False
        return all(move in moves for move, moves in zip(profile, self.move_sets))

    def payoff(self, profile: MoveProfile) -> Payoff:
        """Compute the payoff for a complete profile.

        Raises:
            IllegalMove: If a move is outside its player's declared set.
            UnmappedProfile: If ``payoff_fn`` returns None.
        """
        if not isinstance(profile, MoveProfile):
            profile = MoveProfile(profile)
        if len(profile) != self.num_players:
            raise IllegalMove(None, profile.moves)
        for player, (move, moves) in enumerate(zip(profile, self.move_sets)):
            if move not in moves:
                raise IllegalMove(player, move)

        result = self.payoff_fn(profile)
        if result is None:
            raise UnmappedProfile(profile.moves)
        return Payoff.coerce(result)

    def possible_profiles(self) -> Iterator[MoveProfile]:
        """Lazily enumerate every profile in the cross-product of move sets."""
        for moves in product(*self.move_sets):
            yield MoveProfile(moves)

    def dimensions(self) -> Tuple[int, ...]:
        return tuple(len(moves) for moves in self.move_sets)

    def is_zero_sum(self) -> bool:
        """True if every profile's utilities sum to zero."""
        return all(sum(self.payoff(profile)) == 0 for profile in self.possible_profiles())

    # --- Constructors ---

    @classmethod
    def from_payoff_map(
        cls,
        move_sets: Sequence[Sequence[Move]],
        payoffs: Mapping[Tuple[Move, ...], Sequence[Utility]],
        name: str = "",
    ) -> "NormalFormGame":
        """Build a game from an explicit table of profile -> payoff.

        Raises:
            ValueError: If the table misses a profile, or an entry has the
                wrong number of utilities.
        """
        num_players = len(move_sets)
        table: Dict[Tuple[Move, ...], Payoff] = {}
        for moves, utilities in payoffs.items():
            utilities = Payoff.coerce(utilities)
            if len(utilities) != num_players:
                raise ValueError(
                    f"Payoff {utilities.values} for {moves} has {len(utilities)} entries, "
                    f"expected {num_players}"
                )
            table[tuple(moves)] = utilities

        missing = [moves for moves in product(*move_sets) if moves not in table]
        if missing:
            raise ValueError(f"Payoff table is missing {len(missing)} profile(s), e.g. {missing[:3]}")

        def payoff_fn(profile: MoveProfile) -> Payoff:
            return table[profile.moves]

        return cls(move_sets, payoff_fn, name=name)

    @classmethod
    def from_utility_fns(
        cls,
        move_sets: Sequence[Sequence[Move]],
        utility_fns: Sequence[Callable[[MoveProfile], Utility]],
        name: str = "",
    ) -> "NormalFormGame":
        """Build a game from one utility function per player."""
        if len(utility_fns) != len(move_sets):
            raise ValueError(
                f"Got {len(utility_fns)} utility functions for {len(move_sets)} players"
            )
        fns = tuple(utility_fns)

        def payoff_fn(profile: MoveProfile) -> Payoff:
            return Payoff(tuple(fn(profile) for fn in fns))

        return cls(move_sets, payoff_fn, name=name)

    @classmethod
    def symmetric(cls, moves: Sequence[Move], utilities: Sequence[Utility], name: str = "") -> "NormalFormGame":
        """Two-player symmetric game.

        ``utilities`` are the row player's utilities in row-major order; the
        column player's utility for (i, j) is the row player's for (j, i).
        """
        moves = tuple(moves)
        size = len(moves)
        if len(utilities) != size * size:
            raise ValueError(f"Expected {size * size} utilities for {size} moves, got {len(utilities)}")
        table = {}
        for i, row_move in enumerate(moves):
            for j, col_move in enumerate(moves):
                table[(row_move, col_move)] = (utilities[i * size + j], utilities[j * size + i])
        return cls.from_payoff_map([moves, moves], table, name=name)

    @classmethod
    def bimatrix(
        cls,
        row_moves: Sequence[Move],
        col_moves: Sequence[Move],
        row_utilities: Sequence[Sequence[Utility]],
        col_utilities: Sequence[Sequence[Utility]],
        name: str = "",
    ) -> "NormalFormGame":
        """Two-player game from separate row and column utility matrices."""
        table = {}
        for i, row_move in enumerate(row_moves):
            for j, col_move in enumerate(col_moves):
                try:
                    table[(row_move, col_move)] = (row_utilities[i][j], col_utilities[i][j])
                except IndexError:
                    raise ValueError(
                        f"Utility matrices must be {len(row_moves)}x{len(col_moves)}"
                    ) from None
        return cls.from_payoff_map([row_moves, col_moves], table, name=name)

    @classmethod
    def matrix(
        cls,
        row_moves: Sequence[Move],
        col_moves: Sequence[Move],
        row_utilities: Sequence[Sequence[Utility]],
        name: str = "",
    ) -> "NormalFormGame":
        """Two-player zero-sum game; the column player gets the negation."""
        col_utilities: List[List[Utility]] = [[-u for u in row] for row in row_utilities]
        return cls.bimatrix(row_moves, col_moves, row_utilities, col_utilities, name=name)
