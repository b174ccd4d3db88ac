"""Type definitions for the gametree package.

Players are identified by zero-based ``int`` indexes. Moves and utilities are
opaque to the core: moves only need ``==`` (and hashing when used as mapping
keys), and utilities only need ``+`` when a score is computed.
"""

import threading
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidPlayer

Move = Any
Utility = Any
PlayerIndex = int


def check_player(player: PlayerIndex, num_players: int) -> PlayerIndex:
    """Validate a player index against the number of players.

    Args:
        player: The index to check.
        num_players: Number of players in the game.

    Returns:
        The index, unchanged.

    Raises:
        InvalidPlayer: If the index is not an int in ``range(num_players)``.
    """
    if isinstance(player, bool) or not isinstance(player, int):
        raise InvalidPlayer(player, num_players)
    if not 0 <= player < num_players:
        raise InvalidPlayer(player, num_players)
    return player


@dataclass(frozen=True)
class Payoff:
    """One utility value per player, ordered by player index."""
    values: Tuple[Utility, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    @classmethod
    def zeros(cls, num_players: int) -> "Payoff":
        return cls(tuple(0 for _ in range(num_players)))

    @classmethod
    def coerce(cls, value: Any) -> "Payoff":
        """Accept a Payoff or any iterable of utilities."""
        if isinstance(value, Payoff):
            return value
        return cls(tuple(value))

    def for_player(self, player: PlayerIndex) -> Utility:
        return self.values[check_player(player, len(self.values))]

    @property
    def num_players(self) -> int:
        return len(self.values)

    def __getitem__(self, player: PlayerIndex) -> Utility:
        return self.for_player(player)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Utility]:
        return iter(self.values)

    def __add__(self, other: "Payoff") -> "Payoff":
        other = Payoff.coerce(other)
        if len(other) != len(self):
            raise ValueError(
                f"Cannot add payoffs for {len(self)} and {len(other)} players"
            )
        return Payoff(tuple(a + b for a, b in zip(self.values, other.values)))


@dataclass(frozen=True)
class MoveProfile:
    """One move per player, ordered by player index."""
    moves: Tuple[Move, ...]

    def __post_init__(self):
        object.__setattr__(self, "moves", tuple(self.moves))

    @property
    def num_players(self) -> int:
        return len(self.moves)

    def for_player(self, player: PlayerIndex) -> Move:
        return self.moves[check_player(player, len(self.moves))]

    def with_move(self, player: PlayerIndex, move: Move) -> "MoveProfile":
        """Return the profile where only ``player``'s move is replaced."""
        check_player(player, len(self.moves))
        moves = list(self.moves)
        moves[player] = move
        return MoveProfile(tuple(moves))

    def __getitem__(self, player: PlayerIndex) -> Move:
        return self.for_player(player)

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)


@dataclass(frozen=True)
class Ply:
    """A single move. ``player`` is None for moves made by chance."""
    player: Optional[PlayerIndex]
    move: Move

    @property
    def is_chance(self) -> bool:
        return self.player is None



_append_lock = threading.Lock()


class _AppendOnly:
    """Immutable view of the first ``length`` items of a shared list.

    Views made from one another by appending share a single backing list:
    appending to the newest view extends it in place, so a run of n appends
    costs O(n) overall. Appending to an older view copies its items first.
    A view never sees items appended after it was made.
    """
    __slots__ = ("_items", "_length")

    def __init__(self, items: Iterable[Any] = ()):
        self._items = list(items)
        self._length = len(self._items)

    def _append(self, item: Any):
        with _append_lock:
            items = self._items
            if len(items) != self._length:
                items = items[:self._length]
            items.append(item)
        view = object.__new__(type(self))
        view._items = items
        view._length = self._length + 1
        return view

    def _reversed(self) -> Iterator[Any]:
        items = self._items
        for index in range(self._length - 1, -1, -1):
            yield items[index]

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Any]:
        return islice(self._items, self._length)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._items[:self._length][index])
        return self._items[range(self._length)[index]]

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        if self._length != other._length:
            return False
        if self._items is other._items:
            return True
        return all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"


class Transcript(_AppendOnly):
    """Ordered record of every move made so far in one execution.

    Adding a move returns a new Transcript; the original is unchanged.
    """
    __slots__ = ()

    def __init__(self, plies: Iterable[Ply] = ()):
        super().__init__(plies)

    @property
    def plies(self) -> Tuple[Ply, ...]:
        return tuple(self)

    def add(self, ply: Ply) -> "Transcript":
        return self._append(ply)

    def add_player_move(self, player: PlayerIndex, move: Move) -> "Transcript":
        return self.add(Ply(player, move))

    def add_chance_move(self, move: Move) -> "Transcript":
        return self.add(Ply(None, move))

    def moves_by(self, player: Optional[PlayerIndex]) -> List[Move]:
        return [ply.move for ply in self if ply.player == player]

    def moves_by_player(self, player: PlayerIndex) -> List[Move]:
        return self.moves_by(player)

    def moves_by_chance(self) -> List[Move]:
        return self.moves_by(None)

    def first_move_by_player(self, player: PlayerIndex) -> Optional[Move]:
        for ply in self:
            if ply.player == player:
                return ply.move
        return None

    def last_move_by_player(self, player: PlayerIndex) -> Optional[Move]:
        for ply in self._reversed():
            if ply.player == player:
                return ply.move
        return None

    def to_profile(self, num_players: int) -> Optional[MoveProfile]:
        """Build a profile if every player moved exactly once, else None."""
        moves: List[List[Move]] = [[] for _ in range(num_players)]
        for ply in self:
            if ply.player is None or not 0 <= ply.player < num_players:
                continue
            if moves[ply.player]:
                return None
            moves[ply.player].append(ply.move)
        if any(not player_moves for player_moves in moves):
            return None
        return MoveProfile(tuple(player_moves[0] for player_moves in moves))


@dataclass(frozen=True)
class Outcome:
    """Result of one complete execution.

    ``profile`` is None when the game never produced exactly one move per
    player (e.g. sequential games where players move several times).
    ``history`` is only set for repeated games.
    """
    payoff: Payoff
    profile: Optional[MoveProfile] = None
    transcript: Transcript = field(default_factory=Transcript)
    history: Optional["History"] = None

    @property
    def num_players(self) -> int:
        return len(self.payoff)


class History(_AppendOnly):
    """Outcomes of the completed rounds of one repeated execution.

    Adding an outcome returns a new History, so a History handed to a
    strategy never changes underneath it.
    """
    __slots__ = ()

    def __init__(self, outcomes: Iterable[Outcome] = ()):
        super().__init__(outcomes)

    @property
    def outcomes(self) -> Tuple[Outcome, ...]:
        return tuple(self)

    def add(self, outcome: Outcome) -> "History":
        return self._append(outcome)

    def last(self) -> Optional[Outcome]:
        return self._items[self._length - 1] if self._length else None

    def score(self) -> Payoff:
        """Sum of all payoffs so far. Empty payoff if nothing was played."""
        if not self._length:
            return Payoff(())
        outcomes = iter(self)
        total = next(outcomes).payoff
        for outcome in outcomes:
            total = total + outcome.payoff
        return total

    def profiles(self) -> List[Optional[MoveProfile]]:
        return [outcome.profile for outcome in self]

    def moves_for_player(self, player: PlayerIndex) -> List[Move]:
        """Each round's move by ``player``, in round order.

        Rounds without a complete profile contribute the player's last move
        from the round transcript, if any.
        """
        moves = []
        for outcome in self:
            if outcome.profile is not None:
                moves.append(outcome.profile.for_player(player))
            else:
                last = outcome.transcript.last_move_by_player(player)
                if last is not None:
                    moves.append(last)
        return moves

    def payoffs_for_player(self, player: PlayerIndex) -> List[Utility]:
        return [outcome.payoff.for_player(player) for outcome in self]

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[Outcome]) -> "History":
        return cls(outcomes)
