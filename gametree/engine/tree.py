"""Execution tree nodes.

A game never runs itself. It describes how it unfolds as a tree of these
nodes, and the interpreter walks the tree. Transformers such as the repeated
game build new trees out of existing ones.

Continuations (``next``) are either a Mapping from the chosen move(s) to the
next node, or a callable returning the next node. Callables let trees be
built lazily, which is how infinite and repeated games stay finite in memory.
"""

from dataclasses import dataclass
from itertools import product
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from ..core.errors import InvalidPayoff, UnmappedProfile
from ..core.types import History, Move, MoveProfile, Outcome, Payoff, PlayerIndex, Transcript
from .distribution import Distribution

Continuation = Union[Mapping[Any, "ExecutionNode"], Callable[[Any], Optional["ExecutionNode"]]]


def _follow(next_fn: Continuation, key: Any, state: Any) -> "ExecutionNode":
    if isinstance(next_fn, Mapping):
        try:
            return next_fn[key]
        except KeyError:
            raise UnmappedProfile(key, state) from None
    node = next_fn(key)
    if node is None:
        raise UnmappedProfile(key, state)
    return node


@dataclass(frozen=True)
class Simultaneous:
    """Several players move at once.

    ``moves[i]`` is the move set of ``players[i]``. The continuation receives
    the tuple of chosen moves, aligned with ``players``.
    """
    players: Tuple[PlayerIndex, ...]
    moves: Tuple[Tuple[Move, ...], ...]
    next: Continuation
    state: Any = None

    def __post_init__(self):
        object.__setattr__(self, "players", tuple(self.players))
        object.__setattr__(self, "moves", tuple(tuple(m) for m in self.moves))
        if len(self.players) != len(self.moves):
            raise ValueError(
                f"Simultaneous node has {len(self.players)} players "
                f"but {len(self.moves)} move sets"
            )
        if len(set(self.players)) != len(self.players):
            raise ValueError(f"Duplicate players in simultaneous node: {self.players}")

    def moves_for(self, player: PlayerIndex) -> Tuple[Move, ...]:
        return self.moves[self.players.index(player)]

    def follow(self, moves: Tuple[Move, ...]) -> "ExecutionNode":
        return _follow(self.next, tuple(moves), self.state)


@dataclass(frozen=True)
class Sequential:
    """A single player moves."""
    player: PlayerIndex
    moves: Tuple[Move, ...]
    next: Continuation
    state: Any = None

    def __post_init__(self):
        object.__setattr__(self, "moves", tuple(self.moves))

    def follow(self, move: Move) -> "ExecutionNode":
        return _follow(self.next, move, self.state)


@dataclass(frozen=True)
class Chance:
    """A move drawn from a distribution."""
    distribution: Distribution
    next: Continuation
    state: Any = None

    def follow(self, move: Move) -> "ExecutionNode":
        return _follow(self.next, move, self.state)


@dataclass(frozen=True)
class Terminal:
    """End of the game.

    ``profile`` may be left unset, in which case the interpreter derives it
    from the moves made. ``history`` is set by repeated games.
    """
    payoff: Payoff
    profile: Optional[MoveProfile] = None
    history: Optional[History] = None
    state: Any = None

    def __post_init__(self):
        object.__setattr__(self, "payoff", Payoff.coerce(self.payoff))
        if self.profile is not None and not isinstance(self.profile, MoveProfile):
            object.__setattr__(self, "profile", MoveProfile(self.profile))

    def outcome(self, transcript: Transcript, num_players: int) -> Outcome:
        """Outcome of reaching this node after the moves in ``transcript``.

        The profile is the node's own if set, else derived from the
        transcript when every player moved exactly once.

        Raises:
            InvalidPayoff: If the payoff doesn't have one entry per player.
        """
        if len(self.payoff) != num_players:
            raise InvalidPayoff(self.payoff.values, num_players, self.state)
        profile = self.profile if self.profile is not None else transcript.to_profile(num_players)
        return Outcome(
            payoff=self.payoff,
            profile=profile,
            transcript=transcript,
            history=self.history,
        )


ExecutionNode = Union[Simultaneous, Sequential, Chance, Terminal]

NODE_TYPES = (Simultaneous, Sequential, Chance, Terminal)


def is_node(value: Any) -> bool:
    return isinstance(value, NODE_TYPES)


def node_kind(node: ExecutionNode) -> str:
    """Short lowercase label for a node, used in log lines."""
    return type(node).__name__.lower()


def simultaneous_all(
    move_sets: Tuple[Tuple[Move, ...], ...],
    next: Callable[[MoveProfile], Optional[ExecutionNode]],
    state: Any = None,
) -> Simultaneous:
    """Simultaneous node where every player moves, resolved by profile."""
    players = tuple(range(len(move_sets)))

    def resolve(moves: Tuple[Move, ...]) -> Optional[ExecutionNode]:
        return next(MoveProfile(moves))

    return Simultaneous(players=players, moves=move_sets, next=resolve, state=state)


def _children(node: ExecutionNode):
    """Yield (key, child) for every legal move out of ``node``."""
    if isinstance(node, Simultaneous):
        for moves in product(*node.moves):
            yield moves, node.follow(moves)
    elif isinstance(node, Sequential):
        for move in node.moves:
            yield move, node.follow(move)
    elif isinstance(node, Chance):
        for move in node.distribution.support():
            yield move, node.follow(move)


def same_structure(a: ExecutionNode, b: ExecutionNode, max_depth: int = 64) -> bool:
    """Check that two trees describe the same game, up to ``max_depth``.

    Nodes match when they are of the same kind, offer the same players,
    moves, distribution and state, and every child matches. Terminals match
    on payoff, profile and history. Branches deeper than ``max_depth`` are
    assumed to match.
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, Terminal):
        return (a.payoff, a.profile, a.history, a.state) == (b.payoff, b.profile, b.history, b.state)
    if a.state != b.state:
        return False
    if isinstance(a, Simultaneous) and (a.players, a.moves) != (b.players, b.moves):
        return False
    if isinstance(a, Sequential) and (a.player, a.moves) != (b.player, b.moves):
        return False
    if isinstance(a, Chance) and a.distribution != b.distribution:
        return False
    if max_depth <= 0:
        return True

    children_b = list(_children(b))
    for index, (key, child_a) in enumerate(_children(a)):
        key_b, child_b = children_b[index]
        if key != key_b or not same_structure(child_a, child_b, max_depth - 1):
            return False
    return True
