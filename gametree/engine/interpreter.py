"""Generic interpreter for execution trees.

``execute`` walks a tree from its root, asking strategies for moves at
decision nodes and sampling at chance nodes, until it reaches a terminal
node. It knows nothing about particular games: normal-form games, repeated
games and hand-built trees all run through the same loop.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..core.config import MAX_DEPTH
from ..core.errors import IllegalMove, InvalidPlayer, NoMoveAvailable, NonterminatingGame
from ..core.types import History, Move, Outcome, PlayerIndex, Transcript, check_player
from .distribution import make_rng
from .tree import Chance, ExecutionNode, Sequential, Simultaneous, Terminal, node_kind

logger = logging.getLogger(__name__)

_EMPTY_HISTORY = History()


@dataclass(frozen=True)
class DecisionContext:
    """Everything a strategy may look at when choosing a move.

    A context is built before any player at the same node has answered, so
    it never contains a co-participant's move from the current round.
    In repeated games ``transcript`` holds the moves of the round in
    progress only; earlier rounds are in ``history``.
    """
    player: PlayerIndex
    available_moves: Tuple[Move, ...]
    num_players: int
    state: Any = None
    transcript: Transcript = field(default_factory=Transcript)
    rng: Optional[np.random.Generator] = field(default=None, compare=False, repr=False)

    @property
    def history(self) -> History:
        """Completed rounds visible at this node (empty outside repeated games)."""
        history = getattr(self.state, "history", None)
        if isinstance(history, History):
            return history
        return _EMPTY_HISTORY

    @property
    def their_index(self) -> PlayerIndex:
        """The other player in a two-player game."""
        if self.num_players != 2:
            raise ValueError(f"their_index needs a 2-player game, not {self.num_players}")
        return 1 - self.player

    def is_valid_move(self, move: Move) -> bool:
        return move in self.available_moves


StrategyLike = Any
Strategies = Union[Sequence[StrategyLike], Mapping[PlayerIndex, StrategyLike]]


def _ask(strategy: StrategyLike, context: DecisionContext) -> Move:
    next_move: Callable[[DecisionContext], Move] = getattr(strategy, "next_move", strategy)
    return next_move(context)


def _strategy_for(strategies: Strategies, player: PlayerIndex, num_players: int, state: Any):
    check_player(player, num_players)
    if isinstance(strategies, Mapping):
        if player not in strategies:
            raise InvalidPlayer(player, state=state)
        return strategies[player]
    if player >= len(strategies):
        raise InvalidPlayer(player, state=state)
    return strategies[player]


def _check_strategies(strategies: Strategies, num_players: int) -> None:
    players = strategies.keys() if isinstance(strategies, Mapping) else range(len(strategies))
    for player in players:
        check_player(player, num_players)


def _state_transcript(node: ExecutionNode) -> Optional[Transcript]:
    transcript = getattr(getattr(node, "state", None), "transcript", None)
    return transcript if isinstance(transcript, Transcript) else None


def _state_round(node: ExecutionNode) -> Any:
    return getattr(getattr(node, "state", None), "round", None)


def execute(
    root: ExecutionNode,
    strategies: Strategies,
    num_players: int,
    rng: Optional[np.random.Generator] = None,
    max_depth: int = MAX_DEPTH,
) -> Outcome:
    """Walk an execution tree to a terminal node.

    Node states may scope the walk to rounds, the way RepeatedState does. A
    state with a ``transcript`` supplies the transcript from that node on,
    and a change in a state's ``round`` restarts the step count, so
    ``max_depth`` bounds each round rather than the whole run.

    Args:
        root: The node to start from.
        strategies: One strategy per player, as a sequence ordered by player
            index or a mapping from player index. A strategy is anything with
            a ``next_move(context)`` method, or a plain callable.
        num_players: Number of players in the game.
        rng: Generator for chance nodes and random strategies. A fresh one
            is made from GAMETREE_SEED (or OS entropy) if omitted.
        max_depth: Maximum number of nodes to visit (per round, for trees
            whose states carry a round).

    Returns:
        The Outcome of the terminal node reached.

    Raises:
        InvalidPlayer: A node names a player outside the game or without a
            strategy.
        IllegalMove: A strategy answered with a move outside its move set.
        UnmappedProfile: A node has no continuation for a legal answer.
        NoMoveAvailable: A player has no legal move, or a strategy declined.
        NonterminatingGame: No terminal node within ``max_depth`` steps.
        InvalidPayoff: The terminal payoff doesn't cover every player.
    """
    _check_strategies(strategies, num_players)
    if rng is None:
        rng = make_rng()

    node = root
    transcript = _state_transcript(root)
    if transcript is None:
        transcript = Transcript()
    current_round = _state_round(root)
    steps = 0

    while True:
        node_round = _state_round(node)
        if node_round != current_round:
            current_round = node_round
            steps = 0
        if steps >= max_depth:
            logger.debug("Giving up after %d steps at %s node", steps, node_kind(node))
            raise NonterminatingGame(max_depth, getattr(node, "state", None))
        steps += 1

        if isinstance(node, Terminal):
            outcome = node.outcome(transcript, num_players)
            logger.debug("Reached terminal after %d steps: payoff=%s", steps, outcome.payoff.values)
            return outcome

        if isinstance(node, Simultaneous):
            moves = _play_simultaneous(node, strategies, num_players, transcript, rng)
            child = node.follow(moves)
            played = _state_transcript(child)
            if played is None:
                played = transcript
                for player, move in zip(node.players, moves):
                    played = played.add_player_move(player, move)

        elif isinstance(node, Sequential):
            move = _play_sequential(node, strategies, num_players, transcript, rng)
            child = node.follow(move)
            played = _state_transcript(child)
            if played is None:
                played = transcript.add_player_move(node.player, move)

        elif isinstance(node, Chance):
            move = node.distribution.sample(rng)
            logger.debug("Chance drew %r", move)
            child = node.follow(move)
            played = _state_transcript(child)
            if played is None:
                played = transcript.add_chance_move(move)

        else:
            raise TypeError(f"Not an execution node: {node!r}")

        node = child
        transcript = played


def _play_simultaneous(
    node: Simultaneous,
    strategies: Strategies,
    num_players: int,
    transcript: Transcript,
    rng: np.random.Generator,
) -> Tuple[Move, ...]:
    # Contexts are all built up front from the same transcript snapshot
    contexts = [
        DecisionContext(
            player=player,
            available_moves=moves,
            num_players=num_players,
            state=node.state,
            transcript=transcript,
            rng=rng,
        )
        for player, moves in zip(node.players, node.moves)
    ]
    for context in contexts:
        if not context.available_moves:
            raise NoMoveAvailable(context.player, "empty move set", node.state)

    chosen: List[Move] = []
    for context in contexts:
        strategy = _strategy_for(strategies, context.player, num_players, node.state)
        chosen.append(_ask(strategy, context))

    for context, move in zip(contexts, chosen):
        if not context.is_valid_move(move):
            raise IllegalMove(context.player, move, node.state)

    logger.debug("Players %s moved %r", node.players, chosen)
    return tuple(chosen)


def _play_sequential(
    node: Sequential,
    strategies: Strategies,
    num_players: int,
    transcript: Transcript,
    rng: np.random.Generator,
) -> Move:
    strategy = _strategy_for(strategies, node.player, num_players, node.state)
    if not node.moves:
        raise NoMoveAvailable(node.player, "empty move set", node.state)

    context = DecisionContext(
        player=node.player,
        available_moves=node.moves,
        num_players=num_players,
        state=node.state,
        transcript=transcript,
        rng=rng,
    )
    move = _ask(strategy, context)
    if not context.is_valid_move(move):
        raise IllegalMove(node.player, move, node.state)

    logger.debug("Player %d moved %r", node.player, move)
    return move
