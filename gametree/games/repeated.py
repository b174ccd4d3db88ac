"""Repeated games.

RepeatedGame turns any game into one played several times in a row. It does
not run anything itself: it rewrites the stage game's execution tree so that
each stage terminal node leads into a fresh copy of the stage tree, and every
node carries a RepeatedState exposing the outcomes of the rounds completed so
far. The stage game is never modified.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

from ..core.config import MAX_DEPTH, MAX_REPETITIONS
from ..core.errors import NonterminatingGame
from ..core.types import History, Move, PlayerIndex, Transcript
from ..engine.tree import Chance, ExecutionNode, Sequential, Simultaneous, Terminal
from .base import Game

logger = logging.getLogger(__name__)

StopCondition = Callable[[History], bool]


@dataclass(frozen=True)
class RepeatedState:
    """State visible at every node of a repeated game.

    Attributes:
        history: Outcomes of the rounds completed so far in this run.
        stage_state: The stage game's own state at this node.
        transcript: Moves made so far in the round in progress.
    """
    history: History = field(default_factory=History)
    stage_state: Any = None
    transcript: Transcript = field(default_factory=Transcript)

    @property
    def round(self) -> int:
        """Zero-based index of the round in progress."""
        return len(self.history)


class RepeatedGame(Game):
    """Play a stage game a fixed number of times, or until ``stop`` says so.

    Args:
        stage_game: The game to repeat.
        repetitions: Number of rounds (at least 1).
        stop: Called with the history after each round; the run ends when it
            returns True. Must be a pure function of the history.
        name: Optional display name.
        max_depth: Most consecutive rounds a stop-only run may complete
            without any move being made.

    The final terminal node's payoff is the cumulative score, its profile
    and transcript are the last round's and its history holds every round.
    """

    def __init__(
        self,
        stage_game: Game,
        repetitions: Optional[int] = None,
        stop: Optional[StopCondition] = None,
        name: str = "",
        max_depth: int = MAX_DEPTH,
    ):
        if repetitions is None and stop is None:
            raise ValueError("RepeatedGame needs a number of repetitions or a stop condition")
        if repetitions is not None and not 1 <= repetitions <= MAX_REPETITIONS:
            raise ValueError(
                f"Repetitions must be between 1 and {MAX_REPETITIONS}, got {repetitions}"
            )
        self.stage_game = stage_game
        self.repetitions = repetitions
        self.stop = stop
        self.max_depth = max_depth
        self.name = name or (f"repeated {stage_game.name}" if stage_game.name else "")

    @property
    def num_players(self) -> int:
        return self.stage_game.num_players

    def available_moves(self, player: PlayerIndex, state: Any = None) -> Tuple[Move, ...]:
        if isinstance(state, RepeatedState):
            state = state.stage_state
        return self.stage_game.available_moves(player, state)

    def is_finished(self, history: History) -> bool:
        if self.repetitions is not None and len(history) >= self.repetitions:
            return True
        return self.stop is not None and bool(self.stop(history))

    def execution(self) -> ExecutionNode:
        return self._lift(self.stage_game.execution(), History(), Transcript())

    def _lift(self, node: ExecutionNode, history: History, transcript: Transcript) -> ExecutionNode:
        """Rewrite one stage node into a node of the repeated game."""
        rounds_without_moves = 0
        while isinstance(node, Terminal):
            outcome = node.outcome(transcript, self.num_players)
            history = history.add(outcome)
            logger.debug("Round %d of %s complete: payoff=%s", len(history), self.name or "repeated game", outcome.payoff.values)

            if self.is_finished(history):
                return Terminal(
                    payoff=history.score(),
                    profile=outcome.profile,
                    history=history,
                    state=RepeatedState(history=history, stage_state=node.state, transcript=transcript),
                )

            # Stop-only runs over a stage that ends without any move could loop here forever
            if self.repetitions is None:
                rounds_without_moves += 1
                if rounds_without_moves > self.max_depth:
                    raise NonterminatingGame(self.max_depth, node.state)
            node = self.stage_game.execution()
            transcript = Transcript()

        state = RepeatedState(history=history, stage_state=node.state, transcript=transcript)

        if isinstance(node, Simultaneous):
            def next_simultaneous(moves: Tuple[Move, ...]) -> ExecutionNode:
                played = transcript
                for player, move in zip(node.players, moves):
                    played = played.add_player_move(player, move)
                return self._lift(node.follow(moves), history, played)

            return Simultaneous(players=node.players, moves=node.moves, next=next_simultaneous, state=state)

        if isinstance(node, Sequential):
            def next_sequential(move: Move) -> ExecutionNode:
                played = transcript.add_player_move(node.player, move)
                return self._lift(node.follow(move), history, played)

            return Sequential(player=node.player, moves=node.moves, next=next_sequential, state=state)

        if isinstance(node, Chance):
            def next_chance(move: Move) -> ExecutionNode:
                played = transcript.add_chance_move(move)
                return self._lift(node.follow(move), history, played)

            return Chance(distribution=node.distribution, next=next_chance, state=state)

        raise TypeError(f"Not an execution node: {node!r}")
