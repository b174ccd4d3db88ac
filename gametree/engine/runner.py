"""Entry points for playing games."""

import logging
from typing import Callable, NamedTuple, Optional

import numpy as np

from ..core.config import DEFAULT_REPETITIONS, MAX_DEPTH
from ..core.types import History, Outcome, Payoff
from .distribution import make_rng
from .interpreter import Strategies, execute

logger = logging.getLogger(__name__)


class RepeatedResult(NamedTuple):
    """Result of a repeated execution.

    Unpacks as ``(outcome, history)`` where ``outcome`` is the last round's
    Outcome and ``history`` holds every round in order.
    """
    outcome: Outcome
    history: History

    @property
    def score(self) -> Payoff:
        """Cumulative payoff over all rounds."""
        return self.history.score()

    @property
    def rounds(self) -> int:
        return len(self.history)


def play(
    game,
    strategies: Strategies,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    max_depth: int = MAX_DEPTH,
) -> Outcome:
    """Play a game once.

    Args:
        game: Any Game.
        strategies: One strategy per player (sequence or mapping by index).
        seed: Seed for a fresh generator. Ignored if ``rng`` is given.
        rng: Generator for chance nodes and random strategies.
        max_depth: Maximum number of tree nodes to visit.

    Returns:
        The Outcome of the game.

    Raises:
        ExecutionError: Any failure aborts the execution; no partial outcome
            is returned.
    """
    if rng is None:
        rng = make_rng(seed)
    name = getattr(game, "name", "") or type(game).__name__
    logger.debug("Playing %s with %d players", name, game.num_players)

    outcome = execute(
        game.execution(),
        strategies,
        game.num_players,
        rng=rng,
        max_depth=max_depth,
    )
    logger.debug("%s finished: payoff=%s", name, outcome.payoff.values)
    return outcome


def play_repeated(
    game,
    strategies: Strategies,
    repetitions: Optional[int] = None,
    stop: Optional[Callable[[History], bool]] = None,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    max_depth: int = MAX_DEPTH,
) -> RepeatedResult:
    """Play a game several times, exposing the history to strategies.

    The game is wrapped in a RepeatedGame and executed as a single tree, so
    strategies keep their internal state from round to round.

    Args:
        game: The stage game.
        strategies: One strategy per player.
        repetitions: Number of rounds. Defaults to DEFAULT_REPETITIONS when
            ``stop`` isn't given either.
        stop: Called with the history after each round; the run ends when it
            returns True.
        seed: Seed for a fresh generator. Ignored if ``rng`` is given.
        rng: Generator for chance nodes and random strategies.
        max_depth: Maximum number of tree nodes to visit in any one round.

    Returns:
        RepeatedResult with the last round's outcome and the full history.
    """
    from ..games.repeated import RepeatedGame

    if repetitions is None and stop is None:
        repetitions = DEFAULT_REPETITIONS
    repeated = RepeatedGame(game, repetitions=repetitions, stop=stop, max_depth=max_depth)
    outcome = play(repeated, strategies, seed=seed, rng=rng, max_depth=max_depth)
    history = outcome.history
    logger.debug("Repeated play finished after %d rounds: score=%s", len(history), history.score().values)
    return RepeatedResult(outcome=history.last(), history=history)
