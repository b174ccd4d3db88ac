"""Common strategy constructors.

Randomized strategies draw from their own generator when given one, and
otherwise from the generator of the execution they are playing in, so a
seeded run is reproducible end to end.
"""

from typing import Any, Callable, Iterable, List, Optional, Sequence

import numpy as np

from ..core.errors import NoMoveAvailable
from ..core.types import Move
from ..engine.distribution import Distribution, make_rng
from ..engine.interpreter import DecisionContext
from .base import Strategy, as_strategy

Condition = Callable[[DecisionContext], bool]


def _rng_for(own: Optional[np.random.Generator], context: DecisionContext) -> np.random.Generator:
    if own is not None:
        return own
    if context.rng is not None:
        return context.rng
    return make_rng()


class PureStrategy(Strategy):
    """Always play the same move."""

    def __init__(self, move: Move):
        self.move = move

    def next_move(self, context: DecisionContext) -> Move:
        return self.move

    def __repr__(self) -> str:
        return f"PureStrategy({self.move!r})"


class MixedStrategy(Strategy):
    """Play a move drawn from a fixed distribution."""

    def __init__(self, distribution: Distribution, rng: Optional[np.random.Generator] = None):
        self.distribution = distribution
        self.rng = rng

    def next_move(self, context: DecisionContext) -> Move:
        return self.distribution.sample(_rng_for(self.rng, context))


class RandomStrategy(Strategy):
    """Play uniformly at random among the moves available at each node."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng

    def next_move(self, context: DecisionContext) -> Move:
        if not context.available_moves:
            raise NoMoveAvailable(context.player, "no moves to choose from", context.state)
        return Distribution.flat(context.available_moves).sample(_rng_for(self.rng, context))


class PeriodicStrategy(Strategy):
    """Cycle through a list of strategies, one per decision."""

    def __init__(self, strategies: Sequence[Any]):
        if not strategies:
            raise ValueError("PeriodicStrategy needs at least one strategy")
        self.strategies: List[Strategy] = [as_strategy(s) for s in strategies]
        self._next_index = 0

    def next_move(self, context: DecisionContext) -> Move:
        move = self.strategies[self._next_index].next_move(context)
        self._next_index = (self._next_index + 1) % len(self.strategies)
        return move

    def reset(self) -> None:
        self._next_index = 0
        for strategy in self.strategies:
            strategy.reset()


class ConditionalStrategy(Strategy):
    """Play ``on_true`` when ``condition`` holds for the context, else ``on_false``."""

    def __init__(self, condition: Condition, on_true: Any, on_false: Any):
        self.condition = condition
        self.on_true = as_strategy(on_true)
        self.on_false = as_strategy(on_false)

    def next_move(self, context: DecisionContext) -> Move:
        if self.condition(context):
            return self.on_true.next_move(context)
        return self.on_false.next_move(context)

    def reset(self) -> None:
        self.on_true.reset()
        self.on_false.reset()


class TriggerStrategy(Strategy):
    """Play ``before`` until ``condition`` first holds, then ``after`` forever."""

    def __init__(self, condition: Condition, before: Any, after: Any):
        self.condition = condition
        self.before = as_strategy(before)
        self.after = as_strategy(after)
        self.triggered = False

    def next_move(self, context: DecisionContext) -> Move:
        if not self.triggered:
            self.triggered = bool(self.condition(context))
        if self.triggered:
            return self.after.next_move(context)
        return self.before.next_move(context)

    def reset(self) -> None:
        self.triggered = False
        self.before.reset()
        self.after.reset()


def pure(move: Move) -> Strategy:
    return PureStrategy(move)


def mixed(distribution: Distribution, rng: Optional[np.random.Generator] = None) -> Strategy:
    return MixedStrategy(distribution, rng=rng)


def mixed_flat(moves: Iterable[Move], rng: Optional[np.random.Generator] = None) -> Strategy:
    """Mixed strategy with equal weight on each move."""
    return MixedStrategy(Distribution.flat(moves), rng=rng)


def randomly(rng: Optional[np.random.Generator] = None) -> Strategy:
    return RandomStrategy(rng=rng)


def periodic(strategies: Sequence[Any]) -> Strategy:
    return PeriodicStrategy(strategies)


def periodic_pure(moves: Sequence[Move]) -> Strategy:
    """Play the given moves in order, then start over."""
    return PeriodicStrategy([PureStrategy(move) for move in moves])


def conditional(condition: Condition, on_true: Any, on_false: Any) -> Strategy:
    return ConditionalStrategy(condition, on_true, on_false)


def trigger(condition: Condition, before: Any, after: Any) -> Strategy:
    return TriggerStrategy(condition, before, after)
